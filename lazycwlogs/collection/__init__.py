"""Generic resource containers used by every browsable panel."""

from .repository import Ordering, ResourceRepository
from .store import OrderedStore

__all__ = ["OrderedStore", "Ordering", "ResourceRepository"]
