"""Resource collections and session bookkeeping rendered by the UI."""

from __future__ import annotations

from dataclasses import dataclass, field

from .collection import ResourceRepository
from .cwlogs.group import LogGroup, new_group_repository
from .preset import Preset, new_preset_repository
from .profile import new_profile_repository
from .state import DebugData, SearchData


@dataclass(frozen=True)
class GroupsPage:
    """Where a log-group page came from.

    Enough to refresh the page or continue past it with a fresh cursor.
    """

    profile: str
    preset: Preset | None
    page_token: str | None = None
    next_token: str | None = None
    page_number: int = 1

    @property
    def has_next(self) -> bool:
        return self.next_token is not None


@dataclass
class AppData:
    presets: ResourceRepository[Preset] = field(default_factory=new_preset_repository)
    profiles: ResourceRepository[str] = field(default_factory=new_profile_repository)
    groups: ResourceRepository[LogGroup] = field(default_factory=new_group_repository)
    search: SearchData = field(default_factory=SearchData)
    debug: DebugData | None = None
    status_message: str = ""
    loading: bool = False
    pending_request: GroupsPage | None = None
    groups_page: GroupsPage | None = None

    def debug_key(self, key: str) -> None:
        if self.debug is not None:
            self.debug.append_key(key)

    def debug_log(self, message: str) -> None:
        if self.debug is not None:
            self.debug.append_log(message)
