"""Input-layer public API for key decoding and focus-specific key handlers.

Only the low-level decoder is imported eagerly; handlers pull in app state
and are imported from their modules directly.
"""

from .reader import ESC_SEQUENCE_TIMEOUT_MS, _PENDING_BYTES, key_label, read_key

__all__ = [
    "read_key",
    "key_label",
    "_PENDING_BYTES",
    "ESC_SEQUENCE_TIMEOUT_MS",
]
