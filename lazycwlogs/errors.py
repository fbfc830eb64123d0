"""Exception hierarchy shared by the runtime, the AWS adapters and the CLI.

Remote failures never escape a fetch thread: they are turned into ``Error``
actions. Configuration failures abort startup. Channel failures indicate a
broken runtime invariant and propagate.
"""

from __future__ import annotations


class LazyCwlogsError(Exception):
    """Base class for all errors raised by lazycwlogs."""


class ConfigurationError(LazyCwlogsError):
    """A required local resource (for example the profile list) is unusable."""


class RemoteTransportError(LazyCwlogsError):
    """Network, credential or service failure while calling the listing API."""


class ClientFactoryError(RemoteTransportError):
    """An API client could not be built for a profile."""


class RemoteParseError(LazyCwlogsError):
    """A returned record could not be converted into a domain model."""


class MissingFieldError(RemoteParseError):
    def __init__(self, field_name: str) -> None:
        super().__init__(f"field `{field_name}` is missing")
        self.field_name = field_name


class OutOfRangeError(RemoteParseError):
    def __init__(self, field_name: str, value: object, reason: str = "") -> None:
        message = f"field `{field_name}` is out of range: {value!r}"
        if reason:
            message = f"{message} ({reason})"
        super().__init__(message)
        self.field_name = field_name
        self.value = value


class ChannelSendError(LazyCwlogsError):
    """An internal event could not be enqueued."""


__all__ = [
    "LazyCwlogsError",
    "ConfigurationError",
    "RemoteTransportError",
    "ClientFactoryError",
    "RemoteParseError",
    "MissingFieldError",
    "OutOfRangeError",
    "ChannelSendError",
]
