"""Values crossing the boundary between fetch threads and the main loop.

Actions are intents interpreted by the dispatcher; events are what the
merged event stream delivers to the main loop. Both are immutable so a
sender never shares mutable state with the receiver.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Union

from ..cwlogs.group import LogGroup
from ..preset import Preset


@dataclass(frozen=True)
class Search:
    text: str


@dataclass(frozen=True)
class RequestLogGroups:
    """List log groups for ``profile``.

    ``page_token`` starts the listing at a later page. ``refresh`` re-fetches
    that page instead of advancing past it.
    """

    profile: str
    preset: Preset | None = None
    page_token: str | None = None
    refresh: bool = False


@dataclass(frozen=True)
class ReceiveLogGroups:
    groups: tuple[LogGroup, ...]
    request_id: int | None = None
    page_token: str | None = None
    next_token: str | None = None


@dataclass(frozen=True)
class Error:
    message: str
    request_id: int | None = field(default=None, compare=False)


Action = Union[Search, RequestLogGroups, ReceiveLogGroups, Error]


@dataclass(frozen=True)
class Tick:
    at: float = 0.0


@dataclass(frozen=True)
class Input:
    key: str


@dataclass(frozen=True)
class ActionEvent:
    action: Action


Event = Union[Tick, Input, ActionEvent]


__all__ = [
    "Search",
    "RequestLogGroups",
    "ReceiveLogGroups",
    "Error",
    "Action",
    "Tick",
    "Input",
    "ActionEvent",
    "Event",
]
