"""Focus and selection state owned by the main loop.

``ShellState`` has two orthogonal axes: which region is selected and whether
that region holds input focus. Unfocused, navigation keys move between
regions along a fixed cycle. Focused, they move the region's item cursor.
"""

from __future__ import annotations

from collections import deque
from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING

from .runtime.actions import Action, RequestLogGroups

if TYPE_CHECKING:
    from .collection import ResourceRepository
    from .data import AppData
    from .preset import Preset


class AppFocus(Enum):
    SHELL = "shell"
    HEADER = "header"


class ShellSelection(Enum):
    PRESETS = "presets"
    PROFILES = "profiles"
    GROUPS = "groups"


@dataclass(frozen=True)
class RegionOrder:
    prev: ShellSelection
    next: ShellSelection


DEFAULT_REGION_ORDER = RegionOrder(prev=ShellSelection.GROUPS, next=ShellSelection.PRESETS)

SHELL_REGION_ORDER: dict[ShellSelection, RegionOrder] = {
    ShellSelection.PRESETS: RegionOrder(prev=ShellSelection.GROUPS, next=ShellSelection.PROFILES),
    ShellSelection.PROFILES: RegionOrder(prev=ShellSelection.PRESETS, next=ShellSelection.GROUPS),
    ShellSelection.GROUPS: RegionOrder(prev=ShellSelection.PROFILES, next=ShellSelection.PRESETS),
}


def next_index(current: int | None, count: int) -> int | None:
    if count <= 0:
        return None
    if current is None or current >= count:
        return 0
    return (current + 1) % count


def previous_index(current: int | None, count: int) -> int | None:
    if count <= 0:
        return None
    if current is None or current >= count:
        return count - 1
    return (current - 1) % count


@dataclass
class ShellState:
    selection: ShellSelection | None = None
    focus: bool = False
    item_index: dict[ShellSelection, int | None] = field(
        default_factory=lambda: {region: None for region in ShellSelection}
    )

    def has_focus(self) -> bool:
        return self.focus

    def set_focus(self) -> None:
        """Focus the selected region; without a selection this does nothing."""
        if self.selection is not None:
            self.focus = True

    def clear_focus(self) -> None:
        self.focus = False

    def select_next(self, data: AppData) -> None:
        if self.focus:
            self._move_item(data, next_index)
        else:
            self.selection = self._region_order().next

    def select_previous(self, data: AppData) -> None:
        if self.focus:
            self._move_item(data, previous_index)
        else:
            self.selection = self._region_order().prev

    def selected_index(self, region: ShellSelection) -> int | None:
        return self.item_index[region]

    def reset_selection(self, region: ShellSelection, data: AppData) -> None:
        """Point ``region`` at its first item, or at nothing when empty."""
        self.item_index[region] = 0 if len(region_repository(data, region)) > 0 else None

    def clamp_selections(self, data: AppData) -> None:
        """Drop item indexes that no longer address an item."""
        for region in ShellSelection:
            index = self.item_index[region]
            if index is None:
                continue
            count = len(region_repository(data, region))
            if count == 0:
                self.item_index[region] = None
            elif index >= count:
                self.item_index[region] = count - 1

    def selected_profile(self, data: AppData) -> str | None:
        return data.profiles.item_at(self.item_index[ShellSelection.PROFILES])

    def selected_preset(self, data: AppData) -> Preset | None:
        return data.presets.item_at(self.item_index[ShellSelection.PRESETS])

    def execute_item(self, data: AppData) -> Action | None:
        """Return the action for ENTER on the focused region, if any."""
        if self.selection in (ShellSelection.PRESETS, ShellSelection.PROFILES):
            return self._load_log_groups_action(data)
        return None

    def _load_log_groups_action(self, data: AppData) -> Action | None:
        if not self.focus:
            return None
        profile = self.selected_profile(data)
        if profile is None:
            return None
        self.selection = ShellSelection.GROUPS
        return RequestLogGroups(profile=profile, preset=self.selected_preset(data))

    def _region_order(self) -> RegionOrder:
        if self.selection is None:
            return DEFAULT_REGION_ORDER
        return SHELL_REGION_ORDER[self.selection]

    def _move_item(self, data: AppData, step) -> None:
        region = self.selection
        if region is None:
            return
        count = len(region_repository(data, region))
        self.item_index[region] = step(self.item_index[region], count)


def region_repository(data: AppData, region: ShellSelection) -> ResourceRepository:
    if region is ShellSelection.PRESETS:
        return data.presets
    if region is ShellSelection.PROFILES:
        return data.profiles
    return data.groups


def _clamp(value: int, low: int, high: int) -> int:
    return max(low, min(high, value))


@dataclass
class SearchData:
    """Single-line query editor."""

    chars: list[str] = field(default_factory=list)
    input_pos: int = 0

    def append_char(self, char: str) -> None:
        self.chars.insert(self.input_pos, char)
        self.input_pos += 1

    def delete_char(self) -> None:
        if self.chars and self.input_pos >= 1:
            del self.chars[self.input_pos - 1]
            self.input_pos -= 1

    def move_position(self, direction: int) -> None:
        if self.chars:
            self.input_pos = _clamp(self.input_pos + direction, 0, len(self.chars))

    def query(self) -> str:
        return "".join(self.chars)


DEBUG_HISTORY = 50


@dataclass
class DebugData:
    """Recent keys and diagnostic messages shown in the debug panel."""

    keys: deque[str] = field(default_factory=lambda: deque(maxlen=DEBUG_HISTORY))
    logs: deque[str] = field(default_factory=lambda: deque(maxlen=DEBUG_HISTORY))

    def append_key(self, key: str) -> None:
        self.keys.append(key)

    def append_log(self, message: str) -> None:
        self.logs.append(message)
