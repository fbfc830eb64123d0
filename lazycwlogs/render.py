"""Frame rendering from a read-only snapshot.

Each widget kind has one renderer with the same signature
``(area, buffer, snapshot, theme)``; ``render_widget`` picks it from a fixed
table. Renderers only read the snapshot and write cells into the buffer.
"""

from __future__ import annotations

import unicodedata
from dataclasses import dataclass
from enum import Enum

from .state import AppFocus, ShellSelection
from .ui_theme import UITheme

HEADER_HEIGHT = 3
DEBUG_HEIGHT = 10
STATUS_HEIGHT = 1
CREATED_COLUMN_WIDTH = 20
SIZE_COLUMN_WIDTH = 11
MIN_LEFT_WIDTH = 20


@dataclass(frozen=True)
class FrameSnapshot:
    """Everything a frame shows, copied out of core state."""

    focus: AppFocus
    selection: ShellSelection | None
    shell_focused: bool
    query: str
    cursor_pos: int
    presets_label: str
    presets: tuple[str, ...]
    presets_selected: int | None
    profiles_label: str
    profiles: tuple[str, ...]
    profiles_selected: int | None
    groups_label: str
    groups: tuple[tuple[str, str, str], ...]
    groups_selected: int | None
    status: str = ""
    loading: bool = False
    debug_keys: tuple[str, ...] | None = None
    debug_logs: tuple[str, ...] = ()
    hints: tuple[tuple[str, str], ...] = ()


@dataclass(frozen=True)
class Rect:
    x: int
    y: int
    width: int
    height: int

    def inner(self) -> Rect:
        return Rect(self.x + 1, self.y + 1, max(0, self.width - 2), max(0, self.height - 2))


def char_width(ch: str) -> int:
    if unicodedata.combining(ch):
        return 0
    if unicodedata.east_asian_width(ch) in {"W", "F"}:
        return 2
    return 1


class ScreenBuffer:
    """Grid of ``(char, style)`` cells."""

    def __init__(self, width: int, height: int) -> None:
        self.width = max(0, width)
        self.height = max(0, height)
        self.cells: list[list[tuple[str, str]]] = [
            [(" ", "")] * self.width for _ in range(self.height)
        ]

    def put(self, x: int, y: int, text: str, style: str = "", max_width: int | None = None) -> int:
        """Write ``text`` starting at ``(x, y)``; returns the columns used."""
        if not (0 <= y < self.height):
            return 0
        limit = self.width - x if max_width is None else min(max_width, self.width - x)
        used = 0
        row = self.cells[y]
        for ch in text:
            width = char_width(ch)
            if width == 0:
                continue
            if used + width > limit:
                break
            row[x + used] = (ch, style)
            if width == 2:
                row[x + used + 1] = ("", style)
            used += width
        return used

    def lines(self, reset: str) -> list[str]:
        out: list[str] = []
        for row in self.cells:
            parts: list[str] = []
            current = ""
            for ch, style in row:
                if style != current:
                    parts.append(reset)
                    parts.append(style)
                    current = style
                parts.append(ch)
            if current:
                parts.append(reset)
            out.append("".join(parts))
        return out


class WidgetKind(Enum):
    SEARCH = "search"
    PRESETS = "presets"
    PROFILES = "profiles"
    GROUPS = "groups"
    DEBUG = "debug"
    STATUS = "status"


def _draw_block(area: Rect, buffer: ScreenBuffer, title: str, border_style: str, theme: UITheme) -> None:
    if area.width < 2 or area.height < 2:
        return
    horizontal = "─" * (area.width - 2)
    buffer.put(area.x, area.y, f"┌{horizontal}┐", border_style)
    for y in range(area.y + 1, area.y + area.height - 1):
        buffer.put(area.x, y, "│", border_style)
        buffer.put(area.x + area.width - 1, y, "│", border_style)
    buffer.put(area.x, area.y + area.height - 1, f"└{horizontal}┘", border_style)
    if title and area.width > 4:
        buffer.put(area.x + 1, area.y, f" {title} ", border_style + theme.title, max_width=area.width - 2)


def _region_border(snapshot: FrameSnapshot, region: ShellSelection, theme: UITheme) -> str:
    if snapshot.focus is not AppFocus.SHELL or snapshot.selection is not region:
        return theme.normal_border
    return theme.active_border if snapshot.shell_focused else theme.selecting_border


def _visible_window(selected: int | None, count: int, rows: int) -> int:
    """First row index to show so ``selected`` stays visible."""
    if selected is None or rows <= 0 or count <= rows:
        return 0
    return max(0, min(selected - rows + 1, count - rows)) if selected >= rows else 0


def _render_list(
    area: Rect,
    buffer: ScreenBuffer,
    title: str,
    items: tuple[str, ...],
    selected: int | None,
    border_style: str,
    theme: UITheme,
) -> None:
    _draw_block(area, buffer, title, border_style, theme)
    inner = area.inner()
    start = _visible_window(selected, len(items), inner.height)
    for row, index in enumerate(range(start, min(len(items), start + inner.height))):
        style = theme.item_highlight if index == selected else theme.item_normal
        label = items[index]
        if index == selected:
            label = label.ljust(inner.width)
        buffer.put(inner.x, inner.y + row, label, style, max_width=inner.width)


def render_search(area: Rect, buffer: ScreenBuffer, snapshot: FrameSnapshot, theme: UITheme) -> None:
    editing = snapshot.focus is AppFocus.HEADER
    border = theme.active_border if editing else theme.normal_border
    _draw_block(area, buffer, "Search", border, theme)
    inner = area.inner()
    if inner.height <= 0:
        return
    buffer.put(inner.x, inner.y, snapshot.query, theme.item_normal, max_width=inner.width)
    if editing and snapshot.cursor_pos < inner.width:
        cursor_char = snapshot.query[snapshot.cursor_pos] if snapshot.cursor_pos < len(snapshot.query) else " "
        buffer.put(inner.x + snapshot.cursor_pos, inner.y, cursor_char, theme.item_highlight, max_width=1)


def render_presets(area: Rect, buffer: ScreenBuffer, snapshot: FrameSnapshot, theme: UITheme) -> None:
    _render_list(
        area,
        buffer,
        snapshot.presets_label,
        snapshot.presets,
        snapshot.presets_selected,
        _region_border(snapshot, ShellSelection.PRESETS, theme),
        theme,
    )


def render_profiles(area: Rect, buffer: ScreenBuffer, snapshot: FrameSnapshot, theme: UITheme) -> None:
    _render_list(
        area,
        buffer,
        snapshot.profiles_label,
        snapshot.profiles,
        snapshot.profiles_selected,
        _region_border(snapshot, ShellSelection.PROFILES, theme),
        theme,
    )


def _table_columns(width: int) -> tuple[int, int, int]:
    name_width = max(8, width - CREATED_COLUMN_WIDTH - SIZE_COLUMN_WIDTH - 2)
    return name_width, CREATED_COLUMN_WIDTH, SIZE_COLUMN_WIDTH


def format_table_row(cells: tuple[str, str, str], width: int) -> str:
    name_width, created_width, size_width = _table_columns(width)
    name, created, size = cells
    if len(name) > name_width:
        name = name[: max(0, name_width - 1)] + "…"
    return f"{name:<{name_width}} {created:<{created_width}} {size:>{size_width}}"


def render_groups(area: Rect, buffer: ScreenBuffer, snapshot: FrameSnapshot, theme: UITheme) -> None:
    title = snapshot.groups_label + (" …" if snapshot.loading else "")
    _draw_block(area, buffer, title, _region_border(snapshot, ShellSelection.GROUPS, theme), theme)
    inner = area.inner()
    if inner.height <= 0:
        return
    header = format_table_row(("Name", "Created at (Local)", "Stored Size"), inner.width)
    buffer.put(inner.x, inner.y, header, theme.table_header, max_width=inner.width)
    body = Rect(inner.x, inner.y + 1, inner.width, inner.height - 1)
    rows = [format_table_row(cells, inner.width) for cells in snapshot.groups]
    start = _visible_window(snapshot.groups_selected, len(rows), body.height)
    for row, index in enumerate(range(start, min(len(rows), start + body.height))):
        selected = index == snapshot.groups_selected
        style = theme.item_highlight if selected else theme.item_normal
        text = rows[index].ljust(body.width) if selected else rows[index]
        buffer.put(body.x, body.y + row, text, style, max_width=body.width)


def render_debug(area: Rect, buffer: ScreenBuffer, snapshot: FrameSnapshot, theme: UITheme) -> None:
    _draw_block(area, buffer, "Debug", theme.normal_border, theme)
    inner = area.inner()
    if inner.height <= 0:
        return
    keys = " ".join((snapshot.debug_keys or ())[-20:])
    buffer.put(inner.x, inner.y, f"keys: {keys}", theme.debug, max_width=inner.width)
    log_rows = max(0, inner.height - 1)
    logs = snapshot.debug_logs[-log_rows:] if log_rows else ()
    for row, message in enumerate(logs):
        buffer.put(inner.x, inner.y + 1 + row, message, theme.debug, max_width=inner.width)


def format_hints(hints: tuple[tuple[str, str], ...]) -> str:
    return "  ".join(f"{key} {description}" for key, description in hints)


def render_status(area: Rect, buffer: ScreenBuffer, snapshot: FrameSnapshot, theme: UITheme) -> None:
    message = snapshot.status
    style = theme.error if message.startswith("error:") else theme.status
    used = buffer.put(area.x, area.y, message, style, max_width=area.width)
    hint = format_hints(snapshot.hints)
    hint_x = max(area.x + used + 2, area.x + area.width - len(hint))
    if hint and hint_x < area.x + area.width:
        buffer.put(hint_x, area.y, hint, theme.status, max_width=area.x + area.width - hint_x)


_RENDERERS = {
    WidgetKind.SEARCH: render_search,
    WidgetKind.PRESETS: render_presets,
    WidgetKind.PROFILES: render_profiles,
    WidgetKind.GROUPS: render_groups,
    WidgetKind.DEBUG: render_debug,
    WidgetKind.STATUS: render_status,
}


def render_widget(
    kind: WidgetKind,
    area: Rect,
    buffer: ScreenBuffer,
    snapshot: FrameSnapshot,
    theme: UITheme,
) -> None:
    if area.width <= 0 or area.height <= 0:
        return
    _RENDERERS[kind](area, buffer, snapshot, theme)


def layout_frame(width: int, height: int, debug: bool) -> dict[WidgetKind, Rect]:
    """Split the screen: search header, shell panels, optional debug, status row."""
    debug_height = DEBUG_HEIGHT if debug and height >= HEADER_HEIGHT + DEBUG_HEIGHT + 6 else 0
    shell_height = max(0, height - HEADER_HEIGHT - debug_height - STATUS_HEIGHT)
    shell_y = HEADER_HEIGHT
    left_width = min(width, max(MIN_LEFT_WIDTH, width // 4))
    presets_height = shell_height // 2
    areas = {
        WidgetKind.SEARCH: Rect(0, 0, width, min(HEADER_HEIGHT, height)),
        WidgetKind.PRESETS: Rect(0, shell_y, left_width, presets_height),
        WidgetKind.PROFILES: Rect(0, shell_y + presets_height, left_width, shell_height - presets_height),
        WidgetKind.GROUPS: Rect(left_width, shell_y, max(0, width - left_width), shell_height),
        WidgetKind.STATUS: Rect(0, max(0, height - STATUS_HEIGHT), width, STATUS_HEIGHT),
    }
    if debug_height:
        areas[WidgetKind.DEBUG] = Rect(0, shell_y + shell_height, width, debug_height)
    return areas


def render_frame(snapshot: FrameSnapshot, width: int, height: int, theme: UITheme) -> list[str]:
    buffer = ScreenBuffer(width, height)
    areas = layout_frame(width, height, debug=snapshot.debug_keys is not None)
    for kind, area in areas.items():
        render_widget(kind, area, buffer, snapshot, theme)
    return buffer.lines(theme.reset)
