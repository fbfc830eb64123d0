"""UI theme definitions and selection helpers.

Themes are ANSI palettes for panel borders, titles, list highlights and the
groups table.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class UITheme:
    """Semantic ANSI palette used by renderers."""

    name: str
    reset: str
    normal_border: str
    selecting_border: str
    active_border: str
    title: str
    item_normal: str
    item_highlight: str
    table_header: str
    status: str
    error: str
    debug: str


DEFAULT_THEME = UITheme(
    name="default",
    reset="\033[0m",
    normal_border="\033[2m",
    selecting_border="\033[38;5;229m",
    active_border="\033[1;38;5;81m",
    title="\033[1m",
    item_normal="\033[38;5;252m",
    item_highlight="\033[7m",
    table_header="\033[1;38;5;110m",
    status="\033[2;38;5;250m",
    error="\033[38;5;203m",
    debug="\033[38;5;109m",
)

OCEAN_THEME = UITheme(
    name="ocean",
    reset="\033[0m",
    normal_border="\033[2;38;5;31m",
    selecting_border="\033[38;5;153m",
    active_border="\033[1;38;5;45m",
    title="\033[1;38;5;117m",
    item_normal="\033[38;5;252m",
    item_highlight="\033[30;48;5;45m",
    table_header="\033[1;38;5;45m",
    status="\033[2;38;5;110m",
    error="\033[38;5;209m",
    debug="\033[38;5;73m",
)

PLAIN_THEME = UITheme(
    name="plain",
    reset="",
    normal_border="",
    selecting_border="",
    active_border="",
    title="",
    item_normal="",
    item_highlight="",
    table_header="",
    status="",
    error="",
    debug="",
)

_THEMES: dict[str, UITheme] = {
    DEFAULT_THEME.name: DEFAULT_THEME,
    OCEAN_THEME.name: OCEAN_THEME,
}


def available_theme_names() -> tuple[str, ...]:
    """Return selectable non-plain theme names."""
    return tuple(sorted(_THEMES.keys()))


def normalize_theme_name(name: str | None) -> str:
    """Return a valid theme name, falling back to default."""
    if not name:
        return DEFAULT_THEME.name
    candidate = str(name).strip().lower()
    if candidate in _THEMES:
        return candidate
    return DEFAULT_THEME.name


def resolve_theme(name: str | None, *, no_color: bool = False) -> UITheme:
    """Return concrete theme for requested name and color mode."""
    if no_color:
        return PLAIN_THEME
    return _THEMES[normalize_theme_name(name)]


__all__ = [
    "UITheme",
    "DEFAULT_THEME",
    "OCEAN_THEME",
    "PLAIN_THEME",
    "available_theme_names",
    "normalize_theme_name",
    "resolve_theme",
]
