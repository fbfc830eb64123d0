"""Read-only JSON config helpers.

Stores the UI theme, tick rate, quit key, default region and user presets.
All access is defensive: malformed or missing config falls back safely.
"""

from __future__ import annotations

import json
from dataclasses import dataclass
from pathlib import Path

from platformdirs import user_config_dir, user_log_dir

from .preset import Preset, default_presets

APP_NAME = "lazycwlogs"
CONFIG_FILENAME = "config.json"
LOG_FILENAME = "lazycwlogs.log"
CONFIG_PATH = Path(user_config_dir(APP_NAME, appauthor=False)) / CONFIG_FILENAME

DEFAULT_QUIT_KEY = "q"
DEFAULT_TICK_SECONDS = 0.1
MIN_TICK_SECONDS = 0.01
MAX_TICK_SECONDS = 5.0


@dataclass(frozen=True)
class AppConfig:
    """Settings fixed for the lifetime of one session."""

    quit_key: str = DEFAULT_QUIT_KEY
    tick_rate: float = DEFAULT_TICK_SECONDS
    region: str | None = None


def default_log_path() -> Path:
    return Path(user_log_dir(APP_NAME, appauthor=False)) / LOG_FILENAME


def load_config() -> dict[str, object]:
    """Load the JSON config object.

    Returns an empty dict when the file is missing, unreadable, malformed, or
    does not decode to a top-level JSON object.
    """
    try:
        data = json.loads(CONFIG_PATH.read_text(encoding="utf-8"))
    except (OSError, ValueError):
        return {}
    return data if isinstance(data, dict) else {}


def _load_nonempty_str(key: str) -> str | None:
    value = load_config().get(key)
    if not isinstance(value, str):
        return None
    stripped = value.strip()
    return stripped if stripped else None


def load_theme_name() -> str | None:
    """Load configured UI theme name, returning ``None`` when unset/invalid."""
    return _load_nonempty_str("theme")


def load_region() -> str | None:
    return _load_nonempty_str("region")


def load_quit_key() -> str:
    """Quit key must be exactly one printable character."""
    value = load_config().get("quit_key")
    if isinstance(value, str) and len(value) == 1 and value.isprintable() and value != "/":
        return value
    return DEFAULT_QUIT_KEY


def load_tick_seconds() -> float:
    """Read ``tick_ms`` and clamp it to a sane redraw interval."""
    value = load_config().get("tick_ms")
    if isinstance(value, bool) or not isinstance(value, (int, float)) or value <= 0:
        return DEFAULT_TICK_SECONDS
    return max(MIN_TICK_SECONDS, min(MAX_TICK_SECONDS, value / 1000.0))


def load_presets() -> list[Preset]:
    """Return built-in presets followed by configured ones.

    Config entries look like ``{"name": "api", "prefix": "/aws/lambda/api"}``.
    Entries without a string name are dropped; a configured preset replaces
    a built-in one with the same name.
    """
    presets = default_presets()
    value = load_config().get("presets")
    if not isinstance(value, list):
        return presets

    for raw in value:
        if not isinstance(raw, dict):
            continue
        name = raw.get("name")
        if not isinstance(name, str) or not name.strip():
            continue
        prefix = raw.get("prefix")
        if not isinstance(prefix, str) or not prefix:
            prefix = None
        preset = Preset(name.strip(), prefix)
        presets = [existing for existing in presets if existing.name != preset.name]
        presets.append(preset)
    return presets


def load_app_config(
    *,
    quit_key: str | None = None,
    tick_seconds: float | None = None,
    region: str | None = None,
) -> AppConfig:
    """Merge explicit overrides over config-file values."""
    return AppConfig(
        quit_key=quit_key if quit_key is not None else load_quit_key(),
        tick_rate=tick_seconds if tick_seconds is not None else load_tick_seconds(),
        region=region if region is not None else load_region(),
    )
