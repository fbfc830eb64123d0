"""AWS profile names read from the shared config file."""

from __future__ import annotations

import os
from collections.abc import Iterable
from pathlib import Path

from .collection import ResourceRepository
from .errors import ConfigurationError

PROFILES_LABEL = "Profiles"
PROFILE_SECTION_PREFIX = "profile "


def default_config_path() -> Path:
    """Return ``$AWS_CONFIG_FILE`` when set, else ``~/.aws/config``."""
    override = os.environ.get("AWS_CONFIG_FILE")
    if override:
        return Path(override).expanduser()
    return Path.home() / ".aws" / "config"


def parse_profile_names(text: str) -> list[str]:
    """Extract profile names from section headers in file order.

    Both ``[name]`` and ``[profile name]`` headers are accepted, with blanks
    tolerated around the brackets and the name.
    """
    names: list[str] = []
    for line in text.splitlines():
        stripped = line.strip()
        if not (stripped.startswith("[") and stripped.endswith("]")):
            continue
        header = stripped[1:-1].strip()
        if header.startswith(PROFILE_SECTION_PREFIX):
            header = header[len(PROFILE_SECTION_PREFIX):]
        name = header.strip()
        if name:
            names.append(name)
    return names


def new_profile_repository(names: Iterable[str] = ()) -> ResourceRepository[str]:
    return ResourceRepository(
        PROFILES_LABEL,
        primary_key=lambda name: name,
        display_name=lambda name: name,
        items=names,
    )


def load_profiles(path: Path | None = None) -> ResourceRepository[str]:
    """Load profile names; an unreadable file raises ``ConfigurationError``."""
    config_path = default_config_path() if path is None else path
    try:
        text = config_path.read_text(encoding="utf-8")
    except OSError as exc:
        raise ConfigurationError(f"could not read AWS config {config_path}: {exc.strerror or exc}") from exc
    return new_profile_repository(parse_profile_names(text))
