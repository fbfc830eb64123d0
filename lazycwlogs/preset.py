"""Named log-group query presets."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field

from .collection import ResourceRepository

PRESETS_LABEL = "Presets"
ANONYMOUS_PRESET_NAME = "anonymous"

DEFAULT_PRESET_NAMES: tuple[str, ...] = (
    "project-prd",
    "project-stg",
    "project-dev",
    "lambda",
    "glue",
)


@dataclass(frozen=True)
class Preset:
    """Identity is the name; the prefix narrows ``describe_log_groups``."""

    name: str
    group_name_prefix: str | None = field(default=None, compare=False)


def default_presets() -> list[Preset]:
    return [Preset(name) for name in DEFAULT_PRESET_NAMES]


def anonymous_preset(prefix: str | None) -> Preset:
    return Preset(ANONYMOUS_PRESET_NAME, prefix)


def new_preset_repository(presets: Iterable[Preset] = ()) -> ResourceRepository[Preset]:
    return ResourceRepository(
        PRESETS_LABEL,
        primary_key=lambda preset: preset.name,
        display_name=lambda preset: preset.name,
        items=presets,
    )
