"""Log-group model, record parser and the derived orderings used by the table."""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from datetime import datetime, timedelta
from typing import Any

from ..collection import Ordering, ResourceRepository
from ..errors import OutOfRangeError
from ..size import Size
from .mapper import duration_days, map_size, map_string_field, map_unix_epoch_millis

GROUPS_LABEL = "Groups"


@dataclass(frozen=True)
class LogGroup:
    """One CloudWatch log group. Identity is the ARN."""

    arn: str
    creation_time: datetime = field(compare=False)
    group_name: str = field(compare=False)
    retention: timedelta | None = field(compare=False)
    stored: Size = field(compare=False)

    def creation_time_local(self) -> datetime:
        return self.creation_time.astimezone()


def parse_log_group(record: Mapping[str, Any]) -> LogGroup:
    """Build a ``LogGroup`` from one ``describe_log_groups`` record.

    ``retentionInDays`` is optional; every other field is required.
    """
    arn = map_string_field(record, "arn")
    creation_time = map_unix_epoch_millis(record, "creationTime")
    group_name = map_string_field(record, "logGroupName")
    retention_days = record.get("retentionInDays")
    retention = None
    if retention_days is not None:
        if isinstance(retention_days, bool) or not isinstance(retention_days, int) or retention_days < 0:
            raise OutOfRangeError("retentionInDays", retention_days)
        retention = duration_days(retention_days)
    stored = map_size(record, "storedBytes")
    return LogGroup(
        arn=arn,
        creation_time=creation_time,
        group_name=group_name,
        retention=retention,
        stored=stored,
    )


BY_NAME = Ordering("name", lambda group: group.group_name)
BY_CREATION_TIME_DESC = Ordering("created ↓", lambda group: group.creation_time, descending=True)
BY_CREATION_TIME = Ordering("created ↑", lambda group: group.creation_time)
BY_SIZE_DESC = Ordering("size ↓", lambda group: group.stored, descending=True)
BY_SIZE = Ordering("size ↑", lambda group: group.stored)

GROUP_ORDERINGS: tuple[Ordering, ...] = (
    BY_NAME,
    BY_CREATION_TIME_DESC,
    BY_CREATION_TIME,
    BY_SIZE_DESC,
    BY_SIZE,
)


def new_group_repository(groups: Iterable[LogGroup] = ()) -> ResourceRepository[LogGroup]:
    return ResourceRepository(
        GROUPS_LABEL,
        primary_key=lambda group: group.arn,
        display_name=lambda group: group.group_name,
        items=groups,
        ordering=BY_NAME,
    )


def next_group_ordering(current: Ordering | None) -> Ordering:
    """Cycle through ``GROUP_ORDERINGS``."""
    if current not in GROUP_ORDERINGS:
        return GROUP_ORDERINGS[0]
    index = GROUP_ORDERINGS.index(current)
    return GROUP_ORDERINGS[(index + 1) % len(GROUP_ORDERINGS)]
