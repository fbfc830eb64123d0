"""Log-stream model.

Streams are not browsable yet; selecting a group does not load them. The
model and parser exist so the groups panel has a typed target to grow into.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any

from .mapper import map_string_field, map_unix_epoch_millis


@dataclass(frozen=True)
class LogStream:
    arn: str
    creation_time: datetime = field(compare=False)
    stream_name: str = field(compare=False)
    first_event_time: datetime = field(compare=False)
    last_event_time: datetime = field(compare=False)
    last_ingestion_time: datetime = field(compare=False)


def parse_log_stream(record: Mapping[str, Any]) -> LogStream:
    return LogStream(
        arn=map_string_field(record, "arn"),
        creation_time=map_unix_epoch_millis(record, "creationTime"),
        stream_name=map_string_field(record, "logStreamName"),
        first_event_time=map_unix_epoch_millis(record, "firstEventTimestamp"),
        last_event_time=map_unix_epoch_millis(record, "lastEventTimestamp"),
        last_ingestion_time=map_unix_epoch_millis(record, "lastIngestionTime"),
    )
