"""CloudWatch Logs models, paginated cursors and the boto3 adapter.

``client`` is not re-exported so importing the models does not import boto3.
"""

from .cursor import CursorState, ListingPage, PaginationCursor, log_group_cursor
from .group import LogGroup, new_group_repository, parse_log_group
from .stream import LogStream, parse_log_stream

__all__ = [
    "CursorState",
    "ListingPage",
    "PaginationCursor",
    "log_group_cursor",
    "LogGroup",
    "new_group_repository",
    "parse_log_group",
    "LogStream",
    "parse_log_stream",
]
