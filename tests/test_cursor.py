"""Tests for token-continued pagination.

A failed page request or an unparsable record must leave the cursor exactly
where it was, so the same page can be requested again.
"""

from __future__ import annotations

import unittest

from lazycwlogs.cwlogs.cursor import CursorState, ListingPage, log_group_cursor
from lazycwlogs.errors import MissingFieldError, RemoteTransportError


def group_record(name: str, stored: int = 0) -> dict:
    return {
        "arn": f"arn:aws:logs:eu-west-1:123456789012:log-group:{name}:*",
        "creationTime": 1_700_000_000_000,
        "logGroupName": name,
        "storedBytes": stored,
    }


class FakeLister:
    def __init__(self, pages: dict) -> None:
        self.pages = pages
        self.calls: list[tuple] = []
        self.fail_with: Exception | None = None

    def list_log_groups(self, name_prefix, token):
        self.calls.append((name_prefix, token))
        if self.fail_with is not None:
            raise self.fail_with
        return self.pages[token]


class PaginationCursorTests(unittest.TestCase):
    def test_pages_until_exhausted_then_stops_calling(self) -> None:
        lister = FakeLister(
            {
                None: ListingPage([group_record("/a")], "t1"),
                "t1": ListingPage([group_record("/b")], None),
            }
        )
        cursor = log_group_cursor(lister, "/")

        first = cursor.next()
        self.assertEqual([group.group_name for group in first], ["/a"])
        self.assertEqual(cursor.next_token, "t1")
        self.assertIs(cursor.state, CursorState.READY)

        second = cursor.next()
        self.assertEqual([group.group_name for group in second], ["/b"])
        self.assertTrue(cursor.exhausted)
        self.assertIsNone(cursor.next_token)
        self.assertEqual(cursor.page_token, "t1")

        self.assertEqual(cursor.next(), [])
        self.assertEqual(lister.calls, [("/", None), ("/", "t1")])

    def test_empty_token_counts_as_last_page(self) -> None:
        lister = FakeLister({None: ListingPage([], "")})
        cursor = log_group_cursor(lister)

        self.assertEqual(cursor.next(), [])
        self.assertTrue(cursor.exhausted)

    def test_transport_error_leaves_state_unchanged(self) -> None:
        lister = FakeLister({None: ListingPage([group_record("/a")], "t1")})
        cursor = log_group_cursor(lister)
        cursor.next()

        lister.fail_with = RemoteTransportError("throttled")
        with self.assertRaises(RemoteTransportError):
            cursor.next()

        self.assertEqual(cursor.next_token, "t1")
        self.assertIsNone(cursor.page_token)
        self.assertIs(cursor.state, CursorState.READY)

    def test_parse_error_is_fail_fast_and_does_not_commit(self) -> None:
        broken = group_record("/b")
        del broken["arn"]
        lister = FakeLister({"t1": ListingPage([group_record("/a"), broken], None)})
        cursor = log_group_cursor(lister, start_token="t1")

        with self.assertRaises(MissingFieldError):
            cursor.next()

        self.assertEqual(cursor.next_token, "t1")
        self.assertFalse(cursor.exhausted)

    def test_refresh_reissues_last_page_without_mutation(self) -> None:
        lister = FakeLister(
            {
                None: ListingPage([group_record("/a")], "t1"),
                "t1": ListingPage([group_record("/b"), group_record("/c")], "t2"),
            }
        )
        cursor = log_group_cursor(lister)
        cursor.next()
        cursor.next()

        refreshed = cursor.refresh()

        self.assertEqual([group.group_name for group in refreshed], ["/b", "/c"])
        self.assertEqual(lister.calls[-1], (None, "t1"))
        self.assertEqual(cursor.page_token, "t1")
        self.assertEqual(cursor.next_token, "t2")

    def test_refresh_before_first_page_uses_start_token(self) -> None:
        lister = FakeLister({"t5": ListingPage([group_record("/x")], "t6")})
        cursor = log_group_cursor(lister, start_token="t5")

        self.assertEqual(len(cursor.refresh()), 1)
        self.assertEqual(cursor.next_token, "t5")


if __name__ == "__main__":
    unittest.main()
