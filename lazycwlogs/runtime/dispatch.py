"""Action interpretation: state mutations plus background fetch threads.

Fetch threads own a fresh cursor each, call ``next()`` once and report back
through the action channel with exactly one ``ReceiveLogGroups`` or
``Error``. Paging further is always a new user-triggered request.

Requests are numbered. A result is applied only if it answers the most
recent request, so a slow response can never overwrite newer data.
"""

from __future__ import annotations

import logging
import threading
from collections.abc import Callable
from dataclasses import replace
from typing import Protocol

from ..cwlogs.cursor import LogGroupLister, PaginationCursor, log_group_cursor
from ..cwlogs.group import LogGroup
from ..data import AppData, GroupsPage
from ..errors import ClientFactoryError, RemoteParseError, RemoteTransportError
from ..preset import anonymous_preset
from ..query import query_from
from ..state import ShellSelection, ShellState
from .actions import Action, Error, ReceiveLogGroups, RequestLogGroups, Search
from .bus import Channel

logger = logging.getLogger(__name__)

Spawn = Callable[[Callable[[], object], str], None]


class ListerFactory(Protocol):
    def new_lister(self, profile_name: str) -> LogGroupLister:
        ...


def spawn_daemon(target: Callable[[], object], name: str) -> None:
    threading.Thread(target=target, name=name, daemon=True).start()


def fetch_log_groups(
    cursor: PaginationCursor[LogGroup],
    sender: Channel[Action],
    request_id: int,
) -> Action:
    """Fetch one page and send exactly one terminal action."""
    try:
        groups = cursor.next()
    except (RemoteTransportError, RemoteParseError) as exc:
        action: Action = Error(str(exc), request_id=request_id)
    except Exception as exc:
        logger.exception("request %d: fetch failed unexpectedly", request_id)
        action = Error(f"unexpected error: {exc}", request_id=request_id)
    else:
        action = ReceiveLogGroups(
            groups=tuple(groups),
            request_id=request_id,
            page_token=cursor.page_token,
            next_token=cursor.next_token,
        )
    sender.send(action)
    return action


class ActionDispatcher:
    def __init__(
        self,
        data: AppData,
        shell: ShellState,
        actions: Channel[Action],
        client_factory: ListerFactory,
        spawn: Spawn = spawn_daemon,
    ) -> None:
        self.data = data
        self.shell = shell
        self.actions = actions
        self.client_factory = client_factory
        self._spawn = spawn
        self._request_seq = 0
        self._latest_request_id: int | None = None

    @property
    def latest_request_id(self) -> int | None:
        return self._latest_request_id

    def dispatch(self, action: Action) -> None:
        """Queue ``action`` for the main loop."""
        self.actions.send(action)

    def handle(self, action: Action) -> None:
        if isinstance(action, Search):
            self._on_search(action)
        elif isinstance(action, RequestLogGroups):
            self._on_request_log_groups(action)
        elif isinstance(action, ReceiveLogGroups):
            self._on_receive_log_groups(action)
        elif isinstance(action, Error):
            self._on_error(action)
        else:
            raise TypeError(f"unknown action: {action!r}")

    def _on_search(self, action: Search) -> None:
        query = query_from(action.text)
        selection = self.shell.selection
        if selection is ShellSelection.PRESETS:
            self.data.presets.set_query(query)
            self.shell.clamp_selections(self.data)
        elif selection is ShellSelection.PROFILES:
            self.data.profiles.set_query(query)
            self.shell.clamp_selections(self.data)
        elif selection is ShellSelection.GROUPS:
            profile = self.shell.selected_profile(self.data)
            if profile is None:
                self.data.status_message = "select a profile before searching groups"
                return
            prefix = query.word if query is not None else None
            self.dispatch(RequestLogGroups(profile=profile, preset=anonymous_preset(prefix)))

    def _on_request_log_groups(self, action: RequestLogGroups) -> None:
        self.data.debug_log(
            f"create new cursor with profile:{action.profile}, preset:{action.preset}"
        )
        try:
            lister = self.client_factory.new_lister(action.profile)
        except ClientFactoryError as exc:
            self._report_error(str(exc))
            return

        prefix = action.preset.group_name_prefix if action.preset is not None else None
        cursor = log_group_cursor(lister, prefix, start_token=action.page_token)

        self._request_seq += 1
        request_id = self._request_seq
        self._latest_request_id = request_id
        self.data.pending_request = GroupsPage(
            profile=action.profile,
            preset=action.preset,
            page_token=action.page_token,
            page_number=self._page_number_for(action),
        )
        self.data.loading = True
        self.data.status_message = f"loading log groups for {action.profile}"
        logger.info("request %d: log groups profile=%s prefix=%s", request_id, action.profile, prefix)
        self._spawn(
            lambda: fetch_log_groups(cursor, self.actions, request_id),
            f"lazycwlogs-fetch-{request_id}",
        )

    def _page_number_for(self, action: RequestLogGroups) -> int:
        current = self.data.groups_page
        if action.page_token is None or current is None:
            return 1
        if action.refresh:
            return current.page_number
        return current.page_number + 1

    def _on_receive_log_groups(self, action: ReceiveLogGroups) -> None:
        if action.request_id is not None and action.request_id != self._latest_request_id:
            self.data.debug_log(f"drop stale response for request {action.request_id}")
            logger.info("dropping stale response %s (latest %s)", action.request_id, self._latest_request_id)
            return

        self.data.debug_log(f"receive {len(action.groups)} log groups")
        self.data.groups.clear()
        self.data.groups.extend(action.groups)
        pending = self.data.pending_request
        if pending is not None:
            self.data.groups_page = replace(
                pending,
                page_token=action.page_token,
                next_token=action.next_token,
            )
        self.data.pending_request = None
        self.data.loading = False
        self.data.status_message = f"{len(action.groups)} log groups"
        self.shell.reset_selection(ShellSelection.GROUPS, self.data)

    def _on_error(self, action: Error) -> None:
        if action.request_id is not None:
            if action.request_id != self._latest_request_id:
                self.data.debug_log(f"drop stale error for request {action.request_id}: {action.message}")
                logger.info("dropping stale error %s (latest %s)", action.request_id, self._latest_request_id)
                return
            self.data.pending_request = None
            self.data.loading = False
        self._report_error(action.message)

    def _report_error(self, message: str) -> None:
        logger.warning("%s", message)
        self.data.debug_log(message)
        self.data.status_message = f"error: {message}"
