"""Application composition and runtime bootstrap.

``App`` owns all core state and is only ever touched from the main loop
thread. Fetch threads see nothing but a cursor and the action channel.
"""

from __future__ import annotations

import logging
import os
import sys
from dataclasses import dataclass

from ..collection import ResourceRepository
from ..config import AppConfig
from ..cwlogs.client import ClientFactory
from ..cwlogs.group import next_group_ordering
from ..data import AppData
from ..input import key_label
from ..input.key_header import HeaderKeyContext, HeaderKeyHandler
from ..input.key_shell import ShellKeyContext, ShellKeyHandler
from ..preset import Preset, new_preset_repository
from ..render import FrameSnapshot, render_frame
from ..state import AppFocus, DebugData, ShellSelection, ShellState
from ..ui_theme import UITheme, resolve_theme
from .actions import Action, RequestLogGroups
from .bus import MAX_ACTIONS, Channel, EventBus, KeySource, SharedRunState, Ticker
from .dispatch import ActionDispatcher, ListerFactory, Spawn, spawn_daemon
from .terminal import TerminalController

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AppOptions:
    """Startup inputs resolved by the CLI."""

    config: AppConfig
    theme_name: str | None = None
    no_color: bool = False
    debug: bool = False


class App:
    def __init__(
        self,
        options: AppOptions,
        profiles: ResourceRepository[str],
        presets: list[Preset],
        client_factory: ListerFactory,
        run_state: SharedRunState | None = None,
        spawn: Spawn = spawn_daemon,
    ) -> None:
        self.options = options
        self.config = options.config
        self.theme: UITheme = resolve_theme(options.theme_name, no_color=options.no_color)
        self.data = AppData(
            presets=new_preset_repository(presets),
            profiles=profiles,
            debug=DebugData() if options.debug else None,
        )
        self.shell = ShellState()
        self.focus = AppFocus.SHELL
        self.run_state = run_state if run_state is not None else SharedRunState()
        self.actions: Channel[Action] = Channel(MAX_ACTIONS)
        self.dispatcher = ActionDispatcher(
            self.data,
            self.shell,
            self.actions,
            client_factory,
            spawn=spawn,
        )
        self.shell_keys = ShellKeyHandler(
            ShellKeyContext(
                shell=self.shell,
                data=self.data,
                quit_key=self.config.quit_key,
                quit=self.quit,
                dispatch_action=self.dispatcher.dispatch,
                focus_header=self.focus_header,
                request_next_page=self.request_next_page,
                refresh_page=self.refresh_page,
                cycle_group_ordering=self.cycle_group_ordering,
            )
        )
        self.header_keys = HeaderKeyHandler(
            HeaderKeyContext(
                search=self.data.search,
                dispatch_action=self.dispatcher.dispatch,
                focus_shell=self.focus_shell,
            )
        )

    def handle_key(self, key: str) -> bool:
        """Route one key token by focus; returns whether anything changed."""
        self.data.debug_key(key_label(key))
        if self.focus is AppFocus.HEADER:
            return self.header_keys.handle(key)
        return self.shell_keys.handle(key)

    def handle_action(self, action: Action) -> None:
        self.dispatcher.handle(action)

    def quit(self) -> None:
        logger.info("quit requested")
        self.run_state.stop_running()

    def focus_header(self) -> None:
        self.focus = AppFocus.HEADER

    def focus_shell(self) -> None:
        self.focus = AppFocus.SHELL

    def _groups_page_action(self, *, refresh: bool) -> RequestLogGroups | None:
        if self.shell.selection is not ShellSelection.GROUPS:
            return None
        page = self.data.groups_page
        if page is None or self.data.loading:
            return None
        if refresh:
            token = page.page_token
        else:
            if not page.has_next:
                self.data.status_message = "no more log groups"
                return None
            token = page.next_token
        return RequestLogGroups(
            profile=page.profile,
            preset=page.preset,
            page_token=token,
            refresh=refresh,
        )

    def request_next_page(self) -> bool:
        action = self._groups_page_action(refresh=False)
        if action is None:
            return False
        self.dispatcher.dispatch(action)
        return True

    def refresh_page(self) -> bool:
        action = self._groups_page_action(refresh=True)
        if action is None:
            return False
        self.dispatcher.dispatch(action)
        return True

    def cycle_group_ordering(self) -> bool:
        if self.shell.selection is not ShellSelection.GROUPS:
            return False
        groups = self.data.groups
        ordering = next_group_ordering(groups.ordering)
        groups.set_ordering(ordering)
        self.shell.reset_selection(ShellSelection.GROUPS, self.data)
        self.data.status_message = f"groups ordered by {ordering.name}"
        return True

    def groups_label(self) -> str:
        groups = self.data.groups
        parts = [groups.label]
        if groups.ordering is not None:
            parts.append(f"[{groups.ordering.name}]")
        page = self.data.groups_page
        if page is not None:
            suffix = "+" if page.has_next else ""
            parts.append(f"page {page.page_number}{suffix}")
        return " ".join(parts)

    def snapshot(self) -> FrameSnapshot:
        data = self.data
        shell = self.shell
        debug = data.debug
        return FrameSnapshot(
            focus=self.focus,
            selection=shell.selection,
            shell_focused=shell.has_focus(),
            query=data.search.query(),
            cursor_pos=data.search.input_pos,
            presets_label=data.presets.label,
            presets=tuple(data.presets.display_name(preset) for preset in data.presets),
            presets_selected=shell.selected_index(ShellSelection.PRESETS),
            profiles_label=data.profiles.label,
            profiles=tuple(data.profiles),
            profiles_selected=shell.selected_index(ShellSelection.PROFILES),
            groups_label=self.groups_label(),
            groups=tuple(
                (
                    group.group_name,
                    group.creation_time_local().strftime("%Y-%m-%d %H:%M:%S"),
                    group.stored.human_readable(),
                )
                for group in data.groups
            ),
            groups_selected=shell.selected_index(ShellSelection.GROUPS),
            status=data.status_message,
            loading=data.loading,
            debug_keys=tuple(debug.keys) if debug is not None else None,
            debug_logs=tuple(debug.logs) if debug is not None else (),
            hints=self.header_keys.hints() if self.focus is AppFocus.HEADER else self.shell_keys.hints(),
        )

    def render(self, width: int, height: int) -> list[str]:
        return render_frame(self.snapshot(), width, height, self.theme)


def run_app(
    options: AppOptions,
    profiles: ResourceRepository[str],
    presets: list[Preset],
) -> None:
    """Wire the runtime and block in the main loop until quit."""
    from .loop import run_main_loop

    if not os.isatty(sys.stdin.fileno()):
        raise SystemExit("lazycwlogs needs an interactive terminal")

    stdin_fd = sys.stdin.fileno()
    stdout_fd = sys.stdout.fileno()
    client_factory = ClientFactory(region=options.config.region)
    app = App(options, profiles, presets, client_factory)
    bus = EventBus(app.run_state)
    terminal = TerminalController(stdin_fd, stdout_fd)

    app.run_state.start_running()
    bus.start(Ticker(options.config.tick_rate), KeySource(stdin_fd), app.actions)
    logger.info("started with %d profiles, %d presets", app.data.profiles.total_count(), len(presets))
    run_main_loop(app, terminal, bus)
