"""Key handling while the shell (the three resource panels) holds focus."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass

from ..data import AppData
from ..runtime.actions import Action
from ..state import ShellState
from .key_registry import KeyComboBinding, KeyComboRegistry


@dataclass(frozen=True)
class ShellKeyContext:
    """State and bound operations required for shell key handling."""

    shell: ShellState
    data: AppData
    quit_key: str
    quit: Callable[[], None]
    dispatch_action: Callable[[Action], None]
    focus_header: Callable[[], None]
    request_next_page: Callable[[], bool]
    refresh_page: Callable[[], bool]
    cycle_group_ordering: Callable[[], bool]


class ShellKeyHandler:
    """Routes one key through the focus state machine.

    Each key produces at most one local mutation or one dispatched action.
    """

    def __init__(self, context: ShellKeyContext) -> None:
        self.context = context
        shell = context.shell
        data = context.data
        self._registry = KeyComboRegistry().register_bindings(
            KeyComboBinding(("k", "UP"), lambda: shell.select_previous(data), "up"),
            KeyComboBinding(("j", "DOWN"), lambda: shell.select_next(data), "down"),
            KeyComboBinding(("ENTER",), self._on_enter, "open"),
            KeyComboBinding(("ESC",), shell.clear_focus, "back"),
            KeyComboBinding(("/",), context.focus_header, "search"),
            KeyComboBinding(("n",), context.request_next_page, "next page"),
            KeyComboBinding(("r",), context.refresh_page, "refresh"),
            KeyComboBinding(("o",), context.cycle_group_ordering, "order"),
            KeyComboBinding((context.quit_key,), context.quit, "quit"),
        )

    def handle(self, key: str) -> bool:
        """Return ``True`` when ``key`` changed something."""
        return bool(self._registry.dispatch(key))

    def hints(self) -> tuple[tuple[str, str], ...]:
        return self._registry.hints()

    def _on_enter(self) -> bool:
        shell = self.context.shell
        if not shell.has_focus():
            shell.set_focus()
            return shell.has_focus()
        action = shell.execute_item(self.context.data)
        if action is None:
            return False
        self.context.dispatch_action(action)
        return True
