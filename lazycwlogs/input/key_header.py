"""Key handling while the search header holds focus."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass

from ..runtime.actions import Action, Search
from ..state import SearchData
from .key_registry import KeyComboBinding, KeyComboRegistry


@dataclass(frozen=True)
class HeaderKeyContext:
    search: SearchData
    dispatch_action: Callable[[Action], None]
    focus_shell: Callable[[], None]


class HeaderKeyHandler:
    def __init__(self, context: HeaderKeyContext) -> None:
        self.context = context
        search = context.search
        self._registry = KeyComboRegistry().register_bindings(
            KeyComboBinding(("BACKSPACE",), search.delete_char),
            KeyComboBinding(("LEFT",), lambda: search.move_position(-1)),
            KeyComboBinding(("RIGHT",), lambda: search.move_position(1)),
            KeyComboBinding(("ENTER",), self._on_enter, "apply"),
            KeyComboBinding(("ESC",), context.focus_shell, "cancel"),
        )

    def handle(self, key: str) -> bool:
        handled = self._registry.dispatch(key)
        if handled is not None:
            return handled
        if len(key) == 1 and key.isprintable():
            self.context.search.append_char(key)
            return True
        return False

    def hints(self) -> tuple[tuple[str, str], ...]:
        return self._registry.hints()

    def _on_enter(self) -> None:
        self.context.dispatch_action(Search(self.context.search.query()))
        self.context.focus_shell()
