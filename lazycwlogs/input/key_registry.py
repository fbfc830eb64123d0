"""Key binding tables shared by the focus-specific handlers."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass

from .reader import key_label


@dataclass(frozen=True)
class KeyComboBinding:
    """One or more key tokens bound to a callback.

    ``hint`` is the short description shown in the status bar; bindings
    without one stay out of the hint line.
    """

    combos: tuple[str, ...]
    handler: Callable[[], bool | None]
    hint: str = ""


class KeyComboRegistry:
    """Exact-match key dispatch table that remembers binding order."""

    def __init__(self) -> None:
        self._handlers: dict[str, Callable[[], bool | None]] = {}
        self._bindings: list[KeyComboBinding] = []

    def register_binding(self, binding: KeyComboBinding) -> KeyComboRegistry:
        """Register one binding; a later binding takes over shared combos."""
        for combo in binding.combos:
            self._handlers[combo] = binding.handler
        self._bindings.append(binding)
        return self

    def register_bindings(self, *bindings: KeyComboBinding) -> KeyComboRegistry:
        for binding in bindings:
            self.register_binding(binding)
        return self

    def bound(self, key: str) -> bool:
        return key in self._handlers

    def dispatch(self, key: str) -> bool | None:
        """Run the handler bound to ``key``.

        Returns ``None`` when nothing is bound. A handler that returns
        ``None`` counts as having handled the key.
        """
        handler = self._handlers.get(key)
        if handler is None:
            return None
        result = handler()
        return True if result is None else result

    def hints(self) -> tuple[tuple[str, str], ...]:
        """``(key, description)`` pairs for the status bar, in binding order."""
        return tuple(
            (key_label(binding.combos[0]), binding.hint)
            for binding in self._bindings
            if binding.hint
        )
