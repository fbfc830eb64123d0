"""Main event loop consuming the merged event stream.

The loop is the single consumer of the event channel and the only code that
mutates app state. Frames are drawn on ticks.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from .actions import ActionEvent, Input, Tick
from .bus import POLL_SECONDS, EventBus
from .terminal import TerminalController

if TYPE_CHECKING:
    from .app import App

logger = logging.getLogger(__name__)


def draw(app: App, terminal: TerminalController) -> None:
    width, height = terminal.size()
    terminal.draw(app.render(width, height))


def run_main_loop(
    app: App,
    terminal: TerminalController,
    bus: EventBus,
    poll_seconds: float = POLL_SECONDS,
) -> int:
    """Handle events until the run state stops; returns events handled."""
    handled = 0
    with terminal.raw_mode():
        draw(app, terminal)
        while app.run_state.is_running():
            event = bus.recv(timeout=poll_seconds)
            if event is None:
                continue
            handled += 1
            if isinstance(event, Tick):
                draw(app, terminal)
            elif isinstance(event, Input):
                app.handle_key(event.key)
            elif isinstance(event, ActionEvent):
                app.handle_action(event.action)
    if not bus.join():
        logger.warning("event producers still running at shutdown")
    return handled
