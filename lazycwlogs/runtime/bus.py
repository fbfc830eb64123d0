"""Merged event stream fed by independent producer threads.

Three producers run side by side: a timer tick source, a keyboard source and
a relay that drains the action channel written by fetch threads. They all
push into one bounded channel that only the main loop reads.

Ordering is FIFO per producer. Nothing orders events across producers; the
main loop handles whatever interleaving arrives.

Shutdown is cooperative. Each producer checks the shared run flag before
every emission and after every poll timeout, so it exits within roughly one
poll interval of the flag turning false. This is a best-effort check, not a
hard cancellation: a producer blocked inside its source returns only when
that source does.
"""

from __future__ import annotations

import logging
import threading
import time
from collections.abc import Callable
from queue import Empty, Full, Queue
from typing import Generic, TypeVar

from ..errors import ChannelSendError
from ..input import read_key
from .actions import Action, ActionEvent, Event, Input, Tick

logger = logging.getLogger(__name__)

T = TypeVar("T")
S = TypeVar("S")

MAX_ACTIONS = 100
MAX_EVENTS = 100
POLL_SECONDS = 0.1
SEND_TIMEOUT_SECONDS = 5.0
KEY_POLL_MS = 100


class SharedRunState:
    """Process-wide ``running`` flag shared by every loop.

    The lock is held only for one read or one write, never across a wait.
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._running = False

    def is_running(self) -> bool:
        """Non-blocking read; a contended lock reads as still running."""
        if not self._lock.acquire(blocking=False):
            return True
        try:
            return self._running
        finally:
            self._lock.release()

    def start_running(self) -> None:
        with self._lock:
            self._running = True

    def stop_running(self) -> None:
        with self._lock:
            self._running = False


class Channel(Generic[T]):
    """Bounded FIFO between threads."""

    def __init__(self, capacity: int, send_timeout: float = SEND_TIMEOUT_SECONDS) -> None:
        self.capacity = capacity
        self._send_timeout = send_timeout
        self._queue: Queue[T] = Queue(maxsize=capacity)

    def send(self, item: T) -> None:
        """Enqueue ``item``; a channel still full after the timeout is an error."""
        try:
            self._queue.put(item, timeout=self._send_timeout)
        except Full as exc:
            raise ChannelSendError(f"channel full ({self.capacity} items); dropped {item!r}") from exc

    def recv(self, timeout: float | None = None) -> T | None:
        """Return the next item, or ``None`` when ``timeout`` elapses first."""
        try:
            return self._queue.get(timeout=timeout)
        except Empty:
            return None

    def drain(self) -> list[T]:
        out: list[T] = []
        while True:
            try:
                out.append(self._queue.get_nowait())
            except Empty:
                break
        return out

    def __len__(self) -> int:
        return self._queue.qsize()


class Ticker:
    """Fixed-rate tick source aligned to its start time."""

    def __init__(
        self,
        interval: float,
        clock: Callable[[], float] = time.monotonic,
        sleep: Callable[[float], None] = time.sleep,
    ) -> None:
        self.interval = interval
        self._clock = clock
        self._sleep = sleep
        self._deadline = clock() + interval

    def __call__(self) -> float | None:
        """Wait for the next deadline, capped at one poll interval.

        Returns the tick time, or ``None`` when the cap was hit first so the
        caller can re-check the run flag.
        """
        now = self._clock()
        remaining = self._deadline - now
        if remaining > 0:
            self._sleep(min(remaining, POLL_SECONDS))
            now = self._clock()
            if now < self._deadline:
                return None
        tick_at = now
        while self._deadline <= now:
            self._deadline += self.interval
        return tick_at


class KeySource:
    """Keyboard source polling ``read_key`` with a short timeout."""

    def __init__(self, stdin_fd: int, timeout_ms: int = KEY_POLL_MS) -> None:
        self.stdin_fd = stdin_fd
        self.timeout_ms = timeout_ms

    def __call__(self) -> str | None:
        try:
            key = read_key(self.stdin_fd, timeout_ms=self.timeout_ms)
        except KeyboardInterrupt:
            return None
        return key or None


class ActionRelaySource:
    """Source draining the action channel written by fetch threads."""

    def __init__(self, actions: Channel[Action], timeout: float = POLL_SECONDS) -> None:
        self._actions = actions
        self._timeout = timeout

    def __call__(self) -> Action | None:
        return self._actions.recv(timeout=self._timeout)


def run_producer(
    source: Callable[[], S | None],
    wrap: Callable[[S], Event],
    sender: Channel[Event],
    run_state: SharedRunState,
) -> int:
    """Pump ``source`` into ``sender`` until the run flag turns false.

    ``source`` returns ``None`` when it has nothing yet. Returns the number
    of events emitted.
    """
    emitted = 0
    while run_state.is_running():
        item = source()
        if item is None:
            continue
        if not run_state.is_running():
            break
        sender.send(wrap(item))
        emitted += 1
    return emitted


class EventBus:
    """Owns the merged event channel and the producer threads feeding it."""

    def __init__(self, run_state: SharedRunState, capacity: int = MAX_EVENTS) -> None:
        self.run_state = run_state
        self.events: Channel[Event] = Channel(capacity)
        self._threads: list[threading.Thread] = []

    def spawn(self, name: str, source: Callable[[], S | None], wrap: Callable[[S], Event]) -> threading.Thread:
        def worker() -> None:
            emitted = run_producer(source, wrap, self.events, self.run_state)
            logger.debug("producer %s stopped after %d events", name, emitted)

        thread = threading.Thread(target=worker, name=f"lazycwlogs-{name}", daemon=True)
        self._threads.append(thread)
        thread.start()
        return thread

    def start(
        self,
        tick_source: Callable[[], float | None],
        key_source: Callable[[], str | None],
        actions: Channel[Action],
    ) -> None:
        self.spawn("tick", tick_source, lambda at: Tick(at))
        self.spawn("keys", key_source, lambda key: Input(key))
        self.spawn("actions", ActionRelaySource(actions), lambda action: ActionEvent(action))

    def recv(self, timeout: float | None = POLL_SECONDS) -> Event | None:
        return self.events.recv(timeout=timeout)

    def join(self, timeout: float = 1.0) -> bool:
        """Wait for producers to exit; ``False`` if any is still blocked."""
        deadline = time.monotonic() + timeout
        for thread in self._threads:
            thread.join(max(0.0, deadline - time.monotonic()))
        return not any(thread.is_alive() for thread in self._threads)
