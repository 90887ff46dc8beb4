from __future__ import annotations

from typing import Any, Callable, Protocol

TickCallback = Callable[[], None]


class Scheduler(Protocol):
    """Delivers delayed callbacks on the thread that owns the game state."""

    def schedule(self, delay_s: float, callback: TickCallback) -> Any:
        ...

    def cancel(self, handle: Any) -> None:
        ...


class TurnTimer:
    """Repeating tick with at most one pending callback.

    ``restart`` cancels whatever is pending before scheduling, and a tick
    callback that restarts the timer itself is not scheduled twice.
    """

    def __init__(self, scheduler: Scheduler, on_tick: TickCallback, *, interval_s: float = 1.0) -> None:
        self._scheduler = scheduler
        self._on_tick = on_tick
        self._interval_s = max(0.001, float(interval_s))
        self._handle: Any = None
        self._running = False

    @property
    def is_pending(self) -> bool:
        return self._handle is not None

    @property
    def is_running(self) -> bool:
        return self._running

    def restart(self) -> None:
        self.cancel()
        self._running = True
        self._handle = self._scheduler.schedule(self._interval_s, self._fire)

    def cancel(self) -> None:
        self._running = False
        if self._handle is not None:
            self._scheduler.cancel(self._handle)
            self._handle = None

    def _fire(self) -> None:
        self._handle = None
        if not self._running:
            return
        self._on_tick()
        if self._running and self._handle is None:
            self._handle = self._scheduler.schedule(self._interval_s, self._fire)
