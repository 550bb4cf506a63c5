"""Timer-driven scan over output coordinates.

This module owns the "animate scan" state machine. It never touches Tk
directly: the host hands in a scheduler with the same `after(...)` /
`after_cancel(...)` pair a Tk root exposes, and the controller keeps the
returned job id as its cancellation token.

States:
- Idle: no tick pending.
- Scanning: exactly one tick pending; each tick moves the selection one
  cell forward in row-major order and re-arms the timer.
"""

from __future__ import annotations

from typing import Any, Callable, Protocol

from conv_explorer.model.types import ScanState

# Ticks faster than this are indistinguishable on screen and starve Tk.
SCAN_MIN_INTERVAL_MS = 60
SCAN_DEFAULT_INTERVAL_MS = 350


class Scheduler(Protocol):
    """The subset of the Tk timer API the controller relies on."""

    def after(self, delay_ms: int, callback: Callable[[], None]) -> Any: ...

    def after_cancel(self, job: Any) -> None: ...


class ScanController:
    """Keep the selected output cell valid and optionally cycle it over time.

    Design goals:
    - the selection always lies inside the current output grid, or is None
      when there is no output
    - a tick is pending only while scanning with a valid selection
    - stop, auto-stop, and close always cancel the pending tick
    """

    def __init__(
        self,
        scheduler: Scheduler,
        width: int,
        height: int,
        interval_ms: int = SCAN_DEFAULT_INTERVAL_MS,
        on_tick: Callable[[ScanState], None] | None = None,
    ) -> None:
        self._scheduler = scheduler
        self._on_tick = on_tick
        self._width = width
        self._height = height
        self._interval_ms = interval_ms
        self._selected: tuple[int, int] | None = (0, 0) if self._has_output() else None
        self._running = False
        self._job: Any | None = None
        self._closed = False

    # ------------------------------
    # Read-only state
    # ------------------------------
    @property
    def state(self) -> ScanState:
        return ScanState(selected=self._selected, running=self._running, interval_ms=self._interval_ms)

    @property
    def period_ms(self) -> int:
        """Delay actually used between ticks."""
        return max(SCAN_MIN_INTERVAL_MS, int(self._interval_ms))

    def is_running(self) -> bool:
        return self._running

    # ------------------------------
    # Transitions
    # ------------------------------
    def start(self, interval_ms: int | None = None) -> ScanState:
        """Idle -> Scanning, restarting from (0, 0).

        Without a valid output grid the request is ignored and the
        controller stays Idle.
        """
        if interval_ms is not None:
            self._interval_ms = interval_ms
        if self._closed or not self._has_output():
            return self.state

        self._cancel_pending()
        self._selected = (0, 0)
        self._running = True
        self._schedule_next()
        return self.state

    def stop(self) -> ScanState:
        """Scanning -> Idle. Safe to call when already idle."""
        self._cancel_pending()
        self._running = False
        return self.state

    def tick(self) -> ScanState:
        """Advance one cell in row-major order and re-arm the timer.

        Called by the scheduler; tests may call it directly.
        """
        self._job = None
        if self._closed or not self._running or self._selected is None:
            return self.state

        x, y = self._selected
        total = self._width * self._height
        index = (y * self._width + x + 1) % total
        self._selected = (index % self._width, index // self._width)
        self._schedule_next()
        state = self.state
        if self._on_tick is not None:
            self._on_tick(state)
        return state

    def select(self, x: int, y: int) -> ScanState:
        """Point the selection at (x, y), clamped into the output grid.

        A running scan continues from the new cell.
        """
        if not self._has_output():
            return self.state
        self._selected = (
            min(max(0, x), self._width - 1),
            min(max(0, y), self._height - 1),
        )
        return self.state

    def resize(self, width: int, height: int) -> ScanState:
        """React to a geometry change.

        Each axis is clamped on its own, so shrinking only the width keeps
        the row. When the new grid is empty the selection is cleared and
        any scan is stopped; when it becomes non-empty again the selection
        restarts at (0, 0).
        """
        self._width = width
        self._height = height

        if not self._has_output():
            self._selected = None
            return self.stop()

        if self._selected is None:
            # Output came back after being empty; start over at the origin.
            self._selected = (0, 0)
        else:
            x, y = self._selected
            self._selected = (min(x, width - 1), min(y, height - 1))
        return self.state

    def close(self) -> None:
        """Tear down: cancel the pending tick and ignore any late callback."""
        self.stop()
        self._closed = True

    # ------------------------------
    # Internal helpers
    # ------------------------------
    def _has_output(self) -> bool:
        return self._width > 0 and self._height > 0

    def _schedule_next(self) -> None:
        self._job = self._scheduler.after(self.period_ms, self.tick)

    def _cancel_pending(self) -> None:
        if self._job is not None:
            self._scheduler.after_cancel(self._job)
            self._job = None
