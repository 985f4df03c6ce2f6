# core/timer.py  (repeating tick timers, no pygame)
from __future__ import annotations
from typing import Callable, Optional, Protocol

TickCallback = Callable[[], None]


class Timer(Protocol):
    """A single repeating timer. start() replaces any running schedule."""
    @property
    def active(self) -> bool: ...
    @property
    def interval_ms(self) -> Optional[int]: ...
    def start(self, interval_ms: int, callback: TickCallback) -> None: ...
    def cancel(self) -> None: ...


class ManualTimer(Timer):
    """
    Deterministic fake clock. Time only moves through advance_time(), which
    fires every due tick in order. A callback that cancels or restarts the
    timer takes effect before the next firing is considered.
    """
    def __init__(self):
        self.now_ms = 0
        self.fired = 0
        self._interval: Optional[int] = None
        self._callback: Optional[TickCallback] = None
        self._next_due: Optional[int] = None

    @property
    def active(self) -> bool:
        return self._callback is not None

    @property
    def interval_ms(self) -> Optional[int]:
        return self._interval

    def start(self, interval_ms: int, callback: TickCallback) -> None:
        if interval_ms <= 0:
            raise ValueError(f"interval_ms must be positive, got {interval_ms}")
        self._interval = int(interval_ms)
        self._callback = callback
        self._next_due = self.now_ms + self._interval

    def cancel(self) -> None:
        self._interval = None
        self._callback = None
        self._next_due = None

    def advance_time(self, ms: int) -> int:
        """Move the clock forward by ms; returns how many ticks fired."""
        target = self.now_ms + int(ms)
        fired = 0
        while self._next_due is not None and self._next_due <= target:
            self.now_ms = self._next_due
            cb, due = self._callback, self._next_due
            self._next_due = due + self._interval
            cb()
            fired += 1
        self.now_ms = target
        self.fired += fired
        return fired

    def fire(self) -> bool:
        """Jump straight to the next due tick (if any) and fire it."""
        if self._next_due is None:
            return False
        return self.advance_time(self._next_due - self.now_ms) > 0
