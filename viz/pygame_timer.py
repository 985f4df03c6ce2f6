# viz/pygame_timer.py
from __future__ import annotations
from typing import Optional
import pygame as pg
from core.timer import Timer, TickCallback

TICK_EVENT = pg.event.custom_type()


class PygameTimer(Timer):
    """
    Repeating timer on top of pygame.time.set_timer. Each (re)start bumps a
    generation number carried on the posted event; dispatch() drops events
    from older generations, so ticks already queued before a cancel or a
    speed change never reach the callback.
    """
    def __init__(self, event_type: int = TICK_EVENT):
        self.event_type = event_type
        self.generation = 0
        self._interval: Optional[int] = None
        self._callback: Optional[TickCallback] = None

    @property
    def active(self) -> bool:
        return self._callback is not None

    @property
    def interval_ms(self) -> Optional[int]:
        return self._interval

    def start(self, interval_ms: int, callback: TickCallback) -> None:
        if interval_ms <= 0:
            raise ValueError(f"interval_ms must be positive, got {interval_ms}")
        self.generation += 1
        self._interval = int(interval_ms)
        self._callback = callback
        pg.time.set_timer(pg.event.Event(self.event_type, gen=self.generation), self._interval)

    def cancel(self) -> None:
        self.generation += 1
        self._interval = None
        self._callback = None
        pg.time.set_timer(self.event_type, 0)

    def dispatch(self, event: pg.event.Event) -> bool:
        """Run the callback for a current-generation tick event. True if it ran."""
        if event.type != self.event_type or self._callback is None:
            return False
        if getattr(event, "gen", None) != self.generation:
            return False
        self._callback()
        return True
