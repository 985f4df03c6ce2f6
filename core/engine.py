# core/engine.py  (pure game rules + lifecycle, no pygame)
from __future__ import annotations
import logging
import random
from typing import Dict, Any, Iterable, List, Optional, Union

from config import AppConfig
from .interfaces import (
    Cell, Direction, Phase, Food, FoodKind, Snapshot,
    EventSink, GameEvent, ScoreChanged, GameOver, Renderer,
)
from .timer import Timer, ManualTimer

logger = logging.getLogger(__name__)

FOOD_KINDS = tuple(FoodKind)

# command -> {from_phase: to_phase}; anything missing is a no-op
_TRANSITIONS: Dict[str, Dict[Phase, Phase]] = {
    "start":   {Phase.IDLE: Phase.RUNNING, Phase.ENDED: Phase.RUNNING, Phase.PAUSED: Phase.RUNNING},
    "pause":   {Phase.RUNNING: Phase.PAUSED},
    "resume":  {Phase.PAUSED: Phase.RUNNING},
    "stop":    {Phase.RUNNING: Phase.IDLE, Phase.PAUSED: Phase.IDLE},
    "collide": {Phase.RUNNING: Phase.ENDED},
}


class GameEngine:
    """
    Single-snake tick engine. The host owns the event loop and hands in a
    Timer; every firing calls advance(). Score changes and the game-over
    signal go out to registered EventSinks.
    """
    def __init__(self, cfg: AppConfig, timer: Optional[Timer] = None,
                 renderer: Optional[Renderer] = None, sinks: Iterable[EventSink] = ()):
        if isinstance(cfg, type):
            raise TypeError("Pass an AppConfig instance (use AppConfig()), not the class.")
        if cfg.cell_px <= 0:
            raise ValueError(f"cell_px must be positive, got {cfg.cell_px}")
        if cfg.start_len < 1 or cfg.grid_w // 2 < cfg.start_len - 1 or cfg.grid_h < 1:
            raise ValueError(
                f"grid {cfg.grid_w}x{cfg.grid_h} cannot hold a spawn snake of length {cfg.start_len}")
        self.cfg = cfg
        self.grid_w, self.grid_h = cfg.grid_w, cfg.grid_h
        self.timer: Timer = timer if timer is not None else ManualTimer()
        self.renderer = renderer
        self.rng = random.Random(cfg.seed)
        self._sinks: List[EventSink] = list(sinks)

        self.phase = Phase.IDLE
        self.reason: Optional[str] = None
        self._reset_state()

    # ---- listeners ----
    def add_sink(self, sink: EventSink) -> None:
        if sink not in self._sinks:
            self._sinks.append(sink)

    def remove_sink(self, sink: EventSink) -> None:
        if sink in self._sinks:
            self._sinks.remove(sink)

    def _emit(self, event: GameEvent) -> None:
        for sink in list(self._sinks):
            sink.push(event)

    # ---- commands ----
    def init(self) -> None:
        """Back to spawn defaults, phase IDLE, one frame drawn."""
        self.timer.cancel()
        self._reset_state()
        self.phase = Phase.IDLE
        self._emit(ScoreChanged(self.score))
        self.food = self._place_food()
        self._render()

    def start(self) -> None:
        if self.phase is Phase.PAUSED:
            self.resume()
            return
        if self.phase is Phase.RUNNING:
            return
        self.init()
        if self._transition("start"):
            self._arm()

    def pause(self) -> None:
        if self._transition("pause"):
            self.timer.cancel()

    def resume(self) -> None:
        if self._transition("resume"):
            self._arm()

    def stop(self) -> None:
        self.timer.cancel()
        self._transition("stop")

    def set_direction(self, d: Union[Direction, str, None]) -> None:
        if self.phase is not Phase.RUNNING:
            return
        new_dir = Direction.parse(d)
        if new_dir is None or new_dir is self.direction.opposite:
            return
        self.pending = new_dir

    # ---- tick ----
    def advance(self) -> None:
        if self.phase is not Phase.RUNNING:
            return

        self.direction = self.pending
        hx, hy = self.snake[0]
        dx, dy = self.direction.vector
        new_head = (hx + dx, hy + dy)

        if not (0 <= new_head[0] < self.grid_w and 0 <= new_head[1] < self.grid_h):
            self._end("wall")
            return
        if new_head in self.snake:
            self._end("self")
            return

        self.snake.insert(0, new_head)
        if self.food is not None and new_head == self.food.cell:
            self.score += self.cfg.food_points
            self._emit(ScoreChanged(self.score))
            self.food = self._place_food()
            if self.tick_ms > self.cfg.min_tick_ms:
                self.tick_ms = max(self.cfg.min_tick_ms, self.tick_ms - self.cfg.speedup_ms)
                self._arm()
        else:
            self.snake.pop()

        if self.food is not None and self.food.growth < 1.0:
            self.food.growth = min(1.0, self.food.growth + self.cfg.food_growth_step)

        self.tick_count += 1
        self._render()

    # ---- internals ----
    def _reset_state(self):
        cx, cy = self.grid_w // 2, self.grid_h // 2
        self.snake: List[Cell] = [(cx - i, cy) for i in range(self.cfg.start_len)]
        self.direction = Direction.RIGHT
        self.pending = Direction.RIGHT
        self.food: Optional[Food] = None
        self.score = 0
        self.tick_ms = self.cfg.tick_ms
        self.tick_count = 0
        self.reason = None

    def _transition(self, command: str) -> bool:
        target = _TRANSITIONS[command].get(self.phase)
        if target is None:
            logger.debug("ignored %s in phase %s", command, self.phase.value)
            return False
        logger.debug("%s: %s -> %s", command, self.phase.value, target.value)
        self.phase = target
        return True

    def _arm(self) -> None:
        # start() replaces any live schedule, so a speed change never double-fires
        self.timer.start(self.tick_ms, self.advance)

    def _end(self, reason: str) -> None:
        self.timer.cancel()
        if not self._transition("collide"):
            return
        self.reason = reason
        logger.info("game over (%s) score=%d length=%d ticks=%d",
                    reason, self.score, len(self.snake), self.tick_count)
        surface = getattr(self.renderer, "surface", None)
        self._emit(GameOver(self.score, surface))

    def _place_food(self) -> Food:
        occ = set(self.snake)
        cell, kind = (0, 0), FoodKind.APPLE
        for _ in range(max(1, self.cfg.food_place_attempts)):
            cell = (self.rng.randrange(self.grid_w), self.rng.randrange(self.grid_h))
            kind = self.rng.choice(FOOD_KINDS)
            if cell not in occ:
                return Food(cell=cell, kind=kind)
        # grid (nearly) full: keep the last sample even though it overlaps
        logger.debug("food placement exhausted %d attempts, accepting %s",
                     self.cfg.food_place_attempts, cell)
        return Food(cell=cell, kind=kind)

    def _render(self) -> None:
        if self.renderer is not None:
            self.renderer.draw(self.snapshot())

    def snapshot(self) -> Snapshot:
        food = None
        if self.food is not None:
            food = Food(cell=self.food.cell, kind=self.food.kind, growth=self.food.growth)
        return Snapshot(
            snake=tuple(self.snake),
            food=food,
            direction=self.direction,
            pending=self.pending,
            score=self.score,
            tick_ms=self.tick_ms,
            phase=self.phase,
            grid_w=self.grid_w,
            grid_h=self.grid_h,
            tick_count=self.tick_count,
        )

    def game_stats(self) -> Dict[str, Any]:
        return {
            "length": len(self.snake),
            "ticks": self.tick_count,
            "tick_ms": self.tick_ms,
            "reason": self.reason,
        }

    def get_state(self) -> dict:
        """Pure-Python, JSON-serializable state (plus RNG)."""
        return {
            "snake": list(self.snake),
            "direction": self.direction.name,
            "pending": self.pending.name,
            "food": None if self.food is None else {
                "cell": self.food.cell, "kind": self.food.kind.value, "growth": self.food.growth},
            "score": self.score,
            "tick_ms": self.tick_ms,
            "tick_count": self.tick_count,
            "rng_state": self.rng.getstate(),
        }

    def set_state(self, state: Dict[str, Any]) -> None:
        """Restore board state. The phase and the timer are left as they are."""
        self.snake = list(map(tuple, state["snake"]))
        self.direction = Direction[state["direction"]]
        self.pending = Direction[state.get("pending", state["direction"])]
        food = state.get("food")
        self.food = None if food is None else Food(
            cell=tuple(food["cell"]), kind=FoodKind(food.get("kind", "apple")),
            growth=float(food.get("growth", 0.0)))
        self.score = int(state.get("score", 0))
        self.tick_ms = int(state.get("tick_ms", self.cfg.tick_ms))
        self.tick_count = int(state.get("tick_count", 0))
        if "rng_state" in state:
            st = state["rng_state"]
            self.rng.setstate((st[0], tuple(st[1]), st[2]))
