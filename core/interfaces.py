# core/interfaces.py
from __future__ import annotations
from collections import deque
from dataclasses import dataclass
from enum import Enum
from typing import Tuple, Optional, Protocol, Callable, Any, Deque, List, Union
import numpy as np

Cell = Tuple[int, int]


class Direction(Enum):
    UP = (0, -1)
    DOWN = (0, 1)
    LEFT = (-1, 0)
    RIGHT = (1, 0)

    @property
    def vector(self) -> Cell:
        return self.value

    @property
    def opposite(self) -> "Direction":
        dx, dy = self.value
        return Direction((-dx, -dy))

    @classmethod
    def parse(cls, token: Union[str, "Direction", None]) -> Optional["Direction"]:
        """'up' / 'Down' / Direction.LEFT -> Direction; anything else -> None."""
        if isinstance(token, Direction):
            return token
        if not isinstance(token, str):
            return None
        return cls.__members__.get(token.strip().upper())


class Phase(Enum):
    IDLE = "idle"
    RUNNING = "running"
    PAUSED = "paused"
    ENDED = "ended"


class FoodKind(Enum):
    APPLE = "apple"
    HAMSTER = "hamster"
    RABBIT = "rabbit"
    BIRD = "bird"
    CHICKEN = "chicken"
    DUCK = "duck"


@dataclass
class Food:
    cell: Cell
    kind: FoodKind
    growth: float = 0.0   # spawn-in animation, 0 -> 1


@dataclass(frozen=True)
class Snapshot:
    snake: Tuple[Cell, ...]   # head first
    food: Optional[Food]
    direction: Direction      # applied on the last tick
    pending: Direction
    score: int
    tick_ms: int
    phase: Phase
    grid_w: int
    grid_h: int
    tick_count: int = 0

    @property
    def head(self) -> Cell:
        return self.snake[0]

    def occupancy(self) -> np.ndarray:
        """(grid_h, grid_w) int8 grid: 0 empty, 1 body, 2 head, 3 food."""
        grid = np.zeros((self.grid_h, self.grid_w), dtype=np.int8)
        if self.food is not None:
            fx, fy = self.food.cell
            if 0 <= fx < self.grid_w and 0 <= fy < self.grid_h:
                grid[fy, fx] = 3
        for (x, y) in self.snake[1:]:
            grid[y, x] = 1
        if self.snake:
            hx, hy = self.snake[0]
            grid[hy, hx] = 2
        return grid


# ---- events (engine -> host) ----
@dataclass(frozen=True)
class ScoreChanged:
    score: int

@dataclass(frozen=True)
class GameOver:
    score: int
    surface: Any = None   # the raster the final frame was drawn on, if any

GameEvent = Union[ScoreChanged, GameOver]


class EventSink(Protocol):
    def push(self, event: GameEvent) -> None: ...


class EventQueue(EventSink):
    """Buffers events for a host loop that drains them once per frame."""
    def __init__(self, maxlen: Optional[int] = None):
        self._q: Deque[GameEvent] = deque(maxlen=maxlen)

    def push(self, event: GameEvent) -> None:
        self._q.append(event)

    def drain(self) -> List[GameEvent]:
        out = list(self._q)
        self._q.clear()
        return out

    def __len__(self) -> int:
        return len(self._q)


class CallbackSink(EventSink):
    def __init__(self,
                 on_score_change: Optional[Callable[[int], None]] = None,
                 on_game_over: Optional[Callable[[int, Any], None]] = None):
        self.on_score_change = on_score_change
        self.on_game_over = on_game_over

    def push(self, event: GameEvent) -> None:
        if isinstance(event, ScoreChanged):
            if self.on_score_change is not None:
                self.on_score_change(event.score)
        elif isinstance(event, GameOver):
            if self.on_game_over is not None:
                self.on_game_over(event.score, event.surface)


class Renderer(Protocol):
    """Anything the engine can hand a frame to."""
    surface: Any
    def draw(self, snap: Snapshot) -> None: ...
