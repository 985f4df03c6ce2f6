# core/metrics.py
from __future__ import annotations
from collections import deque
from typing import Deque, Dict, Optional

class EMA:
    """Exponential moving average."""
    def __init__(self, alpha: float):
        self.alpha = alpha
        self.value: Optional[float] = None
    def update(self, x: float) -> float:
        self.value = x if self.value is None else (self.alpha * x + (1 - self.alpha) * self.value)
        return self.value

class ScoreBoard:
    """Running tallies over finished games: count, best, last-N mean, EMA."""
    def __init__(self, window: int = 10, ema_alpha: float = 0.2):
        self.recent: Deque[int] = deque(maxlen=window)
        self.ema = EMA(ema_alpha)
        self.games = 0
        self.best = 0

    def add(self, score: int) -> Dict[str, float]:
        self.games += 1
        self.best = max(self.best, int(score))
        self.recent.append(int(score))
        return self.summary(ema=self.ema.update(float(score)))

    def summary(self, ema: Optional[float] = None) -> Dict[str, float]:
        mean = sum(self.recent) / len(self.recent) if self.recent else 0.0
        return {
            "games": self.games,
            "best": self.best,
            "mean": mean,
            "ema": self.ema.value if ema is None else ema,
        }
