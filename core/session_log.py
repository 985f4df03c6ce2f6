# core/session_log.py
from __future__ import annotations
import csv, os
from typing import Any, Callable, Dict, Optional, Protocol

from .metrics import ScoreBoard

SESSION_KEYS = [
    "step", "game", "user",
    "score", "length", "ticks", "tick_ms", "reason",
    "score_ema", "score_mean10", "score_best",
]

class Logger(Protocol):
    def log(self, step: int, scalars: Dict[str, Any]) -> None: ...
    def flush(self) -> None: ...
    def close(self) -> None: ...


class CSVLogger:
    """Append-only CSV logger with header auto-discovery or predefined schema."""
    def __init__(self, path: str, fieldnames: list[str] | None = None):
        folder = os.path.dirname(path)
        if folder:
            os.makedirs(folder, exist_ok=True)
        self.path = path
        self._fieldnames = fieldnames
        self._file = open(path, "a", newline="")
        self._writer = None

    def log(self, step: int, scalars: Dict[str, Any]) -> None:
        scalars = {"step": step, **scalars}
        if self._writer is None:
            if self._fieldnames is None:
                self._fieldnames = list(scalars.keys())
            self._writer = csv.DictWriter(
                self._file,
                fieldnames=self._fieldnames,
                extrasaction="ignore",   # rows may carry extra keys
            )
            if self._file.tell() == 0:
                self._writer.writeheader()
        self._writer.writerow(scalars)

    def flush(self) -> None:
        self._file.flush()

    def close(self) -> None:
        if not self._file.closed:
            self._file.close()


def make_game_logger(
    *,
    logger: Logger,
    stats: Callable[[], Dict[str, Any]],
    user_getter: Callable[[], Optional[str]] = lambda: None,
    board: Optional[ScoreBoard] = None,
) -> Callable[[int, Any], None]:
    """
    Returns an on_game_over(score, surface) callback that appends one row per
    finished game. `stats` supplies the board facts the event does not carry
    (length, ticks, tick_ms, reason).
    """
    board = board if board is not None else ScoreBoard(window=10)

    def _on_game_over(score: int, surface: Any = None) -> None:
        summ = board.add(score)
        s = stats()
        scalars = {
            "game": summ["games"],
            "user": user_getter() or "",
            "score": int(score),
            "length": s.get("length"),
            "ticks": s.get("ticks"),
            "tick_ms": s.get("tick_ms"),
            "reason": s.get("reason") or "",
            "score_ema": round(summ["ema"], 3),
            "score_mean10": round(summ["mean"], 3),
            "score_best": summ["best"],
        }
        logger.log(int(summ["games"]), scalars)
        logger.flush()

    return _on_game_over
