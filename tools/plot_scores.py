# tools/plot_scores.py
import csv
import math
from collections import deque
from pathlib import Path
from typing import Iterable, List, Optional, Sequence

# Use a non-interactive backend that writes to files
import matplotlib
matplotlib.use("Agg")
import matplotlib.pyplot as plt  # noqa: E402


def to_float(v):
    try:
        return float(v)
    except (TypeError, ValueError):
        return math.nan

def rolling_mean(xs, window):
    out, q, s = [], deque(), 0.0
    for x in xs:
        x = float(x)
        q.append(x); s += x
        if len(q) > window:
            s -= q.popleft()
        out.append(s / len(q))
    return out

def running_best(xs: Iterable[float]) -> List[float]:
    out, best = [], -math.inf
    for x in xs:
        best = max(best, x)
        out.append(best)
    return out


def load_session_scores(path: Path, user: Optional[str] = None) -> List[float]:
    """Scores from the session CSV in file order, optionally for one user."""
    if not path.exists():
        raise FileNotFoundError(f"Could not find session log at {path}. Play a game first.")
    scores = []
    with path.open(newline="") as f:
        for row in csv.DictReader(f):
            if user is not None and row.get("user") != user:
                continue
            v = to_float(row.get("score"))
            if not math.isnan(v):
                scores.append(v)
    return scores

def profile_scores(records: Sequence[dict]) -> List[float]:
    """Profile history is newest-first; plots want oldest-first."""
    return [float(r["score"]) for r in reversed(records)]


def plot_scores(scores: Sequence[float], out_path: Path, title: str = "Score history", window: int = 5) -> Path:
    if not scores:
        raise RuntimeError("no scores to plot")
    games = list(range(1, len(scores) + 1))
    out_path.parent.mkdir(parents=True, exist_ok=True)

    fig = plt.figure(figsize=(10, 6))
    plt.plot(games, scores, linewidth=1, alpha=0.5, marker="o", label="score")
    plt.plot(games, rolling_mean(scores, window), linewidth=2, label=f"mean@{window}")
    plt.plot(games, running_best(scores), linewidth=2, linestyle="--", label="best so far")
    plt.title(title); plt.xlabel("game"); plt.ylabel("score"); plt.legend()
    fig.savefig(out_path, dpi=150, bbox_inches="tight")
    plt.close(fig)
    print(f"saved: {out_path}")
    return out_path


def main(log_path: str = "runs/sessions.csv", out_dir: str = "runs/plots", user: Optional[str] = None) -> Path:
    scores = load_session_scores(Path(log_path), user=user)
    title = f"Score history ({user})" if user else "Score history"
    return plot_scores(scores, Path(out_dir) / "score_history.png", title=title)


if __name__ == "__main__":
    main()
