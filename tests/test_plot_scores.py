# tests/test_plot_scores.py
import pytest

from tools.plot_scores import (
    load_session_scores, main, plot_scores, profile_scores, rolling_mean, running_best, to_float,
)


def _write_log(path, rows):
    lines = ["step,game,user,score"] + [f"{i},{i},{u},{s}" for i, (u, s) in enumerate(rows, 1)]
    path.write_text("\n".join(lines) + "\n")


def test_helpers():
    assert rolling_mean([2, 4, 6, 8], 2) == [2, 3, 5, 7]
    assert running_best([3, 1, 5, 2]) == [3, 3, 5, 5]
    assert to_float("1.5") == 1.5
    assert to_float("") != to_float("")   # nan


def test_profile_scores_are_oldest_first():
    records = [{"score": 30, "date": "c"}, {"score": 20, "date": "b"}, {"score": 10, "date": "a"}]
    assert profile_scores(records) == [10.0, 20.0, 30.0]


def test_load_session_scores_filters_by_user(tmp_path):
    log = tmp_path / "sessions.csv"
    _write_log(log, [("ann", 10), ("bob", 50), ("ann", 30), ("ann", "")])
    assert load_session_scores(log) == [10.0, 50.0, 30.0]
    assert load_session_scores(log, user="ann") == [10.0, 30.0]


def test_missing_log_raises(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_session_scores(tmp_path / "nope.csv")


def test_plot_writes_png(tmp_path, capsys):
    log = tmp_path / "sessions.csv"
    _write_log(log, [("ann", 10), ("ann", 0), ("ann", 40)])
    out = main(str(log), str(tmp_path / "plots"), user="ann")
    assert out.name == "score_history.png"
    assert out.stat().st_size > 0
    assert "saved:" in capsys.readouterr().out


def test_plot_rejects_empty(tmp_path):
    with pytest.raises(RuntimeError):
        plot_scores([], tmp_path / "x.png")
