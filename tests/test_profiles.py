# tests/test_profiles.py
import json
from datetime import datetime, timedelta, timezone

import pytest

from profiles.store import GUEST, ProfileStore, check_password, hash_password


class StepClock:
    """Deterministic clock: one minute later on every call."""
    def __init__(self):
        self.t = datetime(2024, 1, 1, tzinfo=timezone.utc)

    def __call__(self):
        self.t += timedelta(minutes=1)
        return self.t


@pytest.fixture
def clocked(tmp_path):
    return ProfileStore(str(tmp_path / "profiles.json"), clock=StepClock())


@pytest.mark.parametrize("user,pw,confirm,msg", [
    ("", "abcd", "abcd", "Please enter a username"),
    ("   ", "abcd", "abcd", "Please enter a username"),
    ("ann", "", "", "Please enter a password"),
    ("ann", "abc", "abc", "Password must be at least 4 characters"),
    ("ann", "abcd", "abce", "Passwords do not match"),
    (GUEST, "abcd", "abcd", "That username is reserved"),
])
def test_register_validation(store, user, pw, confirm, msg):
    res = store.register(user, pw, confirm)
    assert not res
    assert res.message == msg


def test_register_then_duplicate(store):
    assert store.register("ann", "abcd", "abcd")
    assert store.user_exists("ann")
    res = store.register("ann", "zzzz", "zzzz")
    assert not res and res.message == "Username already taken"


def test_password_is_not_stored_in_clear(store, tmp_path):
    store.register("ann", "secret1", "secret1")
    raw = (tmp_path / "profiles.json").read_text()
    assert "secret1" not in raw
    stored = json.loads(raw)["users"]["ann"]["password"]
    assert check_password("secret1", stored)
    assert not check_password("secret2", stored)


def test_hash_password_is_salted():
    assert hash_password("pw", "aa") == hash_password("pw", "aa")
    assert hash_password("pw") != hash_password("pw")


def test_login_rules(store):
    assert store.login("", "x").message == "Please enter a username"
    assert store.login("bob", "").message == "Please enter a password"
    assert store.login("bob", "abcd").message == "No such user, please register first"
    store.register("bob", "abcd", "abcd")
    assert store.login("bob", "abce").message == "Wrong password"
    assert store.current_user is None
    assert store.login("bob", "abcd")
    assert store.current_user == "bob" and store.is_logged_in


def test_login_history_newest_first_and_capped(clocked):
    clocked.register("ann", "abcd", "abcd")
    for _ in range(25):
        clocked.login("ann", "abcd")
    logins = clocked.logins("ann")
    assert len(logins) == 20
    assert logins == sorted(logins, reverse=True)


def test_scores_newest_first_and_capped(clocked):
    clocked.register("ann", "abcd", "abcd")
    for s in range(1, 26):
        clocked.add_score("ann", s * 10)
    scores = clocked.scores("ann")
    assert len(scores) == 20
    assert [r["score"] for r in scores[:3]] == [250, 240, 230]
    assert scores[-1]["score"] == 60
    assert clocked.high_score("ann") == 250


def test_high_score_defaults_to_zero(store):
    store.register("ann", "abcd", "abcd")
    assert store.high_score("ann") == 0
    assert store.high_score(None) == 0
    assert store.high_score("nobody") == 0


def test_guest_leaves_no_trace(store):
    store.login_as_guest()
    assert store.is_guest
    assert store.current_user == GUEST
    store.add_score(GUEST, 500)
    assert store.scores(GUEST) == []
    store.logout()
    assert not store.is_guest and store.current_user is None


def test_add_score_for_unknown_user_is_noop(store, tmp_path):
    store.add_score("ghost", 30)
    assert not (tmp_path / "profiles.json").exists()


def test_corrupt_file_reads_as_empty(tmp_path):
    path = tmp_path / "profiles.json"
    path.write_text("{not json")
    s = ProfileStore(str(path))
    assert s.current_user is None
    assert not s.user_exists("ann")
    # first write replaces the broken file
    assert s.register("ann", "abcd", "abcd")
    assert json.loads(path.read_text())["users"]["ann"]["scores"] == []


def test_store_is_shared_through_the_file(tmp_path):
    path = str(tmp_path / "p" / "profiles.json")
    a = ProfileStore(path)
    a.register("ann", "abcd", "abcd")
    a.login("ann", "abcd")
    b = ProfileStore(path)
    b.add_score("ann", 70)
    assert a.current_user == "ann"
    assert a.high_score("ann") == 70
