# profiles/store.py
from __future__ import annotations
import hashlib
import json
import logging
import os
import secrets
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, Callable, Dict, List, Optional

logger = logging.getLogger(__name__)

GUEST = "guest"


@dataclass(frozen=True)
class AuthResult:
    success: bool
    message: str

    def __bool__(self) -> bool:
        return self.success


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)

def hash_password(password: str, salt: Optional[str] = None) -> str:
    """'salt$sha256hex'"""
    salt = salt if salt is not None else secrets.token_hex(8)
    digest = hashlib.sha256((salt + password).encode("utf-8")).hexdigest()
    return f"{salt}${digest}"

def check_password(password: str, stored: str) -> bool:
    salt, _, _ = stored.partition("$")
    return secrets.compare_digest(hash_password(password, salt), stored)


class ProfileStore:
    """
    Local user profiles in one JSON file:
        {"users": {name: {password, logins, scores, created_at}}, "current_user": name|None}
    Score and login histories are most-recent-first and capped at `history_cap`.
    """
    def __init__(self, path: str, history_cap: int = 20, min_password_len: int = 4,
                 clock: Callable[[], datetime] = _utcnow):
        self.path = path
        self.history_cap = history_cap
        self.min_password_len = min_password_len
        self._clock = clock
        self.is_guest = False

    # ---- raw file ----
    def _load(self) -> Dict[str, Any]:
        empty = {"users": {}, "current_user": None}
        if not os.path.exists(self.path):
            return empty
        try:
            with open(self.path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            logger.warning("could not read %s: %s", self.path, e)
            return empty
        if not isinstance(data, dict):
            logger.warning("ignoring malformed profile file %s", self.path)
            return empty
        data.setdefault("users", {})
        data.setdefault("current_user", None)
        return data

    def _save(self, data: Dict[str, Any]) -> None:
        folder = os.path.dirname(self.path)
        if folder:
            os.makedirs(folder, exist_ok=True)
        tmp = self.path + ".tmp"
        with open(tmp, "w", encoding="utf-8") as f:
            json.dump(data, f, indent=2, ensure_ascii=False)
        os.replace(tmp, self.path)

    def _now(self) -> str:
        return self._clock().isoformat()

    # ---- users ----
    def user(self, username: str) -> Optional[Dict[str, Any]]:
        return self._load()["users"].get(username)

    def user_exists(self, username: str) -> bool:
        return username in self._load()["users"]

    def register(self, username: str, password: str, confirm: str) -> AuthResult:
        name = (username or "").strip()
        if not name:
            return AuthResult(False, "Please enter a username")
        if not password or not password.strip():
            return AuthResult(False, "Please enter a password")
        if len(password) < self.min_password_len:
            return AuthResult(False, f"Password must be at least {self.min_password_len} characters")
        if password != confirm:
            return AuthResult(False, "Passwords do not match")
        if name == GUEST:
            return AuthResult(False, "That username is reserved")

        data = self._load()
        if name in data["users"]:
            return AuthResult(False, "Username already taken")
        data["users"][name] = {
            "password": hash_password(password),
            "logins": [],
            "scores": [],
            "created_at": self._now(),
        }
        self._save(data)
        logger.info("registered user %r", name)
        return AuthResult(True, "Registered, please log in")

    def login(self, username: str, password: str) -> AuthResult:
        name = (username or "").strip()
        if not name:
            return AuthResult(False, "Please enter a username")
        if not password or not password.strip():
            return AuthResult(False, "Please enter a password")

        data = self._load()
        user = data["users"].get(name)
        if user is None:
            return AuthResult(False, "No such user, please register first")
        if not user.get("password") or not check_password(password, user["password"]):
            return AuthResult(False, "Wrong password")

        self.is_guest = False
        user.setdefault("logins", [])
        user["logins"] = ([self._now()] + user["logins"])[: self.history_cap]
        data["current_user"] = name
        self._save(data)
        logger.info("user %r logged in", name)
        return AuthResult(True, "Logged in")

    def login_as_guest(self) -> None:
        # guests leave no login history
        self.is_guest = True
        data = self._load()
        data["current_user"] = GUEST
        self._save(data)

    def logout(self) -> None:
        self.is_guest = False
        data = self._load()
        data["current_user"] = None
        self._save(data)

    @property
    def current_user(self) -> Optional[str]:
        return self._load()["current_user"]

    @property
    def is_logged_in(self) -> bool:
        return self.current_user is not None

    # ---- history ----
    def add_score(self, username: Optional[str], score: int) -> None:
        if not username or username == GUEST:
            return
        data = self._load()
        user = data["users"].get(username)
        if user is None:
            return
        record = {"score": int(score), "date": self._now()}
        user["scores"] = ([record] + list(user.get("scores", [])))[: self.history_cap]
        self._save(data)

    def scores(self, username: str) -> List[Dict[str, Any]]:
        user = self.user(username)
        return list(user.get("scores", [])) if user else []

    def logins(self, username: str) -> List[str]:
        user = self.user(username)
        return list(user.get("logins", [])) if user else []

    def high_score(self, username: Optional[str]) -> int:
        if not username:
            return 0
        return max((int(r["score"]) for r in self.scores(username)), default=0)
