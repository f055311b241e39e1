from __future__ import annotations

import logging
import os
from typing import Any

import bcrypt

logger = logging.getLogger(__name__)

_users: dict[str, dict[str, Any]] = {}


def _hash_password(plain: str) -> str:
    return bcrypt.hashpw(plain.encode(), bcrypt.gensalt()).decode()


def _verify_password(plain: str, hashed: str) -> bool:
    return bcrypt.checkpw(plain.encode(), hashed.encode())


def _normalize(username: str) -> str:
    return username.strip().lower()


def _seed_users() -> None:
    """Pre-seed the demo accounts on import; the admin password can come from the environment."""
    _users["user"] = {"password_hash": _hash_password("user123"), "role": "user"}
    _users["admin"] = {
        "password_hash": _hash_password(os.environ.get("ADMIN_PASSWORD", "admin123")),
        "role": "admin",
    }


def authenticate(username: str, password: str) -> dict[str, Any] | None:
    """Verify credentials. Returns ``{username, role}`` or ``None``."""
    name = _normalize(username)
    record = _users.get(name)
    if record and _verify_password(password, record["password_hash"]):
        return {"username": name, "role": record["role"]}
    return None


def register(username: str, password: str) -> dict[str, Any] | None:
    """Create a regular account. Returns ``{username, role}`` or ``None`` if taken."""
    name = _normalize(username)
    if name in _users:
        return None
    _users[name] = {"password_hash": _hash_password(password), "role": "user"}
    logger.info("Registered user %s", name)
    return {"username": name, "role": "user"}


def is_admin(username: str) -> bool:
    record = _users.get(_normalize(username))
    return bool(record) and record["role"] == "admin"


_seed_users()
