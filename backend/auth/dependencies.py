from __future__ import annotations

from typing import Any

from fastapi import HTTPException, Request

from .users import is_admin

SESSION_USER_KEY = "user"


def session_user(request: Request) -> dict[str, Any] | None:
    return request.session.get(SESSION_USER_KEY)


def require_user(request: Request) -> dict[str, Any]:
    """Raise 401 unless a user is logged in."""
    user = session_user(request)
    if not user:
        raise HTTPException(status_code=401, detail="Not authenticated")
    return user


def require_admin(request: Request) -> dict[str, Any]:
    """
    Raise 401 if not logged in, 403 unless the account holds the admin role.

    The role is looked up in the user store on every call rather than
    trusted from the session cookie.
    """
    user = require_user(request)
    if not is_admin(user.get("username", "")):
        raise HTTPException(status_code=403, detail="Admin access required")
    return user
