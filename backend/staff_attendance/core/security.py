"""
Password hashing and session cookie helpers.
"""

from typing import Optional

from starlette.requests import Request
from werkzeug.security import check_password_hash, generate_password_hash

SESSION_USER_KEY = "user"


def hash_password(password: str) -> str:
    return generate_password_hash(password)


def verify_password(password: str, password_hash: str) -> bool:
    if not password or not password_hash:
        return False
    return check_password_hash(password_hash, password)


def read_session_user(request: Request) -> Optional[dict]:
    """Return the user dict stored at login, or None for an anonymous session."""
    return request.session.get(SESSION_USER_KEY)


def write_session_user(request: Request, user: dict) -> None:
    request.session.clear()
    request.session[SESSION_USER_KEY] = user


def clear_session(request: Request) -> None:
    request.session.clear()
