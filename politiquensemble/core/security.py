"""
Password hashing and session helpers.
"""

from typing import Optional

import bcrypt
from starlette.requests import Request

BCRYPT_ROUNDS = 10
SESSION_USER_KEY = "user_id"


def get_password_hash(password: str) -> str:
    """Hash a password with bcrypt."""
    return bcrypt.hashpw(password.encode("utf-8"), bcrypt.gensalt(rounds=BCRYPT_ROUNDS)).decode("utf-8")


def verify_password(plain_password: str, hashed_password: Optional[str]) -> bool:
    """Check a password against its bcrypt hash. Malformed hashes never match."""
    if not hashed_password:
        return False
    try:
        return bcrypt.checkpw(plain_password.encode("utf-8"), hashed_password.encode("utf-8"))
    except ValueError:
        return False


def login_session(request: Request, user_id: int) -> None:
    """Attach the user to the signed session cookie."""
    request.session.clear()
    request.session[SESSION_USER_KEY] = user_id


def logout_session(request: Request) -> None:
    request.session.clear()


def session_user_id(request: Request) -> Optional[int]:
    """Return the id stored in the session, if any."""
    user_id = request.session.get(SESSION_USER_KEY)
    return int(user_id) if user_id is not None else None
