"""FastAPI Dependencies

Centralized dependency injection for reuse across all route modules.
Provides type-safe, testable access to shared resources.
"""

from typing import Callable, Optional

from fastapi import Depends, Request

from database.db import ElectionDatabase
from database.models import User
from exceptions import NotAuthenticated, NotAuthorized
from userland.auth.capabilities import Capability, can
from userland.auth.jwt import verify_token

SESSION_COOKIE = "session"


def get_db(request: Request) -> ElectionDatabase:
    """Dependency to get shared database instance from app state

    Usage in routes:
        @router.get("/endpoint")
        def endpoint(db: ElectionDatabase = Depends(get_db)):
            return db.clubs.get_clubs()
    """
    return request.app.state.db


def _session_token(request: Request) -> Optional[str]:
    """Bearer header first, then the httpOnly session cookie"""
    auth_header = request.headers.get("authorization")
    if auth_header and auth_header.startswith("Bearer "):
        return auth_header[len("Bearer "):]
    return request.cookies.get(SESSION_COOKIE)


def get_current_user(request: Request) -> User:
    """
    FastAPI dependency to extract and validate current user from the session.

    Accepts either:
    - Session token in Authorization header
    - Session token from httpOnly cookie

    Returns:
        User object

    Raises:
        NotAuthenticated: No token, invalid/expired token, or the account is gone
    """
    token = _session_token(request)
    payload = verify_token(token, expected_type="access") if token else None
    user_id = payload.get("user_id") if payload else None

    if not user_id:
        raise NotAuthenticated("Not authenticated")

    db: ElectionDatabase = request.app.state.db
    user = db.users.get_user(user_id)
    if not user:
        raise NotAuthenticated("Session user no longer exists")

    request.state.user_id = user.id
    return user


def get_optional_user(request: Request) -> Optional[User]:
    """Optional user dependency - returns None if not authenticated."""
    try:
        return get_current_user(request)
    except NotAuthenticated:
        return None


def require_capability(capability: Capability) -> Callable[..., User]:
    """Build a dependency that admits only users whose role grants `capability`

    Usage in routes:
        @router.post("/vote")
        def vote(user: User = Depends(require_capability(Capability.VOTE))):
            ...
    """

    def dependency(user: User = Depends(get_current_user)) -> User:
        if not can(user.role, capability):
            raise NotAuthorized(
                "You do not have permission to perform this action",
                capability=capability.value,
                role=user.role.value,
            )
        return user

    return dependency
