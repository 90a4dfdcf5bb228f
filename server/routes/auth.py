"""
Authentication Endpoints

Username/password accounts with JWT sessions. The session token is returned
in the body and also set as an httpOnly cookie, so browsers and API clients
(Bearer header) share one code path.
"""

from datetime import timedelta

from fastapi import APIRouter, Depends, Response, status

from config import config, get_logger
from database.db import ElectionDatabase
from database.models import Role, User
from database.repositories.base import new_id
from exceptions import NotAuthenticated
from server.dependencies import SESSION_COOKIE, get_current_user, get_db
from server.metrics import metrics
from userland.auth.jwt import generate_access_token
from userland.auth.passwords import hash_password, verify_password
from userland.server.models import (
    ErrorResponse,
    LoginRequest,
    RegisterRequest,
    SessionResponse,
    UserResponse,
)

logger = get_logger(__name__)

router = APIRouter(
    prefix="/api/auth",
    tags=["auth"],
    responses={401: {"model": ErrorResponse}, 409: {"model": ErrorResponse}},
)


def _user_response(user: User) -> UserResponse:
    return UserResponse(**user.to_dict())


def _start_session(response: Response, user: User) -> SessionResponse:
    """Issue a session token and set it as the session cookie"""
    lifetime = timedelta(hours=config.SESSION_HOURS)
    token = generate_access_token(user.id, user.role.value, expires_in=lifetime)

    response.set_cookie(
        key=SESSION_COOKIE,
        value=token,
        path="/",
        httponly=True,
        secure=config.COOKIE_SECURE,
        samesite=config.COOKIE_SAMESITE,
        max_age=int(lifetime.total_seconds()),
    )
    return SessionResponse(access_token=token, user=_user_response(user))


@router.post("/register", response_model=SessionResponse, status_code=status.HTTP_201_CREATED)
def register(
    register_request: RegisterRequest,
    response: Response,
    db: ElectionDatabase = Depends(get_db),
):
    """Create a student account and log it in.

    Raises ConflictError (409) when the username or email is taken.
    """
    user = User(
        id=new_id(),
        username=register_request.username,
        email=register_request.email,
        password_hash=hash_password(register_request.password),
        first_name=register_request.first_name,
        last_name=register_request.last_name,
        role=Role.STUDENT,
    )
    db.users.create_user(user)
    metrics.registrations.inc()

    logger.info("user registered", user_id=user.id, username=user.username)
    return _start_session(response, user)


@router.post("/login", response_model=SessionResponse)
def login(
    login_request: LoginRequest,
    response: Response,
    db: ElectionDatabase = Depends(get_db),
):
    """Verify credentials and start a session. Same error for unknown user and bad password."""
    user = db.users.get_user_by_username(login_request.username.strip())
    if not user or not verify_password(login_request.password, user.password_hash):
        metrics.logins.labels(status="failure").inc()
        logger.info("login failed", username=login_request.username)
        raise NotAuthenticated("Invalid username or password")

    metrics.logins.labels(status="success").inc()
    logger.info("login succeeded", user_id=user.id)
    return _start_session(response, user)


@router.post("/logout")
def logout(response: Response):
    """Clear the session cookie. Tokens are stateless and simply expire."""
    response.delete_cookie(SESSION_COOKIE, path="/")
    return {"success": True, "status": "logged_out"}


@router.get("/me", response_model=UserResponse)
def get_current_user_endpoint(user: User = Depends(get_current_user)):
    """Get current user profile."""
    return _user_response(user)
