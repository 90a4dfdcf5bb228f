"""Userland server module - Pydantic models for auth endpoints"""

from userland.server.models import (
    RegisterRequest,
    LoginRequest,
    SessionResponse,
    UserResponse,
    ErrorResponse,
)

__all__ = [
    "RegisterRequest",
    "LoginRequest",
    "SessionResponse",
    "UserResponse",
    "ErrorResponse",
]
