"""
API Request and Response Models

Pydantic models for validation and serialization.
"""

import re
from typing import Optional

from pydantic import BaseModel, EmailStr, Field, field_validator


class RegisterRequest(BaseModel):
    """Request to create new student account"""
    username: str = Field(min_length=3, max_length=50)
    email: EmailStr
    password: str = Field(min_length=8, max_length=128)
    first_name: str = Field(min_length=1, max_length=100)
    last_name: str = Field(min_length=1, max_length=100)

    @field_validator("username")
    @classmethod
    def validate_username(cls, v: str) -> str:
        v = v.strip()
        if not re.match(r"^[A-Za-z0-9_.-]+$", v):
            raise ValueError("Username may only contain letters, digits, '.', '_' and '-'")
        return v

    @field_validator("first_name", "last_name")
    @classmethod
    def strip_names(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("Name cannot be blank")
        return v


class LoginRequest(BaseModel):
    """Username and password login"""
    username: str
    password: str


class UserResponse(BaseModel):
    """User profile response"""
    id: str
    username: str
    email: str
    first_name: str
    last_name: str
    role: str
    is_verified: bool
    created_at: str


class SessionResponse(BaseModel):
    """Session token response. The same token is also set as an httpOnly cookie."""
    access_token: str
    user: UserResponse
    token_type: str = "bearer"


class ErrorResponse(BaseModel):
    """Error response"""
    success: bool = False
    error: str
    message: Optional[str] = None
