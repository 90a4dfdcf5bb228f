"""
Pydantic request models for API validation
"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field, field_validator, model_validator

from config import config
from database.models import ensure_utc


def _require_text(v: str, what: str) -> str:
    v = v.strip()
    if not v:
        raise ValueError(f"{what} cannot be empty")
    return v


class VoteRequest(BaseModel):
    """One ballot. The voter comes from the session, never the body."""
    candidate_id: str
    election_id: str
    position_id: str


class CandidacyRequest(BaseModel):
    position_id: str
    manifesto: Optional[str] = Field(default=None, max_length=5000)


class ClubCreateRequest(BaseModel):
    name: str = Field(max_length=200)
    description: Optional[str] = Field(default=None, max_length=2000)
    icon: Optional[str] = Field(default=None, max_length=100)

    @field_validator("name")
    @classmethod
    def validate_name(cls, v: str) -> str:
        return _require_text(v, "Club name")


class PositionCreateRequest(BaseModel):
    club_id: str
    name: str = Field(max_length=200)
    description: Optional[str] = Field(default=None, max_length=2000)

    @field_validator("name")
    @classmethod
    def validate_name(cls, v: str) -> str:
        return _require_text(v, "Position name")


class ElectionCreateRequest(BaseModel):
    club_id: str
    title: str = Field(max_length=200)
    description: Optional[str] = Field(default=None, max_length=2000)
    start_date: datetime
    end_date: datetime
    is_active: bool = True

    @field_validator("title")
    @classmethod
    def validate_title(cls, v: str) -> str:
        return _require_text(v, "Election title")

    @field_validator("start_date", "end_date")
    @classmethod
    def normalize_timezone(cls, v: datetime) -> datetime:
        return ensure_utc(v)

    @model_validator(mode="after")
    def validate_interval(self):
        if self.start_date >= self.end_date:
            raise ValueError("start_date must be before end_date")
        return self


class ElectionActiveRequest(BaseModel):
    is_active: bool


class ChatRequest(BaseModel):
    message: str

    @field_validator("message")
    @classmethod
    def validate_message(cls, v: str) -> str:
        v = _require_text(v, "Message")
        if len(v) > config.MAX_CHAT_MESSAGE_LENGTH:
            raise ValueError(
                f"Message too long (max {config.MAX_CHAT_MESSAGE_LENGTH} characters)"
            )
        return v
