"""
Database Models for SecureVote

Plain dataclasses for the stored entities and the read-side projections
built from them. Timestamps are timezone-aware UTC.
"""

import sqlite3
from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Optional, List, Dict


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def ensure_utc(value: datetime) -> datetime:
    """Naive datetimes are taken to be UTC already"""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def to_db_timestamp(value: datetime) -> str:
    """Fixed-width ISO-8601 so stored timestamps sort lexically"""
    return ensure_utc(value).isoformat(timespec="microseconds")


def from_db_timestamp(value: str) -> datetime:
    return ensure_utc(datetime.fromisoformat(value))


class Role(str, Enum):
    STUDENT = "student"
    CANDIDATE = "candidate"
    ADMIN = "admin"


class CompletionStatus(str, Enum):
    """Voter progress through one election's positions"""
    NOT_STARTED = "NotStarted"
    PARTIAL = "Partial"
    COMPLETED = "Completed"


@dataclass
class User:
    """Registered account. password_hash never leaves the server."""
    id: str
    username: str
    email: str
    password_hash: str
    first_name: str
    last_name: str
    role: Role = Role.STUDENT
    is_verified: bool = False
    created_at: datetime = field(default_factory=utcnow)

    @classmethod
    def from_db_row(cls, row: sqlite3.Row) -> 'User':
        """Create User from database row"""
        return cls(
            id=row["id"],
            username=row["username"],
            email=row["email"],
            password_hash=row["password_hash"],
            first_name=row["first_name"],
            last_name=row["last_name"],
            role=Role(row["role"]),
            is_verified=bool(row["is_verified"]),
            created_at=from_db_timestamp(row["created_at"]),
        )

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "username": self.username,
            "email": self.email,
            "first_name": self.first_name,
            "last_name": self.last_name,
            "role": self.role.value,
            "is_verified": self.is_verified,
            "created_at": self.created_at.isoformat(),
        }


@dataclass
class Club:
    id: str
    name: str
    description: Optional[str] = None
    icon: str = "fas fa-users"
    created_at: datetime = field(default_factory=utcnow)

    @classmethod
    def from_db_row(cls, row: sqlite3.Row) -> 'Club':
        return cls(
            id=row["id"],
            name=row["name"],
            description=row["description"],
            icon=row["icon"],
            created_at=from_db_timestamp(row["created_at"]),
        )

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "name": self.name,
            "description": self.description,
            "icon": self.icon,
            "created_at": self.created_at.isoformat(),
        }


@dataclass
class Position:
    """Contestable role within a club (e.g. President)"""
    id: str
    club_id: str
    name: str
    description: Optional[str] = None
    created_at: datetime = field(default_factory=utcnow)

    @classmethod
    def from_db_row(cls, row: sqlite3.Row) -> 'Position':
        return cls(
            id=row["id"],
            club_id=row["club_id"],
            name=row["name"],
            description=row["description"],
            created_at=from_db_timestamp(row["created_at"]),
        )

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "club_id": self.club_id,
            "name": self.name,
            "description": self.description,
            "created_at": self.created_at.isoformat(),
        }


@dataclass
class Election:
    """Voting event for one club over [start_date, end_date)"""
    id: str
    club_id: str
    title: str
    start_date: datetime
    end_date: datetime
    description: Optional[str] = None
    is_active: bool = True
    created_at: datetime = field(default_factory=utcnow)

    def is_live(self, now: Optional[datetime] = None) -> bool:
        """Live iff the activity flag is set and the end date has not passed"""
        now = now or utcnow()
        return self.is_active and now < self.end_date

    @classmethod
    def from_db_row(cls, row: sqlite3.Row) -> 'Election':
        return cls(
            id=row["id"],
            club_id=row["club_id"],
            title=row["title"],
            description=row["description"],
            start_date=from_db_timestamp(row["start_date"]),
            end_date=from_db_timestamp(row["end_date"]),
            is_active=bool(row["is_active"]),
            created_at=from_db_timestamp(row["created_at"]),
        )

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "club_id": self.club_id,
            "title": self.title,
            "description": self.description,
            "start_date": self.start_date.isoformat(),
            "end_date": self.end_date.isoformat(),
            "is_active": self.is_active,
            "created_at": self.created_at.isoformat(),
        }


@dataclass
class Candidate:
    """A user standing for one position in one election"""
    id: str
    user_id: str
    election_id: str
    position_id: str
    manifesto: Optional[str] = None
    is_approved: bool = False
    created_at: datetime = field(default_factory=utcnow)

    @classmethod
    def from_db_row(cls, row: sqlite3.Row) -> 'Candidate':
        return cls(
            id=row["id"],
            user_id=row["user_id"],
            election_id=row["election_id"],
            position_id=row["position_id"],
            manifesto=row["manifesto"],
            is_approved=bool(row["is_approved"]),
            created_at=from_db_timestamp(row["created_at"]),
        )

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "user_id": self.user_id,
            "election_id": self.election_id,
            "position_id": self.position_id,
            "manifesto": self.manifesto,
            "is_approved": self.is_approved,
            "created_at": self.created_at.isoformat(),
        }


@dataclass(frozen=True)
class Ballot:
    """Immutable cast-vote record, one per (voter, election, position)"""
    id: str
    voter_id: str
    candidate_id: str
    election_id: str
    position_id: str
    created_at: datetime

    @classmethod
    def from_db_row(cls, row: sqlite3.Row) -> 'Ballot':
        return cls(
            id=row["id"],
            voter_id=row["voter_id"],
            candidate_id=row["candidate_id"],
            election_id=row["election_id"],
            position_id=row["position_id"],
            created_at=from_db_timestamp(row["created_at"]),
        )

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "voter_id": self.voter_id,
            "candidate_id": self.candidate_id,
            "election_id": self.election_id,
            "position_id": self.position_id,
            "created_at": self.created_at.isoformat(),
        }


@dataclass(frozen=True)
class TallyRow:
    """One (position, candidate) line of an election tally"""
    position_id: str
    position_name: str
    candidate_id: str
    candidate_user_id: str
    candidate_name: str
    vote_count: int

    def to_dict(self) -> dict:
        return {
            "position_id": self.position_id,
            "position_name": self.position_name,
            "candidate_id": self.candidate_id,
            "candidate_user_id": self.candidate_user_id,
            "candidate_name": self.candidate_name,
            "vote_count": self.vote_count,
        }


@dataclass
class PositionOutcome:
    """Leader(s) of one position. Several winners means a tie."""
    position_id: str
    position_name: str
    winners: List[TallyRow] = field(default_factory=list)

    @property
    def is_tie(self) -> bool:
        return len(self.winners) > 1

    def to_dict(self) -> dict:
        return {
            "position_id": self.position_id,
            "position_name": self.position_name,
            "winners": [w.to_dict() for w in self.winners],
            "is_tie": self.is_tie,
        }


@dataclass
class ElectionResults:
    election_id: str
    tally: List[TallyRow]
    outcomes: List[PositionOutcome]
    final: bool
    computed_at: datetime = field(default_factory=utcnow)

    def to_dict(self) -> dict:
        return {
            "election_id": self.election_id,
            "tally": [row.to_dict() for row in self.tally],
            "outcomes": [o.to_dict() for o in self.outcomes],
            "final": self.final,
            "computed_at": self.computed_at.isoformat(),
        }


@dataclass
class VoterProgress:
    """Completion status plus the per-position voted map behind it"""
    election_id: str
    voter_id: str
    status: CompletionStatus
    voted: Dict[str, bool] = field(default_factory=dict)

    def to_dict(self) -> dict:
        return {
            "election_id": self.election_id,
            "status": self.status.value,
            "voted": dict(self.voted),
        }
