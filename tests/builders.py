"""Seed-data helpers shared by the database and API tests"""

from datetime import timedelta
from typing import Optional

from database.models import Candidate, Club, Election, Position, Role, User, utcnow
from database.repositories.base import new_id
from userland.auth.passwords import hash_password

# Placeholder for tests that never log in; hashing is deliberately slow
UNUSABLE_HASH = "!unusable"


def make_user(db, username: str, role: Role = Role.STUDENT, password: Optional[str] = None,
              first_name: str = "Test", last_name: Optional[str] = None) -> User:
    user = User(
        id=new_id(),
        username=username,
        email=f"{username}@college.edu",
        password_hash=hash_password(password) if password else UNUSABLE_HASH,
        first_name=first_name,
        last_name=last_name if last_name is not None else username.capitalize(),
        role=role,
    )
    return db.users.create_user(user)


def make_club(db, name: str = "Chess Club") -> Club:
    return db.clubs.create_club(Club(id=new_id(), name=name))


def make_position(db, club: Club, name: str) -> Position:
    return db.clubs.create_position(Position(id=new_id(), club_id=club.id, name=name))


def make_election(db, club: Club, title: str = "Spring Election", is_active: bool = True,
                  ends_in: timedelta = timedelta(days=7)) -> Election:
    now = utcnow()
    election = Election(
        id=new_id(),
        club_id=club.id,
        title=title,
        start_date=min(now, now + ends_in) - timedelta(days=1),
        end_date=now + ends_in,
        is_active=is_active,
    )
    return db.elections.create_election(election)


def make_candidate(db, user: User, election: Election, position: Position,
                   approved: bool = True) -> Candidate:
    candidate = db.candidates.create_candidate(Candidate(
        id=new_id(),
        user_id=user.id,
        election_id=election.id,
        position_id=position.id,
        manifesto=f"{user.username} for {position.name}",
    ))
    if approved:
        candidate = db.candidates.approve_candidate(candidate.id)
    return candidate
