"""
Database Repositories

Focused repository classes for clean separation of concerns:
- UserRepository: Account storage and lookup
- ClubRepository: Clubs and their positions
- ElectionRepository: Elections and liveness queries
- CandidateRepository: Candidacies and approval
- BallotRepository: Append-only ballot storage and tally queries
"""

from database.repositories.base import BaseRepository
from database.repositories.users import UserRepository
from database.repositories.clubs import ClubRepository
from database.repositories.elections import ElectionRepository
from database.repositories.candidates import CandidateRepository
from database.repositories.ballots import BallotRepository

__all__ = [
    "BaseRepository",
    "UserRepository",
    "ClubRepository",
    "ElectionRepository",
    "CandidateRepository",
    "BallotRepository",
]
