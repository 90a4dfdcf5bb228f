"""
Club Repository - Clubs and their positions

Positions are club-scoped and immutable once created, so they live with
the club operations rather than in their own repository.
"""

from typing import List, Optional

from config import get_logger
from database.models import Club, Position, to_db_timestamp
from database.repositories.base import BaseRepository

logger = get_logger(__name__).bind(component="database")


class ClubRepository(BaseRepository):
    """Repository for club and position operations"""

    def create_club(self, club: Club) -> Club:
        self._execute(
            """
            INSERT INTO clubs (id, name, description, icon, created_at)
            VALUES (?, ?, ?, ?, ?)
            """,
            (club.id, club.name, club.description, club.icon, to_db_timestamp(club.created_at)),
        )
        logger.info("created club", club_id=club.id, name=club.name)
        return club

    def get_club(self, club_id: str) -> Optional[Club]:
        row = self._fetch_one("SELECT * FROM clubs WHERE id = ?", (club_id,))
        return Club.from_db_row(row) if row else None

    def get_clubs(self) -> List[Club]:
        """All clubs, alphabetical"""
        rows = self._fetch_all("SELECT * FROM clubs ORDER BY name")
        return [Club.from_db_row(row) for row in rows]

    # ========== Positions ==========

    def create_position(self, position: Position) -> Position:
        self._execute(
            """
            INSERT INTO positions (id, club_id, name, description, created_at)
            VALUES (?, ?, ?, ?, ?)
            """,
            (
                position.id,
                position.club_id,
                position.name,
                position.description,
                to_db_timestamp(position.created_at),
            ),
        )
        logger.info("created position", position_id=position.id, club_id=position.club_id)
        return position

    def get_position(self, position_id: str) -> Optional[Position]:
        row = self._fetch_one("SELECT * FROM positions WHERE id = ?", (position_id,))
        return Position.from_db_row(row) if row else None

    def get_positions_by_club(self, club_id: str) -> List[Position]:
        """Positions of a club in creation order"""
        rows = self._fetch_all(
            "SELECT * FROM positions WHERE club_id = ? ORDER BY created_at, rowid",
            (club_id,),
        )
        return [Position.from_db_row(row) for row in rows]
