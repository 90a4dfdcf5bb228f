"""
Election Repository - Election storage and liveness queries

Elections are never edited after creation except for the activity flag.
"""

from datetime import datetime
from typing import List, Optional

from config import get_logger
from database.models import Election, to_db_timestamp, utcnow
from database.repositories.base import BaseRepository

logger = get_logger(__name__).bind(component="database")


class ElectionRepository(BaseRepository):
    """Repository for election operations"""

    def create_election(self, election: Election) -> Election:
        self._execute(
            """
            INSERT INTO elections (id, club_id, title, description, start_date,
                                   end_date, is_active, created_at)
            VALUES (?, ?, ?, ?, ?, ?, ?, ?)
            """,
            (
                election.id,
                election.club_id,
                election.title,
                election.description,
                to_db_timestamp(election.start_date),
                to_db_timestamp(election.end_date),
                election.is_active,
                to_db_timestamp(election.created_at),
            ),
        )
        logger.info(
            "created election",
            election_id=election.id,
            club_id=election.club_id,
            end_date=election.end_date.isoformat(),
        )
        return election

    def get_election(self, election_id: str) -> Optional[Election]:
        row = self._fetch_one("SELECT * FROM elections WHERE id = ?", (election_id,))
        return Election.from_db_row(row) if row else None

    def get_live_elections(self, now: Optional[datetime] = None) -> List[Election]:
        """Active elections whose end date is still ahead, soonest closing first"""
        now = now or utcnow()
        rows = self._fetch_all(
            """
            SELECT * FROM elections
            WHERE is_active = 1 AND end_date > ?
            ORDER BY end_date, rowid
            """,
            (to_db_timestamp(now),),
        )
        return [Election.from_db_row(row) for row in rows]

    def count_live_elections(self, now: Optional[datetime] = None) -> int:
        now = now or utcnow()
        return self._count(
            "SELECT COUNT(*) FROM elections WHERE is_active = 1 AND end_date > ?",
            (to_db_timestamp(now),),
        )

    def set_active(self, election_id: str, active: bool) -> Optional[Election]:
        """Flip the activity flag - the only mutable election field"""
        self._execute(
            "UPDATE elections SET is_active = ? WHERE id = ?",
            (active, election_id),
        )
        election = self.get_election(election_id)
        if election:
            logger.info("election activity changed", election_id=election_id, is_active=active)
        return election
