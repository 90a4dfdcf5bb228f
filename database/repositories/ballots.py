"""
Ballot Repository - Append-only ballot storage

Ballots are inserted once and never updated or deleted. The
UNIQUE(voter_id, election_id, position_id) constraint in the schema is the
storage-level guarantee behind one-ballot-per-position.
"""

from typing import List, Optional, Set

from database.models import Ballot, to_db_timestamp
from database.repositories.base import BaseRepository


class BallotRepository(BaseRepository):
    """Repository for ballot operations"""

    def has_voted(self, voter_id: str, election_id: str, position_id: str) -> bool:
        """True iff a ballot exists for the exact (voter, election, position) triple"""
        row = self._fetch_one(
            """
            SELECT 1 FROM ballots
            WHERE voter_id = ? AND election_id = ? AND position_id = ?
            LIMIT 1
            """,
            (voter_id, election_id, position_id),
        )
        return row is not None

    def insert_ballot(self, ballot: Ballot) -> Ballot:
        """Append a ballot. Raises DataIntegrityError if the triple is taken."""
        self._execute(
            """
            INSERT INTO ballots (id, voter_id, candidate_id, election_id, position_id, created_at)
            VALUES (?, ?, ?, ?, ?, ?)
            """,
            (
                ballot.id,
                ballot.voter_id,
                ballot.candidate_id,
                ballot.election_id,
                ballot.position_id,
                to_db_timestamp(ballot.created_at),
            ),
        )
        return ballot

    def get_ballot(self, ballot_id: str) -> Optional[Ballot]:
        row = self._fetch_one("SELECT * FROM ballots WHERE id = ?", (ballot_id,))
        return Ballot.from_db_row(row) if row else None

    def get_ballots_for_voter(self, voter_id: str, election_id: str) -> List[Ballot]:
        rows = self._fetch_all(
            "SELECT * FROM ballots WHERE voter_id = ? AND election_id = ? ORDER BY created_at, rowid",
            (voter_id, election_id),
        )
        return [Ballot.from_db_row(row) for row in rows]

    def get_voted_position_ids(self, voter_id: str, election_id: str) -> Set[str]:
        rows = self._fetch_all(
            "SELECT DISTINCT position_id FROM ballots WHERE voter_id = ? AND election_id = ?",
            (voter_id, election_id),
        )
        return {row["position_id"] for row in rows}

    def get_tally_rows(self, election_id: str) -> list:
        """Full candidate roster outer-joined against ballot counts

        Ordered by position creation order, then descending count, then
        candidate creation order. Candidates without ballots count 0.
        """
        return self._fetch_all(
            """
            SELECT p.id AS position_id,
                   p.name AS position_name,
                   c.id AS candidate_id,
                   c.user_id AS candidate_user_id,
                   u.first_name, u.last_name, u.username,
                   COUNT(b.id) AS vote_count
            FROM candidates c
            JOIN positions p ON p.id = c.position_id
            JOIN users u ON u.id = c.user_id
            LEFT JOIN ballots b
                   ON b.candidate_id = c.id
                  AND b.election_id = c.election_id
                  AND b.position_id = c.position_id
            WHERE c.election_id = ?
            GROUP BY c.id
            ORDER BY p.created_at, p.rowid, vote_count DESC, c.created_at, c.rowid
            """,
            (election_id,),
        )

    def count_for_candidate(self, candidate_id: str) -> int:
        return self._count("SELECT COUNT(*) FROM ballots WHERE candidate_id = ?", (candidate_id,))

    def get_ballot_count(self) -> int:
        return self._count("SELECT COUNT(*) FROM ballots")
