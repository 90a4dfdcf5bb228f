"""
Candidate Repository - Candidacies and the approval flag

Approval only moves false -> true; there is no un-approval path.
"""

from typing import Any, Dict, List, Optional

from config import get_logger
from database.models import Candidate, Position, to_db_timestamp
from database.repositories.base import BaseRepository
from exceptions import ConflictError, DataIntegrityError

logger = get_logger(__name__).bind(component="database")


class CandidateRepository(BaseRepository):
    """Repository for candidate operations"""

    def create_candidate(self, candidate: Candidate) -> Candidate:
        """Insert a candidacy

        Raises:
            ConflictError: If the user already stands for this election and position
        """
        try:
            self._execute(
                """
                INSERT INTO candidates (id, user_id, election_id, position_id,
                                        manifesto, is_approved, created_at)
                VALUES (?, ?, ?, ?, ?, ?, ?)
                """,
                (
                    candidate.id,
                    candidate.user_id,
                    candidate.election_id,
                    candidate.position_id,
                    candidate.manifesto,
                    candidate.is_approved,
                    to_db_timestamp(candidate.created_at),
                ),
            )
        except DataIntegrityError as e:
            raise ConflictError(
                "Already registered as a candidate for this position",
                context={"election_id": candidate.election_id, "position_id": candidate.position_id},
            ) from e

        logger.info(
            "candidate registered",
            candidate_id=candidate.id,
            election_id=candidate.election_id,
            position_id=candidate.position_id,
        )
        return candidate

    def get_candidate(self, candidate_id: str) -> Optional[Candidate]:
        row = self._fetch_one("SELECT * FROM candidates WHERE id = ?", (candidate_id,))
        return Candidate.from_db_row(row) if row else None

    def approve_candidate(self, candidate_id: str) -> Optional[Candidate]:
        """Mark a candidate approved. Approving twice is a no-op."""
        cursor = self._execute(
            "UPDATE candidates SET is_approved = 1 WHERE id = ? AND is_approved = 0",
            (candidate_id,),
        )
        if cursor.rowcount:
            logger.info("candidate approved", candidate_id=candidate_id)
        return self.get_candidate(candidate_id)

    def get_roster(self, election_id: str, approved_only: bool = True) -> List[Dict[str, Any]]:
        """Candidates of an election with their user and position, in creation order"""
        query = """
            SELECT c.*,
                   u.username, u.first_name, u.last_name,
                   p.club_id AS position_club_id, p.name AS position_name,
                   p.description AS position_description, p.created_at AS position_created_at
            FROM candidates c
            JOIN users u ON u.id = c.user_id
            JOIN positions p ON p.id = c.position_id
            WHERE c.election_id = ?
        """
        if approved_only:
            query += " AND c.is_approved = 1"
        query += " ORDER BY c.created_at, c.rowid"

        rows = self._fetch_all(query, (election_id,))
        roster = []
        for row in rows:
            entry = Candidate.from_db_row(row).to_dict()
            entry["user"] = {
                "id": row["user_id"],
                "username": row["username"],
                "first_name": row["first_name"],
                "last_name": row["last_name"],
            }
            entry["position"] = Position.from_db_row({
                "id": row["position_id"],
                "club_id": row["position_club_id"],
                "name": row["position_name"],
                "description": row["position_description"],
                "created_at": row["position_created_at"],
            }).to_dict()
            roster.append(entry)
        return roster

    def get_pending_candidates(self) -> List[Candidate]:
        """Unapproved candidacies, oldest first"""
        rows = self._fetch_all(
            "SELECT * FROM candidates WHERE is_approved = 0 ORDER BY created_at, rowid"
        )
        return [Candidate.from_db_row(row) for row in rows]

    def get_candidate_count(self) -> int:
        return self._count("SELECT COUNT(*) FROM candidates")
