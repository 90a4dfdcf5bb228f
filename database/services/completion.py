"""
Voter Completion View

Per-voter, per-election progress, recomputed on every query from the
club's positions and the voter's ballots. Holds no state of its own.
"""

from typing import Iterable, Set

from database.models import CompletionStatus, VoterProgress
from exceptions import NotFoundError


def compute_status(position_ids: Iterable[str], voted_position_ids: Set[str]) -> CompletionStatus:
    """Completed iff every position is voted, NotStarted iff none is"""
    positions = set(position_ids)
    voted = positions & voted_position_ids
    if not voted:
        return CompletionStatus.NOT_STARTED
    if voted == positions:
        return CompletionStatus.COMPLETED
    return CompletionStatus.PARTIAL


class CompletionView:
    def __init__(self, db):
        self.db = db

    def progress(self, voter_id: str, election_id: str) -> VoterProgress:
        """Status plus which of the club's positions the voter has covered

        Raises:
            NotFoundError: Election id unknown
        """
        election = self.db.elections.get_election(election_id)
        if election is None:
            raise NotFoundError("election", election_id)

        positions = self.db.clubs.get_positions_by_club(election.club_id)
        voted_ids = self.db.ballots.get_voted_position_ids(voter_id, election_id)

        return VoterProgress(
            election_id=election_id,
            voter_id=voter_id,
            status=compute_status((p.id for p in positions), voted_ids),
            voted={p.id: p.id in voted_ids for p in positions},
        )

    def completion_status(self, voter_id: str, election_id: str) -> CompletionStatus:
        return self.progress(voter_id, election_id).status
