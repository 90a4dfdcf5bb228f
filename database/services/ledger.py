"""
Ballot Ledger Service

Owns cast votes. Decides whether a ballot may be accepted and appends it:
1. The election must exist and be live
2. The candidate must be approved and bound to the same election and position
3. The voter must not already hold a ballot for (election, position)

Checks 1-3 and the insert run inside one BEGIN IMMEDIATE transaction under
the database lock, so the duplicate check and the append are a single
indivisible step. The UNIQUE(voter_id, election_id, position_id) constraint
backs this up for writers on other connections; a violation surfaces as
DuplicateVote, never as a second ballot.
"""

from datetime import datetime
from typing import Optional

from config import get_logger
from database.models import Ballot, utcnow
from database.repositories.base import new_id
from database.transaction import transaction
from exceptions import (
    BallotRejected,
    DataIntegrityError,
    DuplicateVote,
    ElectionClosed,
    ElectionNotFound,
    InvalidCandidate,
)

logger = get_logger(__name__).bind(component="ledger")


class BallotLedger:
    """Append-only ballot ledger with eligibility checks"""

    def __init__(self, db):
        """
        Args:
            db: ElectionDatabase instance for repository access
        """
        self.db = db

    def has_voted(self, voter_id: str, election_id: str, position_id: str) -> bool:
        """Eligibility query: does a ballot exist for this exact triple?

        Reads go through the same locked connection as writes, so a ballot
        committed by cast_vote is visible here immediately.
        """
        return self.db.ballots.has_voted(voter_id, election_id, position_id)

    def cast_vote(
        self,
        voter_id: str,
        candidate_id: str,
        election_id: str,
        position_id: str,
        now: Optional[datetime] = None,
    ) -> Ballot:
        """Validate and append one ballot

        Args:
            voter_id: Authenticated voter
            candidate_id: Chosen candidate
            election_id: Election the ballot belongs to
            position_id: Position being voted on
            now: Clock override for the liveness check. Defaults to the time
                the write lock is acquired

        Returns:
            The stored Ballot

        Raises:
            ElectionNotFound: Election id unknown
            ElectionClosed: Election inactive or past its end date
            InvalidCandidate: Candidate missing, unapproved, or mismatched
            DuplicateVote: Triple already recorded
        """
        log = logger.bind(
            voter_id=voter_id,
            election_id=election_id,
            position_id=position_id,
            candidate_id=candidate_id,
        )

        try:
            with transaction(self.db.conn, self.db.lock):
                # Clock is read after the write lock is held
                now = now or utcnow()
                election = self.db.elections.get_election(election_id)
                if election is None:
                    raise ElectionNotFound("Election not found", election_id=election_id)

                if not election.is_live(now):
                    raise ElectionClosed(
                        "This election is closed for voting",
                        election_id=election_id,
                    )

                candidate = self.db.candidates.get_candidate(candidate_id)
                if (
                    candidate is None
                    or not candidate.is_approved
                    or candidate.election_id != election_id
                    or candidate.position_id != position_id
                ):
                    raise InvalidCandidate(
                        "Candidate is not on the ballot for this position",
                        election_id=election_id,
                        position_id=position_id,
                        candidate_id=candidate_id,
                    )

                if self.has_voted(voter_id, election_id, position_id):
                    raise DuplicateVote(
                        "You have already voted for this position",
                        election_id=election_id,
                        position_id=position_id,
                    )

                ballot = Ballot(
                    id=new_id(),
                    voter_id=voter_id,
                    candidate_id=candidate_id,
                    election_id=election_id,
                    position_id=position_id,
                    created_at=now,
                )
                try:
                    self.db.ballots.insert_ballot(ballot)
                except DataIntegrityError as e:
                    if "UNIQUE" not in str(e):
                        raise
                    raise DuplicateVote(
                        "You have already voted for this position",
                        election_id=election_id,
                        position_id=position_id,
                    ) from e

        except BallotRejected as e:
            log.info("ballot rejected", reason=e.kind)
            raise

        log.info("ballot cast", ballot_id=ballot.id)
        return ballot
