"""
Tally Aggregator Service

Read-side projection over ballots. Nothing is materialized: every call
recomputes from the ballot table.

Ordering rules:
- Positions in creation order
- Within a position, descending vote count
- Ties broken by candidate creation order (never storage order)
- Every candidate of the election is listed; those with no ballots count 0
"""

from datetime import datetime
from itertools import groupby
from typing import List, Optional

from config import get_logger
from database.models import ElectionResults, PositionOutcome, TallyRow, utcnow
from database.transaction import transaction
from exceptions import NotFoundError

logger = get_logger(__name__).bind(component="tally")


def _candidate_name(row) -> str:
    name = f"{row['first_name']} {row['last_name']}".strip()
    return name or row["username"]


def determine_outcomes(rows: List[TallyRow]) -> List[PositionOutcome]:
    """Leader(s) per position from an ordered tally

    A position whose best count is 0 has no winner. Several candidates sharing
    the best non-zero count are all listed, which marks a tie.
    """
    outcomes = []
    for position_id, group in groupby(rows, key=lambda r: r.position_id):
        group = list(group)
        top = max(r.vote_count for r in group)
        winners = [r for r in group if top > 0 and r.vote_count == top]
        outcomes.append(PositionOutcome(
            position_id=position_id,
            position_name=group[0].position_name,
            winners=winners,
        ))
    return outcomes


class TallyAggregator:
    """Grouped vote counts, ordering and winner determination"""

    def __init__(self, db):
        self.db = db

    def tally(self, election_id: str) -> List[TallyRow]:
        """Ordered (position, candidate, vote_count) rows for an election"""
        rows = self.db.ballots.get_tally_rows(election_id)
        return [
            TallyRow(
                position_id=row["position_id"],
                position_name=row["position_name"],
                candidate_id=row["candidate_id"],
                candidate_user_id=row["candidate_user_id"],
                candidate_name=_candidate_name(row),
                vote_count=row["vote_count"],
            )
            for row in rows
        ]

    def winners(self, election_id: str) -> List[PositionOutcome]:
        return determine_outcomes(self.tally(election_id))

    def results(self, election_id: str, now: Optional[datetime] = None) -> ElectionResults:
        """Tally and winners read from one snapshot

        `final` is true only when the snapshot was taken after the election
        stopped being live (end date reached or deactivated). Earlier reads
        are a non-authoritative live count.

        Raises:
            NotFoundError: Election id unknown
        """
        with transaction(self.db.conn, self.db.lock, immediate=False):
            now = now or utcnow()
            election = self.db.elections.get_election(election_id)
            if election is None:
                raise NotFoundError("election", election_id)
            rows = self.tally(election_id)

        results = ElectionResults(
            election_id=election_id,
            tally=rows,
            outcomes=determine_outcomes(rows),
            final=not election.is_live(now),
            computed_at=now,
        )
        logger.debug(
            "computed results",
            election_id=election_id,
            rows=len(rows),
            final=results.final,
        )
        return results
