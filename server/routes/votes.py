"""Vote API routes - ballot submission"""

import time

from fastapi import APIRouter, Depends, status

from database.db import ElectionDatabase
from database.models import User
from exceptions import BallotRejected
from server.dependencies import get_db, require_capability
from server.metrics import metrics
from server.models.requests import VoteRequest
from server.utils.responses import success_response
from userland.auth.capabilities import Capability

router = APIRouter(prefix="/api", tags=["votes"])


@router.post("/vote", status_code=status.HTTP_201_CREATED)
def cast_vote(
    vote: VoteRequest,
    db: ElectionDatabase = Depends(get_db),
    user: User = Depends(require_capability(Capability.VOTE)),
):
    """Cast one ballot for the session user.

    Rejections surface as 400 (ElectionClosed, InvalidCandidate, DuplicateVote)
    or 404 (ElectionNotFound) through the BallotRejected handler.
    """
    start_time = time.time()
    try:
        ballot = db.ledger.cast_vote(
            voter_id=user.id,
            candidate_id=vote.candidate_id,
            election_id=vote.election_id,
            position_id=vote.position_id,
        )
    except BallotRejected as e:
        metrics.ballots_rejected.labels(reason=e.kind).inc()
        raise

    metrics.cast_duration.observe(time.time() - start_time)
    metrics.ballots_cast.inc()
    return success_response({"ballot": ballot.to_dict()})
