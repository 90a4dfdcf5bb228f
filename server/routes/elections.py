"""
Election API routes - live elections, rosters, candidacy and voter progress
"""

from typing import Optional

from fastapi import APIRouter, Depends, status

from config import get_logger
from database.db import ElectionDatabase
from database.models import Candidate, Election, Role, User, utcnow
from database.repositories.base import new_id
from database.transaction import transaction
from exceptions import ElectionClosed, ValidationError
from server.dependencies import get_current_user, get_db, get_optional_user, require_capability
from server.models.requests import CandidacyRequest
from server.utils.responses import list_response, success_response
from server.utils.validation import clean_text, require_election, require_position
from userland.auth.capabilities import Capability

logger = get_logger(__name__)

router = APIRouter(prefix="/api/elections", tags=["elections"])


def _election_payload(db: ElectionDatabase, election: Election, user: Optional[User]) -> dict:
    """Election with its club, the club's positions and, for a session, the caller's progress"""
    club = db.clubs.get_club(election.club_id)
    positions = db.clubs.get_positions_by_club(election.club_id)

    payload = election.to_dict()
    payload["club"] = club.to_dict() if club else None
    payload["positions"] = [p.to_dict() for p in positions]

    if user is None:
        payload["user_votes"] = {}
        payload["completion"] = None
    else:
        progress = db.completion.progress(user.id, election.id)
        payload["user_votes"] = progress.voted
        payload["completion"] = progress.status.value
    return payload


@router.get("/active")
def get_active_elections(
    db: ElectionDatabase = Depends(get_db),
    user: Optional[User] = Depends(get_optional_user),
):
    """Live elections, soonest closing first.

    Anonymous callers get an empty user_votes map; with a session each
    election carries the per-position voted map and completion status.
    """
    elections = db.elections.get_live_elections()
    items = [_election_payload(db, e, user) for e in elections]
    return list_response(items, key="elections")


@router.get("/{election_id}/candidates")
def get_election_candidates(election_id: str, db: ElectionDatabase = Depends(get_db)):
    """Approved candidate roster with user and position details"""
    require_election(db, election_id)
    roster = db.candidates.get_roster(election_id, approved_only=True)
    return list_response(roster, key="candidates", election_id=election_id)


@router.post("/{election_id}/candidates", status_code=status.HTTP_201_CREATED)
def register_candidacy(
    election_id: str,
    candidacy: CandidacyRequest,
    db: ElectionDatabase = Depends(get_db),
    user: User = Depends(require_capability(Capability.REGISTER_CANDIDACY)),
):
    """Stand for a position. The candidacy waits for admin approval."""
    election = require_election(db, election_id)
    if not election.is_live(utcnow()):
        raise ElectionClosed("This election is closed", election_id=election_id)

    position = require_position(db, candidacy.position_id)
    if position.club_id != election.club_id:
        raise ValidationError(
            "Position does not belong to this election's club",
            field="position_id",
            value=position.id,
        )

    with transaction(db.conn, db.lock):
        candidate = db.candidates.create_candidate(Candidate(
            id=new_id(),
            user_id=user.id,
            election_id=election_id,
            position_id=position.id,
            manifesto=clean_text(candidacy.manifesto, 5000),
        ))
        if user.role == Role.STUDENT:
            db.users.set_role(user.id, Role.CANDIDATE)

    logger.info("candidacy submitted", candidate_id=candidate.id, user_id=user.id)
    return success_response({"candidate": candidate.to_dict()})


@router.get("/{election_id}/progress")
def get_my_progress(
    election_id: str,
    db: ElectionDatabase = Depends(get_db),
    user: User = Depends(get_current_user),
):
    """Caller's completion status for one election"""
    progress = db.completion.progress(user.id, election_id)
    return success_response({"progress": progress.to_dict()})
