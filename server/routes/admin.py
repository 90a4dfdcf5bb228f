"""
Admin API routes

Every endpoint is gated by a capability, never by a role name.
"""

from fastapi import APIRouter, Depends, status

from config import get_logger
from database.db import ElectionDatabase
from database.models import Club, Election, Position, User
from database.repositories.base import new_id
from server.dependencies import get_db, require_capability
from server.metrics import metrics
from server.models.requests import (
    ClubCreateRequest,
    ElectionActiveRequest,
    ElectionCreateRequest,
    PositionCreateRequest,
)
from server.utils.responses import list_response, success_response
from server.utils.validation import clean_text, require_candidate, require_club, require_election
from userland.auth.capabilities import Capability

logger = get_logger(__name__)

router = APIRouter(prefix="/api/admin", tags=["admin"])

manage_elections = require_capability(Capability.MANAGE_ELECTIONS)


@router.post("/clubs", status_code=status.HTTP_201_CREATED)
def create_club(
    request: ClubCreateRequest,
    db: ElectionDatabase = Depends(get_db),
    admin: User = Depends(manage_elections),
):
    club = Club(
        id=new_id(),
        name=request.name,
        description=clean_text(request.description, 2000),
    )
    if request.icon:
        club.icon = request.icon.strip()
    db.clubs.create_club(club)

    logger.info("club created", club_id=club.id, admin_id=admin.id)
    return success_response({"club": club.to_dict()})


@router.post("/positions", status_code=status.HTTP_201_CREATED)
def create_position(
    request: PositionCreateRequest,
    db: ElectionDatabase = Depends(get_db),
    admin: User = Depends(manage_elections),
):
    require_club(db, request.club_id)
    position = Position(
        id=new_id(),
        club_id=request.club_id,
        name=request.name,
        description=clean_text(request.description, 2000),
    )
    db.clubs.create_position(position)

    logger.info("position created", position_id=position.id, admin_id=admin.id)
    return success_response({"position": position.to_dict()})


@router.post("/elections", status_code=status.HTTP_201_CREATED)
def create_election(
    request: ElectionCreateRequest,
    db: ElectionDatabase = Depends(get_db),
    admin: User = Depends(manage_elections),
):
    """Create an election over [start_date, end_date) for an existing club"""
    require_club(db, request.club_id)
    election = Election(
        id=new_id(),
        club_id=request.club_id,
        title=request.title,
        description=clean_text(request.description, 2000),
        start_date=request.start_date,
        end_date=request.end_date,
        is_active=request.is_active,
    )
    db.elections.create_election(election)

    logger.info("election created", election_id=election.id, admin_id=admin.id)
    return success_response({"election": election.to_dict()})


@router.patch("/elections/{election_id}/active")
def set_election_active(
    election_id: str,
    request: ElectionActiveRequest,
    db: ElectionDatabase = Depends(get_db),
    admin: User = Depends(manage_elections),
):
    """Open or close an election. The activity flag is its only mutable field."""
    require_election(db, election_id)
    election = db.elections.set_active(election_id, request.is_active)

    logger.info(
        "election activity set",
        election_id=election_id,
        is_active=request.is_active,
        admin_id=admin.id,
    )
    return success_response({"election": election.to_dict()})


@router.get("/candidates/pending")
def get_pending_candidates(
    db: ElectionDatabase = Depends(get_db),
    admin: User = Depends(require_capability(Capability.APPROVE_CANDIDATES)),
):
    pending = db.candidates.get_pending_candidates()
    return list_response([c.to_dict() for c in pending], key="candidates")


@router.post("/candidates/{candidate_id}/approve")
def approve_candidate(
    candidate_id: str,
    db: ElectionDatabase = Depends(get_db),
    admin: User = Depends(require_capability(Capability.APPROVE_CANDIDATES)),
):
    """Approve a candidacy. Approval is one-way and repeating it changes nothing."""
    require_candidate(db, candidate_id)
    candidate = db.candidates.approve_candidate(candidate_id)

    logger.info("candidate approval", candidate_id=candidate_id, admin_id=admin.id)
    return success_response({"candidate": candidate.to_dict()})


@router.get("/stats")
def get_admin_stats(
    db: ElectionDatabase = Depends(get_db),
    admin: User = Depends(require_capability(Capability.VIEW_STATS)),
):
    """Dashboard counters: votes, users, live elections, candidates"""
    stats = db.get_stats()
    metrics.live_elections.set(stats["active_elections"])
    return success_response({"stats": stats})


@router.get("/elections/{election_id}/results")
def get_election_results(
    election_id: str,
    db: ElectionDatabase = Depends(get_db),
    admin: User = Depends(require_capability(Capability.VIEW_RESULTS)),
):
    """Tally with winners. `final` is false while the election is still live."""
    results = db.tally.results(election_id)
    return success_response({"results": results.to_dict()})
