"""Club and position browsing routes"""

from fastapi import APIRouter, Depends

from database.db import ElectionDatabase
from server.dependencies import get_db
from server.utils.responses import list_response
from server.utils.validation import require_club

router = APIRouter(prefix="/api", tags=["clubs"])


@router.get("/clubs")
def get_clubs(db: ElectionDatabase = Depends(get_db)):
    """All clubs, alphabetical"""
    clubs = db.clubs.get_clubs()
    return list_response([c.to_dict() for c in clubs], key="clubs")


@router.get("/clubs/{club_id}/positions")
def get_club_positions(club_id: str, db: ElectionDatabase = Depends(get_db)):
    """Positions of a club in creation order"""
    require_club(db, club_id)
    positions = db.clubs.get_positions_by_club(club_id)
    return list_response([p.to_dict() for p in positions], key="positions", club_id=club_id)
