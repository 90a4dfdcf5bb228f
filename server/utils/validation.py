"""Input cleanup and existence checks for API routes."""

from typing import Optional

from exceptions import NotFoundError


def clean_text(value: Optional[str], max_length: int) -> Optional[str]:
    """Strip whitespace and truncate free text. Blank input becomes None."""
    if value is None:
        return None
    value = value.strip()
    return value[:max_length] if value else None


def require_club(db, club_id: str):
    """Get club or raise 404."""
    club = db.clubs.get_club(club_id)
    if not club:
        raise NotFoundError("club", club_id)
    return club


def require_position(db, position_id: str):
    """Get position or raise 404."""
    position = db.clubs.get_position(position_id)
    if not position:
        raise NotFoundError("position", position_id)
    return position


def require_election(db, election_id: str):
    """Get election or raise 404."""
    election = db.elections.get_election(election_id)
    if not election:
        raise NotFoundError("election", election_id)
    return election


def require_candidate(db, candidate_id: str):
    """Get candidate or raise 404."""
    candidate = db.candidates.get_candidate(candidate_id)
    if not candidate:
        raise NotFoundError("candidate", candidate_id)
    return candidate
