"""
Monitoring and health check API routes
"""

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse, Response

from config import get_logger
from database.db import ElectionDatabase
from exceptions import DatabaseError
from server.dependencies import get_db
from server.metrics import get_metrics_text, metrics
from server.utils.responses import error_response

logger = get_logger(__name__)


router = APIRouter()


@router.get("/")
def root():
    """API status and info"""
    return {
        "service": "SecureVote API",
        "status": "running",
        "version": "1.0.0",
        "description": "Student club elections with one ballot per voter per position",
        "endpoints": {
            "auth": {
                "register": "POST /api/auth/register",
                "login": "POST /api/auth/login",
                "logout": "POST /api/auth/logout",
                "me": "GET /api/auth/me",
            },
            "clubs": "GET /api/clubs",
            "positions": "GET /api/clubs/{club_id}/positions",
            "active_elections": "GET /api/elections/active",
            "candidates": "GET /api/elections/{election_id}/candidates",
            "register_candidacy": "POST /api/elections/{election_id}/candidates",
            "progress": "GET /api/elections/{election_id}/progress",
            "vote": "POST /api/vote",
            "chat": "POST /api/chat",
            "health": "GET /api/health",
            "metrics": "GET /metrics",
            "admin": {
                "stats": "GET /api/admin/stats",
                "results": "GET /api/admin/elections/{election_id}/results",
                "pending_candidates": "GET /api/admin/candidates/pending",
            },
        },
    }


@router.get("/api/health")
def health_check(db: ElectionDatabase = Depends(get_db)):
    """Health check with database status"""
    try:
        stats = db.get_stats()
    except DatabaseError as e:
        metrics.record_error("database", e)
        logger.error("health check failed", error=str(e))
        return JSONResponse(
            status_code=503,
            content=error_response(e.kind, "Database unavailable", status="unhealthy"),
        )

    return {
        "status": "healthy",
        "database": "connected",
        "active_elections": stats["active_elections"],
        "total_votes": stats["total_votes"],
    }


@router.get("/metrics")
def prometheus_metrics():
    """Prometheus scrape endpoint"""
    return Response(content=get_metrics_text(), media_type="text/plain; version=0.0.4")
