"""
Request/response logging middleware

Every request gets a correlation ID, taken from X-Request-ID when the client
sends a well-formed one. The ID and the normalized route are bound into
structlog contextvars, so ledger and tally log lines emitted while serving the
request carry them too. The ID is echoed back in the response header.
"""

import re
import time
import uuid

import structlog
from fastapi import Request

from config import get_logger
from server.middleware.metrics import normalize_endpoint

logger = get_logger(__name__)

REQUEST_ID_HEADER = "X-Request-ID"

# Well-formed client IDs are kept; anything else gets a fresh UUID
_REQUEST_ID_RE = re.compile(r"^[A-Za-z0-9._-]{1,64}$")


def request_context(request: Request) -> dict:
    """Correlation fields for one request: request_id, method and route"""
    supplied = request.headers.get(REQUEST_ID_HEADER, "")
    request_id = supplied if _REQUEST_ID_RE.match(supplied) else str(uuid.uuid4())
    return {
        "request_id": request_id,
        "method": request.method,
        "route": normalize_endpoint(request.url.path),
    }


def get_request_id(request: Request) -> str:
    """Get request ID from request state"""
    return getattr(request.state, "request_id", "unknown")


async def log_requests(request: Request, call_next):
    """Bind request context, log the outcome with the session user"""
    context = request_context(request)
    request.state.request_id = context["request_id"]
    structlog.contextvars.bind_contextvars(**context)

    start_time = time.time()
    try:
        response = await call_next(request)
        response.headers[REQUEST_ID_HEADER] = context["request_id"]

        # Skip logging for metrics endpoint (Prometheus scraping noise)
        if request.url.path != "/metrics":
            # Set by get_current_user once the session resolves
            user_id = getattr(request.state, "user_id", None) or "anonymous"
            logger.info(
                "request completed",
                status=response.status_code,
                user_id=user_id,
                duration=round(time.time() - start_time, 3),
            )
        return response

    except Exception as e:
        logger.error(
            "request failed",
            error=str(e),
            duration=round(time.time() - start_time, 3),
        )
        raise
    finally:
        structlog.contextvars.clear_contextvars()
