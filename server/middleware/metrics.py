"""
Prometheus metrics middleware for API requests

Instruments all API requests with:
- Request count (by endpoint, method, status_code)
- Request duration (by endpoint, method)

Usage:
    from server.middleware.metrics import metrics_middleware
    app.middleware("http")(metrics_middleware)
"""

import re
import time
from fastapi import Request

from server.metrics import metrics

_UUID_RE = re.compile(r"^[0-9a-fA-F]{8}-[0-9a-fA-F]{4}-[0-9a-fA-F]{4}-[0-9a-fA-F]{4}-[0-9a-fA-F]{12}$")

# Collection segment -> placeholder for the id that follows it
_ID_NAMES = {
    "elections": ":election_id",
    "candidates": ":candidate_id",
    "clubs": ":club_id",
}


async def metrics_middleware(request: Request, call_next):
    """Record Prometheus metrics for all API requests"""
    start_time = time.time()

    endpoint = normalize_endpoint(request.url.path)
    method = request.method

    try:
        response = await call_next(request)
        duration = time.time() - start_time

        metrics.api_requests.labels(
            endpoint=endpoint,
            method=method,
            status_code=response.status_code
        ).inc()

        metrics.api_request_duration.labels(
            endpoint=endpoint,
            method=method
        ).observe(duration)

        return response

    except Exception:
        duration = time.time() - start_time

        # Record error as 500
        metrics.api_requests.labels(
            endpoint=endpoint,
            method=method,
            status_code=500
        ).inc()

        metrics.api_request_duration.labels(
            endpoint=endpoint,
            method=method
        ).observe(duration)

        raise


def normalize_endpoint(path: str) -> str:
    """Normalize endpoint path for metrics cardinality control

    Converts:
        /api/elections/<uuid>/candidates -> /api/elections/:election_id/candidates
        /api/admin/candidates/<uuid>/approve -> /api/admin/candidates/:candidate_id/approve
    """
    parts = [p for p in path.split('/') if p]
    normalized_parts = []

    for i, part in enumerate(parts):
        if _is_id_like(part):
            prev_part = parts[i - 1] if i > 0 else None
            normalized_parts.append(_ID_NAMES.get(prev_part, ':id'))
        else:
            normalized_parts.append(part)

    return '/' + '/'.join(normalized_parts)


def _is_id_like(part: str) -> bool:
    """UUID primary keys or bare numeric ids"""
    return bool(_UUID_RE.match(part)) or part.isdigit()
