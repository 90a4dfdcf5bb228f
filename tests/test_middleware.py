"""
Tests for request correlation context and endpoint normalization
"""

import uuid

from starlette.requests import Request

from server.middleware.logging import request_context
from server.middleware.metrics import normalize_endpoint


def make_request(path: str, method: str = "GET", request_id: str = None) -> Request:
    headers = [(b"x-request-id", request_id.encode())] if request_id is not None else []
    return Request({
        "type": "http",
        "method": method,
        "path": path,
        "query_string": b"",
        "headers": headers,
    })


class TestRequestContext:
    """Fields bound into every log line of a request"""

    def test_client_id_kept(self):
        context = request_context(make_request("/api/health", request_id="trace-42"))
        assert context["request_id"] == "trace-42"

    def test_missing_id_generated(self):
        context = request_context(make_request("/api/health"))
        assert uuid.UUID(context["request_id"])

    def test_oversized_id_replaced(self):
        context = request_context(make_request("/api/health", request_id="x" * 65))
        assert uuid.UUID(context["request_id"])

    def test_route_is_normalized(self):
        election_id = str(uuid.uuid4())
        context = request_context(make_request(f"/api/elections/{election_id}/progress", "POST"))
        assert context["route"] == "/api/elections/:election_id/progress"
        assert context["method"] == "POST"


class TestNormalizeEndpoint:

    def test_named_ids(self):
        candidate_id = str(uuid.uuid4())
        assert (
            normalize_endpoint(f"/api/admin/candidates/{candidate_id}/approve")
            == "/api/admin/candidates/:candidate_id/approve"
        )

    def test_static_paths_unchanged(self):
        assert normalize_endpoint("/api/elections/active") == "/api/elections/active"
