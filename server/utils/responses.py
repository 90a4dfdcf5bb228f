"""Standardized API response helpers.

Ensures consistent response structure across all endpoints.
All successful responses include {"success": True, ...}
All error responses include {"success": False, "error": <kind>, "message": ...}
"""

from typing import Optional


def success_response(data: dict, **extras) -> dict:
    """Standard success response wrapper.

    Usage:
        return success_response({"ballot": ballot.to_dict()})

    Returns:
        {"success": True, **data, **extras}
    """
    return {"success": True, **data, **extras}


def list_response(
    items: list,
    key: str = "items",
    total: Optional[int] = None,
    **extras
) -> dict:
    """Standard list response with total count.

    Usage:
        return list_response(clubs, key="clubs")

    Returns:
        {"success": True, key: items, "total": N, **extras}
    """
    return {
        "success": True,
        key: items,
        "total": total if total is not None else len(items),
        **extras
    }


def error_response(error: str, message: str, **extras) -> dict:
    """Standard error body used by the exception handlers.

    Returns:
        {"success": False, "error": error, "message": message, **extras}
    """
    return {"success": False, "error": error, "message": message, **extras}
