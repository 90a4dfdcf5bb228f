"""
JWT Session Utilities

Session token generation and verification.

Note: Uses module-level state initialized once at server startup.
This is acceptable because the secret is set once and never modified.
For testing, call init_jwt() before using any token functions.
"""

from datetime import datetime, timedelta, timezone
from typing import Optional

from jose import JWTError, jwt

# Module-level secret (initialized once at startup via init_jwt)
_SECRET_KEY: Optional[str] = None
_ALGORITHM = "HS256"

_DEFAULT_SESSION_EXPIRY = timedelta(hours=12)


def init_jwt(secret: str) -> None:
    """
    Initialize JWT module with secret key.

    Should be called once at server startup. Subsequent calls will
    raise ValueError to prevent accidental re-initialization.

    Args:
        secret: JWT signing secret (should be cryptographically secure)

    Raises:
        ValueError: If secret is empty or module already initialized
    """
    global _SECRET_KEY

    if not secret or not secret.strip():
        raise ValueError("JWT secret cannot be empty")

    if _SECRET_KEY is not None:
        raise ValueError("JWT module already initialized. Do not re-initialize.")

    _SECRET_KEY = secret


def is_initialized() -> bool:
    return _SECRET_KEY is not None


def _get_secret() -> str:
    """Get the initialized secret key, raising if not initialized"""
    if _SECRET_KEY is None:
        raise ValueError("JWT module not initialized. Call init_jwt() first.")
    return _SECRET_KEY


def generate_access_token(user_id: str, role: str, expires_in: Optional[timedelta] = None) -> str:
    """Generate session token for API requests and the session cookie."""
    secret = _get_secret()
    payload = {
        "user_id": user_id,
        "role": role,
        "type": "access",
        "exp": datetime.now(timezone.utc) + (expires_in or _DEFAULT_SESSION_EXPIRY),
    }
    return jwt.encode(payload, secret, algorithm=_ALGORITHM)


def verify_token(token: str, expected_type: Optional[str] = None) -> Optional[dict]:
    """Verify JWT token and return payload, or None if invalid/expired."""
    secret = _get_secret()
    try:
        payload = jwt.decode(token, secret, algorithms=[_ALGORITHM])

        if expected_type and payload.get("type") != expected_type:
            return None

        return payload
    except JWTError:
        return None
