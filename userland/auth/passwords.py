"""Password hashing

Hashes are self-describing passlib strings, so the scheme can be rotated
later without invalidating stored accounts.
"""

from passlib.context import CryptContext

pwd_context = CryptContext(schemes=["pbkdf2_sha256"], deprecated="auto")


def hash_password(password: str) -> str:
    return pwd_context.hash(password)


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """False for a wrong password or an unrecognized hash"""
    try:
        return pwd_context.verify(plain_password, hashed_password)
    except ValueError:
        return False
