"""Userland authentication module"""

from userland.auth.capabilities import Capability, can, capabilities_for
from userland.auth.jwt import (
    init_jwt,
    is_initialized,
    generate_access_token,
    verify_token,
)
from userland.auth.passwords import hash_password, verify_password

__all__ = [
    "Capability",
    "can",
    "capabilities_for",
    "init_jwt",
    "is_initialized",
    "generate_access_token",
    "verify_token",
    "hash_password",
    "verify_password",
]
