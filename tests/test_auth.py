"""
Tests for session tokens, password hashing and role capabilities
"""

from datetime import timedelta

import pytest

from database.models import Role
from userland.auth.capabilities import Capability, can, capabilities_for
from userland.auth.jwt import (
    generate_access_token,
    init_jwt,
    verify_token,
)
from userland.auth.passwords import hash_password, verify_password


class TestSessionTokens:

    def test_round_trip_payload(self):
        token = generate_access_token("user-1", "student")
        payload = verify_token(token, expected_type="access")
        assert payload["user_id"] == "user-1"
        assert payload["role"] == "student"

    def test_wrong_type_rejected(self):
        token = generate_access_token("user-1", "student")
        assert verify_token(token, expected_type="refresh") is None

    def test_expired_token_rejected(self):
        token = generate_access_token("user-1", "student", expires_in=timedelta(seconds=-1))
        assert verify_token(token) is None

    def test_tampered_token_rejected(self):
        token = generate_access_token("user-1", "student")
        assert verify_token(token[:-2] + ("A" if token[-2] != "A" else "B") + token[-1]) is None

    def test_garbage_rejected(self):
        assert verify_token("not-a-jwt") is None

    def test_reinitialization_refused(self):
        with pytest.raises(ValueError):
            init_jwt("another-secret")

    def test_empty_secret_refused(self):
        with pytest.raises(ValueError):
            init_jwt("   ")


class TestPasswords:

    def test_hash_verifies(self):
        hashed = hash_password("correct horse battery")
        assert hashed != "correct horse battery"
        assert verify_password("correct horse battery", hashed)

    def test_wrong_password_fails(self):
        assert not verify_password("wrong", hash_password("right-password"))

    def test_unknown_hash_format_fails(self):
        assert not verify_password("anything", "!unusable")


class TestCapabilities:

    @pytest.mark.parametrize("role", [Role.STUDENT, Role.CANDIDATE, Role.ADMIN])
    def test_every_role_can_vote(self, role):
        assert can(role, Capability.VOTE)
        assert can(role, Capability.REGISTER_CANDIDACY)

    @pytest.mark.parametrize("capability", [
        Capability.MANAGE_ELECTIONS,
        Capability.APPROVE_CANDIDATES,
        Capability.VIEW_RESULTS,
        Capability.VIEW_STATS,
    ])
    def test_admin_only_capabilities(self, capability):
        assert can(Role.ADMIN, capability)
        assert not can(Role.STUDENT, capability)
        assert not can(Role.CANDIDATE, capability)

    def test_role_strings_accepted(self):
        assert capabilities_for("admin") == capabilities_for(Role.ADMIN)
