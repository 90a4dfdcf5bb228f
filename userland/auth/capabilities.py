"""
Role Capabilities

Single permission check for the whole API. Routes ask for a Capability,
never for a role, so adding a role means editing one table.
"""

from enum import Enum
from typing import Dict, FrozenSet

from database.models import Role


class Capability(str, Enum):
    VOTE = "vote"
    REGISTER_CANDIDACY = "register_candidacy"
    MANAGE_ELECTIONS = "manage_elections"
    APPROVE_CANDIDATES = "approve_candidates"
    VIEW_RESULTS = "view_results"
    VIEW_STATS = "view_stats"


_VOTER = frozenset({Capability.VOTE, Capability.REGISTER_CANDIDACY})

ROLE_CAPABILITIES: Dict[Role, FrozenSet[Capability]] = {
    Role.STUDENT: _VOTER,
    Role.CANDIDATE: _VOTER,
    # Admins also vote as students
    Role.ADMIN: _VOTER | {
        Capability.MANAGE_ELECTIONS,
        Capability.APPROVE_CANDIDATES,
        Capability.VIEW_RESULTS,
        Capability.VIEW_STATS,
    },
}


def capabilities_for(role: Role) -> FrozenSet[Capability]:
    return ROLE_CAPABILITIES.get(Role(role), frozenset())


def can(role: Role, capability: Capability) -> bool:
    return capability in capabilities_for(role)
