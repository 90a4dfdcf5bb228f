"""
Custom Exception Hierarchy - Domain-specific error types

Provides clear, typed exceptions for the failure modes of the election service.
All custom exceptions inherit from SecureVoteError for easy catching.

Design Philosophy:
- Exceptions are data: Include context for debugging
- Fail explicitly: Better to raise specific exception than generic
- Catch specifically: Handler can distinguish error types
- Log contextually: Exception attributes enable rich logging
"""

from typing import Optional, Dict, Any


class SecureVoteError(Exception):
    """Base exception for all SecureVote errors

    All custom exceptions inherit from this, enabling:
    - Catch all SecureVote errors with single except clause
    - Distinguish our errors from library errors
    - Add common attributes (context)
    - Check if error is retryable via is_retryable property

    `kind` is the stable, client-facing error name used in API responses.
    """

    _retryable: bool = False
    kind: str = "error"

    def __init__(self, message: str, context: Optional[Dict[str, Any]] = None):
        self.message = message
        self.context = context or {}
        super().__init__(message)

    @property
    def is_retryable(self) -> bool:
        """Check if this error represents a transient failure that should be retried.

        Returns:
            True for transient failures (locked database, connection loss)
            False for permanent failures (rejected ballots, validation, missing data)
        """
        return self._retryable

    def __str__(self):
        base_msg = super().__str__()
        if self.context:
            context_str = ", ".join(f"{k}={v}" for k, v in self.context.items())
            return f"{base_msg} (context: {context_str})"
        return base_msg


# ========== Database Errors ==========


class DatabaseError(SecureVoteError):
    """Database operation failures

    Examples:
    - Query errors
    - Transaction rollbacks
    """
    kind = "DatabaseError"


class DatabaseConnectionError(DatabaseError):
    """Failed to establish or maintain database connection"""
    _retryable = True


class DataIntegrityError(DatabaseError):
    """Data integrity constraint violation

    Examples:
    - Foreign key violations
    - Unique constraint violations
    """

    def __init__(self, message: str, table: Optional[str] = None, constraint: Optional[str] = None):
        self.table = table
        self.constraint = constraint
        context = {}
        if table:
            context['table'] = table
        if constraint:
            context['constraint'] = constraint
        super().__init__(message, context)


# ========== Ballot Errors ==========


class BallotRejected(SecureVoteError):
    """A vote submission was refused by the ballot ledger

    Always user-facing and never retryable: submitting the same ballot again
    produces the same outcome.
    """
    kind = "BallotRejected"

    def __init__(
        self,
        message: str,
        election_id: Optional[str] = None,
        position_id: Optional[str] = None,
        candidate_id: Optional[str] = None,
    ):
        self.election_id = election_id
        self.position_id = position_id
        self.candidate_id = candidate_id

        context = {}
        if election_id:
            context['election_id'] = election_id
        if position_id:
            context['position_id'] = position_id
        if candidate_id:
            context['candidate_id'] = candidate_id

        super().__init__(message, context)


class ElectionNotFound(BallotRejected):
    """Referenced election does not exist"""
    kind = "ElectionNotFound"


class ElectionClosed(BallotRejected):
    """Election is inactive or past its end date"""
    kind = "ElectionClosed"


class InvalidCandidate(BallotRejected):
    """Candidate missing, unapproved, or bound to another election/position"""
    kind = "InvalidCandidate"


class DuplicateVote(BallotRejected):
    """Voter already holds a ballot for this election and position"""
    kind = "DuplicateVote"


# ========== Auth Errors ==========


class AuthError(SecureVoteError):
    """Authentication and authorization failures"""
    kind = "AuthError"


class NotAuthenticated(AuthError):
    """No valid session"""
    kind = "NotAuthenticated"


class NotAuthorized(AuthError):
    """Authenticated, but the role lacks the required capability"""
    kind = "NotAuthorized"

    def __init__(self, message: str, capability: Optional[str] = None, role: Optional[str] = None):
        self.capability = capability
        self.role = role
        context = {}
        if capability:
            context['capability'] = capability
        if role:
            context['role'] = role
        super().__init__(message, context)


# ========== Lookup / Write Conflicts ==========


class NotFoundError(SecureVoteError):
    """Referenced entity does not exist"""
    kind = "NotFound"

    def __init__(self, entity: str, entity_id: Optional[str] = None):
        self.entity = entity
        self.entity_id = entity_id
        context = {'entity': entity}
        if entity_id:
            context['id'] = entity_id
        super().__init__(f"{entity.capitalize()} not found", context)


class ConflictError(SecureVoteError):
    """Write refused because it collides with existing data

    Examples:
    - Username or email already registered
    - Duplicate candidacy for the same election and position
    """
    kind = "Conflict"


# ========== Configuration Errors ==========


class ConfigurationError(SecureVoteError):
    """Configuration or environment errors

    Examples:
    - Missing required env var
    - Invalid configuration value
    """
    kind = "ConfigurationError"

    def __init__(self, message: str, config_key: Optional[str] = None):
        self.config_key = config_key
        context = {}
        if config_key:
            context['config_key'] = config_key
        super().__init__(message, context)


# ========== Validation Errors ==========


class ValidationError(SecureVoteError):
    """Data validation failures

    Examples:
    - Election end date before start date
    - Position belonging to another club
    """
    kind = "ValidationError"

    def __init__(self, message: str, field: Optional[str] = None, value: Optional[Any] = None):
        self.field = field
        self.value = value

        context = {}
        if field:
            context['field'] = field
        if value is not None:
            context['value'] = str(value)

        super().__init__(message, context)
