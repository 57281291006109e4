from __future__ import annotations


class ToyShareError(Exception):
    """Base exception for all toyshare-service domain errors."""

    status_code: int = 500

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class InvalidRequestError(ToyShareError):
    """Semantically invalid input (e.g., requesting one's own toy)."""

    status_code = 400


class AuthenticationError(ToyShareError):
    """Missing/expired session or wrong credentials."""

    status_code = 401


class PermissionDeniedError(ToyShareError):
    """Authenticated, but not the owner/admin of the target resource."""

    status_code = 403


class NotFoundError(ToyShareError):
    """Target resource does not exist (or its id is malformed)."""

    status_code = 404


class ConflictError(ToyShareError):
    """Uniqueness or availability conflicts (duplicate username, pending request...)."""

    status_code = 409


class InvalidStateTransitionError(ConflictError):
    """Status change not allowed from the current state (e.g., approved -> rejected)."""

    def __init__(self, entity: str, current: str, target: str) -> None:
        super().__init__(f"cannot change {entity} status from {current} to {target}")
        self.entity = entity
        self.current = current
        self.target = target
