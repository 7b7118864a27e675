from __future__ import annotations

from typing import Optional


class DomainError(Exception):
    """Base exception for business rule violations."""

    code = "domain_error"


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules."""

    code = "validation_error"


class MissingRequiredFieldError(ValidationError):
    code = "missing_required_field"

    def __init__(self, *fields: str):
        self.fields = fields
        super().__init__(f"{', '.join(fields)} {'is' if len(fields) == 1 else 'are'} required")


class NotFoundError(DomainError):
    code = "not_found"

    def __init__(self, entity: str, identifier: Optional[str] = None, message: Optional[str] = None):
        self.entity = entity
        self.identifier = identifier
        super().__init__(message or f"{entity} not found")


class PolicyViolationError(DomainError):
    """Office-only, geofence and similar site rules."""

    code = "policy_violation"


class AuthorizationError(DomainError):
    """Raised when a user lacks permission for an action."""

    code = "authorization_failure"


class InvalidDateRangeError(ValidationError):
    code = "invalid_date_range"


class RateLimitedError(DomainError):
    """Clock-out attempted before the minimum interval elapsed."""

    code = "rate_limited"

    def __init__(self, *, remaining_minutes: int, interval_hours: float):
        self.remaining_minutes = remaining_minutes
        self.interval_hours = interval_hours
        super().__init__(
            f"Cannot clock out yet. Minimum interval is {interval_hours:g} hours. "
            f"Please wait {remaining_minutes} more minute(s)."
        )


class InfrastructureError(Exception):
    """Store unavailable, lock timeout or malformed stored data.

    Kept outside the DomainError tree; adapters report it as a generic failure.
    """

    code = "internal_error"


class AuthenticationError(AuthorizationError):
    """No signed-in user behind the request."""

    code = "unauthenticated"
