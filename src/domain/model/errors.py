"""Domain-level exceptions.

Services raise these errors to express business rule violations.
Route handlers catch them and map to appropriate HTTP status codes.
"""


class DomainError(Exception):
    """Base class for all domain errors."""


class NotFoundError(DomainError):
    """Requested entity does not exist."""


class DuplicateError(DomainError):
    """Entity with the same unique key already exists."""


class UnauthorizedError(DomainError):
    """Credentials are missing, invalid, or belong to an inactive account.

    The message is deliberately generic so callers cannot tell the cases apart.
    """

    def __init__(self, message: str = "Invalid credentials"):
        super().__init__(message)


class ValidationError(DomainError):
    """Input violates a business validation rule."""


class DependencyError(DomainError):
    """An external collaborator (store, event bus) failed."""


class EventPublishError(DependencyError):
    """Failed to publish a domain event to the event bus."""

    def __init__(self, event_type: str, reason: str):
        self.event_type = event_type
        self.reason = reason
        super().__init__(f"Failed to publish {event_type}: {reason}")
