"""Domain-specific exceptions. Pure domain layer, no infrastructure."""


class DomainError(Exception):
    """Base for all domain-layer errors."""

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


class DomainValidationError(DomainError):
    """Raised when domain validation rules are violated (missing actor, malformed payload)."""


class ComplaintNotFoundError(DomainError):
    """Raised when a mutation targets a complaint id that does not exist."""
