"""Application-layer exceptions. Do not reuse domain exceptions."""


class ApplicationError(Exception):
    """Base for all application-layer errors."""

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


class AuthProviderError(ApplicationError):
    """Raised by an auth provider for credential or session failures. Message is shown to the user as-is."""


class ProfileLookupError(ApplicationError):
    """Raised when the profile store cannot be queried. Callers recover with a fallback value."""
