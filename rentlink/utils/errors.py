"""Error handling utilities."""

from typing import Optional


class RentLinkError(Exception):
    """Base exception for the RentLink core."""
    pass


class ValidationFailure(RentLinkError):
    """A required field is missing or malformed; the action is refused."""

    def __init__(self, message: str, field: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.field = field


class AIServiceUnavailableError(RentLinkError):
    """No credential configured for the text generation provider."""
    pass


class DescriptionGenerationError(RentLinkError):
    """Text generation failed, timed out, or returned nothing."""
    pass


class NavigationError(RentLinkError):
    """Illegal view transition."""
    pass
