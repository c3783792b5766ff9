"""Custom exception hierarchy for 10xCards application."""

from fastapi import HTTPException
from starlette import status


class TenxCardsError(Exception):
    """Base exception for all 10xCards errors."""

    def __init__(
        self,
        message: str,
        status_code: int = 500,
        code: str = "INTERNAL_ERROR",
        details: dict[str, object] | None = None,
    ) -> None:
        """Initialize exception with message, status code and machine-readable code."""
        self.message = message
        self.status_code = status_code
        self.code = code
        self.details = details or {}
        super().__init__(self.message)


class ConfigurationError(TenxCardsError):
    """Missing or invalid setup. Surfaced to operators, never retried."""

    def __init__(self, message: str) -> None:
        super().__init__(message, status_code=500, code="CONFIGURATION_ERROR")


class ValidationError(TenxCardsError):
    """Caller-supplied input violates shape, length or count constraints."""

    def __init__(
        self,
        message: str,
        *,
        field: str | None = None,
        details: dict[str, object] | None = None,
    ) -> None:
        self.field = field
        merged = dict(details or {})
        if field:
            merged["field"] = field
        super().__init__(message, status_code=400, code="VALIDATION_ERROR", details=merged)


class NotFoundError(TenxCardsError):
    """Resource not found error.

    Also raised when the resource exists but belongs to another user, so the
    API never reveals whether an id exists.
    """

    def __init__(self, message: str = "Resource not found") -> None:
        """Initialize with message and 404 status code."""
        super().__init__(message, status_code=404, code="NOT_FOUND")


class FlashcardNotFoundError(NotFoundError):
    """Flashcard not found error."""

    def __init__(self, flashcard_id: object | None = None) -> None:
        self.flashcard_id = flashcard_id
        if flashcard_id is not None:
            super().__init__(f"Flashcard with id {flashcard_id} not found")
        else:
            super().__init__("Flashcard not found")


class GenerationNotFoundError(NotFoundError):
    """AI generation not found (or not owned by the caller)."""

    def __init__(self, generation_id: object | None = None) -> None:
        self.generation_id = generation_id
        if generation_id is not None:
            super().__init__(f"AI generation with id {generation_id} not found")
        else:
            super().__init__("AI generation not found")


class ConflictError(TenxCardsError):
    """The requested change conflicts with the current state of the resource."""

    def __init__(self, message: str) -> None:
        super().__init__(message, status_code=409, code="CONFLICT")


class GenerationAlreadyAcceptedError(ConflictError):
    """A generation can only be accepted once."""

    def __init__(self, generation_id: object) -> None:
        self.generation_id = generation_id
        super().__init__(f"AI generation {generation_id} has already been accepted")


class FeatureDisabledError(TenxCardsError):
    """Raised by route guards when a feature flag is off."""

    def __init__(self, feature: str, message: str) -> None:
        self.feature = feature
        super().__init__(
            message,
            status_code=403,
            code="FEATURE_DISABLED",
            details={"feature": feature},
        )


class DatabaseError(TenxCardsError):
    """Persistence failure not covered by a more specific error.

    ``details`` carries internal context for logs only; the API answers with
    the generic message.
    """

    def __init__(
        self,
        message: str = "A database error occurred",
        details: dict[str, object] | None = None,
    ) -> None:
        super().__init__(message, status_code=500, code="DATABASE_ERROR", details=details)


CredentialsException = HTTPException(
    status_code=status.HTTP_401_UNAUTHORIZED,
    detail="Could not validate credentials",
    headers={"WWW-Authenticate": "Bearer"},
)
