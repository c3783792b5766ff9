"""Errors raised by the flashcard generation client.

Each error carries a ``retryable`` flag; the retry loop reads that flag and
nothing else.
"""

from tenxcards.exceptions import TenxCardsError

RETRYABLE_STATUS_CODES = frozenset({429, 503})


class GenerationError(TenxCardsError):
    """Base exception for generation client failures."""

    retryable: bool = False

    def __init__(
        self,
        message: str,
        status_code: int = 502,
        code: str = "GENERATION_ERROR",
        details: dict[str, object] | None = None,
    ) -> None:
        super().__init__(message, status_code=status_code, code=code, details=details)


class GenerationConfigError(GenerationError):
    """Client is not configured (e.g. missing API key)."""

    def __init__(self, message: str) -> None:
        super().__init__(message, status_code=500, code="GENERATION_CONFIG_ERROR")


class GenerationNetworkError(GenerationError):
    """Transport-level failure talking to the model provider."""

    retryable = True

    def __init__(self, message: str, details: dict[str, object] | None = None) -> None:
        super().__init__(message, status_code=502, code="GENERATION_NETWORK_ERROR", details=details)


class GenerationTimeoutError(GenerationError):
    """A single attempt exceeded its time limit."""

    retryable = True

    def __init__(self, timeout_seconds: float) -> None:
        self.timeout_seconds = timeout_seconds
        super().__init__(
            f"AI response timed out after {timeout_seconds:g}s",
            status_code=504,
            code="GENERATION_TIMEOUT",
        )


class GenerationApiError(GenerationError):
    """The provider answered with a non-2xx status.

    Only rate limiting (429) and service unavailable (503) are retried.
    """

    def __init__(self, message: str, status_code: int) -> None:
        self.upstream_status = status_code
        self.retryable = status_code in RETRYABLE_STATUS_CODES
        super().__init__(
            message,
            status_code=503 if self.retryable else 502,
            code=f"GENERATION_API_{status_code}",
            details={"upstream_status": status_code},
        )


class GenerationParseError(GenerationError):
    """The provider answered but the content could not be turned into proposals."""

    def __init__(self, message: str, details: dict[str, object] | None = None) -> None:
        super().__init__(message, status_code=502, code="GENERATION_PARSE_ERROR", details=details)
