"""OpenRouter chat-completions client for flashcard generation."""

import asyncio
import json
import re
import time
from collections.abc import Awaitable, Callable
from typing import Any, Self

import httpx
import structlog

from tenxcards.application.learning.validation import validate_input_text
from tenxcards.config import Settings, get_settings
from tenxcards.domain.common.exceptions import ValidationError as DomainValidationError
from tenxcards.domain.learning.value_objects import Proposal
from tenxcards.infrastructure.ai.exceptions import (
    GenerationApiError,
    GenerationConfigError,
    GenerationNetworkError,
    GenerationParseError,
    GenerationTimeoutError,
)
from tenxcards.infrastructure.ai.prompts import (
    FLASHCARD_SYSTEM_PROMPT,
    GENERATION_MAX_TOKENS,
    GENERATION_TEMPERATURE,
    flashcards_response_format,
)
from tenxcards.infrastructure.ai.retry import retry_with_backoff

logger = structlog.get_logger(__name__)

_CODE_FENCE_RE = re.compile(r"^```[a-zA-Z0-9_-]*\s*\n?(.*?)\n?\s*```$", re.DOTALL)
CONTENT_PREVIEW_LENGTH = 200


def strip_code_fences(content: str) -> str:
    """Remove a surrounding Markdown code fence, if present."""
    stripped = content.strip()
    match = _CODE_FENCE_RE.match(stripped)
    if match:
        return match.group(1).strip()
    return stripped


def parse_proposals(content: str) -> list[Proposal]:
    """
    Turn the model's message content into proposals.

    Entries with a missing, empty or over-long front/back are dropped.

    Raises:
        GenerationParseError: If the content is not a JSON object with a
            ``flashcards`` list, or no usable entry remains
    """
    try:
        data = json.loads(strip_code_fences(content))
    except json.JSONDecodeError as e:
        raise GenerationParseError(
            "AI response is not valid JSON",
            details={"content_preview": content[:CONTENT_PREVIEW_LENGTH]},
        ) from e

    if not isinstance(data, dict) or not isinstance(data.get("flashcards"), list):
        raise GenerationParseError("AI response is missing the flashcards list")

    proposals: list[Proposal] = []
    for index, item in enumerate(data["flashcards"]):
        if not isinstance(item, dict):
            logger.warning("dropped_invalid_proposal", index=index, reason="not an object")
            continue
        try:
            proposals.append(Proposal.from_dict(item))
        except DomainValidationError as e:
            logger.warning("dropped_invalid_proposal", index=index, reason=e.message)

    if not proposals:
        raise GenerationParseError("AI response contained no valid flashcards")

    return proposals


class OpenRouterClient:
    """
    Generates flashcard proposals through the OpenRouter API.

    Each call is retried on timeouts, transport failures and 429/503
    responses with exponential backoff.
    """

    def __init__(
        self,
        api_key: str | None,
        *,
        model: str = "openai/gpt-4o-mini",
        base_url: str = "https://openrouter.ai/api/v1",
        timeout_seconds: float = 30.0,
        max_attempts: int = 3,
        base_delay: float = 1.0,
        site_url: str | None = None,
        site_name: str | None = None,
        debug: bool = False,
        transport: httpx.AsyncBaseTransport | None = None,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
    ) -> None:
        if not api_key:
            raise GenerationConfigError("OPENROUTER_API_KEY is not configured")

        self.model = model
        self.timeout_seconds = timeout_seconds
        self.max_attempts = max_attempts
        self.base_delay = base_delay
        self.debug = debug
        self._sleep = sleep

        headers = {
            "Authorization": f"Bearer {api_key}",
            "Content-Type": "application/json",
        }
        if site_url:
            headers["HTTP-Referer"] = site_url
        if site_name:
            headers["X-Title"] = site_name

        self._http = httpx.AsyncClient(
            base_url=base_url.rstrip("/"),
            headers=headers,
            timeout=httpx.Timeout(timeout_seconds),
            transport=transport,
        )

    @classmethod
    def from_settings(cls, settings: Settings) -> Self:
        """Build a client from application settings."""
        return cls(
            settings.OPENROUTER_API_KEY,
            model=settings.OPENROUTER_MODEL,
            base_url=settings.OPENROUTER_BASE_URL,
            timeout_seconds=settings.OPENROUTER_TIMEOUT_SECONDS,
            max_attempts=settings.OPENROUTER_MAX_ATTEMPTS,
            base_delay=settings.OPENROUTER_RETRY_BASE_DELAY,
            site_url=settings.OPENROUTER_SITE_URL,
            site_name=settings.OPENROUTER_SITE_NAME,
            debug=settings.openrouter_debug_enabled,
        )

    async def generate_flashcards(self, input_text: str) -> list[Proposal]:
        """
        Generate flashcard proposals from source text.

        Args:
            input_text: Source text; surrounding whitespace is ignored

        Returns:
            Validated proposals (at least one)

        Raises:
            ValidationError: If the trimmed text is outside 1000-10000 characters
            GenerationError: Subclass describing the final failure
        """
        text = validate_input_text(input_text)

        return await retry_with_backoff(
            lambda: self._attempt(text),
            max_attempts=self.max_attempts,
            base_delay=self.base_delay,
            sleep=self._sleep,
        )

    async def _attempt(self, text: str) -> list[Proposal]:
        started = time.perf_counter()
        try:
            async with asyncio.timeout(self.timeout_seconds):
                response = await self._http.post(
                    "/chat/completions", json=self._build_payload(text)
                )
        except (TimeoutError, httpx.TimeoutException) as e:
            raise GenerationTimeoutError(self.timeout_seconds) from e
        except httpx.TransportError as e:
            raise GenerationNetworkError(
                "Could not reach the AI service", details={"error": str(e)}
            ) from e

        elapsed_ms = int((time.perf_counter() - started) * 1000)

        if not response.is_success:
            raise GenerationApiError(self._error_message(response), response.status_code)

        try:
            body = response.json()
            content = body["choices"][0]["message"]["content"]
        except (ValueError, KeyError, IndexError, TypeError) as e:
            raise GenerationParseError("Unexpected AI response structure") from e

        if not isinstance(content, str):
            raise GenerationParseError("AI response content is empty")

        if self.debug:
            logger.info(
                "generation_response_received",
                model=body.get("model", self.model),
                usage=body.get("usage"),
                content_preview=content[:CONTENT_PREVIEW_LENGTH],
                elapsed_ms=elapsed_ms,
            )

        return parse_proposals(content)

    def _build_payload(self, text: str) -> dict[str, Any]:
        return {
            "model": self.model,
            "messages": [
                {"role": "system", "content": FLASHCARD_SYSTEM_PROMPT},
                {"role": "user", "content": text},
            ],
            "response_format": flashcards_response_format(),
            "temperature": GENERATION_TEMPERATURE,
            "max_tokens": GENERATION_MAX_TOKENS,
        }

    @staticmethod
    def _error_message(response: httpx.Response) -> str:
        try:
            error = response.json().get("error")
        except (ValueError, AttributeError):
            error = None
        if isinstance(error, dict) and isinstance(error.get("message"), str):
            return error["message"]
        return f"AI service returned HTTP {response.status_code}"

    async def close(self) -> None:
        """Release the underlying HTTP client."""
        await self._http.aclose()

    async def __aenter__(self) -> Self:
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.close()


# Application-scoped client, created on first use
_client: OpenRouterClient | None = None


def get_openrouter_client() -> OpenRouterClient:
    """Get the shared client, building it from settings on first use."""
    global _client  # noqa: PLW0603
    if _client is None:
        _client = OpenRouterClient.from_settings(get_settings())
    return _client


async def close_openrouter_client() -> None:
    """Close the shared client on shutdown."""
    global _client  # noqa: PLW0603
    if _client is not None:
        await _client.close()
        _client = None
