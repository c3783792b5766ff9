"""Tests for the generation retry loop."""

import pytest

from tenxcards.infrastructure.ai.exceptions import (
    GenerationApiError,
    GenerationConfigError,
    GenerationNetworkError,
    GenerationParseError,
    GenerationTimeoutError,
)
from tenxcards.infrastructure.ai.retry import backoff_delay, is_retryable, retry_with_backoff


class Recorder:
    """Collects sleep delays instead of sleeping."""

    def __init__(self) -> None:
        self.delays: list[float] = []

    async def __call__(self, delay: float) -> None:
        self.delays.append(delay)


def failing_then(results: list[object]):  # noqa: ANN201
    """Operation yielding each result in turn, raising the exceptions."""
    calls = {"count": 0}

    async def operation() -> object:
        result = results[calls["count"]]
        calls["count"] += 1
        if isinstance(result, Exception):
            raise result
        return result

    operation.calls = calls  # type: ignore[attr-defined]
    return operation


@pytest.mark.parametrize(
    ("error", "expected"),
    [
        (GenerationTimeoutError(30), True),
        (GenerationNetworkError("connection reset"), True),
        (GenerationApiError("rate limited", 429), True),
        (GenerationApiError("unavailable", 503), True),
        (GenerationApiError("bad key", 401), False),
        (GenerationApiError("server error", 500), False),
        (GenerationParseError("not json"), False),
        (GenerationConfigError("no key"), False),
        (ValueError("plain"), False),
    ],
)
def test_is_retryable(error: Exception, expected: bool) -> None:
    assert is_retryable(error) is expected


def test_backoff_doubles() -> None:
    assert [backoff_delay(n, 1.0) for n in (1, 2, 3)] == [1.0, 2.0, 4.0]
    assert backoff_delay(2, 0.5) == 1.0


async def test_two_timeouts_then_success() -> None:
    sleep = Recorder()
    operation = failing_then([GenerationTimeoutError(30), GenerationTimeoutError(30), "ok"])

    result = await retry_with_backoff(operation, max_attempts=3, base_delay=1.0, sleep=sleep)

    assert result == "ok"
    assert operation.calls["count"] == 3
    assert sleep.delays == [1.0, 2.0]


async def test_non_retryable_error_fails_immediately() -> None:
    sleep = Recorder()
    operation = failing_then([GenerationApiError("Invalid API key", 401), "ok"])

    with pytest.raises(GenerationApiError) as exc_info:
        await retry_with_backoff(operation, sleep=sleep)

    assert exc_info.value.upstream_status == 401
    assert operation.calls["count"] == 1
    assert sleep.delays == []


async def test_exhausted_attempts_raise_last_error() -> None:
    sleep = Recorder()
    last = GenerationApiError("still unavailable", 503)
    operation = failing_then([GenerationNetworkError("reset"), GenerationTimeoutError(30), last])

    with pytest.raises(GenerationApiError) as exc_info:
        await retry_with_backoff(operation, max_attempts=3, base_delay=0.5, sleep=sleep)

    assert exc_info.value is last
    assert sleep.delays == [0.5, 1.0]


async def test_single_attempt_never_sleeps() -> None:
    sleep = Recorder()
    operation = failing_then([GenerationTimeoutError(30)])

    with pytest.raises(GenerationTimeoutError):
        await retry_with_backoff(operation, max_attempts=1, sleep=sleep)

    assert sleep.delays == []


async def test_rejects_zero_attempts() -> None:
    with pytest.raises(ValueError, match="at least 1"):
        await retry_with_backoff(failing_then(["ok"]), max_attempts=0)
