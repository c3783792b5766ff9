import time
from datetime import UTC, datetime

from fastapi import APIRouter, Response

from tenxcards.config import get_settings
from tenxcards.constants import SERVICE_NAME
from tenxcards.infrastructure.common.schemas import HealthResponse

router = APIRouter(tags=["health"])

_started_at = time.monotonic()


@router.get("/health")
async def health_check(response: Response) -> HealthResponse:
    """Liveness check. Never cached."""
    settings = get_settings()
    response.headers["Cache-Control"] = "no-store, no-cache, must-revalidate"
    return HealthResponse(
        status="ok",
        timestamp=datetime.now(UTC),
        uptime=time.monotonic() - _started_at,
        environment=settings.ENVIRONMENT,
        version=settings.VERSION,
        service=SERVICE_NAME,
    )
