"""Common infrastructure schemas."""

from tenxcards.infrastructure.common.schemas.error_schemas import ErrorResponse
from tenxcards.infrastructure.common.schemas.settings_schemas import (
    AppSettingsResponse,
    HealthResponse,
)

__all__ = [
    "AppSettingsResponse",
    "ErrorResponse",
    "HealthResponse",
]
