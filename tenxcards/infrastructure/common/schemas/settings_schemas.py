from datetime import datetime

from pydantic import BaseModel, Field


class AppSettingsResponse(BaseModel):
    """Schema for returning public application settings."""

    environment: str = Field(..., description="Feature flag environment")
    feature_flags: dict[str, bool] = Field(..., description="All feature flags")


class HealthResponse(BaseModel):
    """Schema for the health check."""

    status: str
    timestamp: datetime
    uptime: float = Field(..., description="Seconds since the process started")
    environment: str
    version: str
    service: str
