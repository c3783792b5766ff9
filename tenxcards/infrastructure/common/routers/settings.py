from fastapi import APIRouter

from tenxcards.feature_flags import get_environment, get_feature_flags
from tenxcards.infrastructure.common.schemas import AppSettingsResponse

router = APIRouter(prefix="/settings", tags=["settings"])


@router.get("")
async def get_app_settings() -> AppSettingsResponse:
    """
    Get public application settings.

    Returns the flag environment and every feature flag resolved for it, so
    clients can hide disabled features. This endpoint does not require
    authentication. An unknown ENV_NAME answers 500.
    """
    environment = get_environment()
    return AppSettingsResponse(environment=environment, feature_flags=get_feature_flags())
