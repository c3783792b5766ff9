from typing import Annotated

import structlog
from fastapi import APIRouter, Depends, HTTPException, Request, Response
from fastapi.security import OAuth2PasswordRequestForm
from starlette import status

from tenxcards.application.identity.use_cases.authentication_use_case import (
    AuthenticationUseCase,
)
from tenxcards.application.identity.use_cases.register_user_use_case import RegisterUserUseCase
from tenxcards.config import get_settings
from tenxcards.core import container
from tenxcards.domain.identity.exceptions import EmailAlreadyExistsError, InvalidCredentialsError
from tenxcards.exceptions import ConflictError
from tenxcards.infrastructure.common.dependencies import feature_guard
from tenxcards.infrastructure.common.di import inject_use_case
from tenxcards.infrastructure.common.rate_limit import limiter
from tenxcards.infrastructure.identity.schemas import LogoutResponse, UserRegisterRequest
from tenxcards.infrastructure.identity.services.token_service import TokenWithRefresh

logger = structlog.get_logger(__name__)
router = APIRouter(prefix="/auth", tags=["auth"])

REFRESH_COOKIE_NAME = "refresh_token"
REFRESH_COOKIE_PATH = "/api/v1/auth"


def set_refresh_cookie(response: Response, refresh_token: str) -> None:
    """Set the refresh token as an httpOnly cookie."""
    settings = get_settings()
    response.set_cookie(
        key=REFRESH_COOKIE_NAME,
        value=refresh_token,
        httponly=True,
        secure=settings.COOKIE_SECURE,
        samesite="strict",
        path=REFRESH_COOKIE_PATH,
        max_age=settings.REFRESH_TOKEN_EXPIRE_DAYS * 24 * 60 * 60,
    )


def clear_refresh_cookie(response: Response) -> None:
    """Clear the refresh token cookie."""
    response.delete_cookie(
        key=REFRESH_COOKIE_NAME,
        httponly=True,
        secure=get_settings().COOKIE_SECURE,
        samesite="strict",
        path=REFRESH_COOKIE_PATH,
    )


@router.post("/login", dependencies=[Depends(feature_guard("auth.login"))])
@limiter.limit("5/minute")  # type: ignore[misc]
async def login(
    request: Request,
    response: Response,
    form_data: Annotated[OAuth2PasswordRequestForm, Depends()],
    use_case: AuthenticationUseCase = Depends(inject_use_case(container.authentication_use_case)),
) -> TokenWithRefresh:
    # OAuth2PasswordRequestForm uses 'username' field, but we use it for email
    try:
        _, token_pair = use_case.authenticate_user(form_data.username, form_data.password)
    except InvalidCredentialsError:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Incorrect email or password",
            headers={"WWW-Authenticate": "Bearer"},
        ) from None
    set_refresh_cookie(response, token_pair.refresh_token)
    return token_pair


@router.post(
    "/register",
    status_code=status.HTTP_201_CREATED,
    dependencies=[Depends(feature_guard("auth.register"))],
)
@limiter.limit("5/minute")  # type: ignore[misc]
async def register(
    request: Request,
    response: Response,
    register_data: UserRegisterRequest,
    use_case: RegisterUserUseCase = Depends(inject_use_case(container.register_user_use_case)),
) -> TokenWithRefresh:
    """
    Register a new user account.

    Returns a token pair for immediate login after registration.
    """
    try:
        _, token_pair = use_case.register_user(register_data.email, register_data.password)
    except EmailAlreadyExistsError:
        raise ConflictError("Email already registered") from None
    set_refresh_cookie(response, token_pair.refresh_token)
    return token_pair


@router.post("/logout")
async def logout(response: Response) -> LogoutResponse:
    """
    Log out by clearing the refresh token cookie.

    The access token stays valid until it expires.
    """
    clear_refresh_cookie(response)
    return LogoutResponse(message="Logged out successfully")
