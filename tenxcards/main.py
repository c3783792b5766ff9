"""FastAPI application entry point."""

from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

import structlog
from fastapi import FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from slowapi import _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded

from tenxcards.config import configure_logging, get_settings
from tenxcards.database import dispose_engine, initialize_database
from tenxcards.domain.common.exceptions import DomainError, EntityNotFoundError
from tenxcards.exceptions import TenxCardsError
from tenxcards.infrastructure.ai.openrouter_client import close_openrouter_client
from tenxcards.infrastructure.common.rate_limit import limiter
from tenxcards.infrastructure.common.routers import health, settings as settings_router
from tenxcards.infrastructure.common.schemas import ErrorResponse
from tenxcards.infrastructure.identity.routers import auth
from tenxcards.infrastructure.learning.routers import ai_generations, flashcards

settings = get_settings()
configure_logging(settings.ENVIRONMENT)
logger = structlog.get_logger(__name__)


def error_response(status_code: int, body: ErrorResponse) -> JSONResponse:
    return JSONResponse(
        status_code=status_code, content=body.model_dump(mode="json", exclude_none=True)
    )


@asynccontextmanager
async def lifespan(_app: FastAPI) -> AsyncGenerator[None, None]:
    """Set up the database on startup and release shared clients on shutdown."""
    initialize_database(settings)
    logger.info("application_started", environment=settings.ENVIRONMENT)
    yield
    await close_openrouter_client()
    dispose_engine()
    logger.info("application_stopped")


app = FastAPI(
    title=settings.PROJECT_NAME,
    version=settings.VERSION,
    docs_url=f"{settings.API_V1_PREFIX}/docs",
    redoc_url=f"{settings.API_V1_PREFIX}/redoc",
    openapi_url=f"{settings.API_V1_PREFIX}/openapi.json",
    lifespan=lifespan,
)

app.state.limiter = limiter
app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)  # type: ignore[arg-type]

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(TenxCardsError)
async def tenxcards_error_handler(request: Request, exc: TenxCardsError) -> JSONResponse:
    """Answer application errors with their status and machine-readable code."""
    body = ErrorResponse(detail=exc.message, code=exc.code)
    if exc.status_code >= status.HTTP_500_INTERNAL_SERVER_ERROR:
        # Internal context goes to the log only
        logger.error(
            "request_failed",
            path=request.url.path,
            code=exc.code,
            error=exc.message,
            details=exc.details,
        )
    elif exc.details:
        body.details = exc.details
    return error_response(exc.status_code, body)


@app.exception_handler(DomainError)
async def domain_error_handler(request: Request, exc: DomainError) -> JSONResponse:
    """Answer domain rule violations with 400 (404 for missing entities)."""
    if isinstance(exc, EntityNotFoundError):
        return error_response(
            status.HTTP_404_NOT_FOUND, ErrorResponse(detail=exc.message, code="NOT_FOUND")
        )
    logger.info("domain_rule_rejected", path=request.url.path, error=exc.message)
    body = ErrorResponse(detail=exc.message, code="VALIDATION_ERROR", details=exc.details or None)
    return error_response(status.HTTP_400_BAD_REQUEST, body)


@app.exception_handler(Exception)
async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.error(
        "unhandled_exception",
        path=request.url.path,
        error_type=type(exc).__name__,
        error=str(exc),
        exc_info=exc,
    )
    return error_response(
        status.HTTP_500_INTERNAL_SERVER_ERROR,
        ErrorResponse(
            detail="An unexpected error occurred. Please try again later.",
            code="INTERNAL_ERROR",
        ),
    )


app.include_router(health.router)
app.include_router(settings_router.router, prefix=settings.API_V1_PREFIX)
app.include_router(auth.router, prefix=settings.API_V1_PREFIX)
app.include_router(ai_generations.router, prefix=settings.API_V1_PREFIX)
app.include_router(flashcards.router, prefix=settings.API_V1_PREFIX)


@app.get("/")
async def root() -> dict[str, str]:
    """Root endpoint."""
    return {"message": "Welcome to 10xCards API"}


@app.get(f"{settings.API_V1_PREFIX}/")
async def api_root() -> dict[str, str]:
    """API v1 root endpoint."""
    return {
        "message": "10xCards API v1",
        "version": settings.VERSION,
        "docs": f"{settings.API_V1_PREFIX}/docs",
    }
