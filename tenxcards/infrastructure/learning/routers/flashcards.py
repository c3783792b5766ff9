"""API routes for flashcard management."""

from typing import Annotated
from uuid import UUID

import structlog
from fastapi import APIRouter, Depends, HTTPException, Query, Response, status

from tenxcards.application.learning.use_cases.flashcard_use_case import FlashcardUseCase
from tenxcards.constants import DEFAULT_PAGE_SIZE, MAX_PAGE_SIZE
from tenxcards.core import container
from tenxcards.domain.common.exceptions import DomainError
from tenxcards.domain.learning.entities.flashcard import Flashcard as FlashcardEntity
from tenxcards.domain.learning.value_objects import FlashcardSourceType
from tenxcards.exceptions import TenxCardsError
from tenxcards.infrastructure.common.dependencies import feature_guard
from tenxcards.infrastructure.common.di import inject_use_case
from tenxcards.infrastructure.identity.dependencies import CurrentUser
from tenxcards.infrastructure.learning.schemas import (
    Flashcard,
    FlashcardBulkDeleteRequest,
    FlashcardListResponse,
    FlashcardUpdateRequest,
    FlashcardUpdateResponse,
    PaginationSchema,
)

logger = structlog.get_logger(__name__)

router = APIRouter(prefix="/flashcards", tags=["flashcards"])


def to_flashcard_schema(entity: FlashcardEntity) -> Flashcard:
    """Build the API schema from a domain flashcard."""
    if entity.created_at is None or entity.updated_at is None:
        raise ValueError(f"Flashcard {entity.id} has not been persisted")
    return Flashcard(
        id=entity.id.value,
        front=entity.front,
        back=entity.back,
        source_type=entity.source_type,
        created_at=entity.created_at,
        updated_at=entity.updated_at,
    )


def _unexpected(action: str, e: Exception) -> HTTPException:
    logger.error("flashcard_request_failed", action=action, error=str(e), exc_info=True)
    return HTTPException(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        detail="An unexpected error occurred. Please try again later.",
    )


@router.get(
    "",
    response_model=FlashcardListResponse,
    dependencies=[Depends(feature_guard("flashcards.list"))],
)
def list_flashcards(
    current_user: CurrentUser,
    page: Annotated[int, Query(ge=1)] = 1,
    page_size: Annotated[int, Query(ge=1, le=MAX_PAGE_SIZE)] = DEFAULT_PAGE_SIZE,
    source_type: FlashcardSourceType | None = None,
    use_case: FlashcardUseCase = Depends(inject_use_case(container.flashcard_use_case)),
) -> FlashcardListResponse:
    """
    List the current user's flashcards, newest first.

    Args:
        page: Page number (1-indexed)
        page_size: Items per page (1-100)
        source_type: Optional provenance filter (manual, ai, ai-edited)
    """
    try:
        result = use_case.list_flashcards(
            user_id=current_user.id.value,
            page=page,
            page_size=page_size,
            source_type=source_type,
        )
        return FlashcardListResponse(
            data=[to_flashcard_schema(fc) for fc in result.items],
            pagination=PaginationSchema(
                page=result.page,
                page_size=result.page_size,
                total_items=result.total_items,
                total_pages=result.total_pages,
            ),
        )
    except (TenxCardsError, DomainError):
        raise
    except Exception as e:
        raise _unexpected("list", e) from e


@router.put(
    "/{flashcard_id}",
    response_model=FlashcardUpdateResponse,
    status_code=status.HTTP_200_OK,
    dependencies=[Depends(feature_guard("flashcards.edit"))],
)
def update_flashcard(
    flashcard_id: UUID,
    request: FlashcardUpdateRequest,
    current_user: CurrentUser,
    use_case: FlashcardUseCase = Depends(inject_use_case(container.flashcard_use_case)),
) -> FlashcardUpdateResponse:
    """
    Update a flashcard's front and back.

    AI-generated cards are marked as ai-edited.

    Raises:
        HTTPException: 404 if the flashcard does not exist or belongs to another user
    """
    try:
        flashcard = use_case.update_flashcard(
            flashcard_id=flashcard_id,
            user_id=current_user.id.value,
            front=request.front,
            back=request.back,
        )
        return FlashcardUpdateResponse(flashcard=to_flashcard_schema(flashcard))
    except (TenxCardsError, DomainError):
        raise
    except Exception as e:
        raise _unexpected("update", e) from e


@router.delete(
    "/{flashcard_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response,
    dependencies=[Depends(feature_guard("flashcards.delete"))],
)
def delete_flashcard(
    flashcard_id: UUID,
    current_user: CurrentUser,
    use_case: FlashcardUseCase = Depends(inject_use_case(container.flashcard_use_case)),
) -> Response:
    """Delete a flashcard."""
    try:
        use_case.delete_flashcard(flashcard_id=flashcard_id, user_id=current_user.id.value)
        return Response(status_code=status.HTTP_204_NO_CONTENT)
    except (TenxCardsError, DomainError):
        raise
    except Exception as e:
        raise _unexpected("delete", e) from e


@router.post(
    "/bulk-delete",
    status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response,
    dependencies=[Depends(feature_guard("flashcards.delete"))],
)
def bulk_delete_flashcards(
    request: FlashcardBulkDeleteRequest,
    current_user: CurrentUser,
    use_case: FlashcardUseCase = Depends(inject_use_case(container.flashcard_use_case)),
) -> Response:
    """Delete up to 100 flashcards. IDs that are not the user's are ignored."""
    try:
        use_case.bulk_delete_flashcards(request.ids, user_id=current_user.id.value)
        return Response(status_code=status.HTTP_204_NO_CONTENT)
    except (TenxCardsError, DomainError):
        raise
    except Exception as e:
        raise _unexpected("bulk_delete", e) from e
