"""API routes for AI flashcard generation."""

import structlog
from fastapi import APIRouter, Depends, HTTPException, Response, status

from tenxcards.application.learning.use_cases.ai_generation_use_case import AIGenerationUseCase
from tenxcards.core import container
from tenxcards.domain.common.exceptions import DomainError
from tenxcards.exceptions import TenxCardsError
from tenxcards.infrastructure.common.dependencies import feature_guard
from tenxcards.infrastructure.common.di import inject_use_case
from tenxcards.infrastructure.identity.dependencies import CurrentUser
from tenxcards.infrastructure.learning.schemas import (
    AIGenerationAcceptRequest,
    AIGenerationCreateRequest,
    AIGenerationResponse,
    ProposalSchema,
)

logger = structlog.get_logger(__name__)

router = APIRouter(
    prefix="/ai/generations",
    tags=["ai"],
    dependencies=[Depends(feature_guard("flashcards.create.ai"))],
)


@router.post("", status_code=status.HTTP_201_CREATED, response_model=AIGenerationResponse)
async def create_generation(
    request: AIGenerationCreateRequest,
    current_user: CurrentUser,
    use_case: AIGenerationUseCase = Depends(inject_use_case(container.ai_generation_use_case)),
) -> AIGenerationResponse:
    """
    Generate flashcard proposals from source text.

    Proposals are not saved as flashcards until accepted.
    """
    try:
        result = await use_case.create_generation(current_user.id.value, request.input_text)
        return AIGenerationResponse(
            generation_id=result.generation_id.value,
            proposals=[ProposalSchema(front=p.front, back=p.back) for p in result.proposals],
        )
    except (TenxCardsError, DomainError):
        raise
    except Exception as e:
        logger.error(
            "ai_generation_request_failed",
            user_id=current_user.id.value,
            error=str(e),
            exc_info=True,
        )
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="An unexpected error occurred. Please try again later.",
        ) from e


@router.post("/accept", status_code=status.HTTP_204_NO_CONTENT, response_class=Response)
def accept_generation(
    request: AIGenerationAcceptRequest,
    current_user: CurrentUser,
    use_case: AIGenerationUseCase = Depends(inject_use_case(container.ai_generation_use_case)),
) -> Response:
    """
    Save reviewed proposals as flashcards.

    A generation can be accepted once; repeating the request answers 409 and
    creates nothing.
    """
    try:
        use_case.accept_generation(
            current_user.id.value,
            request.generation_id,
            [p.model_dump() for p in request.proposals],
        )
        return Response(status_code=status.HTTP_204_NO_CONTENT)
    except (TenxCardsError, DomainError):
        raise
    except Exception as e:
        logger.error(
            "ai_generation_accept_request_failed",
            user_id=current_user.id.value,
            generation_id=str(request.generation_id),
            error=str(e),
            exc_info=True,
        )
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="An unexpected error occurred. Please try again later.",
        ) from e
