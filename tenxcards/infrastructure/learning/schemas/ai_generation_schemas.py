"""Pydantic schemas for AI generation API request/response validation.

Length and count rules are enforced by the use case (HTTP 400); these schemas
only check the shape of the payload (HTTP 422).
"""

from uuid import UUID

from pydantic import BaseModel, Field


class ProposalSchema(BaseModel):
    """A single flashcard proposal."""

    front: str = Field(..., description="Front of the card (max 300 characters)")
    back: str = Field(..., description="Back of the card (max 600 characters)")


class AIGenerationCreateRequest(BaseModel):
    """Schema for requesting AI flashcard generation."""

    input_text: str = Field(..., description="Source text, 1000-10000 characters after trimming")


class AIGenerationResponse(BaseModel):
    """Schema for a successful generation."""

    generation_id: UUID = Field(..., description="ID of the recorded generation")
    proposals: list[ProposalSchema] = Field(..., description="Proposals to review")


class AIGenerationAcceptRequest(BaseModel):
    """Schema for accepting reviewed proposals."""

    generation_id: UUID = Field(..., description="Generation the proposals came from")
    proposals: list[ProposalSchema] = Field(..., description="1-10 proposals to save")
