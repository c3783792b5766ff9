from pydantic import BaseModel, Field

from tenxcards.domain.identity.entities.user import MAX_EMAIL_LENGTH


class UserRegisterRequest(BaseModel):
    """Schema for user registration."""

    email: str = Field(
        ...,
        min_length=3,
        max_length=MAX_EMAIL_LENGTH,
        pattern=r"^[^@\s]+@[^@\s]+\.[^@\s]+$",
        description="Email address for the new account",
    )
    password: str = Field(..., min_length=8, description="Password (min 8 characters)")


class LogoutResponse(BaseModel):
    message: str
