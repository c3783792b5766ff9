from pydantic import BaseModel


class ErrorResponse(BaseModel):
    """Body returned for handled errors."""

    detail: str
    code: str
    details: dict[str, object] | None = None
