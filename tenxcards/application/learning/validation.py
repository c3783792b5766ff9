"""Input checks shared by the generation use case and client."""

from tenxcards.constants import GENERATION_INPUT_MAX_LENGTH, GENERATION_INPUT_MIN_LENGTH
from tenxcards.exceptions import ValidationError


def validate_input_text(input_text: str) -> str:
    """
    Trim source text and check its length.

    Returns:
        The trimmed text

    Raises:
        ValidationError: If the trimmed text is outside 1000-10000 characters
    """
    text = input_text.strip()
    if len(text) < GENERATION_INPUT_MIN_LENGTH or len(text) > GENERATION_INPUT_MAX_LENGTH:
        raise ValidationError(
            f"Input text must be between {GENERATION_INPUT_MIN_LENGTH} and "
            f"{GENERATION_INPUT_MAX_LENGTH} characters",
            field="input_text",
            details={"length": len(text)},
        )
    return text
