"""Prompt and structured-output schema for flashcard generation."""

from typing import Any

from tenxcards.constants import (
    FLASHCARD_BACK_MAX_LENGTH,
    FLASHCARD_FRONT_MAX_LENGTH,
    GENERATION_REQUESTED_MAX_ITEMS,
    GENERATION_REQUESTED_MIN_ITEMS,
)

FLASHCARD_SYSTEM_PROMPT = f"""You are an expert at creating study flashcards.
From the text provided by the user, create between {GENERATION_REQUESTED_MIN_ITEMS} and \
{GENERATION_REQUESTED_MAX_ITEMS} flashcards that capture its most important facts and concepts.

Rules:
- Each flashcard has a "front" (a question or prompt) and a "back" (the answer)
- The front must be at most {FLASHCARD_FRONT_MAX_LENGTH} characters
- The back must be at most {FLASHCARD_BACK_MAX_LENGTH} characters
- Each flashcard tests exactly one idea
- Write the flashcards in the same language as the source text
- Do not invent information that is not in the text

Respond only with JSON matching the requested schema."""

GENERATION_TEMPERATURE = 0.7
GENERATION_MAX_TOKENS = 4000


def flashcards_response_format() -> dict[str, Any]:
    """Strict JSON schema passed as ``response_format`` to the chat completions API."""
    return {
        "type": "json_schema",
        "json_schema": {
            "name": "flashcards",
            "strict": True,
            "schema": {
                "type": "object",
                "properties": {
                    "flashcards": {
                        "type": "array",
                        "minItems": GENERATION_REQUESTED_MIN_ITEMS,
                        "maxItems": GENERATION_REQUESTED_MAX_ITEMS,
                        "items": {
                            "type": "object",
                            "properties": {
                                "front": {
                                    "type": "string",
                                    "maxLength": FLASHCARD_FRONT_MAX_LENGTH,
                                },
                                "back": {
                                    "type": "string",
                                    "maxLength": FLASHCARD_BACK_MAX_LENGTH,
                                },
                            },
                            "required": ["front", "back"],
                            "additionalProperties": False,
                        },
                    }
                },
                "required": ["flashcards"],
                "additionalProperties": False,
            },
        },
    }
