"""
Application constants.

This module contains constants used throughout the application.
"""

# Flashcard content limits
FLASHCARD_FRONT_MAX_LENGTH = 300
FLASHCARD_BACK_MAX_LENGTH = 600

# AI generation input limits (characters, after trimming)
GENERATION_INPUT_MIN_LENGTH = 1000
GENERATION_INPUT_MAX_LENGTH = 10000

# Number of proposals a single generation may yield or accept
GENERATION_MIN_PROPOSALS = 1
GENERATION_MAX_PROPOSALS = 10

# Range requested from the model in the structured output schema
GENERATION_REQUESTED_MIN_ITEMS = 4
GENERATION_REQUESTED_MAX_ITEMS = 10

# Model identifier recorded on every generation row
GENERATION_MODEL_NAME = "gpt-4o-mini"

# Listing
DEFAULT_PAGE_SIZE = 20
MAX_PAGE_SIZE = 100
MAX_BULK_DELETE_IDS = 100

SERVICE_NAME = "10xCards"
