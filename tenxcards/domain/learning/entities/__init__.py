from .ai_generation import AIGeneration
from .flashcard import Flashcard

__all__ = ["AIGeneration", "Flashcard"]
