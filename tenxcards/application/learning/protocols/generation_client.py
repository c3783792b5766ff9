from typing import Protocol

from tenxcards.domain.learning.value_objects import Proposal


class GenerationClientProtocol(Protocol):
    async def generate_flashcards(self, input_text: str) -> list[Proposal]: ...
