"""Tests for FlashcardUseCase with an in-memory repository."""

import uuid
from datetime import UTC, datetime

import pytest

from tenxcards.application.common.pagination import Pagination
from tenxcards.application.learning.use_cases.flashcard_use_case import FlashcardUseCase
from tenxcards.domain.common.value_objects.ids import FlashcardId, UserId
from tenxcards.domain.learning.entities.flashcard import Flashcard
from tenxcards.domain.learning.value_objects import FlashcardSourceType
from tenxcards.exceptions import FlashcardNotFoundError, NotFoundError, ValidationError


class InMemoryFlashcardRepository:
    def __init__(self) -> None:
        self.cards: dict[FlashcardId, Flashcard] = {}
        self.deleted_batches: list[list[FlashcardId]] = []

    def add(self, user_id: int, source_type: FlashcardSourceType) -> Flashcard:
        now = datetime.now(UTC)
        card = Flashcard.create_with_id(
            id=FlashcardId.generate(),
            user_id=UserId(user_id),
            front="Front",
            back="Back",
            source_type=source_type,
            created_at=now,
            updated_at=now,
        )
        self.cards[card.id] = card
        return card

    def find_by_id(self, flashcard_id: FlashcardId, user_id: UserId) -> Flashcard | None:
        card = self.cards.get(flashcard_id)
        return card if card is not None and card.user_id == user_id else None

    def find_page(
        self,
        user_id: UserId,
        pagination: Pagination,
        source_type: FlashcardSourceType | None = None,
    ) -> tuple[list[Flashcard], int]:
        matching = [
            c
            for c in self.cards.values()
            if c.user_id == user_id and (source_type is None or c.source_type == source_type)
        ]
        return matching[pagination.offset : pagination.offset + pagination.limit], len(matching)

    def save(self, flashcard: Flashcard) -> Flashcard:
        self.cards[flashcard.id] = flashcard
        return flashcard

    def delete(self, flashcard_id: FlashcardId, user_id: UserId) -> bool:
        return self.delete_many([flashcard_id], user_id) > 0

    def delete_many(self, flashcard_ids: list[FlashcardId], user_id: UserId) -> int:
        self.deleted_batches.append(flashcard_ids)
        owned = [fid for fid in flashcard_ids if self.find_by_id(fid, user_id)]
        for fid in owned:
            del self.cards[fid]
        return len(owned)


@pytest.fixture
def repository() -> InMemoryFlashcardRepository:
    return InMemoryFlashcardRepository()


@pytest.fixture
def use_case(repository: InMemoryFlashcardRepository) -> FlashcardUseCase:
    return FlashcardUseCase(flashcard_repository=repository)


def test_list_reports_totals(
    use_case: FlashcardUseCase, repository: InMemoryFlashcardRepository
) -> None:
    for _ in range(5):
        repository.add(1, FlashcardSourceType.AI)
    repository.add(1, FlashcardSourceType.MANUAL)
    repository.add(2, FlashcardSourceType.AI)

    result = use_case.list_flashcards(1, page=2, page_size=2, source_type=FlashcardSourceType.AI)

    assert len(result.items) == 2
    assert result.total_items == 5
    assert result.total_pages == 3


@pytest.mark.parametrize(("page", "page_size"), [(0, 20), (1, 0), (1, 101)])
def test_list_rejects_bad_pagination(use_case: FlashcardUseCase, page: int, page_size: int) -> None:
    with pytest.raises(ValidationError):
        use_case.list_flashcards(1, page=page, page_size=page_size)


def test_update_marks_ai_card_as_edited(
    use_case: FlashcardUseCase, repository: InMemoryFlashcardRepository
) -> None:
    card = repository.add(1, FlashcardSourceType.AI)

    updated = use_case.update_flashcard(card.id.value, 1, "New front", "New back")

    assert updated.source_type is FlashcardSourceType.AI_EDITED
    assert (updated.front, updated.back) == ("New front", "New back")


def test_update_other_users_card(
    use_case: FlashcardUseCase, repository: InMemoryFlashcardRepository
) -> None:
    card = repository.add(2, FlashcardSourceType.AI)

    with pytest.raises(FlashcardNotFoundError):
        use_case.update_flashcard(card.id.value, 1, "New front", "New back")
    assert repository.cards[card.id].source_type is FlashcardSourceType.AI


def test_delete_missing_card(use_case: FlashcardUseCase) -> None:
    with pytest.raises(FlashcardNotFoundError):
        use_case.delete_flashcard(uuid.uuid4(), 1)


def test_bulk_delete_deduplicates_ids(
    use_case: FlashcardUseCase, repository: InMemoryFlashcardRepository
) -> None:
    card = repository.add(1, FlashcardSourceType.MANUAL)

    deleted = use_case.bulk_delete_flashcards([card.id.value, card.id.value], 1)

    assert deleted == 1
    assert repository.deleted_batches == [[card.id]]


def test_bulk_delete_limits(use_case: FlashcardUseCase) -> None:
    with pytest.raises(ValidationError):
        use_case.bulk_delete_flashcards([], 1)
    with pytest.raises(ValidationError):
        use_case.bulk_delete_flashcards([uuid.uuid4() for _ in range(101)], 1)


def test_bulk_delete_nothing_owned(
    use_case: FlashcardUseCase, repository: InMemoryFlashcardRepository
) -> None:
    card = repository.add(2, FlashcardSourceType.MANUAL)

    with pytest.raises(NotFoundError):
        use_case.bulk_delete_flashcards([card.id.value], 1)
