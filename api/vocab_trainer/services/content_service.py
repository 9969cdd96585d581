"""
Content management: word sets and cards.
"""
import logging
from collections import Counter
from typing import List, Optional, Tuple

from vocab_trainer.core.exceptions import NotFoundError, ValidationError
from vocab_trainer.schemas.records import CardRecord, SetRecord
from vocab_trainer.services.repository import StudyRepository

logger = logging.getLogger(__name__)


def list_sets_with_counts(repository: StudyRepository) -> List[Tuple[SetRecord, int]]:
    """Sets (most recent first) with the number of cards in each."""
    counts = Counter(card.set_id for card in repository.load_cards())
    return [(word_set, counts.get(word_set.id, 0)) for word_set in repository.load_sets()]


def create_set(repository: StudyRepository, book: str, unit: int) -> SetRecord:
    book = book.strip()
    if not book:
        raise ValidationError("Book must not be empty")

    word_set = repository.add_set(book=book, unit=unit)
    repository.commit()

    logger.info(f"Created set {word_set.id} ({word_set.title})")
    return word_set


def delete_set(repository: StudyRepository, set_id: str) -> int:
    """Delete a set together with its cards (and their progress)."""
    if not repository.get_set(set_id):
        raise NotFoundError(f"Set with id {set_id} not found")

    cards_deleted = repository.delete_set(set_id)
    repository.commit()

    logger.info(f"Deleted set {set_id} with {cards_deleted} card(s)")
    return cards_deleted


def add_card(
    repository: StudyRepository,
    set_id: str,
    term: str,
    definition: str,
    now: int,
    example: Optional[str] = None,
    language: str = "EN",
) -> CardRecord:
    """Add a word to a set; new cards start in box 1 and are due immediately."""
    if not repository.get_set(set_id):
        raise NotFoundError(f"Set with id {set_id} not found")

    card = repository.add_card(
        term=term,
        definition=definition,
        set_id=set_id,
        example=example or None,
        language=language,
        next_review=now,
    )
    repository.commit()

    logger.info(f"Added card {card.id} ('{card.term}') to set {set_id}")
    return card
