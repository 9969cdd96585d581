"""
Conversions from canonical records to API responses.
"""
from typing import Dict, Optional

from vocab_trainer.schemas.auth import UserResponse
from vocab_trainer.schemas.card import CardResponse
from vocab_trainer.schemas.records import CardRecord, UserRecord
from vocab_trainer.services.repository import StudyRepository


def set_titles(repository: StudyRepository) -> Dict[str, str]:
    """Map of set id to display title."""
    return {word_set.id: word_set.title for word_set in repository.load_sets()}


def card_response(card: CardRecord, titles: Optional[Dict[str, str]] = None) -> CardResponse:
    return CardResponse(
        id=card.id,
        term=card.term,
        definition=card.definition,
        example=card.example,
        language=card.language,
        set_id=card.set_id,
        set_title=(titles or {}).get(card.set_id) if card.set_id else None,
        box=card.box,
        next_review=card.next_review,
        created_at=card.created_at,
    )


def user_response(user: UserRecord) -> UserResponse:
    return UserResponse.model_validate(user)
