"""
Demo content for an empty store: one set, three words and an admin account.
"""
import logging
from typing import Dict

from vocab_trainer.models.user import User
from vocab_trainer.schemas.records import ROLE_ADMIN
from vocab_trainer.services.repository import StudyRepository

logger = logging.getLogger(__name__)

DEFAULT_BOOK = "Book A"
DEFAULT_UNIT = 1
DEFAULT_CARDS = [
    {"term": "meticulous", "definition": "very careful; precise", "example": "She kept meticulous notes."},
    {"term": "inevitable", "definition": "certain to happen", "example": "Rain felt inevitable."},
    {"term": "coherent", "definition": "logical and consistent", "example": "A coherent essay."},
]
DEFAULT_ADMIN = {"name": "Admin", "email": "admin@example.com", "password": "admin"}


def seed_default_data(repository: StudyRepository, now: int, with_admin: bool = True) -> Dict[str, int]:
    """
    Populate missing demo content.

    Sets and cards are added only when the store has no sets; the admin only
    when there are no users.

    Returns:
        Dict with counts of created items
    """
    created = {"sets": 0, "cards": 0, "users": 0}

    if not repository.load_sets():
        word_set = repository.add_set(DEFAULT_BOOK, DEFAULT_UNIT)
        created["sets"] += 1
        for card in DEFAULT_CARDS:
            repository.add_card(
                term=card["term"],
                definition=card["definition"],
                example=card["example"],
                language="EN",
                set_id=word_set.id,
                next_review=now,
            )
            created["cards"] += 1

    if with_admin and not repository.load_users():
        repository.add_user(
            name=DEFAULT_ADMIN["name"],
            email=DEFAULT_ADMIN["email"],
            password_hash=User.hash_password(DEFAULT_ADMIN["password"]),
            role=ROLE_ADMIN,
        )
        created["users"] += 1

    if any(created.values()):
        repository.commit()
        logger.info(
            f"Seeded default data: {created['sets']} set(s), "
            f"{created['cards']} card(s), {created['users']} user(s)"
        )
    return created
