"""
Persistence interface used by the study core, and the factory that opens the
configured backend.
"""
import logging
from contextlib import contextmanager
from datetime import datetime
from typing import Dict, Iterator, List, Optional, Protocol

from sqlmodel import Session

from vocab_trainer.core import database
from vocab_trainer.core.config import settings
from vocab_trainer.schemas.records import CardRecord, Progress, SetRecord, UserRecord
from vocab_trainer.services.local_repository import LocalStudyRepository
from vocab_trainer.services.sql_repository import SqlStudyRepository

logger = logging.getLogger(__name__)


class StudyRepository(Protocol):
    """
    What the study core needs from a store.

    Scheduling state is read and written through get_progress/set_progress so
    the same code works whether it is kept per user or on the card itself.
    Mutations become durable on commit().
    """

    tracks_progress_per_user: bool

    def load_sets(self) -> List[SetRecord]: ...

    def get_set(self, set_id: str) -> Optional[SetRecord]: ...

    def add_set(self, book: str, unit: int, created_at: Optional[datetime] = None) -> SetRecord: ...

    def delete_set(self, set_id: str) -> int: ...

    def load_cards(self, set_id: Optional[str] = None) -> List[CardRecord]: ...

    def get_card(self, card_id: str) -> Optional[CardRecord]: ...

    def add_card(
        self,
        term: str,
        definition: str,
        set_id: str,
        example: Optional[str] = None,
        language: str = "EN",
        next_review: int = 0,
    ) -> CardRecord: ...

    def persist_card_update(self, card: CardRecord) -> None: ...

    def load_users(self) -> List[UserRecord]: ...

    def get_user(self, user_id: str, for_update: bool = False) -> Optional[UserRecord]: ...

    def find_user_by_email(self, email: str) -> Optional[UserRecord]: ...

    def add_user(self, name: str, email: str, password_hash: str, role: str) -> UserRecord: ...

    def persist_user_update(self, user: UserRecord) -> None: ...

    def load_progress(self, user_id: str) -> Dict[str, Progress]: ...

    def get_progress(self, user_id: str, card_id: str) -> Progress: ...

    def set_progress(self, user_id: str, card_id: str, box: int, next_review: int) -> None: ...

    def has_quiz_answer(self, user_id: str, card_id: str, seed: int) -> bool: ...

    def record_quiz_answer(self, user_id: str, card_id: str, seed: int, correct: bool) -> None: ...

    def commit(self) -> None: ...

    def rollback(self) -> None: ...


@contextmanager
def open_repository() -> Iterator[StudyRepository]:
    """Open the configured backend for one unit of work."""
    if settings.resolved_backend == "sql":
        with Session(database.engine) as session:
            yield SqlStudyRepository(session)
    else:
        with LocalStudyRepository.open(settings.local_store_path) as repository:
            yield repository


def get_repository():
    """Dependency for getting a repository."""
    with open_repository() as repository:
        yield repository
