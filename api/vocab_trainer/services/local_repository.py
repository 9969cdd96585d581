"""
Local JSON-file persistence for the study core.

Single-user / demo mode: each card carries its own box and next_review, so
progress is shared by everyone using the file. Records written by older
clients (camelCase keys, plain-text passwords) are normalized on load.
"""
import json
import logging
import os
import tempfile
from contextlib import contextmanager
from datetime import datetime, timezone
from pathlib import Path
from threading import Lock
from typing import Any, Dict, Iterator, List, Optional

from vocab_trainer.models.user import User, new_id
from vocab_trainer.schemas.records import (
    ROLE_ADMIN,
    ROLE_STUDENT,
    CardRecord,
    Progress,
    QuizAnswerRecord,
    SetRecord,
    UserRecord,
    set_title,
)
from vocab_trainer.utils.time_utils import as_utc, utc_now

logger = logging.getLogger(__name__)

# One lock per store file: a unit of work holds it from load to commit
_store_locks: Dict[str, Lock] = {}
_locks_guard = Lock()


def _lock_for(path: Path) -> Lock:
    key = str(path.resolve())
    with _locks_guard:
        if key not in _store_locks:
            _store_locks[key] = Lock()
        return _store_locks[key]


def _first(raw: Dict[str, Any], *keys: str, default=None):
    """Value of the first key present (canonical name first, legacy names after)."""
    for key in keys:
        if key in raw and raw[key] is not None:
            return raw[key]
    return default


def _coerce_datetime(value) -> datetime:
    """Accept ISO strings, epoch milliseconds or datetimes; return aware UTC."""
    if value is None:
        return utc_now()
    if isinstance(value, (int, float)):
        return datetime.fromtimestamp(value / 1000, tz=timezone.utc)
    if isinstance(value, str):
        value = datetime.fromisoformat(value)
    return as_utc(value)


def normalize_set(raw: Dict[str, Any]) -> SetRecord:
    book = str(_first(raw, "book", default="Book A"))
    unit = int(_first(raw, "unit", default=1))
    return SetRecord(
        id=str(_first(raw, "id", default=new_id())),
        book=book,
        unit=unit,
        title=_first(raw, "title", default=set_title(book, unit)),
        created_at=_coerce_datetime(_first(raw, "created_at", "createdAt")),
    )


def normalize_card(raw: Dict[str, Any]) -> CardRecord:
    return CardRecord(
        id=str(_first(raw, "id", default=new_id())),
        term=str(_first(raw, "term", default="")),
        definition=str(_first(raw, "definition", default="")),
        example=_first(raw, "example") or None,
        language=_first(raw, "language"),
        set_id=_first(raw, "set_id", "setId"),
        box=_first(raw, "box"),
        next_review=_first(raw, "next_review", "nextReview", default=0),
        created_at=_coerce_datetime(_first(raw, "created_at", "createdAt")),
    )


def normalize_user(raw: Dict[str, Any]) -> UserRecord:
    password_hash = _first(raw, "password_hash")
    if password_hash is None:
        # Older stores kept the plain password
        password_hash = User.hash_password(str(_first(raw, "password", default="")))

    role = _first(raw, "role")
    if role is None:
        role = ROLE_ADMIN if _first(raw, "isAdmin", "is_admin", default=False) else ROLE_STUDENT

    return UserRecord(
        id=str(_first(raw, "id", default=new_id())),
        name=str(_first(raw, "name", default="")),
        email=str(_first(raw, "email", default="")).strip().lower(),
        password_hash=password_hash,
        role=role,
        coins=int(_first(raw, "coins", default=0)),
        time_ms=int(_first(raw, "time_ms", "timeMs", default=0)),
        correct=int(_first(raw, "correct", "correct_count", default=0)),
        created_at=_coerce_datetime(_first(raw, "created_at", "createdAt")),
    )


class LocalStudyRepository:
    """Repository backed by a JSON file; changes are written on commit()."""

    tracks_progress_per_user = False

    def __init__(self, path):
        self.path = Path(path)
        self._load()

    @classmethod
    @contextmanager
    def open(cls, path) -> Iterator["LocalStudyRepository"]:
        """Open the store for one unit of work; uncommitted changes are discarded."""
        with _lock_for(Path(path)):
            yield cls(path)

    def _load(self) -> None:
        data: Dict[str, Any] = {}
        if self.path.exists():
            with open(self.path, "r", encoding="utf-8") as f:
                data = json.load(f) or {}

        self.sets: List[SetRecord] = [normalize_set(raw) for raw in data.get("sets", [])]
        self.cards: List[CardRecord] = [normalize_card(raw) for raw in data.get("cards", [])]
        self.users: List[UserRecord] = [normalize_user(raw) for raw in data.get("users", [])]
        self.quiz_answers: List[QuizAnswerRecord] = [
            QuizAnswerRecord.model_validate(raw) for raw in data.get("quiz_answers", [])
        ]

    def _index(self, items: List, item_id: str) -> int:
        for index, item in enumerate(items):
            if item.id == item_id:
                return index
        return -1

    # Sets

    def load_sets(self) -> List[SetRecord]:
        return sorted(self.sets, key=lambda s: s.created_at, reverse=True)

    def get_set(self, set_id: str) -> Optional[SetRecord]:
        index = self._index(self.sets, set_id)
        return self.sets[index] if index != -1 else None

    def add_set(self, book: str, unit: int, created_at: Optional[datetime] = None) -> SetRecord:
        word_set = SetRecord(
            id=new_id(),
            book=book,
            unit=unit,
            title=set_title(book, unit),
            created_at=created_at or utc_now(),
        )
        self.sets.insert(0, word_set)
        return word_set

    def delete_set(self, set_id: str) -> int:
        """Delete a set with its cards and their quiz answers; returns cards deleted."""
        if self._index(self.sets, set_id) == -1:
            return 0
        removed_ids = {card.id for card in self.cards if card.set_id == set_id}
        self.cards = [card for card in self.cards if card.id not in removed_ids]
        self.quiz_answers = [a for a in self.quiz_answers if a.card_id not in removed_ids]
        self.sets = [word_set for word_set in self.sets if word_set.id != set_id]
        return len(removed_ids)

    # Cards

    def load_cards(self, set_id: Optional[str] = None) -> List[CardRecord]:
        if set_id is None:
            return list(self.cards)
        return [card for card in self.cards if card.set_id == set_id]

    def get_card(self, card_id: str) -> Optional[CardRecord]:
        index = self._index(self.cards, card_id)
        return self.cards[index] if index != -1 else None

    def add_card(
        self,
        term: str,
        definition: str,
        set_id: str,
        example: Optional[str] = None,
        language: str = "EN",
        next_review: int = 0,
    ) -> CardRecord:
        card = CardRecord(
            id=new_id(),
            term=term,
            definition=definition,
            example=example,
            language=language,
            set_id=set_id,
            box=1,
            next_review=next_review,
        )
        self.cards.insert(0, card)
        return card

    def persist_card_update(self, card: CardRecord) -> None:
        index = self._index(self.cards, card.id)
        if index == -1:
            logger.warning(f"Card {card.id} not found, update skipped")
            return
        self.cards[index] = card

    # Users

    def load_users(self) -> List[UserRecord]:
        return list(self.users)

    def get_user(self, user_id: str, for_update: bool = False) -> Optional[UserRecord]:
        # for_update is implied: the store lock is held for the whole unit of work
        index = self._index(self.users, user_id)
        return self.users[index] if index != -1 else None

    def find_user_by_email(self, email: str) -> Optional[UserRecord]:
        email = email.strip().lower()
        return next((user for user in self.users if user.email == email), None)

    def add_user(self, name: str, email: str, password_hash: str, role: str) -> UserRecord:
        user = UserRecord(
            id=new_id(),
            name=name,
            email=email.strip().lower(),
            password_hash=password_hash,
            role=role,
        )
        self.users.append(user)
        return user

    def persist_user_update(self, user: UserRecord) -> None:
        index = self._index(self.users, user.id)
        if index == -1:
            logger.warning(f"User {user.id} not found, update skipped")
            return
        self.users[index] = self.users[index].model_copy(update={
            "coins": user.coins,
            "correct": user.correct,
            "time_ms": user.time_ms,
        })

    # Progress (embedded in the card, shared by all users of the store)

    def load_progress(self, user_id: str) -> Dict[str, Progress]:
        return {card.id: Progress(box=card.box, next_review=card.next_review) for card in self.cards}

    def get_progress(self, user_id: str, card_id: str) -> Progress:
        card = self.get_card(card_id)
        if card is None:
            return Progress()
        return Progress(box=card.box, next_review=card.next_review)

    def set_progress(self, user_id: str, card_id: str, box: int, next_review: int) -> None:
        index = self._index(self.cards, card_id)
        if index == -1:
            logger.warning(f"Card {card_id} not found, progress not stored")
            return
        self.cards[index] = self.cards[index].model_copy(update={"box": box, "next_review": next_review})

    # Quiz answers

    def has_quiz_answer(self, user_id: str, card_id: str, seed: int) -> bool:
        return any(
            a.user_id == user_id and a.card_id == card_id and a.seed == seed
            for a in self.quiz_answers
        )

    def record_quiz_answer(self, user_id: str, card_id: str, seed: int, correct: bool) -> None:
        self.quiz_answers.append(
            QuizAnswerRecord(user_id=user_id, card_id=card_id, seed=seed, correct=correct)
        )

    # Unit of work

    def commit(self) -> None:
        """Atomically replace the store file with the current state."""
        data = {
            "sets": [word_set.model_dump(mode="json") for word_set in self.sets],
            "cards": [card.model_dump(mode="json") for card in self.cards],
            "users": [user.model_dump(mode="json") for user in self.users],
            "quiz_answers": [answer.model_dump(mode="json") for answer in self.quiz_answers],
        }
        directory = self.path.parent
        directory.mkdir(parents=True, exist_ok=True)
        fd, tmp_path = tempfile.mkstemp(prefix=f".{self.path.name}.", dir=str(directory))
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                json.dump(data, f, ensure_ascii=False, indent=2)
            os.replace(tmp_path, self.path)
        except Exception as e:
            logger.error(f"Error writing local store {self.path}: {str(e)}")
            if os.path.exists(tmp_path):
                os.remove(tmp_path)
            raise

    def rollback(self) -> None:
        self._load()
