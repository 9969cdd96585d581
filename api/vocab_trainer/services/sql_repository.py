"""
Relational persistence for the study core.

Scheduling state is tracked per user in the progress table (multi-user mode).
Rows are converted into the canonical records at this boundary.
"""
# pyright: reportAttributeAccessIssue=false
# pyright: reportCallIssue=false
# pyright: reportArgumentType=false
import logging
from datetime import datetime
from typing import Dict, List, Optional

from sqlmodel import Session, select

from vocab_trainer.models.models import User, WordSet, Card, Progress as ProgressRow, QuizAnswer
from vocab_trainer.schemas.records import (
    CardRecord,
    Progress,
    SetRecord,
    UserRecord,
    set_title,
)
from vocab_trainer.utils.time_utils import as_utc, utc_now

logger = logging.getLogger(__name__)


def _user_record(user: User) -> UserRecord:
    return UserRecord(
        id=user.id,
        name=user.name,
        email=user.email,
        password_hash=user.password,
        role=user.role,
        coins=user.coins,
        time_ms=user.time_ms,
        correct=user.correct,
        created_at=as_utc(user.created_at),
    )


def _set_record(word_set: WordSet) -> SetRecord:
    return SetRecord(
        id=word_set.id,
        book=word_set.book,
        unit=word_set.unit,
        title=word_set.title,
        created_at=as_utc(word_set.created_at),
    )


def _card_record(card: Card) -> CardRecord:
    # Box/next_review are per user here; callers overlay the user's progress
    return CardRecord(
        id=card.id,
        term=card.term,
        definition=card.definition,
        example=card.example,
        language=card.language,
        set_id=card.set_id,
        created_at=as_utc(card.created_at),
    )


class SqlStudyRepository:
    """Repository backed by a SQLModel session."""

    tracks_progress_per_user = True

    def __init__(self, session: Session):
        self.session = session

    # Sets

    def load_sets(self) -> List[SetRecord]:
        word_sets = self.session.exec(
            select(WordSet).order_by(WordSet.created_at.desc())  # type: ignore
        ).all()
        return [_set_record(word_set) for word_set in word_sets]

    def get_set(self, set_id: str) -> Optional[SetRecord]:
        word_set = self.session.get(WordSet, set_id)
        return _set_record(word_set) if word_set else None

    def add_set(self, book: str, unit: int, created_at: Optional[datetime] = None) -> SetRecord:
        word_set = WordSet(
            book=book,
            unit=unit,
            title=set_title(book, unit),
            created_at=created_at or utc_now(),
        )
        self.session.add(word_set)
        self.session.flush()  # Flush to get the ID
        return _set_record(word_set)

    def delete_set(self, set_id: str) -> int:
        """Delete a set with its cards and their progress rows; returns cards deleted."""
        word_set = self.session.get(WordSet, set_id)
        if not word_set:
            return 0

        cards = self.session.exec(select(Card).where(Card.set_id == set_id)).all()
        card_ids = [card.id for card in cards]

        # Delete in foreign key order: progress and quiz answers -> cards -> set
        if card_ids:
            progress_rows = self.session.exec(
                select(ProgressRow).where(ProgressRow.card_id.in_(card_ids))  # type: ignore
            ).all()
            for row in progress_rows:
                self.session.delete(row)
            answers = self.session.exec(
                select(QuizAnswer).where(QuizAnswer.card_id.in_(card_ids))  # type: ignore
            ).all()
            for answer in answers:
                self.session.delete(answer)
        for card in cards:
            self.session.delete(card)
        self.session.delete(word_set)
        self.session.flush()
        return len(cards)

    # Cards

    def load_cards(self, set_id: Optional[str] = None) -> List[CardRecord]:
        query = select(Card)
        if set_id is not None:
            query = query.where(Card.set_id == set_id)
        query = query.order_by(Card.created_at.desc())  # type: ignore
        return [_card_record(card) for card in self.session.exec(query).all()]

    def get_card(self, card_id: str) -> Optional[CardRecord]:
        card = self.session.get(Card, card_id)
        return _card_record(card) if card else None

    def add_card(
        self,
        term: str,
        definition: str,
        set_id: str,
        example: Optional[str] = None,
        language: str = "EN",
        next_review: int = 0,
    ) -> CardRecord:
        # next_review is unused: new cards have no progress row, which reads as due
        card = Card(
            term=term,
            definition=definition,
            example=example,
            language=language,
            set_id=set_id,
        )
        self.session.add(card)
        self.session.flush()
        return _card_record(card)

    def persist_card_update(self, card: CardRecord) -> None:
        """Store card content; scheduling state goes through set_progress."""
        row = self.session.get(Card, card.id)
        if not row:
            logger.warning(f"Card {card.id} not found, update skipped")
            return
        row.term = card.term
        row.definition = card.definition
        row.example = card.example
        row.language = card.language
        if card.set_id:
            row.set_id = card.set_id
        self.session.add(row)

    # Users

    def load_users(self) -> List[UserRecord]:
        users = self.session.exec(select(User).order_by(User.created_at)).all()  # type: ignore
        return [_user_record(user) for user in users]

    def get_user(self, user_id: str, for_update: bool = False) -> Optional[UserRecord]:
        if for_update:
            user = self.session.exec(
                select(User).where(User.id == user_id).with_for_update()
            ).first()
        else:
            user = self.session.get(User, user_id)
        return _user_record(user) if user else None

    def find_user_by_email(self, email: str) -> Optional[UserRecord]:
        user = self.session.exec(select(User).where(User.email == email.strip().lower())).first()
        return _user_record(user) if user else None

    def add_user(self, name: str, email: str, password_hash: str, role: str) -> UserRecord:
        user = User(
            name=name,
            email=email.strip().lower(),
            password=password_hash,
            role=role,
        )
        self.session.add(user)
        self.session.flush()
        return _user_record(user)

    def persist_user_update(self, user: UserRecord) -> None:
        """Store a user's reward counters and study time."""
        row = self.session.get(User, user.id)
        if not row:
            logger.warning(f"User {user.id} not found, update skipped")
            return
        row.coins = user.coins
        row.correct = user.correct
        row.time_ms = user.time_ms
        self.session.add(row)

    # Progress

    def load_progress(self, user_id: str) -> Dict[str, Progress]:
        rows = self.session.exec(select(ProgressRow).where(ProgressRow.user_id == user_id)).all()
        return {row.card_id: Progress(box=row.box, next_review=row.next_review) for row in rows}

    def get_progress(self, user_id: str, card_id: str) -> Progress:
        row = self.session.get(ProgressRow, (user_id, card_id))
        if not row:
            # Never studied: first box, due immediately
            return Progress()
        return Progress(box=row.box, next_review=row.next_review)

    def set_progress(self, user_id: str, card_id: str, box: int, next_review: int) -> None:
        """Upsert keyed on (user_id, card_id)."""
        row = self.session.get(ProgressRow, (user_id, card_id))
        if not row:
            row = ProgressRow(user_id=user_id, card_id=card_id)
        row.box = box
        row.next_review = next_review
        self.session.add(row)
        self.session.flush()

    # Quiz answers

    def has_quiz_answer(self, user_id: str, card_id: str, seed: int) -> bool:
        key = {"user_id": user_id, "card_id": card_id, "seed": seed}
        return self.session.get(QuizAnswer, key) is not None

    def record_quiz_answer(self, user_id: str, card_id: str, seed: int, correct: bool) -> None:
        self.session.add(QuizAnswer(user_id=user_id, card_id=card_id, seed=seed, correct=correct))
        self.session.flush()

    # Unit of work

    def commit(self) -> None:
        try:
            self.session.commit()
        except Exception as e:
            self.session.rollback()
            logger.error(f"Error committing changes: {str(e)}")
            raise

    def rollback(self) -> None:
        self.session.rollback()
