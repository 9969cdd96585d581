"""
Study service: runs the Leitner scheduler, session shuffles and rewards
against a repository for one acting user.

Every operation receives an explicit StudyContext (user, time, set in view,
seed); nothing here keeps a "current user" between calls.
"""
import logging
from typing import List, NamedTuple, Optional

from vocab_trainer.core.config import settings
from vocab_trainer.core.exceptions import ConflictError, NotFoundError, ValidationError
from vocab_trainer.schemas.quiz import QuizQuestion
from vocab_trainer.schemas.records import CardRecord, Progress, UserRecord
from vocab_trainer.schemas.study import StudyContext, StudyStatsResponse
from vocab_trainer.services import srs_service
from vocab_trainer.services.repository import StudyRepository
from vocab_trainer.services.reward_service import (
    CORRECT_ANSWER_COINS,
    add_study_time,
    apply_correct_answer,
)
from vocab_trainer.services.session_service import build_quiz, build_review_queue
from vocab_trainer.services.user_service import get_user_or_404
from vocab_trainer.utils.time_utils import minutes_from_ms

logger = logging.getLogger(__name__)


class GradeOutcome(NamedTuple):
    card: CardRecord
    user: UserRecord
    coins_awarded: int


class QuizOutcome(NamedTuple):
    correct: bool
    answer: str
    user: UserRecord
    coins_awarded: int


class StudyService:
    """Scheduling, session and reward operations over a repository."""

    def __init__(self, repository: StudyRepository, tz_name: Optional[str] = None):
        self.repository = repository
        self.tz_name = tz_name or settings.timezone

    def _get_card(self, card_id: str) -> CardRecord:
        card = self.repository.get_card(card_id)
        if not card:
            raise NotFoundError(f"Card with id {card_id} not found")
        return card

    def cards_in_view(self, ctx: StudyContext) -> List[CardRecord]:
        """Cards of the set in view with the user's box and next review overlaid."""
        progress = self.repository.load_progress(ctx.user_id)
        cards = []
        for card in self.repository.load_cards(ctx.set_id):
            state = progress.get(card.id, Progress())
            cards.append(card.model_copy(update={"box": state.box, "next_review": state.next_review}))
        return cards

    def review_queue(self, ctx: StudyContext) -> List[CardRecord]:
        """Due cards in seeded order; the first one is the card to show."""
        return build_review_queue(self.cards_in_view(ctx), ctx.now, ctx.seed)

    def current_card(self, ctx: StudyContext) -> Optional[CardRecord]:
        queue = self.review_queue(ctx)
        return queue[0] if queue else None

    def grade_card(self, ctx: StudyContext, card_id: str, is_easy: bool) -> GradeOutcome:
        """
        Grade a due card and reward a correct answer in one unit of work.

        Args:
            ctx: Study context of the grading user
            card_id: Card being graded
            is_easy: True for 'easy' (promote), False for 'hard' (back to box 1)

        Returns:
            GradeOutcome with the rescheduled card and the updated user

        Raises:
            ValidationError: If the card is not due for this user yet
        """
        user = get_user_or_404(self.repository, ctx.user_id, for_update=True)
        card = self._get_card(card_id)

        previous = self.repository.get_progress(ctx.user_id, card_id)
        if not srs_service.is_due(previous.next_review, ctx.now):
            raise ValidationError(f"Card {card_id} is not due for review")

        update = srs_service.grade(previous.box, is_easy, ctx.now, self.tz_name)
        self.repository.set_progress(ctx.user_id, card_id, update.box, update.next_review)

        coins_awarded = 0
        if is_easy:
            user = apply_correct_answer(user)
            self.repository.persist_user_update(user)
            coins_awarded = CORRECT_ANSWER_COINS

        self.repository.commit()

        logger.info(
            f"User {ctx.user_id} graded card {card_id} as {'easy' if is_easy else 'hard'}: "
            f"box {previous.box} -> {update.box}, next_review={update.next_review}, "
            f"coins +{coins_awarded}"
        )
        graded = card.model_copy(update={"box": update.box, "next_review": update.next_review})
        return GradeOutcome(card=graded, user=user, coins_awarded=coins_awarded)

    def force_due(self, ctx: StudyContext, card_id: str, student_id: Optional[str] = None) -> CardRecord:
        """Admin override: make a card due now for a student without changing its box."""
        target_id = student_id or ctx.user_id
        get_user_or_404(self.repository, target_id)
        card = self._get_card(card_id)

        previous = self.repository.get_progress(target_id, card_id)
        update = srs_service.force_due(previous.box, ctx.now)
        self.repository.set_progress(target_id, card_id, update.box, update.next_review)
        self.repository.commit()

        logger.info(f"User {ctx.user_id} forced card {card_id} due for user {target_id}")
        return card.model_copy(update={"box": update.box, "next_review": update.next_review})

    def quiz(self, ctx: StudyContext, due_only: bool = False) -> List[QuizQuestion]:
        """Seeded quiz over the cards in view (or only the due ones)."""
        pool = self.cards_in_view(ctx)
        if due_only:
            pool = srs_service.select_due(pool, ctx.now)
        return build_quiz(pool, ctx.seed)

    def answer_quiz(self, ctx: StudyContext, card_id: str, choice: str) -> QuizOutcome:
        """
        Check a quiz answer against the card's definition and reward it if right.

        The question of the quiz generated with ctx.seed can be answered once;
        a repeat raises ConflictError.
        """
        user = get_user_or_404(self.repository, ctx.user_id, for_update=True)
        card = self._get_card(card_id)
        if self.repository.has_quiz_answer(ctx.user_id, card_id, ctx.seed):
            raise ConflictError(f"Quiz question for card {card_id} already answered")

        correct = choice == card.definition
        self.repository.record_quiz_answer(ctx.user_id, card_id, ctx.seed, correct)
        coins_awarded = 0
        if correct:
            user = apply_correct_answer(user)
            self.repository.persist_user_update(user)
            coins_awarded = CORRECT_ANSWER_COINS
        self.repository.commit()

        logger.info(f"User {ctx.user_id} answered quiz card {card_id}: correct={correct}")
        return QuizOutcome(correct=correct, answer=card.definition, user=user, coins_awarded=coins_awarded)

    def leaderboard(self) -> List[UserRecord]:
        """Users by coins, highest first (ties keep store order)."""
        return sorted(self.repository.load_users(), key=lambda u: u.coins, reverse=True)

    def stats(self, ctx: StudyContext) -> StudyStatsResponse:
        user = get_user_or_404(self.repository, ctx.user_id)
        cards = self.cards_in_view(ctx)
        return StudyStatsResponse(
            due_now=len(srs_service.select_due(cards, ctx.now)),
            words_in_view=len(cards),
            mastered=srs_service.count_mastered(cards),
            coins=user.coins,
            study_minutes=minutes_from_ms(user.time_ms),
        )

    def record_study_time(self, user_id: str, elapsed_ms: int) -> UserRecord:
        """Add elapsed study time to a user's total."""
        user = get_user_or_404(self.repository, user_id, for_update=True)
        user = add_study_time(user, elapsed_ms)
        self.repository.persist_user_update(user)
        self.repository.commit()
        return user
