"""
Deterministic session generation.

Review order and quiz options are "random" but fully determined by an integer
seed, so a session can be regenerated (shuffle again, retry a quiz) by changing
one number and tests can assert exact orderings.
"""
import logging
from typing import Callable, List, Optional, Sequence, TypeVar

from vocab_trainer.schemas.quiz import QuizQuestion
from vocab_trainer.schemas.records import CardRecord
from vocab_trainer.services.srs_service import select_due

logger = logging.getLogger(__name__)

T = TypeVar("T")

UINT32_MASK = 0xFFFFFFFF

# Offset between the review seed and the quiz seed so the two orderings
# do not follow each other
QUIZ_SEED_OFFSET = 999
MAX_QUIZ_QUESTIONS = 15
MAX_DISTRACTORS = 3


def _imul(a: int, b: int) -> int:
    """32-bit integer multiplication (low 32 bits, unsigned)."""
    return (a * b) & UINT32_MASK


class Mulberry32:
    """
    Mulberry32 pseudo-random generator.

    A 32-bit state mapped to floats in [0, 1). The same seed always yields the
    same stream.
    """

    def __init__(self, seed: int):
        self.seed = seed & UINT32_MASK
        self._state = self.seed

    def random(self) -> float:
        """Next float in [0, 1)."""
        self._state = (self._state + 0x6D2B79F5) & UINT32_MASK
        t = self._state
        r = _imul(t ^ (t >> 15), 1 | t)
        r ^= (r + _imul(r ^ (r >> 7), 61 | r)) & UINT32_MASK
        return ((r ^ (r >> 14)) & UINT32_MASK) / 4294967296

    __call__ = random


def shuffle(items: Sequence[T], rng: Callable[[], float]) -> List[T]:
    """Fisher-Yates shuffle into a new list; the input is left untouched."""
    result = list(items)
    for i in range(len(result) - 1, 0, -1):
        j = int(rng() * (i + 1))
        result[i], result[j] = result[j], result[i]
    return result


def pick_n(items: Sequence[T], n: int, rng: Callable[[], float]) -> List[T]:
    """Pick up to n items in shuffled order."""
    return shuffle(items, rng)[:max(0, n)]


def build_review_queue(cards: Sequence[CardRecord], now: int, seed: int) -> List[CardRecord]:
    """Due cards in seeded random order; the head is the current card."""
    return shuffle(select_due(cards, now), Mulberry32(seed))


def build_quiz(pool: Sequence[CardRecord], seed: int) -> List[QuizQuestion]:
    """
    Build a multiple-choice quiz from a pool of cards.

    Questions are made for the first MAX_QUIZ_QUESTIONS cards of the pool.
    Each question offers the correct definition plus up to MAX_DISTRACTORS
    definitions of other pool cards. Every shuffle draws from one generator
    seeded with seed + QUIZ_SEED_OFFSET.

    Args:
        pool: Cards eligible for the quiz
        seed: Session seed (the same seed used for the review queue)

    Returns:
        List of quiz questions (empty for an empty pool)
    """
    rng = Mulberry32(seed + QUIZ_SEED_OFFSET)
    distractor_count = min(MAX_DISTRACTORS, max(1, len(pool) - 1))

    questions = []
    for card in pool[:MAX_QUIZ_QUESTIONS]:
        others = [other for other in pool if other.id != card.id]
        wrongs = [other.definition for other in pick_n(others, distractor_count, rng)]
        options = shuffle([card.definition, *wrongs], rng)
        questions.append(QuizQuestion(
            card_id=card.id,
            question=card.term,
            answer=card.definition,
            options=options,
        ))

    logger.debug(f"Built quiz with {len(questions)} question(s) from pool of {len(pool)} (seed={seed})")
    return questions


class QuizSession:
    """Walks through a quiz one question at a time, keeping score."""

    def __init__(self, questions: Sequence[QuizQuestion]):
        self.questions = list(questions)
        self.index = 0
        self.score = 0

    @property
    def total(self) -> int:
        return len(self.questions)

    @property
    def done(self) -> bool:
        # A quiz without questions is finished from the start (0/0)
        return self.index >= self.total

    @property
    def current(self) -> Optional[QuizQuestion]:
        return None if self.done else self.questions[self.index]

    def answer(self, choice: str) -> bool:
        """Answer the current question and advance; returns whether it was right."""
        question = self.current
        if question is None:
            return False
        correct = choice == question.answer
        if correct:
            self.score += 1
        self.index += 1
        return correct
