"""
SRS (Spaced Repetition System) service implementing the Leitner system.

Five boxes with fixed review intervals. A correct ("easy") answer promotes a
card one box, a wrong ("hard") answer sends it back to box 1. Everything here
is pure: callers persist the results.
"""
from typing import Iterable, List, NamedTuple, TypeVar

from vocab_trainer.utils.time_utils import add_days


# Leitner box review intervals in days
# Box 1 = 1 day, Box 2 = 2 days, Box 3 = 4 days, Box 4 = 7 days, Box 5 = 15 days
BOX_INTERVALS_DAYS = [1, 2, 4, 7, 15]
MIN_BOX = 1
MAX_BOX = 5

T = TypeVar("T")


class ScheduleUpdate(NamedTuple):
    """New scheduling state for a card after grading."""
    box: int
    next_review: int


def clamp_box(box) -> int:
    """
    Normalize a box value into [MIN_BOX, MAX_BOX].

    Missing or unparseable values fall back to MIN_BOX instead of failing,
    since box values come from stores that are not trusted to be well-formed.
    """
    if box is None or isinstance(box, bool):
        return MIN_BOX
    try:
        value = int(box)
    except (TypeError, ValueError):
        return MIN_BOX
    return max(MIN_BOX, min(MAX_BOX, value))


def calculate_next_review_at(box: int, now: int, tz_name: str = "UTC") -> int:
    """
    Calculate the next review time based on the Leitner box.

    Args:
        box: Leitner box (1-5), clamped if out of range
        now: Base time in epoch milliseconds
        tz_name: Time zone whose calendar days are added

    Returns:
        Next review time in epoch milliseconds
    """
    interval_days = BOX_INTERVALS_DAYS[clamp_box(box) - 1]
    return add_days(now, interval_days, tz_name)


def update_leitner_box(current_box: int, is_easy: bool) -> int:
    """
    Update Leitner box based on a pass/fail grading decision.

    Args:
        current_box: Current box, clamped if out of range
        is_easy: True when the answer was correct

    Returns:
        New Leitner box
    """
    current_box = clamp_box(current_box)

    if is_easy:
        return min(MAX_BOX, current_box + 1)
    # Failure always restarts the card from the first box
    return MIN_BOX


def grade(box: int, is_easy: bool, now: int, tz_name: str = "UTC") -> ScheduleUpdate:
    """Compute the new box and next review time for a graded card."""
    new_box = update_leitner_box(box, is_easy)
    return ScheduleUpdate(box=new_box, next_review=calculate_next_review_at(new_box, now, tz_name))


def force_due(box: int, now: int) -> ScheduleUpdate:
    """Admin override: make a card due immediately without touching its box."""
    return ScheduleUpdate(box=clamp_box(box), next_review=now)


def is_due(next_review, now: int) -> bool:
    """A card is due once its next review time is reached (inclusive)."""
    return (next_review or 0) <= now


def select_due(cards: Iterable[T], now: int) -> List[T]:
    """Return the cards whose next_review is at or before now, in input order."""
    return [card for card in cards if is_due(getattr(card, "next_review", 0), now)]


def count_mastered(cards: Iterable) -> int:
    """Number of cards that reached the last box."""
    return sum(1 for card in cards if clamp_box(getattr(card, "box", MIN_BOX)) >= MAX_BOX)
