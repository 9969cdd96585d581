import pytest

from vocab_trainer.schemas.records import CardRecord
from vocab_trainer.services import srs_service
from vocab_trainer.services.srs_service import (
    BOX_INTERVALS_DAYS,
    MAX_BOX,
    MIN_BOX,
    calculate_next_review_at,
    clamp_box,
    count_mastered,
    force_due,
    grade,
    is_due,
    select_due,
    update_leitner_box,
)

DAY_MS = 24 * 60 * 60 * 1000
# 2024-01-31 10:30 UTC
JAN_31 = 1706697000000
FEB_1 = 1706783400000


def card(card_id, next_review=0, box=1):
    return CardRecord(id=card_id, term=card_id, definition=f"{card_id} def", box=box, next_review=next_review)


@pytest.mark.parametrize("box", [1, 2, 3, 4, 5])
def test_hard_grade_resets_to_first_box(box):
    assert update_leitner_box(box, is_easy=False) == MIN_BOX


@pytest.mark.parametrize("box, expected", [(1, 2), (2, 3), (3, 4), (4, 5), (5, 5)])
def test_easy_grade_promotes_one_box_up_to_the_last(box, expected):
    assert update_leitner_box(box, is_easy=True) == expected


@pytest.mark.parametrize("raw, expected", [
    (None, 1), (0, 1), (-3, 1), (9, 5), ("3", 3), ("x", 1), (True, 1), (4.0, 4),
])
def test_clamp_box(raw, expected):
    assert clamp_box(raw) == expected


def test_intervals():
    assert BOX_INTERVALS_DAYS == [1, 2, 4, 7, 15]
    assert calculate_next_review_at(1, JAN_31) == JAN_31 + DAY_MS
    assert calculate_next_review_at(5, JAN_31) == JAN_31 + 15 * DAY_MS


def test_day_arithmetic_rolls_over_month_end():
    assert calculate_next_review_at(1, JAN_31) == FEB_1


def test_day_arithmetic_keeps_wall_clock_across_dst():
    # 2024-03-09 12:00 in New York (EST); the next day is 23 hours later (EDT)
    march_9_noon = 1710003600000
    assert calculate_next_review_at(1, march_9_noon, "America/New_York") == march_9_noon + 23 * 60 * 60 * 1000


def test_out_of_range_box_uses_nearest_interval():
    assert calculate_next_review_at(0, JAN_31) == JAN_31 + DAY_MS
    assert calculate_next_review_at(12, JAN_31) == JAN_31 + 15 * DAY_MS


def test_grade_easy_schedules_from_new_box():
    update = grade(1, is_easy=True, now=JAN_31)
    assert update.box == 2
    assert update.next_review == JAN_31 + 2 * DAY_MS


def test_grade_hard_schedules_one_day():
    update = grade(MAX_BOX, is_easy=False, now=JAN_31)
    assert update == (1, JAN_31 + DAY_MS)


def test_force_due_keeps_box():
    assert force_due(4, JAN_31) == (4, JAN_31)


def test_due_is_inclusive():
    now = JAN_31
    assert is_due(now, now)
    assert is_due(now - 1, now)
    assert not is_due(now + 1, now)
    assert is_due(None, now)


def test_select_due_keeps_input_order():
    now = JAN_31
    cards = [card("a", now - 1), card("b", now), card("c", now + 1)]
    assert [c.id for c in select_due(cards, now)] == ["a", "b"]


def test_select_due_empty():
    assert select_due([], JAN_31) == []


def test_count_mastered():
    cards = [card("a", box=5), card("b", box=4), card("c", box=5)]
    assert count_mastered(cards) == 2
    assert srs_service.count_mastered([]) == 0
