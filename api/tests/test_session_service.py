import pytest

from vocab_trainer.schemas.records import CardRecord
from vocab_trainer.services.session_service import (
    MAX_QUIZ_QUESTIONS,
    Mulberry32,
    QuizSession,
    build_quiz,
    build_review_queue,
    pick_n,
    shuffle,
)

NOW = 1_700_000_000_000


def make_cards(ids, next_review=0):
    return [CardRecord(id=i, term=i, definition=f"{i} def", next_review=next_review) for i in ids]


@pytest.mark.parametrize("seed, expected", [
    (0, [0.26642920868471265, 0.0003297457005828619, 0.2232720274478197]),
    (42, [0.6011037519201636, 0.44829055899754167, 0.8524657934904099]),
    (1000, [0.7951949068810791, 0.8276879135519266, 0.6915161057841033]),
])
def test_mulberry32_reference_stream(seed, expected):
    rng = Mulberry32(seed)
    assert [rng() for _ in range(3)] == expected


def test_mulberry32_range_and_determinism():
    first, second = Mulberry32(123), Mulberry32(123)
    values = [first.random() for _ in range(1000)]
    assert values == [second.random() for _ in range(1000)]
    assert all(0 <= v < 1 for v in values)


def test_shuffle_reference_order():
    assert shuffle(list(range(10)), Mulberry32(1)) == [7, 8, 3, 2, 1, 5, 9, 4, 0, 6]
    assert shuffle(["a", "b", "c", "d", "e"], Mulberry32(7)) == ["d", "b", "c", "e", "a"]


def test_shuffle_is_a_permutation_and_leaves_input_alone():
    items = list(range(50))
    result = shuffle(items, Mulberry32(99))
    assert sorted(result) == items
    assert items == list(range(50))


def test_shuffle_small_inputs():
    assert shuffle([], Mulberry32(1)) == []
    assert shuffle(["only"], Mulberry32(1)) == ["only"]


def test_pick_n():
    picked = pick_n(list(range(10)), 3, Mulberry32(4))
    assert len(picked) == 3
    assert len(set(picked)) == 3
    assert pick_n([1, 2], 5, Mulberry32(4)) in ([1, 2], [2, 1])
    assert pick_n([1, 2], 0, Mulberry32(4)) == []


def test_review_queue_only_due_cards_in_seeded_order():
    cards = make_cards(["a", "b", "c", "d", "e"], next_review=NOW)
    cards.append(CardRecord(id="later", term="later", definition="x", next_review=NOW + 1))

    queue = build_review_queue(cards, NOW, seed=7)

    assert [c.id for c in queue] == ["d", "b", "c", "e", "a"]


def test_review_queue_same_seed_same_order_new_seed_reshuffles():
    cards = make_cards([str(i) for i in range(20)])
    first = [c.id for c in build_review_queue(cards, NOW, seed=3)]
    assert first == [c.id for c in build_review_queue(cards, NOW, seed=3)]
    assert first != [c.id for c in build_review_queue(cards, NOW, seed=4)]
    assert sorted(first) == sorted(c.id for c in cards)


def test_review_queue_empty_when_nothing_due():
    assert build_review_queue(make_cards(["a"], next_review=NOW + 1), NOW, seed=0) == []


def test_quiz_reference_options():
    questions = build_quiz(make_cards(["a", "b", "c"]), seed=0)
    assert [q.card_id for q in questions] == ["a", "b", "c"]
    assert [q.options for q in questions] == [
        ["c def", "a def", "b def"],
        ["b def", "c def", "a def"],
        ["c def", "a def", "b def"],
    ]


def test_quiz_single_card_has_only_the_answer():
    questions = build_quiz(make_cards(["solo"]), seed=11)
    assert len(questions) == 1
    assert questions[0].question == "solo"
    assert questions[0].answer == "solo def"
    assert questions[0].options == ["solo def"]


def test_quiz_two_cards_one_distractor():
    questions = build_quiz(make_cards(["a", "b"]), seed=1)
    assert sorted(questions[0].options) == ["a def", "b def"]


def test_quiz_caps_questions_and_distractors():
    pool = make_cards([f"w{i}" for i in range(20)])
    questions = build_quiz(pool, seed=5)

    assert len(questions) == MAX_QUIZ_QUESTIONS
    assert [q.card_id for q in questions] == [c.id for c in pool[:MAX_QUIZ_QUESTIONS]]
    for question in questions:
        assert len(question.options) == 4
        assert len(set(question.options)) == 4
        assert question.answer in question.options


def test_quiz_is_reproducible_from_seed():
    pool = make_cards([f"w{i}" for i in range(8)])
    assert build_quiz(pool, seed=2) == build_quiz(pool, seed=2)


def test_quiz_empty_pool():
    assert build_quiz([], seed=0) == []


def test_quiz_session_scores_and_finishes():
    session = QuizSession(build_quiz(make_cards(["a", "b"]), seed=0))
    assert session.total == 2
    assert not session.done

    first = session.current
    assert session.answer(first.answer) is True
    assert session.answer("wrong") is False

    assert session.done
    assert session.score == 1
    assert session.current is None
    assert session.answer("anything") is False


def test_empty_quiz_session_is_done_immediately():
    session = QuizSession([])
    assert session.done
    assert (session.score, session.total) == (0, 0)
