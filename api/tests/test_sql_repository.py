from sqlmodel import Session, select

from vocab_trainer.models.models import Card, Progress as ProgressRow, QuizAnswer
from vocab_trainer.services.sql_repository import SqlStudyRepository

from conftest import add_admin, add_student


def test_progress_is_tracked_per_user(sql_repository):
    admin = add_admin(sql_repository)
    student = add_student(sql_repository)
    word_set = sql_repository.add_set("Book A", 1)
    card = sql_repository.add_card(term="meticulous", definition="very careful", set_id=word_set.id)
    sql_repository.commit()

    sql_repository.set_progress(student.id, card.id, box=3, next_review=500)
    sql_repository.commit()

    assert sql_repository.get_progress(student.id, card.id).box == 3
    # Never-studied cards read as box 1, due immediately
    untouched = sql_repository.get_progress(admin.id, card.id)
    assert (untouched.box, untouched.next_review) == (1, 0)
    assert sql_repository.load_progress(admin.id) == {}
    assert sql_repository.tracks_progress_per_user is True


def test_set_progress_upserts(sql_repository, engine):
    student = add_student(sql_repository)
    word_set = sql_repository.add_set("Book A", 1)
    card = sql_repository.add_card(term="t", definition="d", set_id=word_set.id)
    sql_repository.set_progress(student.id, card.id, box=2, next_review=10)
    sql_repository.set_progress(student.id, card.id, box=4, next_review=20)
    sql_repository.commit()

    with Session(engine) as session:
        rows = session.exec(select(ProgressRow)).all()
    assert [(row.box, row.next_review) for row in rows] == [(4, 20)]


def test_delete_set_cascades_to_cards_and_progress(sql_repository, engine):
    student = add_student(sql_repository)
    doomed = sql_repository.add_set("Book A", 1)
    kept = sql_repository.add_set("Book A", 2)
    first = sql_repository.add_card(term="a", definition="1", set_id=doomed.id)
    sql_repository.add_card(term="b", definition="2", set_id=doomed.id)
    sql_repository.add_card(term="c", definition="3", set_id=kept.id)
    sql_repository.set_progress(student.id, first.id, box=2, next_review=1)
    sql_repository.commit()

    assert sql_repository.delete_set(doomed.id) == 2
    sql_repository.commit()

    with Session(engine) as session:
        assert [card.term for card in session.exec(select(Card)).all()] == ["c"]
        assert session.exec(select(ProgressRow)).all() == []
    assert sql_repository.get_set(doomed.id) is None
    assert sql_repository.delete_set(doomed.id) == 0


def test_quiz_answers_are_keyed_by_user_card_and_seed(sql_repository, engine):
    student = add_student(sql_repository)
    word_set = sql_repository.add_set("Book A", 1)
    card = sql_repository.add_card(term="a", definition="1", set_id=word_set.id)
    sql_repository.record_quiz_answer(student.id, card.id, 2**32 - 1, correct=False)
    sql_repository.commit()

    assert sql_repository.has_quiz_answer(student.id, card.id, 2**32 - 1)
    assert not sql_repository.has_quiz_answer(student.id, card.id, 0)

    sql_repository.delete_set(word_set.id)
    sql_repository.commit()
    with Session(engine) as session:
        assert session.exec(select(QuizAnswer)).all() == []


def test_records_round_trip_through_rows(sql_repository, engine):
    admin = add_admin(sql_repository, email="Boss@Example.com")
    word_set = sql_repository.add_set("Book D", 4)
    card = sql_repository.add_card(
        term="coherent", definition="logical", set_id=word_set.id, example="A coherent essay.", language="EN",
    )
    sql_repository.commit()

    with Session(engine) as session:
        fresh = SqlStudyRepository(session)
        assert fresh.get_set(word_set.id).title == "Book D • Unit 4"
        stored = fresh.get_card(card.id)
        assert (stored.term, stored.example, stored.set_id) == ("coherent", "A coherent essay.", word_set.id)
        found = fresh.find_user_by_email("boss@example.com")
        assert found.id == admin.id
        assert found.is_admin


def test_persist_user_update_changes_counters_only(sql_repository):
    student = add_student(sql_repository)
    sql_repository.persist_user_update(student.model_copy(update={"coins": 20, "correct": 2, "time_ms": 60000,
                                                                  "name": "ignored"}))
    sql_repository.commit()

    stored = sql_repository.get_user(student.id, for_update=True)
    assert (stored.coins, stored.correct, stored.time_ms) == (20, 2, 60000)
    assert stored.name == "Student"


def test_persist_card_update(sql_repository):
    word_set = sql_repository.add_set("Book A", 1)
    card = sql_repository.add_card(term="t", definition="d", set_id=word_set.id)
    sql_repository.persist_card_update(card.model_copy(update={"definition": "new"}))
    sql_repository.commit()
    assert sql_repository.get_card(card.id).definition == "new"


def test_load_cards_filters_by_set(sql_repository):
    first = sql_repository.add_set("Book A", 1)
    second = sql_repository.add_set("Book A", 2)
    sql_repository.add_card(term="x", definition="1", set_id=first.id)
    sql_repository.add_card(term="y", definition="2", set_id=second.id)
    sql_repository.commit()

    assert [c.term for c in sql_repository.load_cards(first.id)] == ["x"]
    assert sorted(c.term for c in sql_repository.load_cards()) == ["x", "y"]
