import pytest

from vocab_trainer.core.exceptions import NotFoundError, ValidationError
from vocab_trainer.services import content_service
from vocab_trainer.services.seed_service import DEFAULT_CARDS, seed_default_data

NOW = 1_700_000_000_000


def test_create_set_builds_title(repository):
    word_set = content_service.create_set(repository, "  Book B ", 3)
    assert (word_set.book, word_set.title) == ("Book B", "Book B • Unit 3")
    with pytest.raises(ValidationError):
        content_service.create_set(repository, "   ", 1)


def test_add_card_is_due_immediately(repository):
    word_set = content_service.create_set(repository, "Book A", 1)
    card = content_service.add_card(repository, word_set.id, "lucid", "clear", now=NOW, language="en")
    assert (card.box, card.language) == (1, "EN")

    progress = repository.get_progress("anyone", card.id)
    assert progress.box == 1
    assert progress.next_review <= NOW

    with pytest.raises(NotFoundError):
        content_service.add_card(repository, "missing", "x", "y", now=NOW)


def test_sets_with_counts_and_delete(repository):
    first = content_service.create_set(repository, "Book A", 1)
    second = content_service.create_set(repository, "Book A", 2)
    content_service.add_card(repository, first.id, "a", "1", now=NOW)
    content_service.add_card(repository, first.id, "b", "2", now=NOW)

    counts = {word_set.id: count for word_set, count in content_service.list_sets_with_counts(repository)}
    assert counts == {first.id: 2, second.id: 0}

    assert content_service.delete_set(repository, first.id) == 2
    assert repository.load_cards() == []
    with pytest.raises(NotFoundError):
        content_service.delete_set(repository, first.id)


def test_seed_default_data_only_fills_empty_store(repository):
    created = seed_default_data(repository, now=NOW)
    assert created == {"sets": 1, "cards": len(DEFAULT_CARDS), "users": 1}

    [word_set] = repository.load_sets()
    assert word_set.title == "Book A • Unit 1"
    assert {card.term for card in repository.load_cards()} == {"meticulous", "inevitable", "coherent"}
    assert repository.find_user_by_email("admin@example.com").is_admin

    assert seed_default_data(repository, now=NOW) == {"sets": 0, "cards": 0, "users": 0}
