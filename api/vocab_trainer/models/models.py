"""
Models module - imports every table so SQLModel.metadata knows about them.
"""
from vocab_trainer.models.user import User
from vocab_trainer.models.word_set import WordSet
from vocab_trainer.models.card import Card
from vocab_trainer.models.progress import Progress
from vocab_trainer.models.quiz_answer import QuizAnswer

__all__ = [
    'User',
    'WordSet',
    'Card',
    'Progress',
    'QuizAnswer',
]
