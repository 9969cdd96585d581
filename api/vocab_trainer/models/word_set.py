"""
WordSet model.
"""
from sqlmodel import SQLModel, Field, Relationship
from sqlalchemy import Column, DateTime
from typing import List, TYPE_CHECKING
from datetime import datetime

from vocab_trainer.models.user import new_id
from vocab_trainer.utils.time_utils import utc_now

if TYPE_CHECKING:
    from vocab_trainer.models.card import Card


class WordSet(SQLModel, table=True):
    """WordSet table - a book unit grouping cards."""
    __tablename__ = "word_set"

    id: str = Field(default_factory=new_id, primary_key=True)
    book: str
    unit: int
    title: str  # Derived display string, e.g. 'Book A • Unit 1'
    created_at: datetime = Field(default_factory=utc_now, sa_column=Column(DateTime(timezone=True), nullable=False))

    # Relationships
    cards: List["Card"] = Relationship(back_populates="word_set")
