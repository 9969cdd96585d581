"""
Card model.
"""
from sqlmodel import SQLModel, Field, Relationship
from sqlalchemy import Column, DateTime
from typing import Optional, List, TYPE_CHECKING
from datetime import datetime

from vocab_trainer.models.user import new_id
from vocab_trainer.utils.time_utils import utc_now

if TYPE_CHECKING:
    from vocab_trainer.models.word_set import WordSet
    from vocab_trainer.models.progress import Progress


class Card(SQLModel, table=True):
    """Card table - vocabulary content. Scheduling state lives in Progress."""
    __tablename__ = "card"

    id: str = Field(default_factory=new_id, primary_key=True)
    set_id: str = Field(foreign_key="word_set.id", index=True)
    term: str
    definition: str
    example: Optional[str] = None
    language: str = Field(default="EN", max_length=5)
    created_at: datetime = Field(default_factory=utc_now, sa_column=Column(DateTime(timezone=True), nullable=False))

    # Relationships
    word_set: "WordSet" = Relationship(back_populates="cards")
    progress: List["Progress"] = Relationship(back_populates="card")
