"""
Progress model.
"""
from sqlmodel import SQLModel, Field, Relationship
from sqlalchemy import BigInteger, Column
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from vocab_trainer.models.user import User
    from vocab_trainer.models.card import Card


class Progress(SQLModel, table=True):
    """Progress table - a user's Leitner state for one card, keyed on (user_id, card_id)."""
    __tablename__ = "progress"

    user_id: str = Field(foreign_key="user.id", primary_key=True)
    card_id: str = Field(foreign_key="card.id", primary_key=True)
    box: int = Field(default=1)
    next_review: int = Field(default=0, sa_column=Column(BigInteger, nullable=False, default=0))  # epoch ms

    # Relationships
    user: "User" = Relationship(back_populates="progress")
    card: "Card" = Relationship(back_populates="progress")
