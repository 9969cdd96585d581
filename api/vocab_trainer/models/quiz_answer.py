"""
QuizAnswer model.
"""
from sqlmodel import SQLModel, Field
from sqlalchemy import BigInteger, Column, DateTime
from datetime import datetime

from vocab_trainer.utils.time_utils import utc_now


class QuizAnswer(SQLModel, table=True):
    """QuizAnswer table - each quiz question is answered (and rewarded) once per user and seed."""
    __tablename__ = "quiz_answer"

    user_id: str = Field(foreign_key="user.id", primary_key=True)
    card_id: str = Field(foreign_key="card.id", primary_key=True)
    seed: int = Field(sa_column=Column(BigInteger, primary_key=True, autoincrement=False))
    correct: bool = Field(default=False)
    answered_at: datetime = Field(default_factory=utc_now, sa_column=Column(DateTime(timezone=True), nullable=False))
