"""
User model.
"""
from sqlmodel import SQLModel, Field, Relationship
from sqlalchemy import BigInteger, Column, DateTime
from typing import List, TYPE_CHECKING
from datetime import datetime
import hashlib
import uuid

from vocab_trainer.utils.time_utils import utc_now

if TYPE_CHECKING:
    from vocab_trainer.models.progress import Progress


def new_id() -> str:
    """Random identifier for new rows."""
    return uuid.uuid4().hex


class User(SQLModel, table=True):
    """User table - stores accounts and reward counters."""
    __tablename__ = "user"

    id: str = Field(default_factory=new_id, primary_key=True)
    name: str
    email: str = Field(unique=True, index=True)  # Stored lower-cased
    password: str  # Hashed password
    role: str = Field(default="student")  # 'admin' or 'student'
    created_at: datetime = Field(default_factory=utc_now, sa_column=Column(DateTime(timezone=True), nullable=False))

    # Rewards and study time
    coins: int = Field(default=0)
    correct: int = Field(default=0)
    time_ms: int = Field(default=0, sa_column=Column(BigInteger, nullable=False, default=0))

    # Relationships
    progress: List["Progress"] = Relationship(back_populates="user")

    @staticmethod
    def hash_password(password: str) -> str:
        """Simple password hashing using SHA256."""
        return hashlib.sha256(password.encode()).hexdigest()
