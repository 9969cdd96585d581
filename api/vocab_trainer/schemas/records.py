"""
Canonical record shapes shared by the study core and the repositories.

Repositories convert whatever their storage holds into these records, so the
scheduling code only ever sees one shape.
"""
from pydantic import BaseModel, Field, field_validator
from typing import Optional
from datetime import datetime

from vocab_trainer.services.srs_service import clamp_box
from vocab_trainer.utils.time_utils import utc_now

ROLE_ADMIN = "admin"
ROLE_STUDENT = "student"


def set_title(book: str, unit: int) -> str:
    """Display title derived from book and unit."""
    return f"{book} • Unit {unit}"


def normalize_language(value: Optional[str]) -> str:
    """Language codes are upper-case and at most 5 characters (default EN)."""
    code = (value or "").strip().upper()[:5]
    return code or "EN"


class SetRecord(BaseModel):
    """A word set (book + unit)."""
    id: str
    book: str
    unit: int
    title: str
    created_at: datetime = Field(default_factory=utc_now)


class CardRecord(BaseModel):
    """A vocabulary card together with its scheduling state."""
    id: str
    term: str
    definition: str
    example: Optional[str] = None
    language: str = "EN"
    set_id: Optional[str] = None
    box: int = 1
    next_review: int = 0  # epoch milliseconds
    created_at: datetime = Field(default_factory=utc_now)

    @field_validator("box", mode="before")
    @classmethod
    def _clamp_box(cls, v):
        return clamp_box(v)

    @field_validator("next_review", mode="before")
    @classmethod
    def _default_next_review(cls, v):
        return v or 0

    @field_validator("language", mode="before")
    @classmethod
    def _normalize_language(cls, v):
        return normalize_language(v)


class UserRecord(BaseModel):
    """A registered user with reward counters."""
    id: str
    name: str
    email: str
    password_hash: str
    role: str = ROLE_STUDENT
    coins: int = 0
    time_ms: int = 0
    correct: int = 0
    created_at: datetime = Field(default_factory=utc_now)

    @property
    def is_admin(self) -> bool:
        return self.role == ROLE_ADMIN


class Progress(BaseModel):
    """Scheduling state of one card for one user."""
    box: int = 1
    next_review: int = 0

    @field_validator("box", mode="before")
    @classmethod
    def _clamp_box(cls, v):
        return clamp_box(v)

    @field_validator("next_review", mode="before")
    @classmethod
    def _default_next_review(cls, v):
        return v or 0


class QuizAnswerRecord(BaseModel):
    """One answered quiz question; a question is identified by user, card and quiz seed."""
    user_id: str
    card_id: str
    seed: int
    correct: bool
    answered_at: datetime = Field(default_factory=utc_now)
