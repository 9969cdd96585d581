"""
Study (review, statistics, leaderboard) schemas.
"""
from pydantic import BaseModel, Field
from typing import List, Optional

from vocab_trainer.schemas.auth import UserResponse
from vocab_trainer.schemas.card import CardResponse


class StudyContext(BaseModel):
    """Who is studying, when, which set is in view and the session seed."""
    user_id: str
    now: int  # epoch milliseconds
    set_id: Optional[str] = None  # None = all sets
    seed: int = 0

    class Config:
        frozen = True


class ReviewQueueResponse(BaseModel):
    """Due cards in session order; current is the card to show."""
    seed: int
    due_count: int
    current: Optional[CardResponse] = None
    queue: List[CardResponse]


class GradeRequest(BaseModel):
    """Grade the card being reviewed."""
    user_id: str = Field(..., description="Reviewing user")
    card_id: str = Field(..., description="Card being graded")
    is_easy: bool = Field(..., description="True for 'easy' (correct), False for 'hard'")


class GradeResponse(BaseModel):
    """New scheduling state and reward after grading."""
    card: CardResponse
    coins_awarded: int
    user: UserResponse


class StudyStatsResponse(BaseModel):
    """Dashboard numbers for the current view."""
    due_now: int
    words_in_view: int
    mastered: int
    coins: int
    study_minutes: int


class LeaderboardEntry(BaseModel):
    """One leaderboard row."""
    rank: int
    user_id: str
    name: str
    coins: int
    correct: int
    study_minutes: int


class LeaderboardResponse(BaseModel):
    """Users ordered by coins."""
    entries: List[LeaderboardEntry]


class StudySessionResponse(BaseModel):
    """State of a user's study-time session."""
    user_id: str
    running: bool
    flushed_ms: int = 0
    message: str
