"""
Quiz schemas.
"""
from pydantic import BaseModel, Field
from typing import List, Optional

from vocab_trainer.schemas.auth import UserResponse


class QuizQuestion(BaseModel):
    """One multiple-choice question: pick the definition of a term."""
    card_id: str
    question: str  # The term
    answer: str  # The correct definition
    options: List[str]


class QuizResponse(BaseModel):
    """A generated quiz."""
    seed: int
    questions: List[QuizQuestion]
    total: int


class QuizAnswerRequest(BaseModel):
    """Answer to a single quiz question."""
    user_id: str = Field(..., description="Answering user")
    card_id: str = Field(..., description="Card the question was built from")
    seed: int = Field(0, description="Seed of the quiz the question belongs to")
    choice: str = Field(..., description="The option the user picked")


class QuizAnswerResponse(BaseModel):
    """Result of answering a quiz question."""
    correct: bool
    answer: str
    coins_awarded: int
    user: Optional[UserResponse] = None
