"""
Card schemas.
"""
from pydantic import BaseModel, Field, field_validator
from typing import List, Optional
from datetime import datetime

from vocab_trainer.schemas.records import normalize_language


class CardResponse(BaseModel):
    """Card as seen by one user (box/next_review are that user's progress)."""
    id: str
    term: str
    definition: str
    example: Optional[str] = None
    language: str
    set_id: Optional[str] = None
    set_title: Optional[str] = None
    box: int
    next_review: int
    created_at: datetime

    class Config:
        from_attributes = True


class CreateCardRequest(BaseModel):
    """Request schema for adding a word (admin only)."""
    user_id: str = Field(..., description="Acting admin user")
    set_id: str = Field(..., min_length=1, description="Set the word belongs to")
    term: str = Field(..., min_length=1)
    definition: str = Field(..., min_length=1)
    example: Optional[str] = None
    language: str = Field("EN", description="Language code, at most 5 characters")

    @field_validator("term", "definition")
    @classmethod
    def _strip_required(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("must not be blank")
        return v

    @field_validator("language")
    @classmethod
    def _normalize_language(cls, v: str) -> str:
        return normalize_language(v)


class ForceDueRequest(BaseModel):
    """Admin override making a card due now for a student."""
    user_id: str = Field(..., description="Acting admin user")
    student_id: Optional[str] = Field(None, description="Whose schedule to change (defaults to the admin)")


class CardsResponse(BaseModel):
    """Response schema for a card list."""
    cards: List[CardResponse]
