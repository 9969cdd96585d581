"""
Word set schemas.
"""
from pydantic import BaseModel, Field
from typing import List
from datetime import datetime


class WordSetResponse(BaseModel):
    """Word set response schema."""
    id: str
    book: str
    unit: int
    title: str
    created_at: datetime
    card_count: int = 0

    class Config:
        from_attributes = True


class CreateWordSetRequest(BaseModel):
    """Request schema for creating a word set (admin only)."""
    user_id: str = Field(..., description="Acting admin user")
    book: str = Field("Book A", min_length=1, max_length=100)
    unit: int = Field(1, ge=0)


class WordSetsResponse(BaseModel):
    """Response schema for word set list (most recent first)."""
    sets: List[WordSetResponse]


class DeleteWordSetResponse(BaseModel):
    """Result of deleting a word set and its cards."""
    message: str
    cards_deleted: int
