from pydantic import BaseModel, EmailStr, Field
from typing import List, Optional
from datetime import datetime


class LoginRequest(BaseModel):
    """Login request schema."""
    email: str = Field(..., description="Email address (case-insensitive)")
    password: str = Field(..., min_length=1, description="Password")


class RegisterRequest(BaseModel):
    """Registration request schema."""
    name: str = Field(..., min_length=1, max_length=100, description="Display name")
    email: EmailStr = Field(..., description="Email address")
    password: str = Field(..., min_length=6, description="Password (minimum 6 characters)")
    invite_code: Optional[str] = Field(None, description="Admin invite code (optional)")


class UserResponse(BaseModel):
    """User response schema (without password)."""
    id: str
    name: str
    email: str
    role: str
    is_admin: bool = False
    coins: int = 0
    time_ms: int = 0
    correct: int = 0
    created_at: datetime

    class Config:
        from_attributes = True


class AuthResponse(BaseModel):
    """Authentication response schema."""
    user: UserResponse
    message: str


class UsersResponse(BaseModel):
    """Response schema for the admin user list."""
    users: List[UserResponse]


class StudyTimeRequest(BaseModel):
    """Elapsed study time to add to a user's total."""
    elapsed_ms: int = Field(..., ge=0, description="Elapsed milliseconds")
