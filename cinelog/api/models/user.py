"""
Pydantic schemas for User API.
"""

from datetime import datetime

from pydantic import BaseModel, Field


class UserCreate(BaseModel):
    """Request body for creating a user."""

    username: str = Field(..., min_length=1, max_length=50)
    email: str = Field(..., min_length=3, max_length=255, pattern=r"^[^@\s]+@[^@\s]+$")


class UserResponse(BaseModel):
    """Response model for user."""

    user_id: int
    username: str
    email: str
    created_at: datetime | None = None

    class Config:
        from_attributes = True
