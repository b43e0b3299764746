"""
Pydantic schemas for Review API.
"""

from datetime import datetime

from pydantic import BaseModel, Field


class ReviewCreate(BaseModel):
    """Request body for creating a review."""

    movie_id: int = Field(..., gt=0)
    title: str = Field(..., min_length=1)
    year: str | None = None
    poster_url: str | None = None
    rating: float = Field(..., ge=0.0, le=10.0)
    review: str = Field(..., min_length=1)
    watched_date: datetime | None = None


class ReviewUpdate(BaseModel):
    """Request body for updating a review (all fields optional)."""

    rating: float | None = Field(None, ge=0.0, le=10.0)
    review: str | None = Field(None, min_length=1)
    watched_date: datetime | None = None


class ReviewResponse(BaseModel):
    """Response model for review."""

    review_id: int
    user_id: int
    movie_id: int
    title: str
    year: str | None
    poster_url: str | None
    genres: list[str]
    rating: float
    review: str
    watched_date: datetime | None
    created_at: datetime | None

    class Config:
        from_attributes = True


class ReviewList(BaseModel):
    """Response model for a user's reviews."""

    user_id: int
    reviews: list[ReviewResponse]


class BackfillResponse(BaseModel):
    """Response model for a genre backfill run."""

    message: str
    updated: int
    failed: int
