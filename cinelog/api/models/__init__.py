"""
Pydantic schemas for API request/response validation.
"""

from cinelog.api.models.user import UserCreate, UserResponse
from cinelog.api.models.review import (
    ReviewCreate,
    ReviewUpdate,
    ReviewResponse,
    ReviewList,
    BackfillResponse,
)
from cinelog.api.models.movie import MovieList
from cinelog.api.models.recommendation import RecommendationResponse

__all__ = [
    "UserCreate",
    "UserResponse",
    "ReviewCreate",
    "ReviewUpdate",
    "ReviewResponse",
    "ReviewList",
    "BackfillResponse",
    "MovieList",
    "RecommendationResponse",
]
