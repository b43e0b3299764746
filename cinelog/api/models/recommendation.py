"""
Pydantic schemas for Recommendation API.
"""

from pydantic import BaseModel

from cinelog.catalog.models import CandidateMovie


class RecommendationResponse(BaseModel):
    """Response model for recommendations list."""

    user_id: int
    results: list[CandidateMovie]
    n: int
