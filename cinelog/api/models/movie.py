"""
Pydantic schemas for Movie API.
"""

from pydantic import BaseModel

from cinelog.catalog.models import CandidateMovie


class MovieList(BaseModel):
    """Response model for a list of catalog movies."""

    results: list[CandidateMovie]
