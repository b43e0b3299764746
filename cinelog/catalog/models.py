"""
Pydantic models for movies returned by the catalog.
"""

from typing import List, Optional

from pydantic import BaseModel, Field


class CandidateMovie(BaseModel):
    """A movie as listed by the catalog (search, popular, similar, discover)."""

    movie_id: int
    title: str
    year: str = "N/A"
    overview: Optional[str] = None
    poster_url: Optional[str] = None
    rating: float = 0.0
    vote_count: int = 0


class MovieDetails(CandidateMovie):
    """Full catalog record for one movie."""

    imdb_id: Optional[str] = None
    genres: List[str] = Field(default_factory=list)
    runtime: Optional[int] = None
    collection_id: Optional[int] = None
