"""
Catalog collaborator contract.

Anything that can answer these lookups can feed the recommendation
engine; the TMDB implementation lives in `cinelog.catalog.tmdb`.
"""

from typing import List, Protocol, Sequence

from cinelog.catalog.models import CandidateMovie


class CatalogError(RuntimeError):
    """A catalog lookup failed (transport, HTTP status or payload)."""

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        self.status_code = status_code


class CatalogService(Protocol):
    async def get_popular(self) -> List[CandidateMovie]:
        ...

    async def get_similar_to(self, movie_id: int) -> List[CandidateMovie]:
        ...

    async def discover(
        self,
        genre_ids: Sequence[int],
        min_rating: float | None = None,
        sort_descending_by_rating: bool = False,
    ) -> List[CandidateMovie]:
        ...

    async def get_genres(self, movie_id: int) -> List[str]:
        ...
