"""
TMDB-backed movie catalog.

Implements the catalog contract used by the recommendation engine plus
the browse lookups served by the movies API. Requests are blocking, so
each call runs in a worker thread to keep the event loop free.
"""

import asyncio
import logging
from typing import Any, Callable, Dict, List, Optional, Sequence, TypeVar

from pydantic import ValidationError

from cinelog.catalog.base import CatalogError
from cinelog.catalog.client import TMDBClient
from cinelog.catalog.models import CandidateMovie, MovieDetails

logger = logging.getLogger(__name__)

T = TypeVar("T")

IMAGE_BASE_URL = "https://image.tmdb.org/t/p/w500"
DISCOVER_MIN_VOTES = 100
FRANCHISE_LOOKUPS = 5


def _release_year(movie: Dict[str, Any]) -> str:
    release_date = movie.get("release_date")
    return release_date.split("-")[0] if release_date else "N/A"


def _poster_url(movie: Dict[str, Any]) -> Optional[str]:
    poster_path = movie.get("poster_path")
    return f"{IMAGE_BASE_URL}{poster_path}" if poster_path else None


def to_candidate(movie: Dict[str, Any]) -> CandidateMovie:
    """Map one TMDB list entry to a CandidateMovie."""
    return CandidateMovie(
        movie_id=movie["id"],
        title=movie.get("title") or "",
        year=_release_year(movie),
        overview=movie.get("overview"),
        poster_url=_poster_url(movie),
        rating=movie.get("vote_average") or 0.0,
        vote_count=movie.get("vote_count") or 0,
    )


def to_details(movie: Dict[str, Any]) -> MovieDetails:
    """Map a TMDB /movie/{id} payload to MovieDetails."""
    collection = movie.get("belongs_to_collection") or {}
    return MovieDetails(
        **to_candidate(movie).model_dump(),
        imdb_id=movie.get("imdb_id"),
        genres=[g["name"] for g in movie.get("genres") or []],
        runtime=movie.get("runtime"),
        collection_id=collection.get("id"),
    )


def _results(payload: Dict[str, Any]) -> List[CandidateMovie]:
    return [to_candidate(m) for m in payload.get("results", [])]


def _parts(payload: Dict[str, Any]) -> List[CandidateMovie]:
    return [to_candidate(m) for m in payload.get("parts", [])]


def _parse(mapper: Callable[[Any], T], payload: Any, path: str) -> T:
    """Apply a payload mapper, reporting malformed payloads as CatalogError."""
    try:
        return mapper(payload)
    except (KeyError, TypeError, AttributeError, ValidationError) as e:
        logger.error(f"Malformed TMDB payload from {path}: {e!r}")
        raise CatalogError(f"Malformed TMDB payload from {path}") from e


class TMDBCatalog:
    """Async catalog facade over a TMDBClient."""

    def __init__(self, client: TMDBClient):
        self._client = client

    async def _get(self, path: str, params: Optional[Dict[str, Any]] = None) -> Any:
        return await asyncio.to_thread(self._client.get, path, params)

    async def _list(self, path: str, params: Optional[Dict[str, Any]] = None) -> List[CandidateMovie]:
        return _parse(_results, await self._get(path, params), path)

    # ==================== ENGINE CONTRACT ====================

    async def get_popular(self) -> List[CandidateMovie]:
        return await self._list("movie/popular")

    async def get_similar_to(self, movie_id: int) -> List[CandidateMovie]:
        """TMDB recommendations for one movie."""
        return await self._list(f"movie/{movie_id}/recommendations")

    async def discover(
        self,
        genre_ids: Sequence[int],
        min_rating: float | None = None,
        sort_descending_by_rating: bool = False,
    ) -> List[CandidateMovie]:
        """
        Query /discover/movie.

        Args:
            genre_ids: Catalog genre ids, all of which must match
            min_rating: Minimum vote average, if any
            sort_descending_by_rating: Sort by vote average instead of popularity

        Returns:
            First page of matching movies
        """
        params: Dict[str, Any] = {
            "with_genres": ",".join(str(g) for g in genre_ids),
            "sort_by": "vote_average.desc" if sort_descending_by_rating else "popularity.desc",
            "vote_count.gte": DISCOVER_MIN_VOTES,
        }
        if min_rating is not None:
            params["vote_average.gte"] = min_rating
        return await self._list("discover/movie", params)

    async def get_genres(self, movie_id: int) -> List[str]:
        details = await self.get_movie_details(movie_id)
        return details.genres

    # ==================== BROWSE LOOKUPS ====================

    async def get_movie_details(self, movie_id: int) -> MovieDetails:
        path = f"movie/{movie_id}"
        return _parse(to_details, await self._get(path), path)

    async def search_movies(self, query: str) -> List[CandidateMovie]:
        return await self._list("search/movie", {"query": query})

    async def get_collection(self, collection_id: int) -> List[CandidateMovie]:
        path = f"collection/{collection_id}"
        return _parse(_parts, await self._get(path), path)

    async def search_movies_with_franchise(self, query: str) -> List[CandidateMovie]:
        """
        Search by title and add the other entries of matching franchises.

        The most-voted search hits are checked for a collection; collection
        members missing from the search results are appended. A failed
        collection lookup only drops that franchise.
        """
        results = await self.search_movies(query)
        if not results:
            return results

        most_voted = sorted(results, key=lambda m: m.vote_count, reverse=True)[:FRANCHISE_LOOKUPS]
        collections = await asyncio.gather(
            *(self._franchise_of(m.movie_id) for m in most_voted)
        )

        seen = {m.movie_id for m in results}
        for parts in collections:
            for movie in parts:
                if movie.movie_id not in seen:
                    results.append(movie)
                    seen.add(movie.movie_id)
        return results

    async def _franchise_of(self, movie_id: int) -> List[CandidateMovie]:
        try:
            details = await self.get_movie_details(movie_id)
            if details.collection_id is None:
                return []
            return await self.get_collection(details.collection_id)
        except CatalogError as e:
            logger.warning(f"Franchise lookup failed for movie {movie_id}: {e}")
            return []

    async def get_trending(self) -> List[CandidateMovie]:
        return await self._list("trending/movie/week")

    async def get_top_rated(self) -> List[CandidateMovie]:
        return await self._list("movie/top_rated")

    async def get_now_playing(self) -> List[CandidateMovie]:
        return await self._list("movie/now_playing")
