"""
Genre-weighted recommendation engine.

Turns a user's review history into a ranked, deduplicated list of
catalog movies the user has not reviewed yet.
"""

import asyncio
import logging
from dataclasses import dataclass, asdict
from typing import Any, Dict, List, Mapping, Protocol, Sequence, Tuple

from cinelog.catalog.base import CatalogService
from cinelog.catalog.models import CandidateMovie
from cinelog.core.recommendations.scoring import (
    compute_genre_weights,
    dedupe_candidates,
    map_genres_to_ids,
    select_seed_reviews,
    top_genres,
)

logger = logging.getLogger(__name__)

MAX_SIMILAR_LOOKUPS = 3
DISCOVER_MIN_RATING = 6.5
BACKFILL_THRESHOLD = 10
MAX_RECOMMENDATIONS = 20


class CatalogUnavailableError(RuntimeError):
    """Every catalog lookup attempted for a request failed."""


class ReviewStore(Protocol):
    def list_reviews_for_user(self, user_id: int) -> Sequence[Any]:
        ...

    def list_reviews_missing_genres(self, user_id: int) -> Sequence[Any]:
        ...

    def set_review_genres(self, review_id: int, genres: List[str]) -> None:
        ...


@dataclass
class BackfillResult:
    updated: int = 0
    failed: int = 0

    def to_dict(self) -> Dict[str, int]:
        return asdict(self)


class RecommendationEngine:
    """
    Builds movie recommendations from review history.

    The engine keeps no state between calls: genre weights and candidate
    pools are rebuilt for every request.
    Review store calls are blocking and run in a worker thread.

    Usage:
        engine = RecommendationEngine(store, catalog, DEFAULT_GENRE_IDS)
        movies = await engine.recommend(user_id)
    """

    def __init__(
        self,
        review_store: ReviewStore,
        catalog: CatalogService,
        genre_ids: Mapping[str, int]
    ):
        """
        Args:
            review_store: Source of the user's reviews
            catalog: Movie catalog to draw candidates from
            genre_ids: Genre name to catalog genre id mapping
        """
        self.review_store = review_store
        self.catalog = catalog
        self.genre_ids = dict(genre_ids)

    async def recommend(self, user_id: int) -> List[CandidateMovie]:
        """
        Recommend up to 20 unreviewed movies for a user.

        Candidates come, in priority order, from movies similar to the
        user's best-rated reviews, then from a discover query over their
        heaviest genres, then from the popular list when fewer than 10
        remain. A failing lookup only removes its own contribution.

        Args:
            user_id: User ID

        Returns:
            Ranked list of candidate movies

        Raises:
            CatalogUnavailableError: If every catalog lookup failed
        """
        reviews = await asyncio.to_thread(self.review_store.list_reviews_for_user, user_id)

        if not reviews:
            logger.info(f"User {user_id} has no reviews, serving popular movies")
            try:
                return await self.catalog.get_popular()
            except Exception as e:
                raise CatalogUnavailableError("Catalog unavailable") from e

        attempted = 0
        failed = 0

        seeds = select_seed_reviews(reviews)[:MAX_SIMILAR_LOOKUPS]
        pool, similar_failures = await self._similar_to_seeds(seeds)
        attempted += len(seeds)
        failed += similar_failures

        weights = compute_genre_weights(reviews)
        genres = top_genres(weights)
        genre_ids = map_genres_to_ids(genres, self.genre_ids)
        logger.debug(f"User {user_id} genre weights: {weights}, top: {genres}")

        if genre_ids:
            attempted += 1
            try:
                pool.extend(await self.catalog.discover(
                    genre_ids,
                    min_rating=DISCOVER_MIN_RATING,
                    sort_descending_by_rating=True,
                ))
            except Exception as e:
                failed += 1
                logger.warning(f"Discover lookup failed for genres {genre_ids}: {e}")

        reviewed_ids = {r.movie_id for r in reviews}
        seen_ids: set = set()
        results = dedupe_candidates(pool, reviewed_ids, seen_ids)

        if len(results) < BACKFILL_THRESHOLD:
            attempted += 1
            try:
                popular = await self.catalog.get_popular()
            except Exception as e:
                failed += 1
                popular = []
                logger.warning(f"Popular lookup failed during backfill: {e}")
            results.extend(dedupe_candidates(
                popular,
                reviewed_ids,
                seen_ids,
                limit=MAX_RECOMMENDATIONS - len(results),
            ))

        if failed == attempted:
            raise CatalogUnavailableError(
                f"All {attempted} catalog lookups failed for user {user_id}"
            )

        logger.info(
            f"Recommended {min(len(results), MAX_RECOMMENDATIONS)} movies for user {user_id} "
            f"({len(seeds)} seeds, {len(genre_ids)} genres, {failed}/{attempted} lookups failed)"
        )
        return results[:MAX_RECOMMENDATIONS]

    async def _similar_to_seeds(self, seeds: Sequence[Any]) -> Tuple[List[CandidateMovie], int]:
        """
        Fetch similar movies for all seeds concurrently.

        Returns:
            Tuple of (movies concatenated in seed order, number of failed lookups)
        """
        responses = await asyncio.gather(
            *(self.catalog.get_similar_to(seed.movie_id) for seed in seeds),
            return_exceptions=True,
        )

        movies: List[CandidateMovie] = []
        failures = 0
        for seed, response in zip(seeds, responses):
            if isinstance(response, BaseException):
                failures += 1
                logger.warning(f"Similar-movie lookup failed for movie {seed.movie_id}: {response}")
                continue
            movies.extend(response)
        return movies, failures

    async def backfill_genres(self, user_id: int) -> BackfillResult:
        """
        Fetch and store genre tags for reviews saved without any.

        Reviews are handled one at a time; a failure on one review is
        counted and does not stop the rest.

        Args:
            user_id: User ID

        Returns:
            BackfillResult with updated and failed counts
        """
        result = BackfillResult()
        reviews = await asyncio.to_thread(self.review_store.list_reviews_missing_genres, user_id)
        if not reviews:
            return result

        for review in reviews:
            try:
                genres = await self.catalog.get_genres(review.movie_id)
                await asyncio.to_thread(self.review_store.set_review_genres, review.review_id, genres)
                result.updated += 1
            except Exception as e:
                result.failed += 1
                logger.error(f"Failed to fetch genres for '{review.title}' (movie {review.movie_id}): {e}")

        logger.info(
            f"Genre backfill for user {user_id}: {result.updated} updated, {result.failed} failed"
        )
        return result
