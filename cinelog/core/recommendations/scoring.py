"""
Pure scoring and ranking helpers for the recommendation engine.

Reviews are any objects exposing `movie_id`, `rating` and `genres`.
All ordering is stable: ties keep the order in which items were seen.
"""

from typing import Any, Dict, Iterable, List, Mapping, Sequence, Set

from cinelog.catalog.models import CandidateMovie

SEED_MIN_RATING = 7
MAX_SEEDS = 5
TOP_GENRE_COUNT = 3


def select_seed_reviews(
    reviews: Sequence[Any],
    min_rating: float = SEED_MIN_RATING,
    limit: int = MAX_SEEDS
) -> List[Any]:
    """
    Pick the highest-rated reviews to source similar movies from.

    Args:
        reviews: User's reviews in store order
        min_rating: Inclusive rating threshold
        limit: Maximum number of seeds

    Returns:
        Up to `limit` reviews rated at least `min_rating`, best first
    """
    liked = [r for r in reviews if r.rating >= min_rating]
    return sorted(liked, key=lambda r: r.rating, reverse=True)[:limit]


def compute_genre_weights(reviews: Iterable[Any]) -> Dict[str, float]:
    """
    Sum review ratings per genre tag.

    A genre appearing on many well-rated reviews outweighs one seen once.
    Keys are in first-encountered order.
    """
    weights: Dict[str, float] = {}
    for review in reviews:
        for genre in review.genres or []:
            weights[genre] = weights.get(genre, 0) + review.rating
    return weights


def top_genres(weights: Mapping[str, float], n: int = TOP_GENRE_COUNT) -> List[str]:
    """Return the `n` heaviest genres, ties in mapping order."""
    ranked = sorted(weights.items(), key=lambda item: item[1], reverse=True)
    return [genre for genre, _ in ranked[:n]]


def map_genres_to_ids(genres: Iterable[str], genre_ids: Mapping[str, int]) -> List[int]:
    """Translate genre names to catalog ids, dropping unknown names."""
    return [genre_ids[g] for g in genres if genre_ids.get(g)]


def dedupe_candidates(
    candidates: Iterable[CandidateMovie],
    excluded_ids: Set[int],
    seen_ids: Set[int] | None = None,
    limit: int | None = None
) -> List[CandidateMovie]:
    """
    Keep the first occurrence of each movie, skipping excluded ids.

    Args:
        candidates: Movies in priority order
        excluded_ids: Movie ids that must never be returned
        seen_ids: Ids already emitted elsewhere; updated in place
        limit: Stop once this many movies were kept

    Returns:
        Unique, non-excluded movies in input order
    """
    seen = seen_ids if seen_ids is not None else set()
    kept: List[CandidateMovie] = []
    for movie in candidates:
        if limit is not None and len(kept) >= limit:
            break
        if movie.movie_id in seen or movie.movie_id in excluded_ids:
            continue
        kept.append(movie)
        seen.add(movie.movie_id)
    return kept
