"""
Review API endpoints, scoped to one user.
"""

import logging

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from cinelog.api.dependencies import get_db, get_catalog, get_recommendation_engine
from cinelog.api.models.review import (
    BackfillResponse,
    ReviewCreate,
    ReviewList,
    ReviewResponse,
    ReviewUpdate,
)
from cinelog.catalog import CatalogError, TMDBCatalog
from cinelog.core.recommendations import RecommendationEngine
from cinelog.database import crud

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/users/{user_id}/reviews", tags=["reviews"])

# Async handlers run their single-row SQLite lookups inline; catalog calls
# and the engine's review reads go through worker threads.


def _require_user(db: Session, user_id: int) -> None:
    if not crud.get_user(db, user_id):
        raise HTTPException(status_code=404, detail="User not found")


@router.get("", response_model=ReviewList)
def list_reviews(user_id: int, db: Session = Depends(get_db)):
    """Get a user's reviews, newest first."""
    _require_user(db, user_id)
    reviews = crud.get_reviews_by_user(db, user_id)
    return ReviewList(
        user_id=user_id,
        reviews=[ReviewResponse.model_validate(r) for r in reviews],
    )


@router.get("/movie/{movie_id}")
def get_review_by_movie(user_id: int, movie_id: int, db: Session = Depends(get_db)):
    """Get the user's review of a movie; `review` is null when there is none."""
    _require_user(db, user_id)
    review = crud.get_review_by_movie(db, user_id, movie_id)
    return {"review": ReviewResponse.model_validate(review) if review else None}


@router.post("", response_model=ReviewResponse, status_code=201)
async def create_review(
    user_id: int,
    review_in: ReviewCreate,
    db: Session = Depends(get_db),
    catalog: TMDBCatalog = Depends(get_catalog),
):
    """Create a review, tagging it with the movie's catalog genres."""
    _require_user(db, user_id)
    if crud.get_review_by_movie(db, user_id, review_in.movie_id):
        raise HTTPException(status_code=400, detail="Review already exists for this movie")

    try:
        genres = await catalog.get_genres(review_in.movie_id)
    except CatalogError as e:
        # Stored untagged; the genre backfill picks it up later
        logger.warning(f"Error fetching genres for movie {review_in.movie_id}: {e}")
        genres = []

    try:
        return crud.create_review(
            db,
            user_id=user_id,
            movie_id=review_in.movie_id,
            title=review_in.title,
            rating=review_in.rating,
            review=review_in.review,
            genres=genres,
            year=review_in.year,
            poster_url=review_in.poster_url,
            watched_date=review_in.watched_date,
        )
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))


@router.put("/{review_id}", response_model=ReviewResponse)
def update_review(
    user_id: int,
    review_id: int,
    review_in: ReviewUpdate,
    db: Session = Depends(get_db),
):
    """Update rating, text or watch date of a review."""
    try:
        review = crud.update_review(
            db,
            user_id,
            review_id,
            rating=review_in.rating,
            review=review_in.review,
            watched_date=review_in.watched_date,
        )
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    if not review:
        raise HTTPException(status_code=404, detail="Review not found")
    return review


@router.delete("/{review_id}")
def delete_review(user_id: int, review_id: int, db: Session = Depends(get_db)):
    """Delete a review."""
    if not crud.delete_review(db, user_id, review_id):
        raise HTTPException(status_code=404, detail="Review not found")
    return {"message": "Review deleted successfully"}


@router.post("/backfill-genres", response_model=BackfillResponse)
async def backfill_genres(
    user_id: int,
    db: Session = Depends(get_db),
    engine: RecommendationEngine = Depends(get_recommendation_engine),
):
    """Tag reviews that were saved without genres."""
    _require_user(db, user_id)
    result = await engine.backfill_genres(user_id)
    if result.updated == 0 and result.failed == 0:
        return BackfillResponse(message="All reviews already have genres", updated=0, failed=0)
    return BackfillResponse(
        message=f"Backfill complete. Updated {result.updated} reviews, {result.failed} failed.",
        **result.to_dict(),
    )
