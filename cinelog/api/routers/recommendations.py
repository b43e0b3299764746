"""
Recommendation API endpoints.
"""

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from cinelog.api.dependencies import get_db, get_recommendation_engine
from cinelog.api.models.recommendation import RecommendationResponse
from cinelog.core.recommendations import CatalogUnavailableError, RecommendationEngine
from cinelog.database import crud

router = APIRouter(prefix="/api/recommendations", tags=["recommendations"])

# Async handlers run their single-row SQLite lookups inline; catalog calls
# and the engine's review reads go through worker threads.


@router.get("/{user_id}", response_model=RecommendationResponse)
async def get_recommendations(
    user_id: int,
    db: Session = Depends(get_db),
    engine: RecommendationEngine = Depends(get_recommendation_engine),
):
    """Get personalized recommendations (popular movies for users without reviews)."""
    if not crud.get_user(db, user_id):
        raise HTTPException(status_code=404, detail="User not found")
    try:
        movies = await engine.recommend(user_id)
    except CatalogUnavailableError as e:
        raise HTTPException(status_code=503, detail=f"Movie catalog unavailable: {e}")
    return RecommendationResponse(user_id=user_id, results=movies, n=len(movies))
