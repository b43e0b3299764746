"""
Review store backed by the SQL database.

Adapts the CRUD layer to the read/update surface the recommendation
engine needs.
"""

from typing import List
from sqlalchemy.orm import Session

from cinelog.database import crud
from cinelog.database.models import Review


class SQLReviewStore:
    """Review store bound to one database session."""

    def __init__(self, session: Session):
        self.session = session

    def list_reviews_for_user(self, user_id: int) -> List[Review]:
        # Insertion order: the engine breaks rating and genre ties by it
        return crud.get_reviews_by_user(self.session, user_id, newest_first=False)

    def list_reviews_missing_genres(self, user_id: int) -> List[Review]:
        return crud.get_reviews_missing_genres(self.session, user_id)

    def set_review_genres(self, review_id: int, genres: List[str]) -> None:
        """
        Persist genre tags onto a review.

        Raises:
            LookupError: If the review no longer exists
        """
        try:
            updated = crud.set_review_genres(self.session, review_id, genres)
        except Exception:
            self.session.rollback()
            raise
        if updated is None:
            raise LookupError(f"Review {review_id} not found")
