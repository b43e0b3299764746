"""
CRUD operations for User and Review models.

This module provides Create, Read, Update, Delete operations for all database models.
"""

from datetime import datetime
from typing import List, Optional
from sqlalchemy import func, and_, or_
from sqlalchemy.orm import Session

from cinelog.database.models import User, Review


MIN_RATING = 0.0
MAX_RATING = 10.0


def _check_rating(rating: float) -> None:
    if not (MIN_RATING <= rating <= MAX_RATING):
        raise ValueError("Rating must be between 0 and 10")


# ==================== USER CRUD OPERATIONS ====================

def create_user(session: Session, username: str, email: str) -> User:
    """
    Create a new user.

    Args:
        session: Database session
        username: Unique display name
        email: Unique e-mail address

    Returns:
        Created User object

    Raises:
        ValueError: If the username or e-mail is already registered
    """
    existing = session.query(User).filter(
        or_(User.username == username, User.email == email)
    ).first()
    if existing:
        raise ValueError("Username or email already registered")

    user = User(username=username, email=email)
    session.add(user)
    session.commit()
    session.refresh(user)
    return user


def get_user(session: Session, user_id: int) -> Optional[User]:
    """
    Get a user by ID.

    Args:
        session: Database session
        user_id: User ID

    Returns:
        User object or None if not found
    """
    return session.query(User).filter(User.user_id == user_id).first()


def get_users(
    session: Session,
    skip: int = 0,
    limit: int = 100
) -> List[User]:
    """
    Get a list of users with pagination.

    Args:
        session: Database session
        skip: Number of records to skip
        limit: Maximum number of records to return

    Returns:
        List of User objects
    """
    return session.query(User).offset(skip).limit(limit).all()


def get_user_count(session: Session) -> int:
    """Get total count of users."""
    return session.query(func.count(User.user_id)).scalar()


def delete_user(session: Session, user_id: int) -> bool:
    """
    Delete a user together with their reviews.

    Returns:
        True if user was deleted, False if not found
    """
    user = get_user(session, user_id)
    if user:
        session.delete(user)
        session.commit()
        return True
    return False


# ==================== REVIEW CRUD OPERATIONS ====================

def create_review(
    session: Session,
    user_id: int,
    movie_id: int,
    title: str,
    rating: float,
    review: str,
    genres: Optional[List[str]] = None,
    year: Optional[str] = None,
    poster_url: Optional[str] = None,
    watched_date: Optional[datetime] = None
) -> Review:
    """
    Create a new review.

    Args:
        session: Database session
        user_id: Owning user ID
        movie_id: Catalog movie ID
        title: Movie title
        rating: Rating value (0 to 10)
        review: Review text
        genres: Genre names; empty when not yet known
        year: Release year
        poster_url: Poster image URL
        watched_date: When the movie was watched (default: now)

    Returns:
        Created Review object

    Raises:
        ValueError: If rating is out of range or the user already
            reviewed this movie
    """
    _check_rating(rating)

    if get_review_by_movie(session, user_id, movie_id):
        raise ValueError("Review already exists for this movie")

    review_obj = Review(
        user_id=user_id,
        movie_id=movie_id,
        title=title,
        year=year,
        poster_url=poster_url,
        genres=list(genres or []),
        rating=rating,
        review=review,
        watched_date=watched_date or datetime.now()
    )
    session.add(review_obj)
    session.commit()
    session.refresh(review_obj)
    return review_obj


def get_review(session: Session, review_id: int) -> Optional[Review]:
    """
    Get a review by ID.

    Args:
        session: Database session
        review_id: Review ID

    Returns:
        Review object or None if not found
    """
    return session.query(Review).filter(Review.review_id == review_id).first()


def get_user_review(session: Session, user_id: int, review_id: int) -> Optional[Review]:
    """Get a review by ID, only if it belongs to the given user."""
    return session.query(Review).filter(
        and_(Review.review_id == review_id, Review.user_id == user_id)
    ).first()


def get_review_by_movie(
    session: Session,
    user_id: int,
    movie_id: int
) -> Optional[Review]:
    """
    Get a user's review of a specific movie.

    Args:
        session: Database session
        user_id: User ID
        movie_id: Catalog movie ID

    Returns:
        Review object or None if not found
    """
    return session.query(Review).filter(
        and_(Review.user_id == user_id, Review.movie_id == movie_id)
    ).first()


def get_reviews_by_user(
    session: Session,
    user_id: int,
    newest_first: bool = True
) -> List[Review]:
    """
    Get all reviews by a user.

    Args:
        session: Database session
        user_id: User ID
        newest_first: Newest first if True, otherwise in insertion order

    Returns:
        List of Review objects
    """
    query = session.query(Review).filter(Review.user_id == user_id)
    if newest_first:
        query = query.order_by(Review.created_at.desc(), Review.review_id.desc())
    else:
        query = query.order_by(Review.review_id)
    return query.all()


def get_reviews_missing_genres(session: Session, user_id: int) -> List[Review]:
    """Get a user's reviews that have no genre tags yet, oldest first."""
    reviews = session.query(Review).filter(
        Review.user_id == user_id
    ).order_by(Review.review_id).all()
    return [r for r in reviews if not r.genres]


def update_review(
    session: Session,
    user_id: int,
    review_id: int,
    rating: Optional[float] = None,
    review: Optional[str] = None,
    watched_date: Optional[datetime] = None
) -> Optional[Review]:
    """
    Update the mutable fields of a review.

    Only rating, review text and watched date can change; fields left
    as None are kept.

    Returns:
        Updated Review object or None if not found for this user

    Raises:
        ValueError: If rating is out of range
    """
    if rating is not None:
        _check_rating(rating)

    review_obj = get_user_review(session, user_id, review_id)
    if review_obj:
        if rating is not None:
            review_obj.rating = rating
        if review is not None:
            review_obj.review = review
        if watched_date is not None:
            review_obj.watched_date = watched_date
        session.commit()
        session.refresh(review_obj)
    return review_obj


def set_review_genres(
    session: Session,
    review_id: int,
    genres: List[str]
) -> Optional[Review]:
    """
    Replace the genre tags of a review.

    Returns:
        Updated Review object or None if not found
    """
    review_obj = get_review(session, review_id)
    if review_obj:
        review_obj.genres = list(genres)
        session.commit()
        session.refresh(review_obj)
    return review_obj


def delete_review(session: Session, user_id: int, review_id: int) -> bool:
    """
    Delete a user's review.

    Returns:
        True if review was deleted, False if not found for this user
    """
    review_obj = get_user_review(session, user_id, review_id)
    if review_obj:
        session.delete(review_obj)
        session.commit()
        return True
    return False


def get_review_count(session: Session, user_id: Optional[int] = None) -> int:
    """
    Get count of reviews, optionally for a single user.
    """
    query = session.query(func.count(Review.review_id))
    if user_id is not None:
        query = query.filter(Review.user_id == user_id)
    return query.scalar()
