"""
SQLAlchemy ORM models for the movie journal database.

This module defines the User and Review tables. Movie metadata is not
stored locally beyond what a review needs to render; the catalog is the
source of truth for everything else.
"""

from datetime import datetime
from typing import List, Optional
from sqlalchemy import (
    Integer, String, Float, Text, ForeignKey, JSON,
    CheckConstraint, UniqueConstraint, Index, TIMESTAMP
)
from sqlalchemy.orm import DeclarativeBase, relationship, Mapped, mapped_column
from sqlalchemy.sql import func


class Base(DeclarativeBase):
    """Base class for all ORM models."""
    pass


class User(Base):
    """
    User owning a review journal.

    Attributes:
        user_id: Primary key, auto-incremented
        username: Unique display name
        email: Unique contact address
        created_at: Timestamp when record was created
    """
    __tablename__ = 'users'

    user_id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    username: Mapped[str] = mapped_column(String(50), nullable=False, unique=True)
    email: Mapped[str] = mapped_column(String(255), nullable=False, unique=True)
    created_at: Mapped[datetime] = mapped_column(
        TIMESTAMP,
        nullable=False,
        server_default=func.current_timestamp()
    )

    reviews: Mapped[List["Review"]] = relationship(
        "Review",
        back_populates="user",
        cascade="all, delete-orphan"
    )

    def __repr__(self) -> str:
        return f"<User(user_id={self.user_id}, username='{self.username}')>"


class Review(Base):
    """
    A user's review of a single catalog movie.

    Attributes:
        review_id: Primary key, auto-incremented
        user_id: Foreign key to users table
        movie_id: Catalog (TMDB) movie id
        title: Movie title at the time of review
        year: Release year as shown by the catalog
        poster_url: Poster image URL
        genres: JSON list of genre names, empty until known
        rating: Rating value (0 to 10)
        review: Review text
        watched_date: When the user watched the movie
        created_at: Timestamp when review was created
        updated_at: Timestamp when review was last updated
    """
    __tablename__ = 'reviews'

    review_id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    user_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey('users.user_id', ondelete='CASCADE'),
        nullable=False
    )
    movie_id: Mapped[int] = mapped_column(Integer, nullable=False)
    title: Mapped[str] = mapped_column(Text, nullable=False)
    year: Mapped[Optional[str]] = mapped_column(String(10), nullable=True)
    poster_url: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    genres: Mapped[List[str]] = mapped_column(JSON, nullable=False, default=list)
    rating: Mapped[float] = mapped_column(Float, nullable=False)
    review: Mapped[str] = mapped_column(Text, nullable=False)
    watched_date: Mapped[datetime] = mapped_column(
        TIMESTAMP,
        nullable=False,
        server_default=func.current_timestamp()
    )
    created_at: Mapped[datetime] = mapped_column(
        TIMESTAMP,
        nullable=False,
        server_default=func.current_timestamp()
    )
    updated_at: Mapped[datetime] = mapped_column(
        TIMESTAMP,
        nullable=False,
        server_default=func.current_timestamp(),
        onupdate=func.current_timestamp()
    )

    user: Mapped["User"] = relationship("User", back_populates="reviews")

    __table_args__ = (
        CheckConstraint("rating >= 0 AND rating <= 10", name='check_rating_range'),
        UniqueConstraint('user_id', 'movie_id', name='unique_user_movie'),
        Index('idx_reviews_user', 'user_id'),
        Index('idx_reviews_created', 'created_at'),
    )

    def __repr__(self) -> str:
        return f"<Review(review_id={self.review_id}, user_id={self.user_id}, movie_id={self.movie_id}, rating={self.rating})>"
