"""
Shared fixtures: in-memory database, fake catalog and fake review store.
"""

import itertools
from types import SimpleNamespace

import pytest
from fastapi.testclient import TestClient

from cinelog.api.dependencies import get_catalog, get_db
from cinelog.api.main import app
from cinelog.catalog import CandidateMovie, CatalogError, MovieDetails
from cinelog.database.connection import DatabaseManager


def movie(movie_id, title=None, rating=7.0, vote_count=100):
    """Build a CandidateMovie with sensible defaults."""
    return CandidateMovie(
        movie_id=movie_id,
        title=title or f"Movie {movie_id}",
        year="2020",
        rating=rating,
        vote_count=vote_count,
    )


def movies(*ids):
    return [movie(i) for i in ids]


class FakeCatalog:
    """
    In-memory catalog.

    Any configured value that is an exception instance is raised instead
    of returned.
    """

    def __init__(self):
        self.popular = []
        self.similar = {}
        self.discovered = []
        self.genres = {}
        self.details = {}
        self.search_results = []
        self.trending = []
        self.calls = []

    @staticmethod
    def _answer(value):
        if isinstance(value, Exception):
            raise value
        return list(value)

    async def get_popular(self):
        self.calls.append(("popular",))
        return self._answer(self.popular)

    async def get_similar_to(self, movie_id):
        self.calls.append(("similar", movie_id))
        return self._answer(self.similar.get(movie_id, []))

    async def discover(self, genre_ids, min_rating=None, sort_descending_by_rating=False):
        self.calls.append(("discover", list(genre_ids), min_rating, sort_descending_by_rating))
        return self._answer(self.discovered)

    async def get_genres(self, movie_id):
        self.calls.append(("genres", movie_id))
        return self._answer(self.genres.get(movie_id, []))

    async def get_movie_details(self, movie_id):
        value = self.details.get(movie_id)
        if value is None:
            raise CatalogError("TMDB returned HTTP 404", status_code=404)
        if isinstance(value, Exception):
            raise value
        return value

    async def search_movies_with_franchise(self, query):
        self.calls.append(("search", query))
        return self._answer(self.search_results)

    async def get_trending(self):
        return self._answer(self.trending)

    async def get_top_rated(self):
        return self._answer(self.popular)

    async def get_now_playing(self):
        return self._answer(self.popular)

    def calls_to(self, name):
        return [c for c in self.calls if c[0] == name]


class FakeReviewStore:
    """Review store over a plain list, in insertion order."""

    def __init__(self, reviews=None):
        self.reviews = list(reviews or [])
        self.saved = {}
        self.fail_saves_for = set()

    def list_reviews_for_user(self, user_id):
        return [r for r in self.reviews if r.user_id == user_id]

    def list_reviews_missing_genres(self, user_id):
        return [r for r in self.list_reviews_for_user(user_id) if not r.genres]

    def set_review_genres(self, review_id, genres):
        if review_id in self.fail_saves_for:
            raise RuntimeError("database is locked")
        for r in self.reviews:
            if r.review_id == review_id:
                r.genres = list(genres)
                self.saved[review_id] = list(genres)
                return
        raise LookupError(f"Review {review_id} not found")


@pytest.fixture
def fake_catalog():
    return FakeCatalog()


@pytest.fixture
def make_review():
    """Factory for review-like objects owned by user 1."""
    ids = itertools.count(1)

    def _make(movie_id, rating, genres=None, user_id=1, title=None):
        return SimpleNamespace(
            review_id=next(ids),
            user_id=user_id,
            movie_id=movie_id,
            title=title or f"Reviewed {movie_id}",
            rating=rating,
            genres=list(genres) if genres else [],
        )

    return _make


@pytest.fixture
def db_manager():
    """Fresh in-memory database per test."""
    manager = DatabaseManager(db_path=":memory:")
    manager.create_tables()
    yield manager
    manager.close()


@pytest.fixture
def session(db_manager):
    """Create a new database session for testing."""
    session = db_manager.get_session()
    yield session
    session.close()


@pytest.fixture
def client(db_manager, fake_catalog):
    """TestClient wired to the in-memory database and the fake catalog."""

    def override_get_db():
        with db_manager.session_scope() as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_catalog] = lambda: fake_catalog
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()
