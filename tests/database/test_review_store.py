"""
Tests for the SQL-backed review store and the engine running on top of it.
"""

import asyncio

import pytest

from cinelog.catalog import CatalogError
from cinelog.core.recommendations import DEFAULT_GENRE_IDS, RecommendationEngine
from cinelog.database import SQLReviewStore, crud
from conftest import movies


@pytest.fixture
def user(session):
    return crud.create_user(session, username="cinephile", email="cine@example.com")


@pytest.fixture
def store(session):
    return SQLReviewStore(session)


def add_review(session, user, movie_id, rating, genres=()):
    return crud.create_review(
        session,
        user_id=user.user_id,
        movie_id=movie_id,
        title=f"Movie {movie_id}",
        rating=rating,
        review="Seen it.",
        genres=list(genres),
    )


class TestSQLReviewStore:

    def test_lists_reviews_in_insertion_order(self, session, store, user):
        for movie_id in (30, 10, 20):
            add_review(session, user, movie_id, 7)

        assert [r.movie_id for r in store.list_reviews_for_user(user.user_id)] == [30, 10, 20]

    def test_lists_only_untagged_reviews(self, session, store, user):
        add_review(session, user, 1, 7, ["Drama"])
        add_review(session, user, 2, 7)

        assert [r.movie_id for r in store.list_reviews_missing_genres(user.user_id)] == [2]

    def test_set_review_genres_persists(self, session, store, user):
        review = add_review(session, user, 1, 7)

        store.set_review_genres(review.review_id, ["Comedy", "Romance"])

        session.expire_all()
        assert crud.get_review(session, review.review_id).genres == ["Comedy", "Romance"]

    def test_set_review_genres_missing_review(self, store):
        with pytest.raises(LookupError):
            store.set_review_genres(12345, ["Drama"])


class TestEngineOnDatabase:

    def test_backfill_writes_genres(self, session, store, user, fake_catalog):
        add_review(session, user, 1, 8)
        add_review(session, user, 2, 6)
        add_review(session, user, 3, 9)
        add_review(session, user, 4, 9, ["Horror"])
        fake_catalog.genres = {1: ["Drama"], 2: CatalogError("HTTP 500"), 3: ["Action"]}
        engine = RecommendationEngine(store, fake_catalog, DEFAULT_GENRE_IDS)

        result = asyncio.run(engine.backfill_genres(user.user_id))

        assert result.to_dict() == {"updated": 2, "failed": 1}
        session.expire_all()
        assert [r.genres for r in store.list_reviews_for_user(user.user_id)] == [
            ["Drama"], [], ["Action"], ["Horror"],
        ]

    def test_recommend_excludes_stored_reviews(self, session, store, user, fake_catalog):
        add_review(session, user, 1, 9, ["Drama"])
        add_review(session, user, 2, 4, ["Drama"])
        fake_catalog.similar = {1: movies(2, 100)}
        fake_catalog.discovered = movies(1, 101)
        fake_catalog.popular = movies(102)
        engine = RecommendationEngine(store, fake_catalog, DEFAULT_GENRE_IDS)

        result = asyncio.run(engine.recommend(user.user_id))

        assert [m.movie_id for m in result] == [100, 101, 102]
        assert fake_catalog.calls_to("discover") == [("discover", [18], 6.5, True)]
