"""
API tests for the recommendations endpoint.
"""

from cinelog.catalog import CatalogError
from conftest import movies


def create_user(client):
    r = client.post("/api/users", json={"username": "cinephile", "email": "cine@example.com"})
    return r.json()["user_id"]


class TestRecommendationEndpoints:
    """Tests for GET /api/recommendations/{user_id}."""

    def test_cold_start_returns_popular(self, client, fake_catalog):
        user_id = create_user(client)
        fake_catalog.popular = movies(5, 3, 9)

        r = client.get(f"/api/recommendations/{user_id}")

        assert r.status_code == 200
        data = r.json()
        assert data["user_id"] == user_id
        assert data["n"] == 3
        assert [m["movie_id"] for m in data["results"]] == [5, 3, 9]

    def test_personalized(self, client, fake_catalog):
        user_id = create_user(client)
        fake_catalog.genres = {603: ["Action"]}
        client.post(f"/api/users/{user_id}/reviews", json={
            "movie_id": 603, "title": "The Matrix", "rating": 9, "review": "Great.",
        })
        fake_catalog.similar = {603: movies(603, 604, 605)}
        fake_catalog.discovered = movies(605, 606)
        fake_catalog.popular = movies(*range(700, 720))

        data = client.get(f"/api/recommendations/{user_id}").json()

        ids = [m["movie_id"] for m in data["results"]]
        assert ids[:3] == [604, 605, 606]
        assert 603 not in ids
        assert data["n"] == len(ids) == 20
        assert fake_catalog.calls_to("discover") == [("discover", [28], 6.5, True)]

    def test_unknown_user(self, client):
        assert client.get("/api/recommendations/999999").status_code == 404

    def test_catalog_unavailable(self, client, fake_catalog):
        user_id = create_user(client)
        fake_catalog.popular = CatalogError("down")

        r = client.get(f"/api/recommendations/{user_id}")

        assert r.status_code == 503
        assert "unavailable" in r.json()["detail"].lower()
