"""
API tests for catalog browsing endpoints.
"""

from unittest.mock import MagicMock

from cinelog.api.dependencies import get_catalog
from cinelog.api.main import app
from cinelog.catalog import CatalogError, MovieDetails, TMDBCatalog
from conftest import movies


class TestMovieEndpoints:

    def test_search(self, client, fake_catalog):
        fake_catalog.search_results = movies(603, 604)

        r = client.get("/api/movies/search", params={"q": "matrix"})

        assert r.status_code == 200
        assert [m["movie_id"] for m in r.json()["results"]] == [603, 604]
        assert fake_catalog.calls_to("search") == [("search", "matrix")]

    def test_search_requires_query(self, client):
        assert client.get("/api/movies/search").status_code == 422

    def test_popular(self, client, fake_catalog):
        fake_catalog.popular = movies(1, 2, 3)

        assert len(client.get("/api/movies/popular").json()["results"]) == 3

    def test_trending(self, client, fake_catalog):
        fake_catalog.trending = movies(9)

        assert client.get("/api/movies/trending").json()["results"][0]["movie_id"] == 9

    def test_catalog_failure_returns_503(self, client, fake_catalog):
        fake_catalog.popular = CatalogError("HTTP 500")

        assert client.get("/api/movies/popular").status_code == 503
        assert client.get("/api/movies/top-rated").status_code == 503

    def test_movie_details(self, client, fake_catalog):
        fake_catalog.details = {
            603: MovieDetails(movie_id=603, title="The Matrix", year="1999", genres=["Action"], runtime=136)
        }

        r = client.get("/api/movies/603")

        assert r.status_code == 200
        assert r.json()["genres"] == ["Action"]

    def test_movie_details_not_found(self, client):
        assert client.get("/api/movies/1").status_code == 404

    def test_movie_details_catalog_down(self, client, fake_catalog):
        fake_catalog.details = {603: CatalogError("HTTP 502", status_code=502)}

        assert client.get("/api/movies/603").status_code == 503

    def test_malformed_catalog_payload_returns_503(self, client):
        tmdb_client = MagicMock(**{"get.return_value": {"results": [{"title": "No id"}]}})
        app.dependency_overrides[get_catalog] = lambda: TMDBCatalog(tmdb_client)

        assert client.get("/api/movies/popular").status_code == 503
        assert client.get("/api/movies/603").status_code == 503
