"""
Movie catalog package.

This package contains:
- The catalog contract consumed by the recommendation engine
- The TMDB HTTP client and the async TMDB catalog built on it
- Pydantic models for catalog movies
"""

from cinelog.catalog.base import CatalogError, CatalogService
from cinelog.catalog.client import TMDBClient
from cinelog.catalog.models import CandidateMovie, MovieDetails
from cinelog.catalog.tmdb import TMDBCatalog

__all__ = [
    'CatalogError',
    'CatalogService',
    'TMDBClient',
    'TMDBCatalog',
    'CandidateMovie',
    'MovieDetails',
]
