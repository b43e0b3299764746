"""
FastAPI dependency injection for database session, catalog and engine.
"""

import logging
from typing import Generator

from fastapi import Depends
from sqlalchemy.orm import Session

from cinelog.database.connection import get_db_manager
from cinelog.database.review_store import SQLReviewStore
from cinelog.catalog.client import TMDBClient
from cinelog.catalog.tmdb import TMDBCatalog
from cinelog.core.recommendations import RecommendationEngine, DEFAULT_GENRE_IDS
from cinelog.api.config import (
    get_database_path,
    get_tmdb_api_key,
    get_tmdb_base_url,
    get_tmdb_timeout,
)

logger = logging.getLogger(__name__)


def get_db() -> Generator[Session, None, None]:
    """Yield database session for FastAPI Depends()."""
    db_manager = get_db_manager(db_path=get_database_path())
    with db_manager.session_scope() as session:
        yield session


# Singleton catalog; the underlying requests.Session pools connections
_catalog: TMDBCatalog | None = None


def get_catalog() -> TMDBCatalog:
    """Get or create singleton TMDBCatalog."""
    global _catalog
    if _catalog is None:
        api_key = get_tmdb_api_key()
        if not api_key:
            logger.warning("TMDB_API_KEY is not set; catalog lookups will fail")
        client = TMDBClient(
            api_key=api_key,
            base_url=get_tmdb_base_url(),
            timeout=get_tmdb_timeout(),
        )
        _catalog = TMDBCatalog(client)
    return _catalog


def get_recommendation_engine(
    db: Session = Depends(get_db),
    catalog: TMDBCatalog = Depends(get_catalog),
) -> RecommendationEngine:
    """Build a RecommendationEngine bound to the request's session."""
    return RecommendationEngine(SQLReviewStore(db), catalog, DEFAULT_GENRE_IDS)
