"""
Recommendation engine package.

This package contains:
- Pure scoring helpers (seed selection, genre weights, deduplication)
- The default genre vocabulary mapping
- The RecommendationEngine orchestrating catalog lookups
"""

from cinelog.core.recommendations.engine import (
    BackfillResult,
    CatalogUnavailableError,
    RecommendationEngine,
    ReviewStore,
)
from cinelog.core.recommendations.genres import DEFAULT_GENRE_IDS

__all__ = [
    'BackfillResult',
    'CatalogUnavailableError',
    'RecommendationEngine',
    'ReviewStore',
    'DEFAULT_GENRE_IDS',
]
