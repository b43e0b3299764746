"""
API configuration loaded from environment or defaults.
"""

import os
from pathlib import Path

from cinelog.catalog.client import DEFAULT_BASE_URL


def get_database_path() -> str:
    """Get DATABASE_URL (sqlite URL or file path), defaulting to data/cinelog.db."""
    return os.getenv("DATABASE_URL") or str(
        Path(__file__).resolve().parents[2] / "data" / "cinelog.db"
    )


def get_log_level() -> str:
    """Get log level from env or default."""
    return os.getenv("LOG_LEVEL", "INFO").upper()


def get_api_host() -> str:
    """Get API host for binding."""
    return os.getenv("API_HOST", "0.0.0.0")


def get_api_port() -> int:
    """Get API port."""
    return int(os.getenv("API_PORT", "8000"))


def get_tmdb_api_key() -> str:
    """Get TMDB v3 API key. Empty when unset; TMDB then answers 401."""
    return os.getenv("TMDB_API_KEY", "")


def get_tmdb_base_url() -> str:
    """Get TMDB API root URL."""
    return os.getenv("TMDB_BASE_URL", DEFAULT_BASE_URL)


def get_tmdb_timeout() -> float:
    """Get per-request TMDB timeout in seconds."""
    return float(os.getenv("TMDB_TIMEOUT", "10"))
