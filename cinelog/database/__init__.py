"""
Database module for the movie journal.

This module provides database models, connection management, CRUD operations
and the review store used by the recommendation engine.
"""

from cinelog.database.models import Base, User, Review
from cinelog.database.connection import DatabaseManager, get_db_manager
from cinelog.database.init_db import init_database, verify_schema
from cinelog.database.review_store import SQLReviewStore
from cinelog.database import crud

__all__ = [
    # Models
    'Base',
    'User',
    'Review',
    # Connection
    'DatabaseManager',
    'get_db_manager',
    # Initialization
    'init_database',
    'verify_schema',
    # Store
    'SQLReviewStore',
    # CRUD module
    'crud',
]
