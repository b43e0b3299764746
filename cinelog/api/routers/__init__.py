"""
API route handlers.
"""

from cinelog.api.routers import users, reviews, movies, recommendations, system

__all__ = ["users", "reviews", "movies", "recommendations", "system"]
