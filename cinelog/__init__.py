"""
Cinelog movie journal application package.

This package contains the review store, the movie catalog client,
the genre-weighted recommendation engine and the HTTP API.
"""

__version__ = "1.0.0"
