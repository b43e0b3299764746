#!/usr/bin/env python
"""
Backfill genre tags on reviews saved without any.

Looks up each untagged review's movie in TMDB and stores its genres,
one review at a time. Requires TMDB_API_KEY in the environment.

Usage:
    # Backfill a single user
    python scripts/backfill_genres.py --user-id 1

    # Backfill every user
    python scripts/backfill_genres.py --all-users
"""

import sys
import asyncio
import argparse
import logging

from cinelog.api.config import get_tmdb_api_key, get_tmdb_base_url, get_tmdb_timeout
from cinelog.catalog import TMDBClient, TMDBCatalog
from cinelog.core.recommendations import RecommendationEngine, BackfillResult, DEFAULT_GENRE_IDS
from cinelog.database import get_db_manager, SQLReviewStore, crud
from cinelog.database.connection import DEFAULT_DB_PATH
from cinelog.utils.logging_config import configure_script_logging

logger = logging.getLogger("backfill_genres")


async def backfill(db_path: str, user_ids, all_users: bool) -> BackfillResult:
    """Run the backfill for the selected users and return the summed counts."""
    db_manager = get_db_manager(db_path=db_path)
    client = TMDBClient(
        api_key=get_tmdb_api_key(),
        base_url=get_tmdb_base_url(),
        timeout=get_tmdb_timeout(),
    )
    catalog = TMDBCatalog(client)
    total = BackfillResult()

    try:
        with db_manager.session_scope() as session:
            if all_users:
                user_ids = [u.user_id for u in crud.get_users(session, limit=100000)]

            engine = RecommendationEngine(SQLReviewStore(session), catalog, DEFAULT_GENRE_IDS)
            for user_id in user_ids:
                if not crud.get_user(session, user_id):
                    logger.warning(f"User {user_id} not found, skipping")
                    continue
                result = await engine.backfill_genres(user_id)
                total.updated += result.updated
                total.failed += result.failed
    finally:
        client.close()

    return total


def main():
    """Main entry point for genre backfill."""
    parser = argparse.ArgumentParser(description="Backfill genre tags on reviews")
    target = parser.add_mutually_exclusive_group(required=True)
    target.add_argument(
        '--user-id',
        type=int,
        action='append',
        help='User to backfill (repeatable)'
    )
    target.add_argument(
        '--all-users',
        action='store_true',
        help='Backfill every user in the database'
    )
    parser.add_argument(
        '--db-path',
        type=str,
        default=DEFAULT_DB_PATH,
        help=f'Path to SQLite database file (default: {DEFAULT_DB_PATH})'
    )
    parser.add_argument('--debug', action='store_true', help='Enable debug logging')

    args = parser.parse_args()
    configure_script_logging(debug=args.debug)

    if not get_tmdb_api_key():
        logger.error("TMDB_API_KEY is not set")
        sys.exit(1)

    result = asyncio.run(backfill(args.db_path, args.user_id or [], args.all_users))
    print(f"Updated {result.updated} reviews, {result.failed} failed.")
    sys.exit(1 if result.failed else 0)


if __name__ == "__main__":
    main()
