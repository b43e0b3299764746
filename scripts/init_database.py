#!/usr/bin/env python
"""
Create the Cinelog database schema.

Usage:
    # Create missing tables
    python scripts/init_database.py

    # Drop and recreate everything (WARNING: deletes all data)
    python scripts/init_database.py --reset
"""

import sys
import argparse

from cinelog.database import init_database, verify_schema
from cinelog.database.connection import DEFAULT_DB_PATH
from cinelog.utils.logging_config import configure_script_logging


def main():
    """Main entry point for database initialization."""
    parser = argparse.ArgumentParser(description="Initialize the Cinelog database")
    parser.add_argument(
        '--reset',
        action='store_true',
        help='Drop and recreate database tables (WARNING: deletes all data)'
    )
    parser.add_argument(
        '--db-path',
        type=str,
        default=DEFAULT_DB_PATH,
        help=f'Path to SQLite database file (default: {DEFAULT_DB_PATH})'
    )
    args = parser.parse_args()

    configure_script_logging()
    db_manager = init_database(db_path=args.db_path, reset=args.reset)
    sys.exit(0 if verify_schema(db_manager) else 1)


if __name__ == "__main__":
    main()
