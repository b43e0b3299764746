"""
SQLite engine and session handling for the review journal.

A single DatabaseManager is shared by the API and the scripts; tests build
their own over ":memory:".
"""

import os
from contextlib import contextmanager
from typing import Generator, Optional

from sqlalchemy import create_engine, event
from sqlalchemy.orm import sessionmaker, Session
from sqlalchemy.pool import StaticPool

from cinelog.database.models import Base


DEFAULT_DB_PATH = "data/cinelog.db"
IN_MEMORY = ":memory:"


def get_database_url(db_path: str = DEFAULT_DB_PATH) -> str:
    """
    Turn a database location into a SQLAlchemy URL.

    Accepts a file path, ":memory:" or an existing sqlite URL. The parent
    directory of a file path is created if missing.
    """
    if db_path.startswith("sqlite:"):
        return db_path
    if db_path == IN_MEMORY:
        return "sqlite://"

    db_dir = os.path.dirname(db_path)
    if db_dir:
        os.makedirs(db_dir, exist_ok=True)
    return f"sqlite:///{os.path.abspath(db_path)}"


def _enable_foreign_keys(dbapi_conn, connection_record):
    # Review rows cascade with their user only when SQLite enforces FKs
    cursor = dbapi_conn.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


class DatabaseManager:
    """
    Owns the engine and session factory for one database.

    Sessions don't expire on commit, so reviews returned by crud stay
    readable after the request's transaction ends.
    """

    def __init__(self, db_path: str = DEFAULT_DB_PATH, echo: bool = False):
        """
        Args:
            db_path: SQLite file path, ":memory:" or sqlite URL
            echo: Log every SQL statement
        """
        self.db_path = db_path
        self.database_url = get_database_url(db_path)

        # One shared connection: keeps ":memory:" alive across sessions and
        # lets FastAPI's threadpool reuse it
        self.engine = create_engine(
            self.database_url,
            echo=echo,
            connect_args={"check_same_thread": False},
            poolclass=StaticPool
        )
        event.listen(self.engine, "connect", _enable_foreign_keys)

        self.SessionLocal = sessionmaker(
            bind=self.engine,
            autoflush=False,
            expire_on_commit=False,
        )

    def create_tables(self):
        """Create the users and reviews tables if they don't exist yet."""
        Base.metadata.create_all(bind=self.engine)

    def drop_tables(self):
        """Drop all tables. Every user and review is lost."""
        Base.metadata.drop_all(bind=self.engine)

    def reset_database(self):
        self.drop_tables()
        self.create_tables()

    def get_session(self) -> Session:
        """New session; the caller closes it."""
        return self.SessionLocal()

    @contextmanager
    def session_scope(self) -> Generator[Session, None, None]:
        """
        Session committed on success, rolled back on error, always closed.

        Usage:
            with db_manager.session_scope() as session:
                crud.create_user(session, "alice", "alice@example.com")
        """
        session = self.SessionLocal()
        try:
            yield session
            session.commit()
        except Exception:
            session.rollback()
            raise
        finally:
            session.close()

    def close(self):
        """Dispose of the engine's connections."""
        self.engine.dispose()


_db_manager: Optional[DatabaseManager] = None


def get_db_manager(db_path: str = DEFAULT_DB_PATH, echo: bool = False) -> DatabaseManager:
    """
    Return the process-wide DatabaseManager, creating it and its tables on
    first call. Later calls ignore `db_path`.
    """
    global _db_manager
    if _db_manager is None:
        _db_manager = DatabaseManager(db_path=db_path, echo=echo)
        _db_manager.create_tables()
    return _db_manager
