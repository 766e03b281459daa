"""
Database Connection Module for the Compliance Gap Analysis core

Features:
- Engine built lazily from Settings (Postgres pooling, SQLite for local/tests)
- Retry logic with exponential backoff for connection-level operations
- Context manager support for sessions
- Health check and table creation utilities
"""

import logging
import time
from contextlib import contextmanager
from typing import Generator, Optional

from sqlalchemy import text
from sqlalchemy.engine import Engine
from sqlalchemy.exc import OperationalError
from sqlmodel import Session, SQLModel, create_engine

from config import Settings, load_settings

logger = logging.getLogger(__name__)

_engine: Optional[Engine] = None


def build_engine(settings: Settings) -> Engine:
    """
    Create an engine for the configured database URL.

    Postgres gets connection pooling; SQLite gets a thread-tolerant
    connection so the parallel gap-analysis reads can share the file.
    """
    url = settings.database_url

    if url.startswith("sqlite"):
        return create_engine(
            url,
            echo=settings.sql_echo,
            connect_args={"check_same_thread": False},
        )

    return create_engine(
        url,
        echo=settings.sql_echo,
        pool_size=settings.pool_size,
        max_overflow=settings.max_overflow,
        pool_pre_ping=True,  # Verify connections before use
        pool_recycle=300,    # Recycle connections after 5 minutes
        connect_args={"connect_timeout": 10},
    )


def get_engine() -> Engine:
    """Return the process-wide engine, creating it on first use."""
    global _engine
    if _engine is None:
        _engine = build_engine(load_settings())
    return _engine


def set_engine(engine: Optional[Engine]):
    """Replace the process-wide engine (tests, scripts)."""
    global _engine
    _engine = engine


def retry_with_backoff(func, max_retries: int = 3, base_delay: float = 1.0):
    """
    Retry a function with exponential backoff.

    Args:
        func: Function to retry
        max_retries: Maximum number of retry attempts
        base_delay: Base delay in seconds (doubles each retry)

    Returns:
        Result of the function

    Raises:
        Last exception if all retries fail
    """
    last_exception = None

    for attempt in range(max_retries):
        try:
            return func()
        except OperationalError as e:
            last_exception = e
            if attempt < max_retries - 1:
                delay = base_delay * (2 ** attempt)
                logger.warning(
                    "Database connection failed (attempt %d/%d). Retrying in %ss...",
                    attempt + 1, max_retries, delay,
                )
                time.sleep(delay)
            else:
                logger.error("Database connection failed after %d attempts.", max_retries)

    raise last_exception


@contextmanager
def get_session(engine: Optional[Engine] = None) -> Generator[Session, None, None]:
    """
    Context manager for database sessions with automatic cleanup.

    Usage:
        with get_session() as session:
            session.add(document)
            session.commit()
    """
    session = Session(engine or get_engine())
    try:
        yield session
    except Exception:
        session.rollback()
        raise
    finally:
        session.close()


def create_tables(engine: Optional[Engine] = None):
    """
    Create all tables defined in SQLModel models.
    Safe to call multiple times - only creates tables that don't exist.
    """
    # Register table metadata
    import models  # noqa: F401

    def _create():
        SQLModel.metadata.create_all(engine or get_engine())
        return True

    return retry_with_backoff(_create)


def health_check(engine: Optional[Engine] = None) -> dict:
    """
    Verify database connectivity and return status.

    Returns:
        dict with keys:
            - connected: bool
            - dialect: str (e.g. postgresql, sqlite)
            - error: str (if not connected)
    """
    bound = engine or get_engine()

    def _check():
        with Session(bound) as session:
            session.execute(text("SELECT 1"))
            return {
                "connected": True,
                "dialect": bound.dialect.name,
                "error": None
            }

    try:
        return retry_with_backoff(_check)
    except Exception as e:
        return {
            "connected": False,
            "dialect": bound.dialect.name,
            "error": str(e)
        }


def drop_tables(engine: Optional[Engine] = None):
    """
    Drop all tables. USE WITH CAUTION - for development only.
    """
    SQLModel.metadata.drop_all(engine or get_engine())
