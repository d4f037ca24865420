"""
Engine construction and connectivity checks.
"""
import logging
from typing import Any

import psycopg
from sqlalchemy import Engine, text
from sqlalchemy.engine import make_url
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.pool import StaticPool
from sqlmodel import Session, create_engine, select, func

from posts_api.db.models import Post
from posts_api.errors import DatabaseConnectionError

logger = logging.getLogger(__name__)


def is_conninfo(value: str) -> bool:
    """True for libpq keyword/value strings, False for URLs."""
    return "://" not in value and "=" in value


def create_db_engine(url: str, echo: bool = False) -> Engine:
    """
    Create the SQLAlchemy engine (and its connection pool).

    SQLite URLs are allowed for local development and tests. An in-memory
    SQLite database is shared through a single connection so every session
    sees the same tables.

    A libpq keyword/value string ("host=db user=app dbname=blog") is handed
    to psycopg as-is.
    """
    kwargs: dict[str, Any] = {"echo": echo, "pool_pre_ping": True}

    if is_conninfo(url):
        conninfo = url
        kwargs["creator"] = lambda: psycopg.connect(conninfo)
        url = "postgresql+psycopg://"
        parsed = make_url(url)
    else:
        try:
            parsed = make_url(url)
        except SQLAlchemyError as e:
            raise DatabaseConnectionError(f"Invalid database URL: {e}") from e

    if parsed.get_backend_name() == "sqlite":
        kwargs["connect_args"] = {"check_same_thread": False}
        if parsed.database in (None, "", ":memory:"):
            kwargs["poolclass"] = StaticPool

    try:
        return create_engine(url, **kwargs)
    except (SQLAlchemyError, ImportError) as e:
        raise DatabaseConnectionError(f"Failed to create database engine: {e}") from e


def ping(engine: Engine) -> None:
    """
    Open a connection and run a trivial query.

    Raises:
        DatabaseConnectionError: connecting or querying failed
    """
    try:
        with engine.connect() as conn:
            conn.execute(text("SELECT 1"))
    except SQLAlchemyError as e:
        raise DatabaseConnectionError(f"Failed to ping the database: {e}") from e


def check_db_health(engine: Engine) -> dict[str, Any]:
    """
    Check database connectivity and count posts.

    Returns:
        Dict with status and table counts, or the error text
    """
    try:
        with Session(engine) as session:
            post_count = session.exec(select(func.count(Post.id))).one()

            return {
                "status": "healthy",
                "counts": {
                    "posts": post_count,
                }
            }
    except SQLAlchemyError as e:
        logger.warning("database health check failed: %s", e)
        return {
            "status": "unhealthy",
            "error": str(e)
        }
