"""
Post storage.

Route handlers depend on the PostStore protocol, not on a database handle,
so tests can substitute an in-memory implementation.
"""
from __future__ import annotations

import logging
from typing import Protocol

from sqlalchemy import Engine, inspect, text
from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import Session, select

from posts_api.config import Settings
from posts_api.db.engine import create_db_engine, ping
from posts_api.db.models import Post
from posts_api.errors import StoreError

logger = logging.getLogger(__name__)

PUBLIC_TABLES_QUERY = text(
    "SELECT table_name FROM information_schema.tables WHERE table_schema='public'"
)


class PostStore(Protocol):
    """Storage capability needed by the HTTP layer."""

    def list_posts(self) -> list[Post]:
        ...

    def insert_post(self, title: str, content: str) -> Post:
        ...

    def list_table_names(self) -> list[str]:
        ...

    def close(self) -> None:
        ...


class SQLPostStore:
    """
    PostStore backed by a SQLAlchemy engine.

    The engine's pool is shared by all requests; each call opens its own
    session. Driver errors are re-raised as StoreError.
    """

    def __init__(self, engine: Engine):
        self.engine = engine

    @classmethod
    def connect(cls, settings: Settings) -> SQLPostStore:
        """
        Build the engine from settings and verify the database answers.

        Raises:
            DatabaseConnectionError: the engine could not be created or pinged
        """
        engine = create_db_engine(settings.database_url, echo=settings.DB_ECHO)
        try:
            ping(engine)
        except Exception:
            engine.dispose()
            raise
        logger.info("connected to the database", extra={"dialect": engine.dialect.name})
        return cls(engine)

    def list_posts(self) -> list[Post]:
        try:
            with Session(self.engine) as session:
                return list(session.exec(select(Post)).all())
        except SQLAlchemyError as e:
            raise StoreError(str(e)) from e

    def insert_post(self, title: str, content: str) -> Post:
        """Insert a post and return it with the id the database assigned."""
        post = Post(title=title, content=content)
        try:
            with Session(self.engine) as session:
                session.add(post)
                session.commit()
                session.refresh(post)
                return post
        except SQLAlchemyError as e:
            raise StoreError(str(e)) from e

    def list_table_names(self) -> list[str]:
        """
        Names of the tables in the public schema.

        PostgreSQL is asked through information_schema; other databases
        (SQLite during development) report their default schema.
        """
        try:
            with self.engine.connect() as conn:
                if self.engine.dialect.name == "postgresql":
                    return [row[0] for row in conn.execute(PUBLIC_TABLES_QUERY)]
                return inspect(conn).get_table_names()
        except SQLAlchemyError as e:
            raise StoreError(str(e)) from e

    def close(self) -> None:
        self.engine.dispose()
