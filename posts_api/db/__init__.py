"""
Database module - models, engine and the post store.

Uses SQLModel over a SQLAlchemy engine (PostgreSQL via psycopg, or SQLite).
"""

from posts_api.db import engine, models, store

__all__ = ["engine", "models", "store"]
