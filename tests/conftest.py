"""
Shared fixtures: in-memory and SQLite-backed post stores, and test clients.
"""
import itertools
import threading

import pytest
from fastapi.testclient import TestClient
from sqlmodel import SQLModel

from posts_api.config import get_settings
from posts_api.db.engine import create_db_engine
from posts_api.db.models import Post
from posts_api.db.store import SQLPostStore
from posts_api.errors import StoreError
from posts_api.main import create_app


class InMemoryPostStore:
    """PostStore kept in a list; ids count up from 1."""

    def __init__(self, tables=("posts",)):
        self.posts: list[Post] = []
        self.tables = list(tables)
        self.closed = False
        self._ids = itertools.count(1)
        self._lock = threading.Lock()

    def list_posts(self) -> list[Post]:
        with self._lock:
            return list(self.posts)

    def insert_post(self, title: str, content: str) -> Post:
        with self._lock:
            post = Post(id=next(self._ids), title=title, content=content)
            self.posts.append(post)
            return post

    def list_table_names(self) -> list[str]:
        return list(self.tables)

    def close(self) -> None:
        self.closed = True


class FailingPostStore:
    """PostStore whose every operation fails like a dropped connection."""

    def __init__(self, message: str = "connection reset by peer"):
        self.message = message

    def list_posts(self):
        raise StoreError(self.message)

    def insert_post(self, title, content):
        raise StoreError(self.message)

    def list_table_names(self):
        raise StoreError(self.message)

    def close(self) -> None:
        pass


@pytest.fixture(autouse=True)
def clear_settings_cache():
    """Every test reads the environment afresh."""
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def memory_store():
    return InMemoryPostStore()


@pytest.fixture
def client(memory_store):
    """Test client over the in-memory store."""
    return TestClient(create_app(memory_store))


@pytest.fixture
def failing_client():
    return TestClient(create_app(FailingPostStore()))


@pytest.fixture
def sql_store():
    """SQLPostStore over an in-memory SQLite database with the posts table."""
    engine = create_db_engine("sqlite://")
    SQLModel.metadata.create_all(engine)
    store = SQLPostStore(engine)
    yield store
    store.close()


@pytest.fixture
def sql_client(sql_store):
    return TestClient(create_app(sql_store))


@pytest.fixture
def make_client():
    """Build a client over a fresh in-memory store with the given tables."""
    def _make(tables=("posts",), **client_kwargs):
        store = InMemoryPostStore(tables=tables)
        return TestClient(create_app(store), **client_kwargs), store
    return _make


@pytest.fixture
def file_sql_client(tmp_path):
    """Client over a file-backed SQLite database, so requests get separate pooled connections."""
    engine = create_db_engine(f"sqlite:///{tmp_path}/posts.db")
    SQLModel.metadata.create_all(engine)
    store = SQLPostStore(engine)
    yield TestClient(create_app(store))
    store.close()
