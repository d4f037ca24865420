"""
HTTP route handlers.

Each handler takes the post store as an explicit dependency. Storage
failures become HTTP 500 responses carrying the underlying error text.
"""
import html
import logging

from fastapi import APIRouter, HTTPException
from fastapi.responses import HTMLResponse

from posts_api.deps import PostBody, StoreDep
from posts_api.errors import StoreError
from posts_api.schemas import PostOut

logger = logging.getLogger(__name__)

router = APIRouter()


def _storage_failure(prefix: str, exc: StoreError) -> HTTPException:
    detail = f"{prefix}: {exc}"
    logger.error(detail)
    return HTTPException(status_code=500, detail=detail)


@router.get("/", response_class=HTMLResponse)
def list_tables(store: StoreDep):
    """Render the public tables of the database as an HTML list."""
    try:
        names = store.list_table_names()
    except StoreError as e:
        raise _storage_failure("Failed to query database", e) from e

    items = "".join(f"<li>{html.escape(name)}</li>" for name in names)
    return f"<h1>Public Tables in the Database</h1><ul>{items}</ul>"


@router.get("/api/posts", response_model=list[PostOut])
def list_posts(store: StoreDep):
    """
    List every post.

    Order is whatever the database returns. An empty table gives [].
    """
    try:
        posts = store.list_posts()
    except StoreError as e:
        raise _storage_failure("Failed to query posts", e) from e

    return [PostOut.model_validate(p) for p in posts]


@router.post("/api/posts/create", response_model=PostOut, status_code=201)
def create_post(payload: PostBody, store: StoreDep):
    """Insert a post and return it with its assigned id."""
    try:
        post = store.insert_post(payload.title, payload.content)
    except StoreError as e:
        raise _storage_failure("Failed to insert post", e) from e

    return PostOut.model_validate(post)
