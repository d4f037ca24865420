"""
Dependency injection for FastAPI routes.

The post store is constructed once (by the app factory or the CLI) and held
on app.state; handlers receive it through StoreDep.
"""
from typing import Annotated

from fastapi import Depends, HTTPException, Request
from pydantic import ValidationError

from posts_api.db.store import PostStore
from posts_api.schemas import PostIn, describe_validation_errors


def get_store(request: Request) -> PostStore:
    """
    Store dependency for FastAPI routes.

    Usage:
        @router.get("/items")
        def list_items(store: StoreDep):
            return store.list_posts()
    """
    store = request.app.state.store
    if store is None:
        raise RuntimeError("post store is not initialized")
    return store


async def decode_post_body(request: Request) -> PostIn:
    """
    Decode the raw request body as a JSON post, whatever the Content-Type.

    Raises:
        HTTPException: 400 when the body is not a JSON post object
    """
    body = await request.body()
    try:
        return PostIn.model_validate_json(body)
    except ValidationError as e:
        raise HTTPException(
            status_code=400,
            detail=f"Failed to decode JSON: {describe_validation_errors(e)}",
        ) from e


# === Type Aliases ===

StoreDep = Annotated[PostStore, Depends(get_store)]
PostBody = Annotated[PostIn, Depends(decode_post_body)]
