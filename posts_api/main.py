"""
FastAPI application factory.

`create_app(store)` wires the routes to an explicitly constructed post store.
Without a store, the app connects on startup using the environment settings
and refuses to start if configuration or the database is unavailable.
"""
import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from posts_api.config import get_settings
from posts_api.db.store import PostStore, SQLPostStore
from posts_api.errors import PostsAPIError
from posts_api.log import LOGGER_NAME, configure_logging
from posts_api.routes import router

logger = logging.getLogger(LOGGER_NAME)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Connect on startup when no store was injected; dispose on shutdown."""
    owns_store = app.state.store is None

    if owns_store:
        try:
            settings = get_settings()
            configure_logging(settings.LOG_LEVEL)
            app.state.store = SQLPostStore.connect(settings)
        except PostsAPIError as e:
            logger.error({"msg": "startup_failed", "error": str(e)})
            raise
        logger.info({"msg": "database_connected"})

    yield

    if owns_store:
        app.state.store.close()
        app.state.store = None
        logger.info({"msg": "database_closed"})


def create_app(store: Optional[PostStore] = None) -> FastAPI:
    """
    Build the application.

    Args:
        store: post store to serve from. None means connect from settings
            during startup.
    """
    app = FastAPI(
        title="Posts API",
        version="0.1.0",
        description="List tables, list posts and create posts",
        lifespan=lifespan,
    )
    app.state.store = store

    app.include_router(router)

    @app.exception_handler(Exception)
    async def global_exception_handler(request: Request, exc: Exception):
        """Global exception handler for unhandled errors."""
        logger.error({"msg": "unhandled_error", "path": request.url.path, "error": str(exc)})
        return JSONResponse(
            status_code=500,
            content={"detail": f"Internal server error: {exc}"},
        )

    @app.middleware("http")
    async def log_requests(request: Request, call_next):
        logger.info({"msg": "request_start", "method": request.method, "path": request.url.path})
        response = await call_next(request)
        logger.info({
            "msg": "request_end",
            "method": request.method,
            "path": request.url.path,
            "status": response.status_code,
        })
        return response

    return app


app = create_app()
