"""FastAPI application with lifespan, health endpoint and store error mapping."""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from ideaflow.api import ideas_router, session_router
from ideaflow.auth.session import Session, SessionProvider
from ideaflow.config import Settings, get_settings
from ideaflow.logging_config import configure_logging
from ideaflow.models.catalog import CATEGORIES, PRIORITY_COLORS, STATUS_COLORS
from ideaflow.storage.base import IdeaBackend
from ideaflow.storage.client import close_client
from ideaflow.storage.errors import ErrorKind, StoreError
from ideaflow.storage.local import LocalBackend
from ideaflow.storage.remote import RemoteBackend
from ideaflow.storage.store import IdeaStore

logger = logging.getLogger(__name__)

_STATUS_BY_KIND = {
    ErrorKind.NOT_FOUND: 404,
    ErrorKind.UNAUTHORIZED: 401,
    ErrorKind.TRANSIENT: 503,
    ErrorKind.UNKNOWN: 500,
}


def build_backend(settings: Settings) -> IdeaBackend:
    """Select the persistence medium configured by ``storage_backend``."""
    if settings.storage_backend == "remote":
        return RemoteBackend()
    return LocalBackend(settings.data_dir, settings.storage_key)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan: configure logging, build the store, sign in locally."""
    settings = get_settings()
    configure_logging(settings.log_level)
    app.state.settings = settings

    sessions = SessionProvider()
    store = IdeaStore(build_backend(settings), sessions)
    app.state.sessions = sessions
    app.state.store = store
    logger.info("Idea store ready", extra={"backend": settings.storage_backend})

    if settings.storage_backend == "local":
        await sessions.sign_in(Session(user_id=settings.local_user_id))

    yield

    store.close()
    await close_client()


app = FastAPI(
    title="IdeaFlow",
    lifespan=lifespan,
)
app.include_router(ideas_router)
app.include_router(session_router)


@app.exception_handler(StoreError)
async def store_error_handler(request: Request, exc: StoreError) -> JSONResponse:
    """Render a StoreError as JSON with a status code matching its kind."""
    return JSONResponse(
        status_code=_STATUS_BY_KIND[exc.kind],
        content={"error": exc.kind.value, "detail": exc.message},
    )


@app.get("/health")
async def health():
    """Health check endpoint."""
    return {
        "status": "ok",
        "service": "ideaflow",
        "version": "0.1.0",
    }


@app.get("/catalog")
async def catalog():
    """Category labels, icons and colours plus priority/status colours."""
    return {
        "categories": [config.model_dump(mode="json") for config in CATEGORIES],
        "priorityColors": {priority.value: color for priority, color in PRIORITY_COLORS.items()},
        "statusColors": {status.value: color for status, color in STATUS_COLORS.items()},
    }
