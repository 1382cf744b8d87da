"""FastAPI dependencies exposing the per-application store and session provider."""

from fastapi import Request

from ideaflow.auth.session import SessionProvider
from ideaflow.storage.store import IdeaStore


def get_store(request: Request) -> IdeaStore:
    return request.app.state.store


def get_sessions(request: Request) -> SessionProvider:
    return request.app.state.sessions
