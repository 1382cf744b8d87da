"""HTTP routers for ideas and sessions."""

from ideaflow.api.ideas import router as ideas_router
from ideaflow.api.session import router as session_router

__all__ = ["ideas_router", "session_router"]
