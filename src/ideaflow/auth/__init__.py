"""Session state and identity-provider token verification."""

from ideaflow.auth.session import Session, SessionListener, SessionProvider
from ideaflow.auth.identity import invalidate_token_cache, verify_access_token

__all__ = [
    "invalidate_token_cache",
    "Session",
    "SessionListener",
    "SessionProvider",
    "verify_access_token",
]
