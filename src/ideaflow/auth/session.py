"""Current-user session state with change notification.

The identity provider (Supabase Auth in remote mode, a fixed local user in
local mode) decides who is signed in; this module only holds the result and
tells subscribers when it changes.
"""

import logging
from collections.abc import Awaitable, Callable

from pydantic import BaseModel

logger = logging.getLogger(__name__)


class Session(BaseModel):
    """An authenticated user context."""

    user_id: str
    email: str | None = None
    access_token: str | None = None


SessionListener = Callable[[Session | None], Awaitable[None]]


class SessionProvider:
    """Holds the active session (or none) and notifies listeners on transitions."""

    def __init__(self) -> None:
        self._session: Session | None = None
        self._listeners: list[SessionListener] = []

    @property
    def current(self) -> Session | None:
        return self._session

    def subscribe(self, listener: SessionListener) -> Callable[[], None]:
        """Register an async listener. Returns a callable that unsubscribes it."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    async def sign_in(self, session: Session) -> None:
        """Make ``session`` current and notify listeners in subscription order."""
        self._session = session
        logger.info("Session started", extra={"user_id": session.user_id})
        await self._notify()

    async def sign_out(self) -> None:
        """Clear the current session. No-op when nobody is signed in."""
        if self._session is None:
            return
        logger.info("Session ended", extra={"user_id": self._session.user_id})
        self._session = None
        await self._notify()

    async def _notify(self) -> None:
        for listener in list(self._listeners):
            await listener(self._session)
