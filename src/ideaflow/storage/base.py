"""Abstract persistence medium for idea records."""

from abc import ABC, abstractmethod

from ideaflow.auth.session import Session
from ideaflow.models.idea import Idea


class IdeaBackend(ABC):
    """Async CRUD over the ideas (and their resources) owned by a session's user.

    Implementations may raise any transport or I/O exception; the store
    translates them into StoreError. They raise StoreError(NOT_FOUND)
    themselves when an idea to update or delete does not exist.
    """

    @abstractmethod
    async def fetch_ideas(self, session: Session) -> list[Idea]:
        """Return every idea of the session's user with nested resources."""

    @abstractmethod
    async def insert_idea(self, session: Session, idea: Idea) -> None:
        """Persist a new idea together with its resources."""

    @abstractmethod
    async def update_idea(self, session: Session, idea: Idea, changed: set[str]) -> None:
        """Persist ``idea`` whose fields named in ``changed`` were modified.

        When ``resources`` is in ``changed`` the stored resource set is
        replaced wholesale by ``idea.resources``.
        """

    @abstractmethod
    async def delete_idea(self, session: Session, idea_id: str) -> None:
        """Remove an idea and all of its resources."""
