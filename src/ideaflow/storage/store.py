"""The Idea Store: owner of the current user's in-memory idea list.

All reads go through ``list()``/``get()`` and all mutations through
``create``/``update``/``delete``. The snapshot is an immutable tuple that is
swapped in a single assignment, so readers never observe a half-applied
change. Persistence faults are translated into StoreError at this boundary.
"""

import asyncio
import logging
from datetime import datetime, timezone
from enum import Enum
from uuid import uuid4

from url_normalize import url_normalize

from ideaflow.auth.session import Session, SessionProvider
from ideaflow.models.idea import (
    Idea,
    IdeaInput,
    IdeaPatch,
    Priority,
    Resource,
    ResourceInput,
    ResourceType,
    Status,
)
from ideaflow.storage.base import IdeaBackend
from ideaflow.storage.errors import ErrorKind, StoreError, translate_error

logger = logging.getLogger(__name__)


class StoreState(str, Enum):
    """Lifecycle of a store instance, driven by session changes."""

    UNINITIALIZED = "uninitialized"
    LOADING = "loading"
    READY = "ready"
    EMPTY = "empty"


def _now() -> datetime:
    return datetime.now(timezone.utc)


def _new_id() -> str:
    return str(uuid4())


def build_resource(data: ResourceInput, now: datetime) -> Resource:
    """Turn a resource payload into a Resource, assigning id and createdAt if missing.

    Link URLs are normalized (scheme and host lower-cased, default ports and
    dot segments removed).
    """
    url = data.url
    if data.type == ResourceType.LINK and url:
        url = url_normalize(url)
    return Resource(
        id=data.id or _new_id(),
        type=data.type,
        title=data.title,
        url=url,
        content=data.content,
        preview=data.preview,
        created_at=data.created_at or now,
    )


class IdeaStore:
    """Single point of truth for the signed-in user's ideas."""

    def __init__(self, backend: IdeaBackend, sessions: SessionProvider) -> None:
        self._backend = backend
        self._sessions = sessions
        self._ideas: tuple[Idea, ...] = ()
        self._state = StoreState.UNINITIALIZED
        self._generation = 0
        self._write_lock = asyncio.Lock()
        self._unsubscribe = sessions.subscribe(self._on_session_change)

    @property
    def state(self) -> StoreState:
        return self._state

    def list(self) -> list[Idea]:
        """Return the current snapshot. Never triggers a reload."""
        return list(self._ideas)

    def get(self, idea_id: str) -> Idea:
        """Return one idea from the snapshot or raise StoreError(NOT_FOUND)."""
        for idea in self._ideas:
            if idea.id == idea_id:
                return idea
        raise StoreError(ErrorKind.NOT_FOUND, f"Idea {idea_id} not found")

    def close(self) -> None:
        """Stop following session changes."""
        self._unsubscribe()

    async def refresh(self) -> None:
        """Reload every idea of the current user, newest first.

        Without a session the snapshot is cleared and the store becomes
        EMPTY. A refresh that completes after a newer refresh (or a session
        change) has started is discarded, so the snapshot always comes from
        exactly one refresh. On failure the previous snapshot is kept.
        """
        self._generation += 1
        generation = self._generation
        session = self._sessions.current

        if session is None:
            self._ideas = ()
            self._state = StoreState.EMPTY
            return

        previous_state = self._state
        self._state = StoreState.LOADING
        try:
            fetched = await self._backend.fetch_ideas(session)
            ideas = tuple(sorted(fetched, key=lambda idea: idea.created_at, reverse=True))
        except Exception as exc:
            error = translate_error(exc)
            if generation == self._generation:
                self._state = previous_state
            logger.warning(
                "Idea refresh failed",
                extra={"user_id": session.user_id, "kind": error.kind.value, "error": error.message},
            )
            raise error from exc

        if generation != self._generation:
            logger.info("Discarding superseded refresh", extra={"user_id": session.user_id})
            return

        self._ideas = ideas
        self._state = StoreState.READY
        logger.info("Ideas loaded", extra={"user_id": session.user_id, "count": len(self._ideas)})

    async def create(self, data: IdeaInput) -> Idea:
        """Persist a new idea. Status is always ``new``; id and timestamps are assigned."""
        session = self._require_session()
        now = _now()
        idea = Idea(
            id=_new_id(),
            title=data.title,
            description=data.description,
            category=data.category,
            priority=data.priority,
            status=Status.NEW,
            tags=list(data.tags),
            resources=[build_resource(r, now) for r in data.resources],
            created_at=now,
            updated_at=now,
            reminder_date=data.reminder_date,
        )

        async with self._write_lock:
            try:
                await self._backend.insert_idea(session, idea)
            except Exception as exc:
                raise self._failure("create", exc, idea.id) from exc
            if self._sessions.current == session:
                self._ideas = (idea, *self._ideas)

        logger.info("Idea created", extra={"idea_id": idea.id, "resources": len(idea.resources)})
        return idea

    async def update(self, idea_id: str, patch: IdeaPatch) -> Idea:
        """Apply the fields present in ``patch`` and bump ``updated_at``.

        A ``resources`` entry replaces the whole resource set. Raises
        StoreError(NOT_FOUND) if the idea is not in the current user's set.
        """
        session = self._require_session()

        async with self._write_lock:
            current = self.get(idea_id)
            now = _now()
            changes = {name: getattr(patch, name) for name in patch.model_fields_set}
            if "resources" in changes:
                changes["resources"] = [build_resource(r, now) for r in changes["resources"]]
            changes["updated_at"] = now
            updated = current.model_copy(update=changes)

            try:
                await self._backend.update_idea(session, updated, set(changes))
            except Exception as exc:
                error = self._failure("update", exc, idea_id)
                if "resources" in changes:
                    await self._resync()
                raise error from exc

            if self._sessions.current == session:
                self._ideas = tuple(updated if i.id == idea_id else i for i in self._ideas)

        logger.info("Idea updated", extra={"idea_id": idea_id, "fields": sorted(changes)})
        return updated

    async def update_status(self, idea_id: str, status: Status) -> Idea:
        return await self.update(idea_id, IdeaPatch(status=status))

    async def update_priority(self, idea_id: str, priority: Priority) -> Idea:
        return await self.update(idea_id, IdeaPatch(priority=priority))

    async def delete(self, idea_id: str) -> None:
        """Remove an idea and its resources. Raises StoreError(NOT_FOUND) if absent."""
        session = self._require_session()

        async with self._write_lock:
            self.get(idea_id)
            try:
                await self._backend.delete_idea(session, idea_id)
            except Exception as exc:
                raise self._failure("delete", exc, idea_id) from exc
            if self._sessions.current == session:
                self._ideas = tuple(i for i in self._ideas if i.id != idea_id)

        logger.info("Idea deleted", extra={"idea_id": idea_id})

    def _require_session(self) -> Session:
        session = self._sessions.current
        if session is None:
            raise StoreError(ErrorKind.UNAUTHORIZED, "No active session")
        return session

    def _failure(self, operation: str, exc: Exception, idea_id: str) -> StoreError:
        error = translate_error(exc)
        logger.warning(
            "Idea %s failed",
            operation,
            extra={"idea_id": idea_id, "kind": error.kind.value, "error": error.message},
        )
        return error

    async def _resync(self) -> None:
        """Reload after a partially applied write so the snapshot matches storage."""
        try:
            await self.refresh()
        except StoreError as exc:
            logger.warning("Resync after partial write failed", extra={"error": exc.message})

    async def _on_session_change(self, session: Session | None) -> None:
        try:
            await self.refresh()
        except StoreError as exc:
            logger.warning(
                "Refresh after session change failed",
                extra={"kind": exc.kind.value, "error": exc.message},
            )
