"""Remote persistence over the Supabase REST (PostgREST) API.

Ideas live in the ``ideas`` table, owned by ``user_id``; resources live in
``idea_resources``, owned by ``idea_id``. Every request on ``ideas`` is
filtered by the session's user id, and resources are only touched after
the owning idea has been confirmed to belong to that user.

Partial failures:
- create: when resources cannot be inserted the idea row is deleted again
  (compensating rollback) and a StoreError is raised.
- update: resources are replaced by delete-all-then-insert; a failure after
  the delete raises a StoreError saying the resources were cleared.
"""

import logging

import httpx

from ideaflow.auth.session import Session
from ideaflow.models.idea import Idea
from ideaflow.storage.base import IdeaBackend
from ideaflow.storage.client import get_http_client
from ideaflow.storage.errors import ErrorKind, StoreError, translate_error
from ideaflow.storage.rows import changes_to_row, idea_to_row, resource_to_row, row_to_idea

logger = logging.getLogger(__name__)

_IDEAS_PATH = "/rest/v1/ideas"
_RESOURCES_PATH = "/rest/v1/idea_resources"


class RemoteBackend(IdeaBackend):
    """Supabase-backed storage scoped to the signed-in user."""

    def __init__(self, client: httpx.AsyncClient | None = None) -> None:
        self._client = client

    @property
    def client(self) -> httpx.AsyncClient:
        return self._client if self._client is not None else get_http_client()

    @staticmethod
    def _headers(session: Session, prefer: str | None = None) -> dict:
        headers = {}
        if session.access_token:
            headers["Authorization"] = f"Bearer {session.access_token}"
        if prefer:
            headers["Prefer"] = prefer
        return headers

    async def fetch_ideas(self, session: Session) -> list[Idea]:
        response = await self.client.get(
            _IDEAS_PATH,
            params={
                "select": "*,idea_resources(*)",
                "user_id": f"eq.{session.user_id}",
                "order": "created_at.desc",
                "idea_resources.order": "created_at.asc",
            },
            headers=self._headers(session),
        )
        response.raise_for_status()
        return [row_to_idea(row) for row in response.json()]

    async def insert_idea(self, session: Session, idea: Idea) -> None:
        response = await self.client.post(
            _IDEAS_PATH,
            json=idea_to_row(idea, session.user_id),
            headers=self._headers(session, prefer="return=minimal"),
        )
        response.raise_for_status()

        if not idea.resources:
            return

        try:
            await self._insert_resources(session, idea)
        except httpx.HTTPError as exc:
            error = translate_error(exc)
            try:
                await self._delete_idea_row(session, idea.id)
            except httpx.HTTPError as rollback_exc:
                logger.error(
                    "Rollback failed after resource insert failure",
                    extra={"idea_id": idea.id, "error": str(rollback_exc)},
                )
                raise StoreError(
                    error.kind,
                    f"Idea {idea.id} was saved without its resources and could not be "
                    f"rolled back: {error.message}",
                ) from exc
            logger.warning(
                "Rolled back idea after resource insert failure",
                extra={"idea_id": idea.id, "error": error.message},
            )
            raise StoreError(
                error.kind,
                f"Resources could not be saved, idea was not created: {error.message}",
            ) from exc

    async def update_idea(self, session: Session, idea: Idea, changed: set[str]) -> None:
        row = changes_to_row({name: getattr(idea, name) for name in changed})
        response = await self.client.patch(
            _IDEAS_PATH,
            params={"id": f"eq.{idea.id}", "user_id": f"eq.{session.user_id}"},
            json=row,
            headers=self._headers(session, prefer="return=representation"),
        )
        response.raise_for_status()
        if not response.json():
            raise StoreError(ErrorKind.NOT_FOUND, f"Idea {idea.id} not found")

        if "resources" not in changed:
            return

        await self._delete_resources(session, idea.id)
        try:
            await self._insert_resources(session, idea)
        except httpx.HTTPError as exc:
            error = translate_error(exc)
            raise StoreError(
                error.kind,
                f"Resources of idea {idea.id} were cleared but the new set could not "
                f"be saved: {error.message}",
            ) from exc

    async def delete_idea(self, session: Session, idea_id: str) -> None:
        response = await self.client.get(
            _IDEAS_PATH,
            params={"select": "id", "id": f"eq.{idea_id}", "user_id": f"eq.{session.user_id}"},
            headers=self._headers(session),
        )
        response.raise_for_status()
        if not response.json():
            raise StoreError(ErrorKind.NOT_FOUND, f"Idea {idea_id} not found")

        await self._delete_resources(session, idea_id)
        await self._delete_idea_row(session, idea_id)

    async def _insert_resources(self, session: Session, idea: Idea) -> None:
        if not idea.resources:
            return
        response = await self.client.post(
            _RESOURCES_PATH,
            json=[resource_to_row(resource, idea.id) for resource in idea.resources],
            headers=self._headers(session, prefer="return=minimal"),
        )
        response.raise_for_status()

    async def _delete_resources(self, session: Session, idea_id: str) -> None:
        response = await self.client.delete(
            _RESOURCES_PATH,
            params={"idea_id": f"eq.{idea_id}"},
            headers=self._headers(session),
        )
        response.raise_for_status()

    async def _delete_idea_row(self, session: Session, idea_id: str) -> None:
        response = await self.client.delete(
            _IDEAS_PATH,
            params={"id": f"eq.{idea_id}", "user_id": f"eq.{session.user_id}"},
            headers=self._headers(session),
        )
        response.raise_for_status()
