"""Local JSON-blob persistence.

The whole idea list lives in one file named after a fixed storage key.
Timestamps are ISO-8601 strings and are parsed back into datetimes on load.
A missing or unparseable blob is treated as an empty list; invalid records
are skipped one by one.
"""

import asyncio
import logging
import os
from pathlib import Path
from typing import Any

from pydantic import TypeAdapter, ValidationError

from ideaflow.auth.session import Session
from ideaflow.models.idea import Idea
from ideaflow.storage.base import IdeaBackend
from ideaflow.storage.errors import ErrorKind, StoreError

logger = logging.getLogger(__name__)

DEFAULT_STORAGE_KEY = "ideaflow-ideas"

_IDEA_LIST = TypeAdapter(list[Idea])
_RECORD_LIST = TypeAdapter(list[Any])


class LocalBackend(IdeaBackend):
    """Device-scoped storage: one blob holds every idea, regardless of user."""

    def __init__(self, data_dir: Path, storage_key: str = DEFAULT_STORAGE_KEY) -> None:
        self.path = Path(data_dir) / f"{storage_key}.json"

    def load(self) -> list[Idea]:
        """Read the blob.

        A missing or unparseable blob yields an empty list. Records that fail
        validation are skipped individually so the valid ideas survive. Either
        way the original bytes are kept beside the blob as ``<name>.corrupt``
        before the next save overwrites them.
        """
        try:
            raw = self.path.read_bytes()
        except FileNotFoundError:
            return []
        if not raw.strip():
            return []
        try:
            records = _RECORD_LIST.validate_json(raw)
        except ValidationError as exc:
            logger.warning(
                "Discarding corrupt idea blob",
                extra={"path": str(self.path), "error": str(exc)},
            )
            self._preserve(raw)
            return []

        ideas: list[Idea] = []
        skipped = 0
        for index, record in enumerate(records):
            try:
                ideas.append(Idea.model_validate(record))
            except ValidationError as exc:
                skipped += 1
                logger.warning(
                    "Skipping invalid idea record",
                    extra={"path": str(self.path), "index": index, "error": str(exc)},
                )
        if skipped:
            self._preserve(raw)
        return ideas

    def save(self, ideas: list[Idea]) -> None:
        """Write the full list atomically (temp file + rename)."""
        self.path.parent.mkdir(parents=True, exist_ok=True)
        tmp_path = self.path.with_name(self.path.name + ".tmp")
        try:
            tmp_path.write_bytes(_IDEA_LIST.dump_json(ideas, by_alias=True, indent=2))
            os.replace(tmp_path, self.path)
        except OSError:
            tmp_path.unlink(missing_ok=True)
            raise

    @property
    def corrupt_path(self) -> Path:
        return self.path.with_name(self.path.name + ".corrupt")

    def _preserve(self, raw: bytes) -> None:
        self.corrupt_path.write_bytes(raw)

    async def fetch_ideas(self, session: Session) -> list[Idea]:
        return await asyncio.to_thread(self.load)

    async def insert_idea(self, session: Session, idea: Idea) -> None:
        await asyncio.to_thread(self._insert, idea)

    async def update_idea(self, session: Session, idea: Idea, changed: set[str]) -> None:
        await asyncio.to_thread(self._replace, idea)

    async def delete_idea(self, session: Session, idea_id: str) -> None:
        await asyncio.to_thread(self._delete, idea_id)

    def _insert(self, idea: Idea) -> None:
        ideas = self.load()
        ideas.insert(0, idea)
        self.save(ideas)

    def _replace(self, idea: Idea) -> None:
        ideas = self.load()
        for index, existing in enumerate(ideas):
            if existing.id == idea.id:
                ideas[index] = idea
                self.save(ideas)
                return
        raise StoreError(ErrorKind.NOT_FOUND, f"Idea {idea.id} not found")

    def _delete(self, idea_id: str) -> None:
        ideas = self.load()
        remaining = [idea for idea in ideas if idea.id != idea_id]
        if len(remaining) == len(ideas):
            raise StoreError(ErrorKind.NOT_FOUND, f"Idea {idea_id} not found")
        self.save(remaining)
