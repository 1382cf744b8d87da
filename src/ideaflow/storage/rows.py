"""Pure functions mapping between Idea models and remote table rows.

The remote backend stores ideas in an ``ideas`` table and their resources
in an ``idea_resources`` table. Enum columns are plain text on the server,
so every row is validated on the way in: an unknown category, priority,
status or resource type is rejected rather than carried into the model.
"""

from datetime import datetime
from enum import Enum

from pydantic import ValidationError

from ideaflow.models.idea import Idea, Resource
from ideaflow.storage.errors import ErrorKind, StoreError

# Idea attributes stored as columns of the ideas table.
IDEA_COLUMNS = (
    "title",
    "description",
    "category",
    "priority",
    "status",
    "tags",
    "reminder_date",
    "created_at",
    "updated_at",
)


def _iso(value: datetime | None) -> str | None:
    return value.isoformat() if value is not None else None


def _column_value(value):
    if isinstance(value, datetime):
        return value.isoformat()
    if isinstance(value, Enum):
        return value.value
    return value


def idea_to_row(idea: Idea, user_id: str) -> dict:
    """Map an Idea to an ``ideas`` insert row (resources excluded)."""
    return {
        "id": idea.id,
        "user_id": user_id,
        "title": idea.title,
        "description": idea.description,
        "category": idea.category.value,
        "priority": idea.priority.value,
        "status": idea.status.value,
        "tags": list(idea.tags),
        "reminder_date": _iso(idea.reminder_date),
        "created_at": idea.created_at.isoformat(),
        "updated_at": idea.updated_at.isoformat(),
    }


def changes_to_row(changes: dict) -> dict:
    """Map a dict of changed Idea attributes to an ``ideas`` update row.

    Keys outside IDEA_COLUMNS (notably ``resources``) are ignored.
    """
    return {key: _column_value(value) for key, value in changes.items() if key in IDEA_COLUMNS}


def resource_to_row(resource: Resource, idea_id: str) -> dict:
    """Map a Resource to an ``idea_resources`` insert row.

    Link previews have no column on the server and are dropped.
    """
    return {
        "id": resource.id,
        "idea_id": idea_id,
        "type": resource.type.value,
        "title": resource.title,
        "url": resource.url,
        "content": resource.content,
        "created_at": resource.created_at.isoformat(),
    }


def row_to_resource(row: dict) -> Resource:
    return Resource(
        id=row["id"],
        type=row["type"],
        title=row["title"],
        url=row.get("url"),
        content=row.get("content"),
        created_at=row["created_at"],
    )


def row_to_idea(row: dict) -> Idea:
    """Parse an ``ideas`` row with embedded ``idea_resources`` into an Idea.

    Resources keep the order returned by the server. Raises StoreError
    (UNKNOWN) when the row holds a value outside the closed enumerations
    or is otherwise malformed.
    """
    try:
        resources = [row_to_resource(r) for r in row.get("idea_resources") or []]
        return Idea(
            id=row["id"],
            title=row["title"],
            description=row.get("description") or "",
            category=row["category"],
            priority=row["priority"],
            status=row["status"],
            tags=row.get("tags") or [],
            resources=resources,
            created_at=row["created_at"],
            updated_at=row["updated_at"],
            reminder_date=row.get("reminder_date"),
        )
    except (KeyError, ValidationError) as exc:
        raise StoreError(
            ErrorKind.UNKNOWN,
            f"Invalid idea row {row.get('id', '<no id>')!r}: {exc}",
        ) from exc
