"""Idea and resource models mirroring the stored idea record."""

from datetime import datetime, timezone
from enum import Enum
from typing import Annotated

from pydantic import (
    AfterValidator,
    BaseModel,
    ConfigDict,
    Field,
    field_validator,
    model_validator,
)
from pydantic.alias_generators import to_camel


class Category(str, Enum):
    """Fixed categories for ideas (8 values)."""

    PROJECT_IDEAS = "project-ideas"
    BLOG_TOPICS = "blog-topics"
    TECHNICAL_CONCEPTS = "technical-concepts"
    BUSINESS_IDEAS = "business-ideas"
    CREATIVE_PROJECTS = "creative-projects"
    LEARNING_GOALS = "learning-goals"
    PERSONAL = "personal"
    OTHER = "other"


class Priority(str, Enum):
    """Priority levels for ideas."""

    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"


class Status(str, Enum):
    """Workflow status of an idea."""

    NEW = "new"
    IN_PROGRESS = "in-progress"
    COMPLETED = "completed"
    ARCHIVED = "archived"


class ResourceType(str, Enum):
    """Kind of resource attached to an idea."""

    LINK = "link"
    FILE = "file"
    NOTE = "note"


class CamelModel(BaseModel):
    """Base model serialized with camelCase keys (createdAt, reminderDate)."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


def _as_utc(value: datetime) -> datetime:
    # Naive timestamps are taken to be UTC so every stored instant compares.
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


UtcDatetime = Annotated[datetime, AfterValidator(_as_utc)]


def parse_tags(text: str) -> list[str]:
    """Split comma-separated tag input into a list. Pure function.

    Whitespace around each tag is stripped and empty entries are dropped.
    Order is preserved and duplicates are kept.
    """
    return [tag.strip() for tag in text.split(",") if tag.strip()]


class LinkPreview(CamelModel):
    """Preview metadata for a link resource."""

    title: str
    description: str
    image: str | None = None
    domain: str


class Resource(CamelModel):
    """A link, file reference or free-text note owned by one idea."""

    id: str
    type: ResourceType
    title: str
    url: str | None = None
    content: str | None = None
    preview: LinkPreview | None = None
    created_at: UtcDatetime


class Idea(CamelModel):
    """A captured idea with its metadata and attached resources."""

    id: str
    title: str
    description: str = ""
    category: Category
    priority: Priority
    status: Status = Status.NEW
    tags: list[str] = []
    resources: list[Resource] = []
    created_at: UtcDatetime
    updated_at: UtcDatetime
    reminder_date: UtcDatetime | None = None

    @model_validator(mode="after")
    def _check_timestamps(self) -> "Idea":
        if self.updated_at < self.created_at:
            raise ValueError("updatedAt must not precede createdAt")
        return self


class ResourceInput(CamelModel):
    """Resource payload; id and createdAt are assigned by the store when missing."""

    id: str | None = None
    type: ResourceType = ResourceType.LINK
    title: str
    url: str | None = None
    content: str | None = None
    preview: LinkPreview | None = None
    created_at: UtcDatetime | None = None


class IdeaInput(CamelModel):
    """Quick-capture payload. Status is always forced to ``new`` on create."""

    title: str = Field(min_length=1)
    description: str = ""
    category: Category = Category.OTHER
    priority: Priority = Priority.MEDIUM
    status: Status = Status.NEW
    tags: list[str] = []
    resources: list[ResourceInput] = []
    reminder_date: UtcDatetime | None = None

    @field_validator("tags", mode="before")
    @classmethod
    def _split_tag_text(cls, value):
        if isinstance(value, str):
            return parse_tags(value)
        return value


# Fields of Idea that may never be cleared to null through a patch.
_NON_NULLABLE = ("title", "description", "category", "priority", "status", "tags", "resources")


class IdeaPatch(CamelModel):
    """Partial update. Only fields explicitly present are applied."""

    title: Annotated[str, Field(min_length=1)] | None = None
    description: str | None = None
    category: Category | None = None
    priority: Priority | None = None
    status: Status | None = None
    tags: list[str] | None = None
    resources: list[ResourceInput] | None = None
    reminder_date: UtcDatetime | None = None

    @field_validator("tags", mode="before")
    @classmethod
    def _split_tag_text(cls, value):
        if isinstance(value, str):
            return parse_tags(value)
        return value

    @model_validator(mode="after")
    def _reject_null_required(self) -> "IdeaPatch":
        for name in _NON_NULLABLE:
            if name in self.model_fields_set and getattr(self, name) is None:
                raise ValueError(f"{name} cannot be null")
        return self
