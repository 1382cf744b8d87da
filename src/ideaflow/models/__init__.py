"""Data models and enums for ideas, resources and filters."""

from ideaflow.models.catalog import CATEGORIES, CategoryConfig, get_category_config
from ideaflow.models.filters import FilterCriteria
from ideaflow.models.idea import (
    Category,
    Idea,
    IdeaInput,
    IdeaPatch,
    LinkPreview,
    Priority,
    Resource,
    ResourceInput,
    ResourceType,
    Status,
    parse_tags,
)

__all__ = [
    "CATEGORIES",
    "Category",
    "CategoryConfig",
    "FilterCriteria",
    "get_category_config",
    "Idea",
    "IdeaInput",
    "IdeaPatch",
    "LinkPreview",
    "Priority",
    "Resource",
    "ResourceInput",
    "ResourceType",
    "Status",
    "parse_tags",
]
