"""Display catalog for categories, priorities and statuses.

Labels, icon names and colour classes consumed by the UI when rendering
filters and idea cards.
"""

from pydantic import BaseModel

from ideaflow.models.idea import Category, Priority, Status


class CategoryConfig(BaseModel):
    """Presentation settings for one category."""

    id: Category
    label: str
    icon: str
    color: str


CATEGORIES: list[CategoryConfig] = [
    CategoryConfig(
        id=Category.PROJECT_IDEAS,
        label="Project Ideas",
        icon="Lightbulb",
        color="bg-yellow-100 text-yellow-800",
    ),
    CategoryConfig(
        id=Category.BLOG_TOPICS,
        label="Blog Topics",
        icon="PenTool",
        color="bg-blue-100 text-blue-800",
    ),
    CategoryConfig(
        id=Category.TECHNICAL_CONCEPTS,
        label="Technical Concepts",
        icon="Code",
        color="bg-purple-100 text-purple-800",
    ),
    CategoryConfig(
        id=Category.BUSINESS_IDEAS,
        label="Business Ideas",
        icon="Briefcase",
        color="bg-green-100 text-green-800",
    ),
    CategoryConfig(
        id=Category.CREATIVE_PROJECTS,
        label="Creative Projects",
        icon="Palette",
        color="bg-pink-100 text-pink-800",
    ),
    CategoryConfig(
        id=Category.LEARNING_GOALS,
        label="Learning Goals",
        icon="BookOpen",
        color="bg-indigo-100 text-indigo-800",
    ),
    CategoryConfig(
        id=Category.PERSONAL,
        label="Personal",
        icon="User",
        color="bg-gray-100 text-gray-800",
    ),
    CategoryConfig(
        id=Category.OTHER,
        label="Other",
        icon="MoreHorizontal",
        color="bg-orange-100 text-orange-800",
    ),
]

PRIORITY_COLORS: dict[Priority, str] = {
    Priority.HIGH: "bg-red-100 text-red-800 border-red-200",
    Priority.MEDIUM: "bg-yellow-100 text-yellow-800 border-yellow-200",
    Priority.LOW: "bg-green-100 text-green-800 border-green-200",
}

STATUS_COLORS: dict[Status, str] = {
    Status.NEW: "bg-blue-100 text-blue-800",
    Status.IN_PROGRESS: "bg-orange-100 text-orange-800",
    Status.COMPLETED: "bg-green-100 text-green-800",
    Status.ARCHIVED: "bg-gray-100 text-gray-800",
}


def get_category_config(category: Category) -> CategoryConfig:
    """Return the catalog entry for a category."""
    for config in CATEGORIES:
        if config.id == category:
            return config
    raise KeyError(category)
