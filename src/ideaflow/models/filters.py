"""Filter criteria for narrowing the visible idea list."""

from pydantic import BaseModel

from ideaflow.models.idea import Category, Priority, Status


class FilterCriteria(BaseModel):
    """Optional predicates combined as a conjunction. Never persisted."""

    category: Category | None = None
    priority: Priority | None = None
    status: Status | None = None
    search: str = ""
    tags: list[str] = []

    def is_empty(self) -> bool:
        """True when no predicate is active."""
        return (
            self.category is None
            and self.priority is None
            and self.status is None
            and not self.search
            and not self.tags
        )
