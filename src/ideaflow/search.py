"""In-memory filtering and tag aggregation over idea lists.

All functions here are pure: no I/O, no mutation of the input, and the
relative order of the input list is preserved.
"""

from collections import Counter
from collections.abc import Iterable, Sequence

from ideaflow.models.filters import FilterCriteria
from ideaflow.models.idea import Category, Idea, Status


def _matches_search(idea: Idea, needle: str) -> bool:
    """Case-insensitive substring match on title, description or any tag."""
    if needle in idea.title.casefold():
        return True
    if needle in idea.description.casefold():
        return True
    return any(needle in tag.casefold() for tag in idea.tags)


def _matches(idea: Idea, criteria: FilterCriteria, needle: str) -> bool:
    if needle and not _matches_search(idea, needle):
        return False

    if criteria.category is not None and idea.category != criteria.category:
        return False

    if criteria.priority is not None and idea.priority != criteria.priority:
        return False

    if criteria.status is not None and idea.status != criteria.status:
        return False

    # Tag clause is inclusive: any one listed tag is enough.
    if criteria.tags and not any(tag in idea.tags for tag in criteria.tags):
        return False

    return True


def filter_ideas(ideas: Sequence[Idea], criteria: FilterCriteria) -> list[Idea]:
    """Return the ideas matching every active criterion, in input order.

    Search uses ``str.casefold`` on both the needle and the haystack. Tag
    filtering requires at least one of ``criteria.tags`` to be present on
    the idea (exact, case-sensitive match).
    """
    needle = criteria.search.casefold()
    return [idea for idea in ideas if _matches(idea, criteria, needle)]


def collect_distinct_tags(ideas: Iterable[Idea]) -> list[str]:
    """Return the sorted union of all tags across ideas."""
    tags: set[str] = set()
    for idea in ideas:
        tags.update(idea.tags)
    return sorted(tags)


def ideas_by_category(ideas: Sequence[Idea], category: Category) -> list[Idea]:
    return filter_ideas(ideas, FilterCriteria(category=category))


def ideas_by_status(ideas: Sequence[Idea], status: Status) -> list[Idea]:
    return filter_ideas(ideas, FilterCriteria(status=status))


def count_by_category(ideas: Iterable[Idea]) -> dict[Category, int]:
    """Count ideas per category. Categories with no ideas are reported as 0."""
    counts = Counter(idea.category for idea in ideas)
    return {category: counts.get(category, 0) for category in Category}
