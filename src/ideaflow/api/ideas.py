"""Idea CRUD, filtering and aggregation endpoints."""

from fastapi import APIRouter, Depends, Query, Response
from pydantic import BaseModel

from ideaflow.api.deps import get_store
from ideaflow.models.filters import FilterCriteria
from ideaflow.models.idea import Category, Idea, IdeaInput, IdeaPatch, Priority, Status
from ideaflow.search import collect_distinct_tags, count_by_category, filter_ideas
from ideaflow.storage.store import IdeaStore

router = APIRouter(prefix="/ideas", tags=["ideas"])


class IdeaListResponse(BaseModel):
    ideas: list[Idea]
    count: int


class StatusUpdate(BaseModel):
    status: Status


class PriorityUpdate(BaseModel):
    priority: Priority


@router.get("", response_model=IdeaListResponse)
async def list_ideas(
    category: Category | None = None,
    priority: Priority | None = None,
    status: Status | None = None,
    search: str = "",
    tags: list[str] = Query(default=[]),
    store: IdeaStore = Depends(get_store),
) -> IdeaListResponse:
    """Return the ideas matching the query filters, newest first."""
    criteria = FilterCriteria(
        category=category,
        priority=priority,
        status=status,
        search=search,
        tags=tags,
    )
    ideas = filter_ideas(store.list(), criteria)
    return IdeaListResponse(ideas=ideas, count=len(ideas))


@router.get("/tags")
async def list_tags(store: IdeaStore = Depends(get_store)) -> list[str]:
    """Distinct tags across all ideas, sorted, for the tag filter."""
    return collect_distinct_tags(store.list())


@router.get("/counts")
async def category_counts(store: IdeaStore = Depends(get_store)) -> dict[str, int]:
    """Number of ideas per category for the sidebar."""
    return {category.value: count for category, count in count_by_category(store.list()).items()}


@router.post("/refresh", response_model=IdeaListResponse)
async def refresh_ideas(store: IdeaStore = Depends(get_store)) -> IdeaListResponse:
    """Reload ideas from storage."""
    await store.refresh()
    ideas = store.list()
    return IdeaListResponse(ideas=ideas, count=len(ideas))


@router.post("", response_model=Idea, status_code=201)
async def create_idea(data: IdeaInput, store: IdeaStore = Depends(get_store)) -> Idea:
    """Quick capture: create a new idea with status ``new``."""
    return await store.create(data)


@router.get("/{idea_id}", response_model=Idea)
async def get_idea(idea_id: str, store: IdeaStore = Depends(get_store)) -> Idea:
    return store.get(idea_id)


@router.patch("/{idea_id}", response_model=Idea)
async def update_idea(
    idea_id: str, patch: IdeaPatch, store: IdeaStore = Depends(get_store)
) -> Idea:
    """Apply a partial edit. A ``resources`` field replaces all resources."""
    return await store.update(idea_id, patch)


@router.put("/{idea_id}/status", response_model=Idea)
async def set_status(
    idea_id: str, body: StatusUpdate, store: IdeaStore = Depends(get_store)
) -> Idea:
    return await store.update_status(idea_id, body.status)


@router.put("/{idea_id}/priority", response_model=Idea)
async def set_priority(
    idea_id: str, body: PriorityUpdate, store: IdeaStore = Depends(get_store)
) -> Idea:
    return await store.update_priority(idea_id, body.priority)


@router.delete("/{idea_id}", status_code=204)
async def delete_idea(idea_id: str, store: IdeaStore = Depends(get_store)) -> Response:
    """Delete an idea and its resources. Confirmation is the client's job."""
    await store.delete(idea_id)
    return Response(status_code=204)
