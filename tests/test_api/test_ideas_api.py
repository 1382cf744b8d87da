"""Tests for the idea endpoints running against a local blob."""

from fastapi.testclient import TestClient


def _create(client: TestClient, **payload) -> dict:
    payload.setdefault("title", "Untitled idea")
    response = client.post("/ideas", json=payload)
    assert response.status_code == 201, response.text
    return response.json()


def test_create_idea(local_client: TestClient):
    """POST /ideas returns the stored idea with status new and camelCase keys."""
    body = _create(
        local_client,
        title="Ship v2",
        category="project-ideas",
        priority="high",
        status="completed",
        tags="launch, release",
        resources=[{"type": "link", "title": "Plan", "url": "https://example.com/plan"}],
    )

    assert body["status"] == "new"
    assert body["createdAt"] == body["updatedAt"]
    assert body["tags"] == ["launch", "release"]
    assert body["resources"][0]["id"]
    assert body["reminderDate"] is None


def test_create_idea_defaults(local_client: TestClient):
    body = _create(local_client, title="Quick")
    assert body["category"] == "other"
    assert body["priority"] == "medium"
    assert body["description"] == ""


def test_create_idea_requires_title(local_client: TestClient):
    response = local_client.post("/ideas", json={"title": ""})
    assert response.status_code == 422


def test_create_idea_rejects_unknown_category(local_client: TestClient):
    response = local_client.post("/ideas", json={"title": "x", "category": "recipes"})
    assert response.status_code == 422


def test_list_ideas_newest_first(local_client: TestClient):
    first = _create(local_client, title="First")
    second = _create(local_client, title="Second")

    body = local_client.get("/ideas").json()

    assert body["count"] == 2
    assert [idea["id"] for idea in body["ideas"]] == [second["id"], first["id"]]


def test_list_ideas_filters(local_client: TestClient):
    rust = _create(local_client, title="Rust post", category="blog-topics", tags=["rust"])
    _create(local_client, title="Go course", category="learning-goals", tags=["go"])
    pottery = _create(local_client, title="Pottery", category="creative-projects", tags=["clay"])

    by_category = local_client.get("/ideas", params={"category": "blog-topics"}).json()
    assert [i["id"] for i in by_category["ideas"]] == [rust["id"]]

    by_search = local_client.get("/ideas", params={"search": "POTTERY"}).json()
    assert [i["id"] for i in by_search["ideas"]] == [pottery["id"]]

    by_tags = local_client.get("/ideas", params=[("tags", "rust"), ("tags", "clay")]).json()
    assert {i["id"] for i in by_tags["ideas"]} == {rust["id"], pottery["id"]}
    assert by_tags["count"] == 2


def test_list_ideas_invalid_filter_value(local_client: TestClient):
    response = local_client.get("/ideas", params={"status": "done"})
    assert response.status_code == 422


def test_tags_and_counts(local_client: TestClient):
    _create(local_client, title="A", category="personal", tags=["y", "x"])
    _create(local_client, title="B", category="personal", tags=["y"])

    assert local_client.get("/ideas/tags").json() == ["x", "y"]
    counts = local_client.get("/ideas/counts").json()
    assert counts["personal"] == 2
    assert counts["other"] == 0
    assert len(counts) == 8


def test_get_idea(local_client: TestClient):
    created = _create(local_client, title="Lookup")
    response = local_client.get(f"/ideas/{created['id']}")
    assert response.status_code == 200
    assert response.json()["title"] == "Lookup"


def test_get_missing_idea(local_client: TestClient):
    response = local_client.get("/ideas/does-not-exist")
    assert response.status_code == 404
    assert response.json()["error"] == "not_found"


def test_patch_idea(local_client: TestClient):
    created = _create(local_client, title="Draft", description="keep me", tags=["a"])

    response = local_client.patch(f"/ideas/{created['id']}", json={"title": "Final"})

    assert response.status_code == 200
    body = response.json()
    assert body["title"] == "Final"
    assert body["description"] == "keep me"
    assert body["tags"] == ["a"]
    assert body["updatedAt"] >= body["createdAt"]


def test_patch_rejects_null_category(local_client: TestClient):
    created = _create(local_client, title="Draft")
    response = local_client.patch(f"/ideas/{created['id']}", json={"category": None})
    assert response.status_code == 422


def test_status_and_priority_toggles(local_client: TestClient):
    created = _create(local_client, title="Toggle")

    status = local_client.put(f"/ideas/{created['id']}/status", json={"status": "in-progress"})
    priority = local_client.put(f"/ideas/{created['id']}/priority", json={"priority": "low"})

    assert status.json()["status"] == "in-progress"
    assert priority.json()["priority"] == "low"
    assert priority.json()["status"] == "in-progress"


def test_delete_idea(local_client: TestClient):
    created = _create(local_client, title="Bye")

    response = local_client.delete(f"/ideas/{created['id']}")
    assert response.status_code == 204

    assert local_client.get("/ideas").json()["count"] == 0
    again = local_client.patch(f"/ideas/{created['id']}", json={"title": "Back"})
    assert again.status_code == 404


def test_refresh_reloads_from_blob(local_client: TestClient):
    created = _create(local_client, title="Persisted")

    response = local_client.post("/ideas/refresh")

    assert response.status_code == 200
    assert [i["id"] for i in response.json()["ideas"]] == [created["id"]]


def test_catalog(local_client: TestClient):
    body = local_client.get("/catalog").json()
    assert len(body["categories"]) == 8
    assert body["categories"][0] == {
        "id": "project-ideas",
        "label": "Project Ideas",
        "icon": "Lightbulb",
        "color": "bg-yellow-100 text-yellow-800",
    }
    assert set(body["priorityColors"]) == {"high", "medium", "low"}
    assert set(body["statusColors"]) == {"new", "in-progress", "completed", "archived"}
