"""Integration tests for the CourseHub API."""

import pytest
from httpx import AsyncClient

# ── Catalog Tests ──────────────────────────────────


@pytest.mark.asyncio
async def test_list_courses(client: AsyncClient):
    resp = await client.get("/courses")
    assert resp.status_code == 200
    data = resp.json()
    assert data["total"] == 6
    assert [c["id"] for c in data["items"]] == ["A", "B", "C", "D", "E", "F"]


@pytest.mark.asyncio
async def test_list_courses_filters(client: AsyncClient):
    resp = await client.get("/courses", params=[("category", "AI"), ("category", "Data")])
    assert [c["id"] for c in resp.json()["items"]] == ["A", "B", "F"]

    resp = await client.get("/courses", params={"search": "kube"})
    assert [c["id"] for c in resp.json()["items"]] == ["D"]


@pytest.mark.asyncio
async def test_invalid_sort_rejected(client: AsyncClient):
    resp = await client.get("/courses", params={"sort": "price"})
    assert resp.status_code == 422


@pytest.mark.asyncio
async def test_categories_and_featured(client: AsyncClient):
    resp = await client.get("/courses/categories")
    assert resp.json()["categories"] == ["AI", "Cloud", "Security", "Data"]

    resp = await client.get("/courses/featured")
    assert [c["id"] for c in resp.json()] == ["B", "D"]


@pytest.mark.asyncio
async def test_course_detail_and_404(client: AsyncClient):
    resp = await client.get("/courses/B")
    assert resp.status_code == 200
    assert resp.json()["title"] == "Deep Learning"

    resp = await client.get("/courses/missing")
    assert resp.status_code == 404


# ── Views & Recommendations ────────────────────────


@pytest.mark.asyncio
async def test_user_routes_require_viewer(client: AsyncClient):
    resp = await client.post("/courses/A/views")
    assert resp.status_code == 401
    resp = await client.get("/dashboard")
    assert resp.status_code == 401


@pytest.mark.asyncio
async def test_track_view_increments(client: AsyncClient, viewer_headers):
    resp = await client.post("/courses/C/views", headers=viewer_headers)
    assert resp.status_code == 200
    assert resp.json()["view_count"] == 1
    assert resp.json()["course_category"] == "Cloud"

    resp = await client.post("/courses/C/views", headers=viewer_headers)
    assert resp.json()["view_count"] == 2


@pytest.mark.asyncio
async def test_recommendations_first_time_viewer(client: AsyncClient, viewer_headers):
    resp = await client.get("/courses/A/recommendations", headers=viewer_headers)
    assert resp.status_code == 200
    recs = resp.json()["recommendations"]
    # B: AI boost 5 + popular 3; D: popular 3; then catalog order for zeros
    assert [r["course"]["id"] for r in recs] == ["B", "D", "C", "E"]
    assert [r["score"] for r in recs] == [8, 3, 0, 0]


@pytest.mark.asyncio
async def test_recommendations_follow_history(client: AsyncClient, viewer_headers):
    for _ in range(6):
        await client.post("/courses/F/views", headers=viewer_headers)

    resp = await client.get("/courses/A/recommendations", headers=viewer_headers)
    recs = resp.json()["recommendations"]
    assert [r["course"]["id"] for r in recs] == ["B", "F", "D", "C"]
    assert all(r["course"]["id"] != "A" for r in recs)


@pytest.mark.asyncio
async def test_recommendations_empty_is_no_content(tmp_path, viewer_headers):
    import json

    from httpx import ASGITransport

    from coursehub.config import Settings
    from coursehub.main import create_app

    seed = tmp_path / "single.json"
    seed.write_text(json.dumps({"courses": [{"id": "only", "title": "Solo", "category": "AI"}]}))
    app = create_app(
        Settings(_env_file=None, local_data_path=str(tmp_path / "solo"), seed_path=str(seed))
    )
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as c:
        resp = await c.get("/courses/only/recommendations", headers=viewer_headers)
    assert resp.status_code == 204
    assert resp.content == b""


# ── Progress & Dashboard ───────────────────────────


@pytest.mark.asyncio
async def test_progress_flow(client: AsyncClient, viewer_headers):
    resp = await client.get("/courses/A/progress", headers=viewer_headers)
    assert resp.status_code == 200
    assert resp.json() is None

    resp = await client.post("/courses/A/progress/lessons/2", headers=viewer_headers)
    assert resp.status_code == 200
    body = resp.json()
    assert body["completed_lessons"] == [2]
    assert body["percentage"] == 10

    resp = await client.post("/courses/A/progress/lessons/42", headers=viewer_headers)
    assert resp.status_code == 422

    resp = await client.post("/courses/A/progress/save", headers=viewer_headers)
    assert resp.json()["is_saved"] is True

    resp = await client.delete(f"/progress/{body['id']}", headers=viewer_headers)
    assert resp.status_code == 204


@pytest.mark.asyncio
async def test_dashboard(client: AsyncClient, viewer_headers):
    await client.post("/courses/D/views", headers=viewer_headers)
    await client.post("/courses/D/progress/lessons/0", headers=viewer_headers)
    await client.post(
        "/bookmarks",
        json={"course_id": "D", "lesson_title": "Core Concepts Deep Dive", "lesson_index": 2},
        headers=viewer_headers,
    )

    resp = await client.get("/dashboard", headers=viewer_headers)
    assert resp.status_code == 200
    data = resp.json()
    assert data["in_progress"] == 1
    assert data["completed"] == 0
    assert data["total_time_minutes"] == 30
    assert data["favorite_category"] == "Cloud"
    assert len(data["bookmarks"]) == 1


# ── Bookmark Tests ─────────────────────────────────


@pytest.mark.asyncio
async def test_bookmarks_are_private(client: AsyncClient, viewer_headers):
    resp = await client.post(
        "/bookmarks",
        json={"course_id": "A", "lesson_title": "Hands-on Project 1", "notes": "redo"},
        headers=viewer_headers,
    )
    assert resp.status_code == 201
    bookmark_id = resp.json()["id"]

    other = {"X-User-Id": "user-2"}
    resp = await client.get("/bookmarks", headers=other)
    assert resp.json() == []
    resp = await client.delete(f"/bookmarks/{bookmark_id}", headers=other)
    assert resp.status_code == 403

    resp = await client.delete(f"/bookmarks/{bookmark_id}", headers=viewer_headers)
    assert resp.status_code == 204


@pytest.mark.asyncio
async def test_bookmark_requires_lesson_title(client: AsyncClient, viewer_headers):
    resp = await client.post("/bookmarks", json={"course_id": "A"}, headers=viewer_headers)
    assert resp.status_code == 422


# ── Q&A Tests ──────────────────────────────────────


@pytest.mark.asyncio
async def test_question_thread(client: AsyncClient, viewer_headers):
    resp = await client.post(
        "/courses/A/questions",
        json={"question_text": "Is there a certificate?", "lesson_title": "Final Assessment"},
        headers=viewer_headers,
    )
    assert resp.status_code == 201
    question = resp.json()
    assert question["author_name"] == "Ada Lovelace"

    resp = await client.post(
        f"/questions/{question['id']}/answers",
        json={"answer_text": "Yes, after the final assessment."},
        headers={"X-User-Id": "instructor"},
    )
    assert resp.status_code == 201
    assert len(resp.json()["answers"]) == 1

    await client.post(f"/questions/{question['id']}/upvote", headers=viewer_headers)
    resp = await client.post(f"/questions/{question['id']}/resolve", headers=viewer_headers)
    assert resp.json()["upvotes"] == 1
    assert resp.json()["is_resolved"] is True

    resp = await client.get("/courses/A/questions")
    assert [q["id"] for q in resp.json()] == [question["id"]]


@pytest.mark.asyncio
async def test_blank_question_rejected(client: AsyncClient, viewer_headers):
    resp = await client.post(
        "/courses/A/questions", json={"question_text": "  "}, headers=viewer_headers
    )
    assert resp.status_code == 422


# ── Health Check ───────────────────────────────────


@pytest.mark.asyncio
async def test_health(client: AsyncClient):
    resp = await client.get("/health")
    assert resp.status_code == 200
    assert resp.json()["status"] == "healthy"
