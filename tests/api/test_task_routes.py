"""Task & Board routes — create, toggle, move, delete, drafts, comments.

Tests cover:
    - Confirmed writes answer with the mirrored entity
    - Refusals are 400, unknown tasks 404, store failures 503
    - The board view reflects only the logged-in user's tasks
"""

from taskboard.core.domain_types import Table


async def test_board_anonymous_has_empty_buckets(client):
    body = (await client.get("/api/v1/board")).json()
    assert body["session"]["status"] == "anonymous"
    assert body["incomplete"] == [] and body["complete"] == []
    assert body["initialized"] is True
    assert body["error"] is None


async def test_board_shows_only_own_tasks(ann_client):
    body = (await ann_client.get("/api/v1/board")).json()
    assert [c["task"]["text"] for c in body["incomplete"]] == ["buy milk"]
    assert body["complete"] == []


async def test_create_task(ann_client, gateway):
    response = await ann_client.post("/api/v1/tasks", json={"text": "walk dog"})
    assert response.status_code == 201
    assert response.json() == {"id": 3, "text": "walk dog", "completed": False, "owner_id": 1}
    assert gateway.tables[Table.TASKS][-1]["user_id"] == 1


async def test_create_task_blank_text_is_400(ann_client, gateway):
    response = await ann_client.post("/api/v1/tasks", json={"text": "   "})
    assert response.status_code == 400
    assert gateway.calls == []


async def test_create_task_anonymous_is_400(client):
    response = await client.post("/api/v1/tasks", json={"text": "walk dog"})
    assert response.status_code == 400
    assert "no active session" in response.json()["error"]["message"]


async def test_create_task_store_failure_is_503_and_shown_on_board(ann_client, gateway):
    gateway.fail("insert", Table.TASKS)
    response = await ann_client.post("/api/v1/tasks", json={"text": "walk dog"})
    assert response.status_code == 503

    body = (await ann_client.get("/api/v1/board")).json()
    assert body["error"].startswith("Failed to add task")
    assert len(body["incomplete"]) == 1


async def test_toggle_task(ann_client):
    response = await ann_client.post("/api/v1/tasks/1/toggle")
    assert response.status_code == 200
    assert response.json()["completed"] is True

    body = (await ann_client.get("/api/v1/board")).json()
    assert body["incomplete"] == []
    assert [c["task"]["id"] for c in body["complete"]] == [1]


async def test_toggle_unknown_task_is_404(ann_client, gateway):
    response = await ann_client.post("/api/v1/tasks/99/toggle")
    assert response.status_code == 404
    assert gateway.calls == []


async def test_move_task(ann_client, gateway):
    response = await ann_client.put("/api/v1/tasks/1/move", json={"completed": True})
    assert response.json()["completed"] is True
    response = await ann_client.put("/api/v1/tasks/1/move", json={"completed": True})
    assert response.status_code == 200
    assert len(gateway.calls_for("update")) == 2


async def test_delete_task(ann_client, gateway):
    gateway.seed_comment(1, gateway.tables[Table.USERS][0], "soon")
    await ann_client.post("/api/v1/board/reload")

    response = await ann_client.delete("/api/v1/tasks/1")
    assert response.status_code == 204

    body = (await ann_client.get("/api/v1/board")).json()
    assert body["incomplete"] == []
    assert gateway.tables[Table.COMMENTS] == []


async def test_delete_store_failure_is_503(ann_client, gateway):
    gateway.fail("delete", Table.TASKS)
    response = await ann_client.delete("/api/v1/tasks/1")
    assert response.status_code == 503


async def test_comment_with_content(ann_client):
    response = await ann_client.post(
        "/api/v1/tasks/1/comments", json={"content": "2 litres"},
    )
    assert response.status_code == 201
    body = response.json()
    assert body["user_name"] == "Ann"
    assert body["task_id"] == 1

    board = (await ann_client.get("/api/v1/board")).json()
    assert [c["content"] for c in board["incomplete"][0]["comments"]] == ["2 litres"]


async def test_draft_then_submit(ann_client):
    response = await ann_client.put("/api/v1/tasks/1/draft", json={"text": "oat milk"})
    assert response.status_code == 204
    board = (await ann_client.get("/api/v1/board")).json()
    assert board["incomplete"][0]["draft"] == "oat milk"

    response = await ann_client.post("/api/v1/tasks/1/comments", json={})
    assert response.status_code == 201
    assert response.json()["content"] == "oat milk"

    board = (await ann_client.get("/api/v1/board")).json()
    assert board["incomplete"][0]["draft"] == ""


async def test_submit_without_draft_is_400(ann_client):
    response = await ann_client.post("/api/v1/tasks/1/comments", json={})
    assert response.status_code == 400


async def test_reload_failure_reported_in_board(ann_client, gateway):
    gateway.fail("select", Table.COMMENTS)
    response = await ann_client.post("/api/v1/board/reload")
    assert response.status_code == 200
    body = response.json()
    assert body["error"].startswith("Failed to load comments")
    assert body["session"]["status"] == "restoring"
    assert body["incomplete"] == []


async def test_reload_recovers(ann_client, gateway):
    gateway.fail("select", Table.USERS)
    await ann_client.post("/api/v1/board/reload")
    gateway.recover()

    body = (await ann_client.post("/api/v1/board/reload")).json()
    assert body["error"] is None
    assert body["session"]["status"] == "authenticated"
    assert [c["task"]["text"] for c in body["incomplete"]] == ["buy milk"]



async def test_foreign_task_cannot_be_changed(ann_client, gateway):
    toggle = await ann_client.post("/api/v1/tasks/2/toggle")
    delete = await ann_client.delete("/api/v1/tasks/2")

    assert toggle.status_code == 400
    assert delete.status_code == 400
    assert delete.json()["error"]["code"] == "VALIDATION_REJECTED"
    assert gateway.calls == []
    assert len(gateway.tables[Table.TASKS]) == 2


async def test_anonymous_delete_is_rejected(client, gateway):
    response = await client.delete("/api/v1/tasks/1")
    assert response.status_code == 400
    assert len(gateway.tables[Table.TASKS]) == 2


async def test_delete_unknown_task_is_404(ann_client):
    response = await ann_client.delete("/api/v1/tasks/99")
    assert response.status_code == 404


async def test_comment_on_unknown_task_is_404(ann_client, gateway):
    response = await ann_client.post("/api/v1/tasks/99/comments", json={"content": "hi"})
    assert response.status_code == 404
    assert gateway.tables[Table.COMMENTS] == []
