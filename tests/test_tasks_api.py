"""
Board and task endpoint tests
"""
import pytest
from httpx import AsyncClient

from launchboard.core.config import settings
from launchboard.db.models.enums import UserRole


@pytest.fixture
def seeded(gateway, board_rows):
    gateway.seed("tasks", *board_rows)
    gateway.seed("kanban_phases", {"name": "Launch", "position": 0}, {"name": "Growth", "position": 1})
    gateway.seed("kanban_categories", {"name": "Marketing", "position": 0})
    return gateway


def activity(gateway, task_id):
    return [r for r in gateway.rows("task_activity") if r["task_id"] == task_id]


class TestBoardView:

    async def test_board_groups_into_five_columns(self, client: AsyncClient, seeded):
        response = await client.get("/api/v1/board")

        assert response.status_code == 200
        data = response.json()
        assert [c["status"] for c in data["columns"]] == ["backlog", "todo", "in_progress", "review", "done"]
        assert [c["label"] for c in data["columns"]][1] == "To Do"
        assert [t["id"] for t in data["columns"][1]["tasks"]] == ["t1", "t2", "t3"]
        assert data["phases"] == ["Launch", "Growth"]
        assert data["total"] == 5
        assert not data["filtered"]

    async def test_board_filters(self, client: AsyncClient, seeded):
        response = await client.get("/api/v1/board", params={"phase": "Launch", "search": "calc"})

        data = response.json()
        ids = [t["id"] for c in data["columns"] for t in c["tasks"]]
        assert ids == ["p1"]
        assert data["filtered"]

    async def test_invalid_priority_filter(self, client: AsyncClient, seeded):
        response = await client.get("/api/v1/board", params={"priority": "critical"})
        assert response.status_code == 422


class TestMove:

    async def test_move_across_columns(self, client: AsyncClient, seeded):
        response = await client.post("/api/v1/board/move", json={"active_id": "t1", "over_id": "p1"})

        assert response.status_code == 200
        data = response.json()
        assert data["status_changed"]
        assert data["old_status"] == "todo"
        assert data["new_status"] == "in_progress"
        assert [t["id"] for t in data["columns"]["in_progress"]] == ["t1", "p1", "p2"]
        assert [t["id"] for t in data["columns"]["todo"]] == ["t2", "t3"]

        entries = activity(seeded, "t1")
        assert len(entries) == 1
        assert (entries[0]["old_value"], entries[0]["new_value"]) == ("To Do", "In Progress")

    async def test_move_with_hover_replay(self, client: AsyncClient, seeded):
        response = await client.post(
            "/api/v1/board/move",
            json={"active_id": "t3", "hover_ids": ["in_progress", "p1"], "over_id": "p1"}
        )

        data = response.json()
        assert [t["id"] for t in data["columns"]["in_progress"]] == ["t3", "p1", "p2"]
        assert len(activity(seeded, "t3")) == 1

    async def test_cancelled_move(self, client: AsyncClient, seeded):
        response = await client.post("/api/v1/board/move", json={"active_id": "t1", "over_id": None})

        assert response.json()["cancelled"]
        assert seeded.writes() == []

    async def test_move_unknown_task(self, client: AsyncClient, seeded):
        response = await client.post("/api/v1/board/move", json={"active_id": "ghost", "over_id": "todo"})
        assert response.status_code == 404

    async def test_failed_write_reported(self, client: AsyncClient, seeded):
        seeded.fail_updates.add("t2")

        response = await client.post("/api/v1/board/move", json={"active_id": "t1", "over_id": "done"})

        assert response.status_code == 200
        assert response.json()["failed_ids"] == ["t2"]


class TestTaskCrud:

    async def test_create_appends_to_column(self, client: AsyncClient, seeded):
        response = await client.post("/api/v1/tasks", json={"title": "  Launch email  ", "status": "todo"})

        assert response.status_code == 201
        data = response.json()
        assert data["title"] == "Launch email"
        assert data["position"] == 3
        assert data["created_by"] == "admin-1"

        entries = activity(seeded, data["id"])
        assert [e["action"] for e in entries] == ["created"]

    async def test_create_in_empty_column_starts_at_zero(self, client: AsyncClient, seeded):
        response = await client.post("/api/v1/tasks", json={"title": "Ship it", "status": "done"})
        assert response.json()["position"] == 0

    @pytest.mark.parametrize("payload", [{}, {"title": ""}, {"title": "   "}, {"title": "x", "status": "blocked"}])
    async def test_create_rejects_invalid_payload(self, client: AsyncClient, seeded, payload):
        response = await client.post("/api/v1/tasks", json=payload)

        assert response.status_code == 422
        assert not any(c[0] == "insert" for c in seeded.calls)

    async def test_get_missing_task(self, client: AsyncClient, seeded):
        response = await client.get("/api/v1/tasks/ghost")
        assert response.status_code == 404

    async def test_update_status_logs_change(self, client: AsyncClient, seeded):
        response = await client.put("/api/v1/tasks/t1", json={"status": "review", "priority": "high"})

        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "review"
        assert data["position"] == 0

        entries = activity(seeded, "t1")
        assert entries[-1]["action"] == "status_change"
        assert (entries[-1]["old_value"], entries[-1]["new_value"]) == ("To Do", "Review")

    async def test_update_without_status_change(self, client: AsyncClient, seeded):
        response = await client.put("/api/v1/tasks/t2", json={"notes": "Use Stripe"})

        assert response.json()["notes"] == "Use Stripe"
        assert [e["action"] for e in activity(seeded, "t2")] == ["updated"]

    async def test_update_rejects_blank_title(self, client: AsyncClient, seeded):
        response = await client.put("/api/v1/tasks/t2", json={"title": " "})
        assert response.status_code == 422

    @pytest.mark.parametrize("payload", [{"status": None}, {"priority": None}])
    async def test_update_rejects_null_status_or_priority(self, client: AsyncClient, seeded, payload):
        response = await client.put("/api/v1/tasks/t1", json=payload)

        assert response.status_code == 422
        assert seeded.writes() == []

        board = await client.get("/api/v1/board")
        assert board.json()["total"] == 5

    async def test_delete_removes_comments_and_activity(self, client: AsyncClient, seeded):
        await client.post("/api/v1/tasks/t1/comments", json={"content": "Needs review"})

        response = await client.delete("/api/v1/tasks/t1")

        assert response.status_code == 204
        assert all(r["id"] != "t1" for r in seeded.rows("tasks"))
        assert seeded.rows("task_comments") == []
        assert activity(seeded, "t1") == []


class TestCommentsAndActivity:

    async def test_comment_adds_preview_activity(self, client: AsyncClient, seeded):
        content = "x" * 150

        response = await client.post("/api/v1/tasks/t2/comments", json={"content": content})

        assert response.status_code == 201
        entry = activity(seeded, "t2")[0]
        assert entry["action"] == "added_comment"
        assert entry["new_value"] == "x" * settings.COMMENT_PREVIEW_LENGTH

    async def test_comments_newest_first(self, client: AsyncClient, seeded):
        await client.post("/api/v1/tasks/t2/comments", json={"content": "first"})
        await client.post("/api/v1/tasks/t2/comments", json={"content": "second"})

        response = await client.get("/api/v1/tasks/t2/comments")

        assert [c["content"] for c in response.json()] == ["second", "first"]

    async def test_empty_comment_rejected(self, client: AsyncClient, seeded):
        response = await client.post("/api/v1/tasks/t2/comments", json={"content": "  "})
        assert response.status_code == 422

    async def test_activity_newest_first_and_limited(self, client: AsyncClient, seeded):
        for i in range(settings.ACTIVITY_LOG_LIMIT + 5):
            await client.post("/api/v1/tasks/t3/comments", json={"content": f"note {i}"})

        response = await client.get("/api/v1/tasks/t3/activity")

        entries = response.json()
        assert len(entries) == settings.ACTIVITY_LOG_LIMIT
        assert entries[0]["new_value"] == f"note {settings.ACTIVITY_LOG_LIMIT + 4}"


class TestTaxonomy:

    async def test_admin_cannot_create_phase(self, client: AsyncClient, seeded):
        response = await client.post("/api/v1/phases", json={"name": "Scale"})
        assert response.status_code == 403

    async def test_super_admin_creates_phase_at_end(self, client: AsyncClient, seeded, admin_user):
        admin_user.role = UserRole.SUPER_ADMIN

        response = await client.post("/api/v1/phases", json={"name": "Scale"})

        assert response.status_code == 201
        assert response.json()["position"] == 2

    async def test_list_categories(self, client: AsyncClient, seeded):
        response = await client.get("/api/v1/categories")
        assert [c["name"] for c in response.json()] == ["Marketing"]

    async def test_delete_missing_category(self, client: AsyncClient, seeded, admin_user):
        admin_user.role = UserRole.SUPER_ADMIN
        response = await client.delete("/api/v1/categories/ghost")
        assert response.status_code == 404
        assert response.json()["detail"] == "Category ghost not found"
