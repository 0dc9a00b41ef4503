"""
Pytest configuration and fixtures for Launchboard API tests
"""
import os

# Settings are read at import time
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")
os.environ.setdefault("JWT_SECRET_KEY", "test-secret-key-for-launchboard-tests")
os.environ.setdefault("ENVIRONMENT", "test")
os.environ.setdefault("ENABLE_JSON_LOGGING", "false")

import itertools
import uuid
from datetime import datetime, timedelta, timezone
from typing import AsyncGenerator

import pytest
from httpx import AsyncClient, ASGITransport

from launchboard.main import app
from launchboard.auth.dependencies import get_current_user
from launchboard.api.v1.schemas.users import SessionUser
from launchboard.board.entities import BoardTask
from launchboard.db.gateway import DataGateway, GatewayError, get_gateway
from launchboard.db.models.enums import TaskStatus, UserRole


class InMemoryGateway(DataGateway):
    """
    Dict-backed gateway recording every call.
    Ids listed in fail_updates raise GatewayError on update.
    """

    def __init__(self):
        self.tables = {}
        self.calls = []
        self.fail_updates = set()
        self.fail_inserts = set()
        self._clock = itertools.count()
        self._epoch = datetime(2026, 1, 1, tzinfo=timezone.utc)

    def _now(self):
        # Strictly increasing so newest-first ordering is deterministic
        return self._epoch + timedelta(seconds=next(self._clock))

    def rows(self, table):
        return self.tables.setdefault(table, [])

    def seed(self, table, *rows):
        for row in rows:
            stored = dict(row)
            stored.setdefault("id", str(uuid.uuid4()))
            stored.setdefault("created_at", self._now())
            self.rows(table).append(stored)

    def writes(self):
        return [c for c in self.calls if c[0] in ("insert", "update", "delete")]

    @staticmethod
    def _matches(row, filters):
        return all(row.get(k) == v for k, v in (filters or {}).items())

    async def select(self, table, filters=None, order=None, limit=None):
        self.calls.append(("select", table, dict(filters or {})))
        rows = [dict(r) for r in self.rows(table) if self._matches(r, filters)]
        for key in reversed(list(order or ())):
            column = key.lstrip("-")
            present = [r for r in rows if r.get(column) is not None]
            missing = [r for r in rows if r.get(column) is None]
            present.sort(key=lambda r: r[column], reverse=key.startswith("-"))
            rows = present + missing
        return rows[:limit] if limit is not None else rows

    async def insert(self, table, row):
        self.calls.append(("insert", table, dict(row)))
        if table in self.fail_inserts:
            raise GatewayError("insert refused", table=table, operation="insert")
        stored = dict(row)
        stored.setdefault("id", str(uuid.uuid4()))
        stored.setdefault("created_at", self._now())
        self.rows(table).append(stored)
        return dict(stored)

    async def update(self, table, row_id, values):
        self.calls.append(("update", table, row_id, dict(values)))
        if row_id in self.fail_updates:
            raise GatewayError("connection reset", table=table, operation="update")
        for row in self.rows(table):
            if row["id"] == row_id:
                row.update(values)

    async def delete(self, table, row_id):
        self.calls.append(("delete", table, row_id))
        self.tables[table] = [r for r in self.rows(table) if r["id"] != row_id]

    async def count(self, table, filters=None):
        self.calls.append(("count", table, dict(filters or {})))
        return len([r for r in self.rows(table) if self._matches(r, filters)])


def make_task(task_id, status=TaskStatus.TODO, position=0, **fields) -> BoardTask:
    return BoardTask(id=task_id, title=fields.pop("title", f"Task {task_id}"),
                     status=status, position=position, **fields)


def task_row(task_id, status="todo", position=0, **fields) -> dict:
    return {"id": task_id, "title": fields.pop("title", f"Task {task_id}"),
            "status": status, "priority": fields.pop("priority", "medium"),
            "position": position, **fields}


@pytest.fixture
def gateway() -> InMemoryGateway:
    return InMemoryGateway()


@pytest.fixture
def admin_user() -> SessionUser:
    return SessionUser(id="admin-1", email="admin@example.com", role=UserRole.ADMIN)


@pytest.fixture
def board_rows():
    """Two columns: todo [t1, t2, t3] and in_progress [p1, p2]"""
    return [
        task_row("t1", "todo", 0, title="Write landing copy", phase="Launch", category="Marketing"),
        task_row("t2", "todo", 1, title="Set up billing", priority="high", category="Finance"),
        task_row("t3", "todo", 2, title="Draft FAQ", description="Answer lender questions"),
        task_row("p1", "in_progress", 0, title="Build calculator", phase="Launch"),
        task_row("p2", "in_progress", 1, title="Record demo video", priority="urgent"),
    ]


@pytest.fixture
async def client(gateway: InMemoryGateway, admin_user: SessionUser) -> AsyncGenerator[AsyncClient, None]:
    """Test client with the in-memory gateway and an admin session"""
    app.dependency_overrides[get_gateway] = lambda: gateway
    app.dependency_overrides[get_current_user] = lambda: admin_user

    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac

    app.dependency_overrides.clear()


@pytest.fixture
async def anonymous_client(gateway: InMemoryGateway) -> AsyncGenerator[AsyncClient, None]:
    """Test client with the in-memory gateway and real token verification"""
    app.dependency_overrides[get_gateway] = lambda: gateway

    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac

    app.dependency_overrides.clear()
