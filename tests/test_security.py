"""
Security header, tracing and system endpoint tests
"""
from httpx import AsyncClient

from launchboard.db.gateway import GatewayError


class TestSecurityHeaders:

    async def test_security_headers_present(self, client: AsyncClient):
        response = await client.get("/")

        headers = response.headers
        assert headers["x-content-type-options"] == "nosniff"
        assert headers["x-frame-options"] == "DENY"
        assert "strict-transport-security" in headers

    async def test_trace_id_in_response(self, client: AsyncClient):
        response = await client.get("/")
        assert "x-trace-id" in response.headers

    async def test_incoming_trace_id_is_kept(self, client: AsyncClient):
        response = await client.get("/", headers={"X-Trace-ID": "abc123"})
        assert response.headers["x-trace-id"] == "abc123"


class TestErrorBodies:

    async def test_not_found_carries_trace_id(self, client: AsyncClient):
        response = await client.get("/api/v1/tasks/ghost", headers={"X-Trace-ID": "trace-404"})

        body = response.json()
        assert response.status_code == 404
        assert body["trace_id"] == "trace-404"
        assert "timestamp" in body

    async def test_validation_error_lists_fields(self, client: AsyncClient):
        response = await client.post("/api/v1/tasks", json={"title": ""})

        body = response.json()
        assert body["detail"] == "Validation error"
        assert any("title" in e["field"] for e in body["errors"])


class TestHealth:

    async def test_health(self, client: AsyncClient, gateway, board_rows):
        gateway.seed("tasks", *board_rows)

        response = await client.get("/health")

        assert response.status_code == 200
        assert response.json()["checks"]["tasks"] == 5

    async def test_health_reports_unreachable_store(self, client: AsyncClient, gateway):
        async def broken_count(table, filters=None):
            raise GatewayError("connection refused", table=table, operation="count")

        gateway.count = broken_count

        response = await client.get("/health")
        assert response.status_code == 503

    async def test_board_load_failure_is_503(self, client: AsyncClient, gateway):
        async def broken_select(table, filters=None, order=None, limit=None):
            raise GatewayError("timeout", table=table, operation="select")

        gateway.select = broken_select

        response = await client.get("/api/v1/board")
        assert response.status_code == 503
