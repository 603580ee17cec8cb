"""End-to-end API tests over ASGI transport."""

import pytest

from watchdeck.conditions.catalog import CONDITION_TYPE_DHOST_IP, CONDITION_TYPE_TRIGGER_SEVERITY
from watchdeck.errors import NO_PERMISSIONS_MESSAGE

pytestmark = pytest.mark.asyncio(loop_scope="session")


class TestHealth:
    async def test_health(self, client):
        resp = await client.get("/health")
        assert resp.status_code == 200
        assert resp.json()["status"] == "ok"

    async def test_request_id_echoed(self, client):
        resp = await client.get("/health", headers={"X-Request-ID": "abc-123"})
        assert resp.headers["X-Request-ID"] == "abc-123"


class TestAuth:
    async def test_missing_token(self, client):
        resp = await client.get("/api/v1/dashboards")
        assert resp.status_code == 401
        assert resp.json()["error"] is True

    async def test_garbage_token(self, client):
        resp = await client.get("/api/v1/dashboards", headers={"Authorization": "Bearer nope"})
        assert resp.status_code == 401

    async def test_token_for_unknown_user(self, client):
        from watchdeck.utils.security import create_access_token

        token = create_access_token({"sub": "999"}, "test-secret-key-for-integration-tests")
        resp = await client.get("/api/v1/dashboards", headers={"Authorization": f"Bearer {token}"})
        assert resp.status_code == 401


class TestDashboards:
    async def test_dashboard_lifecycle(self, client, admin_headers):
        resp = await client.post("/api/v1/dashboards", headers=admin_headers, json=[{
            "name": "API lifecycle",
            "users": [{"userid": 2, "permission": 2}],
            "widgets": [{"type": "clock", "width": 4}],
        }])
        assert resp.status_code == 200, resp.text
        [dashboardid] = resp.json()["dashboardids"]

        resp = await client.get(
            "/api/v1/dashboards", headers=admin_headers, params={"dashboardids": [dashboardid]}
        )
        [dashboard] = resp.json()
        assert dashboard["name"] == "API lifecycle"
        assert dashboard["userid"] == 1
        assert dashboard["widgets"][0]["width"] == 4

        resp = await client.put("/api/v1/dashboards", headers=admin_headers, json=[{
            "dashboardid": dashboardid, "name": "API lifecycle renamed", "users": [],
        }])
        assert resp.status_code == 200, resp.text

        resp = await client.get(
            "/api/v1/dashboards", headers=admin_headers, params={"dashboardids": [dashboardid]}
        )
        [dashboard] = resp.json()
        assert dashboard["name"] == "API lifecycle renamed"
        assert dashboard["users"] == []
        assert len(dashboard["widgets"]) == 1

        resp = await client.post("/api/v1/dashboards/delete", headers=admin_headers, json=[dashboardid])
        assert resp.json() == {"dashboardids": [dashboardid]}

        resp = await client.get(
            "/api/v1/dashboards", headers=admin_headers, params={"dashboardids": [dashboardid]}
        )
        assert resp.json() == []

    async def test_overlap_is_bad_request(self, client, admin_headers):
        resp = await client.post("/api/v1/dashboards", headers=admin_headers, json=[{
            "name": "API overlap",
            "widgets": [
                {"type": "clock", "row": 0, "col": 0, "height": 2, "width": 2},
                {"type": "clock", "row": 1, "col": 1, "height": 2, "width": 2},
            ],
        }])
        assert resp.status_code == 400
        assert resp.json()["detail"] == 'Dashboard "API overlap" cell X - 1 Y - 1 is already taken.'

    async def test_failed_create_leaves_nothing(self, client, admin_headers):
        resp = await client.post("/api/v1/dashboards", headers=admin_headers, json=[
            {"name": "API partial ok"},
            {"name": "API partial bad", "users": [{"userid": 404, "permission": 2}]},
        ])
        assert resp.status_code == 400

        names = [d["name"] for d in (await client.get("/api/v1/dashboards", headers=admin_headers)).json()]
        assert "API partial ok" not in names

    async def test_update_unknown_is_forbidden(self, client, admin_headers):
        resp = await client.put(
            "/api/v1/dashboards", headers=admin_headers, json=[{"dashboardid": 98765, "name": "x"}]
        )
        assert resp.status_code == 403
        assert resp.json()["detail"] == NO_PERMISSIONS_MESSAGE

    async def test_guest_cannot_assign_owner(self, client, guest_headers):
        resp = await client.post("/api/v1/dashboards", headers=guest_headers, json=[
            {"name": "API guest owned", "userid": 1}
        ])
        assert resp.status_code == 400
        assert resp.json()["detail"] == "Only administrators can set dashboard owner."

    async def test_malformed_body(self, client, admin_headers):
        resp = await client.post("/api/v1/dashboards", headers=admin_headers, json={"name": "not a list"})
        assert resp.status_code == 400
        assert resp.json()["detail"].startswith('Invalid parameter "/"')


class TestConditionPopup:
    async def test_defaults_for_discovery(self, client, guest_headers):
        resp = await client.get(
            "/api/v1/popup/condition/actions", headers=guest_headers, params={"type": 0, "source": 1}
        )
        assert resp.status_code == 200, resp.text
        data = resp.json()
        assert data["last_type"] == CONDITION_TYPE_DHOST_IP
        assert data["user"] == {"debug_mode": False}
        assert data["errors"] is None
        assert "form" not in data
        assert {"conditiontype": CONDITION_TYPE_DHOST_IP, "name": "Host IP"} in data["condition_labels"]

    async def test_choice_remembered_per_source(self, client, admin_headers):
        params = {
            "type": 0, "source": 0, "validate": 1,
            "condition_type": CONDITION_TYPE_TRIGGER_SEVERITY, "operator": 0,
            "value": ["2", "4"],
        }
        resp = await client.get("/api/v1/popup/condition/actions", headers=admin_headers, params=params)
        data = resp.json()
        assert data["inputs"]["value"] == ["2", "4"]
        assert data["form"]["param"] == "add_condition"

        resp = await client.get(
            "/api/v1/popup/condition/actions", headers=admin_headers, params={"type": 0, "source": 0}
        )
        assert resp.json()["last_type"] == CONDITION_TYPE_TRIGGER_SEVERITY

    async def test_invalid_value_reported(self, client, admin_headers):
        resp = await client.get("/api/v1/popup/condition/actions", headers=admin_headers, params={
            "type": 0, "source": 0, "condition_type": CONDITION_TYPE_TRIGGER_SEVERITY,
            "operator": 0, "value": "9",
        })
        assert resp.status_code == 200
        assert resp.json()["errors"] == ["Incorrect action condition trigger severity."]

    async def test_unknown_source_rejected(self, client, admin_headers):
        resp = await client.get(
            "/api/v1/popup/condition/actions", headers=admin_headers, params={"type": 0, "source": 7}
        )
        assert resp.status_code == 400
        assert resp.json()["detail"].startswith('Invalid parameter "/source"')
