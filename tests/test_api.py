# Copyright (c) 2025 Keshav
# Licensed under the GNU Affero General Public License v3.0
# See LICENSE file for details.
"""Tests for the REST API using FastAPI's TestClient."""

from __future__ import annotations

import inspect

import pytest

pytest.importorskip("fastapi")
pytest.importorskip("httpx")

from fastapi.testclient import TestClient  # noqa: E402

from eco_office.api import check_dependency  # noqa: E402
from eco_office.api import routes  # noqa: E402
from eco_office.api.routes import get_store  # noqa: E402
from eco_office.api.server import create_app  # noqa: E402
from eco_office.config import Settings, StoreConfig  # noqa: E402
from eco_office.data.models import PowerMode  # noqa: E402
from eco_office.store.json_store import JsonFileMetricStore  # noqa: E402
from eco_office.store.memory import InMemoryMetricStore  # noqa: E402


@pytest.fixture()
def client(demo_store: InMemoryMetricStore) -> TestClient:
    return TestClient(create_app(demo_store))


class TestCheckDependency:

    def test_missing_package(self):
        with pytest.raises(ImportError, match="requires 'nonexistent_pkg_xyz'"):
            check_dependency("nonexistent_pkg_xyz", "pip install nothing")

    def test_present_package(self):
        check_dependency("json", "stdlib")


class TestReadEndpoints:
    """Tests for the read-only endpoints."""

    def test_health(self, client: TestClient):
        resp = client.get("/api/v1/health")
        assert resp.status_code == 200
        body = resp.json()
        assert body["status"] == "ok"
        assert body["version"] == "0.1.0"
        assert body["layout"] == "demo"

    def test_seats(self, client: TestClient):
        resp = client.get("/api/v1/seats")
        assert resp.status_code == 200
        assert len(resp.json()) == 6

    def test_zone_energy(self, client: TestClient, demo_store: InMemoryMetricStore):
        resp = client.get("/api/v1/zones/energy")
        assert resp.status_code == 200
        body = resp.json()
        assert body["metrics"][0]["consumption_kwh"] == pytest.approx(1.41)
        assert body["summary"]["occupied_seats"] == 3
        assert len(demo_store.get_zone_energy_metrics(1)) == 1

    def test_recommendations(self, client: TestClient):
        resp = client.get("/api/v1/recommendations")
        assert [r["seat_id"] for r in resp.json()] == [2, 4, 6]
        resp = client.get("/api/v1/recommendations", params={"sort": True})
        assert resp.json()[0]["seat_id"] == 4

    def test_users(self, client: TestClient):
        resp = client.get("/api/v1/users")
        assert {u["id"] for u in resp.json()} == {"user-1", "user-2", "user-3"}

    def test_user_detail(self, client: TestClient):
        assert client.get("/api/v1/users/user-1").json()["current_seat_id"] == 1
        assert client.get("/api/v1/users/ghost").status_code == 404

    def test_report(self, client: TestClient):
        resp = client.get("/api/v1/users/user-1/report")
        assert resp.status_code == 200
        assert resp.json()["potential_savings"] == 100.0

    def test_report_unknown_user(self, client: TestClient):
        assert client.get("/api/v1/users/ghost/report").status_code == 404

    def test_report_uses_configured_co2_factor(self, demo_store: InMemoryMetricStore):
        demo_store.add_device_metric(
            user_id="user-1",
            is_dark_mode=False,
            elapsed_hours=1.0,
            power_mode=PowerMode.balanced,
            energy_kwh=1.0,
        )
        app = create_app(demo_store, Settings(co2_kg_per_kwh=0.5))
        body = TestClient(app).get("/api/v1/users/user-1/report").json()
        assert body["total_energy_kwh"] == pytest.approx(1.0)
        assert body["co2_kg"] == pytest.approx(0.5)

    def test_activities_empty(self, client: TestClient):
        resp = client.get("/api/v1/users/user-1/activities")
        assert resp.status_code == 200
        assert resp.json() == []

    def test_activities_unknown_user(self, client: TestClient):
        assert client.get("/api/v1/users/ghost/activities").status_code == 404

    def test_leaderboard(self, client: TestClient):
        resp = client.get("/api/v1/leaderboard", params={"limit": 1})
        assert [u["id"] for u in resp.json()] == ["user-3"]


class TestWriteEndpoints:
    """Tests for seat moves and activity logging."""

    def test_move(self, client: TestClient, demo_store: InMemoryMetricStore):
        resp = client.post("/api/v1/seats/2/move", json={"user_id": "user-1"})
        assert resp.status_code == 200
        assert resp.json()["seat_id"] == 2
        assert demo_store.get_user("user-1").current_seat_id == 2

    def test_move_to_occupied_seat(self, client: TestClient):
        resp = client.post("/api/v1/seats/3/move", json={"user_id": "user-1"})
        assert resp.status_code == 409

    def test_move_to_unknown_seat(self, client: TestClient):
        resp = client.post("/api/v1/seats/99/move", json={"user_id": "user-1"})
        assert resp.status_code == 404

    def test_log_activity(self, client: TestClient):
        resp = client.post(
            "/api/v1/activities", json={"user_id": "user-2", "activity_id": "workspace"}
        )
        assert resp.status_code == 200
        body = resp.json()
        assert body["points_awarded"] == 100
        assert body["points"] == 990
        assert body["level"] == "Green Warrior"
        assert body["next_level"] == "Eco Champion"

    def test_unknown_activity(self, client: TestClient):
        resp = client.post(
            "/api/v1/activities", json={"user_id": "user-2", "activity_id": "cycling"}
        )
        assert resp.status_code == 400
        assert "Unknown activity" in resp.json()["detail"]

    def test_activity_unknown_user(self, client: TestClient):
        resp = client.post(
            "/api/v1/activities", json={"user_id": "ghost", "activity_id": "ac"}
        )
        assert resp.status_code == 404

    def test_logged_activities_listed(self, client: TestClient):
        for activity_id in ("lights", "ac"):
            client.post(
                "/api/v1/activities", json={"user_id": "user-2", "activity_id": activity_id}
            )
        resp = client.get("/api/v1/users/user-2/activities")
        assert resp.status_code == 200
        body = resp.json()
        assert [r["activity_id"] for r in body] == ["ac", "lights"]
        assert body[0]["balance"] == 1015

        resp = client.get("/api/v1/users/user-2/activities", params={"limit": 1})
        assert len(resp.json()) == 1


class TestAppFactory:

    def test_builds_store_from_settings(self):
        app = create_app(settings=Settings(layout="floor_plan"))
        resp = TestClient(app).get("/api/v1/seats")
        assert len(resp.json()) == 11

    def test_store_override(self, floor_store: InMemoryMetricStore):
        app = create_app()
        app.dependency_overrides[get_store] = lambda: floor_store
        resp = TestClient(app).get("/api/v1/users")
        assert len(resp.json()) == 5

    @pytest.mark.parametrize("handler", [
        routes.move_to_seat,
        routes.log_activity,
        routes.zone_energy,
        routes.user_report,
        routes.user_activities,
    ])
    def test_store_handlers_are_sync(self, handler):
        # Sync handlers run in the threadpool, off the event loop.
        assert not inspect.iscoroutinefunction(handler)

    def test_json_store_writes_through_api(self, tmp_path):
        path = tmp_path / "office.json"
        settings = Settings(store=StoreConfig(backend="json", path=str(path)))
        client = TestClient(create_app(settings=settings))
        resp = client.post("/api/v1/seats/2/move", json={"user_id": "user-1"})
        assert resp.status_code == 200
        assert JsonFileMetricStore(path=path).get_seat(2).user_id == "user-1"
