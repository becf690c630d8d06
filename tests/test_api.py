import pytest
from fastapi.testclient import TestClient

from poleguard.api import dependencies
from poleguard.api.routes import line_of_sight as line_of_sight_routes
from poleguard.main import create_app
from poleguard.persistence.repository import InMemoryRepository
from poleguard.services.cache import ZonePoleSnapshotCache

SQUARE = [[24.0, 46.0], [24.0, 46.1], [24.1, 46.1], [24.1, 46.0]]
SUPER_ADMIN = {"X-User-Role": "super_admin", "X-User-Id": "1"}


def admin(zone_id):
    return {"X-User-Role": "admin", "X-User-Id": "2", "X-Zone-Id": str(zone_id)}


def agent(zone_id=None):
    headers = {"X-User-Role": "agent", "X-User-Id": "3"}
    if zone_id is not None:
        headers["X-Zone-Id"] = str(zone_id)
    return headers


class StaticElevation:
    def __init__(self, by_latitude):
        self.by_latitude = by_latitude

    def get_elevation(self, latitude, longitude):
        return self.by_latitude[latitude]


class DownElevation:
    def get_elevation(self, latitude, longitude):
        raise ConnectionError("provider down")


@pytest.fixture
def elevation():
    return {"client": StaticElevation({24.05: 100.0, 24.06: 110.0})}


@pytest.fixture
def api_client(elevation) -> TestClient:
    app = create_app()
    repo = InMemoryRepository()
    cache = ZonePoleSnapshotCache()
    app.dependency_overrides[dependencies.get_repo] = lambda: repo
    app.dependency_overrides[dependencies.get_cache] = lambda: cache
    app.dependency_overrides[line_of_sight_routes.get_elevation_client] = lambda: elevation["client"]
    return TestClient(app)


@pytest.fixture
def zone_id(api_client: TestClient) -> int:
    response = api_client.post(
        "/api/zones",
        json={"zone_name": "Riyadh North", "zone_boundary": SQUARE},
        headers=SUPER_ADMIN,
    )
    assert response.status_code == 201
    return response.json()["zone"]["id"]


@pytest.fixture
def pole_id(api_client: TestClient, zone_id: int) -> int:
    response = api_client.post(
        "/api/poles",
        json={
            "pole_name": "Tower A",
            "latitude": 24.05,
            "longitude": 46.05,
            "pole_height": 20,
            "restricted_radius": 100,
        },
        headers=admin(zone_id),
    )
    assert response.status_code == 201
    return response.json()["pole"]["id"]


def test_health(api_client: TestClient):
    assert api_client.get("/api/health").json() == {"status": "ok"}


def test_role_header_is_required(api_client: TestClient):
    assert api_client.get("/api/poles").status_code == 422


def test_zone_roundtrip(api_client: TestClient, zone_id: int):
    payload = api_client.get(f"/api/zones/{zone_id}", headers=SUPER_ADMIN).json()["zone"]
    assert payload["zone_name"] == "Riyadh North"
    assert payload["zone_boundary"][0] == {"lat": 24.0, "lng": 46.0}
    assert payload["status"] == "active"

    response = api_client.post(
        "/api/zones",
        json={"zone_name": "Bowtie", "zone_boundary": [[0, 0], [1, 1], [0, 1], [1, 0]]},
        headers=SUPER_ADMIN,
    )
    assert response.status_code == 422


def test_pole_outside_zone_is_422(api_client: TestClient, zone_id: int):
    response = api_client.post(
        "/api/poles",
        json={"pole_name": "Far", "latitude": 25, "longitude": 47, "pole_height": 10, "restricted_radius": 100},
        headers=admin(zone_id),
    )
    assert response.status_code == 422
    assert response.json()["detail"] == "Pole coordinates must be within zone boundary"


def test_overlapping_pole_is_422(api_client: TestClient, zone_id: int, pole_id: int):
    response = api_client.post(
        "/api/poles",
        json={
            "pole_name": "Tower B",
            "latitude": 24.0505,
            "longitude": 46.05,
            "pole_height": 10,
            "restricted_radius": 100,
        },
        headers=admin(zone_id),
    )
    assert response.status_code == 422
    assert response.json()["detail"] == "Pole radius overlaps with existing pole: Tower A"


def test_super_admin_must_name_a_zone(api_client: TestClient, zone_id: int):
    response = api_client.post(
        "/api/poles",
        json={"pole_name": "X", "latitude": 24.05, "longitude": 46.05, "pole_height": 10, "restricted_radius": 100},
        headers=SUPER_ADMIN,
    )
    assert response.status_code == 422


def test_check_location_statuses(api_client: TestClient, zone_id: int, pole_id: int):
    red = api_client.post("/api/check-location", json={"latitude": 24.05, "longitude": 46.05}, headers=agent(zone_id))
    assert red.status_code == 200
    assert red.json()["status"] == "RED"
    assert red.json()["nearest_pole"] == "Tower A"
    assert red.json()["distance_to_pole"] == 0.0

    green = api_client.post("/api/check-location", json={"latitude": 24.02, "longitude": 46.02}, headers=agent(zone_id))
    assert green.json()["status"] == "GREEN"
    assert green.json()["can_market"] is True
    assert green.json()["nearby_poles"][0]["pole_name"] == "Tower A"

    gray = api_client.post("/api/check-location", json={"latitude": 25.0, "longitude": 47.0}, headers=agent(zone_id))
    assert gray.json()["status"] == "GRAY"

    unassigned = api_client.post("/api/check-location", json={"latitude": 24.05, "longitude": 46.05}, headers=agent())
    assert unassigned.json()["status"] == "GRAY"
    assert unassigned.json()["in_zone"] is False


def test_agent_endpoints(api_client: TestClient, zone_id: int, pole_id: int):
    assert api_client.get("/api/agent/zone", headers=agent(zone_id)).json()["zone"]["id"] == zone_id
    assert api_client.get("/api/agent/zone", headers=agent()).status_code == 404
    assert [p["id"] for p in api_client.get("/api/agent/poles", headers=agent(zone_id)).json()["data"]] == [pole_id]

    nearby = api_client.get(
        "/api/agent/nearby-poles",
        params={"latitude": 24.051, "longitude": 46.05},
        headers=agent(zone_id),
    ).json()["data"]
    assert nearby[0]["id"] == pole_id
    assert nearby[0]["distance"] == pytest.approx(111.19, abs=0.5)


def test_deleting_pole_turns_location_green(api_client: TestClient, zone_id: int, pole_id: int):
    body = {"latitude": 24.05, "longitude": 46.05}
    assert api_client.post("/api/check-location", json=body, headers=agent(zone_id)).json()["status"] == "RED"
    assert api_client.delete(f"/api/poles/{pole_id}", headers=admin(zone_id)).status_code == 200
    assert api_client.post("/api/check-location", json=body, headers=agent(zone_id)).json()["status"] == "GREEN"


def test_pole_access_is_zone_scoped(api_client: TestClient, zone_id: int, pole_id: int):
    assert api_client.get(f"/api/poles/{pole_id}", headers=admin(zone_id + 1)).status_code == 403
    assert api_client.get(f"/api/poles/{pole_id}", headers=SUPER_ADMIN).status_code == 200
    assert api_client.get("/api/poles/9999", headers=SUPER_ADMIN).status_code == 404
    assert api_client.get("/api/poles", headers=admin(zone_id + 1)).json()["poles"] == []


def test_pole_update_and_status_toggle(api_client: TestClient, zone_id: int, pole_id: int):
    updated = api_client.put(f"/api/poles/{pole_id}", json={"pole_height": 30}, headers=admin(zone_id))
    assert updated.status_code == 200
    assert updated.json()["pole"]["pole_height"] == 30

    toggled = api_client.patch(f"/api/poles/{pole_id}/status", headers=admin(zone_id))
    assert toggled.json()["pole"]["status"] == "inactive"
    assert api_client.get("/api/map/poles", headers=admin(zone_id)).json()["poles"] == []


def test_zone_with_poles_cannot_be_deleted(api_client: TestClient, zone_id: int, pole_id: int):
    response = api_client.delete(f"/api/zones/{zone_id}", headers=SUPER_ADMIN)
    assert response.status_code == 422
    assert response.json()["detail"] == "Cannot delete zone with assigned resources"


def test_land_owner_flow(api_client: TestClient, zone_id: int):
    created = api_client.post(
        "/api/land-owners",
        json={"owner_name": "Saad", "mobile_number": "0500000000", "address": "Street 1"},
        headers=admin(zone_id),
    )
    assert created.status_code == 201
    owner_id = created.json()["land_owner"]["id"]
    assert created.json()["land_owner"]["zone_id"] == zone_id
    assert api_client.get(f"/api/land-owners/{owner_id}", headers=admin(zone_id)).status_code == 200
    assert api_client.get(f"/api/land-owners/{owner_id}", headers=admin(zone_id + 1)).status_code == 403
    assert len(api_client.get("/api/land-owners", headers=SUPER_ADMIN).json()["land_owners"]) == 1


def test_line_of_sight_calculation_and_history(api_client: TestClient, zone_id: int, pole_id: int):
    response = api_client.post(
        "/api/line-of-sight/calculate",
        json={"pole_id": pole_id, "agent_latitude": 24.06, "agent_longitude": 46.05},
        headers=agent(zone_id),
    )
    assert response.status_code == 200
    data = response.json()["data"]
    assert data["result"] == "PARTIAL"
    assert data["extra_height_required"] == 10.0
    assert data["elevations"] == {
        "pole_ground_elevation": 100.0,
        "pole_top_elevation": 120.0,
        "agent_elevation": 110.0,
        "elevation_difference": 10.0,
    }
    assert data["pole"]["name"] == "Tower A"

    history = api_client.get(f"/api/line-of-sight/history/{pole_id}", headers=agent(zone_id)).json()["data"]
    assert [item["id"] for item in history] == [data["id"]]

    page = api_client.get("/api/line-of-sight", headers=SUPER_ADMIN).json()["data"]
    assert page["total"] == 1
    assert page["has_next_page"] is False


def test_line_of_sight_without_elevation_is_503(api_client: TestClient, elevation, zone_id: int, pole_id: int):
    elevation["client"] = DownElevation()
    response = api_client.post(
        "/api/line-of-sight/calculate",
        json={"pole_id": pole_id, "agent_latitude": 24.06, "agent_longitude": 46.05},
        headers=agent(zone_id),
    )
    assert response.status_code == 503
    page = api_client.get("/api/line-of-sight", headers=SUPER_ADMIN).json()["data"]
    assert page["total"] == 0


def test_line_of_sight_other_zone_is_403(api_client: TestClient, zone_id: int, pole_id: int):
    response = api_client.post(
        "/api/line-of-sight/calculate",
        json={"pole_id": pole_id, "agent_latitude": 24.06, "agent_longitude": 46.05},
        headers=agent(zone_id + 1),
    )
    assert response.status_code == 403


def test_zoneless_admin_is_refused(api_client: TestClient, zone_id: int, pole_id: int):
    zoneless = {"X-User-Role": "admin", "X-User-Id": "5"}
    assert api_client.get(f"/api/poles/{pole_id}", headers=zoneless).status_code == 403
    renamed = api_client.put(f"/api/poles/{pole_id}", json={"pole_name": "Renamed"}, headers=zoneless)
    assert renamed.status_code == 403
    assert api_client.get("/api/poles", headers=zoneless).status_code == 403
    assert api_client.get(f"/api/zones/{zone_id}/poles", headers=zoneless).status_code == 403
    assert api_client.get(f"/api/line-of-sight/history/{pole_id}", headers=zoneless).status_code == 403
    assert api_client.get("/api/land-owners", headers=zoneless).status_code == 403
    created = api_client.post(
        "/api/poles",
        json={
            "pole_name": "Sneaky",
            "latitude": 24.02,
            "longitude": 46.02,
            "pole_height": 10,
            "restricted_radius": 100,
            "zone_id": zone_id,
        },
        headers=zoneless,
    )
    assert created.status_code == 403

    pole = api_client.get(f"/api/poles/{pole_id}", headers=SUPER_ADMIN).json()["pole"]
    assert pole["pole_name"] == "Tower A"


def test_zoneless_agent_location_check_is_gray(api_client: TestClient, zone_id: int, pole_id: int):
    response = api_client.post("/api/check-location", json={"latitude": 24.05, "longitude": 46.05}, headers=agent())
    assert response.status_code == 200
    assert response.json()["status"] == "GRAY"


def test_zone_endpoints_require_role_header(api_client: TestClient, zone_id: int):
    assert api_client.get("/api/zones").status_code == 422
    assert api_client.get(f"/api/zones/{zone_id}").status_code == 422
    assert api_client.patch(f"/api/zones/{zone_id}/status").status_code == 422
    assert api_client.delete(f"/api/zones/{zone_id}").status_code == 422

    zone = api_client.get(f"/api/zones/{zone_id}", headers=SUPER_ADMIN).json()["zone"]
    assert zone["status"] == "active"


def test_land_owner_update_and_delete(api_client: TestClient, zone_id: int):
    owner_id = api_client.post(
        "/api/land-owners",
        json={"owner_name": "Saad", "mobile_number": "0500000000", "address": "Street 1", "notes": "gate code"},
        headers=admin(zone_id),
    ).json()["land_owner"]["id"]

    updated = api_client.put(
        f"/api/land-owners/{owner_id}",
        json={"mobile_number": "0555555555", "notes": None},
        headers=admin(zone_id),
    )
    assert updated.status_code == 200
    assert updated.json()["land_owner"]["mobile_number"] == "0555555555"
    assert updated.json()["land_owner"]["notes"] is None
    assert updated.json()["land_owner"]["owner_name"] == "Saad"

    other_admin = admin(zone_id + 1)
    assert api_client.put(f"/api/land-owners/{owner_id}", json={"owner_name": "X"}, headers=other_admin).status_code == 403
    assert api_client.delete(f"/api/land-owners/{owner_id}", headers=other_admin).status_code == 403

    pole_id = api_client.post(
        "/api/poles",
        json={
            "pole_name": "Tower A",
            "latitude": 24.05,
            "longitude": 46.05,
            "pole_height": 20,
            "restricted_radius": 100,
            "land_owner_id": owner_id,
        },
        headers=admin(zone_id),
    ).json()["pole"]["id"]

    refused = api_client.delete(f"/api/land-owners/{owner_id}", headers=admin(zone_id))
    assert refused.status_code == 422
    assert "associated poles" in refused.json()["detail"]

    unlinked = api_client.put(f"/api/poles/{pole_id}", json={"land_owner_id": None}, headers=admin(zone_id))
    assert unlinked.json()["pole"]["land_owner_id"] is None

    assert api_client.delete(f"/api/land-owners/{owner_id}", headers=admin(zone_id)).status_code == 200
    assert api_client.get(f"/api/land-owners/{owner_id}", headers=admin(zone_id)).status_code == 404
