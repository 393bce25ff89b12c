"""Endpoint tests for the route planner service."""
import pytest
from fastapi.testclient import TestClient

from main import app

client = TestClient(app)

ROUTE = [
    {"id": "a", "lat": 0.0, "lng": 0.0, "altitude": 30},
    {"id": "b", "lat": 0.0, "lng": 0.001, "altitude": 30},
    {"id": "c", "lat": 0.0, "lng": 0.002, "altitude": 100},
]


def test_health() -> None:
    response = client.get("/api/health")
    assert response.status_code == 200
    assert response.json()["status"] == "operational"


def test_batteries_catalog() -> None:
    response = client.get("/api/batteries")
    assert response.status_code == 200
    ids = [b["id"] for b in response.json()]
    assert ids == ["lihv-850", "liion-3000"]


def test_patterns_catalog() -> None:
    response = client.get("/api/patterns")
    types = {p["type"] for p in response.json()}
    assert types == {"circle", "spiral-up", "spiral-down", "figure8", "oval"}


def test_curve_endpoint() -> None:
    response = client.post("/api/curve", json={"waypoints": ROUTE})
    assert response.status_code == 200
    body = response.json()
    assert len(body["points"]) == 42
    assert body["segment_ranges"] == [{"start": 0, "end": 20}, {"start": 21, "end": 41}]


def test_generate_pattern_endpoint() -> None:
    response = client.post("/api/patterns/generate", json={
        "type": "oval", "center_lat": 40.0, "center_lng": -3.0,
        "radius": 50, "point_count": 10,
    })
    assert response.status_code == 200
    assert len(response.json()) == 11


def test_unknown_pattern_type_is_rejected() -> None:
    response = client.post("/api/patterns/generate", json={
        "type": "hexagon", "center_lat": 40.0, "center_lng": -3.0,
    })
    assert response.status_code == 422


def test_regenerate_keeps_ids_in_route() -> None:
    placed = client.post("/api/patterns/generate", json={
        "type": "circle", "center_lat": 40.0, "center_lng": -3.0,
        "radius": 80, "point_count": 8,
    }).json()
    route = [{"id": "home", "lat": 39.99, "lng": -3.01, "altitude": 20}] + placed

    response = client.post("/api/patterns/regenerate", json={
        "type": "circle", "center_lat": 40.0, "center_lng": -3.0,
        "waypoint_ids": [wp["id"] for wp in placed], "radius": 120,
        "route": route,
    })
    assert response.status_code == 200
    updated = response.json()
    assert [wp["id"] for wp in updated] == [wp["id"] for wp in route]
    assert updated[0] == route[0]
    assert updated[1]["lng"] > placed[0]["lng"]


def test_regenerate_requires_ids() -> None:
    response = client.post("/api/patterns/regenerate", json={
        "type": "circle", "center_lat": 40.0, "center_lng": -3.0, "waypoint_ids": [],
    })
    assert response.status_code == 400


def test_analyze_with_catalog_battery() -> None:
    response = client.post("/api/route/analyze", json={"waypoints": ROUTE, "battery_id": "lihv-850"})
    assert response.status_code == 200
    body = response.json()
    assert len(body["segments"]) == 2
    assert body["segments"][1]["average_current"] > body["segments"][0]["average_current"]
    assert body["battery_status"] == "ok"


def test_analyze_with_inline_battery_and_speeds() -> None:
    battery = {"id": "tiny", "name": "Tiny 10mAh", "chemistry": "LiPo", "capacity_mah": 10,
               "nominal_voltage": 3.7, "cell_count": 1, "max_discharge_a": 5}
    response = client.post("/api/route/analyze", json={
        "waypoints": ROUTE, "battery": battery, "cruise_speed": 10, "climb_speed": 3,
    })
    assert response.status_code == 200
    assert response.json()["battery_status"] == "crash"


def test_analyze_battery_errors() -> None:
    missing = client.post("/api/route/analyze", json={"waypoints": ROUTE})
    assert missing.status_code == 400

    unknown = client.post("/api/route/analyze", json={"waypoints": ROUTE, "battery_id": "nope"})
    assert unknown.status_code == 404


@pytest.mark.parametrize("field", ["cruise_speed", "climb_speed"])
def test_non_positive_speeds_rejected(field: str) -> None:
    response = client.post("/api/route/analyze", json={
        "waypoints": ROUTE, "battery_id": "lihv-850", field: 0,
    })
    assert response.status_code == 422


def test_gradient_endpoint() -> None:
    response = client.post("/api/route/gradient", json={"waypoints": ROUTE, "battery_id": "lihv-850"})
    stops = response.json()
    assert [s["color"] for s in stops] == ["#22c55e", "#ef4444", "#ef4444"]
    assert stops[-1]["position"] == pytest.approx(1.0)


def test_plan_endpoint() -> None:
    response = client.post("/api/route/plan", json={"waypoints": ROUTE, "battery_id": "liion-3000"})
    assert response.status_code == 200
    plan = response.json()
    assert [wp["id"] for wp in plan["waypoints"]] == ["a", "b", "c"]
    assert len(plan["curve"]["points"]) == 42
    assert len(plan["analysis"]["segments"]) == 2
    assert len(plan["gradient"]) == 3
    assert plan["summary"]["max_altitude"] == 100
    assert plan["battery"]["id"] == "liion-3000"


def test_plan_for_empty_route() -> None:
    response = client.post("/api/route/plan", json={"waypoints": [], "battery_id": "lihv-850"})
    plan = response.json()
    assert plan["curve"]["points"] == []
    assert plan["analysis"]["total_consumption"] == 0
    assert [s["color"] for s in plan["gradient"]] == ["#22c55e", "#22c55e"]
