import pytest
from fastapi.testclient import TestClient

from app import app

T0 = 1_700_000_000_000


@pytest.fixture
def client():
    return TestClient(app)


@pytest.fixture
def raw_positions():
    return [
        {"latitude": 48.8566, "longitude": 2.3522, "timestamp": T0, "speed": 10, "accuracy": 4},
        {"latitude": 48.8566, "longitude": 2.3522, "timestamp": T0 + 1000, "speed": 10},
        {"latitude": 48.8567, "longitude": 2.3523, "timestamp": T0 + 2000, "speed": 150},
        {"latitude": 48.8568, "longitude": 2.3524, "timestamp": T0 + 3000},
    ]


def test_optimize(client, raw_positions):
    response = client.post("/api/tracks/optimize", json={"positions": raw_positions})

    assert response.status_code == 200
    body = response.json()
    assert body["raw_count"] == 4
    assert body["optimized_count"] == 2
    assert body["positions"] == [
        {"lat": 48.8566, "lng": 2.3522, "t": 0, "s": 10.0},
        {"lat": 48.8568, "lng": 2.3524, "t": 3},
    ]


def test_restore(client):
    stored = [{"lat": 48.8566, "lng": 2.3522, "t": 0, "s": 10.0}, {"lat": 48.8568, "lng": 2.3524, "t": 3}]
    response = client.post("/api/tracks/restore", json={"positions": stored, "start_time": T0})

    assert response.status_code == 200
    positions = response.json()["positions"]
    assert [p["timestamp"] for p in positions] == [T0, T0 + 3000]
    assert positions[0]["speed"] == 10.0
    assert "speed" not in positions[1]
    assert "accuracy" not in positions[0]


def test_restore_requires_start_time(client):
    response = client.post("/api/tracks/restore", json={"positions": []})
    assert response.status_code == 422


def test_summary(client, raw_positions):
    response = client.post(
        "/api/tracks/summary", json={"positions": raw_positions, "activity_type": "biking"}
    )

    assert response.status_code == 200
    body = response.json()
    assert body["activity_type"] == "biking"
    assert body["sample_count"] == 4
    assert body["duration_s"] == 3


def test_summary_unknown_activity(client, raw_positions):
    response = client.post(
        "/api/tracks/summary", json={"positions": raw_positions, "activity_type": "rowing"}
    )

    assert response.status_code == 400
    assert "rowing" in response.json()["detail"]


def test_metrics(client):
    response = client.get("/api/metrics", params={"distance_km": 5, "duration_s": 1500})

    assert response.status_code == 200
    body = response.json()
    assert body["pace_min_per_km"] == 5
    assert body["pace_display"] == "05:00"
    assert body["co2_saved_kg"] == pytest.approx(0.6)
    assert body["duration_display"] == "25:00"
    assert body["life_gained_display"] == "2.9h"


def test_metrics_without_distance(client):
    response = client.get("/api/metrics", params={"distance_km": 0, "duration_s": 60})

    assert response.json()["pace_min_per_km"] == 0
    assert response.json()["pace_display"] == "--:--"


def test_export_gpx(client, raw_positions):
    response = client.post("/api/export/gpx", json={"positions": raw_positions[:1], "name": "Morning run"})

    assert response.status_code == 200
    assert response.headers["content-type"].startswith("application/gpx+xml")
    assert "attachment" in response.headers["content-disposition"]
    assert "<name>Morning run</name>" in response.text
    assert "<speed>10</speed>" in response.text


@pytest.mark.parametrize(
    "params",
    [
        {"distance_km": "nan", "duration_s": 60},
        {"distance_km": 1, "duration_s": "inf"},
        {"distance_km": "-inf", "duration_s": 60},
    ],
)
def test_metrics_rejects_non_finite(client, params):
    response = client.get("/api/metrics", params=params)
    assert response.status_code == 422


@pytest.mark.parametrize("field", ["latitude", "timestamp", "speed"])
def test_optimize_rejects_non_finite(client, raw_positions, field):
    raw_positions[1][field] = "NaN"
    response = client.post("/api/tracks/optimize", json={"positions": raw_positions})
    assert response.status_code == 422


def test_restore_rejects_non_finite(client):
    stored = [{"lat": "Infinity", "lng": 2.3522, "t": 0}]
    response = client.post("/api/tracks/restore", json={"positions": stored, "start_time": T0})
    assert response.status_code == 422


def test_export_gpx_unrepresentable_time(client, raw_positions):
    raw_positions[0]["timestamp"] = 1e15
    response = client.post("/api/export/gpx", json={"positions": raw_positions[:1]})

    assert response.status_code == 400
    assert "GPX time" in response.json()["detail"]
