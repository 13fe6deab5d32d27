"""Tests for API endpoints."""

from __future__ import annotations

import json

from fastapi.testclient import TestClient

from bloomchart.config import settings
from bloomchart.main import app
from tests.conftest import AVERAGES, BENCHMARKS, SCORES, requires_cairo


client = TestClient(app)

CHART = {"scores": SCORES, "benchmarks": BENCHMARKS, "averages": AVERAGES}


def _events(body: str) -> list[tuple[str, dict]]:
    events = []
    for block in body.strip().split("\n\n"):
        lines = dict(line.split(": ", 1) for line in block.splitlines())
        events.append((lines["event"], json.loads(lines["data"])))
    return events


def test_health():
    response = client.get("/api/health")
    assert response.status_code == 200
    data = response.json()
    assert data["status"] == "ok"
    assert data["layer_passes_registered"] == 9


def test_layers_in_z_order():
    data = client.get("/api/layers").json()
    assert [d["z_index"] for d in data] == list(range(9))
    assert data[0]["layer"] == "background"
    assert data[-1]["layer"] == "tooltip"


def test_frame():
    response = client.post("/api/frame", json=CHART)
    assert response.status_code == 200
    data = response.json()
    assert data["canvas_size"] == 500
    assert data["progress"]["complete"] is True
    layers = {layer["layer"]: layer for layer in data["layers"]}
    assert len(layers) == 9
    assert layers["gaps"]["subtractive"] is True
    assert len(layers["background"]["shapes"]) == 24
    score = layers["score"]["shapes"][0]
    assert score["type"] == "Wedge"
    assert score["meta"] == {"category": 0, "tier": 0, "value": 2.3, "metric": "score"}


def test_frame_clamps_raw_values():
    response = client.post(
        "/api/frame",
        json={"scores": ["abc", 5, -2], "benchmarks": [], "averages": [None]},
    )
    assert response.status_code == 200
    layers = {layer["layer"]: layer for layer in response.json()["layers"]}
    values = {s["meta"]["value"] for s in layers["score"]["shapes"]}
    assert values == {4.0}
    assert layers["benchmark"]["shapes"] == []


def test_frame_visibility_flags():
    response = client.post("/api/frame", json={**CHART, "show_average": False, "size": 1000})
    data = response.json()
    layers = {layer["layer"]: layer for layer in data["layers"]}
    assert data["canvas_size"] == 1000
    assert layers["average"]["shapes"] == []


def test_hit_test_score():
    response = client.post("/api/hit-test", json={**CHART, "x": 285.0, "y": 189.38})
    assert response.status_code == 200
    data = response.json()
    assert data["hit"] is True
    assert (data["category"], data["tier"], data["metric"]) == (0, 0, "score")
    assert data["tooltip_text"] == "klimaat\nRing 1: 2.3 (Score)"
    assert data["tooltip_x"] == 300.0


def test_hit_test_gap():
    data = client.post("/api/hit-test", json={**CHART, "x": 250.0, "y": 180.0}).json()
    assert data["hit"] is False
    assert data["tooltip_text"] == ""


def test_export_unknown_variant():
    response = client.post("/api/export/everything", json=CHART)
    assert response.status_code == 422


@requires_cairo
def test_export_png():
    response = client.post("/api/export/scores", json={**CHART, "scale": 2})
    assert response.status_code == 200
    assert response.headers["content-type"] == "image/png"
    assert "radial-chart-scores.png" in response.headers["content-disposition"]


@requires_cairo
def test_render_png():
    response = client.post("/api/render", json=CHART)
    assert response.status_code == 200
    assert response.content[:8] == b"\x89PNG\r\n\x1a\n"


def test_animate_stream():
    response = client.post(
        "/api/animate/stream",
        json={
            **CHART,
            "progress_shape": "per_slice",
            "duration_ms": 40,
            "stagger_delay_ms": 2,
            "frame_interval_ms": 5,
        },
    )
    assert response.status_code == 200
    assert response.headers["content-type"].startswith("text/event-stream")
    events = _events(response.text)
    kinds = [kind for kind, _ in events]
    assert kinds[-2:] == ["result", "done"]
    assert set(kinds[:-2]) == {"progress"}
    progress = [data for kind, data in events if kind == "progress"]
    assert progress[-1]["progress"]["complete"] is True
    assert events[-2][1]["progress"]["complete"] is True
    assert events[-1][1]["ticks"] == len(progress)


def test_animate_stream_places_configured_overlay(monkeypatch, tmp_path):
    asset = tmp_path / "labels.png"
    asset.write_bytes(b"not parsed by the engine")
    monkeypatch.setattr(settings, "overlay_path", str(asset))
    response = client.post(
        "/api/animate/stream",
        json={**CHART, "duration_ms": 10, "stagger_delay_ms": 0, "frame_interval_ms": 5},
    )
    events = _events(response.text)
    progress = [data for kind, data in events if kind == "progress"]
    assert all(data["shapes"]["overlay"] == 1 for data in progress)
    result = events[-2][1]
    layers = {layer["layer"]: layer for layer in result["layers"]}
    (overlay,) = layers["overlay"]["shapes"]
    assert overlay["type"] == "OverlayImage"
    assert overlay["path"] == str(asset)
    assert result["errors"] == {}
