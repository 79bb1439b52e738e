"""Tests for API endpoints."""

from __future__ import annotations

from fastapi.testclient import TestClient

from gridgen.engine.palettes import ROAD_MAP_COLORS, ROAD_MAP_LABELS
from gridgen.main import app
from tests.conftest import BW_COLORS, BW_LABELS, png_b64, quadrant_image, solid_image


client = TestClient(app)


def _payload(**overrides):
    body = {
        "image": png_b64(quadrant_image()),
        "width": 2,
        "height": 2,
        "colors": [list(c) for c in ROAD_MAP_COLORS],
        "labels": ROAD_MAP_LABELS,
    }
    body.update(overrides)
    return body


def test_health():
    response = client.get("/api/health")
    assert response.status_code == 200
    assert response.json()["status"] == "ok"


def test_default_palette():
    response = client.get("/api/palettes/default")
    assert response.status_code == 200
    entries = response.json()["entries"]
    assert [e["label"] for e in entries] == ROAD_MAP_LABELS
    assert entries[0]["display_color"] == [0, 0, 255]


def test_generate_quadrants():
    response = client.post("/api/generate", json=_payload())
    assert response.status_code == 200
    data = response.json()
    assert (data["width"], data["height"]) == (2, 2)
    assert data["labels"] == [["water", "road"], ["grass", "mountain"]]
    assert data["ascii_grid"] == "W R\nG M"
    assert data["label_counts"] == {"water": 1, "road": 1, "grass": 1, "mountain": 1}


def test_generate_black_white():
    body = _payload(
        image=png_b64(solid_image((12, 12, 12), 10, 10)),
        width=5,
        height=3,
        colors=[list(c) for c in BW_COLORS],
        labels=BW_LABELS,
    )
    data = client.post("/api/generate", json=body).json()
    assert data["label_counts"] == {"black": 15}


def test_length_mismatch_is_422():
    response = client.post("/api/generate", json=_payload(labels=ROAD_MAP_LABELS[:3]))
    assert response.status_code == 422


def test_out_of_range_channel_is_422():
    response = client.post("/api/generate", json=_payload(colors=[[0, 0, 0], [300, 0, 0], [1, 1, 1], [2, 2, 2]]))
    assert response.status_code == 422


def test_non_positive_size_is_422():
    response = client.post("/api/generate", json=_payload(width=0))
    assert response.status_code == 422


def test_undecodable_image_is_400():
    response = client.post("/api/generate", json=_payload(image="bm90IGFuIGltYWdl"))
    assert response.status_code == 400


def test_oversized_grid_is_422():
    response = client.post("/api/generate", json=_payload(width=100000, height=100000))
    assert response.status_code == 422


def test_many_labels_sharing_a_first_letter():
    n = 40
    body = _payload(
        colors=[[i * 6, i * 6, i * 6] for i in range(n)],
        labels=[f"a{i}" for i in range(n)],
    )
    response = client.post("/api/generate", json=body)
    assert response.status_code == 200
    assert len(response.json()["legend"]) == n
