import io

import pytest

from app import app

from conftest import make_row, rows_to_csv


@pytest.fixture
def client():
    app.config["TESTING"] = True
    return app.test_client()


def test_health(client):
    resp = client.get("/api/health")

    assert resp.status_code == 200
    assert resp.get_json()["status"] == "healthy"


def test_analyze_json_rows(client, sample_rows):
    resp = client.post("/api/analyze", json={"rows": sample_rows, "top_k": 3})

    assert resp.status_code == 200
    body = resp.get_json()
    assert body["status"] == "success"
    data = body["data"]
    assert data["ranking"]["tract_id"] == "36001000100"
    assert data["ranking"]["degree_centrality"] == 0.5
    assert [t["tract_id"] for t in data["top_tracts"]] == [
        "36001000100", "36001000300", "36001000200",
    ]
    assert data["total_count"] == 5
    assert data["network_statistics"]["num_edges"] == 2


def test_analyze_csv_upload(client, sample_rows):
    payload = rows_to_csv(sample_rows).encode("utf-8")

    resp = client.post(
        "/api/analyze",
        data={"file": (io.BytesIO(payload), "tracts.csv"), "use_indexed_edges": "true"},
        content_type="multipart/form-data",
    )

    assert resp.status_code == 200
    assert resp.get_json()["data"]["ranking"]["tract_id"] == "36001000100"


def test_analyze_requires_body(client):
    resp = client.post("/api/analyze")

    assert resp.status_code == 400
    assert resp.get_json()["status"] == "error"


def test_analyze_rejects_bad_rows_shape(client):
    resp = client.post("/api/analyze", json={"rows": "36001000100"})

    assert resp.status_code == 400


def test_analyze_reports_malformed_record(client, sample_rows):
    rows = sample_rows + [make_row("36001000900", tract_snap="n/a")]

    resp = client.post("/api/analyze", json={"rows": rows})

    assert resp.status_code == 400
    assert "tract_snap" in resp.get_json()["error"]


def test_analyze_skip_malformed_option(client, sample_rows):
    rows = sample_rows + [make_row("36001000900", tract_snap="n/a")]

    resp = client.post("/api/analyze", json={"rows": rows, "skip_malformed": True})

    assert resp.status_code == 200
    assert resp.get_json()["data"]["node_count"] == 5
    assert resp.get_json()["data"]["total_count"] == 6


def test_analyze_single_row_is_insufficient(client):
    resp = client.post("/api/analyze", json={"rows": [make_row("36001000100")]})

    assert resp.status_code == 400


def test_analyze_empty_rows_is_rejected(client):
    resp = client.post("/api/analyze", json={"rows": []})

    assert resp.status_code == 400
    assert resp.get_json()["status"] == "error"


def test_unknown_endpoint(client):
    assert client.get("/api/nope").status_code == 404


@pytest.mark.parametrize("value", [False, "false", "False"])
def test_analyze_skip_malformed_false_strings(client, sample_rows, value):
    rows = sample_rows + [make_row("36001000900", tract_snap="n/a")]

    resp = client.post("/api/analyze", json={"rows": rows, "skip_malformed": value})

    assert resp.status_code == 400
    assert "tract_snap" in resp.get_json()["error"]


def test_analyze_upload_skip_malformed_false(client, sample_rows):
    rows = sample_rows + [make_row("36001000900", tract_snap="n/a")]
    payload = rows_to_csv(rows).encode("utf-8")

    resp = client.post(
        "/api/analyze",
        data={"file": (io.BytesIO(payload), "tracts.csv"), "skip_malformed": "false"},
        content_type="multipart/form-data",
    )

    assert resp.status_code == 400
    assert "tract_snap" in resp.get_json()["error"]


@pytest.mark.parametrize("options", [
    {"top_k": "abc"},
    {"top_k": -1},
    {"top_k": True},
    {"adjacency_threshold": "x"},
    {"adjacency_threshold": -3},
    {"skip_malformed": "maybe"},
    {"use_indexed_edges": 1},
])
def test_analyze_rejects_invalid_options(client, sample_rows, options):
    resp = client.post("/api/analyze", json={"rows": sample_rows, **options})

    assert resp.status_code == 400
    body = resp.get_json()
    assert body["status"] == "error"
    assert body["data"] is None
    assert next(iter(options)) in body["error"]


def test_analyze_rejects_non_object_body(client):
    resp = client.post("/api/analyze", json=[["36001000100"]])

    assert resp.status_code == 400


def test_analyze_top_k_as_string(client, sample_rows):
    resp = client.post("/api/analyze", json={"rows": sample_rows, "top_k": "2"})

    assert resp.status_code == 200
    assert len(resp.get_json()["data"]["top_tracts"]) == 2


def test_analyze_upload_empty_file(client):
    resp = client.post(
        "/api/analyze",
        data={"file": (io.BytesIO(b""), "tracts.csv")},
        content_type="multipart/form-data",
    )

    assert resp.status_code == 400
    assert resp.get_json()["status"] == "error"
