from pathlib import Path


def test_health_and_ready_without_catalog(make_client):
    """Covers /health and /health/ready endpoints (locale_table/api/health.py)."""
    client = make_client(None)

    r1 = client.get("/health")
    assert r1.status_code == 200
    assert r1.json() == {"status": "ok"}

    r2 = client.get("/health/ready")
    assert r2.status_code == 200
    data = r2.json()
    assert data.get("ready") is True
    assert data["catalog"] is False


def test_ready_reports_selected_catalog(flat_dir: Path, make_client):
    data = make_client(flat_dir).get("/health/ready").json()
    assert data["catalog"] is True
