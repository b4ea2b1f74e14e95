from fastapi.testclient import TestClient

from rollsum.api.main import app


def test_health():
    client = TestClient(app)
    r = client.get("/health")
    assert r.status_code == 200

    payload = r.json()
    assert payload["status"] == "healthy"
    assert isinstance(payload["buckets"], int)


def test_health_reports_bucket_count(client, clock):
    assert client.get("/health").json()["buckets"] == 0

    client.post("/metric/foo", json={"value": 1})
    clock.advance(60)
    client.post("/metric/foo", json={"value": 1})

    assert client.get("/health").json()["buckets"] == 2
