def test_health_ok(client):
    r = client.get("/health")

    assert r.status_code == 200
    assert "application/json" in r.headers.get("content-type", "")
    data = r.json()
    assert data["ok"] is True
    assert data["data"]["service"] == "PARTS CATALOG"


def test_db_ping(client):
    r = client.get("/db-ping")

    assert r.status_code == 200
    assert r.json()["data"] == {"db": "ok", "select1": 1}
