def test_ping(client):
    r = client.get("/api/ping")
    assert r.status_code == 200
    assert r.json()["status"] == "ok"
    assert r.headers["X-Request-Id"] == r.json()["request_id"]


def test_request_id_is_echoed(client):
    r = client.get("/api/ping", headers={"X-Request-Id": "abc-123"})
    assert r.headers["X-Request-Id"] == "abc-123"
    assert r.json()["request_id"] == "abc-123"


def test_unknown_route_uses_reason_body(client):
    r = client.get("/api/nope")
    assert r.status_code == 404
    assert "reason" in r.json()


def test_list_users(client, db):
    from app.tests.factories import create_user

    create_user(db, "bob")
    create_user(db, "alice")

    r = client.get("/api/users")
    assert r.status_code == 200
    assert [u["username"] for u in r.json()] == ["alice", "bob"]
