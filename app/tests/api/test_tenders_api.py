import uuid

import pytest

from app.tests.factories import create_org, create_user, make_responsible


@pytest.fixture
def world(db):
    alice = create_user(db, "alice")
    create_user(db, "mallory")
    olga = create_user(db, "olga")
    org = create_org(db)
    make_responsible(db, olga, org)
    return {"alice": alice, "org": org}


def _create(client, org_id, name="Road", creator="alice", **extra):
    body = {
        "name": name,
        "description": "Ring road",
        "serviceType": "Construction",
        "organizationId": str(org_id),
        "creatorUsername": creator,
    }
    body.update(extra)
    return client.post("/api/tenders/new", json=body)


def test_create_and_list(client, world):
    r = _create(client, world["org"].id)
    assert r.status_code == 200
    body = r.json()
    assert body["version"] == 1
    assert body["status"] == "CREATED"
    assert body["creatorId"] == str(world["alice"].id)

    assert [t["name"] for t in client.get("/api/tenders").json()] == ["Road"]
    assert client.get("/api/tenders", params={"service_type": "Delivery"}).json() == []
    mine = client.get("/api/tenders/my", params={"username": "alice"}).json()
    assert [t["id"] for t in mine] == [body["id"]]


def test_create_unknown_creator_is_401(client, world):
    r = _create(client, world["org"].id, creator="ghost")
    assert r.status_code == 401
    assert r.json()["reason"]


def test_create_with_malformed_organization_is_400(client, world):
    r = _create(client, "org-1")
    assert r.status_code == 400


def test_create_without_name_is_400(client, world):
    r = client.post(
        "/api/tenders/new",
        json={"organizationId": str(world["org"].id), "creatorUsername": "alice"},
    )
    assert r.status_code == 400
    assert "name" in r.json()["reason"]


def test_status_read_and_update(client, world):
    tid = _create(client, world["org"].id).json()["id"]

    r = client.get(f"/api/tenders/{tid}/status", params={"username": "olga"})
    assert r.status_code == 200
    assert r.json() == "CREATED"

    r = client.put(
        f"/api/tenders/{tid}/status", params={"status": "PUBLISHED", "username": "alice"}
    )
    assert r.status_code == 200
    assert r.json()["status"] == "PUBLISHED"
    assert r.json()["version"] == 2


@pytest.mark.parametrize(
    "method,suffix,params",
    [
        ("get", "status", {"username": "alice"}),
        ("put", "status", {"status": "CLOSED", "username": "alice"}),
        ("post", "rollback/1", {"username": "alice"}),
    ],
)
def test_malformed_and_unknown_tender_ids(client, world, method, suffix, params):
    bad = getattr(client, method)(f"/api/tenders/not-a-uuid/{suffix}", params=params)
    assert bad.status_code == 400

    missing = getattr(client, method)(f"/api/tenders/{uuid.uuid4()}/{suffix}", params=params)
    assert missing.status_code == 404


def test_outsider_gets_403_and_nothing_changes(client, world):
    tid = _create(client, world["org"].id).json()["id"]

    r = client.put(
        f"/api/tenders/{tid}/status", params={"status": "CLOSED", "username": "mallory"}
    )
    assert r.status_code == 403
    assert r.json()["reason"]

    r = client.patch(
        f"/api/tenders/{tid}/edit", params={"username": "mallory"}, json={"name": "Mine"}
    )
    assert r.status_code == 403

    status = client.get(f"/api/tenders/{tid}/status", params={"username": "alice"})
    assert status.json() == "CREATED"


def test_unknown_username_is_401(client, world):
    tid = _create(client, world["org"].id).json()["id"]
    r = client.get(f"/api/tenders/{tid}/status", params={"username": "ghost"})
    assert r.status_code == 401


def test_invalid_status_is_400(client, world):
    tid = _create(client, world["org"].id).json()["id"]
    r = client.put(
        f"/api/tenders/{tid}/status", params={"status": "ARCHIVED", "username": "alice"}
    )
    assert r.status_code == 400


def test_edit_validation(client, world):
    tid = _create(client, world["org"].id).json()["id"]

    empty = client.patch(f"/api/tenders/{tid}/edit", params={"username": "alice"}, json={})
    assert empty.status_code == 400

    unknown_key = client.patch(
        f"/api/tenders/{tid}/edit", params={"username": "alice"}, json={"version": 9}
    )
    assert unknown_key.status_code == 400

    ok = client.patch(
        f"/api/tenders/{tid}/edit", params={"username": "alice"}, json={"serviceType": "Delivery"}
    )
    assert ok.status_code == 200
    assert ok.json()["serviceType"] == "Delivery"
    assert ok.json()["name"] == "Road"
    assert ok.json()["version"] == 2


def test_blank_name_rejected_on_create_and_edit(client, world):
    assert _create(client, world["org"].id, name="   ").status_code == 400

    tid = _create(client, world["org"].id).json()["id"]
    r = client.patch(f"/api/tenders/{tid}/edit", params={"username": "alice"}, json={"name": "   "})
    assert r.status_code == 400
    assert r.json()["reason"] == "Tender name is required."

    status = client.get(f"/api/tenders/{tid}/status", params={"username": "alice"})
    assert status.status_code == 200
    listed = client.get("/api/tenders/my", params={"username": "alice"}).json()
    assert [(t["name"], t["version"]) for t in listed] == [("Road", 1)]


def test_rollback_flow(client, world):
    tid = _create(client, world["org"].id).json()["id"]
    client.patch(f"/api/tenders/{tid}/edit", params={"username": "alice"}, json={"name": "Highway"})
    client.put(f"/api/tenders/{tid}/status", params={"status": "PUBLISHED", "username": "alice"})

    r = client.post(f"/api/tenders/{tid}/rollback/1", params={"username": "olga"})

    assert r.status_code == 200
    body = r.json()
    assert body["name"] == "Road"
    assert body["status"] == "CREATED"
    assert body["version"] == 4


@pytest.mark.parametrize("version,code", [("99", 404), ("0", 400), ("abc", 400), ("-2", 400)])
def test_rollback_bad_versions(client, world, version, code):
    tid = _create(client, world["org"].id).json()["id"]
    r = client.post(f"/api/tenders/{tid}/rollback/{version}", params={"username": "alice"})
    assert r.status_code == code
