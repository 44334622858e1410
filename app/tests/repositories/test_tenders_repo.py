import uuid

import pytest
from sqlalchemy.exc import IntegrityError

from app.core.errors import TenderHistoryNotFoundError, TenderNotFoundError, UserNotFoundError
from app.models.enums import TenderStatus
from app.models.tender import TenderHistory
from app.repositories.base import TenderDraft, TenderPatch
from app.repositories.tenders_repo import SqlTenderStore
from app.repositories.users_repo import SqlUserDirectory
from app.tests.factories import create_org, create_tender, create_user, make_responsible


def test_create_starts_at_version_one(db):
    alice = create_user(db, "alice")
    org = create_org(db)
    store = SqlTenderStore(db)

    t = store.create(
        TenderDraft(
            name="Road",
            description="",
            service_type="Construction",
            status=TenderStatus.CREATED,
            organization_id=org.id,
            creator_id=alice.id,
        )
    )

    assert t.version == 1
    assert store.get(t.id).name == "Road"
    assert db.query(TenderHistory).count() == 0


def test_get_unknown_tender(db):
    with pytest.raises(TenderNotFoundError):
        SqlTenderStore(db).get(uuid.uuid4())


def test_status_change_writes_history_row_for_prior_version(db):
    alice = create_user(db, "alice")
    t = create_tender(db, alice, create_org(db))
    store = SqlTenderStore(db)

    store.update_status(t, TenderStatus.PUBLISHED)

    assert t.version == 2
    snap = store.get_history(t.id, 1)
    assert snap.status == "CREATED"
    assert snap.name == "Road"
    with pytest.raises(TenderHistoryNotFoundError):
        store.get_history(t.id, 2)


def test_field_patch_snapshots_then_applies(db):
    alice = create_user(db, "alice")
    t = create_tender(db, alice, create_org(db))
    store = SqlTenderStore(db)

    store.update_fields(t, TenderPatch(description="Widen it"))
    store.update_fields(t, TenderPatch(name="Highway"))

    fresh = store.get(t.id)
    assert fresh.version == 3
    assert fresh.name == "Highway"
    assert fresh.description == "Widen it"
    assert store.get_history(t.id, 1).description == "Resurface the ring road"
    assert store.get_history(t.id, 2).description == "Widen it"
    assert store.get_history(t.id, 2).name == "Road"


def test_history_is_per_tender(db):
    alice = create_user(db, "alice")
    org = create_org(db)
    first = create_tender(db, alice, org, name="A")
    second = create_tender(db, alice, org, name="B")
    store = SqlTenderStore(db)

    store.update_status(first, TenderStatus.CLOSED)

    with pytest.raises(TenderHistoryNotFoundError):
        store.get_history(second.id, 1)


def test_list_by_service_type(db):
    alice = create_user(db, "alice")
    org = create_org(db)
    create_tender(db, alice, org, name="Road", service_type="Construction")
    create_tender(db, alice, org, name="Parcels", service_type="Delivery")
    store = SqlTenderStore(db)

    assert [t.name for t in store.list_by_service_type("Delivery")] == ["Parcels"]
    assert {t.name for t in store.list_by_service_type(None)} == {"Road", "Parcels"}


def test_list_by_creator_username(db):
    alice = create_user(db, "alice")
    bob = create_user(db, "bob")
    org = create_org(db)
    create_tender(db, alice, org, name="Mine")
    create_tender(db, bob, org, name="Theirs")
    store = SqlTenderStore(db)

    assert [t.name for t in store.list_by_creator_username("alice")] == ["Mine"]
    assert store.list_by_creator_username("nobody") == []


def test_user_directory_lookups(db):
    alice = create_user(db, "alice")
    bob = create_user(db, "bob")
    org = create_org(db)
    make_responsible(db, alice, org)
    users = SqlUserDirectory(db)

    assert users.resolve_user_id("alice") == alice.id
    assert users.get_by_id(bob.id).username == "bob"
    assert users.is_organization_responsible(alice.id, org.id)
    assert not users.is_organization_responsible(bob.id, org.id)
    assert [u.username for u in users.list_users()] == ["alice", "bob"]
    with pytest.raises(UserNotFoundError):
        users.resolve_user_id("ghost")
    with pytest.raises(UserNotFoundError):
        users.get_by_id(uuid.uuid4())


def test_stale_writer_fails_and_writes_nothing(db, session_factory):
    alice = create_user(db, "alice")
    tid = create_tender(db, alice, create_org(db)).id

    first = session_factory()
    second = session_factory()
    try:
        winner = SqlTenderStore(first)
        loser = SqlTenderStore(second)
        fresh = winner.get(tid)
        stale = loser.get(tid)
        assert fresh.version == stale.version == 1

        winner.update_status(fresh, TenderStatus.PUBLISHED)
        with pytest.raises(IntegrityError):
            loser.update_status(stale, TenderStatus.CLOSED)

        # the rolled back instance reloads the committed state
        assert stale.status == "PUBLISHED"
        assert stale.version == 2
    finally:
        first.close()
        second.close()

    check = session_factory()
    try:
        current = SqlTenderStore(check).get(tid)
        assert current.status == "PUBLISHED"
        assert current.version == 2
        rows = check.query(TenderHistory).filter_by(tender_id=tid).all()
        assert [(r.version, r.status) for r in rows] == [(1, "CREATED")]
    finally:
        check.close()
