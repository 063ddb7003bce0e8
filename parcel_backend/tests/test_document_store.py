"""
Document store adapter tests.

Covers column/payload splitting, exact-match filters, sorting and the
modified-count semantics of update_one.
"""

import pytest
from datetime import datetime, timedelta, timezone

from parcel_backend.app.core.exceptions import InternalError
from parcel_backend.app.db.document_store import SortSpec, ASCENDING, DESCENDING


@pytest.mark.asyncio
async def test_insert_and_find_one_merges_payload(store):
    """Unknown fields round-trip through the JSON payload."""
    parcel_id = await store.parcels.insert_one({
        "created_by": "a@x.com",
        "payment_status": "unpaid",
        "receiver_name": "Bob",
        "weight": 2.5,
    })
    await store.commit()

    parcel = await store.parcels.find_one({"id": parcel_id})
    assert parcel["id"] == parcel_id
    assert parcel["created_by"] == "a@x.com"
    assert parcel["receiver_name"] == "Bob"
    assert parcel["weight"] == 2.5
    assert "details" not in parcel


@pytest.mark.asyncio
async def test_insert_ignores_client_id(store):
    parcel_id = await store.parcels.insert_one({"id": "chosen-by-client", "created_by": "a@x.com"})
    assert parcel_id != "chosen-by-client"


@pytest.mark.asyncio
async def test_find_one_missing_returns_none(store):
    assert await store.parcels.find_one({"id": "nope"}) is None


@pytest.mark.asyncio
async def test_find_filters_and_sorts(store):
    base = datetime(2024, 1, 1, tzinfo=timezone.utc)
    for offset, email in [(0, "a@x.com"), (2, "a@x.com"), (1, "b@x.com"), (3, "a@x.com")]:
        await store.parcels.insert_one({
            "created_by": email,
            "creation_date": base + timedelta(days=offset),
            "label": offset,
        })
    await store.commit()

    newest_first = await store.parcels.find({"created_by": "a@x.com"}, sort=SortSpec("creation_date", DESCENDING))
    assert [p["label"] for p in newest_first] == [3, 2, 0]

    oldest_first = await store.parcels.find({}, sort=SortSpec("creation_date", ASCENDING))
    assert [p["label"] for p in oldest_first] == [0, 1, 2, 3]


@pytest.mark.asyncio
async def test_none_filter_matches_null(store):
    await store.riders.insert_one({"email": "r1@x.com", "status": None})
    await store.riders.insert_one({"email": "r2@x.com", "status": "pending"})
    await store.commit()

    riders = await store.riders.find({"status": None})
    assert [r["email"] for r in riders] == ["r1@x.com"]


@pytest.mark.asyncio
async def test_filter_on_payload_field_is_rejected(store):
    with pytest.raises(ValueError):
        await store.parcels.find({"receiver_name": "Bob"})


@pytest.mark.asyncio
async def test_unknown_collection_is_rejected(store):
    with pytest.raises(KeyError):
        store.collection("invoices")


@pytest.mark.asyncio
async def test_update_one_reports_modified_count(store):
    rider_id = await store.riders.insert_one({"email": "r@x.com", "status": "pending"})
    await store.commit()

    assert await store.riders.update_one({"id": rider_id}, {"status": "active"}) == 1
    # Same value again: matched but not modified
    assert await store.riders.update_one({"id": rider_id}, {"status": "active"}) == 0
    assert await store.riders.update_one({"id": "missing"}, {"status": "active"}) == 0
    await store.commit()

    rider = await store.riders.find_one({"id": rider_id})
    assert rider["status"] == "active"


@pytest.mark.asyncio
async def test_update_one_merges_payload(store):
    user_id = await store.users.insert_one({"email": "u@x.com", "name": "U", "role": "user"})
    await store.commit()

    assert await store.users.update_one({"id": user_id}, {"role": "admin"}) == 1
    assert await store.users.update_one({"id": user_id}, {"role": "admin"}) == 0
    await store.commit()

    user = await store.users.find_one({"email": "u@x.com"})
    assert user["role"] == "admin"
    assert user["name"] == "U"


@pytest.mark.asyncio
async def test_conditional_update_matches_once(store):
    parcel_id = await store.parcels.insert_one({"created_by": "a@x.com", "payment_status": "unpaid"})
    await store.commit()

    query = {"id": parcel_id, "payment_status": "unpaid"}
    assert await store.parcels.update_one(query, {"payment_status": "paid"}) == 1
    assert await store.parcels.update_one(query, {"payment_status": "paid"}) == 0


@pytest.mark.asyncio
async def test_delete_one(store):
    parcel_id = await store.parcels.insert_one({"created_by": "a@x.com"})
    await store.commit()

    assert await store.parcels.delete_one({"id": parcel_id}) == 1
    assert await store.parcels.delete_one({"id": parcel_id}) == 0
    await store.commit()
    assert await store.parcels.find_one({"id": parcel_id}) is None


@pytest.mark.asyncio
async def test_driver_failure_becomes_internal_error(store, mocker):
    from sqlalchemy.exc import OperationalError

    mocker.patch.object(
        store.session, "execute",
        side_effect=OperationalError("SELECT", {}, Exception("database is locked")),
    )
    with pytest.raises(InternalError) as exc_info:
        await store.parcels.find({})
    assert exc_info.value.details == {"operation": "parcels.find"}
