"""
Payment endpoint tests.
"""

import pytest


async def book_parcel(client, email="a@x.com"):
    response = await client.post("/add-parcels", json={"created_by": email, "cost": 500})
    assert response.status_code == 200
    return response.json()["insertedId"]


def checkout_body(parcel_id, email="a@x.com", transaction_id="tx1"):
    return {
        "parcelId": parcel_id,
        "email": email,
        "amount": 500,
        "paymentMethod": "card",
        "transactionId": transaction_id,
    }


@pytest.mark.asyncio
async def test_record_payment_returns_201(client):
    parcel_id = await book_parcel(client)

    response = await client.post("/payments", json=checkout_body(parcel_id))
    assert response.status_code == 201
    body = response.json()
    assert body["insertedId"]
    assert body["message"]

    parcel = (await client.get(f"/parcels/{parcel_id}")).json()
    assert parcel["payment_status"] == "paid"


@pytest.mark.asyncio
async def test_duplicate_payment_returns_404(client):
    parcel_id = await book_parcel(client)
    await client.post("/payments", json=checkout_body(parcel_id))

    response = await client.post("/payments", json=checkout_body(parcel_id))
    assert response.status_code == 404
    assert response.json() == {"message": "Parcel already paid"}


@pytest.mark.asyncio
async def test_payment_for_unknown_parcel_returns_404(client):
    response = await client.post("/payments", json=checkout_body("missing"))
    assert response.status_code == 404
    assert response.json() == {"message": "Parcel not found"}


@pytest.mark.asyncio
async def test_payment_with_invalid_body_returns_422(client):
    response = await client.post("/payments", json={"parcelId": "p", "amount": -1})
    assert response.status_code == 422
    assert response.json()["message"] == "Validation error"


@pytest.mark.asyncio
async def test_list_payments_requires_token(client):
    response = await client.get("/payments", params={"email": "a@x.com"})
    assert response.status_code == 401
    assert response.json() == {"message": "unauthorized access"}


@pytest.mark.asyncio
async def test_list_payments_rejects_other_email(client, auth_headers):
    response = await client.get("/payments", params={"email": "b@x.com"}, headers=auth_headers("a@x.com"))
    assert response.status_code == 403
    assert response.json() == {"message": "forbidden access"}


@pytest.mark.asyncio
async def test_list_payments_for_own_email(client, auth_headers):
    mine = await book_parcel(client, "b@x.com")
    other = await book_parcel(client, "a@x.com")
    await client.post("/payments", json=checkout_body(mine, email="b@x.com", transaction_id="tx-b"))
    await client.post("/payments", json=checkout_body(other, email="a@x.com", transaction_id="tx-a"))

    response = await client.get("/payments", params={"email": "b@x.com"}, headers=auth_headers("b@x.com", uid="uid-b"))
    assert response.status_code == 200
    payments = response.json()
    assert len(payments) == 1
    assert payments[0]["parcelId"] == mine
    assert payments[0]["transactionId"] == "tx-b"
    assert payments[0]["paymentMethod"] == "card"
    assert "_id" in payments[0]


@pytest.mark.asyncio
async def test_create_payment_intent(client, payment_gateway):
    response = await client.post("/create-payment-intent", json={"amountInCents": 1000})
    assert response.status_code == 200
    assert response.json() == {"clientSecret": "pi_test_1000_secret"}
    assert payment_gateway.amounts == [1000]


@pytest.mark.asyncio
async def test_create_payment_intent_gateway_error(client, payment_gateway):
    payment_gateway.error = "Invalid API Key provided"

    response = await client.post("/create-payment-intent", json={"amountInCents": 1000})
    assert response.status_code == 500
    assert response.json() == {"message": "Invalid API Key provided"}


@pytest.mark.asyncio
async def test_create_payment_intent_rejects_non_positive_amount(client, payment_gateway):
    response = await client.post("/create-payment-intent", json={"amountInCents": 0})
    assert response.status_code == 422
    assert payment_gateway.amounts == []


@pytest.mark.asyncio
async def test_mixed_case_domain_round_trip(client, auth_headers):
    """Payments and parcels booked as a@X.com are listed for a@X.com."""
    parcel_id = await book_parcel(client, "a@X.com")
    response = await client.post("/payments", json=checkout_body(parcel_id, email="a@X.com"))
    assert response.status_code == 201

    headers = auth_headers("a@X.com")
    payments = await client.get("/payments", params={"email": "a@X.com"}, headers=headers)
    assert payments.status_code == 200
    assert [p["parcelId"] for p in payments.json()] == [parcel_id]

    parcels = await client.get("/my-parcels", params={"email": "a@X.com"}, headers=headers)
    assert [p["_id"] for p in parcels.json()] == [parcel_id]


@pytest.mark.asyncio
async def test_owner_email_match_ignores_domain_case(client, auth_headers):
    response = await client.get("/payments", params={"email": "a@x.com"}, headers=auth_headers("a@X.COM"))
    assert response.status_code == 200

    response = await client.get("/payments", params={"email": "A@x.com"}, headers=auth_headers("a@x.com"))
    assert response.status_code == 403
