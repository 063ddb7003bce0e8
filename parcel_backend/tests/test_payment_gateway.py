"""
Payment gateway client tests against a mocked gateway transport.
"""

import httpx
import pytest
from urllib.parse import parse_qs

from parcel_backend.app.core.exceptions import PaymentGatewayError
from parcel_backend.app.services.payment_gateway import PaymentGatewayClient

VALID_KEY = "sk_test_valid"


def gateway_handler(requests):
    def handler(request: httpx.Request) -> httpx.Response:
        requests.append(request)
        if request.headers["Authorization"] != f"Bearer {VALID_KEY}":
            return httpx.Response(401, json={"error": {"message": "Invalid API Key provided"}})
        return httpx.Response(200, json={"id": "pi_123", "client_secret": "pi_123_secret_456"})
    return handler


def make_client(secret_key, requests):
    http_client = httpx.AsyncClient(
        base_url="https://gateway.test",
        transport=httpx.MockTransport(gateway_handler(requests)),
    )
    return PaymentGatewayClient(secret_key, http_client=http_client)


@pytest.mark.asyncio
async def test_create_intent_returns_client_secret():
    requests = []
    gateway = make_client(VALID_KEY, requests)

    client_secret = await gateway.create_payment_intent(1000)

    assert client_secret == "pi_123_secret_456"
    request = requests[0]
    assert request.method == "POST"
    assert request.url.path == "/v1/payment_intents"
    form = parse_qs(request.content.decode())
    assert form["amount"] == ["1000"]
    assert form["currency"] == ["usd"]
    assert form["payment_method_types[]"] == ["card"]
    await gateway.aclose()


@pytest.mark.asyncio
async def test_invalid_key_raises_gateway_error():
    requests = []
    gateway = make_client("sk_test_wrong", requests)

    with pytest.raises(PaymentGatewayError) as exc_info:
        await gateway.create_payment_intent(1000)

    assert exc_info.value.message == "Invalid API Key provided"
    assert exc_info.value.details["upstream_status"] == 401
    assert len(requests) == 1
    await gateway.aclose()


@pytest.mark.asyncio
async def test_non_positive_amount_is_rejected_locally():
    requests = []
    gateway = make_client(VALID_KEY, requests)

    with pytest.raises(PaymentGatewayError):
        await gateway.create_payment_intent(0)
    assert requests == []
    await gateway.aclose()


@pytest.mark.asyncio
async def test_network_failure_raises_gateway_error():
    def handler(request):
        raise httpx.ConnectError("connection refused", request=request)

    gateway = PaymentGatewayClient(
        VALID_KEY,
        http_client=httpx.AsyncClient(base_url="https://gateway.test", transport=httpx.MockTransport(handler)),
    )
    with pytest.raises(PaymentGatewayError) as exc_info:
        await gateway.create_payment_intent(1000)
    assert "connection refused" in exc_info.value.message
    await gateway.aclose()


@pytest.mark.asyncio
async def test_non_json_error_body_is_passed_through():
    gateway = PaymentGatewayClient(
        VALID_KEY,
        http_client=httpx.AsyncClient(
            base_url="https://gateway.test",
            transport=httpx.MockTransport(lambda request: httpx.Response(502, text="Bad Gateway")),
        ),
    )
    with pytest.raises(PaymentGatewayError) as exc_info:
        await gateway.create_payment_intent(1000)
    assert exc_info.value.message == "Bad Gateway"
    await gateway.aclose()


@pytest.mark.asyncio
async def test_non_json_success_body_raises_gateway_error():
    gateway = PaymentGatewayClient(
        VALID_KEY,
        http_client=httpx.AsyncClient(
            base_url="https://gateway.test",
            transport=httpx.MockTransport(lambda request: httpx.Response(200, text="<html>proxy</html>")),
        ),
    )
    with pytest.raises(PaymentGatewayError) as exc_info:
        await gateway.create_payment_intent(1000)
    assert exc_info.value.message == "<html>proxy</html>"
    await gateway.aclose()
