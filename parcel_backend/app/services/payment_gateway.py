"""
Payment gateway client.

Creates payment intents through the gateway's REST API (Stripe-compatible
``/v1/payment_intents``). The returned client secret lets the frontend
confirm the card payment directly with the gateway.

Failures are not retried: the upstream message is surfaced to the caller
as a PaymentGatewayError.
"""

import logging
from typing import Optional, Sequence

import httpx

from parcel_backend.app.core.exceptions import PaymentGatewayError

logger = logging.getLogger(__name__)


class PaymentGatewayClient:
    """Thin async wrapper over the payment-intent endpoint."""

    def __init__(
        self,
        secret_key: str,
        base_url: str = "https://api.stripe.com",
        currency: str = "usd",
        payment_method_types: Sequence[str] = ("card",),
        timeout: float = 10.0,
        http_client: Optional[httpx.AsyncClient] = None,
    ):
        self.currency = currency
        self.payment_method_types = list(payment_method_types)
        self._client = http_client or httpx.AsyncClient(base_url=base_url, timeout=timeout)
        self._headers = {"Authorization": f"Bearer {secret_key}"}

    async def create_payment_intent(
        self,
        amount: int,
        currency: Optional[str] = None,
        payment_method_types: Optional[Sequence[str]] = None,
    ) -> str:
        """
        Stage a card charge and return its client secret.

        Args:
            amount: Positive amount in the smallest currency unit (e.g. cents)
            currency: ISO currency code; defaults to the configured one
            payment_method_types: Accepted method types; defaults to the configured ones

        Raises:
            PaymentGatewayError: amount not positive, gateway rejected the
                request, or the gateway could not be reached
        """
        if amount <= 0:
            raise PaymentGatewayError("Amount must be a positive integer")

        form = {
            "amount": str(amount),
            "currency": currency or self.currency,
            "payment_method_types[]": list(payment_method_types or self.payment_method_types),
        }

        try:
            response = await self._client.post("/v1/payment_intents", data=form, headers=self._headers)
        except httpx.HTTPError as e:
            logger.error("Payment gateway unreachable: %s", e)
            raise PaymentGatewayError(str(e) or "Payment gateway unreachable")

        if response.is_error:
            message = _error_message(response)
            logger.error("Payment gateway rejected intent (%d): %s", response.status_code, message)
            raise PaymentGatewayError(message, upstream_status=response.status_code)

        try:
            client_secret = response.json().get("client_secret")
        except (ValueError, AttributeError):
            logger.error("Payment gateway returned an unreadable body (%d)", response.status_code)
            raise PaymentGatewayError(response.text or "Payment gateway returned an unreadable response")
        if not client_secret:
            raise PaymentGatewayError("Payment gateway returned no client secret")

        logger.info("Created payment intent for %d %s", amount, form["currency"])
        return client_secret

    async def aclose(self) -> None:
        await self._client.aclose()


def _error_message(response: httpx.Response) -> str:
    try:
        return response.json()["error"]["message"]
    except (ValueError, KeyError, TypeError):
        return response.text or f"Payment gateway error {response.status_code}"
