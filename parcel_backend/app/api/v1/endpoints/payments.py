"""
Payment API Endpoints.

Checkout has two independent steps: the client first stages a card charge
with ``/create-payment-intent`` and confirms it with the gateway, then
reports the result with ``POST /payments``. The server does not check the
reported transaction against the gateway.
"""

from fastapi import APIRouter, Depends, Query, status
from typing import List, Optional
from parcel_backend.app.core.dependencies import get_payment_gateway
from parcel_backend.app.core.guards import require_access
from parcel_backend.app.core.identity import IdentityClaim
from parcel_backend.app.db.document_store import DocumentStore, get_document_store
from parcel_backend.app.domain.payments.payment_service import PaymentService
from parcel_backend.app.schemas.payment import (
    PaymentCreate,
    PaymentRecorded,
    PaymentResponse,
    PaymentIntentCreate,
    PaymentIntentResponse,
)
from parcel_backend.app.services.payment_gateway import PaymentGatewayClient

router = APIRouter(tags=["Payments"])


@router.get("/payments", response_model=List[PaymentResponse])
async def list_payments(
    email: Optional[str] = Query(None, description="Payer email; must match the caller's token"),
    _: IdentityClaim = Depends(require_access("list_payments")),
    store: DocumentStore = Depends(get_document_store),
):
    """Payment history of the caller, most recent first."""
    return await PaymentService.list_payments(store, email)


@router.post("/payments", response_model=PaymentRecorded, status_code=status.HTTP_201_CREATED)
async def record_payment(
    payment: PaymentCreate,
    _: Optional[IdentityClaim] = Depends(require_access("record_payment")),
    store: DocumentStore = Depends(get_document_store),
):
    """
    Mark a parcel paid and store the payment.

    Returns 404 when the parcel does not exist or is already paid.
    """
    payment_id = await PaymentService.record_payment(store, payment)
    return PaymentRecorded(message="Payment recorded and parcel marked as paid", inserted_id=payment_id)


@router.post("/create-payment-intent", response_model=PaymentIntentResponse)
async def create_payment_intent(
    intent: PaymentIntentCreate,
    _: Optional[IdentityClaim] = Depends(require_access("create_payment_intent")),
    gateway: PaymentGatewayClient = Depends(get_payment_gateway),
):
    client_secret = await gateway.create_payment_intent(intent.amount_in_cents)
    return PaymentIntentResponse(client_secret=client_secret)
