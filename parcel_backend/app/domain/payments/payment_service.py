"""
Payment Service (Domain Logic).

Records completed checkouts. Marking the parcel paid and storing the
payment record happen in one transaction: either both are committed or
neither is, and a parcel can be marked paid at most once.
"""

import logging
from typing import Any, Dict, List, Optional

from parcel_backend.app.core.emails import normalize_email
from parcel_backend.app.core.exceptions import PaymentConflictError, ResourceNotFoundError
from parcel_backend.app.db.document_store import DocumentStore, SortSpec, DESCENDING
from parcel_backend.app.models.document import utcnow
from parcel_backend.app.models.enums import PaymentStatus
from parcel_backend.app.schemas.payment import PaymentCreate

logger = logging.getLogger(__name__)


class PaymentService:

    @staticmethod
    async def record_payment(store: DocumentStore, payment: PaymentCreate) -> str:
        """
        Mark a parcel paid and store the payment record.

        Flow:
        1. Conditionally flip payment_status unpaid -> paid
        2. If nothing changed, tell a missing parcel from an already paid one
        3. Insert the payment record
        4. Commit both writes together

        Args:
            store: Document store (transaction is committed here)
            payment: Validated checkout data

        Returns:
            Id of the inserted payment record

        Raises:
            ResourceNotFoundError: the parcel does not exist
            PaymentConflictError: the parcel was already paid
            InternalError: a write or the commit failed; nothing is persisted
        """
        try:
            modified = await store.parcels.update_one(
                {"id": payment.parcel_id, "payment_status": PaymentStatus.UNPAID.value},
                {"payment_status": PaymentStatus.PAID.value},
            )
            if modified == 0:
                parcel = await store.parcels.find_one({"id": payment.parcel_id})
                if parcel is None:
                    raise ResourceNotFoundError("Parcel", payment.parcel_id)
                raise PaymentConflictError(payment.parcel_id)

            paid_at = utcnow()
            payment_id = await store.payments.insert_one({
                "parcel_id": payment.parcel_id,
                "email": payment.email,
                "amount": payment.amount,
                "payment_method": payment.payment_method,
                "transaction_id": payment.transaction_id,
                "paid_at": paid_at,
                "paid_at_string": paid_at.isoformat(),
            })
            await store.commit()
        except Exception:
            await store.rollback()
            raise

        logger.info(
            "Parcel %s paid by %s (payment %s, transaction %s)",
            payment.parcel_id, payment.email, payment_id, payment.transaction_id,
        )
        return payment_id

    @staticmethod
    async def list_payments(store: DocumentStore, email: Optional[str]) -> List[Dict[str, Any]]:
        """Payments made by ``email``, most recent first."""
        query = {"email": normalize_email(email)} if email else {}
        return await store.payments.find(query, sort=SortSpec("paid_at", DESCENDING))
