"""
Parcel Service.

Booking, lookup, rider assignment and delivery progress for parcels.
Payment status is not changed here: only the payment workflow
may mark a parcel paid.
"""

import logging
from typing import Any, Dict, List, Mapping, Optional

from parcel_backend.app.core.emails import normalize_email
from parcel_backend.app.core.exceptions import ResourceNotFoundError
from parcel_backend.app.db.document_store import DocumentStore, SortSpec, DESCENDING
from parcel_backend.app.models.document import utcnow
from parcel_backend.app.models.enums import PaymentStatus, DeliveryStatus

logger = logging.getLogger(__name__)

# Fields the server owns; client-supplied values for them are dropped.
SERVER_FIELDS = {"id", "_id", "creation_date", "payment_status", "delivery_status", "assigned_rider_id"}


class ParcelService:

    @staticmethod
    async def list_parcels(store: DocumentStore) -> List[Dict[str, Any]]:
        return await store.parcels.find({})

    @staticmethod
    async def list_parcels_by_owner(store: DocumentStore, email: Optional[str]) -> List[Dict[str, Any]]:
        """Parcels booked by ``email`` (all parcels when no email), newest first."""
        query = {"created_by": normalize_email(email)} if email else {}
        return await store.parcels.find(query, sort=SortSpec("creation_date", DESCENDING))

    @staticmethod
    async def get_parcel(store: DocumentStore, parcel_id: str) -> Dict[str, Any]:
        parcel = await store.parcels.find_one({"id": parcel_id})
        if parcel is None:
            raise ResourceNotFoundError("Parcel", parcel_id)
        return parcel

    @staticmethod
    async def create_parcel(store: DocumentStore, payload: Mapping[str, Any]) -> str:
        """
        Book a parcel.

        The booking starts unpaid and not collected, stamped with the
        server's current time.
        """
        record = {key: value for key, value in payload.items() if key not in SERVER_FIELDS}
        record.update(
            creation_date=utcnow(),
            payment_status=PaymentStatus.UNPAID.value,
            delivery_status=DeliveryStatus.NOT_COLLECTED.value,
        )
        parcel_id = await store.parcels.insert_one(record)
        await store.commit()

        logger.info("Parcel %s booked by %s", parcel_id, record.get("created_by"))
        return parcel_id

    @staticmethod
    async def delete_parcel(store: DocumentStore, parcel_id: str) -> int:
        """Delete a parcel. Its payments and tracking entries are kept."""
        deleted = await store.parcels.delete_one({"id": parcel_id})
        await store.commit()
        return deleted

    @staticmethod
    async def assign_rider(store: DocumentStore, parcel_id: str, rider_id: str) -> int:
        await ParcelService.get_parcel(store, parcel_id)
        modified = await store.parcels.update_one(
            {"id": parcel_id},
            {"assigned_rider_id": rider_id, "delivery_status": DeliveryStatus.RIDER_ASSIGNED.value},
        )
        await store.commit()

        logger.info("Parcel %s assigned to rider %s", parcel_id, rider_id)
        return modified

    @staticmethod
    async def update_delivery_status(store: DocumentStore, parcel_id: str, status: DeliveryStatus) -> int:
        await ParcelService.get_parcel(store, parcel_id)
        modified = await store.parcels.update_one({"id": parcel_id}, {"delivery_status": status.value})
        await store.commit()
        return modified
