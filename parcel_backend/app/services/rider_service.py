"""
Rider Service.

Rider onboarding: applications come in with whatever status the applicant
sends, and an admin later overwrites it.
"""

import logging
from typing import Any, Dict, List, Mapping

from parcel_backend.app.db.document_store import DocumentStore
from parcel_backend.app.models.document import utcnow
from parcel_backend.app.models.enums import RiderStatus

logger = logging.getLogger(__name__)


class RiderService:

    @staticmethod
    async def submit_application(store: DocumentStore, payload: Mapping[str, Any]) -> str:
        record = {key: value for key, value in payload.items() if key not in ("id", "_id", "created_at")}
        record["created_at"] = utcnow()
        rider_id = await store.riders.insert_one(record)
        await store.commit()

        logger.info("Rider application %s submitted with status %r", rider_id, record.get("status"))
        return rider_id

    @staticmethod
    async def list_by_status(store: DocumentStore, status: RiderStatus) -> List[Dict[str, Any]]:
        return await store.riders.find({"status": status.value})

    @staticmethod
    async def set_status(store: DocumentStore, rider_id: str, status: str) -> int:
        """Overwrite a rider's status. The value is not checked against RiderStatus."""
        modified = await store.riders.update_one({"id": rider_id}, {"status": status})
        await store.commit()

        logger.info("Rider %s status set to %r (modified=%d)", rider_id, status, modified)
        return modified
