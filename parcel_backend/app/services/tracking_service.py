"""
Tracking Service.

Append-only log of parcel status events.
"""

from typing import Any, Dict, List

from parcel_backend.app.db.document_store import DocumentStore, SortSpec, ASCENDING
from parcel_backend.app.models.document import utcnow
from parcel_backend.app.schemas.tracking import TrackingEntryCreate


class TrackingService:

    @staticmethod
    async def add_entry(store: DocumentStore, entry: TrackingEntryCreate) -> str:
        record = entry.model_dump()
        record["time"] = utcnow()
        entry_id = await store.tracking.insert_one(record)
        await store.commit()
        return entry_id

    @staticmethod
    async def list_entries(store: DocumentStore, tracking_id: str) -> List[Dict[str, Any]]:
        return await store.tracking.find({"tracking_id": tracking_id}, sort=SortSpec("time", ASCENDING))
