"""
Tracking API Endpoints.
"""

from fastapi import APIRouter, Depends, Path
from typing import List, Optional
from parcel_backend.app.core.guards import require_access
from parcel_backend.app.core.identity import IdentityClaim
from parcel_backend.app.db.document_store import DocumentStore, get_document_store
from parcel_backend.app.schemas.tracking import (
    TrackingEntryCreate,
    TrackingEntryCreated,
    TrackingEntryResponse,
)
from parcel_backend.app.services.tracking_service import TrackingService

router = APIRouter(prefix="/tracking", tags=["Tracking"])


@router.post("", response_model=TrackingEntryCreated)
async def add_tracking_entry(
    entry: TrackingEntryCreate,
    _: Optional[IdentityClaim] = Depends(require_access("add_tracking_entry")),
    store: DocumentStore = Depends(get_document_store),
):
    """Append a status event; the server stamps its time."""
    entry_id = await TrackingService.add_entry(store, entry)
    return TrackingEntryCreated(inserted_id=entry_id)


@router.get("/{tracking_id}", response_model=List[TrackingEntryResponse])
async def list_tracking_entries(
    tracking_id: str = Path(..., description="Tracking number"),
    _: Optional[IdentityClaim] = Depends(require_access("list_tracking_entries")),
    store: DocumentStore = Depends(get_document_store),
):
    return await TrackingService.list_entries(store, tracking_id)
