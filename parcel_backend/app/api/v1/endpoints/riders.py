"""
Rider API Endpoints.

Rider applications and their admin approval.
"""

from fastapi import APIRouter, Depends, Path
from typing import List, Optional
from parcel_backend.app.core.guards import require_access
from parcel_backend.app.core.identity import IdentityClaim
from parcel_backend.app.db.document_store import DocumentStore, get_document_store
from parcel_backend.app.models.enums import RiderStatus
from parcel_backend.app.schemas.common import InsertResult, UpdateResult
from parcel_backend.app.schemas.rider import RiderApplication, RiderResponse, RiderStatusUpdate
from parcel_backend.app.services.rider_service import RiderService

router = APIRouter(prefix="/riders", tags=["Riders"])


@router.post("", response_model=InsertResult)
async def submit_rider_application(
    application: RiderApplication,
    _: Optional[IdentityClaim] = Depends(require_access("submit_rider_application")),
    store: DocumentStore = Depends(get_document_store),
):
    rider_id = await RiderService.submit_application(store, application.model_dump())
    return InsertResult(inserted_id=rider_id)


@router.get("/pending", response_model=List[RiderResponse])
async def list_pending_riders(
    _: IdentityClaim = Depends(require_access("list_pending_riders")),
    store: DocumentStore = Depends(get_document_store),
):
    """List applications awaiting approval (verified callers only)."""
    return await RiderService.list_by_status(store, RiderStatus.PENDING)


@router.get("/active", response_model=List[RiderResponse])
async def list_active_riders(
    _: Optional[IdentityClaim] = Depends(require_access("list_active_riders")),
    store: DocumentStore = Depends(get_document_store),
):
    return await RiderService.list_by_status(store, RiderStatus.ACTIVE)


@router.patch("/{rider_id}/status", response_model=UpdateResult)
async def set_rider_status(
    update: RiderStatusUpdate,
    rider_id: str = Path(..., description="Rider ID"),
    _: Optional[IdentityClaim] = Depends(require_access("set_rider_status")),
    store: DocumentStore = Depends(get_document_store),
):
    """
    Overwrite a rider's status.

    The new value is stored as sent; an unknown rider yields
    ``modifiedCount: 0``.
    """
    modified = await RiderService.set_status(store, rider_id, update.status)
    return UpdateResult(modified_count=modified)
