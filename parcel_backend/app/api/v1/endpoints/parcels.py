"""
Parcel API Endpoints.

Booking, listing and delivery progress of parcels. Payment status is only
changed by the payments endpoints.
"""

from fastapi import APIRouter, Depends, Path, Query
from typing import List, Optional
from parcel_backend.app.core.guards import require_access
from parcel_backend.app.core.identity import IdentityClaim
from parcel_backend.app.db.document_store import DocumentStore, get_document_store
from parcel_backend.app.schemas.common import InsertResult, UpdateResult, DeleteResult
from parcel_backend.app.schemas.parcel import (
    ParcelCreate,
    ParcelResponse,
    RiderAssignment,
    DeliveryStatusUpdate,
)
from parcel_backend.app.services.parcel_service import ParcelService

router = APIRouter(tags=["Parcels"])


@router.get("/parcels", response_model=List[ParcelResponse])
async def list_parcels(
    _: Optional[IdentityClaim] = Depends(require_access("list_parcels")),
    store: DocumentStore = Depends(get_document_store),
):
    """List every parcel."""
    return await ParcelService.list_parcels(store)


@router.get("/my-parcels", response_model=List[ParcelResponse])
async def list_my_parcels(
    email: Optional[str] = Query(None, description="Email the parcels were booked with"),
    _: IdentityClaim = Depends(require_access("list_my_parcels")),
    store: DocumentStore = Depends(get_document_store),
):
    """
    List parcels booked by ``email``, newest first.

    Requires a verified token. Without ``email`` every parcel is returned.
    """
    return await ParcelService.list_parcels_by_owner(store, email)


@router.get("/parcels/{parcel_id}", response_model=ParcelResponse)
async def get_parcel(
    parcel_id: str = Path(..., description="Parcel ID"),
    _: Optional[IdentityClaim] = Depends(require_access("get_parcel")),
    store: DocumentStore = Depends(get_document_store),
):
    return await ParcelService.get_parcel(store, parcel_id)


@router.post("/add-parcels", response_model=InsertResult)
async def add_parcel(
    parcel_data: ParcelCreate,
    _: Optional[IdentityClaim] = Depends(require_access("add_parcel")),
    store: DocumentStore = Depends(get_document_store),
):
    """
    Book a parcel.

    ``creation_date``, ``payment_status`` and ``delivery_status`` are set by
    the server; values sent for them are ignored.
    """
    parcel_id = await ParcelService.create_parcel(store, parcel_data.model_dump())
    return InsertResult(inserted_id=parcel_id)


@router.delete("/my-parcels/{parcel_id}", response_model=DeleteResult)
async def delete_parcel(
    parcel_id: str = Path(..., description="Parcel ID"),
    _: Optional[IdentityClaim] = Depends(require_access("delete_parcel")),
    store: DocumentStore = Depends(get_document_store),
):
    deleted = await ParcelService.delete_parcel(store, parcel_id)
    return DeleteResult(deleted_count=deleted)


@router.patch("/parcels/{parcel_id}/assign", response_model=UpdateResult)
async def assign_rider(
    assignment: RiderAssignment,
    parcel_id: str = Path(..., description="Parcel ID"),
    _: Optional[IdentityClaim] = Depends(require_access("assign_rider")),
    store: DocumentStore = Depends(get_document_store),
):
    """Assign a rider to a parcel and mark it ``rider_assigned``."""
    modified = await ParcelService.assign_rider(store, parcel_id, assignment.rider_id)
    return UpdateResult(modified_count=modified)


@router.patch("/parcels/{parcel_id}/delivery-status", response_model=UpdateResult)
async def update_delivery_status(
    update: DeliveryStatusUpdate,
    parcel_id: str = Path(..., description="Parcel ID"),
    _: Optional[IdentityClaim] = Depends(require_access("update_delivery_status")),
    store: DocumentStore = Depends(get_document_store),
):
    modified = await ParcelService.update_delivery_status(store, parcel_id, update.delivery_status)
    return UpdateResult(modified_count=modified)
