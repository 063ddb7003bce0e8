"""
Parcel Pydantic schemas.

Parcels carry an open-ended shipment payload (sender, receiver, weight,
cost, ...). Only the fields the server acts on are declared; any other
field is accepted and stored as-is.
"""

from pydantic import BaseModel, ConfigDict, EmailStr, Field
from datetime import datetime
from typing import Optional
from parcel_backend.app.models.enums import DeliveryStatus


class ParcelCreate(BaseModel):
    """Schema for booking a new parcel."""
    model_config = ConfigDict(extra="allow")

    created_by: EmailStr = Field(..., description="Email of the user booking the parcel")


class ParcelResponse(BaseModel):
    """Schema for parcel response, including the stored shipment payload."""
    model_config = ConfigDict(extra="allow", populate_by_name=True)

    id: str = Field(..., alias="_id")
    created_by: Optional[str] = None
    creation_date: datetime
    payment_status: str
    delivery_status: str
    assigned_rider_id: Optional[str] = None


class RiderAssignment(BaseModel):
    """Schema for assigning a rider to a parcel."""
    model_config = ConfigDict(populate_by_name=True)

    rider_id: str = Field(..., min_length=1, alias="riderId")


class DeliveryStatusUpdate(BaseModel):
    """Schema for moving a parcel along its delivery lifecycle."""
    delivery_status: DeliveryStatus
