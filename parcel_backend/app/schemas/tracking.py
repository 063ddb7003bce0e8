"""
Tracking log Pydantic schemas.
"""

from pydantic import BaseModel, ConfigDict, Field
from datetime import datetime
from typing import Optional


class TrackingEntryCreate(BaseModel):
    """Schema for appending a tracking event."""
    tracking_id: str = Field(..., min_length=1, max_length=64)
    parcel_id: Optional[str] = Field(None, max_length=32)
    status: str = Field(..., min_length=1, max_length=50)
    message: str
    updated_by: Optional[str] = None


class TrackingEntryCreated(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    success: bool = True
    inserted_id: str = Field(..., alias="insertedId")


class TrackingEntryResponse(BaseModel):
    """Schema for a stored tracking event."""
    model_config = ConfigDict(populate_by_name=True)

    id: str = Field(..., alias="_id")
    tracking_id: str
    parcel_id: Optional[str] = None
    status: str
    message: str
    time: datetime
    updated_by: Optional[str] = None
