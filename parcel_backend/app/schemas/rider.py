"""
Rider Pydantic schemas.
"""

from pydantic import BaseModel, ConfigDict, EmailStr, Field
from datetime import datetime
from typing import Optional


class RiderApplication(BaseModel):
    """
    Schema for a rider application.

    ``status`` is stored exactly as sent; the server does not default it.
    """
    model_config = ConfigDict(extra="allow")

    email: Optional[EmailStr] = None
    status: Optional[str] = Field(None, max_length=30)


class RiderResponse(BaseModel):
    """Schema for rider response."""
    model_config = ConfigDict(extra="allow", populate_by_name=True)

    id: str = Field(..., alias="_id")
    email: Optional[str] = None
    status: Optional[str] = None
    created_at: datetime


class RiderStatusUpdate(BaseModel):
    """Schema for an admin status change. Any non-empty value is accepted."""
    status: str = Field(..., min_length=1, max_length=30)
