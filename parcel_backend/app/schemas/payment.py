"""
Payment Pydantic schemas.

Wire names (``parcelId``, ``paymentMethod``, ``transactionId``,
``amountInCents``, ``clientSecret``) match the checkout frontend.
"""

from pydantic import BaseModel, ConfigDict, EmailStr, Field
from datetime import datetime
from typing import List, Optional, Union


class PaymentCreate(BaseModel):
    """Schema for recording a completed checkout."""
    model_config = ConfigDict(populate_by_name=True)

    parcel_id: str = Field(..., min_length=1, max_length=32, alias="parcelId")
    email: EmailStr
    amount: float = Field(..., gt=0)
    payment_method: Union[str, List[str]] = Field(..., alias="paymentMethod")
    transaction_id: str = Field(..., min_length=1, alias="transactionId")


class PaymentRecorded(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    message: str
    inserted_id: str = Field(..., alias="insertedId")


class PaymentResponse(BaseModel):
    """Schema for a stored payment."""
    model_config = ConfigDict(populate_by_name=True)

    id: str = Field(..., alias="_id")
    parcel_id: str = Field(..., alias="parcelId")
    email: str
    amount: float
    payment_method: Optional[Union[str, List[str]]] = Field(None, alias="paymentMethod")
    transaction_id: str = Field(..., alias="transactionId")
    paid_at: datetime
    paid_at_string: str


class PaymentIntentCreate(BaseModel):
    """Schema for staging a card charge."""
    model_config = ConfigDict(populate_by_name=True)

    amount_in_cents: int = Field(..., gt=0, alias="amountInCents")


class PaymentIntentResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    client_secret: str = Field(..., alias="clientSecret")
