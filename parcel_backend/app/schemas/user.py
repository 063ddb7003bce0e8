"""
User Pydantic schemas.
"""

from pydantic import BaseModel, ConfigDict, EmailStr, Field
from typing import Optional


class UserSignIn(BaseModel):
    """
    Schema for the sign-in upsert.

    Profile fields such as ``name`` or ``role`` are passed through.
    """
    model_config = ConfigDict(extra="allow")

    email: EmailStr


class UserUpsertResult(BaseModel):
    """Tells the client whether the user was created or already existed."""
    model_config = ConfigDict(populate_by_name=True)

    message: str
    inserted: bool
    inserted_id: Optional[str] = Field(None, alias="insertedId")
