"""
Write-result schemas shared by the collection endpoints.

Field names on the wire follow the document-store result shape the
frontend already consumes (``insertedId``, ``deletedCount``, ...).
"""

from pydantic import BaseModel, ConfigDict, Field


class InsertResult(BaseModel):
    """Result of inserting one document."""
    model_config = ConfigDict(populate_by_name=True)

    acknowledged: bool = True
    inserted_id: str = Field(..., alias="insertedId")


class UpdateResult(BaseModel):
    """Result of updating at most one document."""
    model_config = ConfigDict(populate_by_name=True)

    acknowledged: bool = True
    modified_count: int = Field(..., alias="modifiedCount")


class DeleteResult(BaseModel):
    """Result of deleting at most one document."""
    model_config = ConfigDict(populate_by_name=True)

    acknowledged: bool = True
    deleted_count: int = Field(..., alias="deletedCount")
