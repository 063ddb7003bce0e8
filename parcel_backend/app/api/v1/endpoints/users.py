"""
User API Endpoints.
"""

from fastapi import APIRouter, Depends
from typing import Optional
from parcel_backend.app.core.guards import require_access
from parcel_backend.app.core.identity import IdentityClaim
from parcel_backend.app.db.document_store import DocumentStore, get_document_store
from parcel_backend.app.schemas.user import UserSignIn, UserUpsertResult
from parcel_backend.app.services.user_service import UserService

router = APIRouter(tags=["Users"])


@router.post("/users", response_model=UserUpsertResult)
async def upsert_user(
    user_data: UserSignIn,
    _: Optional[IdentityClaim] = Depends(require_access("upsert_user")),
    store: DocumentStore = Depends(get_document_store),
):
    """
    Record a sign-in.

    Creates the user the first time the email is seen; afterwards only
    ``last_log_in`` is refreshed.
    """
    inserted, user_id = await UserService.upsert_user(store, user_data.model_dump())
    if not inserted:
        return UserUpsertResult(message="User already exists", inserted=False)
    return UserUpsertResult(message="User created", inserted=True, inserted_id=user_id)
