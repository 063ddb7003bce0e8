"""
Route access policy.

Every HTTP route is listed in ROUTE_ACCESS with the access level it
requires, so authorization coverage can be reviewed in one place. Handlers
obtain their guard with ``require_access(<route name>)``; asking for a
route that is not listed fails at import time.

The table mirrors the coverage the service has always had. Several mutating
routes are public; tightening them is a product decision that has not been
made yet.
"""

import enum
from typing import Callable, Dict, Optional
from fastapi import Depends, Query
from parcel_backend.app.core.dependencies import get_current_identity
from parcel_backend.app.core.emails import normalize_email
from parcel_backend.app.core.exceptions import ForbiddenError
from parcel_backend.app.core.identity import IdentityClaim


class Access(str, enum.Enum):
    """
    Access levels.

    PUBLIC: no token required
    VERIFIED: a valid bearer token is required
    OWNER_EMAIL: a valid token whose email equals the ``email`` query parameter
    """
    PUBLIC = "PUBLIC"
    VERIFIED = "VERIFIED"
    OWNER_EMAIL = "OWNER_EMAIL"


ROUTE_ACCESS: Dict[str, Access] = {
    # Service
    "root": Access.PUBLIC,
    "health_check": Access.PUBLIC,

    # Parcels
    "list_parcels": Access.PUBLIC,
    "list_my_parcels": Access.VERIFIED,
    "get_parcel": Access.PUBLIC,
    "add_parcel": Access.PUBLIC,
    "delete_parcel": Access.PUBLIC,
    "assign_rider": Access.PUBLIC,
    "update_delivery_status": Access.PUBLIC,

    # Users
    "upsert_user": Access.PUBLIC,

    # Riders
    "submit_rider_application": Access.PUBLIC,
    "list_pending_riders": Access.VERIFIED,
    "list_active_riders": Access.PUBLIC,
    "set_rider_status": Access.PUBLIC,

    # Tracking
    "add_tracking_entry": Access.PUBLIC,
    "list_tracking_entries": Access.PUBLIC,

    # Payments
    "list_payments": Access.OWNER_EMAIL,
    "record_payment": Access.PUBLIC,
    "create_payment_intent": Access.PUBLIC,
}


async def allow_anonymous() -> Optional[IdentityClaim]:
    return None


async def require_owner_email(
    email: Optional[str] = Query(None),
    identity: IdentityClaim = Depends(get_current_identity),
) -> IdentityClaim:
    """
    Dependency for routes that expose one user's private records.

    The ``email`` query parameter must equal the verified token's email,
    both compared in normalized form.

    Raises:
        ForbiddenError (403) on mismatch
    """
    if identity.email is None or normalize_email(identity.email) != normalize_email(email):
        raise ForbiddenError(details={"requested": email})
    return identity


_GUARDS: Dict[Access, Callable] = {
    Access.PUBLIC: allow_anonymous,
    Access.VERIFIED: get_current_identity,
    Access.OWNER_EMAIL: require_owner_email,
}


def require_access(route_name: str) -> Callable:
    """
    Dependency factory returning the guard registered for ``route_name``.

    Usage:
        @router.get("/riders/pending")
        async def list_pending_riders(
            identity: IdentityClaim = Depends(require_access("list_pending_riders")),
        ):
            ...

    Raises:
        KeyError if the route has no entry in ROUTE_ACCESS
    """
    return _GUARDS[ROUTE_ACCESS[route_name]]
