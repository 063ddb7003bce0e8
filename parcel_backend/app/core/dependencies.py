"""
Authentication and client dependencies for FastAPI.

Process-wide clients (identity verifier, payment gateway) are built once in
the application lifespan and kept on ``app.state``; these dependencies hand
them to route handlers so tests can swap them via ``dependency_overrides``.
"""

from typing import Optional
from fastapi import Depends, Request
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from parcel_backend.app.core.exceptions import AuthenticationError
from parcel_backend.app.core.identity import IdentityClaim, IdentityVerifier
from parcel_backend.app.services.payment_gateway import PaymentGatewayClient

# HTTP Bearer security scheme; missing headers are reported by get_current_identity
security = HTTPBearer(auto_error=False)


def get_identity_verifier(request: Request) -> IdentityVerifier:
    return request.app.state.identity_verifier


def get_payment_gateway(request: Request) -> PaymentGatewayClient:
    return request.app.state.payment_gateway


async def get_current_identity(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
    verifier: IdentityVerifier = Depends(get_identity_verifier),
) -> IdentityClaim:
    """
    FastAPI dependency for bearer-token authentication.

    Returns:
        The verified identity of the caller

    Raises:
        AuthenticationError: 401 if no bearer token was sent
        ForbiddenError: 403 if the token fails verification
    """
    if credentials is None or not credentials.credentials:
        raise AuthenticationError()

    return await verifier.verify(credentials.credentials)
