"""
FastAPI Application Entry Point.

This is the main application file for the Parcel Delivery Backend.
"""

import logging
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI, HTTPException
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import PlainTextResponse

from parcel_backend.app.core.config import settings
from parcel_backend.app.api.v1.router import router as api_v1_router
from parcel_backend.app.core.identity import CertificateKeySource, IdentityVerifier, StaticKeySource
from parcel_backend.app.core.observability import ObservabilityMiddleware, configure_logging
from parcel_backend.app.core.redis_client import redis_client, ping_redis
from parcel_backend.app.db.session import engine, Base
from parcel_backend.app.services.payment_gateway import PaymentGatewayClient
from parcel_backend.app.core.exceptions import (
    AppException,
    app_exception_handler,
    http_exception_handler,
    validation_exception_handler,
    generic_exception_handler
)

# Import models to ensure they are registered with Base
from parcel_backend.app.models.user import User
from parcel_backend.app.models.parcel import Parcel
from parcel_backend.app.models.payment import Payment
from parcel_backend.app.models.rider import Rider
from parcel_backend.app.models.tracking import TrackingEntry

logger = logging.getLogger(__name__)


def build_identity_verifier() -> IdentityVerifier:
    """Static key when one is configured (emulators), else the provider's certificates."""
    if settings.identity_signing_key:
        key_source = StaticKeySource(settings.identity_signing_key)
    else:
        key_source = CertificateKeySource(
            settings.identity_certs_url,
            cache=redis_client,
            cache_key=settings.identity_certs_cache_key,
        )
    return IdentityVerifier(
        key_source,
        audience=settings.identity_project_id,
        issuer=settings.resolved_identity_issuer,
        algorithms=settings.identity_algorithms,
    )


def build_payment_gateway() -> PaymentGatewayClient:
    return PaymentGatewayClient(
        settings.payment_gateway_secret_key,
        base_url=settings.payment_gateway_url,
        currency=settings.payment_currency,
        payment_method_types=settings.payment_method_types,
        timeout=settings.payment_gateway_timeout,
    )


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Lifespan context manager for application startup/shutdown.

    1. Creates database tables on startup (an unreachable database aborts startup).
    2. Builds the identity verifier and payment gateway client once per process.
    3. Closes outbound clients and the connection pool on shutdown.
    """
    configure_logging(settings.log_level)

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    app.state.identity_verifier = build_identity_verifier()
    app.state.payment_gateway = build_payment_gateway()
    logger.info("%s started", settings.app_name)
    yield

    await app.state.payment_gateway.aclose()
    await app.state.identity_verifier.aclose()
    await redis_client.aclose()
    await engine.dispose()


# Initialize FastAPI application
app = FastAPI(
    title=settings.app_name,
    version=settings.api_version,
    debug=settings.debug,
    description="REST backend for parcel booking, rider onboarding, payments and tracking",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)
app.add_middleware(ObservabilityMiddleware)

# Register global exception handlers
app.add_exception_handler(AppException, app_exception_handler)
app.add_exception_handler(HTTPException, http_exception_handler)
app.add_exception_handler(RequestValidationError, validation_exception_handler)
app.add_exception_handler(Exception, generic_exception_handler)


@app.get("/", tags=["Root"], response_class=PlainTextResponse)
async def root():
    return "Parcel Server is Running"


@app.get("/health", tags=["Health"])
async def health_check():
    """
    Health check endpoint.

    Returns:
        dict: Status and application information
    """
    return {
        "status": "healthy",
        "app_name": settings.app_name,
        "version": settings.api_version,
        "cache": "ok" if await ping_redis() else "unavailable",
    }


# Include API router
app.include_router(api_v1_router, prefix=settings.api_prefix)


def run() -> None:
    uvicorn.run(
        "parcel_backend.app.main:app",
        host=settings.host,
        port=settings.port,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    run()
