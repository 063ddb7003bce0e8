"""
Centralized Test Configuration.
"""

import os

# Required settings must exist before the application is imported
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")
os.environ.setdefault("PAYMENT_GATEWAY_SECRET_KEY", "sk_test_placeholder")
os.environ.setdefault("IDENTITY_PROJECT_ID", "parcel-test")
os.environ.setdefault("LOG_LEVEL", "DEBUG")

import time

import pytest
from httpx import AsyncClient, ASGITransport
from jose import jwt
from sqlalchemy.ext.asyncio import create_async_engine, async_sessionmaker, AsyncSession
from sqlalchemy.pool import StaticPool

from parcel_backend.app.main import app
from parcel_backend.app.db.session import get_db, Base
from parcel_backend.app.db.document_store import DocumentStore
from parcel_backend.app.core.config import settings
from parcel_backend.app.core.dependencies import get_identity_verifier, get_payment_gateway
from parcel_backend.app.core.exceptions import PaymentGatewayError
from parcel_backend.app.core.identity import IdentityVerifier, StaticKeySource
import parcel_backend.app.core.redis_client as redis_client_module

# Setup In-Memory Test Database
TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"

TEST_SIGNING_KEY = "test-signing-secret"
TEST_ISSUER = f"https://securetoken.google.com/{settings.identity_project_id}"


# Mock Redis for reliability in CI/CD
class MockRedis:
    def __init__(self):
        self.store = {}
        self.ttls = {}
        self._closed = False

    async def ping(self):
        if self._closed:
            return False
        return True

    async def get(self, key):
        if self._closed:
            return None
        return self.store.get(key)

    async def set(self, key, value, ex=None):
        if self._closed:
            return False
        self.store[key] = value
        self.ttls[key] = ex
        return True

    async def flushdb(self):
        if not self._closed:
            self.store = {}
            self.ttls = {}

    async def aclose(self):
        self._closed = True
        self.store = {}


class FakePaymentGateway:
    """Records requested amounts and hands out predictable client secrets."""

    def __init__(self):
        self.amounts = []
        self.error = None

    async def create_payment_intent(self, amount, currency=None, payment_method_types=None):
        if self.error:
            raise PaymentGatewayError(self.error)
        self.amounts.append(amount)
        return f"pi_test_{amount}_secret"

    async def aclose(self):
        return None


@pytest.fixture
async def engine():
    """Fresh in-memory database per test."""
    test_engine = create_async_engine(
        TEST_DATABASE_URL,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    async with test_engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield test_engine

    await test_engine.dispose()


@pytest.fixture
def session_factory(engine):
    return async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)


# Shared session for fixture data creation
@pytest.fixture
async def db_session(session_factory):
    async with session_factory() as session:
        yield session


@pytest.fixture
def store(db_session):
    return DocumentStore(db_session)


@pytest.fixture
def mock_redis():
    return MockRedis()


@pytest.fixture
def identity_verifier():
    return IdentityVerifier(
        StaticKeySource(TEST_SIGNING_KEY),
        audience=settings.identity_project_id,
        issuer=TEST_ISSUER,
        algorithms=["HS256"],
    )


@pytest.fixture
def payment_gateway():
    return FakePaymentGateway()


@pytest.fixture
async def client(session_factory, identity_verifier, payment_gateway, mock_redis, monkeypatch):
    """Async client for testing, wired to the test database and fakes."""
    # Patch the global redis client used by the health check
    monkeypatch.setattr(redis_client_module, "redis_client", mock_redis)

    async def override_get_db():
        async with session_factory() as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_identity_verifier] = lambda: identity_verifier
    app.dependency_overrides[get_payment_gateway] = lambda: payment_gateway

    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac

    app.dependency_overrides = {}


def _mint_token(email="a@x.com", uid="uid-a", key=TEST_SIGNING_KEY, headers=None, **claims):
    now = int(time.time())
    payload = {
        "sub": uid,
        "email": email,
        "aud": settings.identity_project_id,
        "iss": TEST_ISSUER,
        "iat": now,
        "exp": now + 3600,
    }
    payload.update(claims)
    payload = {name: value for name, value in payload.items() if value is not None}
    return jwt.encode(payload, key, algorithm="HS256", headers=headers)


@pytest.fixture
def make_token():
    """Mint an ID token the test verifier accepts unless a claim is overridden."""
    return _mint_token


@pytest.fixture
def auth_headers():
    def _headers(email="a@x.com", uid="uid-a"):
        return {"Authorization": f"Bearer {_mint_token(email=email, uid=uid)}"}
    return _headers
