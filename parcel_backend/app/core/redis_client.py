"""
Redis client initialization and connection management.

Redis holds short-lived shared state across worker processes, such as the
identity provider's signing certificates.
"""

import redis.asyncio as redis
from parcel_backend.app.core.config import settings


# Create async Redis client (connects lazily on first command)
redis_client = redis.from_url(
    settings.redis_url,
    decode_responses=settings.redis_decode_responses,
)


async def ping_redis() -> bool:
    """
    Test Redis connection.

    Returns:
        True if connection successful, False otherwise
    """
    try:
        return await redis_client.ping()
    except Exception:
        return False
