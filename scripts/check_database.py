"""
Database connectivity check.

Connects once to DATABASE_URL with asyncpg and exits 0 on success, 1 on
failure. Useful as a deployment readiness probe.
"""

import asyncio
import sys

import asyncpg

from parcel_backend.app.core.config import settings


def to_asyncpg_dsn(database_url: str) -> str:
    """Strip the SQLAlchemy driver suffix (``postgresql+asyncpg://`` -> ``postgresql://``)."""
    scheme, sep, rest = database_url.partition("://")
    return scheme.split("+", 1)[0] + sep + rest


async def check_db(database_url: str) -> bool:
    try:
        conn = await asyncpg.connect(to_asyncpg_dsn(database_url))
    except (OSError, asyncpg.PostgresError) as e:
        print(f"Connection failed: {e}")
        return False
    await conn.close()
    print("Connection successful")
    return True


if __name__ == "__main__":
    sys.exit(0 if asyncio.run(check_db(settings.database_url)) else 1)
