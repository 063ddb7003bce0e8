"""
Identity token verification.

Requests to protected routes carry an ID token issued by an external
identity provider (a Firebase-style RS256 JWT). The token is verified
locally with python-jose against the provider's published signing
certificates; nothing is written anywhere.
"""

import json
import logging
import re
from dataclasses import dataclass, field
from typing import Any, Dict, Mapping, Optional, Sequence, Union

import httpx
from jose import JWTError, jwt
from redis.exceptions import RedisError

from parcel_backend.app.core.exceptions import ForbiddenError

logger = logging.getLogger(__name__)

SigningKeys = Union[str, Mapping[str, str]]

_MAX_AGE = re.compile(r"max-age=(\d+)")


@dataclass(frozen=True)
class IdentityClaim:
    """Decoded identity of the caller."""
    uid: str
    email: Optional[str] = None
    claims: Dict[str, Any] = field(default_factory=dict)


class StaticKeySource:
    """Key source for a fixed key, e.g. an emulator's shared secret."""

    def __init__(self, key: str):
        self.key = key

    async def get_keys(self) -> SigningKeys:
        return self.key

    async def aclose(self) -> None:
        return None


class CertificateKeySource:
    """
    Fetches the provider's ``{key id: x509 certificate}`` map over HTTP.

    The map is cached in Redis for as long as the provider's Cache-Control
    max-age allows. If Redis is unavailable the map is fetched directly.
    """

    def __init__(
        self,
        url: str,
        cache=None,
        cache_key: str = "identity:certs",
        http_client: Optional[httpx.AsyncClient] = None,
        default_ttl: int = 3600,
    ):
        self.url = url
        self.cache = cache
        self.cache_key = cache_key
        self.default_ttl = default_ttl
        self._client = http_client or httpx.AsyncClient(timeout=10.0)

    async def get_keys(self) -> SigningKeys:
        cached = await self._read_cache()
        if cached is not None:
            return cached

        response = await self._client.get(self.url)
        response.raise_for_status()
        certs = response.json()

        await self._write_cache(certs, self._ttl(response.headers.get("cache-control")))
        return certs

    def _ttl(self, cache_control: Optional[str]) -> int:
        match = _MAX_AGE.search(cache_control or "")
        return int(match.group(1)) if match else self.default_ttl

    async def _read_cache(self) -> Optional[Dict[str, str]]:
        if self.cache is None:
            return None
        try:
            raw = await self.cache.get(self.cache_key)
        except RedisError as e:
            logger.warning("Signing key cache unavailable: %s", e)
            return None
        return json.loads(raw) if raw else None

    async def _write_cache(self, certs: Dict[str, str], ttl: int) -> None:
        if self.cache is None or ttl <= 0:
            return
        try:
            await self.cache.set(self.cache_key, json.dumps(certs), ex=ttl)
        except RedisError as e:
            logger.warning("Could not cache signing keys: %s", e)

    async def aclose(self) -> None:
        await self._client.aclose()


class IdentityVerifier:
    """
    Verifies bearer tokens and returns the caller's identity.

    Any verification failure (malformed token, unknown key id, bad
    signature, expiry, wrong audience or issuer, no subject, or signing
    keys that cannot be loaded) raises ForbiddenError.
    """

    def __init__(
        self,
        key_source,
        audience: str,
        issuer: Optional[str] = None,
        algorithms: Sequence[str] = ("RS256",),
    ):
        self.key_source = key_source
        self.audience = audience
        self.issuer = issuer
        self.algorithms = list(algorithms)

    async def verify(self, token: str) -> IdentityClaim:
        try:
            header = jwt.get_unverified_header(token)
        except JWTError as e:
            logger.info("Rejected malformed token: %s", e)
            raise ForbiddenError()

        try:
            keys = await self.key_source.get_keys()
        except (httpx.HTTPError, ValueError) as e:
            logger.error("Could not load identity signing keys: %s", e)
            raise ForbiddenError()

        if isinstance(keys, Mapping):
            key = keys.get(header.get("kid"))
            if key is None:
                logger.info("Rejected token signed with unknown key id %r", header.get("kid"))
                raise ForbiddenError()
        else:
            key = keys

        try:
            claims = jwt.decode(
                token,
                key,
                algorithms=self.algorithms,
                audience=self.audience,
                issuer=self.issuer,
            )
        except JWTError as e:
            logger.info("Rejected token: %s", e)
            raise ForbiddenError()

        uid = claims.get("sub")
        if not uid:
            logger.info("Rejected token without subject")
            raise ForbiddenError()

        return IdentityClaim(uid=uid, email=claims.get("email"), claims=claims)

    async def aclose(self) -> None:
        await self.key_source.aclose()
