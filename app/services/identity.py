import hashlib
import logging
from typing import Optional

import httpx
from fastapi import Depends
from pydantic import ValidationError
from redis.exceptions import RedisError

from app.core.config import Settings, get_settings
from app.models.user_schema import SessionUser
from app.storage import redis as session_cache

logger = logging.getLogger(__name__)


class IdentityProviderError(Exception):
    """The identity provider could not answer a session lookup."""


def token_digest(token: str) -> str:
    return hashlib.sha256(token.encode()).hexdigest()


class SupabaseIdentityProvider:
    """
    Resolves a session access token to the user it belongs to by asking the
    auth server. Rejected tokens resolve to None; transport failures raise
    IdentityProviderError.

    Accepted users are cached for cache_ttl seconds under a digest of the
    token when a cache is supplied.
    """

    def __init__(
        self,
        auth_url: str,
        api_key: str,
        cache_ttl: int = 0,
        cache=None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.auth_url = auth_url.rstrip("/")
        self.api_key = api_key
        self.cache_ttl = cache_ttl
        self.cache = cache if cache_ttl > 0 else None
        self.transport = transport

    async def get_user(self, token: str) -> Optional[SessionUser]:
        digest = token_digest(token)
        cached = await self._cached(digest)
        if cached is not None:
            return SessionUser.model_validate(cached)

        headers = {"apikey": self.api_key, "Authorization": f"Bearer {token}"}
        try:
            async with httpx.AsyncClient(transport=self.transport) as client:
                response = await client.get(f"{self.auth_url}/auth/v1/user", headers=headers)
        except httpx.HTTPError as exc:
            raise IdentityProviderError(str(exc)) from exc

        if response.status_code in (401, 403):
            return None
        if response.status_code != 200:
            raise IdentityProviderError(f"auth server answered {response.status_code}")

        try:
            user = SessionUser.model_validate(response.json())
        except (ValueError, ValidationError) as exc:
            raise IdentityProviderError(f"unreadable user from auth server: {exc}") from exc
        await self._remember(digest, user)
        return user

    async def _cached(self, digest: str) -> Optional[dict]:
        if self.cache is None:
            return None
        try:
            return await self.cache.get_cached_session_user(digest)
        except RedisError as exc:
            logger.warning(f"Session cache read failed: {exc}")
            return None

    async def _remember(self, digest: str, user: SessionUser):
        if self.cache is None or not user.id:
            return
        try:
            await self.cache.cache_session_user(digest, user.model_dump(mode="json"), self.cache_ttl)
        except RedisError as exc:
            logger.warning(f"Session cache write failed: {exc}")


def get_identity_provider(settings: Settings = Depends(get_settings)) -> SupabaseIdentityProvider:
    return SupabaseIdentityProvider(
        auth_url=settings.AUTH_URL,
        api_key=settings.AUTH_API_KEY,
        cache_ttl=settings.SESSION_CACHE_TTL,
        cache=session_cache,
    )
