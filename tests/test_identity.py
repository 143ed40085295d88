import httpx
import pytest
from redis.exceptions import ConnectionError as RedisConnectionError

from app.services.identity import IdentityProviderError, SupabaseIdentityProvider, token_digest

AUTH = "http://auth.test"

USER = {
    "id": "8d0fd2b3-9ca7-4e9e-a1c4-5b4f3a7b6a11",
    "aud": "authenticated",
    "email": "someone@example.com",
    "confirmed_at": "2024-03-01T10:00:00.000000Z",
}


class MemoryCache:
    def __init__(self, fail=False):
        self.entries = {}
        self.fail = fail

    async def get_cached_session_user(self, digest):
        if self.fail:
            raise RedisConnectionError("redis down")
        return self.entries.get(digest)

    async def cache_session_user(self, digest, user, ttl):
        if self.fail:
            raise RedisConnectionError("redis down")
        self.entries[digest] = user


def provider_with(handler, **kwargs):
    return SupabaseIdentityProvider(AUTH, "anon-key", transport=httpx.MockTransport(handler), **kwargs)


@pytest.mark.asyncio
async def test_valid_token_resolves_to_user():
    seen = []

    def handler(request):
        seen.append(request)
        return httpx.Response(200, json=USER)

    user = await provider_with(handler).get_user("tok")

    assert user.id == USER["id"]
    assert user.is_confirmed
    assert str(seen[0].url) == f"{AUTH}/auth/v1/user"
    assert seen[0].headers["apikey"] == "anon-key"
    assert seen[0].headers["Authorization"] == "Bearer tok"


@pytest.mark.asyncio
async def test_unconfirmed_user():
    def handler(request):
        return httpx.Response(200, json={**USER, "confirmed_at": None})

    user = await provider_with(handler).get_user("tok")
    assert user.id == USER["id"]
    assert not user.is_confirmed


@pytest.mark.asyncio
@pytest.mark.parametrize("status", [401, 403])
async def test_rejected_token(status):
    def handler(request):
        return httpx.Response(status, json={"msg": "invalid JWT"})

    assert await provider_with(handler).get_user("tok") is None


@pytest.mark.asyncio
async def test_auth_server_failure_raises():
    def handler(request):
        return httpx.Response(500, text="boom")

    with pytest.raises(IdentityProviderError):
        await provider_with(handler).get_user("tok")


@pytest.mark.asyncio
async def test_cached_lookup_skips_auth_server():
    calls = []

    def handler(request):
        calls.append(request)
        return httpx.Response(200, json=USER)

    cache = MemoryCache()
    provider = provider_with(handler, cache_ttl=60, cache=cache)

    first = await provider.get_user("tok")
    second = await provider.get_user("tok")

    assert first == second
    assert len(calls) == 1
    # keyed by digest, the raw token is never stored
    assert list(cache.entries) == [token_digest("tok")]


@pytest.mark.asyncio
async def test_cache_disabled_with_zero_ttl():
    calls = []

    def handler(request):
        calls.append(request)
        return httpx.Response(200, json=USER)

    cache = MemoryCache()
    provider = provider_with(handler, cache_ttl=0, cache=cache)
    await provider.get_user("tok")
    await provider.get_user("tok")

    assert len(calls) == 2
    assert cache.entries == {}


@pytest.mark.asyncio
async def test_cache_outage_falls_back_to_auth_server():
    def handler(request):
        return httpx.Response(200, json=USER)

    provider = provider_with(handler, cache_ttl=60, cache=MemoryCache(fail=True))
    user = await provider.get_user("tok")
    assert user.id == USER["id"]


@pytest.mark.asyncio
@pytest.mark.parametrize("response", [
    httpx.Response(200, text="<html>maintenance</html>"),
    httpx.Response(200, json=["not", "a", "user"]),
    httpx.Response(200, json={"id": {"nested": True}}),
])
async def test_unreadable_user_raises(response):
    def handler(request):
        return response

    with pytest.raises(IdentityProviderError):
        await provider_with(handler).get_user("tok")
