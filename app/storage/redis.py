import json

import redis.asyncio as redis
from app.core.config import settings

redis_client = redis.from_url(settings.REDIS_URL, decode_responses=True)

async def cache_session_user(token_digest: str, user: dict, ttl: int):
    await redis_client.setex(f"session_user:{token_digest}", ttl, json.dumps(user))

async def get_cached_session_user(token_digest: str):
    result = await redis_client.get(f"session_user:{token_digest}")
    if result:
        return json.loads(result)
    return None
