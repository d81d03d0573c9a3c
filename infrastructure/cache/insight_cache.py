"""Journey insights Redis cache.

Stores the serialized JourneyInsightsResponse as JSON (not pickle) so cache
entries are debuggable. Every operation is a no-op when Redis is not
configured, and Redis errors degrade to a cache miss.
"""

from typing import Optional

import redis.asyncio as aioredis

from schemas.dto.responses.insight import JourneyInsightsResponse
from shared.logging import get_logger

log = get_logger(__name__)


class InsightCache:
    def __init__(
        self, redis_client: Optional[aioredis.Redis], ttl_seconds: int = 3600
    ) -> None:
        self._redis = redis_client
        self.ttl_seconds = ttl_seconds

    def _key(self, user_id: str) -> str:
        return f"journey_insights:{user_id}"

    async def get(self, user_id: str) -> Optional[JourneyInsightsResponse]:
        if self._redis is None:
            return None
        try:
            raw = await self._redis.get(self._key(user_id))
            if raw is None:
                return None
            return JourneyInsightsResponse.model_validate_json(raw)
        except Exception as e:
            log.warning("insight_cache_get_error", user_id=user_id, error=str(e))
            return None

    async def set(self, user_id: str, insights: JourneyInsightsResponse) -> None:
        if self._redis is None:
            return
        try:
            await self._redis.setex(
                self._key(user_id),
                self.ttl_seconds,
                insights.model_dump_json(by_alias=True),
            )
        except Exception as e:
            log.error("insight_cache_set_error", user_id=user_id, error=str(e))

