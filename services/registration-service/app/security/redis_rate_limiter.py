"""Redis-backed sliding window limiter shared by all service replicas."""

from __future__ import annotations

import time
import uuid

from redis import Redis


class RedisSlidingWindowRateLimiter:
    """Sliding window limiter storing attempt timestamps in a Redis sorted set.

    Each ``allow`` call prunes expired attempts, counts the rest and records the
    new attempt in one MULTI/EXEC pipeline. An attempt over the limit is removed
    again so rejected callers do not extend their own lockout.
    """

    def __init__(
        self,
        client: Redis,
        *,
        max_requests: int,
        window_seconds: int,
        key_prefix: str = "registration-rate",
    ) -> None:
        self._client = client
        self._max_requests = max_requests
        self._window_ms = window_seconds * 1000
        self._key_prefix = key_prefix

    def allow(self, key: str) -> bool:
        """Return ``True`` while ``key`` is within the shared attempt limit."""
        now_ms = int(time.time() * 1000)
        redis_key = f"{self._key_prefix}:{key}"
        member = f"{now_ms}:{uuid.uuid4().hex}"

        pipe = self._client.pipeline(transaction=True)
        pipe.zremrangebyscore(redis_key, 0, now_ms - self._window_ms)
        pipe.zcard(redis_key)
        pipe.zadd(redis_key, {member: now_ms})
        pipe.pexpire(redis_key, self._window_ms)
        _, current, _, _ = pipe.execute()

        if int(current) >= self._max_requests:
            self._client.zrem(redis_key, member)
            return False
        return True
