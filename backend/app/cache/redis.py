"""Redis-backed cache backend for question aggregates.

Unlike the fail-open helpers used for response caching, every Redis failure
here is raised as TransportError; the synchronizers decide whether to absorb it.
"""

from __future__ import annotations

import redis
from redis.exceptions import RedisError

from app.core.app_exceptions import TransportError
from app.core.logging import get_logger

logger = get_logger(__name__)

SCAN_COUNT = 500
DELETE_BATCH = 200


class RedisCache:
    """get/set/delete/delete_pattern/keys over a redis-py client (decode_responses=True)."""

    def __init__(self, client: redis.Redis):
        self.client = client

    def _fail(self, op: str, target: str, exc: Exception) -> TransportError:
        logger.warning(
            f"redis_{op}_failed",
            extra={"event": f"redis_{op}_failed", "key": target, "error": str(exc)},
        )
        return TransportError(f"redis {op} failed", details={"key": target, "error": str(exc)})

    def get(self, key: str) -> str | None:
        try:
            return self.client.get(key)
        except RedisError as e:
            raise self._fail("get", key, e) from e

    def set(self, key: str, value: str, ttl_seconds: int) -> None:
        """Single atomic SET with expiry."""
        try:
            self.client.set(key, value, ex=int(ttl_seconds))
        except RedisError as e:
            raise self._fail("set", key, e) from e

    def delete(self, *keys: str) -> int:
        if not keys:
            return 0
        try:
            return int(self.client.delete(*keys))
        except RedisError as e:
            raise self._fail("delete", ",".join(keys), e) from e

    def keys(self, pattern: str) -> list[str]:
        """Incremental SCAN; never KEYS."""
        try:
            return list(self.client.scan_iter(match=pattern, count=SCAN_COUNT))
        except RedisError as e:
            raise self._fail("scan", pattern, e) from e

    def delete_pattern(self, pattern: str, keep: str | None = None) -> int:
        """Delete keys matching a glob via SCAN, batching deletes through a pipeline."""
        deleted = 0
        try:
            pipe = self.client.pipeline(transaction=False)
            for key in self.client.scan_iter(match=pattern, count=SCAN_COUNT):
                if key == keep:
                    continue
                pipe.delete(key)
                deleted += 1
                if deleted % DELETE_BATCH == 0:
                    pipe.execute()
            if deleted % DELETE_BATCH != 0:
                pipe.execute()
        except RedisError as e:
            raise self._fail("delete_pattern", pattern, e) from e
        return deleted

    def ping(self) -> bool:
        try:
            return bool(self.client.ping())
        except RedisError:
            return False
