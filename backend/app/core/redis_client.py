"""Redis connection for the question detail cache.

Redis only ever holds copies of question aggregates. Without it every read
is rebuilt from the database, the delta query checks every id against the
database, and writers skip the cache step. REDIS_REQUIRED turns a missing or
unreachable Redis into a startup failure instead of that degraded mode.
"""

import redis
from redis.exceptions import ConnectionError, RedisError

from app.core.config import settings
from app.core.logging import get_logger

logger = get_logger(__name__)

# Shared by every skill domain's cache synchronizer
_redis_client: redis.Redis | None = None


def _cache_bypassed(reason: str) -> None:
    logger.warning(
        "question_cache_bypassed",
        extra={"event": "question_cache_bypassed", "reason": reason, "reads_from": "database"},
    )


def get_redis_client() -> redis.Redis | None:
    """Client for the question cache, or None when the cache is off or unreachable."""
    global _redis_client

    if not settings.REDIS_ENABLED:
        return None

    if _redis_client is None:
        if not settings.REDIS_URL:
            if settings.REDIS_REQUIRED:
                raise ValueError("REDIS_URL must be set when REDIS_REQUIRED=true")
            _cache_bypassed("REDIS_URL not set")
            return None

        try:
            client = redis.from_url(
                settings.REDIS_URL,
                decode_responses=True,
                socket_connect_timeout=1,
                socket_timeout=1,
                retry_on_timeout=True,
                health_check_interval=30,
            )
            client.ping()
        except (ConnectionError, RedisError, ValueError) as e:
            if settings.REDIS_REQUIRED:
                raise ConnectionError(f"question cache unreachable and REDIS_REQUIRED=true: {e}") from e
            _cache_bypassed(str(e))
            return None
        _redis_client = client

    return _redis_client


def is_redis_available() -> bool:
    """Cache probe for the backend health checker."""
    client = get_redis_client()
    if client is None:
        return False
    try:
        return bool(client.ping())
    except RedisError:
        return False


def init_redis() -> bool:
    """Connect the question cache at startup. Returns whether it is in use."""
    if not settings.REDIS_ENABLED:
        logger.info(
            "question_cache_disabled",
            extra={"event": "question_cache_disabled", "reads_from": "database"},
        )
        return False
    if get_redis_client() is None:
        return False
    logger.info(
        "question_cache_ready",
        extra={
            "event": "question_cache_ready",
            "key_strategy": settings.QUESTION_CACHE_KEY_STRATEGY,
            "ttl_seconds": settings.QUESTION_CACHE_TTL_SECONDS,
        },
    )
    return True


def reset_client() -> None:
    """Forget the shared client so the next call reconnects with current settings."""
    global _redis_client
    _redis_client = None
