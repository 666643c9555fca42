"""Cache synchronizer for question aggregates.

Two key layouts are supported:

versioned  `{prefix}:{id}:{complete|uncomplete}:{version}` holding the aggregate
           JSON. A write sets the new key, then scans `{prefix}:{id}:*` and
           deletes every other match. Scan and delete are not atomic with the
           write, so concurrent writers for one id can leave two live keys
           until the next sync.
canonical  `{prefix}:{id}` holding `{"version", "status", "payload"}`, replaced
           by one SET with expiry. No scan on the write path.
"""

import json
from dataclasses import dataclass
from typing import Any
from uuid import UUID

from pydantic import ValidationError as PydanticValidationError

from app.cache.redis import RedisCache
from app.core.app_exceptions import TransportError
from app.core.config import settings
from app.core.logging import get_logger
from app.questions.completion import completion_status
from app.questions.registry import SkillDomain
from app.schemas.question import COMPLETE, UNCOMPLETE, QuestionDetail
from app.system.health import BackendHealth

logger = get_logger(__name__)


@dataclass
class CachedEntry:
    key: str
    status: str
    version: int
    payload: str | dict[str, Any]


class VersionedKeyStrategy:
    name = "versioned"

    def key(self, prefix: str, question_id: UUID, status: str, version: int) -> str:
        return f"{prefix}:{question_id}:{status}:{version}"

    def pattern(self, prefix: str, question_id: UUID) -> str:
        return f"{prefix}:{question_id}:*"

    def write(self, cache: RedisCache, prefix: str, detail: QuestionDetail, status: str, ttl: int) -> str:
        key = self.key(prefix, detail.id, status, detail.version)
        cache.set(key, detail.model_dump_json(), ttl)
        pruned = cache.delete_pattern(self.pattern(prefix, detail.id), keep=key)
        if pruned:
            logger.debug(
                "question_cache_pruned",
                extra={"event": "question_cache_pruned", "question_id": str(detail.id), "pruned": pruned},
            )
        return key

    @staticmethod
    def _parse(key: str) -> tuple[str, int] | None:
        parts = key.rsplit(":", 2)
        if len(parts) != 3 or parts[1] not in (COMPLETE, UNCOMPLETE):
            return None
        try:
            return parts[1], int(parts[2])
        except ValueError:
            return None

    def read(self, cache: RedisCache, prefix: str, question_id: UUID) -> CachedEntry | None:
        candidates = []
        for key in cache.keys(self.pattern(prefix, question_id)):
            parsed = self._parse(key)
            if parsed is not None:
                candidates.append((parsed[1], key, parsed[0]))
        if not candidates:
            return None
        # Transient duplicates: the highest version wins
        version, key, status = max(candidates)
        raw = cache.get(key)
        if raw is None:
            return None
        return CachedEntry(key=key, status=status, version=version, payload=raw)

    def has_version(self, cache: RedisCache, prefix: str, question_id: UUID, version: int) -> bool:
        for status in (COMPLETE, UNCOMPLETE):
            if cache.get(self.key(prefix, question_id, status, version)) is not None:
                return True
        return False

    def remove(self, cache: RedisCache, prefix: str, question_id: UUID) -> int:
        return cache.delete_pattern(self.pattern(prefix, question_id))


class CanonicalKeyStrategy:
    name = "canonical"

    def key(self, prefix: str, question_id: UUID, status: str | None = None, version: int | None = None) -> str:
        return f"{prefix}:{question_id}"

    def write(self, cache: RedisCache, prefix: str, detail: QuestionDetail, status: str, ttl: int) -> str:
        key = self.key(prefix, detail.id)
        value = {
            "version": detail.version,
            "status": status,
            "payload": detail.model_dump(mode="json"),
        }
        cache.set(key, json.dumps(value), ttl)
        return key

    def read(self, cache: RedisCache, prefix: str, question_id: UUID) -> CachedEntry | None:
        key = self.key(prefix, question_id)
        raw = cache.get(key)
        if raw is None:
            return None
        try:
            value = json.loads(raw)
            return CachedEntry(
                key=key,
                status=value["status"],
                version=int(value["version"]),
                payload=value["payload"],
            )
        except (ValueError, KeyError, TypeError) as e:
            raise ValueError(f"malformed cache entry {key}: {e}") from e

    def has_version(self, cache: RedisCache, prefix: str, question_id: UUID, version: int) -> bool:
        try:
            entry = self.read(cache, prefix, question_id)
        except ValueError:
            return False
        return entry is not None and entry.version == version

    def remove(self, cache: RedisCache, prefix: str, question_id: UUID) -> int:
        return cache.delete(self.key(prefix, question_id))


KEY_STRATEGIES = {
    VersionedKeyStrategy.name: VersionedKeyStrategy,
    CanonicalKeyStrategy.name: CanonicalKeyStrategy,
}


def get_key_strategy(name: str | None = None):
    name = name or settings.QUESTION_CACHE_KEY_STRATEGY
    try:
        return KEY_STRATEGIES[name]()
    except KeyError:
        raise ValueError(f"unknown cache key strategy: {name}") from None


class QuestionCacheSynchronizer:
    """Writes, reads and prunes cached aggregates for one skill domain."""

    def __init__(
        self,
        domain: SkillDomain,
        cache: RedisCache | None,
        health: BackendHealth,
        strategy=None,
        ttl_seconds: int | None = None,
    ):
        self.domain = domain
        self.cache = cache
        self.health = health
        self.strategy = strategy or get_key_strategy()
        self.ttl_seconds = ttl_seconds or settings.QUESTION_CACHE_TTL_SECONDS

    @property
    def prefix(self) -> str:
        return self.domain.cache_prefix

    def usable(self) -> bool:
        return self.cache is not None and self.health.is_cache_usable()

    def key_for(self, question_id: UUID, complete: bool, version: int) -> str:
        return self.strategy.key(self.prefix, question_id, completion_status(complete), version)

    def sync(self, detail: QuestionDetail, complete: bool) -> bool:
        """Write the aggregate. False when skipped (cache unusable); TransportError on failure."""
        if not self.usable():
            logger.debug(
                "question_cache_sync_skipped",
                extra={"event": "question_cache_sync_skipped", "question_id": str(detail.id)},
            )
            return False
        self.strategy.write(self.cache, self.prefix, detail, completion_status(complete), self.ttl_seconds)
        return True

    def read(self, question_id: UUID) -> QuestionDetail | None:
        """Cached aggregate, or None on miss, decode failure or transport failure."""
        if not self.usable():
            return None
        try:
            entry = self.strategy.read(self.cache, self.prefix, question_id)
            if entry is None:
                return None
            if isinstance(entry.payload, str):
                return self.domain.detail_model.model_validate_json(entry.payload)
            return self.domain.detail_model.model_validate(entry.payload)
        except TransportError:
            return None
        except (PydanticValidationError, ValueError) as e:
            logger.warning(
                "question_cache_decode_failed",
                extra={
                    "event": "question_cache_decode_failed",
                    "domain": self.domain.name,
                    "question_id": str(question_id),
                    "error": str(e),
                },
            )
            return None

    def has_version(self, question_id: UUID, version: int) -> bool:
        """True when the cache holds this id at exactly `version` (either status)."""
        if not self.usable():
            return False
        try:
            return self.strategy.has_version(self.cache, self.prefix, question_id, version)
        except TransportError:
            return False

    def remove(self, question_id: UUID) -> bool:
        """Drop every cached entry for the id, whichever layout wrote it."""
        if not self.usable():
            return False
        self.cache.delete(f"{self.prefix}:{question_id}")
        self.cache.delete_pattern(f"{self.prefix}:{question_id}:*")
        return True

    def purge(self) -> int:
        if not self.usable():
            return 0
        return self.cache.delete_pattern(f"{self.prefix}:*")
