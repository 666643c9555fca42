"""Sync orchestrator ("question updator").

Single entry point run after every committed mutation of a question or any of
its children: rebuild the aggregate from the database, evaluate completion,
then publish to the cache and the search index in that order.

Data faults (NotFoundError, UnknownTypeError) abort and propagate. Cache and
search TransportErrors are logged and absorbed; the create path opts into
surfacing search failures because no earlier copy exists to fall back on.
A failed cache write also evicts the question's older cache entries.
"""

from dataclasses import dataclass, field
from uuid import UUID

from sqlalchemy.orm import Session

from app.cache.question_cache import QuestionCacheSynchronizer
from app.cache.redis import RedisCache
from app.core.app_exceptions import TransportError
from app.core.logging import get_logger
from app.core.redis_client import get_redis_client
from app.questions.builder import build_question_detail
from app.questions.completion import completion_status, is_complete
from app.questions.registry import SkillDomain
from app.schemas.question import QuestionDetail
from app.search.es_client import get_es_client
from app.search.question_index import QuestionSearchIndex
from app.search.question_search import QuestionSearchSynchronizer
from app.system.health import BackendHealth, get_backend_health

logger = get_logger(__name__)


@dataclass
class SyncResult:
    """Outcome of one publish. `*_synced` is False when the step was skipped or failed."""

    question_id: UUID
    version: int
    complete: bool
    cache_synced: bool = False
    search_synced: bool = False
    errors: list[str] = field(default_factory=list)
    detail: QuestionDetail | None = None

    @property
    def status(self) -> str:
        return completion_status(self.complete)


class QuestionUpdator:
    def __init__(
        self,
        domain: SkillDomain,
        cache_sync: QuestionCacheSynchronizer,
        search_sync: QuestionSearchSynchronizer,
    ):
        self.domain = domain
        self.cache_sync = cache_sync
        self.search_sync = search_sync

    def _log_failure(self, step: str, question_id: UUID, exc: TransportError) -> None:
        logger.warning(
            f"question_{step}_sync_failed",
            extra={
                "event": f"question_{step}_sync_failed",
                "domain": self.domain.name,
                "question_id": str(question_id),
                "error": exc.message,
            },
        )

    def _evict(self, question_id: UUID) -> None:
        """Drop older cache entries so the delta query cannot vouch for a superseded version."""
        try:
            self.cache_sync.remove(question_id)
        except TransportError as e:
            logger.warning(
                "question_cache_evict_failed",
                extra={
                    "event": "question_cache_evict_failed",
                    "domain": self.domain.name,
                    "question_id": str(question_id),
                    "error": e.message,
                },
            )

    def publish(self, detail: QuestionDetail, *, raise_on_search_error: bool = False) -> SyncResult:
        """Evaluate completion and push an already-built aggregate to cache and search."""
        complete = is_complete(self.domain, detail)
        result = SyncResult(question_id=detail.id, version=detail.version, complete=complete, detail=detail)

        try:
            result.cache_synced = self.cache_sync.sync(detail, complete)
        except TransportError as e:
            self._log_failure("cache", detail.id, e)
            result.errors.append(f"cache: {e.message}")
            self._evict(detail.id)

        try:
            result.search_synced = self.search_sync.upsert(detail, complete)
        except TransportError as e:
            self._log_failure("search", detail.id, e)
            if raise_on_search_error:
                raise
            result.errors.append(f"search: {e.message}")

        return result

    def update_cache_and_search(
        self,
        db: Session,
        question_id: UUID,
        *,
        raise_on_search_error: bool = False,
    ) -> SyncResult:
        """Rebuild from the committed state and republish."""
        db.expire_all()
        detail = build_question_detail(db, self.domain, question_id)
        return self.publish(detail, raise_on_search_error=raise_on_search_error)

    def remove(self, question_id: UUID) -> SyncResult:
        """Best-effort removal of every projection of a deleted question."""
        result = SyncResult(question_id=question_id, version=0, complete=False)
        try:
            result.cache_synced = self.cache_sync.remove(question_id)
        except TransportError as e:
            self._log_failure("cache", question_id, e)
            result.errors.append(f"cache: {e.message}")
        try:
            result.search_synced = self.search_sync.delete(question_id)
        except TransportError as e:
            self._log_failure("search", question_id, e)
            result.errors.append(f"search: {e.message}")
        return result


def create_question_updator(
    domain: SkillDomain,
    *,
    cache: RedisCache | None = None,
    search_client=None,
    health: BackendHealth | None = None,
    strategy=None,
) -> QuestionUpdator:
    """Wire an updator, defaulting to the process-wide Redis/ES clients and health flags."""
    health = health or get_backend_health()
    if cache is None:
        client = get_redis_client()
        cache = RedisCache(client) if client is not None else None
    if search_client is None:
        search_client = get_es_client()
    index = None
    if search_client is not None:
        index = QuestionSearchIndex(
            search_client,
            domain.index_name,
            domain.search_field_names(),
            domain.parent_field_mappings(),
        )
    return QuestionUpdator(
        domain,
        QuestionCacheSynchronizer(domain, cache, health, strategy=strategy),
        QuestionSearchSynchronizer(domain, index, health),
    )
