"""Search synchronizer: question aggregates <-> search documents."""

import json
import logging
from typing import Any
from uuid import UUID

from pydantic import ValidationError as PydanticValidationError

from app.core.app_exceptions import TransportError
from app.questions.completion import completion_status
from app.questions.registry import SkillDomain
from app.schemas.question import (
    QuestionDetail,
    QuestionSearchFilter,
    QuestionSearchItem,
    QuestionSearchPage,
)
from app.search.question_index import QuestionSearchIndex
from app.system.health import BackendHealth

logger = logging.getLogger(__name__)


def build_search_document(domain: SkillDomain, detail: QuestionDetail, status: str) -> dict[str, Any]:
    """
    Denormalize an aggregate into its search document.

    Every variant field of the domain is present; fields of other variants
    (or of a variant without child data yet) are empty strings.
    """
    doc: dict[str, Any] = {
        "id": str(detail.id),
        "type": detail.type,
        "topic": detail.topic,
        "instruction": detail.instruction,
        "image_urls": detail.image_urls,
        "max_time": detail.max_time,
        "status": status,
        "version": detail.version,
        "created_at": detail.created_at.isoformat(),
        "updated_at": detail.updated_at.isoformat(),
        "payload": None,
    }
    for name in domain.parent_fields:
        doc[name] = getattr(detail, name)
    for name in domain.search_field_names():
        doc[name] = ""

    if detail.payload is not None and domain.has_kind(detail.type):
        spec = domain.variant(detail.type)
        for name, extract in spec.search_fields.items():
            doc[name] = json.dumps(extract(detail.payload), ensure_ascii=False)
        doc["payload"] = detail.payload.model_dump(mode="json")
    return doc


def build_search_query(domain: SkillDomain, search_filter: QuestionSearchFilter) -> dict[str, Any]:
    """
    Build Elasticsearch query DSL for a question search filter.

    Metadata text is matched against the variant fields of the requested
    type, or of every variant in the domain when no type is given.
    """
    must_clauses: list[dict[str, Any]] = []

    if search_filter.type:
        must_clauses.append({"match": {"type": search_filter.type}})

    if search_filter.topic:
        must_clauses.append({"terms": {"topic.keyword": search_filter.topic}})

    if search_filter.instruction:
        must_clauses.append({"match": {"instruction": search_filter.instruction}})

    if search_filter.metadata:
        if search_filter.type and domain.has_kind(search_filter.type):
            fields = list(domain.variant(search_filter.type).search_fields)
        elif search_filter.type:
            fields = []
        else:
            fields = domain.search_field_names()
        if fields:
            must_clauses.append({"multi_match": {"query": search_filter.metadata, "fields": fields}})

    filter_clauses: list[dict[str, Any]] = []
    if search_filter.status:
        filter_clauses.append({"term": {"status": search_filter.status}})

    return {
        "query": {"bool": {"must": must_clauses, "filter": filter_clauses}},
        "from": (search_filter.page - 1) * search_filter.page_size,
        "size": search_filter.page_size,
        "sort": [{"_score": "desc"}, {"created_at": "desc"}],
        "track_total_hits": True,
    }


def decode_search_hit(domain: SkillDomain, hit: dict[str, Any]) -> QuestionSearchItem:
    source = hit.get("_source", {})
    detail = domain.detail_model.model_validate(
        {
            "id": source["id"],
            "type": source["type"],
            "topic": source.get("topic") or [],
            "instruction": source.get("instruction", ""),
            "image_urls": source.get("image_urls") or [],
            "max_time": source.get("max_time"),
            "version": source.get("version", 1),
            "created_at": source.get("created_at"),
            "updated_at": source.get("updated_at"),
            "payload": source.get("payload"),
            **{name: source.get(name) for name in domain.parent_fields},
        }
    )
    return QuestionSearchItem(question=detail, status=source["status"])


class QuestionSearchSynchronizer:
    """Upsert/delete/search for one skill domain, gated by search health."""

    def __init__(self, domain: SkillDomain, index: QuestionSearchIndex | None, health: BackendHealth):
        self.domain = domain
        self.index = index
        self.health = health
        self._index_ready = False

    def usable(self) -> bool:
        return self.index is not None and self.health.is_search_usable()

    def _ensure_index(self) -> None:
        if not self._index_ready:
            self.index.ensure_index()
            self._index_ready = True

    def upsert(self, detail: QuestionDetail, complete: bool) -> bool:
        """Index the aggregate. False when skipped; TransportError on failure."""
        if not self.usable():
            logger.debug(
                "question_search_sync_skipped",
                extra={"event": "question_search_sync_skipped", "question_id": str(detail.id)},
            )
            return False
        self._ensure_index()
        self.index.upsert(build_search_document(self.domain, detail, completion_status(complete)))
        return True

    def delete(self, question_id: UUID) -> bool:
        if not self.usable():
            return False
        self.index.delete(str(question_id))
        return True

    def search(self, search_filter: QuestionSearchFilter) -> QuestionSearchPage:
        if not self.usable():
            raise TransportError("search backend unavailable", details={"domain": self.domain.name})

        response = self.index.search(build_search_query(self.domain, search_filter))
        hits = response.get("hits", {})
        total = hits.get("total", 0)
        if isinstance(total, dict):
            total = total.get("value", 0)

        items: list[QuestionSearchItem] = []
        for hit in hits.get("hits", []):
            try:
                items.append(decode_search_hit(self.domain, hit))
            except (KeyError, PydanticValidationError) as e:
                logger.warning(
                    "search_hit_decode_failed",
                    extra={"event": "search_hit_decode_failed", "hit_id": hit.get("_id"), "error": str(e)},
                )

        return QuestionSearchPage(
            items=items,
            total=int(total),
            page=search_filter.page,
            page_size=search_filter.page_size,
        )

    def drop(self) -> bool:
        if not self.usable():
            return False
        self.index.drop_index()
        self._index_ready = False
        return True
