"""Per-domain Elasticsearch index for question search documents."""

import logging
from typing import Any

from elasticsearch import exceptions as es_exceptions

from app.core.app_exceptions import TransportError

logger = logging.getLogger(__name__)

ES_ERRORS = (es_exceptions.ApiError, es_exceptions.TransportError)


def build_question_index_settings() -> dict[str, Any]:
    """Single shard, lowercase analyzer/normalizer for case-insensitive matching."""
    return {
        "number_of_shards": 1,
        "number_of_replicas": 0,
        "analysis": {
            "analyzer": {
                "case_insensitive": {
                    "type": "custom",
                    "tokenizer": "standard",
                    "filter": ["lowercase"],
                }
            },
            "normalizer": {
                "case_insensitive": {
                    "type": "custom",
                    "filter": ["lowercase"],
                }
            },
        },
    }


def build_question_index_mapping(
    variant_fields: list[str],
    parent_properties: dict[str, dict[str, Any]] | None = None,
) -> dict[str, Any]:
    """
    Mapping shared by every question index.

    Variant fields hold JSON-encoded child data and are analyzed as text so
    metadata queries can match inside them. `payload` keeps the structured
    aggregate for decoding hits and is not indexed.
    `parent_properties` maps the domain's own parent columns.
    """
    properties: dict[str, Any] = {
        "id": {"type": "keyword"},
        "type": {"type": "keyword"},
        "topic": {
            "type": "text",
            "analyzer": "case_insensitive",
            "fields": {"keyword": {"type": "keyword", "normalizer": "case_insensitive"}},
        },
        "instruction": {"type": "text", "analyzer": "case_insensitive"},
        "image_urls": {"type": "keyword"},
        "max_time": {"type": "integer"},
        "status": {"type": "keyword"},
        "version": {"type": "integer"},
        "created_at": {"type": "date"},
        "updated_at": {"type": "date"},
        "payload": {"type": "object", "enabled": False},
    }
    properties.update(parent_properties or {})
    for name in variant_fields:
        properties[name] = {"type": "text", "analyzer": "case_insensitive"}
    return {"properties": properties}


class QuestionSearchIndex:
    """ensure/upsert/delete/search/drop over one index. ES failures raise TransportError."""

    def __init__(
        self,
        client,
        index_name: str,
        variant_fields: list[str],
        parent_properties: dict[str, dict[str, Any]] | None = None,
    ):
        self.client = client
        self.index_name = index_name
        self.variant_fields = variant_fields
        self.parent_properties = parent_properties or {}

    def _fail(self, op: str, exc: Exception, **context: Any) -> TransportError:
        logger.warning(
            f"search_{op}_failed",
            extra={"event": f"search_{op}_failed", "index": self.index_name, "error": str(exc), **context},
        )
        return TransportError(
            f"search {op} failed",
            details={"index": self.index_name, "error": str(exc), **context},
        )

    def ensure_index(self) -> bool:
        """Create the index when missing. Returns True if it was created."""
        try:
            if self.client.indices.exists(index=self.index_name):
                return False
            self.client.indices.create(
                index=self.index_name,
                settings=build_question_index_settings(),
                mappings=build_question_index_mapping(self.variant_fields, self.parent_properties),
            )
        except es_exceptions.BadRequestError as e:
            # Lost a creation race with another worker
            if getattr(e, "error", "") == "resource_already_exists_exception":
                return False
            raise self._fail("ensure_index", e) from e
        except ES_ERRORS as e:
            raise self._fail("ensure_index", e) from e
        logger.info(f"Created question index: {self.index_name}")
        return True

    def upsert(self, document: dict[str, Any]) -> None:
        doc_id = str(document["id"])
        try:
            self.client.index(index=self.index_name, id=doc_id, document=document)
        except ES_ERRORS as e:
            raise self._fail("upsert", e, question_id=doc_id) from e

    def delete(self, doc_id: str) -> None:
        """Delete one document; a missing document is not an error."""
        try:
            self.client.options(ignore_status=404).delete(index=self.index_name, id=str(doc_id))
        except ES_ERRORS as e:
            raise self._fail("delete", e, question_id=str(doc_id)) from e

    def search(self, query: dict[str, Any]) -> dict[str, Any]:
        try:
            return self.client.search(index=self.index_name, body=query)
        except ES_ERRORS as e:
            raise self._fail("search", e) from e

    def drop_index(self) -> None:
        try:
            self.client.options(ignore_status=404).indices.delete(index=self.index_name)
        except ES_ERRORS as e:
            raise self._fail("drop_index", e) from e
        logger.info(f"Dropped question index: {self.index_name}")

    def ping(self) -> bool:
        try:
            return bool(self.client.ping())
        except ES_ERRORS:
            return False
