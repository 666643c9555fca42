"""Tests for aggregate building and the sync orchestrator."""

from unittest.mock import MagicMock
from uuid import uuid4

import pytest
from elasticsearch import ConnectionError as ESConnectionError
from redis.exceptions import ConnectionError as RedisConnectionError

from app.cache.redis import RedisCache
from app.core.app_exceptions import NotFoundError, TransportError, UnknownTypeError
from app.models.grammar import GrammarQuestion
from app.questions.builder import build_question_detail
from app.questions.grammar import GRAMMAR
from app.questions.speaking import SPEAKING
from app.questions.updator import create_question_updator
from app.schemas.speaking import WordRepetitionPayload
from app.services.grammar_services import build_grammar_services
from tests.helpers.seed import create_fill_in_the_blank, question_data


def _insert_raw_question(db, question_type: str) -> GrammarQuestion:
    question = GrammarQuestion(
        type=question_type,
        topic=["legacy"],
        instruction="Imported row",
        image_urls=[],
        max_time=60,
        version=1,
    )
    db.add(question)
    db.commit()
    return question


class TestAggregateBuilder:
    """Dispatch on the stored type discriminator."""

    def test_missing_question_is_not_found(self, db):
        with pytest.raises(NotFoundError):
            build_question_detail(db, GRAMMAR, uuid4())

    def test_unknown_type_is_integrity_fault(self, db):
        question = _insert_raw_question(db, "MATCHING")
        with pytest.raises(UnknownTypeError) as exc_info:
            build_question_detail(db, GRAMMAR, question.id)
        assert exc_info.value.status_code == 500

    def test_singleton_variant_without_rows_has_no_payload(self, db, grammar):
        detail = grammar.questions.create_question(db, question_data("SENTENCE_TRANSFORMATION"))
        assert detail.payload is None

    def test_list_variant_without_rows_has_empty_payload(self, db, speaking):
        detail = speaking.questions.create_question(db, question_data("WORD_REPETITION"))
        assert isinstance(detail.payload, WordRepetitionPayload)
        assert detail.payload.items == []

    def test_nested_rows_are_loaded(self, db, grammar):
        detail, blank = create_fill_in_the_blank(grammar, db, answers=2)
        built = build_question_detail(db, GRAMMAR, detail.id)

        assert built.payload.kind == "FILL_IN_THE_BLANK"
        assert built.payload.question.id == blank.id
        assert {a.answer for a in built.payload.answers} == {"goes-0", "goes-1"}


class TestQuestionUpdator:
    """Rebuild, evaluate, then publish to cache and search."""

    def test_create_publishes_uncomplete(self, db, grammar, redis_client, last_indexed):
        detail = grammar.questions.create_question(db, question_data("CHOICE_ONE"))

        assert redis_client.exists(f"grammar_question:{detail.id}:uncomplete:1") == 1
        doc = last_indexed()
        assert doc["id"] == str(detail.id)
        assert doc["status"] == "uncomplete"
        assert doc["version"] == 1

    def test_index_created_on_first_upsert(self, db, grammar, es_client):
        es_client.indices.exists.return_value = False
        grammar.questions.create_question(db, question_data("CHOICE_ONE"))

        es_client.indices.create.assert_called_once()
        assert es_client.indices.create.call_args.kwargs["index"] == "grammar_questions"

    def test_cache_failure_absorbed(self, db, es_client, health):
        broken = MagicMock()
        broken.set.side_effect = RedisConnectionError("connection refused")
        updator = create_question_updator(GRAMMAR, cache=RedisCache(broken), search_client=es_client, health=health)
        services = build_grammar_services(updator)

        detail = services.questions.create_question(db, question_data("CHOICE_ONE"))
        result = updator.update_cache_and_search(db, detail.id)

        assert result.cache_synced is False
        assert result.search_synced is True
        assert any(err.startswith("cache") for err in result.errors)
        broken.delete.assert_called_with(f"grammar_question:{detail.id}")

    def test_failed_eviction_is_absorbed(self, db, es_client, health):
        broken = MagicMock()
        broken.set.side_effect = RedisConnectionError("connection refused")
        broken.delete.side_effect = RedisConnectionError("connection refused")
        updator = create_question_updator(GRAMMAR, cache=RedisCache(broken), search_client=es_client, health=health)

        detail = build_grammar_services(updator).questions.create_question(db, question_data("CHOICE_ONE"))

        assert detail.version == 1
        assert es_client.index.called

    def test_search_failure_surfaces_on_create_only(self, db, grammar, grammar_updator, es_client):
        es_client.index.side_effect = ESConnectionError("search down")

        with pytest.raises(TransportError):
            grammar.questions.create_question(db, question_data("CHOICE_ONE"))

        # The row is durable even though indexing failed
        question = db.query(GrammarQuestion).one()
        detail = grammar.questions.update_question_field(db, question.id, "instruction", "Choose wisely.")
        assert detail.version == 2

        result = grammar_updator.update_cache_and_search(db, question.id)
        assert result.search_synced is False
        assert result.cache_synced is True

    def test_unusable_search_is_skipped(self, db, grammar, es_client, health):
        health.set_search_usable(False)
        detail = grammar.questions.create_question(db, question_data("CHOICE_ONE"))

        assert detail.version == 1
        es_client.index.assert_not_called()

    def test_unknown_type_aborts_before_publishing(self, db, grammar_updator, redis_client, es_client):
        question = _insert_raw_question(db, "MATCHING")
        with pytest.raises(UnknownTypeError):
            grammar_updator.update_cache_and_search(db, question.id)

        assert list(redis_client.scan_iter()) == []
        es_client.index.assert_not_called()

    def test_remove_is_best_effort(self, db, grammar, grammar_updator, es_client, redis_client):
        detail = grammar.questions.create_question(db, question_data("CHOICE_ONE"))
        es_client.options.return_value.delete.side_effect = ESConnectionError("search down")

        result = grammar_updator.remove(detail.id)

        assert result.cache_synced is True
        assert result.search_synced is False
        assert list(redis_client.scan_iter(match=f"grammar_question:{detail.id}*")) == []

    def test_speaking_domain_uses_its_own_prefix(self, db, speaking, redis_client, last_indexed):
        detail = speaking.questions.create_question(db, question_data("CONVERSATIONAL_OPEN"))
        assert redis_client.exists(f"speaking_question:{detail.id}:uncomplete:1") == 1
        assert last_indexed()["type"] == "CONVERSATIONAL_OPEN"
        assert SPEAKING.index_name == "speaking_questions"
