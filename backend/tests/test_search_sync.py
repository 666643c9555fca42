"""Tests for search documents, query building and the search synchronizer."""

import json
from unittest.mock import MagicMock

import pytest
from elasticsearch import BadRequestError
from elasticsearch import ConnectionError as ESConnectionError

from app.core.app_exceptions import TransportError
from app.questions.grammar import GRAMMAR
from app.questions.speaking import SPEAKING
from app.schemas.question import QuestionSearchFilter
from app.search.question_index import QuestionSearchIndex, build_question_index_mapping
from app.search.question_search import (
    QuestionSearchSynchronizer,
    build_search_document,
    build_search_query,
    decode_search_hit,
)
from app.system.health import BackendHealth
from tests.helpers.seed import question_data


class TestSearchDocument:
    """Denormalized document shape."""

    def test_every_variant_field_present(self, db, grammar):
        detail = grammar.questions.create_question(db, question_data("CHOICE_ONE"))
        doc = build_search_document(GRAMMAR, detail, "uncomplete")

        for name in GRAMMAR.search_field_names():
            assert doc[name] == ""
        assert doc["payload"] is None
        assert doc["status"] == "uncomplete"
        assert doc["topic"] == detail.topic

    def test_variant_fields_hold_json(self, db, grammar, last_indexed):
        detail = grammar.questions.create_question(db, question_data("ERROR_IDENTIFICATION"))
        grammar.error_identifications.create(
            db,
            {
                "grammar_question_id": detail.id,
                "error_sentence": "She don't like tea.",
                "error_word": "don't",
                "correct_word": "doesn't",
                "explain": "Third person singular.",
            },
        )

        doc = last_indexed()
        assert doc["status"] == "complete"
        assert json.loads(doc["error_identification"])["correct_word"] == "doesn't"
        assert doc["sentence_transformation"] == ""
        assert doc["payload"]["kind"] == "ERROR_IDENTIFICATION"

    def test_speaking_list_variant(self, db, speaking, last_indexed):
        detail = speaking.questions.create_question(db, question_data("WORD_REPETITION"))
        speaking.word_repetitions.create(
            db, {"speaking_question_id": detail.id, "word": "thorough", "mean": "complete"}
        )

        doc = last_indexed()
        assert [item["word"] for item in json.loads(doc["word_repetition"])] == ["thorough"]
        assert doc["status"] == "complete"


class TestSearchQuery:
    """Filter -> query DSL."""

    def test_empty_filter_matches_all(self):
        query = build_search_query(GRAMMAR, QuestionSearchFilter())
        assert query["query"] == {"bool": {"must": [], "filter": []}}
        assert query["from"] == 0
        assert query["size"] == 20

    def test_paging(self):
        query = build_search_query(GRAMMAR, QuestionSearchFilter(page=3, page_size=10))
        assert query["from"] == 20
        assert query["size"] == 10

    def test_topic_uses_keyword_terms(self):
        query = build_search_query(GRAMMAR, QuestionSearchFilter(topic="tenses,verbs"))
        assert {"terms": {"topic.keyword": ["tenses", "verbs"]}} in query["query"]["bool"]["must"]

    def test_status_is_a_filter(self):
        query = build_search_query(GRAMMAR, QuestionSearchFilter(status="complete"))
        assert query["query"]["bool"]["filter"] == [{"term": {"status": "complete"}}]

    def test_metadata_scoped_to_type(self):
        query = build_search_query(GRAMMAR, QuestionSearchFilter(type="CHOICE_ONE", metadata="went"))
        multi_match = query["query"]["bool"]["must"][-1]["multi_match"]
        assert multi_match == {"query": "went", "fields": ["choice_one_question", "choice_one_options"]}

    def test_metadata_without_type_searches_all_fields(self):
        query = build_search_query(SPEAKING, QuestionSearchFilter(metadata="coffee"))
        multi_match = query["query"]["bool"]["must"][0]["multi_match"]
        assert multi_match["fields"] == SPEAKING.search_field_names()
        assert "conversational_repetition_qas" in multi_match["fields"]

    def test_metadata_with_unknown_type_adds_no_clause(self):
        query = build_search_query(GRAMMAR, QuestionSearchFilter(type="MATCHING", metadata="x"))
        assert query["query"]["bool"]["must"] == [{"match": {"type": "MATCHING"}}]


class TestSearchSynchronizer:
    """Gating, hit decoding, index lifecycle."""

    def _sync(self, es_client, health=None) -> QuestionSearchSynchronizer:
        index = QuestionSearchIndex(es_client, GRAMMAR.index_name, GRAMMAR.search_field_names())
        return QuestionSearchSynchronizer(GRAMMAR, index, health or BackendHealth(True, True))

    def test_search_unusable_raises(self, es_client):
        sync = self._sync(es_client, BackendHealth(cache_usable=True, search_usable=False))
        with pytest.raises(TransportError):
            sync.search(QuestionSearchFilter())
        es_client.search.assert_not_called()

    def test_search_error_becomes_transport_error(self, es_client):
        es_client.search.side_effect = ESConnectionError("search down")
        with pytest.raises(TransportError):
            self._sync(es_client).search(QuestionSearchFilter())

    def test_undecodable_hits_are_skipped(self, db, grammar, es_client, last_indexed):
        grammar.questions.create_question(db, question_data("CHOICE_ONE"))
        good = last_indexed()
        es_client.search.return_value = {
            "hits": {
                "total": {"value": 2, "relation": "eq"},
                "hits": [{"_id": "broken", "_source": {"type": "CHOICE_ONE"}}, {"_id": good["id"], "_source": good}],
            }
        }

        page = self._sync(es_client).search(QuestionSearchFilter(page_size=5))

        assert page.total == 2
        assert [str(item.question.id) for item in page.items] == [good["id"]]
        assert page.page_size == 5

    def test_decode_restores_payload(self, db, grammar, last_indexed):
        detail = grammar.questions.create_question(db, question_data("SENTENCE_TRANSFORMATION"))
        grammar.sentence_transformations.create(
            db,
            {
                "grammar_question_id": detail.id,
                "original_sentence": "They built the bridge.",
                "beginning_word": None,
                "example_correct_sentence": "The bridge was built.",
                "explain": "Passive voice.",
            },
        )
        doc = last_indexed()

        item = decode_search_hit(GRAMMAR, {"_id": doc["id"], "_source": doc})

        assert item.status == "complete"
        assert item.question.payload.kind == "SENTENCE_TRANSFORMATION"
        assert item.question.payload.beginning_word is None

    def test_index_created_once(self, es_client, monkeypatch):
        es_client.indices.exists.return_value = False
        monkeypatch.setattr("app.search.question_search.build_search_document", lambda *a: {"id": "q-1"})
        sync = self._sync(es_client)

        sync.upsert(MagicMock(), complete=False)
        sync.upsert(MagicMock(), complete=False)

        es_client.indices.create.assert_called_once()
        assert es_client.index.call_count == 2

    def test_drop_resets_index_state(self, es_client):
        sync = self._sync(es_client)
        sync._index_ready = True

        assert sync.drop() is True
        assert sync._index_ready is False
        es_client.options.assert_called_with(ignore_status=404)


class TestQuestionSearchIndex:
    def test_creation_race_is_not_an_error(self, es_client):
        es_client.indices.exists.return_value = False
        es_client.indices.create.side_effect = BadRequestError(
            "resource_already_exists_exception", meta=MagicMock(status=400), body={}
        )
        index = QuestionSearchIndex(es_client, "grammar_questions", [])
        assert index.ensure_index() is False

    def test_mapping_disables_payload_indexing(self):
        mapping = build_question_index_mapping(["word_repetition"])
        assert mapping["properties"]["payload"] == {"type": "object", "enabled": False}
        assert mapping["properties"]["word_repetition"]["type"] == "text"
        assert mapping["properties"]["topic"]["fields"]["keyword"]["type"] == "keyword"

    def test_ping_failure_is_false(self, es_client):
        es_client.ping.side_effect = ESConnectionError("down")
        assert QuestionSearchIndex(es_client, "grammar_questions", []).ping() is False
