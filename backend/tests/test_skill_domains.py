"""Tests for the listening, reading and writing domains end to end."""

import pytest

from app.core.app_exceptions import ValidationError
from app.models.listening import ListeningChoiceMultiOption, ListeningQuestion
from app.models.writing import WritingSentenceCompletion
from app.questions.builder import build_question_detail
from app.questions.domains import get_domain
from app.questions.listening import LISTENING
from app.questions.reading import READING
from app.search.question_index import build_question_index_mapping
from app.search.question_search import decode_search_hit
from tests.helpers.seed import listening_data, question_data, reading_data


class TestListening:
    """Audio parent fields and the listening child families."""

    def test_create_keeps_audio_and_transcript(self, db, listening, last_indexed):
        detail = listening.questions.create_question(db, listening_data("MAP_LABELLING"))

        assert detail.audio_urls == ["https://cdn.example.com/audio/station.mp3"]
        assert detail.transcript.startswith("The next train")
        doc = last_indexed()
        assert doc["audio_urls"] == detail.audio_urls
        assert doc["transcript"] == detail.transcript

    def test_create_requires_audio(self, db, listening):
        with pytest.raises(ValidationError):
            listening.questions.create_question(db, listening_data("MATCHING", audio_urls=[]))
        with pytest.raises(ValidationError):
            listening.questions.create_question(db, question_data("MATCHING"))
        assert db.query(ListeningQuestion).count() == 0

    def test_cached_read_matches_fresh_build(self, db, listening):
        detail = listening.questions.create_question(db, listening_data("MATCHING"))

        cached = listening.questions.get_question_detail(db, detail.id)

        assert cached == build_question_detail(db, LISTENING, detail.id)
        assert cached.transcript == detail.transcript

    def test_update_domain_field_bumps_version(self, db, listening):
        detail = listening.questions.create_question(db, listening_data("MATCHING"))

        updated = listening.questions.update_question_field(db, detail.id, "transcript", "Mind the gap.")

        assert updated.version == 2
        assert updated.transcript == "Mind the gap."

    def test_update_rejects_empty_audio(self, db, listening):
        detail = listening.questions.create_question(db, listening_data("MATCHING"))
        with pytest.raises(ValidationError):
            listening.questions.update_question_field(db, detail.id, "audio_urls", [])

    def test_map_labelling_completes_with_two_rows(self, db, listening, last_indexed):
        detail = listening.questions.create_question(db, listening_data("MAP_LABELLING"))
        for label in ("Library", "Car park"):
            listening.map_labellings.create(
                db,
                {"listening_question_id": detail.id, "question": "Point A", "answer": label, "explain": "e"},
            )

        assert last_indexed()["status"] == "complete"
        assert listening.questions.get_question_detail(db, detail.id).payload.kind == "MAP_LABELLING"

    def test_choice_multi_keeps_several_correct(self, db, listening, last_indexed):
        detail = listening.questions.create_question(db, listening_data("CHOICE_MULTI"))
        choice = listening.choice_multi_questions.create(
            db, {"listening_question_id": detail.id, "question": "Which two trains?", "explain": "e"}
        )
        for text, correct in (("Leeds", True), ("York", True), ("Hull", False)):
            listening.choice_multi_options.create(
                db,
                {"listening_choice_multi_question_id": choice.id, "options": text, "is_correct": correct},
            )

        correct = db.query(ListeningChoiceMultiOption).filter(ListeningChoiceMultiOption.is_correct.is_(True))
        assert correct.count() == 2
        assert last_indexed()["status"] == "complete"

    def test_choice_one_demotes_previous_correct(self, db, listening):
        detail = listening.questions.create_question(db, listening_data("CHOICE_ONE"))
        choice = listening.choice_one_questions.create(
            db, {"listening_question_id": detail.id, "question": "Which platform?", "explain": "e"}
        )
        first = listening.choice_one_options.create(
            db, {"listening_choice_one_question_id": choice.id, "options": "4", "is_correct": True}
        )
        listening.choice_one_options.create(
            db, {"listening_choice_one_question_id": choice.id, "options": "5", "is_correct": True}
        )

        assert listening.choice_one_options.get(db, first.id).is_correct is False

    def test_purge_removes_children(self, db, listening):
        detail = listening.questions.create_question(db, listening_data("CHOICE_MULTI"))
        choice = listening.choice_multi_questions.create(
            db, {"listening_question_id": detail.id, "question": "Q", "explain": "e"}
        )
        listening.choice_multi_options.create(
            db, {"listening_choice_multi_question_id": choice.id, "options": "A", "is_correct": True}
        )

        summary = listening.questions.purge_domain(db)

        assert summary["questions"] == 1
        assert db.query(ListeningChoiceMultiOption).count() == 0


class TestReading:
    """Title/passages parent fields and the reading child families."""

    def test_true_false_answers_are_constrained(self, db, reading):
        detail = reading.questions.create_question(db, reading_data("TRUE_FALSE"))
        with pytest.raises(ValidationError):
            reading.true_falses.create(
                db, {"reading_question_id": detail.id, "question": "Bees sleep.", "answer": "MAYBE", "explain": "e"}
            )

        row = reading.true_falses.create(
            db, {"reading_question_id": detail.id, "question": "Bees sleep.", "answer": "NOT GIVEN", "explain": "e"}
        )
        assert row.answer == "NOT GIVEN"

    def test_true_false_completes_with_two_statements(self, db, reading, last_indexed):
        detail = reading.questions.create_question(db, reading_data("TRUE_FALSE"))
        for answer in ("TRUE", "FALSE"):
            reading.true_falses.create(
                db, {"reading_question_id": detail.id, "question": "S", "answer": answer, "explain": "e"}
            )
        assert last_indexed()["status"] == "complete"

    def test_matching_completes_with_first_row(self, db, reading, last_indexed):
        detail = reading.questions.create_question(db, reading_data("MATCHING"))
        assert last_indexed()["status"] == "uncomplete"

        reading.matchings.create(
            db, {"reading_question_id": detail.id, "question": "Paragraph A", "answer": "ii", "explain": "e"}
        )
        assert last_indexed()["status"] == "complete"

    def test_update_passages(self, db, reading):
        detail = reading.questions.create_question(db, reading_data("MATCHING"))

        updated = reading.questions.update_question_field(db, detail.id, "passages", ["Only one passage now."])

        assert updated.passages == ["Only one passage now."]
        assert updated.version == 2
        with pytest.raises(ValidationError):
            reading.questions.update_question_field(db, detail.id, "title", "   ")

    def test_search_hit_restores_parent_fields(self, db, reading, last_indexed):
        reading.questions.create_question(db, reading_data("TRUE_FALSE"))
        doc = last_indexed()

        item = decode_search_hit(READING, {"_id": doc["id"], "_source": doc})

        assert item.question.title == "Bees in winter"
        assert item.question.passages == doc["passages"]


class TestWriting:
    """Word-range checks on writing rows."""

    def _sentence(self, question_id, **overrides):
        data = {
            "writing_question_id": question_id,
            "example_sentence": "Although it rained, we went out.",
            "given_part_sentence": "Although it rained,",
            "position": "start",
            "required_words": ["although"],
            "explain": "Concession clause.",
            "min_words": 5,
            "max_words": 12,
        }
        data.update(overrides)
        return data

    def test_create_rejects_inverted_range(self, db, writing):
        detail = writing.questions.create_question(db, question_data("SENTENCE_COMPLETION"))
        with pytest.raises(ValidationError):
            writing.sentence_completions.create(db, self._sentence(detail.id, min_words=10, max_words=3))
        with pytest.raises(ValidationError):
            writing.sentence_completions.create(db, self._sentence(detail.id, position="middle"))

    def test_update_checks_range_against_stored_row(self, db, writing):
        detail = writing.questions.create_question(db, question_data("SENTENCE_COMPLETION"))
        row = writing.sentence_completions.create(db, self._sentence(detail.id))

        with pytest.raises(ValidationError):
            writing.sentence_completions.update(db, row.id, {"max_words": 4})

        db.expire_all()
        assert db.get(WritingSentenceCompletion, row.id).max_words == 12
        assert writing.sentence_completions.update(db, row.id, {"max_words": 5}).max_words == 5

    def test_essay_completes_question(self, db, writing, last_indexed):
        detail = writing.questions.create_question(db, question_data("ESSAY"))
        writing.essays.create(
            db,
            {
                "writing_question_id": detail.id,
                "essay_type": "opinion",
                "required_points": ["state a view"],
                "min_words": 150,
                "max_words": 250,
                "sample_essay": "Some people believe...",
                "explain": "Intro, body, conclusion.",
            },
        )
        assert last_indexed()["status"] == "complete"
        assert get_domain("writing").index_name == "writing_questions"


def test_index_mapping_includes_parent_fields():
    mapping = build_question_index_mapping(LISTENING.search_field_names(), LISTENING.parent_field_mappings())
    assert mapping["properties"]["transcript"]["type"] == "text"
    assert mapping["properties"]["audio_urls"] == {"type": "keyword"}
    assert mapping["properties"]["map_labelling"]["type"] == "text"
