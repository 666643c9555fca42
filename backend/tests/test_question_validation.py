"""Tests for parent question input validation and field updates."""

import pytest

from app.core.app_exceptions import ValidationError
from app.models.grammar import GrammarQuestion
from app.models.listening import ListeningQuestion
from app.questions.versioning import apply_field_update, bump_version
from app.schemas.listening import validate_audio_urls, validate_transcript
from app.schemas.question import (
    MAX_IMAGE_URLS,
    QuestionCreate,
    QuestionSearchFilter,
    validate_image_urls,
    validate_max_time,
    validate_topic,
)
from app.schemas.reading import validate_passages
from app.services.question_service import validate_input
from tests.helpers.seed import question_data


class TestValidators:
    """Field validators shared by create and update."""

    def test_topic_deduplicates_preserving_order(self):
        assert validate_topic(["b", "a", "b"]) == ["b", "a"]

    @pytest.mark.parametrize("value", [[], None, ["  "], ["x" * 101], [1]])
    def test_topic_rejects_bad_values(self, value):
        with pytest.raises(ValueError):
            validate_topic(value)

    def test_image_urls_need_scheme_and_host(self):
        assert validate_image_urls(["https://a.example/x.png"]) == ["https://a.example/x.png"]
        with pytest.raises(ValueError):
            validate_image_urls(["/relative/path.png"])

    def test_image_urls_cap(self):
        urls = [f"https://a.example/{i}.png" for i in range(MAX_IMAGE_URLS + 1)]
        with pytest.raises(ValueError):
            validate_image_urls(urls)

    def test_audio_urls_require_one(self):
        assert validate_audio_urls(["https://a.example/1.mp3"]) == ["https://a.example/1.mp3"]
        with pytest.raises(ValueError):
            validate_audio_urls([])
        with pytest.raises(ValueError):
            validate_audio_urls(None)

    @pytest.mark.parametrize("value", [[], [""], ["ok", "  "], "not a list"])
    def test_passages_rejects_bad_values(self, value):
        with pytest.raises(ValueError):
            validate_passages(value)

    def test_max_time_accepts_whole_floats(self):
        assert validate_max_time(90.0) == 90
        assert validate_max_time(3600) == 3600

    @pytest.mark.parametrize("value", [29, 3601, 90.5, True, "60"])
    def test_max_time_rejects(self, value):
        with pytest.raises(ValueError):
            validate_max_time(value)

    def test_create_payload_errors_map_to_validation_error(self):
        with pytest.raises(ValidationError) as exc_info:
            validate_input(QuestionCreate, question_data("CHOICE_ONE", instruction=" "))
        assert exc_info.value.status_code == 422
        assert exc_info.value.details

    def test_search_filter_splits_comma_topics(self):
        search_filter = QuestionSearchFilter(topic="tenses, verbs,")
        assert search_filter.topic == ["tenses", "verbs"]


class TestFieldUpdate:
    """Version manager and the field updater."""

    def _question(self) -> GrammarQuestion:
        return GrammarQuestion(
            type="CHOICE_ONE", topic=["a"], instruction="old", image_urls=[], max_time=60, version=3
        )

    def test_bump_increments_by_one(self):
        question = bump_version(self._question())
        assert question.version == 4

    def test_apply_field_update_sets_and_bumps(self):
        question = apply_field_update(self._question(), "instruction", "new")
        assert question.instruction == "new"
        assert question.version == 4

    def test_unknown_field_is_rejected(self):
        question = self._question()
        with pytest.raises(ValidationError):
            apply_field_update(question, "version", 10)
        assert question.version == 3

    def test_invalid_value_is_rejected_without_bump(self):
        question = self._question()
        with pytest.raises(ValidationError):
            apply_field_update(question, "max_time", 5)
        assert question.version == 3
        assert question.max_time == 60

    def test_domain_fields_need_their_validators(self):
        question = ListeningQuestion(
            type="MATCHING",
            topic=["a"],
            instruction="old",
            image_urls=[],
            audio_urls=["https://a.example/1.mp3"],
            transcript="old",
            max_time=60,
            version=3,
        )
        with pytest.raises(ValidationError):
            apply_field_update(question, "transcript", "Hello.")

        apply_field_update(question, "transcript", "Hello.", {"transcript": validate_transcript})
        assert question.transcript == "Hello."
        assert question.version == 4
