"""Tests for child-entity services: exclusivity, singletons, parent checks, re-sync."""

from unittest.mock import patch
from uuid import uuid4

import pytest

from app.core.app_exceptions import ConflictError, NotFoundError, ValidationError
from app.core.config import settings
from app.models.grammar import GrammarChoiceOneOption, GrammarQuestion
from tests.helpers.seed import add_option, create_choice_one, create_fill_in_the_blank, question_data


def _correct_options(db, choice_id) -> list[GrammarChoiceOneOption]:
    db.expire_all()
    return (
        db.query(GrammarChoiceOneOption)
        .filter(
            GrammarChoiceOneOption.grammar_choice_one_question_id == choice_id,
            GrammarChoiceOneOption.is_correct.is_(True),
        )
        .all()
    )


class TestChoiceOneExclusivity:
    """At most one option per choice-question is marked correct."""

    def test_creating_second_correct_option_demotes_first(self, db, grammar):
        _, choice = create_choice_one(grammar, db)
        option_a = add_option(grammar, db, choice.id, "went", is_correct=True)
        option_b = add_option(grammar, db, choice.id, "goed", is_correct=True)

        correct = _correct_options(db, choice.id)
        assert [o.id for o in correct] == [option_b.id]
        assert grammar.choice_one_options.get(db, option_a.id).is_correct is False

    def test_updating_option_to_correct_demotes_others(self, db, grammar):
        _, choice = create_choice_one(grammar, db)
        option_a = add_option(grammar, db, choice.id, "went", is_correct=True)
        option_b = add_option(grammar, db, choice.id, "gone")

        grammar.choice_one_options.update(db, option_b.id, {"is_correct": True})

        assert [o.id for o in _correct_options(db, choice.id)] == [option_b.id]
        assert grammar.choice_one_options.get(db, option_a.id).is_correct is False

    def test_re_marking_the_correct_option_keeps_it(self, db, grammar):
        _, choice = create_choice_one(grammar, db)
        option_a = add_option(grammar, db, choice.id, "went", is_correct=True)

        grammar.choice_one_options.update(db, option_a.id, {"is_correct": True, "options": "went (past)"})

        assert [o.id for o in _correct_options(db, choice.id)] == [option_a.id]

    def test_incorrect_option_does_not_touch_existing(self, db, grammar):
        _, choice = create_choice_one(grammar, db)
        option_a = add_option(grammar, db, choice.id, "went", is_correct=True)
        add_option(grammar, db, choice.id, "goed")

        assert [o.id for o in _correct_options(db, choice.id)] == [option_a.id]

    def test_completion_follows_options(self, db, grammar, redis_client, last_indexed):
        detail, choice = create_choice_one(grammar, db)
        add_option(grammar, db, choice.id, "went", is_correct=True)
        assert last_indexed()["status"] == "uncomplete"

        add_option(grammar, db, choice.id, "goed")
        assert last_indexed()["status"] == "complete"
        assert list(redis_client.scan_iter(match=f"grammar_question:{detail.id}:*")) == [
            f"grammar_question:{detail.id}:complete:1"
        ]


class TestSingletonVariants:
    """Second singleton row for one question is a conflict."""

    def test_second_error_identification_conflicts(self, db, grammar):
        detail = grammar.questions.create_question(db, question_data("ERROR_IDENTIFICATION"))
        row = {
            "grammar_question_id": detail.id,
            "error_sentence": "He go home.",
            "error_word": "go",
            "correct_word": "goes",
            "explain": "Third person singular.",
        }
        grammar.error_identifications.create(db, row)

        with pytest.raises(ConflictError) as exc_info:
            grammar.error_identifications.create(db, row)
        assert exc_info.value.status_code == 409
        assert len(grammar.error_identifications.list_by_parent(db, detail.id)) == 1

    def test_conversation_singleton_conflicts(self, db, speaking):
        detail = speaking.questions.create_question(db, question_data("CONVERSATIONAL_REPETITION"))
        row = {"speaking_question_id": detail.id, "title": "Cafe", "overview": "Ordering coffee"}
        speaking.conversational_repetitions.create(db, row)
        with pytest.raises(ConflictError):
            speaking.conversational_repetitions.create(db, row)


class TestParentChecks:
    """Parent existence and type acceptance."""

    def test_missing_parent_is_not_found(self, db, grammar):
        with pytest.raises(NotFoundError):
            grammar.choice_one_questions.create(
                db, {"grammar_question_id": uuid4(), "question": "q", "explain": "e"}
            )

    def test_missing_intermediate_parent_is_not_found(self, db, grammar):
        with pytest.raises(NotFoundError):
            grammar.fill_in_the_blank_answers.create(
                db, {"grammar_fill_in_the_blank_question_id": uuid4(), "answer": "a", "explain": "e"}
            )

    def test_child_of_wrong_type_is_rejected(self, db, grammar):
        detail = grammar.questions.create_question(db, question_data("ERROR_IDENTIFICATION"))
        with pytest.raises(ValidationError):
            grammar.choice_one_questions.create(
                db, {"grammar_question_id": detail.id, "question": "q", "explain": "e"}
            )

    def test_blank_child_fields_are_rejected(self, db, grammar):
        detail = grammar.questions.create_question(db, question_data("CHOICE_ONE"))
        with pytest.raises(ValidationError):
            grammar.choice_one_questions.create(
                db, {"grammar_question_id": detail.id, "question": "   ", "explain": "e"}
            )

    def test_update_missing_row_is_not_found(self, db, grammar):
        with pytest.raises(NotFoundError):
            grammar.choice_one_options.update(db, uuid4(), {"options": "x"})


class TestChildMutationSync:
    """Every child mutation republishes the owning question."""

    def test_fill_in_the_blank_scenario(self, db, grammar, redis_client, last_indexed):
        detail, blank = create_fill_in_the_blank(grammar, db, answers=0)
        assert last_indexed()["status"] == "uncomplete"
        assert grammar.questions.get_question_detail(db, detail.id).payload.answers == []

        grammar.fill_in_the_blank_answers.create(
            db,
            {"grammar_fill_in_the_blank_question_id": blank.id, "answer": "goes", "explain": "-es"},
        )

        assert last_indexed()["status"] == "complete"
        assert redis_client.exists(f"grammar_question:{detail.id}:uncomplete:1") == 0
        assert redis_client.exists(f"grammar_question:{detail.id}:complete:1") == 1

    def test_deleting_last_answer_reverts_to_uncomplete(self, db, grammar, last_indexed):
        detail, blank = create_fill_in_the_blank(grammar, db, answers=1)
        answer = grammar.fill_in_the_blank_answers.list_by_parent(db, blank.id)[0]

        grammar.fill_in_the_blank_answers.delete(db, answer.id)

        assert last_indexed()["status"] == "uncomplete"
        assert grammar.questions.get_question_detail(db, detail.id).payload.answers == []

    def test_child_mutation_keeps_version(self, db, grammar):
        detail, blank = create_fill_in_the_blank(grammar, db, answers=1)
        grammar.fill_in_the_blank_questions.update(db, blank.id, {"question": "They ___ late."})

        assert db.get(GrammarQuestion, detail.id).version == 1

    def test_child_mutation_bumps_version_when_enabled(self, db, grammar, redis_client):
        detail, blank = create_fill_in_the_blank(grammar, db, answers=0)
        with patch.object(settings, "BUMP_VERSION_ON_CHILD_MUTATION", True):
            grammar.fill_in_the_blank_questions.update(db, blank.id, {"question": "They ___ late."})

        db.expire_all()
        assert db.get(GrammarQuestion, detail.id).version == 2
        assert redis_client.exists(f"grammar_question:{detail.id}:uncomplete:2") == 1

    def test_nullable_field_can_be_cleared(self, db, grammar):
        detail = grammar.questions.create_question(db, question_data("SENTENCE_TRANSFORMATION"))
        row = grammar.sentence_transformations.create(
            db,
            {
                "grammar_question_id": detail.id,
                "original_sentence": "They built the bridge.",
                "beginning_word": "The",
                "example_correct_sentence": "The bridge was built.",
                "explain": "Passive voice.",
            },
        )
        updated = grammar.sentence_transformations.update(db, row.id, {"beginning_word": None})
        assert updated.beginning_word is None

    def test_speaking_conversation_needs_two_qas(self, db, speaking, last_indexed):
        detail = speaking.questions.create_question(db, question_data("CONVERSATIONAL_REPETITION"))
        conversation = speaking.conversational_repetitions.create(
            db, {"speaking_question_id": detail.id, "title": "Cafe", "overview": "Ordering coffee"}
        )
        qa = {
            "speaking_conversational_repetition_id": conversation.id,
            "question": "What would you like?",
            "answer": "A latte, please.",
            "mean_of_question": "m1",
            "mean_of_answer": "m2",
            "explain": "Polite request.",
        }
        speaking.conversational_repetition_qas.create(db, qa)
        assert last_indexed()["status"] == "uncomplete"

        speaking.conversational_repetition_qas.create(db, qa)
        assert last_indexed()["status"] == "complete"
