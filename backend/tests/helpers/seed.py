"""Test seed helpers for creating question data."""

from typing import Any

from sqlalchemy.orm import Session


def question_data(question_type: str, **overrides: Any) -> dict[str, Any]:
    """Valid create payload with deterministic defaults."""
    data: dict[str, Any] = {
        "type": question_type,
        "topic": ["tenses", "verbs"],
        "instruction": "Complete the sentence.",
        "image_urls": ["https://cdn.example.com/img/1.png"],
        "max_time": 120,
    }
    data.update(overrides)
    return data


def create_fill_in_the_blank(grammar, db: Session, answers: int = 0):
    """Grammar FILL_IN_THE_BLANK question with a blank-question and `answers` answers."""
    detail = grammar.questions.create_question(db, question_data("FILL_IN_THE_BLANK"))
    blank = grammar.fill_in_the_blank_questions.create(
        db, {"grammar_question_id": detail.id, "question": "She ___ to school every day."}
    )
    for i in range(answers):
        grammar.fill_in_the_blank_answers.create(
            db,
            {
                "grammar_fill_in_the_blank_question_id": blank.id,
                "answer": f"goes-{i}",
                "explain": "Third person singular takes -es.",
            },
        )
    return detail, blank


def create_choice_one(grammar, db: Session):
    """Grammar CHOICE_ONE question with its choice-question and no options."""
    detail = grammar.questions.create_question(db, question_data("CHOICE_ONE"))
    choice = grammar.choice_one_questions.create(
        db,
        {"grammar_question_id": detail.id, "question": "Pick the past tense of 'go'.", "explain": "Irregular."},
    )
    return detail, choice


def add_option(grammar, db: Session, choice_id, text: str, is_correct: bool = False):
    return grammar.choice_one_options.create(
        db,
        {"grammar_choice_one_question_id": choice_id, "options": text, "is_correct": is_correct},
    )


def listening_data(question_type: str, **overrides: Any) -> dict[str, Any]:
    defaults = {
        "topic": ["travel"],
        "instruction": "Listen and answer.",
        "audio_urls": ["https://cdn.example.com/audio/station.mp3"],
        "transcript": "The next train to Leeds departs from platform four.",
    }
    return question_data(question_type, **{**defaults, **overrides})


def reading_data(question_type: str, **overrides: Any) -> dict[str, Any]:
    defaults = {
        "topic": ["science"],
        "instruction": "Read the passage and answer.",
        "title": "Bees in winter",
        "passages": ["Honeybees cluster to keep warm.", "The queen stays at the centre."],
    }
    return question_data(question_type, **{**defaults, **overrides})
