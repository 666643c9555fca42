"""Grammar domain: child stores, payload loaders and completion rules."""

from uuid import UUID

from sqlalchemy.orm import Session

from app.models.grammar import (
    GrammarChoiceOneOption,
    GrammarChoiceOneQuestion,
    GrammarErrorIdentification,
    GrammarFillInTheBlankAnswer,
    GrammarFillInTheBlankQuestion,
    GrammarQuestion,
    GrammarQuestionType,
    GrammarSentenceTransformation,
)
from app.questions.completion import choice_one_ready
from app.questions.registry import SkillDomain, VariantSpec, dump_search_value, is_present
from app.schemas.grammar import (
    ChoiceOneOptionOut,
    ChoiceOnePayload,
    ChoiceOneQuestionOut,
    ErrorIdentificationPayload,
    FillInTheBlankAnswerOut,
    FillInTheBlankPayload,
    FillInTheBlankQuestionOut,
    GrammarQuestionDetail,
    SentenceTransformationPayload,
)
from app.services.variant_store import VariantStore

fill_in_the_blank_question_store = VariantStore(
    GrammarFillInTheBlankQuestion, "grammar_question_id", singleton=True
)
fill_in_the_blank_answer_store = VariantStore(
    GrammarFillInTheBlankAnswer, "grammar_fill_in_the_blank_question_id"
)
choice_one_question_store = VariantStore(GrammarChoiceOneQuestion, "grammar_question_id", singleton=True)
choice_one_option_store = VariantStore(GrammarChoiceOneOption, "grammar_choice_one_question_id")
error_identification_store = VariantStore(GrammarErrorIdentification, "grammar_question_id", singleton=True)
sentence_transformation_store = VariantStore(
    GrammarSentenceTransformation, "grammar_question_id", singleton=True
)


def load_fill_in_the_blank(db: Session, question_id: UUID) -> FillInTheBlankPayload | None:
    blank = fill_in_the_blank_question_store.first_by_parent(db, question_id)
    if blank is None:
        return None
    answers = fill_in_the_blank_answer_store.list_by_parent(db, blank.id)
    return FillInTheBlankPayload(
        question=FillInTheBlankQuestionOut.model_validate(blank),
        answers=[FillInTheBlankAnswerOut.model_validate(a) for a in answers],
    )


def load_choice_one(db: Session, question_id: UUID) -> ChoiceOnePayload | None:
    choice = choice_one_question_store.first_by_parent(db, question_id)
    if choice is None:
        return None
    options = choice_one_option_store.list_by_parent(db, choice.id)
    return ChoiceOnePayload(
        question=ChoiceOneQuestionOut.model_validate(choice),
        options=[ChoiceOneOptionOut.model_validate(o) for o in options],
    )


def load_error_identification(db: Session, question_id: UUID) -> ErrorIdentificationPayload | None:
    row = error_identification_store.first_by_parent(db, question_id)
    return ErrorIdentificationPayload.model_validate(row) if row is not None else None


def load_sentence_transformation(db: Session, question_id: UUID) -> SentenceTransformationPayload | None:
    row = sentence_transformation_store.first_by_parent(db, question_id)
    return SentenceTransformationPayload.model_validate(row) if row is not None else None


def fill_in_the_blank_complete(payload: FillInTheBlankPayload) -> bool:
    return len(payload.answers) > 0


def choice_one_complete(payload: ChoiceOnePayload) -> bool:
    return choice_one_ready(payload.options)


GRAMMAR = SkillDomain("grammar", GrammarQuestion, GrammarQuestionDetail)

GRAMMAR.register(
    VariantSpec(
        kind=GrammarQuestionType.FILL_IN_THE_BLANK.value,
        loader=load_fill_in_the_blank,
        is_complete=fill_in_the_blank_complete,
        search_fields={
            "fill_in_the_blank_question": lambda p: dump_search_value(p.question),
            "fill_in_the_blank_answers": lambda p: dump_search_value(p.answers),
        },
        child_models=(GrammarFillInTheBlankQuestion, GrammarFillInTheBlankAnswer),
    )
)
GRAMMAR.register(
    VariantSpec(
        kind=GrammarQuestionType.CHOICE_ONE.value,
        loader=load_choice_one,
        is_complete=choice_one_complete,
        search_fields={
            "choice_one_question": lambda p: dump_search_value(p.question),
            "choice_one_options": lambda p: dump_search_value(p.options),
        },
        child_models=(GrammarChoiceOneQuestion, GrammarChoiceOneOption),
    )
)
GRAMMAR.register(
    VariantSpec(
        kind=GrammarQuestionType.ERROR_IDENTIFICATION.value,
        loader=load_error_identification,
        is_complete=is_present,
        search_fields={"error_identification": dump_search_value},
        child_models=(GrammarErrorIdentification,),
    )
)
GRAMMAR.register(
    VariantSpec(
        kind=GrammarQuestionType.SENTENCE_TRANSFORMATION.value,
        loader=load_sentence_transformation,
        is_complete=is_present,
        search_fields={"sentence_transformation": dump_search_value},
        child_models=(GrammarSentenceTransformation,),
    )
)
