"""Reading domain: child stores, payload loaders and completion rules."""

from app.models.reading import (
    ReadingChoiceMultiOption,
    ReadingChoiceMultiQuestion,
    ReadingChoiceOneOption,
    ReadingChoiceOneQuestion,
    ReadingFillInTheBlankAnswer,
    ReadingFillInTheBlankQuestion,
    ReadingMatching,
    ReadingQuestion,
    ReadingQuestionType,
    ReadingTrueFalse,
)
from app.questions.completion import choice_multi_ready, choice_one_ready
from app.questions.loaders import header_loader, list_loader
from app.questions.registry import ParentField, SkillDomain, VariantSpec, dump_search_value
from app.schemas.reading import (
    ChoiceMultiOptionOut,
    ChoiceMultiPayload,
    ChoiceOneOptionOut,
    ChoiceOnePayload,
    ChoiceQuestionOut,
    FillInTheBlankAnswerOut,
    FillInTheBlankPayload,
    FillInTheBlankQuestionOut,
    MatchingOut,
    MatchingPayload,
    ReadingQuestionCreate,
    ReadingQuestionDetail,
    TrueFalseOut,
    TrueFalsePayload,
    validate_passages,
    validate_title,
)
from app.services.variant_store import VariantStore

fill_in_the_blank_question_store = VariantStore(
    ReadingFillInTheBlankQuestion, "reading_question_id", singleton=True
)
fill_in_the_blank_answer_store = VariantStore(ReadingFillInTheBlankAnswer, "reading_fill_in_the_blank_question_id")
choice_one_question_store = VariantStore(ReadingChoiceOneQuestion, "reading_question_id", singleton=True)
choice_one_option_store = VariantStore(ReadingChoiceOneOption, "reading_choice_one_question_id")
choice_multi_question_store = VariantStore(ReadingChoiceMultiQuestion, "reading_question_id", singleton=True)
choice_multi_option_store = VariantStore(ReadingChoiceMultiOption, "reading_choice_multi_question_id")
matching_store = VariantStore(ReadingMatching, "reading_question_id")
true_false_store = VariantStore(ReadingTrueFalse, "reading_question_id")

MIN_BLANK_ANSWERS = 2
MIN_TRUE_FALSE_STATEMENTS = 2


def fill_in_the_blank_complete(payload: FillInTheBlankPayload) -> bool:
    return len(payload.answers) >= MIN_BLANK_ANSWERS


def matching_complete(payload: MatchingPayload) -> bool:
    """Any matching row makes the question presentable."""
    return len(payload.items) > 0


def true_false_complete(payload: TrueFalsePayload) -> bool:
    return len(payload.items) >= MIN_TRUE_FALSE_STATEMENTS


READING = SkillDomain(
    "reading",
    ReadingQuestion,
    ReadingQuestionDetail,
    create_model=ReadingQuestionCreate,
    parent_fields={
        "title": ParentField(validate_title, {"type": "text", "analyzer": "case_insensitive"}),
        "passages": ParentField(validate_passages, {"type": "text", "analyzer": "case_insensitive"}),
    },
)

READING.register(
    VariantSpec(
        kind=ReadingQuestionType.FILL_IN_THE_BLANK.value,
        loader=header_loader(
            fill_in_the_blank_question_store,
            fill_in_the_blank_answer_store,
            FillInTheBlankQuestionOut,
            FillInTheBlankAnswerOut,
            FillInTheBlankPayload,
            "answers",
        ),
        is_complete=fill_in_the_blank_complete,
        search_fields={
            "fill_in_the_blank_question": lambda p: dump_search_value(p.question),
            "fill_in_the_blank_answers": lambda p: dump_search_value(p.answers),
        },
        child_models=(ReadingFillInTheBlankQuestion, ReadingFillInTheBlankAnswer),
    )
)
READING.register(
    VariantSpec(
        kind=ReadingQuestionType.CHOICE_ONE.value,
        loader=header_loader(
            choice_one_question_store,
            choice_one_option_store,
            ChoiceQuestionOut,
            ChoiceOneOptionOut,
            ChoiceOnePayload,
            "options",
        ),
        is_complete=lambda p: choice_one_ready(p.options),
        search_fields={
            "choice_one_question": lambda p: dump_search_value(p.question),
            "choice_one_options": lambda p: dump_search_value(p.options),
        },
        child_models=(ReadingChoiceOneQuestion, ReadingChoiceOneOption),
    )
)
READING.register(
    VariantSpec(
        kind=ReadingQuestionType.CHOICE_MULTI.value,
        loader=header_loader(
            choice_multi_question_store,
            choice_multi_option_store,
            ChoiceQuestionOut,
            ChoiceMultiOptionOut,
            ChoiceMultiPayload,
            "options",
        ),
        is_complete=lambda p: choice_multi_ready(p.options),
        search_fields={
            "choice_multi_question": lambda p: dump_search_value(p.question),
            "choice_multi_options": lambda p: dump_search_value(p.options),
        },
        child_models=(ReadingChoiceMultiQuestion, ReadingChoiceMultiOption),
    )
)
READING.register(
    VariantSpec(
        kind=ReadingQuestionType.MATCHING.value,
        loader=list_loader(matching_store, MatchingOut, MatchingPayload),
        is_complete=matching_complete,
        search_fields={"matching": lambda p: dump_search_value(p.items)},
        child_models=(ReadingMatching,),
    )
)
READING.register(
    VariantSpec(
        kind=ReadingQuestionType.TRUE_FALSE.value,
        loader=list_loader(true_false_store, TrueFalseOut, TrueFalsePayload),
        is_complete=true_false_complete,
        search_fields={"true_false": lambda p: dump_search_value(p.items)},
        child_models=(ReadingTrueFalse,),
    )
)
