"""Listening domain: child stores, payload loaders and completion rules."""

from app.models.listening import (
    ListeningChoiceMultiOption,
    ListeningChoiceMultiQuestion,
    ListeningChoiceOneOption,
    ListeningChoiceOneQuestion,
    ListeningFillInTheBlankAnswer,
    ListeningFillInTheBlankQuestion,
    ListeningMapLabelling,
    ListeningMatching,
    ListeningQuestion,
    ListeningQuestionType,
)
from app.questions.completion import choice_multi_ready, choice_one_ready
from app.questions.loaders import header_loader, list_loader
from app.questions.registry import ParentField, SkillDomain, VariantSpec, dump_search_value
from app.schemas.listening import (
    ChoiceMultiOptionOut,
    ChoiceMultiPayload,
    ChoiceOneOptionOut,
    ChoiceOnePayload,
    ChoiceQuestionOut,
    FillInTheBlankAnswerOut,
    FillInTheBlankPayload,
    FillInTheBlankQuestionOut,
    LabelledRowOut,
    ListeningQuestionCreate,
    ListeningQuestionDetail,
    MapLabellingPayload,
    MatchingPayload,
    validate_audio_urls,
    validate_transcript,
)
from app.services.variant_store import VariantStore

fill_in_the_blank_question_store = VariantStore(
    ListeningFillInTheBlankQuestion, "listening_question_id", singleton=True
)
fill_in_the_blank_answer_store = VariantStore(
    ListeningFillInTheBlankAnswer, "listening_fill_in_the_blank_question_id"
)
choice_one_question_store = VariantStore(ListeningChoiceOneQuestion, "listening_question_id", singleton=True)
choice_one_option_store = VariantStore(ListeningChoiceOneOption, "listening_choice_one_question_id")
choice_multi_question_store = VariantStore(ListeningChoiceMultiQuestion, "listening_question_id", singleton=True)
choice_multi_option_store = VariantStore(ListeningChoiceMultiOption, "listening_choice_multi_question_id")
map_labelling_store = VariantStore(ListeningMapLabelling, "listening_question_id")
matching_store = VariantStore(ListeningMatching, "listening_question_id")

MIN_BLANK_ANSWERS = 2
MIN_LABELLED_ROWS = 2


def fill_in_the_blank_complete(payload: FillInTheBlankPayload) -> bool:
    return len(payload.answers) >= MIN_BLANK_ANSWERS


def labelled_rows_complete(payload) -> bool:
    return len(payload.items) >= MIN_LABELLED_ROWS


LISTENING = SkillDomain(
    "listening",
    ListeningQuestion,
    ListeningQuestionDetail,
    create_model=ListeningQuestionCreate,
    parent_fields={
        "audio_urls": ParentField(validate_audio_urls, {"type": "keyword"}),
        "transcript": ParentField(validate_transcript, {"type": "text", "analyzer": "case_insensitive"}),
    },
)

LISTENING.register(
    VariantSpec(
        kind=ListeningQuestionType.FILL_IN_THE_BLANK.value,
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
        child_models=(ListeningFillInTheBlankQuestion, ListeningFillInTheBlankAnswer),
    )
)
LISTENING.register(
    VariantSpec(
        kind=ListeningQuestionType.CHOICE_ONE.value,
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
        child_models=(ListeningChoiceOneQuestion, ListeningChoiceOneOption),
    )
)
LISTENING.register(
    VariantSpec(
        kind=ListeningQuestionType.CHOICE_MULTI.value,
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
        child_models=(ListeningChoiceMultiQuestion, ListeningChoiceMultiOption),
    )
)
LISTENING.register(
    VariantSpec(
        kind=ListeningQuestionType.MAP_LABELLING.value,
        loader=list_loader(map_labelling_store, LabelledRowOut, MapLabellingPayload),
        is_complete=labelled_rows_complete,
        search_fields={"map_labelling": lambda p: dump_search_value(p.items)},
        child_models=(ListeningMapLabelling,),
    )
)
LISTENING.register(
    VariantSpec(
        kind=ListeningQuestionType.MATCHING.value,
        loader=list_loader(matching_store, LabelledRowOut, MatchingPayload),
        is_complete=labelled_rows_complete,
        search_fields={"matching": lambda p: dump_search_value(p.items)},
        child_models=(ListeningMatching,),
    )
)
