"""Speaking domain: child stores, payload loaders and completion rules."""

from uuid import UUID

from sqlalchemy.orm import Session

from app.models.speaking import (
    SpeakingConversationalOpen,
    SpeakingConversationalRepetition,
    SpeakingConversationalRepetitionQA,
    SpeakingOpenParagraph,
    SpeakingParagraphRepetition,
    SpeakingPhraseRepetition,
    SpeakingQuestion,
    SpeakingQuestionType,
    SpeakingWordRepetition,
)
from app.questions.loaders import list_loader
from app.questions.registry import SkillDomain, VariantSpec
from app.schemas.speaking import (
    ConversationalOpenPayload,
    ConversationalRepetitionOut,
    ConversationalRepetitionPayload,
    ConversationalRepetitionQAOut,
    OpenParagraphOut,
    OpenParagraphPayload,
    ParagraphRepetitionOut,
    ParagraphRepetitionPayload,
    PhraseRepetitionOut,
    PhraseRepetitionPayload,
    SpeakingQuestionDetail,
    WordRepetitionOut,
    WordRepetitionPayload,
)
from app.services.variant_store import VariantStore

word_repetition_store = VariantStore(SpeakingWordRepetition, "speaking_question_id")
phrase_repetition_store = VariantStore(SpeakingPhraseRepetition, "speaking_question_id")
paragraph_repetition_store = VariantStore(SpeakingParagraphRepetition, "speaking_question_id")
open_paragraph_store = VariantStore(SpeakingOpenParagraph, "speaking_question_id")
conversational_repetition_store = VariantStore(
    SpeakingConversationalRepetition, "speaking_question_id", singleton=True
)
conversational_repetition_qa_store = VariantStore(
    SpeakingConversationalRepetitionQA, "speaking_conversational_repetition_id"
)
conversational_open_store = VariantStore(SpeakingConversationalOpen, "speaking_question_id", singleton=True)

MIN_CONVERSATION_QAS = 2


def load_conversational_repetition(db: Session, question_id: UUID) -> ConversationalRepetitionPayload | None:
    conversation = conversational_repetition_store.first_by_parent(db, question_id)
    if conversation is None:
        return None
    qas = conversational_repetition_qa_store.list_by_parent(db, conversation.id)
    return ConversationalRepetitionPayload(
        conversation=ConversationalRepetitionOut.model_validate(conversation),
        qas=[ConversationalRepetitionQAOut.model_validate(qa) for qa in qas],
    )


def load_conversational_open(db: Session, question_id: UUID) -> ConversationalOpenPayload | None:
    row = conversational_open_store.first_by_parent(db, question_id)
    return ConversationalOpenPayload.model_validate(row) if row is not None else None


def _has_items(payload) -> bool:
    return len(payload.items) > 0


def conversational_repetition_complete(payload: ConversationalRepetitionPayload) -> bool:
    return len(payload.qas) >= MIN_CONVERSATION_QAS


def _items_json(payload) -> list:
    return [item.model_dump(mode="json") for item in payload.items]


SPEAKING = SkillDomain("speaking", SpeakingQuestion, SpeakingQuestionDetail)

for _kind, _field, _store, _out, _payload in (
    (SpeakingQuestionType.WORD_REPETITION, "word_repetition", word_repetition_store,
     WordRepetitionOut, WordRepetitionPayload),
    (SpeakingQuestionType.PHRASE_REPETITION, "phrase_repetition", phrase_repetition_store,
     PhraseRepetitionOut, PhraseRepetitionPayload),
    (SpeakingQuestionType.PARAGRAPH_REPETITION, "paragraph_repetition", paragraph_repetition_store,
     ParagraphRepetitionOut, ParagraphRepetitionPayload),
    (SpeakingQuestionType.OPEN_PARAGRAPH, "open_paragraph", open_paragraph_store,
     OpenParagraphOut, OpenParagraphPayload),
):
    SPEAKING.register(
        VariantSpec(
            kind=_kind.value,
            loader=list_loader(_store, _out, _payload),
            is_complete=_has_items,
            search_fields={_field: _items_json},
            child_models=(_store.model,),
        )
    )

SPEAKING.register(
    VariantSpec(
        kind=SpeakingQuestionType.CONVERSATIONAL_REPETITION.value,
        loader=load_conversational_repetition,
        is_complete=conversational_repetition_complete,
        search_fields={
            "conversational_repetition": lambda p: p.conversation.model_dump(mode="json"),
            "conversational_repetition_qas": lambda p: [qa.model_dump(mode="json") for qa in p.qas],
        },
        child_models=(SpeakingConversationalRepetition, SpeakingConversationalRepetitionQA),
    )
)
SPEAKING.register(
    VariantSpec(
        kind=SpeakingQuestionType.CONVERSATIONAL_OPEN.value,
        loader=load_conversational_open,
        is_complete=lambda payload: payload is not None,
        search_fields={
            "conversational_open": lambda p: p.model_dump(mode="json", exclude={"kind"}),
        },
        child_models=(SpeakingConversationalOpen,),
    )
)
