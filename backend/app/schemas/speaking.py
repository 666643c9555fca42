"""Pydantic schemas for speaking child rows and the speaking aggregate."""

from typing import Annotated, Literal, Union
from uuid import UUID

from pydantic import BaseModel, Field

from app.schemas.grammar import ChildOut
from app.schemas.question import NonBlankStr, QuestionDetail


class WordRepetitionCreate(BaseModel):
    speaking_question_id: UUID
    word: NonBlankStr
    mean: NonBlankStr


class WordRepetitionUpdate(BaseModel):
    word: NonBlankStr | None = None
    mean: NonBlankStr | None = None


class WordRepetitionOut(ChildOut):
    speaking_question_id: UUID
    word: str
    mean: str


class PhraseRepetitionCreate(BaseModel):
    speaking_question_id: UUID
    phrase: NonBlankStr
    mean: NonBlankStr


class PhraseRepetitionUpdate(BaseModel):
    phrase: NonBlankStr | None = None
    mean: NonBlankStr | None = None


class PhraseRepetitionOut(ChildOut):
    speaking_question_id: UUID
    phrase: str
    mean: str


class ParagraphRepetitionCreate(BaseModel):
    speaking_question_id: UUID
    paragraph: NonBlankStr
    mean: NonBlankStr


class ParagraphRepetitionUpdate(BaseModel):
    paragraph: NonBlankStr | None = None
    mean: NonBlankStr | None = None


class ParagraphRepetitionOut(ChildOut):
    speaking_question_id: UUID
    paragraph: str
    mean: str


class OpenParagraphCreate(BaseModel):
    speaking_question_id: UUID
    question: NonBlankStr
    example_passage: NonBlankStr
    mean_of_example_passage: NonBlankStr


class OpenParagraphUpdate(BaseModel):
    question: NonBlankStr | None = None
    example_passage: NonBlankStr | None = None
    mean_of_example_passage: NonBlankStr | None = None


class OpenParagraphOut(ChildOut):
    speaking_question_id: UUID
    question: str
    example_passage: str
    mean_of_example_passage: str


class ConversationalRepetitionCreate(BaseModel):
    speaking_question_id: UUID
    title: NonBlankStr
    overview: NonBlankStr


class ConversationalRepetitionUpdate(BaseModel):
    title: NonBlankStr | None = None
    overview: NonBlankStr | None = None


class ConversationalRepetitionOut(ChildOut):
    speaking_question_id: UUID
    title: str
    overview: str


class ConversationalRepetitionQACreate(BaseModel):
    speaking_conversational_repetition_id: UUID
    question: NonBlankStr
    answer: NonBlankStr
    mean_of_question: NonBlankStr
    mean_of_answer: NonBlankStr
    explain: NonBlankStr


class ConversationalRepetitionQAUpdate(BaseModel):
    question: NonBlankStr | None = None
    answer: NonBlankStr | None = None
    mean_of_question: NonBlankStr | None = None
    mean_of_answer: NonBlankStr | None = None
    explain: NonBlankStr | None = None


class ConversationalRepetitionQAOut(ChildOut):
    speaking_conversational_repetition_id: UUID
    question: str
    answer: str
    mean_of_question: str
    mean_of_answer: str
    explain: str


class ConversationalOpenCreate(BaseModel):
    speaking_question_id: UUID
    title: NonBlankStr
    overview: NonBlankStr
    example_conversation: NonBlankStr


class ConversationalOpenUpdate(BaseModel):
    title: NonBlankStr | None = None
    overview: NonBlankStr | None = None
    example_conversation: NonBlankStr | None = None


class ConversationalOpenOut(ChildOut):
    speaking_question_id: UUID
    title: str
    overview: str
    example_conversation: str


# Variant payloads. List variants always carry `items` (possibly empty).

class WordRepetitionPayload(BaseModel):
    kind: Literal["WORD_REPETITION"] = "WORD_REPETITION"
    items: list[WordRepetitionOut] = Field(default_factory=list)


class PhraseRepetitionPayload(BaseModel):
    kind: Literal["PHRASE_REPETITION"] = "PHRASE_REPETITION"
    items: list[PhraseRepetitionOut] = Field(default_factory=list)


class ParagraphRepetitionPayload(BaseModel):
    kind: Literal["PARAGRAPH_REPETITION"] = "PARAGRAPH_REPETITION"
    items: list[ParagraphRepetitionOut] = Field(default_factory=list)


class OpenParagraphPayload(BaseModel):
    kind: Literal["OPEN_PARAGRAPH"] = "OPEN_PARAGRAPH"
    items: list[OpenParagraphOut] = Field(default_factory=list)


class ConversationalRepetitionPayload(BaseModel):
    kind: Literal["CONVERSATIONAL_REPETITION"] = "CONVERSATIONAL_REPETITION"
    conversation: ConversationalRepetitionOut
    qas: list[ConversationalRepetitionQAOut] = Field(default_factory=list)


class ConversationalOpenPayload(ConversationalOpenOut):
    kind: Literal["CONVERSATIONAL_OPEN"] = "CONVERSATIONAL_OPEN"


SpeakingPayload = Annotated[
    Union[
        WordRepetitionPayload,
        PhraseRepetitionPayload,
        ParagraphRepetitionPayload,
        OpenParagraphPayload,
        ConversationalRepetitionPayload,
        ConversationalOpenPayload,
    ],
    Field(discriminator="kind"),
]


class SpeakingQuestionDetail(QuestionDetail):
    payload: SpeakingPayload | None = None
