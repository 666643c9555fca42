"""Pydantic schemas for listening questions and their child rows."""

from typing import Annotated, Any, Literal, Union
from uuid import UUID

from pydantic import BaseModel, Field, field_validator

from app.schemas.grammar import ChildOut
from app.schemas.question import NonBlankStr, QuestionCreate, QuestionDetail, validate_url_list

MAX_AUDIO_URLS = 5
MAX_TRANSCRIPT_LENGTH = 20000


def validate_audio_urls(value: Any) -> list[str]:
    return validate_url_list(value, "audio_urls", MAX_AUDIO_URLS, required=True)


def validate_transcript(value: Any) -> str:
    if not isinstance(value, str) or not value.strip():
        raise ValueError("transcript is required")
    if len(value) > MAX_TRANSCRIPT_LENGTH:
        raise ValueError(f"transcript exceeds {MAX_TRANSCRIPT_LENGTH} characters")
    return value


class ListeningQuestionCreate(QuestionCreate):
    audio_urls: list[str]
    transcript: str

    @field_validator("audio_urls", mode="before")
    @classmethod
    def check_audio_urls(cls, v: Any) -> list[str]:
        return validate_audio_urls(v)

    @field_validator("transcript", mode="before")
    @classmethod
    def check_transcript(cls, v: Any) -> str:
        return validate_transcript(v)


# Fill in the blank

class FillInTheBlankQuestionCreate(BaseModel):
    listening_question_id: UUID
    question: NonBlankStr


class FillInTheBlankQuestionUpdate(BaseModel):
    question: NonBlankStr | None = None


class FillInTheBlankQuestionOut(ChildOut):
    listening_question_id: UUID
    question: str


class FillInTheBlankAnswerCreate(BaseModel):
    listening_fill_in_the_blank_question_id: UUID
    answer: NonBlankStr
    explain: NonBlankStr


class FillInTheBlankAnswerUpdate(BaseModel):
    answer: NonBlankStr | None = None
    explain: NonBlankStr | None = None


class FillInTheBlankAnswerOut(ChildOut):
    listening_fill_in_the_blank_question_id: UUID
    answer: str
    explain: str


# Choice one / choice multi

class ChoiceQuestionCreate(BaseModel):
    listening_question_id: UUID
    question: NonBlankStr
    explain: NonBlankStr


class ChoiceQuestionUpdate(BaseModel):
    question: NonBlankStr | None = None
    explain: NonBlankStr | None = None


class ChoiceQuestionOut(ChildOut):
    listening_question_id: UUID
    question: str
    explain: str


class OptionUpdate(BaseModel):
    options: NonBlankStr | None = None
    is_correct: bool | None = None


class ChoiceOneOptionCreate(BaseModel):
    listening_choice_one_question_id: UUID
    options: NonBlankStr
    is_correct: bool = False


class ChoiceOneOptionOut(ChildOut):
    listening_choice_one_question_id: UUID
    options: str
    is_correct: bool


class ChoiceMultiOptionCreate(BaseModel):
    listening_choice_multi_question_id: UUID
    options: NonBlankStr
    is_correct: bool = False


class ChoiceMultiOptionOut(ChildOut):
    listening_choice_multi_question_id: UUID
    options: str
    is_correct: bool


# Map labelling / matching rows share a shape

class LabelledRowCreate(BaseModel):
    listening_question_id: UUID
    question: NonBlankStr
    answer: NonBlankStr
    explain: NonBlankStr


class LabelledRowUpdate(BaseModel):
    question: NonBlankStr | None = None
    answer: NonBlankStr | None = None
    explain: NonBlankStr | None = None


class LabelledRowOut(ChildOut):
    listening_question_id: UUID
    question: str
    answer: str
    explain: str


# Variant payloads

class FillInTheBlankPayload(BaseModel):
    kind: Literal["FILL_IN_THE_BLANK"] = "FILL_IN_THE_BLANK"
    question: FillInTheBlankQuestionOut
    answers: list[FillInTheBlankAnswerOut] = Field(default_factory=list)


class ChoiceOnePayload(BaseModel):
    kind: Literal["CHOICE_ONE"] = "CHOICE_ONE"
    question: ChoiceQuestionOut
    options: list[ChoiceOneOptionOut] = Field(default_factory=list)


class ChoiceMultiPayload(BaseModel):
    kind: Literal["CHOICE_MULTI"] = "CHOICE_MULTI"
    question: ChoiceQuestionOut
    options: list[ChoiceMultiOptionOut] = Field(default_factory=list)


class MapLabellingPayload(BaseModel):
    kind: Literal["MAP_LABELLING"] = "MAP_LABELLING"
    items: list[LabelledRowOut] = Field(default_factory=list)


class MatchingPayload(BaseModel):
    kind: Literal["MATCHING"] = "MATCHING"
    items: list[LabelledRowOut] = Field(default_factory=list)


ListeningPayload = Annotated[
    Union[
        FillInTheBlankPayload,
        ChoiceOnePayload,
        ChoiceMultiPayload,
        MapLabellingPayload,
        MatchingPayload,
    ],
    Field(discriminator="kind"),
]


class ListeningQuestionDetail(QuestionDetail):
    audio_urls: list[str]
    transcript: str
    payload: ListeningPayload | None = None
