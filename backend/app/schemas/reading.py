"""Pydantic schemas for reading questions and their child rows."""

from typing import Annotated, Any, Literal, Union
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, field_validator

from app.models.reading import TrueFalseAnswer
from app.schemas.grammar import ChildOut
from app.schemas.question import NonBlankStr, QuestionCreate, QuestionDetail

MAX_TITLE_LENGTH = 255
MAX_PASSAGES = 20


def validate_title(value: Any) -> str:
    if not isinstance(value, str) or not value.strip():
        raise ValueError("title is required")
    if len(value) > MAX_TITLE_LENGTH:
        raise ValueError(f"title exceeds {MAX_TITLE_LENGTH} characters")
    return value


def validate_passages(value: Any) -> list[str]:
    """One or more non-blank passages, order kept."""
    if not isinstance(value, list) or not value:
        raise ValueError("at least one passage is required")
    if len(value) > MAX_PASSAGES:
        raise ValueError(f"at most {MAX_PASSAGES} passages are allowed")
    for passage in value:
        if not isinstance(passage, str) or not passage.strip():
            raise ValueError("passage must be a non-empty string")
    return list(value)


class ReadingQuestionCreate(QuestionCreate):
    title: str
    passages: list[str]

    @field_validator("title", mode="before")
    @classmethod
    def check_title(cls, v: Any) -> str:
        return validate_title(v)

    @field_validator("passages", mode="before")
    @classmethod
    def check_passages(cls, v: Any) -> list[str]:
        return validate_passages(v)


# Fill in the blank

class FillInTheBlankQuestionCreate(BaseModel):
    reading_question_id: UUID
    question: NonBlankStr


class FillInTheBlankQuestionUpdate(BaseModel):
    question: NonBlankStr | None = None


class FillInTheBlankQuestionOut(ChildOut):
    reading_question_id: UUID
    question: str


class FillInTheBlankAnswerCreate(BaseModel):
    reading_fill_in_the_blank_question_id: UUID
    answer: NonBlankStr
    explain: NonBlankStr


class FillInTheBlankAnswerUpdate(BaseModel):
    answer: NonBlankStr | None = None
    explain: NonBlankStr | None = None


class FillInTheBlankAnswerOut(ChildOut):
    reading_fill_in_the_blank_question_id: UUID
    answer: str
    explain: str


# Choice one / choice multi

class ChoiceQuestionCreate(BaseModel):
    reading_question_id: UUID
    question: NonBlankStr
    explain: NonBlankStr


class ChoiceQuestionUpdate(BaseModel):
    question: NonBlankStr | None = None
    explain: NonBlankStr | None = None


class ChoiceQuestionOut(ChildOut):
    reading_question_id: UUID
    question: str
    explain: str


class OptionUpdate(BaseModel):
    options: NonBlankStr | None = None
    is_correct: bool | None = None


class ChoiceOneOptionCreate(BaseModel):
    reading_choice_one_question_id: UUID
    options: NonBlankStr
    is_correct: bool = False


class ChoiceOneOptionOut(ChildOut):
    reading_choice_one_question_id: UUID
    options: str
    is_correct: bool


class ChoiceMultiOptionCreate(BaseModel):
    reading_choice_multi_question_id: UUID
    options: NonBlankStr
    is_correct: bool = False


class ChoiceMultiOptionOut(ChildOut):
    reading_choice_multi_question_id: UUID
    options: str
    is_correct: bool


# Matching

class MatchingCreate(BaseModel):
    reading_question_id: UUID
    question: NonBlankStr
    answer: NonBlankStr
    explain: NonBlankStr


class MatchingUpdate(BaseModel):
    question: NonBlankStr | None = None
    answer: NonBlankStr | None = None
    explain: NonBlankStr | None = None


class MatchingOut(ChildOut):
    reading_question_id: UUID
    question: str
    answer: str
    explain: str


# True / false / not given

class TrueFalseCreate(BaseModel):
    model_config = ConfigDict(use_enum_values=True)

    reading_question_id: UUID
    question: NonBlankStr
    answer: TrueFalseAnswer
    explain: NonBlankStr


class TrueFalseUpdate(BaseModel):
    model_config = ConfigDict(use_enum_values=True)

    question: NonBlankStr | None = None
    answer: TrueFalseAnswer | None = None
    explain: NonBlankStr | None = None


class TrueFalseOut(ChildOut):
    reading_question_id: UUID
    question: str
    answer: TrueFalseAnswer
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


class MatchingPayload(BaseModel):
    kind: Literal["MATCHING"] = "MATCHING"
    items: list[MatchingOut] = Field(default_factory=list)


class TrueFalsePayload(BaseModel):
    kind: Literal["TRUE_FALSE"] = "TRUE_FALSE"
    items: list[TrueFalseOut] = Field(default_factory=list)


ReadingPayload = Annotated[
    Union[
        FillInTheBlankPayload,
        ChoiceOnePayload,
        ChoiceMultiPayload,
        MatchingPayload,
        TrueFalsePayload,
    ],
    Field(discriminator="kind"),
]


class ReadingQuestionDetail(QuestionDetail):
    title: str
    passages: list[str]
    payload: ReadingPayload | None = None
