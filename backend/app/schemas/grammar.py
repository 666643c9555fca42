"""Pydantic schemas for grammar child rows and the grammar aggregate."""

from datetime import datetime
from typing import Annotated, Literal, Union
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field

from app.schemas.question import NonBlankStr, QuestionDetail


class ChildOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    created_at: datetime
    updated_at: datetime


# Fill in the blank

class FillInTheBlankQuestionCreate(BaseModel):
    grammar_question_id: UUID
    question: NonBlankStr


class FillInTheBlankQuestionUpdate(BaseModel):
    question: NonBlankStr | None = None


class FillInTheBlankQuestionOut(ChildOut):
    grammar_question_id: UUID
    question: str


class FillInTheBlankAnswerCreate(BaseModel):
    grammar_fill_in_the_blank_question_id: UUID
    answer: NonBlankStr
    explain: NonBlankStr


class FillInTheBlankAnswerUpdate(BaseModel):
    answer: NonBlankStr | None = None
    explain: NonBlankStr | None = None


class FillInTheBlankAnswerOut(ChildOut):
    grammar_fill_in_the_blank_question_id: UUID
    answer: str
    explain: str


# Choice one

class ChoiceOneQuestionCreate(BaseModel):
    grammar_question_id: UUID
    question: NonBlankStr
    explain: NonBlankStr


class ChoiceOneQuestionUpdate(BaseModel):
    question: NonBlankStr | None = None
    explain: NonBlankStr | None = None


class ChoiceOneQuestionOut(ChildOut):
    grammar_question_id: UUID
    question: str
    explain: str


class ChoiceOneOptionCreate(BaseModel):
    grammar_choice_one_question_id: UUID
    options: NonBlankStr = Field(..., description="Option text")
    is_correct: bool = False


class ChoiceOneOptionUpdate(BaseModel):
    options: NonBlankStr | None = None
    is_correct: bool | None = None


class ChoiceOneOptionOut(ChildOut):
    grammar_choice_one_question_id: UUID
    options: str
    is_correct: bool


# Error identification

class ErrorIdentificationCreate(BaseModel):
    grammar_question_id: UUID
    error_sentence: NonBlankStr
    error_word: NonBlankStr
    correct_word: NonBlankStr
    explain: NonBlankStr


class ErrorIdentificationUpdate(BaseModel):
    error_sentence: NonBlankStr | None = None
    error_word: NonBlankStr | None = None
    correct_word: NonBlankStr | None = None
    explain: NonBlankStr | None = None


class ErrorIdentificationOut(ChildOut):
    grammar_question_id: UUID
    error_sentence: str
    error_word: str
    correct_word: str
    explain: str


# Sentence transformation

class SentenceTransformationCreate(BaseModel):
    grammar_question_id: UUID
    original_sentence: NonBlankStr
    beginning_word: str | None = None
    example_correct_sentence: NonBlankStr
    explain: NonBlankStr


class SentenceTransformationUpdate(BaseModel):
    original_sentence: NonBlankStr | None = None
    beginning_word: str | None = None
    example_correct_sentence: NonBlankStr | None = None
    explain: NonBlankStr | None = None


class SentenceTransformationOut(ChildOut):
    grammar_question_id: UUID
    original_sentence: str
    beginning_word: str | None
    example_correct_sentence: str
    explain: str


# Variant payloads

class FillInTheBlankPayload(BaseModel):
    kind: Literal["FILL_IN_THE_BLANK"] = "FILL_IN_THE_BLANK"
    question: FillInTheBlankQuestionOut
    answers: list[FillInTheBlankAnswerOut] = Field(default_factory=list)


class ChoiceOnePayload(BaseModel):
    kind: Literal["CHOICE_ONE"] = "CHOICE_ONE"
    question: ChoiceOneQuestionOut
    options: list[ChoiceOneOptionOut] = Field(default_factory=list)


class ErrorIdentificationPayload(ErrorIdentificationOut):
    kind: Literal["ERROR_IDENTIFICATION"] = "ERROR_IDENTIFICATION"


class SentenceTransformationPayload(SentenceTransformationOut):
    kind: Literal["SENTENCE_TRANSFORMATION"] = "SENTENCE_TRANSFORMATION"


GrammarPayload = Annotated[
    Union[
        FillInTheBlankPayload,
        ChoiceOnePayload,
        ErrorIdentificationPayload,
        SentenceTransformationPayload,
    ],
    Field(discriminator="kind"),
]


class GrammarQuestionDetail(QuestionDetail):
    payload: GrammarPayload | None = None
