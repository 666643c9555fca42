"""Pydantic schemas for writing child rows and the writing aggregate."""

from typing import Annotated, Literal, Union
from uuid import UUID

from pydantic import BaseModel, Field, model_validator

from app.schemas.grammar import ChildOut
from app.schemas.question import NonBlankStr, QuestionDetail

WordList = Annotated[list[NonBlankStr], Field(min_length=1)]


def check_word_range(min_words: int, max_words: int) -> None:
    if max_words < min_words:
        raise ValueError("max_words must be greater than or equal to min_words")


class WordRangeMixin(BaseModel):
    min_words: int = Field(..., ge=1)
    max_words: int = Field(..., ge=1)

    @model_validator(mode="after")
    def check_range(self):
        check_word_range(self.min_words, self.max_words)
        return self


# Sentence completion

class SentenceCompletionCreate(WordRangeMixin):
    writing_question_id: UUID
    example_sentence: NonBlankStr
    given_part_sentence: NonBlankStr
    position: Literal["start", "end"]
    required_words: WordList
    explain: NonBlankStr


class SentenceCompletionUpdate(BaseModel):
    """Partial update; the word range is re-checked against the stored row."""

    example_sentence: NonBlankStr | None = None
    given_part_sentence: NonBlankStr | None = None
    position: Literal["start", "end"] | None = None
    required_words: WordList | None = None
    explain: NonBlankStr | None = None
    min_words: int | None = Field(None, ge=1)
    max_words: int | None = Field(None, ge=1)


class SentenceCompletionOut(ChildOut):
    writing_question_id: UUID
    example_sentence: str
    given_part_sentence: str
    position: str
    required_words: list[str]
    explain: str
    min_words: int
    max_words: int


# Essay

class EssayCreate(WordRangeMixin):
    writing_question_id: UUID
    essay_type: NonBlankStr = Field(..., max_length=50)
    required_points: WordList
    sample_essay: NonBlankStr
    explain: NonBlankStr


class EssayUpdate(BaseModel):
    essay_type: NonBlankStr | None = Field(None, max_length=50)
    required_points: WordList | None = None
    sample_essay: NonBlankStr | None = None
    explain: NonBlankStr | None = None
    min_words: int | None = Field(None, ge=1)
    max_words: int | None = Field(None, ge=1)


class EssayOut(ChildOut):
    writing_question_id: UUID
    essay_type: str
    required_points: list[str]
    min_words: int
    max_words: int
    sample_essay: str
    explain: str


# Variant payloads

class SentenceCompletionPayload(BaseModel):
    kind: Literal["SENTENCE_COMPLETION"] = "SENTENCE_COMPLETION"
    items: list[SentenceCompletionOut] = Field(default_factory=list)


class EssayPayload(BaseModel):
    kind: Literal["ESSAY"] = "ESSAY"
    items: list[EssayOut] = Field(default_factory=list)


WritingPayload = Annotated[
    Union[SentenceCompletionPayload, EssayPayload],
    Field(discriminator="kind"),
]


class WritingQuestionDetail(QuestionDetail):
    payload: WritingPayload | None = None
