"""Writing question models."""

from enum import Enum as PyEnum

from sqlalchemy import JSON, Column, ForeignKey, Index, Integer, String, Text, Uuid
from sqlalchemy.orm import relationship

from app.db.base import Base
from app.models.question import ChildTimestampsMixin, QuestionColumnsMixin


class WritingQuestionType(str, PyEnum):
    """Writing variant kinds."""

    SENTENCE_COMPLETION = "SENTENCE_COMPLETION"
    ESSAY = "ESSAY"


def _writing_parent_fk() -> Column:
    return Column(
        Uuid(as_uuid=True), ForeignKey("writing_questions.id", ondelete="CASCADE"), nullable=False
    )


class WritingQuestion(QuestionColumnsMixin, Base):
    """Writing parent question."""

    __tablename__ = "writing_questions"

    sentence_completions = relationship("WritingSentenceCompletion", cascade="all, delete-orphan")
    essays = relationship("WritingEssay", cascade="all, delete-orphan")

    __table_args__ = (
        Index("ix_writing_questions_type", "type"),
        Index("ix_writing_questions_created_at", "created_at"),
    )


class WritingSentenceCompletion(ChildTimestampsMixin, Base):
    """Finish a sentence from its given start (or end) using the required words."""

    __tablename__ = "writing_sentence_completions"

    writing_question_id = _writing_parent_fk()
    example_sentence = Column(Text, nullable=False)
    given_part_sentence = Column(Text, nullable=False)
    position = Column(String(10), nullable=False)
    required_words = Column(JSON, nullable=False, default=list)
    explain = Column(Text, nullable=False)
    min_words = Column(Integer, nullable=False)
    max_words = Column(Integer, nullable=False)

    __table_args__ = (Index("ix_writing_sentence_completions_question_id", "writing_question_id"),)


class WritingEssay(ChildTimestampsMixin, Base):
    __tablename__ = "writing_essays"

    writing_question_id = _writing_parent_fk()
    essay_type = Column(String(50), nullable=False)
    required_points = Column(JSON, nullable=False, default=list)
    min_words = Column(Integer, nullable=False)
    max_words = Column(Integer, nullable=False)
    sample_essay = Column(Text, nullable=False)
    explain = Column(Text, nullable=False)

    __table_args__ = (Index("ix_writing_essays_question_id", "writing_question_id"),)
