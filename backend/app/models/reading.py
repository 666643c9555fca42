"""Reading question models."""

from enum import Enum as PyEnum

from sqlalchemy import JSON, Boolean, Column, ForeignKey, Index, String, Text, UniqueConstraint, Uuid
from sqlalchemy.orm import relationship

from app.db.base import Base
from app.models.question import ChildTimestampsMixin, QuestionColumnsMixin


class ReadingQuestionType(str, PyEnum):
    """Reading variant kinds."""

    FILL_IN_THE_BLANK = "FILL_IN_THE_BLANK"
    CHOICE_ONE = "CHOICE_ONE"
    CHOICE_MULTI = "CHOICE_MULTI"
    MATCHING = "MATCHING"
    TRUE_FALSE = "TRUE_FALSE"


class TrueFalseAnswer(str, PyEnum):
    TRUE = "TRUE"
    FALSE = "FALSE"
    NOT_GIVEN = "NOT GIVEN"


def _reading_parent_fk() -> Column:
    return Column(
        Uuid(as_uuid=True), ForeignKey("reading_questions.id", ondelete="CASCADE"), nullable=False
    )


class ReadingQuestion(QuestionColumnsMixin, Base):
    """Reading parent question: a titled text split into passages."""

    __tablename__ = "reading_questions"

    title = Column(Text, nullable=False)
    passages = Column(JSON, nullable=False, default=list)

    fill_in_the_blank_questions = relationship("ReadingFillInTheBlankQuestion", cascade="all, delete-orphan")
    choice_one_questions = relationship("ReadingChoiceOneQuestion", cascade="all, delete-orphan")
    choice_multi_questions = relationship("ReadingChoiceMultiQuestion", cascade="all, delete-orphan")
    matchings = relationship("ReadingMatching", cascade="all, delete-orphan")
    true_falses = relationship("ReadingTrueFalse", cascade="all, delete-orphan")

    __table_args__ = (
        Index("ix_reading_questions_type", "type"),
        Index("ix_reading_questions_created_at", "created_at"),
    )


class ReadingFillInTheBlankQuestion(ChildTimestampsMixin, Base):
    __tablename__ = "reading_fill_in_the_blank_questions"

    reading_question_id = _reading_parent_fk()
    question = Column(Text, nullable=False)

    answers = relationship("ReadingFillInTheBlankAnswer", cascade="all, delete-orphan")

    __table_args__ = (UniqueConstraint("reading_question_id", name="uq_reading_fitb_question_parent"),)


class ReadingFillInTheBlankAnswer(ChildTimestampsMixin, Base):
    __tablename__ = "reading_fill_in_the_blank_answers"

    reading_fill_in_the_blank_question_id = Column(
        Uuid(as_uuid=True),
        ForeignKey("reading_fill_in_the_blank_questions.id", ondelete="CASCADE"),
        nullable=False,
    )
    answer = Column(Text, nullable=False)
    explain = Column(Text, nullable=False)

    __table_args__ = (Index("ix_reading_fitb_answers_question_id", "reading_fill_in_the_blank_question_id"),)


class ReadingChoiceOneQuestion(ChildTimestampsMixin, Base):
    __tablename__ = "reading_choice_one_questions"

    reading_question_id = _reading_parent_fk()
    question = Column(Text, nullable=False)
    explain = Column(Text, nullable=False)

    options = relationship("ReadingChoiceOneOption", cascade="all, delete-orphan")

    __table_args__ = (UniqueConstraint("reading_question_id", name="uq_reading_choice_one_question_parent"),)


class ReadingChoiceOneOption(ChildTimestampsMixin, Base):
    __tablename__ = "reading_choice_one_options"

    reading_choice_one_question_id = Column(
        Uuid(as_uuid=True),
        ForeignKey("reading_choice_one_questions.id", ondelete="CASCADE"),
        nullable=False,
    )
    options = Column(Text, nullable=False)
    is_correct = Column(Boolean, nullable=False, default=False)

    __table_args__ = (Index("ix_reading_choice_one_options_question_id", "reading_choice_one_question_id"),)


class ReadingChoiceMultiQuestion(ChildTimestampsMixin, Base):
    __tablename__ = "reading_choice_multi_questions"

    reading_question_id = _reading_parent_fk()
    question = Column(Text, nullable=False)
    explain = Column(Text, nullable=False)

    options = relationship("ReadingChoiceMultiOption", cascade="all, delete-orphan")

    __table_args__ = (
        UniqueConstraint("reading_question_id", name="uq_reading_choice_multi_question_parent"),
    )


class ReadingChoiceMultiOption(ChildTimestampsMixin, Base):
    __tablename__ = "reading_choice_multi_options"

    reading_choice_multi_question_id = Column(
        Uuid(as_uuid=True),
        ForeignKey("reading_choice_multi_questions.id", ondelete="CASCADE"),
        nullable=False,
    )
    options = Column(Text, nullable=False)
    is_correct = Column(Boolean, nullable=False, default=False)

    __table_args__ = (
        Index("ix_reading_choice_multi_options_question_id", "reading_choice_multi_question_id"),
    )


class ReadingMatching(ChildTimestampsMixin, Base):
    __tablename__ = "reading_matchings"

    reading_question_id = _reading_parent_fk()
    question = Column(Text, nullable=False)
    answer = Column(Text, nullable=False)
    explain = Column(Text, nullable=False)

    __table_args__ = (Index("ix_reading_matchings_question_id", "reading_question_id"),)


class ReadingTrueFalse(ChildTimestampsMixin, Base):
    """Statement judged against the passages: TRUE, FALSE or NOT GIVEN."""

    __tablename__ = "reading_true_falses"

    reading_question_id = _reading_parent_fk()
    question = Column(Text, nullable=False)
    answer = Column(String(20), nullable=False)
    explain = Column(Text, nullable=False)

    __table_args__ = (Index("ix_reading_true_falses_question_id", "reading_question_id"),)
