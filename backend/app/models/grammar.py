"""Grammar question models: parent table plus one child family per variant."""

from enum import Enum as PyEnum

from sqlalchemy import Boolean, Column, ForeignKey, Index, Text, UniqueConstraint, Uuid
from sqlalchemy.orm import relationship

from app.db.base import Base
from app.models.question import ChildTimestampsMixin, QuestionColumnsMixin


class GrammarQuestionType(str, PyEnum):
    """Grammar variant kinds."""

    FILL_IN_THE_BLANK = "FILL_IN_THE_BLANK"
    CHOICE_ONE = "CHOICE_ONE"
    ERROR_IDENTIFICATION = "ERROR_IDENTIFICATION"
    SENTENCE_TRANSFORMATION = "SENTENCE_TRANSFORMATION"


class GrammarQuestion(QuestionColumnsMixin, Base):
    """Grammar parent question."""

    __tablename__ = "grammar_questions"

    # Relationships (deleting the parent removes every child row)
    fill_in_the_blank_questions = relationship(
        "GrammarFillInTheBlankQuestion", back_populates="grammar_question", cascade="all, delete-orphan"
    )
    choice_one_questions = relationship(
        "GrammarChoiceOneQuestion", back_populates="grammar_question", cascade="all, delete-orphan"
    )
    error_identifications = relationship(
        "GrammarErrorIdentification", back_populates="grammar_question", cascade="all, delete-orphan"
    )
    sentence_transformations = relationship(
        "GrammarSentenceTransformation", back_populates="grammar_question", cascade="all, delete-orphan"
    )

    __table_args__ = (
        Index("ix_grammar_questions_type", "type"),
        Index("ix_grammar_questions_created_at", "created_at"),
    )


class GrammarFillInTheBlankQuestion(ChildTimestampsMixin, Base):
    """Sentence with blanks; at most one per grammar question."""

    __tablename__ = "grammar_fill_in_the_blank_questions"

    grammar_question_id = Column(
        Uuid(as_uuid=True), ForeignKey("grammar_questions.id", ondelete="CASCADE"), nullable=False
    )
    question = Column(Text, nullable=False)

    grammar_question = relationship("GrammarQuestion", back_populates="fill_in_the_blank_questions")
    answers = relationship(
        "GrammarFillInTheBlankAnswer", back_populates="blank_question", cascade="all, delete-orphan"
    )

    __table_args__ = (UniqueConstraint("grammar_question_id", name="uq_grammar_fitb_question_parent"),)


class GrammarFillInTheBlankAnswer(ChildTimestampsMixin, Base):
    """Accepted answer for a fill-in-the-blank question."""

    __tablename__ = "grammar_fill_in_the_blank_answers"

    grammar_fill_in_the_blank_question_id = Column(
        Uuid(as_uuid=True),
        ForeignKey("grammar_fill_in_the_blank_questions.id", ondelete="CASCADE"),
        nullable=False,
    )
    answer = Column(Text, nullable=False)
    explain = Column(Text, nullable=False)

    blank_question = relationship("GrammarFillInTheBlankQuestion", back_populates="answers")

    __table_args__ = (Index("ix_grammar_fitb_answers_question_id", "grammar_fill_in_the_blank_question_id"),)


class GrammarChoiceOneQuestion(ChildTimestampsMixin, Base):
    """Single-answer multiple choice prompt; at most one per grammar question."""

    __tablename__ = "grammar_choice_one_questions"

    grammar_question_id = Column(
        Uuid(as_uuid=True), ForeignKey("grammar_questions.id", ondelete="CASCADE"), nullable=False
    )
    question = Column(Text, nullable=False)
    explain = Column(Text, nullable=False)

    grammar_question = relationship("GrammarQuestion", back_populates="choice_one_questions")
    options = relationship(
        "GrammarChoiceOneOption", back_populates="choice_question", cascade="all, delete-orphan"
    )

    __table_args__ = (UniqueConstraint("grammar_question_id", name="uq_grammar_choice_one_question_parent"),)


class GrammarChoiceOneOption(ChildTimestampsMixin, Base):
    """Option of a choice-one question. At most one per question has is_correct=True."""

    __tablename__ = "grammar_choice_one_options"

    grammar_choice_one_question_id = Column(
        Uuid(as_uuid=True),
        ForeignKey("grammar_choice_one_questions.id", ondelete="CASCADE"),
        nullable=False,
    )
    options = Column(Text, nullable=False)
    is_correct = Column(Boolean, nullable=False, default=False)

    choice_question = relationship("GrammarChoiceOneQuestion", back_populates="options")

    __table_args__ = (Index("ix_grammar_choice_one_options_question_id", "grammar_choice_one_question_id"),)


class GrammarErrorIdentification(ChildTimestampsMixin, Base):
    """Sentence containing one wrong word; at most one per grammar question."""

    __tablename__ = "grammar_error_identifications"

    grammar_question_id = Column(
        Uuid(as_uuid=True), ForeignKey("grammar_questions.id", ondelete="CASCADE"), nullable=False
    )
    error_sentence = Column(Text, nullable=False)
    error_word = Column(Text, nullable=False)
    correct_word = Column(Text, nullable=False)
    explain = Column(Text, nullable=False)

    grammar_question = relationship("GrammarQuestion", back_populates="error_identifications")

    __table_args__ = (UniqueConstraint("grammar_question_id", name="uq_grammar_error_identification_parent"),)


class GrammarSentenceTransformation(ChildTimestampsMixin, Base):
    """Rewrite-the-sentence exercise; at most one per grammar question."""

    __tablename__ = "grammar_sentence_transformations"

    grammar_question_id = Column(
        Uuid(as_uuid=True), ForeignKey("grammar_questions.id", ondelete="CASCADE"), nullable=False
    )
    original_sentence = Column(Text, nullable=False)
    beginning_word = Column(Text, nullable=True)
    example_correct_sentence = Column(Text, nullable=False)
    explain = Column(Text, nullable=False)

    grammar_question = relationship("GrammarQuestion", back_populates="sentence_transformations")

    __table_args__ = (
        UniqueConstraint("grammar_question_id", name="uq_grammar_sentence_transformation_parent"),
    )
