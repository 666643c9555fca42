"""Speaking question models."""

from enum import Enum as PyEnum

from sqlalchemy import Column, ForeignKey, Index, Text, UniqueConstraint, Uuid
from sqlalchemy.orm import relationship

from app.db.base import Base
from app.models.question import ChildTimestampsMixin, QuestionColumnsMixin


class SpeakingQuestionType(str, PyEnum):
    """Speaking variant kinds."""

    WORD_REPETITION = "WORD_REPETITION"
    PHRASE_REPETITION = "PHRASE_REPETITION"
    PARAGRAPH_REPETITION = "PARAGRAPH_REPETITION"
    OPEN_PARAGRAPH = "OPEN_PARAGRAPH"
    CONVERSATIONAL_REPETITION = "CONVERSATIONAL_REPETITION"
    CONVERSATIONAL_OPEN = "CONVERSATIONAL_OPEN"


def _speaking_parent_fk() -> Column:
    return Column(
        Uuid(as_uuid=True), ForeignKey("speaking_questions.id", ondelete="CASCADE"), nullable=False
    )


class SpeakingQuestion(QuestionColumnsMixin, Base):
    """Speaking parent question."""

    __tablename__ = "speaking_questions"

    word_repetitions = relationship("SpeakingWordRepetition", cascade="all, delete-orphan")
    phrase_repetitions = relationship("SpeakingPhraseRepetition", cascade="all, delete-orphan")
    paragraph_repetitions = relationship("SpeakingParagraphRepetition", cascade="all, delete-orphan")
    open_paragraphs = relationship("SpeakingOpenParagraph", cascade="all, delete-orphan")
    conversational_repetitions = relationship(
        "SpeakingConversationalRepetition", cascade="all, delete-orphan"
    )
    conversational_opens = relationship("SpeakingConversationalOpen", cascade="all, delete-orphan")

    __table_args__ = (
        Index("ix_speaking_questions_type", "type"),
        Index("ix_speaking_questions_created_at", "created_at"),
    )


class SpeakingWordRepetition(ChildTimestampsMixin, Base):
    __tablename__ = "speaking_word_repetitions"

    speaking_question_id = _speaking_parent_fk()
    word = Column(Text, nullable=False)
    mean = Column(Text, nullable=False)

    __table_args__ = (Index("ix_speaking_word_repetitions_question_id", "speaking_question_id"),)


class SpeakingPhraseRepetition(ChildTimestampsMixin, Base):
    __tablename__ = "speaking_phrase_repetitions"

    speaking_question_id = _speaking_parent_fk()
    phrase = Column(Text, nullable=False)
    mean = Column(Text, nullable=False)

    __table_args__ = (Index("ix_speaking_phrase_repetitions_question_id", "speaking_question_id"),)


class SpeakingParagraphRepetition(ChildTimestampsMixin, Base):
    __tablename__ = "speaking_paragraph_repetitions"

    speaking_question_id = _speaking_parent_fk()
    paragraph = Column(Text, nullable=False)
    mean = Column(Text, nullable=False)

    __table_args__ = (Index("ix_speaking_paragraph_repetitions_question_id", "speaking_question_id"),)


class SpeakingOpenParagraph(ChildTimestampsMixin, Base):
    """Open-ended prompt answered with a free paragraph."""

    __tablename__ = "speaking_open_paragraphs"

    speaking_question_id = _speaking_parent_fk()
    question = Column(Text, nullable=False)
    example_passage = Column(Text, nullable=False)
    mean_of_example_passage = Column(Text, nullable=False)

    __table_args__ = (Index("ix_speaking_open_paragraphs_question_id", "speaking_question_id"),)


class SpeakingConversationalRepetition(ChildTimestampsMixin, Base):
    """Conversation header; its QA lines live in SpeakingConversationalRepetitionQA."""

    __tablename__ = "speaking_conversational_repetitions"

    speaking_question_id = _speaking_parent_fk()
    title = Column(Text, nullable=False)
    overview = Column(Text, nullable=False)

    qas = relationship("SpeakingConversationalRepetitionQA", cascade="all, delete-orphan")

    __table_args__ = (
        UniqueConstraint("speaking_question_id", name="uq_speaking_conversational_repetition_parent"),
    )


class SpeakingConversationalRepetitionQA(ChildTimestampsMixin, Base):
    __tablename__ = "speaking_conversational_repetition_qas"

    speaking_conversational_repetition_id = Column(
        Uuid(as_uuid=True),
        ForeignKey("speaking_conversational_repetitions.id", ondelete="CASCADE"),
        nullable=False,
    )
    question = Column(Text, nullable=False)
    answer = Column(Text, nullable=False)
    mean_of_question = Column(Text, nullable=False)
    mean_of_answer = Column(Text, nullable=False)
    explain = Column(Text, nullable=False)

    __table_args__ = (
        Index("ix_speaking_conv_rep_qas_conversation_id", "speaking_conversational_repetition_id"),
    )


class SpeakingConversationalOpen(ChildTimestampsMixin, Base):
    __tablename__ = "speaking_conversational_opens"

    speaking_question_id = _speaking_parent_fk()
    title = Column(Text, nullable=False)
    overview = Column(Text, nullable=False)
    example_conversation = Column(Text, nullable=False)

    __table_args__ = (
        UniqueConstraint("speaking_question_id", name="uq_speaking_conversational_open_parent"),
    )
