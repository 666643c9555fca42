"""Listening question models: audio-backed parent plus one child family per variant."""

from enum import Enum as PyEnum

from sqlalchemy import JSON, Boolean, Column, ForeignKey, Index, Text, UniqueConstraint, Uuid
from sqlalchemy.orm import relationship

from app.db.base import Base
from app.models.question import ChildTimestampsMixin, QuestionColumnsMixin


class ListeningQuestionType(str, PyEnum):
    """Listening variant kinds."""

    FILL_IN_THE_BLANK = "FILL_IN_THE_BLANK"
    CHOICE_ONE = "CHOICE_ONE"
    CHOICE_MULTI = "CHOICE_MULTI"
    MAP_LABELLING = "MAP_LABELLING"
    MATCHING = "MATCHING"


def _listening_parent_fk() -> Column:
    return Column(
        Uuid(as_uuid=True), ForeignKey("listening_questions.id", ondelete="CASCADE"), nullable=False
    )


class ListeningQuestion(QuestionColumnsMixin, Base):
    """Listening parent question. Learners hear `audio_urls`; `transcript` is the spoken text."""

    __tablename__ = "listening_questions"

    audio_urls = Column(JSON, nullable=False, default=list)
    transcript = Column(Text, nullable=False)

    fill_in_the_blank_questions = relationship("ListeningFillInTheBlankQuestion", cascade="all, delete-orphan")
    choice_one_questions = relationship("ListeningChoiceOneQuestion", cascade="all, delete-orphan")
    choice_multi_questions = relationship("ListeningChoiceMultiQuestion", cascade="all, delete-orphan")
    map_labellings = relationship("ListeningMapLabelling", cascade="all, delete-orphan")
    matchings = relationship("ListeningMatching", cascade="all, delete-orphan")

    __table_args__ = (
        Index("ix_listening_questions_type", "type"),
        Index("ix_listening_questions_created_at", "created_at"),
    )


class ListeningFillInTheBlankQuestion(ChildTimestampsMixin, Base):
    __tablename__ = "listening_fill_in_the_blank_questions"

    listening_question_id = _listening_parent_fk()
    question = Column(Text, nullable=False)

    answers = relationship("ListeningFillInTheBlankAnswer", cascade="all, delete-orphan")

    __table_args__ = (UniqueConstraint("listening_question_id", name="uq_listening_fitb_question_parent"),)


class ListeningFillInTheBlankAnswer(ChildTimestampsMixin, Base):
    __tablename__ = "listening_fill_in_the_blank_answers"

    listening_fill_in_the_blank_question_id = Column(
        Uuid(as_uuid=True),
        ForeignKey("listening_fill_in_the_blank_questions.id", ondelete="CASCADE"),
        nullable=False,
    )
    answer = Column(Text, nullable=False)
    explain = Column(Text, nullable=False)

    __table_args__ = (
        Index("ix_listening_fitb_answers_question_id", "listening_fill_in_the_blank_question_id"),
    )


class ListeningChoiceOneQuestion(ChildTimestampsMixin, Base):
    __tablename__ = "listening_choice_one_questions"

    listening_question_id = _listening_parent_fk()
    question = Column(Text, nullable=False)
    explain = Column(Text, nullable=False)

    options = relationship("ListeningChoiceOneOption", cascade="all, delete-orphan")

    __table_args__ = (
        UniqueConstraint("listening_question_id", name="uq_listening_choice_one_question_parent"),
    )


class ListeningChoiceOneOption(ChildTimestampsMixin, Base):
    """At most one option per question has is_correct=True."""

    __tablename__ = "listening_choice_one_options"

    listening_choice_one_question_id = Column(
        Uuid(as_uuid=True),
        ForeignKey("listening_choice_one_questions.id", ondelete="CASCADE"),
        nullable=False,
    )
    options = Column(Text, nullable=False)
    is_correct = Column(Boolean, nullable=False, default=False)

    __table_args__ = (
        Index("ix_listening_choice_one_options_question_id", "listening_choice_one_question_id"),
    )


class ListeningChoiceMultiQuestion(ChildTimestampsMixin, Base):
    __tablename__ = "listening_choice_multi_questions"

    listening_question_id = _listening_parent_fk()
    question = Column(Text, nullable=False)
    explain = Column(Text, nullable=False)

    options = relationship("ListeningChoiceMultiOption", cascade="all, delete-orphan")

    __table_args__ = (
        UniqueConstraint("listening_question_id", name="uq_listening_choice_multi_question_parent"),
    )


class ListeningChoiceMultiOption(ChildTimestampsMixin, Base):
    """Option of a choice-multi question; any number may be correct."""

    __tablename__ = "listening_choice_multi_options"

    listening_choice_multi_question_id = Column(
        Uuid(as_uuid=True),
        ForeignKey("listening_choice_multi_questions.id", ondelete="CASCADE"),
        nullable=False,
    )
    options = Column(Text, nullable=False)
    is_correct = Column(Boolean, nullable=False, default=False)

    __table_args__ = (
        Index("ix_listening_choice_multi_options_question_id", "listening_choice_multi_question_id"),
    )


class ListeningMapLabelling(ChildTimestampsMixin, Base):
    """One labelled point on the map image."""

    __tablename__ = "listening_map_labellings"

    listening_question_id = _listening_parent_fk()
    question = Column(Text, nullable=False)
    answer = Column(Text, nullable=False)
    explain = Column(Text, nullable=False)

    __table_args__ = (Index("ix_listening_map_labellings_question_id", "listening_question_id"),)


class ListeningMatching(ChildTimestampsMixin, Base):
    __tablename__ = "listening_matchings"

    listening_question_id = _listening_parent_fk()
    question = Column(Text, nullable=False)
    answer = Column(Text, nullable=False)
    explain = Column(Text, nullable=False)

    __table_args__ = (Index("ix_listening_matchings_question_id", "listening_question_id"),)
