"""Columns shared by every skill domain's parent question table."""

import uuid
from datetime import UTC, datetime

from sqlalchemy import Column, DateTime, Integer, String, Text, Uuid
from sqlalchemy.types import JSON


def utcnow() -> datetime:
    return datetime.now(UTC)


class QuestionColumnsMixin:
    """Parent question record: identity, discriminator, shared fields and version.

    `type` is stored as plain text rather than a DB enum so that a row with an
    unrecognised discriminator is representable and surfaces as a data
    integrity fault when the aggregate is rebuilt.
    """

    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)
    type = Column(String(50), nullable=False)
    topic = Column(JSON, nullable=False, default=list)  # ordered, de-duplicated
    instruction = Column(Text, nullable=False)
    image_urls = Column(JSON, nullable=False, default=list)
    max_time = Column(Integer, nullable=False)  # seconds
    version = Column(Integer, nullable=False, default=1)
    created_at = Column(DateTime(timezone=True), nullable=False, default=utcnow)
    updated_at = Column(DateTime(timezone=True), nullable=False, default=utcnow)


class ChildTimestampsMixin:
    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)
    created_at = Column(DateTime(timezone=True), nullable=False, default=utcnow)
    updated_at = Column(DateTime(timezone=True), nullable=False, default=utcnow, onupdate=utcnow)
