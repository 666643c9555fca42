"""Pydantic schemas shared by every skill domain's parent question."""

from datetime import UTC, datetime
from typing import Annotated, Any, Literal
from urllib.parse import urlparse
from uuid import UUID

from pydantic import AfterValidator, BaseModel, Field, SerializeAsAny, field_validator

# Validation caps (input hardening)
MAX_TOPIC_LENGTH = 100
MAX_INSTRUCTION_LENGTH = 1000
MAX_IMAGE_URLS = 10
MIN_MAX_TIME = 30
MAX_MAX_TIME = 3600

COMPLETE = "complete"
UNCOMPLETE = "uncomplete"


def _not_blank(value: str) -> str:
    if not value.strip():
        raise ValueError("must not be blank")
    return value


NonBlankStr = Annotated[str, AfterValidator(_not_blank)]


def validate_topic(value: Any) -> list[str]:
    """At least one topic; each non-blank and bounded. Duplicates dropped, order kept."""
    if not isinstance(value, list) or not value:
        raise ValueError("at least one topic is required")
    topics: list[str] = []
    for item in value:
        if not isinstance(item, str) or not item.strip():
            raise ValueError("topic must be a non-empty string")
        if len(item) > MAX_TOPIC_LENGTH:
            raise ValueError(f"topic exceeds {MAX_TOPIC_LENGTH} characters")
        if item not in topics:
            topics.append(item)
    return topics


def validate_instruction(value: Any) -> str:
    if not isinstance(value, str) or not value.strip():
        raise ValueError("instruction is required")
    if len(value) > MAX_INSTRUCTION_LENGTH:
        raise ValueError(f"instruction exceeds {MAX_INSTRUCTION_LENGTH} characters")
    return value


def validate_url_list(value: Any, field: str, max_count: int, required: bool = False) -> list[str]:
    """Absolute URLs only. `required` demands at least one."""
    if value is None:
        value = []
    if not isinstance(value, list):
        raise ValueError(f"{field} must be a list")
    if required and not value:
        raise ValueError(f"at least one entry is required in {field}")
    if len(value) > max_count:
        raise ValueError(f"at most {max_count} entries are allowed in {field}")
    for url in value:
        if not isinstance(url, str):
            raise ValueError(f"{field} entries must be strings")
        parsed = urlparse(url)
        if not parsed.scheme or not parsed.netloc:
            raise ValueError(f"invalid URL in {field}: {url}")
    return list(value)


def validate_image_urls(value: Any) -> list[str]:
    return validate_url_list(value, "image_urls", MAX_IMAGE_URLS)


def validate_max_time(value: Any) -> int:
    """Seconds. JSON clients may send whole numbers as floats."""
    if isinstance(value, bool) or not isinstance(value, int | float):
        raise ValueError("max_time must be a number")
    if isinstance(value, float):
        if not value.is_integer():
            raise ValueError("max_time must be a whole number of seconds")
        value = int(value)
    if value < MIN_MAX_TIME or value > MAX_MAX_TIME:
        raise ValueError(f"max_time must be between {MIN_MAX_TIME} and {MAX_MAX_TIME} seconds")
    return value


class QuestionCreate(BaseModel):
    """Schema for creating a parent question. `type` is checked against the domain registry."""

    type: str = Field(..., min_length=1, max_length=50)
    topic: list[str]
    instruction: str
    image_urls: list[str] = Field(default_factory=list)
    max_time: int | float

    @field_validator("topic", mode="before")
    @classmethod
    def check_topic(cls, v: Any) -> list[str]:
        return validate_topic(v)

    @field_validator("instruction", mode="before")
    @classmethod
    def check_instruction(cls, v: Any) -> str:
        return validate_instruction(v)

    @field_validator("image_urls", mode="before")
    @classmethod
    def check_image_urls(cls, v: Any) -> list[str]:
        return validate_image_urls(v)

    @field_validator("max_time", mode="before")
    @classmethod
    def check_max_time(cls, v: Any) -> int:
        return validate_max_time(v)


class QuestionDetail(BaseModel):
    """Assembled aggregate: parent fields plus the variant payload (None until child data exists)."""

    id: UUID
    type: str
    topic: list[str]
    instruction: str
    image_urls: list[str]
    max_time: int
    version: int
    created_at: datetime
    updated_at: datetime
    payload: Any = None

    @field_validator("created_at", "updated_at")
    @classmethod
    def ensure_aware(cls, v: datetime) -> datetime:
        # SQLite hands back naive datetimes; everything is stored as UTC
        if v.tzinfo is None:
            return v.replace(tzinfo=UTC)
        return v.astimezone(UTC)


class QuestionSearchFilter(BaseModel):
    """Filter for paginated browsing of the search index."""

    type: str | None = None
    topic: list[str] | None = None
    instruction: str | None = Field(None, max_length=MAX_INSTRUCTION_LENGTH)
    metadata: str | None = Field(None, max_length=500, description="Free text over variant fields")
    status: Literal["complete", "uncomplete"] | None = None
    page: int = Field(1, ge=1)
    page_size: int = Field(20, ge=1, le=100)

    @field_validator("topic", mode="before")
    @classmethod
    def split_topics(cls, v: Any) -> Any:
        """Accept `"a,b"` as well as `["a", "b"]`."""
        if isinstance(v, str):
            parts = [p.strip() for p in v.split(",")]
            return [p for p in parts if p] or None
        return v


class QuestionSearchItem(BaseModel):
    question: SerializeAsAny[QuestionDetail]
    status: Literal["complete", "uncomplete"]


class QuestionSearchPage(BaseModel):
    items: list[QuestionSearchItem]
    total: int
    page: int
    page_size: int


class VersionCheck(BaseModel):
    """(id, version the client last saw) pair for the delta query."""

    id: UUID
    version: int = Field(..., ge=0)
