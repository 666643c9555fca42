"""Parent version counter and validated field updates."""

from collections.abc import Callable
from typing import Any

from app.core.app_exceptions import ValidationError
from app.models.question import utcnow
from app.schemas.question import (
    validate_image_urls,
    validate_instruction,
    validate_max_time,
    validate_topic,
)

UPDATABLE_FIELDS = {
    "topic": validate_topic,
    "instruction": validate_instruction,
    "image_urls": validate_image_urls,
    "max_time": validate_max_time,
}


def bump_version(question: Any) -> Any:
    """Increment the parent version by exactly one."""
    question.version = (question.version or 0) + 1
    question.updated_at = utcnow()
    return question


def apply_field_update(
    question: Any,
    field: str,
    value: Any,
    extra_validators: dict[str, Callable[[Any], Any]] | None = None,
) -> Any:
    """Validate and set one parent field, then bump the version.

    `extra_validators` adds the owning domain's own parent columns.
    """
    validators = {**UPDATABLE_FIELDS, **(extra_validators or {})}
    validator = validators.get(field)
    if validator is None:
        raise ValidationError(
            f"field {field!r} cannot be updated",
            details={"field": field, "allowed": sorted(validators)},
        )
    try:
        cleaned = validator(value)
    except ValueError as e:
        raise ValidationError(str(e), details={"field": field}) from e

    setattr(question, field, cleaned)
    return bump_version(question)
