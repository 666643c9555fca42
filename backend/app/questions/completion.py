"""Completion evaluation for assembled question aggregates.

Completion is advisory: it never blocks persistence and never raises. An
aggregate is complete when its variant carries the minimum child data needed
to present the question to a learner.
"""

from app.questions.registry import SkillDomain
from app.schemas.question import COMPLETE, UNCOMPLETE, QuestionDetail


def is_complete(domain: SkillDomain, detail: QuestionDetail) -> bool:
    """Pure check on the aggregate; unknown kinds and missing payloads are incomplete."""
    if detail.payload is None or not domain.has_kind(detail.type):
        return False
    spec = domain.variant(detail.type)
    if getattr(detail.payload, "kind", detail.type) != spec.kind:
        return False
    return bool(spec.is_complete(detail.payload))


def completion_status(complete: bool) -> str:
    return COMPLETE if complete else UNCOMPLETE


MIN_CHOICE_ONE_OPTIONS = 2
MIN_CHOICE_MULTI_OPTIONS = 3
MIN_CHOICE_MULTI_CORRECT = 2


def choice_one_ready(options: list) -> bool:
    """At least two options, with both a correct and an incorrect one."""
    if len(options) < MIN_CHOICE_ONE_OPTIONS:
        return False
    return any(o.is_correct for o in options) and any(not o.is_correct for o in options)


def choice_multi_ready(options: list) -> bool:
    """At least three options: two or more correct and at least one incorrect."""
    if len(options) < MIN_CHOICE_MULTI_OPTIONS:
        return False
    correct = sum(1 for o in options if o.is_correct)
    return correct >= MIN_CHOICE_MULTI_CORRECT and correct < len(options)
