"""Variant registry: one table per skill domain, keyed by the type discriminator."""

from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Any
from uuid import UUID

from sqlalchemy.orm import Session

from app.core.app_exceptions import UnknownTypeError
from app.core.config import settings
from app.schemas.question import QuestionCreate

PayloadLoader = Callable[[Session, UUID], Any]


@dataclass(frozen=True)
class VariantSpec:
    """How one question kind is loaded, judged complete and indexed.

    loader: returns the variant payload, or None when no child data exists yet.
    is_complete: pure check on that payload (never called with None).
    search_fields: field name -> payload slice for the search document.
    child_models: child tables whose rows belong to this kind.
    """

    kind: str
    loader: PayloadLoader
    is_complete: Callable[[Any], bool]
    search_fields: dict[str, Callable[[Any], Any]] = field(default_factory=dict)
    child_models: tuple[type, ...] = ()


@dataclass(frozen=True)
class ParentField:
    """Domain-specific parent column (listening audio, reading passages, ...).

    validate: shared by create and field updates; raises ValueError.
    mapping: Elasticsearch property for the column in the search document.
    """

    validate: Callable[[Any], Any]
    mapping: dict[str, Any]


class SkillDomain:
    """A question family (grammar, speaking, ...) with its own table, cache prefix and index."""

    def __init__(
        self,
        name: str,
        parent_model: type,
        detail_model: type,
        create_model: type = QuestionCreate,
        parent_fields: dict[str, ParentField] | None = None,
    ):
        self.name = name
        self.parent_model = parent_model
        self.detail_model = detail_model
        self.create_model = create_model
        self.parent_fields = dict(parent_fields or {})
        self._variants: dict[str, VariantSpec] = {}

    @property
    def cache_prefix(self) -> str:
        return f"{self.name}_question"

    @property
    def index_name(self) -> str:
        return f"{settings.ELASTICSEARCH_INDEX_PREFIX}{self.name}_questions"

    def register(self, spec: VariantSpec) -> VariantSpec:
        if spec.kind in self._variants:
            raise ValueError(f"{self.name} variant {spec.kind} already registered")
        self._variants[spec.kind] = spec
        return spec

    def variant(self, kind: str) -> VariantSpec:
        try:
            return self._variants[kind]
        except KeyError:
            raise UnknownTypeError(
                f"unknown {self.name} question type: {kind}",
                details={"domain": self.name, "type": kind},
            ) from None

    def has_kind(self, kind: str) -> bool:
        return kind in self._variants

    @property
    def kinds(self) -> list[str]:
        return list(self._variants)

    @property
    def specs(self) -> list[VariantSpec]:
        return list(self._variants.values())

    def search_field_names(self) -> list[str]:
        """Every type-specific field across the domain, in registration order."""
        names: list[str] = []
        for spec in self._variants.values():
            for name in spec.search_fields:
                if name not in names:
                    names.append(name)
        return names

    def kind_for_child(self, model: type) -> list[str]:
        return [spec.kind for spec in self._variants.values() if model in spec.child_models]

    def field_validators(self) -> dict[str, Callable[[Any], Any]]:
        return {name: parent_field.validate for name, parent_field in self.parent_fields.items()}

    def parent_field_mappings(self) -> dict[str, dict[str, Any]]:
        return {name: parent_field.mapping for name, parent_field in self.parent_fields.items()}

    def __repr__(self) -> str:
        return f"SkillDomain({self.name!r}, kinds={self.kinds})"


def dump_search_value(value: Any) -> Any:
    """JSON-ready form of a payload slice; single rows drop the discriminator."""
    if isinstance(value, list):
        return [item.model_dump(mode="json") for item in value]
    return value.model_dump(mode="json", exclude={"kind"})


def is_present(payload: Any) -> bool:
    return payload is not None
