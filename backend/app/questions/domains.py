"""Lookup of registered skill domains."""

from app.questions.grammar import GRAMMAR
from app.questions.listening import LISTENING
from app.questions.reading import READING
from app.questions.registry import SkillDomain
from app.questions.speaking import SPEAKING
from app.questions.writing import WRITING

DOMAINS: dict[str, SkillDomain] = {
    domain.name: domain for domain in (GRAMMAR, LISTENING, READING, SPEAKING, WRITING)
}


def get_domain(name: str) -> SkillDomain:
    try:
        return DOMAINS[name]
    except KeyError:
        raise ValueError(f"unknown skill domain: {name}") from None
