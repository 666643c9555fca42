"""Writing domain: sentence completion and essay prompts."""

from app.models.writing import WritingEssay, WritingQuestion, WritingQuestionType, WritingSentenceCompletion
from app.questions.loaders import list_loader
from app.questions.registry import SkillDomain, VariantSpec, dump_search_value
from app.schemas.writing import (
    EssayOut,
    EssayPayload,
    SentenceCompletionOut,
    SentenceCompletionPayload,
    WritingQuestionDetail,
)
from app.services.variant_store import VariantStore

sentence_completion_store = VariantStore(WritingSentenceCompletion, "writing_question_id")
essay_store = VariantStore(WritingEssay, "writing_question_id")


def _has_items(payload) -> bool:
    return len(payload.items) > 0


WRITING = SkillDomain("writing", WritingQuestion, WritingQuestionDetail)

WRITING.register(
    VariantSpec(
        kind=WritingQuestionType.SENTENCE_COMPLETION.value,
        loader=list_loader(sentence_completion_store, SentenceCompletionOut, SentenceCompletionPayload),
        is_complete=_has_items,
        search_fields={"sentence_completion": lambda p: dump_search_value(p.items)},
        child_models=(WritingSentenceCompletion,),
    )
)
WRITING.register(
    VariantSpec(
        kind=WritingQuestionType.ESSAY.value,
        loader=list_loader(essay_store, EssayOut, EssayPayload),
        is_complete=_has_items,
        search_fields={"essay": lambda p: dump_search_value(p.items)},
        child_models=(WritingEssay,),
    )
)
