"""Writing service bundle."""

from dataclasses import dataclass

from app.questions import writing as wr
from app.questions.updator import QuestionUpdator, create_question_updator
from app.questions.writing import WRITING
from app.schemas import writing as schemas
from app.services.child_service import WordRangeService
from app.services.question_service import QuestionService


@dataclass
class WritingServices:
    questions: QuestionService
    sentence_completions: WordRangeService
    essays: WordRangeService


def build_writing_services(updator: QuestionUpdator | None = None) -> WritingServices:
    updator = updator or create_question_updator(WRITING)
    return WritingServices(
        questions=QuestionService(updator),
        sentence_completions=WordRangeService(
            updator,
            wr.sentence_completion_store,
            schemas.SentenceCompletionCreate,
            schemas.SentenceCompletionUpdate,
            schemas.SentenceCompletionOut,
        ),
        essays=WordRangeService(
            updator,
            wr.essay_store,
            schemas.EssayCreate,
            schemas.EssayUpdate,
            schemas.EssayOut,
        ),
    )
