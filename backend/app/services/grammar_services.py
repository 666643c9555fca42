"""Grammar service bundle."""

from dataclasses import dataclass

from app.questions import grammar as g
from app.questions.grammar import GRAMMAR
from app.questions.updator import QuestionUpdator, create_question_updator
from app.schemas import grammar as schemas
from app.services.child_service import ChildService, ChoiceOneOptionService
from app.services.question_service import QuestionService


@dataclass
class GrammarServices:
    questions: QuestionService
    fill_in_the_blank_questions: ChildService
    fill_in_the_blank_answers: ChildService
    choice_one_questions: ChildService
    choice_one_options: ChoiceOneOptionService
    error_identifications: ChildService
    sentence_transformations: ChildService


def build_grammar_services(updator: QuestionUpdator | None = None) -> GrammarServices:
    """All grammar services sharing one updator (and so one cache/search wiring)."""
    updator = updator or create_question_updator(GRAMMAR)
    return GrammarServices(
        questions=QuestionService(updator),
        fill_in_the_blank_questions=ChildService(
            updator,
            g.fill_in_the_blank_question_store,
            schemas.FillInTheBlankQuestionCreate,
            schemas.FillInTheBlankQuestionUpdate,
            schemas.FillInTheBlankQuestionOut,
        ),
        fill_in_the_blank_answers=ChildService(
            updator,
            g.fill_in_the_blank_answer_store,
            schemas.FillInTheBlankAnswerCreate,
            schemas.FillInTheBlankAnswerUpdate,
            schemas.FillInTheBlankAnswerOut,
            parent_store=g.fill_in_the_blank_question_store,
        ),
        choice_one_questions=ChildService(
            updator,
            g.choice_one_question_store,
            schemas.ChoiceOneQuestionCreate,
            schemas.ChoiceOneQuestionUpdate,
            schemas.ChoiceOneQuestionOut,
        ),
        choice_one_options=ChoiceOneOptionService(
            updator,
            g.choice_one_option_store,
            schemas.ChoiceOneOptionCreate,
            schemas.ChoiceOneOptionUpdate,
            schemas.ChoiceOneOptionOut,
            parent_store=g.choice_one_question_store,
        ),
        error_identifications=ChildService(
            updator,
            g.error_identification_store,
            schemas.ErrorIdentificationCreate,
            schemas.ErrorIdentificationUpdate,
            schemas.ErrorIdentificationOut,
        ),
        sentence_transformations=ChildService(
            updator,
            g.sentence_transformation_store,
            schemas.SentenceTransformationCreate,
            schemas.SentenceTransformationUpdate,
            schemas.SentenceTransformationOut,
        ),
    )
