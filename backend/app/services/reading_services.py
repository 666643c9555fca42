"""Reading service bundle."""

from dataclasses import dataclass

from app.questions import reading as rd
from app.questions.reading import READING
from app.questions.updator import QuestionUpdator, create_question_updator
from app.schemas import reading as schemas
from app.services.child_service import ChildService, ChoiceOneOptionService
from app.services.question_service import QuestionService


@dataclass
class ReadingServices:
    questions: QuestionService
    fill_in_the_blank_questions: ChildService
    fill_in_the_blank_answers: ChildService
    choice_one_questions: ChildService
    choice_one_options: ChoiceOneOptionService
    choice_multi_questions: ChildService
    choice_multi_options: ChildService
    matchings: ChildService
    true_falses: ChildService


def build_reading_services(updator: QuestionUpdator | None = None) -> ReadingServices:
    updator = updator or create_question_updator(READING)
    return ReadingServices(
        questions=QuestionService(updator),
        fill_in_the_blank_questions=ChildService(
            updator,
            rd.fill_in_the_blank_question_store,
            schemas.FillInTheBlankQuestionCreate,
            schemas.FillInTheBlankQuestionUpdate,
            schemas.FillInTheBlankQuestionOut,
        ),
        fill_in_the_blank_answers=ChildService(
            updator,
            rd.fill_in_the_blank_answer_store,
            schemas.FillInTheBlankAnswerCreate,
            schemas.FillInTheBlankAnswerUpdate,
            schemas.FillInTheBlankAnswerOut,
            parent_store=rd.fill_in_the_blank_question_store,
        ),
        choice_one_questions=ChildService(
            updator,
            rd.choice_one_question_store,
            schemas.ChoiceQuestionCreate,
            schemas.ChoiceQuestionUpdate,
            schemas.ChoiceQuestionOut,
        ),
        choice_one_options=ChoiceOneOptionService(
            updator,
            rd.choice_one_option_store,
            schemas.ChoiceOneOptionCreate,
            schemas.OptionUpdate,
            schemas.ChoiceOneOptionOut,
            parent_store=rd.choice_one_question_store,
        ),
        choice_multi_questions=ChildService(
            updator,
            rd.choice_multi_question_store,
            schemas.ChoiceQuestionCreate,
            schemas.ChoiceQuestionUpdate,
            schemas.ChoiceQuestionOut,
        ),
        choice_multi_options=ChildService(
            updator,
            rd.choice_multi_option_store,
            schemas.ChoiceMultiOptionCreate,
            schemas.OptionUpdate,
            schemas.ChoiceMultiOptionOut,
            parent_store=rd.choice_multi_question_store,
        ),
        matchings=ChildService(
            updator,
            rd.matching_store,
            schemas.MatchingCreate,
            schemas.MatchingUpdate,
            schemas.MatchingOut,
        ),
        true_falses=ChildService(
            updator,
            rd.true_false_store,
            schemas.TrueFalseCreate,
            schemas.TrueFalseUpdate,
            schemas.TrueFalseOut,
        ),
    )
