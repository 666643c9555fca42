"""Listening service bundle."""

from dataclasses import dataclass

from app.questions import listening as ls
from app.questions.listening import LISTENING
from app.questions.updator import QuestionUpdator, create_question_updator
from app.schemas import listening as schemas
from app.services.child_service import ChildService, ChoiceOneOptionService
from app.services.question_service import QuestionService


@dataclass
class ListeningServices:
    questions: QuestionService
    fill_in_the_blank_questions: ChildService
    fill_in_the_blank_answers: ChildService
    choice_one_questions: ChildService
    choice_one_options: ChoiceOneOptionService
    choice_multi_questions: ChildService
    choice_multi_options: ChildService
    map_labellings: ChildService
    matchings: ChildService


def build_listening_services(updator: QuestionUpdator | None = None) -> ListeningServices:
    updator = updator or create_question_updator(LISTENING)
    return ListeningServices(
        questions=QuestionService(updator),
        fill_in_the_blank_questions=ChildService(
            updator,
            ls.fill_in_the_blank_question_store,
            schemas.FillInTheBlankQuestionCreate,
            schemas.FillInTheBlankQuestionUpdate,
            schemas.FillInTheBlankQuestionOut,
        ),
        fill_in_the_blank_answers=ChildService(
            updator,
            ls.fill_in_the_blank_answer_store,
            schemas.FillInTheBlankAnswerCreate,
            schemas.FillInTheBlankAnswerUpdate,
            schemas.FillInTheBlankAnswerOut,
            parent_store=ls.fill_in_the_blank_question_store,
        ),
        choice_one_questions=ChildService(
            updator,
            ls.choice_one_question_store,
            schemas.ChoiceQuestionCreate,
            schemas.ChoiceQuestionUpdate,
            schemas.ChoiceQuestionOut,
        ),
        choice_one_options=ChoiceOneOptionService(
            updator,
            ls.choice_one_option_store,
            schemas.ChoiceOneOptionCreate,
            schemas.OptionUpdate,
            schemas.ChoiceOneOptionOut,
            parent_store=ls.choice_one_question_store,
        ),
        choice_multi_questions=ChildService(
            updator,
            ls.choice_multi_question_store,
            schemas.ChoiceQuestionCreate,
            schemas.ChoiceQuestionUpdate,
            schemas.ChoiceQuestionOut,
        ),
        # Several options may be correct; no demotion
        choice_multi_options=ChildService(
            updator,
            ls.choice_multi_option_store,
            schemas.ChoiceMultiOptionCreate,
            schemas.OptionUpdate,
            schemas.ChoiceMultiOptionOut,
            parent_store=ls.choice_multi_question_store,
        ),
        map_labellings=ChildService(
            updator,
            ls.map_labelling_store,
            schemas.LabelledRowCreate,
            schemas.LabelledRowUpdate,
            schemas.LabelledRowOut,
        ),
        matchings=ChildService(
            updator,
            ls.matching_store,
            schemas.LabelledRowCreate,
            schemas.LabelledRowUpdate,
            schemas.LabelledRowOut,
        ),
    )
