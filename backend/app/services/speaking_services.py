"""Speaking service bundle."""

from dataclasses import dataclass

from app.questions import speaking as s
from app.questions.speaking import SPEAKING
from app.questions.updator import QuestionUpdator, create_question_updator
from app.schemas import speaking as schemas
from app.services.child_service import ChildService
from app.services.question_service import QuestionService


@dataclass
class SpeakingServices:
    questions: QuestionService
    word_repetitions: ChildService
    phrase_repetitions: ChildService
    paragraph_repetitions: ChildService
    open_paragraphs: ChildService
    conversational_repetitions: ChildService
    conversational_repetition_qas: ChildService
    conversational_opens: ChildService


def build_speaking_services(updator: QuestionUpdator | None = None) -> SpeakingServices:
    updator = updator or create_question_updator(SPEAKING)
    return SpeakingServices(
        questions=QuestionService(updator),
        word_repetitions=ChildService(
            updator,
            s.word_repetition_store,
            schemas.WordRepetitionCreate,
            schemas.WordRepetitionUpdate,
            schemas.WordRepetitionOut,
        ),
        phrase_repetitions=ChildService(
            updator,
            s.phrase_repetition_store,
            schemas.PhraseRepetitionCreate,
            schemas.PhraseRepetitionUpdate,
            schemas.PhraseRepetitionOut,
        ),
        paragraph_repetitions=ChildService(
            updator,
            s.paragraph_repetition_store,
            schemas.ParagraphRepetitionCreate,
            schemas.ParagraphRepetitionUpdate,
            schemas.ParagraphRepetitionOut,
        ),
        open_paragraphs=ChildService(
            updator,
            s.open_paragraph_store,
            schemas.OpenParagraphCreate,
            schemas.OpenParagraphUpdate,
            schemas.OpenParagraphOut,
        ),
        conversational_repetitions=ChildService(
            updator,
            s.conversational_repetition_store,
            schemas.ConversationalRepetitionCreate,
            schemas.ConversationalRepetitionUpdate,
            schemas.ConversationalRepetitionOut,
        ),
        conversational_repetition_qas=ChildService(
            updator,
            s.conversational_repetition_qa_store,
            schemas.ConversationalRepetitionQACreate,
            schemas.ConversationalRepetitionQAUpdate,
            schemas.ConversationalRepetitionQAOut,
            parent_store=s.conversational_repetition_store,
        ),
        conversational_opens=ChildService(
            updator,
            s.conversational_open_store,
            schemas.ConversationalOpenCreate,
            schemas.ConversationalOpenUpdate,
            schemas.ConversationalOpenOut,
        ),
    )
