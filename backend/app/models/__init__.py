"""Database models."""

# Import all models here so metadata.create_all sees every table
from app.models.grammar import (
    GrammarChoiceOneOption,
    GrammarChoiceOneQuestion,
    GrammarErrorIdentification,
    GrammarFillInTheBlankAnswer,
    GrammarFillInTheBlankQuestion,
    GrammarQuestion,
    GrammarQuestionType,
    GrammarSentenceTransformation,
)
from app.models.listening import (
    ListeningChoiceMultiOption,
    ListeningChoiceMultiQuestion,
    ListeningChoiceOneOption,
    ListeningChoiceOneQuestion,
    ListeningFillInTheBlankAnswer,
    ListeningFillInTheBlankQuestion,
    ListeningMapLabelling,
    ListeningMatching,
    ListeningQuestion,
    ListeningQuestionType,
)
from app.models.reading import (
    ReadingChoiceMultiOption,
    ReadingChoiceMultiQuestion,
    ReadingChoiceOneOption,
    ReadingChoiceOneQuestion,
    ReadingFillInTheBlankAnswer,
    ReadingFillInTheBlankQuestion,
    ReadingMatching,
    ReadingQuestion,
    ReadingQuestionType,
    ReadingTrueFalse,
)
from app.models.speaking import (
    SpeakingConversationalOpen,
    SpeakingConversationalRepetition,
    SpeakingConversationalRepetitionQA,
    SpeakingOpenParagraph,
    SpeakingParagraphRepetition,
    SpeakingPhraseRepetition,
    SpeakingQuestion,
    SpeakingQuestionType,
    SpeakingWordRepetition,
)
from app.models.writing import WritingEssay, WritingQuestion, WritingQuestionType, WritingSentenceCompletion

__all__ = [
    "GrammarQuestion",
    "GrammarQuestionType",
    "GrammarFillInTheBlankQuestion",
    "GrammarFillInTheBlankAnswer",
    "GrammarChoiceOneQuestion",
    "GrammarChoiceOneOption",
    "GrammarErrorIdentification",
    "GrammarSentenceTransformation",
    "ListeningQuestion",
    "ListeningQuestionType",
    "ListeningFillInTheBlankQuestion",
    "ListeningFillInTheBlankAnswer",
    "ListeningChoiceOneQuestion",
    "ListeningChoiceOneOption",
    "ListeningChoiceMultiQuestion",
    "ListeningChoiceMultiOption",
    "ListeningMapLabelling",
    "ListeningMatching",
    "ReadingQuestion",
    "ReadingQuestionType",
    "ReadingFillInTheBlankQuestion",
    "ReadingFillInTheBlankAnswer",
    "ReadingChoiceOneQuestion",
    "ReadingChoiceOneOption",
    "ReadingChoiceMultiQuestion",
    "ReadingChoiceMultiOption",
    "ReadingMatching",
    "ReadingTrueFalse",
    "SpeakingQuestion",
    "SpeakingQuestionType",
    "SpeakingWordRepetition",
    "SpeakingPhraseRepetition",
    "SpeakingParagraphRepetition",
    "SpeakingOpenParagraph",
    "SpeakingConversationalRepetition",
    "SpeakingConversationalRepetitionQA",
    "SpeakingConversationalOpen",
    "WritingQuestion",
    "WritingQuestionType",
    "WritingSentenceCompletion",
    "WritingEssay",
]
