"""
Schema-validated prompt flows for the quiz pipeline
"""
from quizify.flows.base import Flow
from quizify.flows.summarize_content import (
    SummarizeContentFlow,
    SummarizeContentInput,
    SummarizeContentOutput,
)
from quizify.flows.generate_quiz_questions import (
    GenerateQuizQuestionsFlow,
    GenerateQuizQuestionsInput,
    GenerateQuizQuestionsOutput,
    QuizQuestion,
)
from quizify.flows.extract_text_from_pdf import (
    ExtractTextFromPdfFlow,
    ExtractTextFromPdfInput,
    ExtractTextFromPdfOutput,
)
from quizify.flows.extract_content_from_url import (
    ExtractContentFromUrlFlow,
    ExtractContentFromUrlInput,
    ExtractContentFromUrlOutput,
)

__all__ = [
    "Flow",
    "SummarizeContentFlow",
    "SummarizeContentInput",
    "SummarizeContentOutput",
    "GenerateQuizQuestionsFlow",
    "GenerateQuizQuestionsInput",
    "GenerateQuizQuestionsOutput",
    "QuizQuestion",
    "ExtractTextFromPdfFlow",
    "ExtractTextFromPdfInput",
    "ExtractTextFromPdfOutput",
    "ExtractContentFromUrlFlow",
    "ExtractContentFromUrlInput",
    "ExtractContentFromUrlOutput",
]
