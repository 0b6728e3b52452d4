"""
Quiz session controller

Mirrors the state of one browser page: the content being worked on, its
summary, the quiz settings, the generated questions, the user's answers and
the loading flags. Each step awaits its flow to completion before the next one
can start, and every outcome is reported as a Notice (a toast in the browser)
instead of an exception.
"""
import uuid
from dataclasses import dataclass
from typing import Dict, List, Literal, Mapping, Optional, Sequence

from loguru import logger
from pydantic import BaseModel, Field, ValidationError, field_validator

from quizify.core.config import settings as app_settings
from quizify.core.interfaces.file_loader import FileLoader
from quizify.flows import (
    ExtractContentFromUrlFlow,
    ExtractContentFromUrlInput,
    ExtractTextFromPdfFlow,
    GenerateQuizQuestionsFlow,
    GenerateQuizQuestionsInput,
    QuizQuestion,
    SummarizeContentFlow,
)
from quizify.flows.generate_quiz_questions import Difficulty, QuestionFormat
from quizify.services.file_loaders.text_loader import TextLoader
from quizify.utils.data_uri import to_data_uri


ERROR_PREFIX = "Error:"
TEXT_MIME_TYPE = "text/plain"
PDF_MIME_TYPE = "application/pdf"


class QuizSettings(BaseModel):
    """User preferences for quiz generation"""
    subject: str = ""
    difficulty: Difficulty = "medium"
    num_questions: Optional[int] = Field(default_factory=lambda: app_settings.default_num_questions, ge=1)
    question_format: QuestionFormat = "mcq"

    @field_validator("num_questions")
    @classmethod
    def cap_num_questions(cls, value: Optional[int]) -> Optional[int]:
        if value is None:
            return value
        return min(value, app_settings.max_num_questions)


class Notice(BaseModel):
    """User-visible status message"""
    title: str
    description: Optional[str] = None
    variant: Literal["default", "destructive"] = "default"


@dataclass
class QuizFlows:
    """The flows a session drives"""
    summarize: SummarizeContentFlow
    generate_quiz: GenerateQuizQuestionsFlow
    extract_pdf: ExtractTextFromPdfFlow
    extract_url: ExtractContentFromUrlFlow


def score_answers(questions: Sequence[QuizQuestion], answers: Mapping[int, str]) -> int:
    """Count the questions whose selected answer string equals the correct answer"""
    return sum(1 for index, question in enumerate(questions) if answers.get(index) == question.answer)


def score_feedback(score: int, total: int) -> str:
    if score == total:
        return "Excellent! Perfect score!"
    if score >= total * 0.7:
        return "Great job!"
    if score >= total * 0.5:
        return "Good effort, keep practicing!"
    return "Keep trying! Review the material and try again."


def _is_error(text: Optional[str]) -> bool:
    return not text or text.startswith(ERROR_PREFIX)


class QuizSession:
    """
    Page-level controller for one quiz-making session

    Args:
        flows: Flows used for extraction, summarization and quiz generation
        text_loader: Loader used for .txt uploads
        session_id: Optional fixed identifier
    """

    def __init__(self, flows: QuizFlows, text_loader: Optional[FileLoader] = None, session_id: Optional[str] = None):
        self.id = session_id or uuid.uuid4().hex
        self.flows = flows
        self.text_loader = text_loader or TextLoader()

        self.active_tab = "paste"
        self.raw_content = ""
        self.url_input = ""
        self.summary = ""
        self.settings = QuizSettings()
        self.questions: List[QuizQuestion] = []
        self.user_answers: Dict[int, str] = {}
        self.submitted = False
        self.score = 0

        self.loading_summary = False
        self.loading_quiz = False
        self.loading_pdf = False
        self.loading_url = False

    # ------------------------------------------------------------------
    # Derived state

    @property
    def any_loading(self) -> bool:
        return self.loading_summary or self.loading_quiz or self.loading_pdf or self.loading_url

    @property
    def all_answered(self) -> bool:
        return len(self.questions) > 0 and len(self.user_answers) == len(self.questions)

    # ------------------------------------------------------------------
    # Content sources

    async def load_text_file(self, filename: str, content_type: Optional[str], data: bytes) -> Notice:
        """Load an uploaded .txt file into the content area"""
        if content_type != TEXT_MIME_TYPE:
            return self._notify("Invalid file type", "Please upload a .txt file.", destructive=True)
        if self.any_loading:
            return self._busy()

        self.raw_content = ""
        self.reset_quiz_state()
        try:
            document = await self.text_loader.load(data, filename)
        except ValueError as e:
            logger.error(f"Error reading TXT file: {e}")
            return self._notify("Error reading file", "Could not read the TXT file.", destructive=True)

        self.raw_content = document.text
        self.active_tab = "paste"
        return self._notify("TXT file loaded successfully!", "Content loaded into the text area.")

    async def load_pdf(self, content_type: Optional[str], data: bytes) -> Notice:
        """Extract the text of an uploaded PDF into the content area"""
        if content_type != PDF_MIME_TYPE:
            return self._notify("Invalid file type", "Please upload a .pdf file.", destructive=True)
        if self.any_loading:
            return self._busy()

        self.loading_pdf = True
        self.raw_content = ""
        self.reset_quiz_state()
        try:
            result = await self.flows.extract_pdf.run({"pdf_data_uri": to_data_uri(data, PDF_MIME_TYPE)})
        except Exception as e:
            logger.error(f"Error extracting text from PDF: {e}")
            return self._notify(
                "PDF Processing Failed", "An error occurred during AI processing of the PDF.", destructive=True
            )
        finally:
            self.loading_pdf = False

        if _is_error(result.extracted_text):
            return self._notify(
                "PDF Processing Failed",
                result.extracted_text or "Could not extract text from the PDF, or the PDF is empty/unreadable by AI.",
                destructive=True,
            )

        self.raw_content = result.extracted_text
        self.active_tab = "paste"
        return self._notify("PDF content extracted successfully!", "Content loaded into the text area.")

    async def load_url(self, url: str) -> Notice:
        """Fetch a URL and load its main text into the content area"""
        self.url_input = url
        if not url.strip():
            return self._notify("URL is empty", "Please provide a URL to fetch content from.", destructive=True)
        try:
            payload = ExtractContentFromUrlInput(url=url.strip())
        except ValidationError:
            return self._notify("Invalid URL", "Please enter a valid URL (e.g., https://example.com).", destructive=True)
        if self.any_loading:
            return self._busy()

        self.loading_url = True
        self.raw_content = ""
        self.reset_quiz_state()
        try:
            result = await self.flows.extract_url.run(payload)
        except Exception as e:
            logger.error(f"Error fetching content from URL: {e}")
            return self._notify("URL Fetching Error", str(e) or "An unexpected error occurred.", destructive=True)
        finally:
            self.loading_url = False

        if _is_error(result.extracted_text):
            return self._notify(
                "URL Fetching Failed",
                result.extracted_text or "Could not extract text from the URL.",
                destructive=True,
            )

        self.raw_content = result.extracted_text
        self.active_tab = "paste"
        return self._notify("URL content fetched successfully!", "Content loaded into the text area.")

    def set_content(self, content: str) -> Optional[Notice]:
        """Pasted text"""
        if self.any_loading:
            return self._busy()
        self.raw_content = content
        return None

    # ------------------------------------------------------------------
    # Summary and quiz

    async def summarize(self) -> Notice:
        if not self.raw_content.strip():
            return self._notify("Content is empty", "Please provide some content to summarize.", destructive=True)
        if self.any_loading:
            return self._busy()

        self.loading_summary = True
        self.summary = ""
        self.questions = []
        self.user_answers = {}
        self.submitted = False
        try:
            result = await self.flows.summarize.run({"content": self.raw_content})
        except Exception as e:
            logger.error(f"Error summarizing content: {e}")
            return self._notify(
                "Summarization failed", "Could not summarize the content. Please try again.", destructive=True
            )
        finally:
            self.loading_summary = False

        if _is_error(result.summary):
            return self._notify(
                "Summarization Failed",
                result.summary or "The AI could not summarize the content.",
                destructive=True,
            )

        self.summary = result.summary
        return self._notify("Content summarized successfully!")

    def update_settings(self, **fields) -> Optional[Notice]:
        """
        Change quiz settings

        Raises:
            pydantic.ValidationError: If a value is invalid
        """
        if self.any_loading:
            return self._busy()
        self.settings = QuizSettings.model_validate({**self.settings.model_dump(), **fields})
        return None

    async def generate_quiz(self) -> Notice:
        if not self.summary.strip():
            return self._notify(
                "Summary is empty", "Please summarize content first to generate a quiz.", destructive=True
            )
        if self.any_loading:
            return self._busy()

        self.loading_quiz = True
        self.questions = []
        self.user_answers = {}
        self.submitted = False
        try:
            payload = GenerateQuizQuestionsInput(
                content=self.summary,
                subject=self.settings.subject or None,
                difficulty=self.settings.difficulty,
                num_questions=self.settings.num_questions,
                question_format=self.settings.question_format,
            )
            result = await self.flows.generate_quiz.run(payload)
        except Exception as e:
            logger.error(f"Error generating quiz: {e}")
            return self._notify(
                "Quiz generation failed", "Could not generate the quiz. Please try again.", destructive=True
            )
        finally:
            self.loading_quiz = False

        if not result.questions:
            return self._notify(
                "Quiz Generation Failed",
                "No questions were generated. The summary might be too short, or the AI could not fulfill "
                "the request with the current settings.",
            )

        self.questions = list(result.questions)
        return self._notify("Quiz generated successfully!")

    def answer(self, index: int, option: str) -> Optional[Notice]:
        """
        Record the user's choice for one question

        Raises:
            ValueError: After submission, for an unknown question or option
        """
        if self.any_loading:
            return self._busy()
        if self.submitted:
            raise ValueError("Quiz already submitted")
        if not 0 <= index < len(self.questions):
            raise ValueError(f"No question at index {index}")
        if option not in self.questions[index].options:
            raise ValueError(f"'{option}' is not an option of question {index + 1}")
        self.user_answers[index] = option
        return None

    def submit(self) -> Notice:
        if self.any_loading:
            return self._busy()
        if not self.all_answered:
            return self._notify(
                "Quiz incomplete", "Please answer every question before submitting.", destructive=True
            )
        self.score = score_answers(self.questions, self.user_answers)
        self.submitted = True
        logger.info(f"📝 Session {self.id[:8]} scored {self.score}/{len(self.questions)}")
        return self._notify("Quiz Submitted!", f"You scored {self.score} out of {len(self.questions)}.")

    def feedback(self) -> Optional[str]:
        if not self.submitted:
            return None
        return score_feedback(self.score, len(self.questions))

    def is_correct(self, index: int) -> bool:
        return self.user_answers.get(index) == self.questions[index].answer

    # ------------------------------------------------------------------
    # Resetting

    def reset_quiz_state(self) -> None:
        self.summary = ""
        self.questions = []
        self.user_answers = {}
        self.submitted = False
        self.score = 0

    def start_new(self) -> Optional[Notice]:
        if self.any_loading:
            return self._busy()
        self.active_tab = "paste"
        self.raw_content = ""
        self.url_input = ""
        self.reset_quiz_state()
        return None

    # ------------------------------------------------------------------
    # Printing

    def render_printable(self) -> str:
        """Plain-text rendition of the quiz (and results once submitted)"""
        title = "Quiz"
        if self.settings.subject:
            title += f" - {self.settings.subject}"
        lines = [title, "=" * len(title), ""]

        if self.submitted:
            lines += [f"Score: {self.score} / {len(self.questions)}", self.feedback(), ""]

        for index, question in enumerate(self.questions):
            lines.append(f"{index + 1}. {question.question}")
            selected = self.user_answers.get(index)
            for option in question.options:
                marker = "(x)" if option == selected else "( )"
                suffix = ""
                if self.submitted and option == question.answer:
                    suffix = "  [correct]"
                elif self.submitted and option == selected:
                    suffix = "  [your answer]"
                lines.append(f"   {marker} {option}{suffix}")
            if self.submitted:
                if self.is_correct(index):
                    lines.append("   Your answer was correct.")
                else:
                    lines.append(f"   Your answer was incorrect. Correct Answer: {question.answer}")
            lines.append("")

        return "\n".join(lines).rstrip() + "\n"

    # ------------------------------------------------------------------

    def _busy(self) -> Notice:
        return self._notify("Busy", "Please wait for the current step to finish.", destructive=True)

    def _notify(self, title: str, description: Optional[str] = None, destructive: bool = False) -> Notice:
        notice = Notice(title=title, description=description, variant="destructive" if destructive else "default")
        log = logger.warning if destructive else logger.info
        log(f"Session {self.id[:8]}: {title}" + (f" - {description}" if description else ""))
        return notice
