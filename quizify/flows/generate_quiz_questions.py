"""
Quiz question generation flow

Turns a summary into multiple-choice or true/false questions. Malformed or
empty model output yields an empty question list, never an exception.
"""
from typing import List, Literal, Optional, Any

from loguru import logger
from pydantic import BaseModel, Field, ValidationError

from quizify.core.interfaces.ai_service import AIService, AIResponse
from quizify.flows.base import Flow, load_json_payload


Difficulty = Literal["easy", "medium", "hard"]
QuestionFormat = Literal["mcq", "true_false"]

DEFAULT_NUM_QUESTIONS = 5
DEFAULT_QUESTION_FORMAT: QuestionFormat = "mcq"
TRUE_FALSE_OPTIONS = ["True", "False"]


class GenerateQuizQuestionsInput(BaseModel):
    content: str = Field(..., description="The content to generate quiz questions from.")
    subject: Optional[str] = Field(
        None,
        description="The subject of the quiz (e.g., science, history). The quiz should focus on aspects of the content related to this subject."
    )
    difficulty: Optional[Difficulty] = Field(None, description="The difficulty level of the quiz.")
    num_questions: Optional[int] = Field(
        None, gt=0,
        description="The desired number of questions. Generate as close to this number as possible."
    )
    question_format: Optional[QuestionFormat] = Field(
        None,
        description="'mcq' for multiple-choice (4 options), 'true_false' for True/False questions."
    )


class QuizQuestion(BaseModel):
    question: str = Field(..., min_length=1, description="The quiz question.")
    options: List[str] = Field(..., min_length=2, description="The answer options.")
    answer: str = Field(..., description="The correct answer, one of the options.")


class GenerateQuizQuestionsOutput(BaseModel):
    questions: List[QuizQuestion] = Field(default_factory=list, description="The generated quiz questions.")


def build_quiz_prompt(data: GenerateQuizQuestionsInput) -> str:
    lines = [
        "You are an expert quiz creator. Given the following content, generate a quiz based on the specifications.",
        "",
        "Content:",
        data.content,
        "",
        "Quiz Specifications:",
    ]
    if data.subject:
        lines.append(f"Subject Focus: {data.subject}")
    if data.difficulty:
        lines.append(f"Difficulty: {data.difficulty}")
    if data.num_questions:
        lines.append(
            f"Target Number of Questions: {data.num_questions} (Generate as close to this number as possible "
            "based on the content. If not specified, generate a suitable number, e.g., 5-10 questions if content allows.)"
        )
    else:
        lines.append("Generate a suitable number of questions (e.g., 5-10) based on the content.")
    if data.question_format:
        lines.append(
            f"Preferred Question Format: {data.question_format} (If 'mcq', provide 4 distinct multiple-choice options. "
            "If 'true_false', provide \"True\" and \"False\" as options. Default to 'mcq' if format is not specified or unclear.)"
        )
    else:
        lines.append("Question Format: Default to multiple-choice (mcq) with 4 options.")

    lines += [
        "",
        "For each question, you MUST provide:",
        '- "question": The quiz question text.',
        '- "options": An array of strings. For MCQs, this must be exactly 4 options. For True/False, this must be ["True", "False"].',
        '- "answer": The correct answer string, which must be one of the provided options.',
        "",
        'Format the output as a JSON object with a single key "questions" holding an array of objects, '
        "where each object adheres to the structure described above.",
        'Example for MCQ: { "question": "What is 2+2?", "options": ["3", "4", "5", "6"], "answer": "4" }',
        'Example for True/False: { "question": "Is the sky blue?", "options": ["True", "False"], "answer": "True" }',
        "Ensure the options for MCQ are plausible distractors.",
    ]
    return "\n".join(lines)


class GenerateQuizQuestionsFlow(Flow[GenerateQuizQuestionsInput, GenerateQuizQuestionsOutput]):
    name = "generateQuizQuestionsFlow"
    input_model = GenerateQuizQuestionsInput
    output_model = GenerateQuizQuestionsOutput

    def __init__(self, ai_service: AIService, default_num_questions: int = DEFAULT_NUM_QUESTIONS,
                 max_num_questions: Optional[int] = None):
        super().__init__(ai_service)
        self.default_num_questions = default_num_questions
        self.max_num_questions = max_num_questions

    async def execute(self, data: GenerateQuizQuestionsInput) -> GenerateQuizQuestionsOutput:
        num_questions = data.num_questions or self.default_num_questions
        if self.max_num_questions:
            num_questions = min(num_questions, self.max_num_questions)
        effective = data.model_copy(update={
            "num_questions": num_questions,
            "question_format": data.question_format or DEFAULT_QUESTION_FORMAT,
        })
        return await super().execute(effective)

    def build_prompt(self, data: GenerateQuizQuestionsInput) -> str:
        return build_quiz_prompt(data)

    def parse_output(self, response: AIResponse) -> Optional[GenerateQuizQuestionsOutput]:
        if not response.success or not response.content:
            logger.error(f"Flow {self.name}: model returned no output ({response.error})")
            return None
        try:
            payload = load_json_payload(response.content)
        except ValueError as e:
            logger.error(f"Flow {self.name}: output is not JSON: {e}")
            return None

        # {"questions": [...]} or a bare array
        if isinstance(payload, dict):
            raw_questions = payload.get("questions")
        else:
            raw_questions = payload
        if not isinstance(raw_questions, list):
            logger.error(f"Flow {self.name}: output did not conform to schema")
            return None

        questions = [q for q in (self._coerce_question(item) for item in raw_questions) if q]
        dropped = len(raw_questions) - len(questions)
        if dropped:
            logger.warning(f"Flow {self.name}: dropped {dropped} malformed question(s)")
        return GenerateQuizQuestionsOutput(questions=questions)

    def _coerce_question(self, item: Any) -> Optional[QuizQuestion]:
        try:
            question = QuizQuestion.model_validate(item)
        except ValidationError:
            return None
        # An answer outside the options can never be scored as correct
        if question.answer not in question.options:
            return None
        return question

    def on_empty_output(self, response: AIResponse) -> GenerateQuizQuestionsOutput:
        logger.error("Quiz generation prompt returned no output, or output did not conform to schema.")
        return GenerateQuizQuestionsOutput(questions=[])
