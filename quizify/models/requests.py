"""
Pydantic models for API requests
"""
from typing import Dict, List, Optional
from pydantic import BaseModel, Field

from quizify.flows.generate_quiz_questions import Difficulty, QuestionFormat, QuizQuestion


class SummarizeRequest(BaseModel):
    """Request model for summarization"""
    content: str = Field(..., description="Content to summarize")


class GenerateQuizRequest(BaseModel):
    """Request model for quiz generation"""
    content: str = Field(..., min_length=1, description="Summary or content to build questions from")
    subject: Optional[str] = Field(None, description="Subject focus, e.g. Biology")
    difficulty: Optional[Difficulty] = Field(None, description="easy, medium or hard")
    num_questions: Optional[int] = Field(None, ge=1, description="Target number of questions, capped at MAX_NUM_QUESTIONS")
    question_format: Optional[QuestionFormat] = Field(None, description="mcq or true_false")

    model_config = {
        "json_schema_extra": {
            "example": {
                "content": "Photosynthesis converts light energy into chemical energy stored in glucose...",
                "subject": "Biology",
                "difficulty": "medium",
                "num_questions": 5,
                "question_format": "mcq"
            }
        }
    }


class ExtractPdfRequest(BaseModel):
    """Request model for PDF extraction from a data URI"""
    pdf_data_uri: str = Field(..., description="data:application/pdf;base64,<encoded_data>")


class ExtractUrlRequest(BaseModel):
    """Request model for URL content extraction"""
    url: str = Field(..., description="Public URL to fetch")


class ScoreQuizRequest(BaseModel):
    """Request model for stateless scoring"""
    questions: List[QuizQuestion] = Field(..., description="Questions with their correct answers")
    answers: Dict[int, str] = Field(default_factory=dict, description="Selected option per question index")


class SetContentRequest(BaseModel):
    """Pasted content for a session"""
    content: str = Field(..., description="Raw content")


class QuizSettingsRequest(BaseModel):
    """Partial update of session quiz settings"""
    subject: Optional[str] = None
    difficulty: Optional[Difficulty] = None
    num_questions: Optional[int] = Field(None, ge=1)
    question_format: Optional[QuestionFormat] = None


class AnswerRequest(BaseModel):
    """Select an option for one question"""
    question_index: int = Field(..., ge=0)
    option: str
