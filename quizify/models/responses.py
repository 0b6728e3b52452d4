"""
Pydantic models for API responses
"""
from typing import List, Optional, Dict
from pydantic import BaseModel, Field

from quizify.flows.generate_quiz_questions import QuizQuestion
from quizify.services.quiz_session import Notice, QuizSession, QuizSettings


class BaseResponse(BaseModel):
    """Base response model"""
    success: bool = Field(..., description="Whether the request was successful")
    message: Optional[str] = Field(None, description="Human-readable message")
    error: Optional[str] = Field(None, description="Error message if unsuccessful")


class SummarizeResponse(BaseResponse):
    """Response model for summarization"""
    summary: Optional[str] = Field(None, description="Model-produced summary")


class GenerateQuizResponse(BaseResponse):
    """Response model for quiz generation"""
    questions: List[QuizQuestion] = Field(default_factory=list, description="Generated questions")

    model_config = {
        "json_schema_extra": {
            "example": {
                "success": True,
                "questions": [
                    {"question": "What is 2+2?", "options": ["3", "4", "5", "6"], "answer": "4"},
                    {"question": "Is the sky blue?", "options": ["True", "False"], "answer": "True"}
                ]
            }
        }
    }


class ExtractTextResponse(BaseResponse):
    """Response model for PDF / URL extraction"""
    extracted_text: Optional[str] = Field(None, description="Extracted text content")


class ScoreResponse(BaseResponse):
    """Response model for scoring"""
    score: int = Field(0, description="Number of matching answers")
    total: int = Field(0, description="Number of questions")
    feedback: Optional[str] = Field(None, description="Encouragement based on the score")


class SessionQuestion(BaseModel):
    """Question as shown to the user; the answer is revealed after submission"""
    question: str
    options: List[str]
    answer: Optional[str] = None
    selected: Optional[str] = None
    correct: Optional[bool] = None


class SessionStateResponse(BaseModel):
    """Snapshot of a quiz session"""
    session_id: str
    active_tab: str
    raw_content: str
    url_input: str
    summary: str
    settings: QuizSettings
    questions: List[SessionQuestion] = Field(default_factory=list)
    submitted: bool = False
    all_answered: bool = False
    score: Optional[int] = None
    total: int = 0
    feedback: Optional[str] = None
    loading: Dict[str, bool] = Field(default_factory=dict)
    notice: Optional[Notice] = Field(None, description="Notice emitted by the last action")

    @classmethod
    def from_session(cls, session: QuizSession, notice: Optional[Notice] = None) -> "SessionStateResponse":
        questions = []
        for index, q in enumerate(session.questions):
            questions.append(SessionQuestion(
                question=q.question,
                options=q.options,
                answer=q.answer if session.submitted else None,
                selected=session.user_answers.get(index),
                correct=session.is_correct(index) if session.submitted else None,
            ))

        return cls(
            session_id=session.id,
            active_tab=session.active_tab,
            raw_content=session.raw_content,
            url_input=session.url_input,
            summary=session.summary,
            settings=session.settings,
            questions=questions,
            submitted=session.submitted,
            all_answered=session.all_answered,
            score=session.score if session.submitted else None,
            total=len(session.questions),
            feedback=session.feedback(),
            loading={
                "summary": session.loading_summary,
                "quiz": session.loading_quiz,
                "pdf": session.loading_pdf,
                "url": session.loading_url,
            },
            notice=notice,
        )

