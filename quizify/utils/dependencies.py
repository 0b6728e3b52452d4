"""
FastAPI dependency injection utilities

This module provides dependency injection for all services,
ensuring singleton instances and proper initialization.
"""
import functools
from functools import lru_cache
from typing import Dict, Any, List
from fastapi import HTTPException, status, UploadFile
from loguru import logger

from quizify.core.config import settings
from quizify.core.interfaces.ai_service import AIService
from quizify.core.interfaces.file_loader import FileLoader
from quizify.flows import (
    ExtractContentFromUrlFlow,
    ExtractTextFromPdfFlow,
    GenerateQuizQuestionsFlow,
    SummarizeContentFlow,
)
from quizify.services.ai.gemini_service import GeminiService
from quizify.services.file_loaders.pdf_loader import PDFLoader
from quizify.services.file_loaders.text_loader import TextLoader
from quizify.services.quiz_session import QuizFlows, QuizSession
from quizify.services.session_store import SessionStore


@lru_cache()
def get_ai_service() -> AIService:
    """Get singleton Gemini AI service"""
    return GeminiService(
        model_name=settings.model_name,
        temperature=settings.temperature,
    )


@lru_cache()
def get_quiz_flows() -> QuizFlows:
    """Get singleton set of quiz flows sharing one AI service"""
    ai_service = get_ai_service()
    return QuizFlows(
        summarize=SummarizeContentFlow(ai_service),
        generate_quiz=GenerateQuizQuestionsFlow(
            ai_service,
            default_num_questions=settings.default_num_questions,
            max_num_questions=settings.max_num_questions,
        ),
        extract_pdf=ExtractTextFromPdfFlow(ai_service, mode=settings.pdf_extraction_mode),
        extract_url=ExtractContentFromUrlFlow(
            ai_service,
            user_agent=settings.url_user_agent,
            timeout=settings.url_fetch_timeout,
        ),
    )


@lru_cache()
def get_session_store() -> SessionStore:
    """Get singleton in-memory session store"""
    return SessionStore(
        session_factory=lambda: QuizSession(flows=get_quiz_flows()),
        max_sessions=settings.max_sessions,
    )


@lru_cache()
def get_upload_loaders() -> List[FileLoader]:
    """Get loaders for the accepted upload types (.txt, .pdf)"""
    return [TextLoader(), PDFLoader()]


# ============================================================================
# VALIDATION DEPENDENCIES
# ============================================================================

async def validate_upload_file(file: UploadFile) -> UploadFile:
    """
    Validate uploaded file size and type

    Args:
        file: The uploaded file

    Returns:
        The validated file

    Raises:
        HTTPException: If file validation fails
    """
    if file.size and file.size > settings.max_file_size:
        raise HTTPException(
            status_code=status.HTTP_413_REQUEST_ENTITY_TOO_LARGE,
            detail=f"File too large. Maximum size: {settings.max_file_size / 1024 / 1024:.1f}MB"
        )

    if file.filename:
        file_extension = file.filename.rsplit('.', 1)[-1].lower() if '.' in file.filename else ""
        loaders = get_upload_loaders()
        if not any(loader.supports_file_type(file_extension) for loader in loaders):
            allowed = sorted(ext for loader in loaders for ext in loader.get_supported_extensions())
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail=f"Unsupported file type. Allowed: {', '.join(allowed)}"
            )

    return file


# ============================================================================
# SERVICE HEALTH CHECKS
# ============================================================================

async def check_services_health() -> Dict[str, Dict[str, Any]]:
    """
    Check health of all services

    Returns:
        Dictionary with health status of all services
    """
    health_status = {}

    try:
        ai_service = get_ai_service()
        stats = await ai_service.get_statistics()
        health_status["ai_service"] = {
            "status": "healthy" if stats.get("available") else "unconfigured",
            "name": stats.get("service_name"),
            "model": stats.get("model_name"),
            "api_key_source": stats.get("api_key_source"),
        }
    except Exception as e:
        health_status["ai_service"] = {
            "status": "unhealthy",
            "error": str(e)
        }

    health_status["sessions"] = {
        "status": "healthy",
        "active": len(get_session_store()),
    }

    return health_status


# ============================================================================
# ERROR HANDLING DECORATORS
# ============================================================================

def handle_service_errors(func):
    """
    Decorator to handle common service errors

    Converts service exceptions to appropriate HTTP responses
    """

    @functools.wraps(func)
    async def wrapper(*args, **kwargs):
        try:
            return await func(*args, **kwargs)
        except HTTPException:
            # Re-raise HTTP exceptions as-is
            raise
        except KeyError as e:
            logger.error(f"Not found in {func.__name__}: {e}")
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail=str(e.args[0]) if e.args else "Requested resource not found"
            )
        except ValueError as e:
            logger.error(f"Validation error in {func.__name__}: {e}")
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail=str(e)
            )
        except Exception as e:
            logger.error(f"Unexpected error in {func.__name__}: {e}")
            raise HTTPException(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                detail="An unexpected error occurred"
            )

    return wrapper
