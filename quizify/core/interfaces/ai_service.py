"""
Abstract base interface for AI services
"""
from abc import ABC, abstractmethod
from typing import Dict, Any, Optional
from pydantic import BaseModel


class AIResponse(BaseModel):
    """Standard AI response format"""
    success: bool
    content: Optional[str] = None
    error: Optional[str] = None
    metadata: Optional[Dict[str, Any]] = None


class AIService(ABC):
    """
    Abstract base class for all AI services

    Flows only talk to this interface, so the provider behind them
    (Gemini, a test double, ...) can be swapped freely.
    """

    @abstractmethod
    async def generate_text(
        self,
        prompt: str,
        json_output: bool = False,
        **kwargs
    ) -> AIResponse:
        """
        Generate text response from prompt

        Args:
            prompt: The full prompt
            json_output: Ask the model to answer with a JSON document
            **kwargs: Additional parameters specific to the service

        Returns:
            AIResponse with generated text or error
        """
        pass

    @abstractmethod
    async def process_with_document(
        self,
        prompt: str,
        data: bytes,
        mime_type: str,
        json_output: bool = False,
        **kwargs
    ) -> AIResponse:
        """
        Process prompt together with an inline document (PDF, image, ...)

        Args:
            prompt: Text prompt
            data: Raw document bytes
            mime_type: MIME type of the document
            json_output: Ask the model to answer with a JSON document
            **kwargs: Additional parameters

        Returns:
            AIResponse with processed result
        """
        pass

    @abstractmethod
    def get_service_name(self) -> str:
        """Return the name of the AI service"""
        pass

    @abstractmethod
    def is_available(self) -> bool:
        """Check if the service is available/configured"""
        pass

    async def get_statistics(self) -> Dict[str, Any]:
        """Basic service information, providers may add more"""
        return {
            "service_name": self.get_service_name(),
            "available": self.is_available(),
        }
