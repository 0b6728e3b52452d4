"""
Gemini AI Service Implementation
"""
from typing import Optional, Dict, Any, Union, List
from google.generativeai import GenerativeModel
from google.generativeai.types import HarmCategory, HarmBlockThreshold
import google.generativeai as genai
from loguru import logger

from quizify.core.interfaces.ai_service import AIService, AIResponse
from quizify.core.credentials import get_google_api_key, get_api_key_source


class GeminiService(AIService):
    """
    Google Gemini AI service implementation

    Features:
    - API key resolved per request (developer override or GOOGLE_API_KEY)
    - Support for text and inline document inputs
    - JSON-mode responses for structured flows
    - Safety settings configuration

    Each call is a single attempt; failures come back as an unsuccessful
    AIResponse instead of an exception.
    """

    def __init__(self, model_name: str = "gemini-2.0-flash", temperature: float = 0.4):
        """
        Initialize Gemini service

        Args:
            model_name: Default Gemini model
            temperature: Default sampling temperature
        """
        self.model_name = model_name
        self.temperature = temperature

        # Safety settings
        self.safety_settings = {
            HarmCategory.HARM_CATEGORY_HARASSMENT: HarmBlockThreshold.BLOCK_MEDIUM_AND_ABOVE,
            HarmCategory.HARM_CATEGORY_HATE_SPEECH: HarmBlockThreshold.BLOCK_MEDIUM_AND_ABOVE,
            HarmCategory.HARM_CATEGORY_SEXUALLY_EXPLICIT: HarmBlockThreshold.BLOCK_MEDIUM_AND_ABOVE,
            HarmCategory.HARM_CATEGORY_DANGEROUS_CONTENT: HarmBlockThreshold.BLOCK_MEDIUM_AND_ABOVE,
        }

        logger.info(f"Initialized GeminiService with model {self.model_name}")

    async def generate_text(
        self,
        prompt: str,
        json_output: bool = False,
        model_name: Optional[str] = None,
        temperature: Optional[float] = None,
        max_tokens: Optional[int] = None,
        **kwargs
    ) -> AIResponse:
        """
        Generate text response from prompt

        Args:
            prompt: The full prompt
            json_output: Request an application/json response
            model_name: Optional model override
            temperature: Generation temperature (0.0-2.0)
            max_tokens: Maximum tokens to generate

        Returns:
            AIResponse with generated text or error
        """
        return await self._generate(
            content=prompt,
            model_name=model_name or self.model_name,
            json_output=json_output,
            temperature=temperature,
            max_tokens=max_tokens,
            **kwargs
        )

    async def process_with_document(
        self,
        prompt: str,
        data: bytes,
        mime_type: str,
        json_output: bool = False,
        model_name: Optional[str] = None,
        **kwargs
    ) -> AIResponse:
        """
        Process prompt with an inline document part

        Args:
            prompt: Text prompt
            data: Raw document bytes
            mime_type: Document MIME type, e.g. application/pdf
            json_output: Request an application/json response
            model_name: Optional model override

        Returns:
            AIResponse with processed result
        """
        content = [
            {"text": prompt},
            {
                "inline_data": {
                    "mime_type": mime_type,
                    "data": data
                }
            }
        ]
        return await self._generate(
            content=content,
            model_name=model_name or self.model_name,
            json_output=json_output,
            **kwargs
        )

    def get_service_name(self) -> str:
        """Return the name of the AI service"""
        return "Google Gemini"

    def is_available(self) -> bool:
        """Check if the service is available/configured"""
        return bool(get_google_api_key())

    async def _generate(
        self,
        content: Union[str, List[Any]],
        model_name: str,
        json_output: bool = False,
        temperature: Optional[float] = None,
        max_tokens: Optional[int] = None,
        **kwargs
    ) -> AIResponse:
        """Run one generation request against Gemini"""
        api_key = get_google_api_key()
        if not api_key:
            logger.error("❌ No Google API key configured")
            return AIResponse(
                success=False,
                error="No Google API key configured. Set GOOGLE_API_KEY or provide a development key."
            )

        generation_config: Dict[str, Any] = {
            "temperature": self.temperature if temperature is None else temperature,
            "max_output_tokens": max_tokens,
            "top_p": kwargs.get("top_p", 0.95),
            "top_k": kwargs.get("top_k", 40),
        }
        if json_output:
            generation_config["response_mime_type"] = "application/json"

        try:
            genai.configure(api_key=api_key)
            model = GenerativeModel(
                model_name=model_name,
                safety_settings=self.safety_settings,
            )

            response = await model.generate_content_async(
                content,
                generation_config=generation_config
            )
            result_text = response.text

            logger.info(f"✅ Gemini request successful with key {api_key[:8]}...")

            return AIResponse(
                success=True,
                content=result_text,
                metadata={
                    "model": model_name,
                    "api_key_prefix": api_key[:8] + "...",
                }
            )

        except Exception as error:
            logger.error(f"❌ Gemini request failed with key {api_key[:8]}...: {error}")
            return AIResponse(
                success=False,
                error=str(error),
                metadata={"model": model_name}
            )

    async def get_statistics(self) -> Dict[str, Any]:
        """
        Get service statistics

        Returns:
            Dictionary with service statistics
        """
        return {
            "service_name": self.get_service_name(),
            "model_name": self.model_name,
            "temperature": self.temperature,
            "api_key_source": get_api_key_source(),
            "available": self.is_available(),
        }
