"""
URL content extraction flow

Fetches a web page and asks the model to keep only the main readable text.
Every failure is reported as an ``extracted_text`` starting with "Error:".
"""
from typing import Optional

import httpx
from loguru import logger
from pydantic import AliasChoices, BaseModel, Field, HttpUrl

from quizify.core.interfaces.ai_service import AIService, AIResponse
from quizify.flows.base import Flow


class ExtractContentFromUrlInput(BaseModel):
    url: HttpUrl = Field(..., description="The URL to extract content from.")


class ExtractContentFromUrlOutput(BaseModel):
    extracted_text: str = Field(
        ..., validation_alias=AliasChoices("extractedText", "extracted_text"),
        description="The text extracted from the URL."
    )


EXTRACT_URL_PROMPT = """You are an expert web content extractor. Extract the main readable text content from the following fetched page content. Ignore navigation, ads, footers, and other non-essential elements. Focus on the primary article or body text.

Fetched Content:
{fetched_content}

Return the extracted text. The output should be a JSON object with a single key "extractedText" containing the extracted text."""


class ExtractContentFromUrlFlow(Flow[ExtractContentFromUrlInput, ExtractContentFromUrlOutput]):
    name = "extractContentFromUrlFlow"
    input_model = ExtractContentFromUrlInput
    output_model = ExtractContentFromUrlOutput

    def __init__(
        self,
        ai_service: AIService,
        user_agent: str = "QuizifyAI/1.0",
        timeout: float = 20.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        super().__init__(ai_service)
        self.user_agent = user_agent
        self.timeout = timeout
        self.transport = transport

    async def execute(self, data: ExtractContentFromUrlInput) -> ExtractContentFromUrlOutput:
        url = str(data.url)
        try:
            async with httpx.AsyncClient(
                transport=self.transport,
                timeout=self.timeout,
                follow_redirects=True,
                headers={"User-Agent": self.user_agent},
            ) as client:
                response = await client.get(url)
        except httpx.HTTPError as e:
            logger.error(f"Error fetching URL content: {e}")
            return ExtractContentFromUrlOutput(
                extracted_text=f"Error: Could not fetch content from URL. {str(e) or 'Network error'}"
            )

        if not response.is_success:
            logger.error(f"Failed to fetch URL: {url}, Status: {response.status_code}")
            return ExtractContentFromUrlOutput(
                extracted_text=f"Error: Could not fetch content from URL. Status: {response.status_code}. {response.text}"
            )

        fetched_content = response.text
        if not fetched_content.strip():
            return ExtractContentFromUrlOutput(extracted_text="Error: Fetched content was empty.")

        model_response = await self.ai_service.generate_text(
            EXTRACT_URL_PROMPT.format(fetched_content=fetched_content),
            json_output=True
        )
        output = self.parse_output(model_response)
        if output is None:
            return self.on_empty_output(model_response)
        return output

    def on_empty_output(self, response: AIResponse) -> ExtractContentFromUrlOutput:
        if not response.success:
            logger.error(f"Error processing fetched content with AI model: {response.error}")
            return ExtractContentFromUrlOutput(
                extracted_text=f"Error: AI processing failed. {response.error or 'Model error'}"
            )
        logger.error("URL content extraction failed to produce valid structured output from the model.")
        return ExtractContentFromUrlOutput(extracted_text="Error: AI could not process the fetched content.")
