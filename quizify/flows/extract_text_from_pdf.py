"""
PDF text extraction flow

Extracts text content from a PDF supplied as a base64 data URI. By default the
PDF is handed to the model as an inline document; in ``local`` mode PyMuPDF
extracts the text without a model call.
"""
from typing import Optional

from loguru import logger
from pydantic import AliasChoices, BaseModel, Field

from quizify.core.interfaces.ai_service import AIService, AIResponse
from quizify.core.interfaces.file_loader import FileLoader
from quizify.flows.base import Flow
from quizify.services.file_loaders.pdf_loader import PDFLoader
from quizify.utils.data_uri import parse_data_uri


PDF_MIME_TYPE = "application/pdf"


class ExtractTextFromPdfInput(BaseModel):
    pdf_data_uri: str = Field(
        ...,
        description="A PDF file, as a data URI that must include a MIME type and use Base64 encoding. "
                    "Expected format: 'data:application/pdf;base64,<encoded_data>'."
    )


class ExtractTextFromPdfOutput(BaseModel):
    extracted_text: str = Field(
        ..., validation_alias=AliasChoices("extractedText", "extracted_text"),
        description="The text extracted from the PDF file."
    )


EXTRACT_PDF_PROMPT = """You are an expert document processor. Extract all text content from the provided PDF document.
Return the extracted text. The output should be a JSON object with a single key "extractedText" containing the extracted text."""


class ExtractTextFromPdfFlow(Flow[ExtractTextFromPdfInput, ExtractTextFromPdfOutput]):
    name = "extractTextFromPdfFlow"
    input_model = ExtractTextFromPdfInput
    output_model = ExtractTextFromPdfOutput

    def __init__(self, ai_service: AIService, mode: str = "model", loader: Optional[FileLoader] = None):
        super().__init__(ai_service)
        if mode not in ("model", "local"):
            raise ValueError(f"Unknown PDF extraction mode: {mode}")
        self.mode = mode
        self.loader = loader or PDFLoader()

    async def execute(self, data: ExtractTextFromPdfInput) -> ExtractTextFromPdfOutput:
        mime_type, pdf_bytes = parse_data_uri(data.pdf_data_uri, default_mime=PDF_MIME_TYPE)

        if self.mode == "local":
            document = await self.loader.load(pdf_bytes, "upload.pdf")
            return ExtractTextFromPdfOutput(extracted_text=document.text)

        response = await self.ai_service.process_with_document(
            EXTRACT_PDF_PROMPT, pdf_bytes, mime_type, json_output=True
        )
        output = self.parse_output(response)
        if output is None:
            return self.on_empty_output(response)
        return output

    def on_empty_output(self, response: AIResponse) -> ExtractTextFromPdfOutput:
        logger.error("PDF text extraction failed to produce valid structured output from the model.")
        return ExtractTextFromPdfOutput(extracted_text="")
