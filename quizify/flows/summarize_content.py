"""
Summarize content flow

Condenses raw content into a summary that seeds quiz generation.
"""
from pydantic import BaseModel, Field

from quizify.core.interfaces.ai_service import AIResponse
from quizify.flows.base import Flow


class SummarizeContentInput(BaseModel):
    content: str = Field(..., description="The content to summarize.")


class SummarizeContentOutput(BaseModel):
    summary: str = Field(..., description="A concise summary of the content.")


SUMMARIZE_PROMPT = """You are an expert at summarizing study material. Summarize the following content, keeping the key facts, definitions, names, dates and relationships someone would need to answer questions about it. Be concise but do not drop important details.

Content:
{content}

Return the summary. The output should be a JSON object with a single key "summary" containing the summary text."""


class SummarizeContentFlow(Flow[SummarizeContentInput, SummarizeContentOutput]):
    name = "summarizeContentFlow"
    input_model = SummarizeContentInput
    output_model = SummarizeContentOutput

    async def execute(self, data: SummarizeContentInput) -> SummarizeContentOutput:
        if not data.content.strip():
            return SummarizeContentOutput(summary="Error: Content is empty.")
        return await super().execute(data)

    def build_prompt(self, data: SummarizeContentInput) -> str:
        return SUMMARIZE_PROMPT.format(content=data.content)

    def on_empty_output(self, response: AIResponse) -> SummarizeContentOutput:
        if not response.success:
            return SummarizeContentOutput(summary=f"Error: AI summarization failed. {response.error or 'Model error'}")
        return SummarizeContentOutput(summary="Error: AI could not summarize the content.")
