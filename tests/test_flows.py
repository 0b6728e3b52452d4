from __future__ import annotations

import httpx
import pytest
from pydantic import ValidationError

from quizify.core.interfaces.file_loader import FileLoader, LoadedDocument
from quizify.flows import (
    ExtractContentFromUrlFlow,
    ExtractTextFromPdfFlow,
    GenerateQuizQuestionsFlow,
    SummarizeContentFlow,
)
from quizify.flows.base import load_json_payload


MCQ = {"question": "What is 2+2?", "options": ["3", "4", "5", "6"], "answer": "4"}
TRUE_FALSE = {"question": "Is the sky blue?", "options": ["True", "False"], "answer": "True"}
PDF_URI = "data:application/pdf;base64,JVBERi0xLjQ="


def test_load_json_payload_strips_code_fence() -> None:
    assert load_json_payload('```json\n{"summary": "ok"}\n```') == {"summary": "ok"}


# ----------------------------------------------------------------------
# summarize


@pytest.mark.asyncio
async def test_summarize_returns_model_summary(fake_ai) -> None:
    fake_ai.reply({"summary": "Cells divide by mitosis."})

    result = await SummarizeContentFlow(fake_ai).run({"content": "Long text about cells"})

    assert result.summary == "Cells divide by mitosis."
    assert fake_ai.calls[0]["json_output"] is True
    assert "Long text about cells" in fake_ai.calls[0]["prompt"]


@pytest.mark.asyncio
async def test_summarize_blank_content_skips_model(fake_ai) -> None:
    result = await SummarizeContentFlow(fake_ai).run({"content": "   "})

    assert result.summary.startswith("Error:")
    assert fake_ai.calls == []


@pytest.mark.asyncio
async def test_summarize_model_failure_is_reported_as_error_text(fake_ai) -> None:
    fake_ai.fail("quota exceeded")

    result = await SummarizeContentFlow(fake_ai).run({"content": "text"})

    assert result.summary.startswith("Error:")
    assert "quota exceeded" in result.summary


@pytest.mark.asyncio
async def test_summarize_malformed_output_is_reported_as_error_text(fake_ai) -> None:
    fake_ai.reply("this is not json")

    result = await SummarizeContentFlow(fake_ai).run({"content": "text"})

    assert result.summary == "Error: AI could not summarize the content."


@pytest.mark.asyncio
async def test_summarize_rejects_missing_content(fake_ai) -> None:
    with pytest.raises(ValidationError):
        await SummarizeContentFlow(fake_ai).run({})


# ----------------------------------------------------------------------
# generate quiz questions


@pytest.mark.asyncio
async def test_generate_quiz_returns_questions(fake_ai) -> None:
    fake_ai.reply({"questions": [MCQ, TRUE_FALSE]})

    result = await GenerateQuizQuestionsFlow(fake_ai).run({"content": "summary"})

    assert [q.question for q in result.questions] == ["What is 2+2?", "Is the sky blue?"]
    assert result.questions[0].answer == "4"


@pytest.mark.asyncio
async def test_generate_quiz_applies_defaults_to_prompt(fake_ai) -> None:
    fake_ai.reply({"questions": []})

    await GenerateQuizQuestionsFlow(fake_ai).run({"content": "summary"})

    prompt = fake_ai.calls[0]["prompt"]
    assert "Target Number of Questions: 5" in prompt
    assert "Preferred Question Format: mcq" in prompt
    assert "Subject Focus" not in prompt


@pytest.mark.asyncio
async def test_generate_quiz_prompt_includes_settings(fake_ai) -> None:
    fake_ai.reply({"questions": []})

    await GenerateQuizQuestionsFlow(fake_ai).run({
        "content": "summary",
        "subject": "History",
        "difficulty": "hard",
        "num_questions": 8,
        "question_format": "true_false",
    })

    prompt = fake_ai.calls[0]["prompt"]
    assert "Subject Focus: History" in prompt
    assert "Difficulty: hard" in prompt
    assert "Target Number of Questions: 8" in prompt
    assert "Preferred Question Format: true_false" in prompt


@pytest.mark.asyncio
async def test_generate_quiz_applies_configured_default_and_cap(fake_ai) -> None:
    fake_ai.reply({"questions": []}).reply({"questions": []})
    flow = GenerateQuizQuestionsFlow(fake_ai, default_num_questions=7, max_num_questions=10)

    await flow.run({"content": "summary"})
    await flow.run({"content": "summary", "num_questions": 50})

    assert "Target Number of Questions: 7" in fake_ai.calls[0]["prompt"]
    assert "Target Number of Questions: 10" in fake_ai.calls[1]["prompt"]


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "model_output",
    [
        "",
        "not json at all",
        '{"questions": "none"}',
        '{"items": []}',
        "42",
    ],
)
async def test_generate_quiz_malformed_output_yields_empty_list(fake_ai, model_output: str) -> None:
    fake_ai.reply(model_output)

    result = await GenerateQuizQuestionsFlow(fake_ai).run({"content": "summary"})

    assert result.questions == []


@pytest.mark.asyncio
async def test_generate_quiz_model_failure_yields_empty_list(fake_ai) -> None:
    fake_ai.fail()

    result = await GenerateQuizQuestionsFlow(fake_ai).run({"content": "summary"})

    assert result.questions == []


@pytest.mark.asyncio
async def test_generate_quiz_accepts_bare_array(fake_ai) -> None:
    fake_ai.reply([MCQ])

    result = await GenerateQuizQuestionsFlow(fake_ai).run({"content": "summary"})

    assert len(result.questions) == 1


@pytest.mark.asyncio
async def test_generate_quiz_drops_malformed_questions(fake_ai) -> None:
    fake_ai.reply({"questions": [
        MCQ,
        {"question": "Missing options", "answer": "x"},
        {"question": "Answer not an option", "options": ["a", "b"], "answer": "c"},
        "just a string",
        TRUE_FALSE,
    ]})

    result = await GenerateQuizQuestionsFlow(fake_ai).run({"content": "summary"})

    assert [q.question for q in result.questions] == ["What is 2+2?", "Is the sky blue?"]


@pytest.mark.asyncio
async def test_generate_quiz_rejects_invalid_settings(fake_ai) -> None:
    with pytest.raises(ValidationError):
        await GenerateQuizQuestionsFlow(fake_ai).run({"content": "summary", "difficulty": "impossible"})
    with pytest.raises(ValidationError):
        await GenerateQuizQuestionsFlow(fake_ai).run({"content": "summary", "num_questions": 0})


# ----------------------------------------------------------------------
# PDF extraction


@pytest.mark.asyncio
async def test_extract_pdf_sends_document_inline(fake_ai) -> None:
    fake_ai.reply({"extractedText": "Chapter 1"})

    result = await ExtractTextFromPdfFlow(fake_ai).run({"pdf_data_uri": PDF_URI})

    assert result.extracted_text == "Chapter 1"
    call = fake_ai.calls[0]
    assert call["data"] == b"%PDF-1.4"
    assert call["mime_type"] == "application/pdf"


@pytest.mark.asyncio
async def test_extract_pdf_without_output_returns_empty_text(fake_ai) -> None:
    fake_ai.reply("{}")

    result = await ExtractTextFromPdfFlow(fake_ai).run({"pdf_data_uri": PDF_URI})

    assert result.extracted_text == ""


@pytest.mark.asyncio
async def test_extract_pdf_rejects_invalid_data_uri(fake_ai) -> None:
    with pytest.raises(ValueError):
        await ExtractTextFromPdfFlow(fake_ai).run({"pdf_data_uri": "not-a-data-uri"})


class _StubPdfLoader(FileLoader):
    def __init__(self) -> None:
        self.loaded: list[bytes] = []

    async def load(self, data: bytes, filename: str) -> LoadedDocument:
        self.loaded.append(data)
        return LoadedDocument(text="Local page text")

    def get_supported_extensions(self) -> list[str]:
        return ["pdf"]


@pytest.mark.asyncio
async def test_extract_pdf_local_mode_skips_model(fake_ai) -> None:
    loader = _StubPdfLoader()

    result = await ExtractTextFromPdfFlow(fake_ai, mode="local", loader=loader).run({"pdf_data_uri": PDF_URI})

    assert result.extracted_text == "Local page text"
    assert loader.loaded == [b"%PDF-1.4"]
    assert fake_ai.calls == []


def test_extract_pdf_unknown_mode(fake_ai) -> None:
    with pytest.raises(ValueError):
        ExtractTextFromPdfFlow(fake_ai, mode="ocr")


# ----------------------------------------------------------------------
# URL extraction


@pytest.mark.asyncio
async def test_extract_url_sends_page_to_model(fake_ai) -> None:
    seen: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(200, text="<p>Photosynthesis</p>")

    fake_ai.reply({"extractedText": "Photosynthesis"})
    flow = ExtractContentFromUrlFlow(fake_ai, transport=httpx.MockTransport(handler))

    result = await flow.run({"url": "https://example.com/article"})

    assert result.extracted_text == "Photosynthesis"
    assert seen[0].headers["User-Agent"] == "QuizifyAI/1.0"
    assert "<p>Photosynthesis</p>" in fake_ai.calls[0]["prompt"]


@pytest.mark.asyncio
async def test_extract_url_reports_http_status(fake_ai, page) -> None:
    flow = ExtractContentFromUrlFlow(fake_ai, transport=page("Not here", status_code=404))

    result = await flow.run({"url": "https://example.com/missing"})

    assert result.extracted_text == "Error: Could not fetch content from URL. Status: 404. Not here"
    assert fake_ai.calls == []


@pytest.mark.asyncio
async def test_extract_url_reports_network_error(fake_ai) -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    flow = ExtractContentFromUrlFlow(fake_ai, transport=httpx.MockTransport(handler))

    result = await flow.run({"url": "https://example.com"})

    assert result.extracted_text == "Error: Could not fetch content from URL. connection refused"


@pytest.mark.asyncio
async def test_extract_url_reports_empty_page(fake_ai, page) -> None:
    flow = ExtractContentFromUrlFlow(fake_ai, transport=page("   \n"))

    result = await flow.run({"url": "https://example.com"})

    assert result.extracted_text == "Error: Fetched content was empty."


@pytest.mark.asyncio
async def test_extract_url_reports_unusable_model_output(fake_ai, page) -> None:
    fake_ai.reply("no json here")
    flow = ExtractContentFromUrlFlow(fake_ai, transport=page())

    result = await flow.run({"url": "https://example.com"})

    assert result.extracted_text == "Error: AI could not process the fetched content."


@pytest.mark.asyncio
async def test_extract_url_reports_model_failure(fake_ai, page) -> None:
    fake_ai.fail("model overloaded")
    flow = ExtractContentFromUrlFlow(fake_ai, transport=page())

    result = await flow.run({"url": "https://example.com"})

    assert result.extracted_text == "Error: AI processing failed. model overloaded"


@pytest.mark.asyncio
async def test_extract_url_rejects_invalid_url(fake_ai) -> None:
    with pytest.raises(ValidationError):
        await ExtractContentFromUrlFlow(fake_ai).run({"url": "not a url"})
