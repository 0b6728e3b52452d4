from __future__ import annotations

from types import SimpleNamespace
from typing import Any

import pytest

from quizify.core import credentials
from quizify.core.config import settings
from quizify.services.ai import gemini_service
from quizify.services.ai.gemini_service import GeminiService


class _RecordingModel:
    """Stands in for GenerativeModel and remembers what it was asked"""

    instances: list["_RecordingModel"] = []
    text = '{"summary": "ok"}'
    error: Exception | None = None

    def __init__(self, model_name: str, safety_settings: Any = None) -> None:
        self.model_name = model_name
        self.safety_settings = safety_settings
        self.requests: list[dict[str, Any]] = []
        _RecordingModel.instances.append(self)

    async def generate_content_async(self, content: Any, generation_config: dict | None = None):
        self.requests.append({"content": content, "generation_config": generation_config})
        if _RecordingModel.error is not None:
            raise _RecordingModel.error
        return SimpleNamespace(text=_RecordingModel.text)


@pytest.fixture
def gemini(monkeypatch) -> SimpleNamespace:
    configured: list[str] = []
    _RecordingModel.instances = []
    _RecordingModel.text = '{"summary": "ok"}'
    _RecordingModel.error = None
    monkeypatch.setattr(gemini_service, "GenerativeModel", _RecordingModel)
    monkeypatch.setattr(gemini_service.genai, "configure", lambda api_key: configured.append(api_key))
    return SimpleNamespace(configured=configured, models=_RecordingModel.instances)


@pytest.mark.asyncio
async def test_missing_key_fails_without_calling_gemini(gemini) -> None:
    response = await GeminiService().generate_text("prompt")

    assert response.success is False
    assert response.error.startswith("No Google API key configured")
    assert gemini.configured == []
    assert gemini.models == []


@pytest.mark.asyncio
async def test_json_output_requests_json_mime_type(gemini, monkeypatch) -> None:
    monkeypatch.setattr(settings, "google_api_key", "env-key-123456")

    response = await GeminiService(model_name="gemini-test", temperature=0.2).generate_text("prompt", json_output=True)

    assert response.success is True
    assert response.content == '{"summary": "ok"}'
    assert gemini.configured == ["env-key-123456"]
    request = gemini.models[0].requests[0]
    assert gemini.models[0].model_name == "gemini-test"
    assert request["content"] == "prompt"
    assert request["generation_config"]["response_mime_type"] == "application/json"
    assert request["generation_config"]["temperature"] == 0.2


@pytest.mark.asyncio
async def test_plain_output_has_no_mime_type(gemini, monkeypatch) -> None:
    monkeypatch.setattr(settings, "google_api_key", "env-key-123456")

    await GeminiService().generate_text("prompt")

    assert "response_mime_type" not in gemini.models[0].requests[0]["generation_config"]


@pytest.mark.asyncio
async def test_developer_override_used_on_next_call(gemini, monkeypatch, dev_mode) -> None:
    monkeypatch.setattr(settings, "google_api_key", "env-key-123456")
    service = GeminiService()

    await service.generate_text("first")
    credentials.set_developer_api_key("dev-key-654321")
    await service.generate_text("second")

    assert gemini.configured == ["env-key-123456", "dev-key-654321"]
    stats = await service.get_statistics()
    assert stats["api_key_source"] == "developer override"


@pytest.mark.asyncio
async def test_provider_exception_becomes_failed_response(gemini, monkeypatch) -> None:
    monkeypatch.setattr(settings, "google_api_key", "env-key-123456")
    _RecordingModel.error = RuntimeError("429 quota exceeded")

    response = await GeminiService().generate_text("prompt", json_output=True)

    assert response.success is False
    assert response.error == "429 quota exceeded"


@pytest.mark.asyncio
async def test_document_sent_as_inline_part(gemini, monkeypatch) -> None:
    monkeypatch.setattr(settings, "google_api_key", "env-key-123456")

    await GeminiService().process_with_document("extract", b"%PDF-1.4", "application/pdf", json_output=True)

    content = gemini.models[0].requests[0]["content"]
    assert content[0] == {"text": "extract"}
    assert content[1] == {"inline_data": {"mime_type": "application/pdf", "data": b"%PDF-1.4"}}


def test_availability_follows_key(monkeypatch) -> None:
    assert GeminiService().is_available() is False

    monkeypatch.setattr(settings, "google_api_key", "env-key-123456")

    assert GeminiService().is_available() is True
