from __future__ import annotations

import asyncio
import json
from typing import Any, Callable

import httpx
import pytest
from fastapi.testclient import TestClient

from quizify.core import credentials
from quizify.core.config import settings
from quizify.core.interfaces.ai_service import AIResponse, AIService
from quizify.flows import (
    ExtractContentFromUrlFlow,
    ExtractTextFromPdfFlow,
    GenerateQuizQuestionsFlow,
    SummarizeContentFlow,
)
from quizify.services.quiz_session import QuizFlows, QuizSession
from quizify.services.session_store import SessionStore


class FakeAIService(AIService):
    """Returns queued AIResponses in order and records every call."""

    def __init__(self) -> None:
        self.responses: list[AIResponse] = []
        self.calls: list[dict[str, Any]] = []
        self.gate: asyncio.Event | None = None

    def reply(self, payload: Any) -> "FakeAIService":
        content = payload if isinstance(payload, str) else json.dumps(payload)
        self.responses.append(AIResponse(success=True, content=content))
        return self

    def fail(self, error: str = "model unavailable") -> "FakeAIService":
        self.responses.append(AIResponse(success=False, error=error))
        return self

    def hold(self) -> asyncio.Event:
        """Block every call until the returned event is set"""
        self.gate = asyncio.Event()
        return self.gate

    async def generate_text(self, prompt: str, json_output: bool = False, **kwargs) -> AIResponse:
        self.calls.append({"prompt": prompt, "json_output": json_output})
        return await self._next()

    async def process_with_document(
        self, prompt: str, data: bytes, mime_type: str, json_output: bool = False, **kwargs
    ) -> AIResponse:
        self.calls.append({"prompt": prompt, "data": data, "mime_type": mime_type, "json_output": json_output})
        return await self._next()

    def get_service_name(self) -> str:
        return "Fake AI"

    def is_available(self) -> bool:
        return True

    async def _next(self) -> AIResponse:
        if self.gate is not None:
            await self.gate.wait()
        if not self.responses:
            return AIResponse(success=False, error="no response queued")
        return self.responses.pop(0)


def page_transport(body: str = "<html><body><article>Cells divide by mitosis.</article></body></html>",
                   status_code: int = 200) -> httpx.MockTransport:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(status_code, text=body)

    return httpx.MockTransport(handler)


@pytest.fixture
def fake_ai() -> FakeAIService:
    return FakeAIService()


@pytest.fixture
def make_flows(fake_ai: FakeAIService) -> Callable[..., QuizFlows]:
    def _make(transport: httpx.AsyncBaseTransport | None = None, pdf_mode: str = "model") -> QuizFlows:
        return QuizFlows(
            summarize=SummarizeContentFlow(fake_ai),
            generate_quiz=GenerateQuizQuestionsFlow(fake_ai, max_num_questions=settings.max_num_questions),
            extract_pdf=ExtractTextFromPdfFlow(fake_ai, mode=pdf_mode),
            extract_url=ExtractContentFromUrlFlow(fake_ai, transport=transport or page_transport()),
        )

    return _make


@pytest.fixture
def session(make_flows: Callable[..., QuizFlows]) -> QuizSession:
    return QuizSession(flows=make_flows(), session_id="session-under-test")


@pytest.fixture(autouse=True)
def _reset_credentials(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(credentials, "_dev_api_key", None)
    monkeypatch.setattr(settings, "google_api_key", None)
    monkeypatch.setattr(settings, "environment", "production")


@pytest.fixture
def dev_mode(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(settings, "environment", "development")


@pytest.fixture
def client(make_flows: Callable[..., QuizFlows]):
    from main import app
    from quizify.utils.dependencies import get_quiz_flows, get_session_store

    flows = make_flows()
    store = SessionStore(session_factory=lambda: QuizSession(flows=flows))
    app.dependency_overrides[get_quiz_flows] = lambda: flows
    app.dependency_overrides[get_session_store] = lambda: store
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()


@pytest.fixture
def page() -> Callable[..., httpx.MockTransport]:
    return page_transport
