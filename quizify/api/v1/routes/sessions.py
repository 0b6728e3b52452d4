"""
Quiz session API routes

A session holds the state of one quiz-making page: content, summary,
settings, questions and answers. Every action returns the new session state
together with the notice it produced.
"""
from fastapi import APIRouter, Depends, Form, UploadFile, status
from fastapi.responses import PlainTextResponse

from quizify.models.requests import (
    SetContentRequest,
    ExtractUrlRequest,
    QuizSettingsRequest,
    AnswerRequest,
)
from quizify.models.responses import SessionStateResponse, BaseResponse
from quizify.services.session_store import SessionStore
from quizify.utils.dependencies import get_session_store, validate_upload_file, handle_service_errors

router = APIRouter(prefix="/sessions", tags=["Sessions"])


@router.post("", response_model=SessionStateResponse, status_code=status.HTTP_201_CREATED)
async def create_session(store: SessionStore = Depends(get_session_store)):
    """Start a new quiz session"""
    return SessionStateResponse.from_session(store.create())


@router.get("/{session_id}", response_model=SessionStateResponse)
@handle_service_errors
async def get_session(session_id: str, store: SessionStore = Depends(get_session_store)):
    """Current state of a session"""
    return SessionStateResponse.from_session(store.get(session_id))


@router.delete("/{session_id}", response_model=BaseResponse)
@handle_service_errors
async def delete_session(session_id: str, store: SessionStore = Depends(get_session_store)):
    store.delete(session_id)
    return BaseResponse(success=True, message="Session deleted")


@router.put("/{session_id}/content", response_model=SessionStateResponse)
@handle_service_errors
async def set_content(
    session_id: str,
    request: SetContentRequest,
    store: SessionStore = Depends(get_session_store)
):
    """Replace the content with pasted text"""
    session = store.get(session_id)
    notice = session.set_content(request.content)
    return SessionStateResponse.from_session(session, notice)


@router.post("/{session_id}/upload", response_model=SessionStateResponse)
@handle_service_errors
async def upload_file(
    session_id: str,
    file: UploadFile = Depends(validate_upload_file),
    kind: str = Form("auto", description="txt, pdf or auto (from the file's content type)"),
    store: SessionStore = Depends(get_session_store)
):
    """
    Upload a .txt or .pdf file as the session content

    Plain text is loaded directly; PDFs go through the PDF extraction flow.
    """
    session = store.get(session_id)
    data = await file.read()

    if kind == "pdf" or (kind == "auto" and file.content_type == "application/pdf"):
        notice = await session.load_pdf(file.content_type, data)
    else:
        notice = await session.load_text_file(file.filename or "upload.txt", file.content_type, data)
    return SessionStateResponse.from_session(session, notice)


@router.post("/{session_id}/url", response_model=SessionStateResponse)
@handle_service_errors
async def fetch_url(
    session_id: str,
    request: ExtractUrlRequest,
    store: SessionStore = Depends(get_session_store)
):
    """Fetch a URL and load its main text as the session content"""
    session = store.get(session_id)
    notice = await session.load_url(request.url)
    return SessionStateResponse.from_session(session, notice)


@router.post("/{session_id}/summarize", response_model=SessionStateResponse)
@handle_service_errors
async def summarize(session_id: str, store: SessionStore = Depends(get_session_store)):
    session = store.get(session_id)
    notice = await session.summarize()
    return SessionStateResponse.from_session(session, notice)


@router.patch("/{session_id}/settings", response_model=SessionStateResponse)
@handle_service_errors
async def update_settings(
    session_id: str,
    request: QuizSettingsRequest,
    store: SessionStore = Depends(get_session_store)
):
    """Change subject, difficulty, number of questions or format"""
    session = store.get(session_id)
    notice = session.update_settings(**request.model_dump(exclude_unset=True))
    return SessionStateResponse.from_session(session, notice)


@router.post("/{session_id}/quiz", response_model=SessionStateResponse)
@handle_service_errors
async def generate_quiz(session_id: str, store: SessionStore = Depends(get_session_store)):
    """Generate questions from the session summary"""
    session = store.get(session_id)
    notice = await session.generate_quiz()
    return SessionStateResponse.from_session(session, notice)


@router.post("/{session_id}/answers", response_model=SessionStateResponse)
@handle_service_errors
async def answer_question(
    session_id: str,
    request: AnswerRequest,
    store: SessionStore = Depends(get_session_store)
):
    session = store.get(session_id)
    notice = session.answer(request.question_index, request.option)
    return SessionStateResponse.from_session(session, notice)


@router.post("/{session_id}/submit", response_model=SessionStateResponse)
@handle_service_errors
async def submit_quiz(session_id: str, store: SessionStore = Depends(get_session_store)):
    session = store.get(session_id)
    notice = session.submit()
    return SessionStateResponse.from_session(session, notice)


@router.get("/{session_id}/print", response_class=PlainTextResponse)
@handle_service_errors
async def print_quiz(session_id: str, store: SessionStore = Depends(get_session_store)):
    """Printable plain-text quiz, with results once submitted"""
    session = store.get(session_id)
    return PlainTextResponse(session.render_printable())


@router.post("/{session_id}/new", response_model=SessionStateResponse)
@handle_service_errors
async def start_new(session_id: str, store: SessionStore = Depends(get_session_store)):
    """Clear content and quiz to start over"""
    session = store.get(session_id)
    notice = session.start_new()
    return SessionStateResponse.from_session(session, notice)
