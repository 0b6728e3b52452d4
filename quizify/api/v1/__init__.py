"""
API version 1 main router
"""
from fastapi import APIRouter
from quizify.api.v1.routes import flows, sessions

# Create main v1 router
router = APIRouter(prefix="/v1")

# Include all route modules
router.include_router(flows.router)
router.include_router(sessions.router)

# API v1 root endpoint
@router.get("/")
async def api_v1_root():
    """
    API v1 root endpoint
    """
    return {
        "message": "Quizify AI API v1",
        "version": "1.0.0",
        "endpoints": {
            "flows": {
                "summarize": "POST /v1/flows/summarize",
                "generate_quiz": "POST /v1/flows/generate-quiz",
                "extract_pdf": "POST /v1/flows/extract-pdf",
                "extract_pdf_upload": "POST /v1/flows/extract-pdf/upload",
                "extract_url": "POST /v1/flows/extract-url",
                "score": "POST /v1/flows/score"
            },
            "sessions": {
                "create": "POST /v1/sessions",
                "state": "GET /v1/sessions/{session_id}",
                "content": "PUT /v1/sessions/{session_id}/content",
                "upload": "POST /v1/sessions/{session_id}/upload",
                "url": "POST /v1/sessions/{session_id}/url",
                "summarize": "POST /v1/sessions/{session_id}/summarize",
                "settings": "PATCH /v1/sessions/{session_id}/settings",
                "quiz": "POST /v1/sessions/{session_id}/quiz",
                "answer": "POST /v1/sessions/{session_id}/answers",
                "submit": "POST /v1/sessions/{session_id}/submit",
                "print": "GET /v1/sessions/{session_id}/print",
                "new": "POST /v1/sessions/{session_id}/new",
                "delete": "DELETE /v1/sessions/{session_id}"
            }
        },
        "docs": "/docs",
        "redoc": "/redoc"
    }
