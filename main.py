"""
Quizify AI - Main FastAPI Application

Turns content into interactive quizzes:
- Paste text, upload .txt/.pdf files or fetch a URL
- Summarize the content with Google Gemini
- Generate multiple-choice or true/false questions
- Answer, score and print the quiz
"""
import sys
import time
from contextlib import asynccontextmanager
from fastapi import FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.openapi.utils import get_openapi
from loguru import logger
import uvicorn

from quizify.core.config import settings
from quizify.api.v1 import router as v1_router
from quizify.api.dev import router as dev_router


# Configure logging
logger.remove()  # Remove default handler
logger.add(
    sys.stdout,
    format="<green>{time:YYYY-MM-DD HH:mm:ss}</green> | <level>{level: <8}</level> | <cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> - <level>{message}</level>",
    level=settings.log_level
)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan manager

    Handles startup and shutdown events for the FastAPI application
    """
    # Startup
    logger.info("🚀 Starting Quizify AI...")
    logger.info(f"🔧 Configuration: {settings.app_name} v{settings.app_version}")
    logger.info(f"🔧 Environment: {settings.environment} (debug={settings.debug})")
    logger.info(f"🔧 Model: {settings.model_name}, PDF extraction: {settings.pdf_extraction_mode}")

    from quizify.utils.dependencies import get_ai_service
    ai_service = get_ai_service()
    if ai_service.is_available():
        logger.info(f"✅ {ai_service.get_service_name()} configured")
    else:
        logger.warning("⚠️ GOOGLE_API_KEY is not set; AI flows will fail until a key is configured")

    yield

    # Shutdown
    logger.info("🛑 Shutting down Quizify AI...")


# Create FastAPI application
app = FastAPI(
    title="Quizify AI",
    description="""
## 🧠 Quizify AI

Upload content, get summaries, and generate interactive quizzes.

### 🌟 Workflow

1. **Provide content**: paste text, upload a `.txt` / `.pdf`, or enter a URL
2. **Summarize**: Gemini condenses the content
3. **Configure**: subject, difficulty, number of questions, MCQ or True/False
4. **Quiz**: answer, submit, get your score and print the results

### 📖 Usage Example

```bash
curl -X POST "/v1/flows/generate-quiz" \\
  -H "Content-Type: application/json" \\
  -d '{"content": "The mitochondria is the powerhouse of the cell...", "num_questions": 3}'
```
    """,
    version=settings.app_version,
    lifespan=lifespan,
    docs_url="/docs",
    redoc_url="/redoc",
    openapi_url="/openapi.json"
)


# Configure CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["GET", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"],
    allow_headers=["*"],
)


# Custom OpenAPI schema with enhanced documentation
def custom_openapi():
    if app.openapi_schema:
        return app.openapi_schema

    openapi_schema = get_openapi(
        title="Quizify AI API",
        version=settings.app_version,
        description="Content-to-quiz service backed by Google Gemini",
        routes=app.routes,
    )

    openapi_schema["servers"] = [
        {"url": "/", "description": "Current server"},
        {"url": "http://localhost:8000", "description": "Local development"},
    ]

    openapi_schema["tags"] = [
        {
            "name": "Flows",
            "description": "Stateless AI steps: summarize, generate quiz, extract PDF/URL text, and scoring."
        },
        {
            "name": "Sessions",
            "description": "Stateful quiz sessions mirroring one page: content, summary, settings, answers and results."
        },
        {
            "name": "Development",
            "description": "In-memory API key override, only available when APP_ENV=development."
        }
    ]

    app.openapi_schema = openapi_schema
    return app.openapi_schema


app.openapi = custom_openapi


# Include API routers
app.include_router(v1_router)
app.include_router(dev_router)


# Root endpoint
@app.get("/", tags=["Root"])
async def root():
    """
    Quizify AI root endpoint
    """
    return {
        "message": "🧠 Welcome to Quizify AI",
        "version": settings.app_version,
        "description": "Turn content into interactive, scorable quizzes",
        "features": [
            "📋 Paste text or upload .txt files",
            "📄 PDF text extraction",
            "🌐 Web page content extraction",
            "📚 AI summaries",
            "❓ Multiple-choice and True/False quizzes",
            "🖨️ Printable results"
        ],
        "api_docs": "/docs",
        "endpoints": {
            "v1": "/v1"
        },
        "status": "🟢 Service running"
    }


# Health check endpoint
@app.get("/health", tags=["Health"])
async def health_check():
    """
    Service health check

    Returns the overall health status of the service and its components.
    """
    try:
        from quizify.utils.dependencies import check_services_health
        health_status = await check_services_health()

        return {
            "status": "healthy",
            "timestamp": time.time(),
            "version": settings.app_version,
            "services": health_status
        }
    except Exception as e:
        logger.error(f"Health check failed: {e}")
        return JSONResponse(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            content={
                "status": "unhealthy",
                "error": str(e),
                "version": settings.app_version
            }
        )


# Global exception handler
@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    """
    Global exception handler for unhandled errors
    """
    logger.error(f"Unhandled exception for {request.url}: {exc}")

    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={
            "success": False,
            "error": "An unexpected error occurred",
            "detail": str(exc) if settings.debug else "Internal server error",
            "path": str(request.url),
            "method": request.method
        }
    )


# Request logging middleware
@app.middleware("http")
async def log_requests(request: Request, call_next):
    """
    Log all HTTP requests for monitoring and debugging
    """
    start_time = time.time()

    logger.info(f"📥 {request.method} {request.url}")

    response = await call_next(request)

    process_time = time.time() - start_time
    logger.info(f"📤 {request.method} {request.url} - {response.status_code} - {process_time:.2f}s")

    return response


# Run the application
if __name__ == "__main__":
    logger.info(f"🚀 Starting Quizify AI on {settings.host}:{settings.port}")

    uvicorn.run(
        "main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.debug,
        access_log=True,
        log_level=settings.log_level.lower()
    )
