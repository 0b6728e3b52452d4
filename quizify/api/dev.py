"""
Development-only API key override route
"""
from fastapi import APIRouter, Request, status
from fastapi.responses import JSONResponse
from loguru import logger

from quizify.core.config import settings
from quizify.core.credentials import set_developer_api_key

router = APIRouter(prefix="/api", tags=["Development"])


@router.post("/set-dev-api-key")
async def set_dev_api_key(request: Request):
    """
    Set or clear the in-memory Google API key for this development session

    Expects `{"apiKey": "YOUR_KEY"}` or `{"apiKey": null}`.
    Only available when APP_ENV=development.
    """
    if not settings.is_development:
        return JSONResponse(
            status_code=status.HTTP_403_FORBIDDEN,
            content={"error": "This endpoint is only available in development mode."}
        )

    try:
        body = await request.json()
        if body is None:
            raise ValueError("Request body is null; expected a JSON object")
        api_key = body.get("apiKey") if isinstance(body, dict) else None

        if isinstance(body, dict) and "apiKey" in body and (isinstance(api_key, str) or api_key is None):
            set_developer_api_key(api_key)
            message = (
                "API key set for current development session."
                if api_key else
                "API key cleared for current development session."
            )
            return {"message": message}

        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content={"error": "Invalid API key provided. Must be a string or null."}
        )
    except Exception as e:
        logger.error(f"Error setting dev API key: {e}")
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"error": "Failed to set API key.", "details": str(e) or "Unknown error"}
        )
