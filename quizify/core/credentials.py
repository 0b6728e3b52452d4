"""
Google API key resolution

Holds an optional developer override in process memory. The override is only
honoured while the service runs in development; everywhere else the key comes
from the GOOGLE_API_KEY environment variable (or .env file).
"""
from typing import Optional
from loguru import logger

from quizify.core.config import settings


_dev_api_key: Optional[str] = None


def set_developer_api_key(key: Optional[str]) -> None:
    """
    Set or clear the in-memory developer API key

    Args:
        key: New key, or None (or an empty string) to clear the override
    """
    global _dev_api_key

    if not settings.is_development:
        logger.warning("Attempted to set developer API key outside of development environment. Action ignored.")
        return

    _dev_api_key = key or None
    if _dev_api_key:
        logger.info("Developer API key has been set in memory for this session.")
    else:
        logger.info("Developer API key has been cleared from memory for this session.")


def get_google_api_key() -> Optional[str]:
    """Return the developer override in development, else the configured key"""
    if settings.is_development and _dev_api_key:
        return _dev_api_key
    return settings.google_api_key


def get_api_key_source() -> str:
    """Describe where the active key comes from, without revealing it"""
    if settings.is_development and _dev_api_key:
        return "developer override"
    if settings.google_api_key:
        return "environment"
    return "missing"
