"""
Application configuration management
"""
from typing import List, Optional, Annotated
from pydantic import Field, BeforeValidator, AliasChoices
from pydantic_settings import BaseSettings, NoDecode
from dotenv import load_dotenv

load_dotenv()


def parse_comma_separated_str(value: any) -> List[str]:
    if isinstance(value, str):
        if not value:
            return []
        return [item.strip() for item in value.split(',') if item.strip()]
    if isinstance(value, list):
        return value
    return []


class Settings(BaseSettings):
    """Application settings loaded from environment variables"""

    # App settings
    app_name: str = "Quizify AI"
    app_version: str = "1.0.0"
    environment: str = Field("production", validation_alias=AliasChoices("APP_ENV", "environment"))
    debug: bool = Field(False, validation_alias=AliasChoices("DEBUG", "debug"))

    # Server settings
    host: str = Field("0.0.0.0", validation_alias=AliasChoices("HOST", "host"))
    port: int = Field(8000, validation_alias=AliasChoices("PORT", "port"))

    # Google AI
    google_api_key: Optional[str] = Field(None, validation_alias=AliasChoices("GOOGLE_API_KEY", "google_api_key"))
    model_name: str = Field("gemini-2.0-flash", validation_alias=AliasChoices("GEMINI_MODEL", "model_name"))
    temperature: float = Field(0.4, ge=0.0, le=2.0, validation_alias=AliasChoices("GEMINI_TEMPERATURE", "temperature"))

    # Content sources
    url_user_agent: str = Field("QuizifyAI/1.0", validation_alias=AliasChoices("URL_USER_AGENT", "url_user_agent"))
    url_fetch_timeout: float = Field(20.0, validation_alias=AliasChoices("URL_FETCH_TIMEOUT", "url_fetch_timeout"))
    pdf_extraction_mode: str = Field("model", validation_alias=AliasChoices("PDF_EXTRACTION_MODE", "pdf_extraction_mode"))  # model | local
    max_file_size: int = Field(20 * 1024 * 1024, validation_alias=AliasChoices("MAX_FILE_SIZE", "max_file_size"))  # 20MB

    # Quiz defaults
    default_num_questions: int = Field(5, validation_alias=AliasChoices("DEFAULT_NUM_QUESTIONS", "default_num_questions"))
    max_num_questions: int = Field(20, validation_alias=AliasChoices("MAX_NUM_QUESTIONS", "max_num_questions"))

    # Sessions
    max_sessions: int = Field(1000, ge=1, validation_alias=AliasChoices("MAX_SESSIONS", "max_sessions"))

    # Security
    cors_origins: Annotated[List[str], NoDecode, BeforeValidator(parse_comma_separated_str)] = Field(
        default=["*"],
        validation_alias=AliasChoices("CORS_ORIGINS", "cors_origins")
    )

    # Logging
    log_level: str = Field("INFO", validation_alias=AliasChoices("LOG_LEVEL", "log_level"))

    @property
    def is_development(self) -> bool:
        """Developer-only features (API key override) are enabled"""
        return self.environment.strip().lower() == "development"

    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "case_sensitive": False,
        "extra": "ignore",
        "populate_by_name": True,
    }


# Global settings instance
settings = Settings()
