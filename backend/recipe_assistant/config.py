"""
Application configuration.

This module defines the application settings as a Pydantic model whose
fields default from environment variables (optionally loaded from a .env
file) and are validated on construction.
"""

from pathlib import Path

from pydantic import BaseModel, Field, field_validator, model_validator
from typing import List, Optional
import logging
import os
from dotenv import load_dotenv

# Load .env from backend directory (works regardless of cwd when running uvicorn)
_env_path = Path(__file__).resolve().parent.parent / ".env"
load_dotenv(dotenv_path=_env_path)


def _env_list(name: str, default: str) -> List[str]:
    raw = os.getenv(name, default)
    return [item.strip() for item in raw.split(",") if item.strip()]


class Settings(BaseModel):
    """
    Application configuration settings.

    Can be configured via environment variables or .env file.
    Environment variable names match the attribute names.

    Attributes:
        REASONING_PROVIDER: Text-generation backend ("openrouter" or "gemini")
        OPENROUTER_API_KEY: API key for OpenRouter chat completions
        OPENROUTER_BASE_URL: Base URL of the OpenRouter API
        OPENROUTER_MODEL: Model requested from OpenRouter
        GEMINI_API_KEY: Google Gemini API key
        GEMINI_MODEL: Gemini model used when REASONING_PROVIDER is "gemini"
        LLM_MAX_TOKENS: Maximum tokens per reasoning reply
        LLM_TEMPERATURE: Sampling temperature for the reasoning call
        API_TIMEOUT: Reasoning request timeout in seconds
        MIN_SCALE_FACTOR: Smallest scale factor accepted from callers
        MAX_SCALE_FACTOR: Largest scale factor accepted from callers
        SEED_DATA_PATH: Optional JSON file with catalog and disease targets
        CORS_ORIGINS: Origins allowed by the CORS middleware
        LOG_LEVEL: Logging level (DEBUG/INFO/WARNING/ERROR)
    """

    # Reasoning service
    REASONING_PROVIDER: str = Field(
        default_factory=lambda: os.getenv("REASONING_PROVIDER", "openrouter"),
        description="Text-generation backend used for substitutions"
    )

    OPENROUTER_API_KEY: Optional[str] = Field(
        default_factory=lambda: os.getenv("OPENROUTER_API_KEY"),
        description="API key for OpenRouter"
    )

    OPENROUTER_BASE_URL: str = Field(
        default_factory=lambda: os.getenv("OPENROUTER_BASE_URL", "https://openrouter.ai/api/v1"),
        description="Base URL for the OpenRouter API"
    )

    OPENROUTER_MODEL: str = Field(
        default_factory=lambda: os.getenv("OPENROUTER_MODEL", "anthropic/claude-3.5-sonnet"),
        description="Model requested from OpenRouter"
    )

    GEMINI_API_KEY: Optional[str] = Field(
        default_factory=lambda: os.getenv("GEMINI_API_KEY"),
        description="Google Gemini API key"
    )

    GEMINI_MODEL: str = Field(
        default_factory=lambda: os.getenv("GEMINI_MODEL", "gemini-2.0-flash"),
        description="Gemini model used for substitutions"
    )

    LLM_MAX_TOKENS: int = Field(
        default_factory=lambda: int(os.getenv("LLM_MAX_TOKENS", "4096")),
        ge=256,
        le=16384,
        description="Maximum tokens per reasoning reply"
    )

    LLM_TEMPERATURE: float = Field(
        default_factory=lambda: float(os.getenv("LLM_TEMPERATURE", "0.3")),
        ge=0.0,
        le=1.0,
        description="Sampling temperature for the reasoning call"
    )

    API_TIMEOUT: int = Field(
        default_factory=lambda: int(os.getenv("API_TIMEOUT", "60")),
        ge=1,
        le=300,
        description="Reasoning request timeout in seconds"
    )

    # Scaling boundary
    MIN_SCALE_FACTOR: float = Field(
        default_factory=lambda: float(os.getenv("MIN_SCALE_FACTOR", "0.5")),
        gt=0.0,
        description="Smallest scale factor accepted from callers"
    )

    MAX_SCALE_FACTOR: float = Field(
        default_factory=lambda: float(os.getenv("MAX_SCALE_FACTOR", "10")),
        gt=0.0,
        description="Largest scale factor accepted from callers"
    )

    # Reference data
    SEED_DATA_PATH: Optional[str] = Field(
        default_factory=lambda: os.getenv("SEED_DATA_PATH") or None,
        description="JSON file with nutrient catalog and disease targets"
    )

    CORS_ORIGINS: List[str] = Field(
        default_factory=lambda: _env_list(
            "CORS_ORIGINS", "http://localhost:3000,http://localhost:5173"
        ),
        description="Origins allowed by the CORS middleware"
    )

    # Logging Configuration
    LOG_LEVEL: str = Field(
        default_factory=lambda: os.getenv("LOG_LEVEL", "INFO"),
        description="Logging level (DEBUG/INFO/WARNING/ERROR)"
    )

    @field_validator('LOG_LEVEL')
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Ensure log level is valid."""
        valid_levels = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
        v_upper = v.upper()
        if v_upper not in valid_levels:
            raise ValueError(
                f"LOG_LEVEL must be one of: {', '.join(valid_levels)}"
            )
        return v_upper

    @field_validator('REASONING_PROVIDER')
    @classmethod
    def validate_provider(cls, v: str) -> str:
        """Normalize the provider name."""
        return v.strip().lower()

    @field_validator('OPENROUTER_BASE_URL')
    @classmethod
    def validate_url(cls, v: str) -> str:
        """Ensure URLs are properly formatted."""
        if not v.startswith(('http://', 'https://')):
            raise ValueError("URL must start with http:// or https://")
        return v.rstrip('/')  # Remove trailing slash

    @model_validator(mode='after')
    def validate_scale_range(self) -> "Settings":
        if self.MIN_SCALE_FACTOR >= self.MAX_SCALE_FACTOR:
            raise ValueError("MIN_SCALE_FACTOR must be smaller than MAX_SCALE_FACTOR")
        return self

    def reasoning_api_key(self) -> Optional[str]:
        """API key of the configured reasoning provider, if any."""
        if self.REASONING_PROVIDER == "gemini":
            return self.GEMINI_API_KEY
        return self.OPENROUTER_API_KEY


# Create global settings instance
settings = Settings()


def get_settings() -> Settings:
    """Return the process-wide settings (FastAPI dependency)."""
    return settings


# Configure logging based on settings
def configure_logging():
    """Configure application logging based on settings."""
    logging.basicConfig(
        level=getattr(logging, settings.LOG_LEVEL),
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        datefmt='%Y-%m-%d %H:%M:%S'
    )

    logger = logging.getLogger(__name__)
    logger.info(f"Logging configured at {settings.LOG_LEVEL} level")
    logger.info(f"Reasoning provider: {settings.REASONING_PROVIDER}")
    logger.info(
        f"Reasoning credentials: "
        f"{'configured' if settings.reasoning_api_key() else 'missing (substitutions disabled)'}"
    )


# Initialize logging on import
configure_logging()
