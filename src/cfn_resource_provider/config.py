"""
Configuration management for the custom resource provider.

Loads settings from environment variables with sensible defaults.
"""

from functools import lru_cache
from pathlib import Path

from dotenv import load_dotenv
from pydantic import Field
from pydantic_settings import BaseSettings

# Load .env file from project root
_project_root = Path(__file__).parent.parent.parent
_env_file = _project_root / '.env'
if _env_file.exists():
    load_dotenv(_env_file)


class Settings(BaseSettings):
    """Provider settings loaded from environment variables."""

    LOG_LEVEL: str = 'INFO'
    LOG_JSON: bool = False

    # PUT to the pre-signed ResponseURL
    RESPONSE_TIMEOUT_SECONDS: int = Field(default=10, ge=1, le=60)


@lru_cache
def get_settings() -> Settings:
    """Cached settings singleton."""
    return Settings()
