from functools import lru_cache
from typing import Optional

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

class Settings(BaseSettings):
    PORT: int = 5000
    LOGGER: int = 20
    LOG_DIRECTORY: str = "logs"

    # Outbound HTTP
    HTTP_TIMEOUT: float = 30.0
    CORS_ORIGINS: list[str] = ["*"]

    # Gemini Configuration (preferred chat provider)
    GEMINI_API_KEY: Optional[str] = None
    GEMINI_MODEL: str = "gemini-2.5-flash"
    GEMINI_API_VERSION: str = "v1"

    # OpenAI Configuration
    OPENAI_API_KEY: Optional[str] = None
    OPENAI_MODEL: str = "gpt-4o-mini"

    # Google Maps Places Configuration
    GOOGLE_MAPS_API_KEY: Optional[str] = None

    model_config = SettingsConfigDict(
        # Look for .env in the current folder OR the parent folder
        env_file=(".env", "../.env"),
        env_file_encoding="utf-8",
        extra="ignore",
        frozen=True,
    )

    @field_validator("GEMINI_API_KEY", "OPENAI_API_KEY", "GOOGLE_MAPS_API_KEY", mode="before")
    @classmethod
    def blank_key_is_missing(cls, value):
        if isinstance(value, str) and not value.strip():
            return None
        return value

    @property
    def services(self) -> dict[str, bool]:
        """Which external integrations have a key configured."""
        return {
            "googleMaps": bool(self.GOOGLE_MAPS_API_KEY),
            "openai": bool(self.OPENAI_API_KEY),
            "gemini": bool(self.GEMINI_API_KEY),
        }

@lru_cache
def get_settings() -> Settings:
    return Settings()

settings = get_settings()
