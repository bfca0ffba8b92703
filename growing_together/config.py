"""Application configuration loaded from environment variables and .env file."""

from typing import Optional

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings.

    Values are loaded from environment variables first,
    then from a .env file in the project root as fallback.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    DEBUG: bool = False
    LOG_LEVEL: str = "INFO"

    # AI Provider settings
    AI_PROVIDER: str = "mock"
    AI_API_KEY: Optional[str] = None
    AI_MODEL: Optional[str] = None

    # Content generation
    SCENARIO_TEMPERATURE: float = 0.8
    OUTCOME_TEMPERATURE: float = 0.4
    SCENARIO_MAX_TOKENS: int = 2048
    OUTCOME_MAX_TOKENS: int = 1536

    # Voice playback settings
    TTS_PROVIDER: str = "none"
    TTS_API_KEY: Optional[str] = None
    TTS_MODEL: str = "gpt-4o-mini-tts"

    @property
    def log_level(self) -> str:
        """DEBUG overrides LOG_LEVEL."""
        return "DEBUG" if self.DEBUG else self.LOG_LEVEL


settings = Settings()
