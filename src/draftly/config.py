"""Configuration settings for the application."""

from pydantic_settings import (
    BaseSettings,
    SettingsConfigDict,
)


class Settings(BaseSettings):
    """Pydantic settings class for the application."""

    # Loaded from environment variables or a .env file if not provided
    LOG_LEVEL: str = "info"  # Options: debug, info, warning, error, critical

    # OpenRouter
    OPENROUTER_API_KEY: str | None = None
    OPENROUTER_URL: str = "https://openrouter.ai/api/v1/chat/completions"
    DEFAULT_MODEL: str = "google/gemini-1.5-flash-latest"
    HTTP_TIMEOUT: float = 60.0  # seconds, per request

    # Attribution headers sent with every request
    APP_URL: str | None = None
    APP_TITLE: str = "Draftly AI"

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    @property
    def referer(self) -> str:
        """Value of the ``HTTP-Referer`` header."""
        return self.APP_URL or "http://localhost:3000"


settings = Settings()
