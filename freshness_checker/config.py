from functools import lru_cache
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    DATABASE_URL: str = "sqlite:///./freshness.db"

    ANTHROPIC_API_KEY: str = ""
    CLAUDE_MODEL: str = "claude-sonnet-4-5-20250929"

    GEMINI_API_KEY: str = ""
    IMAGEN_MODEL: str = "imagen-4.0-generate-001"
    SPOILED_IMAGE_COUNT: int = 2

    FDA_API_URL: str = "https://api.fda.gov/food/enforcement.json"
    FDA_LOOKBACK_DAYS: int = 365
    FDA_RESULT_LIMIT: int = 5
    HTTP_TIMEOUT_SECONDS: float = 10.0

    REMINDER_WINDOW_DAYS: int = 3
    MAX_UPLOAD_SIZE_MB: int = 10

    FRONTEND_URL: str = "http://localhost:3000"

    model_config = {"env_file": ".env", "extra": "ignore"}


@lru_cache
def get_settings() -> Settings:
    return Settings()
