import os
from pydantic import BaseModel
from functools import lru_cache
from dotenv import load_dotenv
load_dotenv()


def _env_bool(name: str, default: str) -> bool:
    return os.getenv(name, default).strip().lower() in {"1", "true", "yes", "on"}


class Settings(BaseModel):
    APP_NAME: str = os.getenv("APP_NAME", "Resume Screening Dashboard")
    ENV: str = os.getenv("ENV", "development")
    API_PREFIX: str = os.getenv("API_PREFIX", "/api")
    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")
    SQLITE_PATH: str = os.getenv("SQLITE_PATH", "app.sqlite3")
    DATABASE_URL: str | None = os.getenv("DATABASE_URL") or None
    OPENAI_API_KEY: str | None = os.getenv("OPENAI_API_KEY") or None
    OPENAI_BASE_URL: str = os.getenv("OPENAI_BASE_URL", "https://api.openai.com/v1")
    OPENAI_MODEL: str = os.getenv("OPENAI_MODEL", "gpt-4o-mini")
    OPENROUTER_API_KEY: str | None = os.getenv("OPENROUTER_API_KEY") or None
    OPENROUTER_MODEL: str = os.getenv("OPENROUTER_MODEL", "openai/gpt-4o-mini")
    LLM_TEMPERATURE: float = float(os.getenv("LLM_TEMPERATURE", "0.2"))
    LLM_TIMEOUT_SECONDS: float = float(os.getenv("LLM_TIMEOUT_SECONDS", "60"))
    LLM_MAX_ATTEMPTS: int = int(os.getenv("LLM_MAX_ATTEMPTS", "1"))
    SEED_DEMO_JOBS: bool = _env_bool("SEED_DEMO_JOBS", "true")

    @property
    def database_url(self) -> str:
        return self.DATABASE_URL or f"sqlite:///{self.SQLITE_PATH}"


@lru_cache
def get_settings() -> Settings:
    return Settings()

settings = get_settings()
