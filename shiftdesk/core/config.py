from typing import List

from pydantic_settings import BaseSettings, SettingsConfigDict


DEFAULT_JOBS = [
    "Admin",
    "Bartender",
    "Bartender Training",
    "BOH Train",
    "Busser",
    "Cook",
    "Dishwasher",
    "FOH Train",
    "Food Run",
    "Food Runner",
    "Ghost Bar1",
    "Ghost Bar 2",
    "Host",
    "Manager",
    "Server",
    "Server Training",
]


class Settings(BaseSettings):
    # App
    ENV: str = "development"
    DEBUG: bool = True
    LOG_LEVEL: str = "INFO"

    # Auth
    SECRET_KEY: str
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 30

    # Database
    DATABASE_URL: str = "sqlite:///./shiftdesk.db"
    SQLITE_BUSY_TIMEOUT_SECONDS: float = 30.0

    # Scheduling
    ALLOWED_JOBS: List[str] = DEFAULT_JOBS
    COPY_MAX_WEEKS_AHEAD: int = 8

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
    )


settings = Settings()
