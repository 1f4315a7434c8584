# backend/config.py
import logging
import sys
from functools import lru_cache
from pathlib import Path

from pydantic import ValidationError, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

logger = logging.getLogger(__name__)

# Resolve absolute path to the .env file for reliable loading
env_path = Path(__file__).parent.parent / ".env"

MIN_PRODUCTION_SECRET_LENGTH = 32


class Settings(BaseSettings):
    # Required at startup
    PORT: int
    DATABASE_URL: str
    JWT_SECRET: str
    FRONTEND_URL: str

    ENVIRONMENT: str = "development"
    JWT_ALGORITHM: str = "HS256"
    # 7 days
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 60 * 24 * 7
    BCRYPT_ROUNDS: int = 10
    LOG_LEVEL: str = "INFO"
    REQUEST_TIMEOUT_SECONDS: int = 30

    model_config = SettingsConfigDict(
        env_file=str(env_path), env_file_encoding="utf-8", extra="ignore"
    )

    @property
    def is_production(self) -> bool:
        return self.ENVIRONMENT.lower() == "production"

    @property
    def sqlalchemy_url(self) -> str:
        # Hosted Postgres hands out postgres:// which SQLAlchemy does not accept
        url = self.DATABASE_URL
        if url.startswith("postgres://"):
            url = url.replace("postgres://", "postgresql://", 1)
        return url

    @model_validator(mode="after")
    def _check_secret_strength(self):
        if self.is_production and len(self.JWT_SECRET) < MIN_PRODUCTION_SECRET_LENGTH:
            raise ValueError(
                f"JWT_SECRET must be at least {MIN_PRODUCTION_SECRET_LENGTH} characters in production"
            )
        return self


@lru_cache
def get_settings() -> Settings:
    return Settings()


def load_settings_or_exit() -> Settings:
    """Load settings at startup; abort the process when the environment is incomplete."""
    try:
        return get_settings()
    except ValidationError as exc:
        problems = []
        for err in exc.errors():
            field = ".".join(str(p) for p in err["loc"]) or "settings"
            problems.append(f"{field}: {err['msg']}")
        logger.critical("Invalid configuration, refusing to start: %s", "; ".join(problems))
        sys.exit(1)
