"""Application configuration loaded from environment variables."""

from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Centralised settings — no hardcoded values anywhere else."""

    # Database
    database_url: str = Field("sqlite+aiosqlite:///./diningreview.db")
    sqlite_busy_timeout: float = Field(15.0, ge=0)

    # HTTP
    allowed_origins: str = Field("http://localhost:3000")

    # Reviews
    comments_max_length: int = Field(500, ge=1)

    # App
    app_env: str = Field("development")
    log_level: str = Field("INFO")

    # Derived
    @property
    def allowed_origins_list(self) -> list[str]:
        """Return ALLOWED_ORIGINS as a list."""
        return [o.strip() for o in self.allowed_origins.split(",") if o.strip()]

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8", "extra": "ignore"}


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Return cached Settings instance."""
    return Settings()


settings = get_settings()
