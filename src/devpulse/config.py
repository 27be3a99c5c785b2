"""Runtime settings read from ``DEVPULSE_*`` environment variables."""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Server and database settings.

    Every field can be overridden by an environment variable with the
    ``DEVPULSE_`` prefix (``DEVPULSE_DB_PATH``, ``DEVPULSE_PORT`` ...) or by
    a ``.env`` file in the working directory.
    """

    model_config = SettingsConfigDict(
        env_prefix="DEVPULSE_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    db_path: str = "dashboard.db"
    host: str = "127.0.0.1"
    port: int = Field(default=3000, ge=1, le=65535)
    log_level: str = "INFO"
    cors_origins: list[str] = ["*"]
    default_log_limit: int = Field(default=30, ge=1, le=1000)
    # Seed for the random source; None uses system randomness
    seed: int | None = None
