from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Runtime settings, read from ``BOOKING_*`` environment variables or ``.env``."""

    model_config = SettingsConfigDict(
        env_prefix="BOOKING_",
        env_file=".env",
        env_ignore_empty=True,
        extra="ignore",
    )

    log_level: str = "INFO"
    log_file: Path | None = None

    # Directory holding venues.json / timeslots.json. None keeps everything in memory.
    data_dir: Path | None = None

    database_dsn: str | None = None
    db_name: str = "default"
    db_schema: str | None = None
    pool_min_size: int = Field(default=1, ge=1)
    pool_max_size: int = Field(default=5, ge=1)
