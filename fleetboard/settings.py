from __future__ import annotations

from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Configuration for the dashboard.

    Values are loaded from environment variables and `.env`.

    Notes:
    - With nothing set, the store is `data.db` in the current directory.
    - Logs go to a file only; the full-screen UI owns the terminal.
    """

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    # Store
    FLEETBOARD_DB_PATH: Path = Field(default=Path("data.db"))

    # Logging (diagnostic; one file per day)
    FLEETBOARD_LOG_DIR: Path = Field(default=Path("_logs"))
    FLEETBOARD_LOG_LEVEL: str = Field(default="INFO")
    # Timed rotation retention count (days). Old log files are auto-deleted.
    FLEETBOARD_LOG_BACKUP_COUNT: int = Field(default=14)


def load_settings() -> Settings:
    s = Settings()
    # Ensure parent dir exists
    s.FLEETBOARD_DB_PATH.parent.mkdir(parents=True, exist_ok=True)
    return s
