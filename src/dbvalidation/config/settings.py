from pydantic_settings import BaseSettings
from pydantic import ConfigDict, field_validator
from pathlib import Path
from typing import Literal
from functools import lru_cache


class Settings(BaseSettings):
    """
    Settings loaded from the environment (or a .env file next to the package).

    Every field has a default so the translator can be imported and used without
    any configuration; DATABASE_URL only matters when the duplicate-key hook has to
    resolve index names through a live connection.
    """

    # Environment
    ENV: Literal["development", "testing", "staging", "production"] = "development"

    # Database used for index -> column lookups (optional)
    DATABASE_URL: str | None = None
    SQLALCHEMY_ECHO: bool = False

    # Localized default messages (flat JSON object: {"required": "...", ...})
    VALIDATION_LANG_FILE: Path | None = None

    # Logging
    LOG_LEVEL: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "INFO"
    LOG_FORMAT: Literal["json", "text"] = "json"
    LOG_TO_STDOUT: bool = True
    LOG_DIR: Path = Path("/var/log/dbvalidation")
    LOG_MAX_BYTES: int = 10_000_000  # 10 MB
    LOG_BACKUP_COUNT: int = 5
    ENABLE_SQL_LOGGING: bool = False
    # When False the RedactFilter masks `sql` / `bindings` extras on log records.
    LOG_SQL_DETAILS: bool = False

    # --- Validators ---
    @field_validator("LOG_LEVEL", mode="before")
    def normalize_log_level(cls, v: str | None) -> str | None:
        """
        Upper-case LOG_LEVEL before the Literal check so `LOG_LEVEL=debug` is accepted.
        """
        return v.upper() if isinstance(v, str) else v

    @field_validator("LOG_FORMAT", mode="before")
    def normalize_log_format(cls, v: str | None) -> str | None:
        return v.lower() if isinstance(v, str) else v

    model_config = ConfigDict(
        env_file=str(Path(__file__).parent.parent / ".env"),
        env_file_encoding="utf-8",
        extra="ignore",
    )


# Settings come from the environment only, so one instance per process is enough.
@lru_cache()
def get_settings() -> Settings:
    return Settings()
