from functools import lru_cache
from pathlib import Path

from pydantic_settings import BaseSettings

_BACKEND_DIR = Path(__file__).resolve().parents[1]
_ENV_FILES = (
    _BACKEND_DIR / ".env",
    ".env",
)


class Settings(BaseSettings):
    """Storage, audit and logging settings read from the environment."""

    app_version: str = "4.0.0"
    app_env: str = "development"

    # "sql" (SQLAlchemy), "memory" (process-local) or "none" (no storage)
    storage_backend: str = "sql"
    database_url: str = "sqlite:///data/boatrecords.db"
    storage_key_prefix: str = "boatrecords_v4_"
    # Reject version-0 overwrites too; off keeps bootstrap writes working
    strict_versioning: bool = False

    audit_recent_limit: int = 50
    seed_library_file: str = "data/seed-library.yaml"

    log_level: str = "INFO"
    log_level_sql: str = "WARNING"
    log_level_storage: str = "INFO"
    log_level_audit: str = "INFO"
    log_format: str = "%(asctime)s %(levelname)-8s %(name)s: %(message)s"

    model_config = {
        "env_file": _ENV_FILES,
        "env_file_encoding": "utf-8",
    }


@lru_cache
def get_settings() -> Settings:
    return Settings()
