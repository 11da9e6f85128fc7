"""
Configuration helpers for the mock API.

Settings are read once from environment variables so that routers, services
and entry points do not fetch os.environ directly. Entry points may override
individual fields with dataclasses.replace().
"""

from dataclasses import dataclass
from functools import lru_cache
import os


@dataclass(frozen=True)
class Settings:
    """Typed view of environment variables."""

    app_env: str
    db_path: str
    id_field: str
    read_only: bool
    persist: bool
    no_cache: bool
    routes_file: str
    static_dir: str
    cors_origins: tuple[str, ...]
    log_level: str
    host: str
    port: int


@lru_cache
def get_settings() -> Settings:
    """Read the current environment and build a Settings instance."""
    def _int(value: str, default: int = 0) -> int:
        try:
            return int(value)
        except (TypeError, ValueError):
            return default

    def _bool(value: str | None, default: bool = False) -> bool:
        if value is None:
            return default
        return value.strip().lower() in {"1", "true", "yes", "on"}

    cwd = os.getcwd()
    origins = tuple(o.strip() for o in os.getenv("CORS_ORIGINS", "*").split(",") if o.strip())
    return Settings(
        app_env=(os.getenv("APP_ENV") or "dev").lower(),
        db_path=os.getenv("MOCK_DB_PATH") or os.path.join(cwd, "db.json"),
        id_field=(os.getenv("MOCK_ID_FIELD") or "id").strip(),
        read_only=_bool(os.getenv("MOCK_READ_ONLY"), False),
        persist=_bool(os.getenv("MOCK_PERSIST"), True),
        no_cache=_bool(os.getenv("MOCK_NO_CACHE"), True),
        routes_file=os.getenv("MOCK_ROUTES_FILE", ""),
        static_dir=os.getenv("MOCK_STATIC_DIR") or os.path.join(cwd, "public"),
        cors_origins=origins or ("*",),
        log_level=(os.getenv("LOG_LEVEL") or "INFO").upper(),
        host=os.getenv("HOST", "127.0.0.1"),
        port=_int(os.getenv("PORT", "3000"), 3000),
    )
