# taskmanager/config.py

from __future__ import annotations

import os
from dataclasses import dataclass, field

from dotenv import load_dotenv

# ---------------- ENV ----------------
load_dotenv(dotenv_path=os.path.join(os.path.dirname(__file__), ".env"))

DEFAULT_DB_PATH = "tasks.db"
DEFAULT_ORIGINS = [
    "http://localhost:5173",
    "http://localhost:5174",
    "http://localhost:8080",
]


def _env_flag(name: str, default: str = "false") -> bool:
    return os.getenv(name, default).strip().lower() in ("1", "true", "yes", "on")


@dataclass
class Settings:
    database_url: str = f"sqlite:///{DEFAULT_DB_PATH}"
    allowed_origins: list[str] = field(default_factory=lambda: list(DEFAULT_ORIGINS))
    host: str = "0.0.0.0"
    port: int = 8080
    log_level: str = "INFO"
    sql_echo: bool = False


def load_settings() -> Settings:
    """Build settings from the process environment.

    DATABASE_URL wins over DB_PATH; ALLOWED_ORIGIN replaces the default
    origin list instead of extending it.
    """
    database_url = os.getenv("DATABASE_URL")
    if not database_url:
        db_path = os.getenv("DB_PATH") or DEFAULT_DB_PATH
        database_url = f"sqlite:///{db_path}"

    origins = list(DEFAULT_ORIGINS)
    allowed_origin = os.getenv("ALLOWED_ORIGIN")
    if allowed_origin:
        origins = [allowed_origin]

    return Settings(
        database_url=database_url,
        allowed_origins=origins,
        host=os.getenv("HOST", "0.0.0.0"),
        port=int(os.getenv("PORT") or "8080"),
        log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
        sql_echo=_env_flag("SQL_ECHO"),
    )
