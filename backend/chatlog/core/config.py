# chatlog/core/config.py
from __future__ import annotations
import os


def env_bool(name: str, default: bool = False) -> bool:
    v = os.environ.get(name)
    if v is None:
        return default
    return v.strip().lower() in ("1", "true", "yes", "y", "on")


class Settings:
    # ---------------------------------------------------------
    # Event store
    # ---------------------------------------------------------
    # local SQLite file for dev; point at Postgres in prod
    database_url = os.environ.get("DATABASE_URL", "sqlite:///./development.sqlite3")
    db_echo = env_bool("DB_ECHO", False)
    create_tables_on_startup = env_bool("CREATE_TABLES_ON_STARTUP", True)

    # ---------------------------------------------------------
    # Logging
    # ---------------------------------------------------------
    log_level = os.environ.get("LOG_LEVEL", "INFO").upper()


settings = Settings()
