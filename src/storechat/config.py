"""Environment-based configuration and database engine factory."""

from __future__ import annotations

import logging
from pathlib import Path

from pydantic import field_validator
from pydantic_settings import BaseSettings
from sqlalchemy import event
from sqlalchemy.ext.asyncio import AsyncEngine, create_async_engine

from storechat.constants import (
    HISTORY_WINDOW_TURNS,
    INTENT_CACHE_TTL_SECONDS,
    SESSION_IDLE_TIMEOUT_SECONDS,
)
from storechat.llm.registry import is_valid_model, valid_model_ids

logger = logging.getLogger(__name__)


class Settings(BaseSettings):
    """Reads from .env file and environment variables."""

    # LLM Provider
    groq_api_key: str = ""
    llm_provider: str = "groq"
    default_model: str = "llama-3.3-70b-versatile"
    classifier_model: str = "llama-3.1-8b-instant"
    llm_timeout_seconds: int = 30

    # Database
    database_url: str = "sqlite:///data/storechat.db"

    # Directories
    log_dir: Path = Path("logs")

    # Logging
    log_level: str = "INFO"
    debug_mode: bool = False

    # API
    cors_origins: str = "http://localhost:3000"

    # Memory
    history_window: int = HISTORY_WINDOW_TURNS
    intent_cache_ttl_seconds: float = INTENT_CACHE_TTL_SECONDS
    session_idle_timeout_seconds: float = SESSION_IDLE_TIMEOUT_SECONDS

    @field_validator("default_model", "classifier_model")
    @classmethod
    def _validate_model(cls, v: str) -> str:
        if not is_valid_model(v):
            raise ValueError(
                f"Unknown model {v!r}; valid models: "
                + ", ".join(valid_model_ids())
            )
        return v

    @field_validator("history_window")
    @classmethod
    def _validate_window(cls, v: int) -> int:
        if v < 1:
            raise ValueError("history_window must be at least 1")
        return v

    @property
    def llm_configured(self) -> bool:
        """True when a provider key is present."""
        return bool(self.groq_api_key)

    def litellm_model(self, model_id: str) -> str:
        """Registry model id in litellm provider/model format."""
        return f"{self.llm_provider}/{model_id}"

    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "env_prefix": "",
        "extra": "ignore",
    }


def create_app_engine(
    url: str, *, echo: bool = False
) -> AsyncEngine:
    """Create the async engine for the catalog database.

    ``sqlite:///`` URLs are rewritten to ``sqlite+aiosqlite:///`` and
    get WAL journal mode through a pool-connect listener. Other URLs
    are passed through unchanged.
    """
    is_sqlite = url.startswith("sqlite")
    if url.startswith("sqlite:///"):
        db_url = "sqlite+aiosqlite:///" + url[len("sqlite:///"):]
    else:
        db_url = url
    engine = create_async_engine(db_url, echo=echo)

    if is_sqlite:

        @event.listens_for(engine.sync_engine, "connect")
        def _set_wal_mode(
            dbapi_conn: object,
            _connection_record: object,
        ) -> None:
            cursor = dbapi_conn.cursor()  # type: ignore[attr-defined]
            cursor.execute("PRAGMA journal_mode=WAL")
            cursor.close()

    logger.debug("event=engine_created url=%s", engine.url)
    return engine
