"""Structured JSON logger for chat exchanges and failures."""

import json
import logging
from datetime import UTC, datetime
from pathlib import Path

from storechat.constants import ERROR_TRUNCATION_CHARS

__all__ = ["ChatLogger"]


class ChatLogger:
    """Writes one JSON line per exchange or error to ``chat.log``."""

    def __init__(self, log_dir: Path, level: str = "INFO") -> None:
        self._log_dir = log_dir
        self._log_dir.mkdir(parents=True, exist_ok=True)
        self._logger = logging.getLogger("storechat.exchanges")
        self._logger.setLevel(getattr(logging, level.upper()))

        if not self._logger.handlers:
            handler = logging.FileHandler(log_dir / "chat.log")
            handler.setFormatter(logging.Formatter("%(message)s"))
            self._logger.addHandler(handler)

    def log_exchange(
        self,
        request_id: str,
        session_id: str | None,
        message: str,
        intent: str,
        model: str,
        used_database: bool,
        has_context: bool,
        duration_ms: float,
    ) -> None:
        self._logger.info(
            json.dumps({
                "type": "exchange",
                "timestamp": datetime.now(UTC).isoformat(),
                "request_id": request_id,
                "session_id": session_id,
                "message": message[:ERROR_TRUNCATION_CHARS],
                "intent": intent,
                "model": model,
                "used_database": used_database,
                "has_context": has_context,
                "duration_ms": duration_ms,
            })
        )

    def log_error(
        self,
        request_id: str,
        component: str,
        error: str,
        error_class: str | None = None,
    ) -> None:
        self._logger.error(
            json.dumps({
                "type": "error",
                "timestamp": datetime.now(UTC).isoformat(),
                "request_id": request_id,
                "component": component,
                "error": error[:ERROR_TRUNCATION_CHARS],
                "error_class": error_class,
            })
        )
