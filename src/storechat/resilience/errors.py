"""Upstream failure classification.

Buckets exceptions raised by the LLM provider so that logs say what
kind of failure happened and the HTTP layer can pick a status code.
Nothing here retries; classification only informs reporting.
"""

from __future__ import annotations

import asyncio
from enum import Enum
from typing import Any


class ErrorClass(Enum):
    TRANSIENT = "transient"  # 429, network errors
    SERVER = "server"  # 500, 502, 503
    TIMEOUT = "timeout"  # deadline exceeded
    CLIENT = "client"  # 400, 401, 403
    UNKNOWN = "unknown"


def classify_error(error: BaseException) -> ErrorClass:
    """Classify an error by status code, type, then message text."""
    status_code = getattr(error, "status_code", None)
    if isinstance(status_code, int):
        if status_code == 429:
            return ErrorClass.TRANSIENT
        if 400 <= status_code < 500:
            return ErrorClass.CLIENT
        if 500 <= status_code < 600:
            return ErrorClass.SERVER

    if isinstance(error, (TimeoutError, asyncio.TimeoutError)):
        return ErrorClass.TIMEOUT

    msg = str(error).lower()

    if "timeout" in msg or "timed out" in msg:
        return ErrorClass.TIMEOUT
    if "429" in msg or "rate limit" in msg or "rate_limit" in msg:
        return ErrorClass.TRANSIENT
    if any(code in msg for code in ("500", "502", "503", "504")):
        return ErrorClass.SERVER
    if "econnrefused" in msg or "connection" in msg:
        return ErrorClass.TRANSIENT
    if any(code in msg for code in ("400", "401", "403", "404")):
        return ErrorClass.CLIENT

    return ErrorClass.UNKNOWN


def upstream_message(error: BaseException) -> str:
    """Best human-readable cause for a provider failure.

    Prefers the provider's ``{"error": {"message": ...}}`` body when the
    exception carries one, falling back to ``str(error)``.
    """
    body: Any = getattr(error, "body", None)
    if body is None:
        response = getattr(error, "response", None)
        if response is not None:
            try:
                body = response.json()
            except Exception:
                body = None
    if isinstance(body, dict):
        inner = body.get("error", body)
        if isinstance(inner, dict):
            message = inner.get("message")
            if isinstance(message, str) and message:
                return message
    text = str(error)
    return text or type(error).__name__


_HTTP_STATUS: dict[ErrorClass, int] = {
    ErrorClass.TIMEOUT: 504,
    ErrorClass.TRANSIENT: 503,
}


def http_status_for(error_class: ErrorClass) -> int:
    """HTTP status reported to clients for an upstream failure."""
    return _HTTP_STATUS.get(error_class, 502)
