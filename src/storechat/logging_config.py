"""Process-wide logging setup, run in two idempotent phases.

Phase 1, ``setup_logging()``: must run before litellm is imported.
It exports LITELLM_LOG, configures the root logger and quiets chatty
third-party loggers.

Phase 2, ``cleanup_third_party_handlers()``: runs after all imports.
litellm attaches its own StreamHandlers at import time; dropping them
leaves propagation to root as the single output path.
"""

import logging
import os

LOG_FORMAT = "%(asctime)s - %(levelname)s - [%(name)s] - %(message)s"
LOG_DATEFMT = "%Y-%m-%dT%H:%M:%S"

_SUPPRESSED_LOGGERS = (
    "LiteLLM",
    "LiteLLM Router",
    "LiteLLM Proxy",
    "httpx",
    "aiosqlite",
    "sqlalchemy.engine",
)

_LITELLM_LOGGERS = ("LiteLLM", "LiteLLM Router", "LiteLLM Proxy")

_phase1_done = False
_phase2_done = False


def setup_logging(level: str | None = None) -> None:
    """Configure the root logger once.

    ``level`` falls back to the LOG_LEVEL environment variable, then
    INFO. Later calls are no-ops.
    """
    global _phase1_done  # noqa: PLW0603
    if _phase1_done:
        return
    _phase1_done = True

    os.environ.setdefault("LITELLM_LOG", "WARNING")

    resolved = (level or os.environ.get("LOG_LEVEL") or "INFO").upper()
    logging.basicConfig(
        level=getattr(logging, resolved, logging.INFO),
        format=LOG_FORMAT,
        datefmt=LOG_DATEFMT,
    )

    for name in _SUPPRESSED_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)


def cleanup_third_party_handlers() -> None:
    """Strip litellm's import-time handlers. Later calls are no-ops."""
    global _phase2_done  # noqa: PLW0603
    if _phase2_done:
        return
    _phase2_done = True

    for name in _LITELLM_LOGGERS:
        lg = logging.getLogger(name)
        lg.handlers.clear()
        lg.propagate = True
