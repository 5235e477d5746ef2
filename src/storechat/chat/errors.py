"""Chat pipeline exceptions."""

from __future__ import annotations

from storechat.resilience.errors import (
    ErrorClass,
    classify_error,
    upstream_message,
)


class ChatError(Exception):
    """Base class for errors surfaced to chat callers."""


class InvalidMessageError(ChatError):
    """The message is missing, not a string, or blank."""


class InvalidModelError(ChatError):
    """The requested model id is not in the registry."""

    def __init__(self, model: str, valid_ids: list[str]) -> None:
        self.model = model
        self.valid_ids = valid_ids
        super().__init__(
            f'Model "{model}" is not valid. '
            f"Available models: {', '.join(valid_ids)}"
        )


class UpstreamError(ChatError):
    """The final completion call failed."""

    def __init__(self, cause: BaseException) -> None:
        self.cause = cause
        self.error_class: ErrorClass = classify_error(cause)
        super().__init__(
            f"Error processing the request: {upstream_message(cause)}"
        )
