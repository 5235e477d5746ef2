"""Narrow LLM interface used by the chat pipeline, backed by litellm."""

from __future__ import annotations

import logging
from collections.abc import Callable, Coroutine
from typing import TYPE_CHECKING, Any, Protocol

import litellm

from storechat.constants import (
    CLASSIFY_MAX_TOKENS,
    CLASSIFY_TEMPERATURE,
    SUMMARY_MAX_TOKENS,
    SUMMARY_TEMPERATURE,
)

if TYPE_CHECKING:
    from storechat.config import Settings

logger = logging.getLogger(__name__)

# litellm stubs have partially unknown types; typed alias
if TYPE_CHECKING:
    _acompletion: Callable[..., Coroutine[Any, Any, Any]]
else:
    _acompletion = litellm.acompletion


class LLMGateway(Protocol):
    """The three LLM calls the chat pipeline makes.

    Implementations raise on transport or provider failure; callers
    decide whether the failure is fatal.
    """

    async def classify(self, prompt: str) -> str: ...
    async def summarize(self, prompt: str) -> str: ...
    async def complete(
        self,
        messages: list[dict[str, str]],
        *,
        model: str,
        temperature: float,
        max_tokens: int,
    ) -> str: ...


class LiteLLMGateway:
    """LLMGateway over ``litellm.acompletion``.

    Registry model ids are prefixed with the configured provider
    (``groq/llama-3.3-70b-versatile``). Every call is bounded by
    ``Settings.llm_timeout_seconds``.
    """

    def __init__(self, settings: Settings) -> None:
        self._settings = settings

    async def classify(self, prompt: str) -> str:
        return await self._call(
            self._settings.classifier_model,
            [{"role": "user", "content": prompt}],
            temperature=CLASSIFY_TEMPERATURE,
            max_tokens=CLASSIFY_MAX_TOKENS,
        )

    async def summarize(self, prompt: str) -> str:
        return await self._call(
            self._settings.classifier_model,
            [{"role": "user", "content": prompt}],
            temperature=SUMMARY_TEMPERATURE,
            max_tokens=SUMMARY_MAX_TOKENS,
        )

    async def complete(
        self,
        messages: list[dict[str, str]],
        *,
        model: str,
        temperature: float,
        max_tokens: int,
    ) -> str:
        return await self._call(
            model,
            messages,
            temperature=temperature,
            max_tokens=max_tokens,
        )

    async def _call(
        self,
        model_id: str,
        messages: list[dict[str, str]],
        *,
        temperature: float,
        max_tokens: int,
    ) -> str:
        kwargs: dict[str, Any] = {
            "model": self._settings.litellm_model(model_id),
            "messages": messages,
            "temperature": temperature,
            "max_tokens": max_tokens,
            "timeout": self._settings.llm_timeout_seconds,
        }
        if self._settings.groq_api_key:
            kwargs["api_key"] = self._settings.groq_api_key
        response: Any = await _acompletion(**kwargs)

        usage: Any = getattr(response, "usage", None)
        logger.debug(
            "event=llm_call model=%s input_tokens=%s output_tokens=%s",
            model_id,
            getattr(usage, "prompt_tokens", 0),
            getattr(usage, "completion_tokens", 0),
        )
        return str(response.choices[0].message.content or "")
