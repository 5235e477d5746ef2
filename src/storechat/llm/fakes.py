"""Scripted LLMGateway for tests and offline runs.

No network — each method returns a canned reply or raises a configured
exception, and records what it was asked.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any


@dataclass
class FakeLLMGateway:
    """Records every call; replies come from the public attributes."""

    classify_reply: str = "general"
    summary_reply: str = "Resumen de la conversación."
    completion_reply: str = "Respuesta de prueba."
    classify_error: Exception | None = None
    summary_error: Exception | None = None
    completion_error: Exception | None = None

    classify_prompts: list[str] = field(default_factory=list)
    summary_prompts: list[str] = field(default_factory=list)
    completions: list[dict[str, Any]] = field(default_factory=list)

    async def classify(self, prompt: str) -> str:
        self.classify_prompts.append(prompt)
        if self.classify_error is not None:
            raise self.classify_error
        return self.classify_reply

    async def summarize(self, prompt: str) -> str:
        self.summary_prompts.append(prompt)
        if self.summary_error is not None:
            raise self.summary_error
        return self.summary_reply

    async def complete(
        self,
        messages: list[dict[str, str]],
        *,
        model: str,
        temperature: float,
        max_tokens: int,
    ) -> str:
        self.completions.append({
            "messages": messages,
            "model": model,
            "temperature": temperature,
            "max_tokens": max_tokens,
        })
        if self.completion_error is not None:
            raise self.completion_error
        return self.completion_reply

    @property
    def classify_calls(self) -> int:
        return len(self.classify_prompts)

    @property
    def summary_calls(self) -> int:
        return len(self.summary_prompts)

    @property
    def completion_calls(self) -> int:
        return len(self.completions)
