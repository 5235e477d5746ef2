"""Chat service — one user message in, one model reply out.

Pipeline per message:
1. Validate message and model (nothing is dispatched on failure).
2. Classify intent (cached; LLM only when scores are inconclusive).
3. Database intent → resolve a fact snippet from the catalog.
4. Load history (stored session wins over caller-supplied), keep the
   recent window and summarize the overflow.
5. One completion call; on success record the exchange.

Classification, fact lookup and summarization degrade silently to
"no enrichment". Only the completion call is fatal.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass
from typing import Any

from storechat.chat.errors import InvalidMessageError, UpstreamError
from storechat.chat.facts import DatabaseFactResolver
from storechat.chat.memory import (
    ChatTurn,
    SessionStore,
    optimize_history,
    summarize_overflow,
)
from storechat.chat.prompts import build_messages
from storechat.constants import (
    CHAT_MAX_TOKENS,
    CHAT_TEMPERATURE,
    ERROR_TRUNCATION_CHARS,
    HISTORY_WINDOW_TURNS,
    Intent,
)
from storechat.llm.gateway import LLMGateway
from storechat.llm.registry import validate_model
from storechat.repositories.protocols import CatalogRepository
from storechat.routing.classifier import IntentClassifier

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ChatResult:
    response: str
    intent: Intent
    used_database: bool
    model: str
    session_id: str | None
    has_context: bool

    def to_dict(self) -> dict[str, Any]:
        return {
            "response": self.response,
            "intent": str(self.intent),
            "used_database": self.used_database,
            "model": self.model,
            "session_id": self.session_id,
            "has_context": self.has_context,
        }


def _coerce_history(
    history: Sequence[ChatTurn | dict[str, Any]] | None,
) -> list[ChatTurn]:
    turns: list[ChatTurn] = []
    for item in history or ():
        if isinstance(item, ChatTurn):
            turns.append(item)
            continue
        try:
            turns.append(ChatTurn.from_message(item))
        except ValueError as exc:
            raise InvalidMessageError(str(exc)) from exc
    return turns


class ChatService:
    def __init__(
        self,
        gateway: LLMGateway,
        classifier: IntentClassifier,
        sessions: SessionStore,
        default_model: str,
        history_window: int = HISTORY_WINDOW_TURNS,
    ) -> None:
        self._gateway = gateway
        self._classifier = classifier
        self._sessions = sessions
        self._default_model = default_model
        self._history_window = history_window

    @property
    def sessions(self) -> SessionStore:
        return self._sessions

    async def chat(
        self,
        message: object,
        catalog: CatalogRepository,
        *,
        model: str | None = None,
        session_id: str | None = None,
        history: Sequence[ChatTurn | dict[str, Any]] | None = None,
    ) -> ChatResult:
        if not isinstance(message, str) or not message.strip():
            raise InvalidMessageError(
                'The "message" field is required and must be a '
                "non-empty string"
            )
        model_id = model or self._default_model
        validate_model(model_id)
        supplied = _coerce_history(history)

        intent = await self._classifier.classify(message)

        fact: str | None = None
        if intent == Intent.DATABASE:
            fact = await self._lookup_fact(message, catalog)

        if session_id and session_id in self._sessions:
            stored = self._sessions.history(session_id)
        else:
            stored = supplied
        window = optimize_history(stored, self._history_window)
        summary = await summarize_overflow(window.overflow, self._gateway)

        messages = build_messages(
            message,
            window.recent,
            fact=fact,
            knowledge_mode=intent == Intent.KNOWLEDGE,
            summary=summary,
        )
        try:
            reply = await self._gateway.complete(
                messages,
                model=model_id,
                temperature=CHAT_TEMPERATURE,
                max_tokens=CHAT_MAX_TOKENS,
            )
        except Exception as exc:
            error = UpstreamError(exc)
            logger.error(
                "event=completion_failed model=%s error_class=%s error=%s",
                model_id,
                error.error_class.value,
                str(error)[:ERROR_TRUNCATION_CHARS],
            )
            raise error from exc

        if session_id:
            self._sessions.append_exchange(session_id, message, reply)

        return ChatResult(
            response=reply,
            intent=intent,
            used_database=intent == Intent.DATABASE,
            model=model_id,
            session_id=session_id,
            has_context=bool(window.recent) or bool(summary),
        )

    async def _lookup_fact(
        self, message: str, catalog: CatalogRepository
    ) -> str | None:
        try:
            return await DatabaseFactResolver(catalog).resolve(message)
        except Exception as exc:
            logger.warning(
                "event=fact_lookup_failed action=skip_context error=%s",
                str(exc)[:ERROR_TRUNCATION_CHARS],
            )
            return None
