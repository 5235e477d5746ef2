"""Intent classifier — lexical scoring first, LLM only when unsure.

Decision order:
1. Fresh cache entry for the normalized message wins.
2. Stem scores plus pattern bonuses. A category resolves locally when
   it strictly beats the other and reaches MIN_CONFIDENT_SCORE.
3. Otherwise one classification call to the LLM. Anything the reply
   does not name, or any failure, falls back to ``database`` when the
   database score is at least the knowledge score, else ``general``.
The resolved label is always cached.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from storechat.constants import (
    ERROR_TRUNCATION_CHARS,
    MIN_CONFIDENT_SCORE,
    Intent,
)
from storechat.llm.gateway import LLMGateway
from storechat.routing.cache import IntentCache, normalize_message
from storechat.routing.patterns import match_patterns
from storechat.routing.stems import score_stems

logger = logging.getLogger(__name__)

CLASSIFY_PROMPT = """Analiza esta pregunta y clasifícala en UNA de estas categorías:
- "database": Si necesita consultar la base de datos de la tienda (stock, precios específicos, productos disponibles en la tienda, usuarios registrados, ventas)
- "knowledge": Si necesita información general (historia, fechas de lanzamiento, especificaciones técnicas generales, comparaciones, qué es algo)
- "general": Si es una pregunta general sobre tecnología que no requiere ninguna de las anteriores

Pregunta: "{message}"

Responde SOLO con una palabra: "database", "knowledge" o "general\""""

# Checked in order; the legacy short labels are still accepted.
_REPLY_LABELS: tuple[tuple[str, Intent], ...] = (
    ("database", Intent.DATABASE),
    ("knowledge", Intent.KNOWLEDGE),
    ("general", Intent.GENERAL),
    ("bd", Intent.DATABASE),
    ("web", Intent.KNOWLEDGE),
)


@dataclass(frozen=True)
class IntentDecision:
    """A classification and the evidence behind it."""

    intent: Intent
    database_score: int = 0
    knowledge_score: int = 0
    cached: bool = False
    used_llm: bool = False


def score_message(message: str) -> tuple[int, int]:
    """Combined (database, knowledge) score for a raw message."""
    lower = message.lower()
    stems = score_stems(lower)
    patterns = match_patterns(lower)
    return (
        stems.database + patterns.database_bonus,
        stems.knowledge + patterns.knowledge_bonus,
    )


def decide_locally(db_score: int, kn_score: int) -> Intent | None:
    """Return an intent when the scores are decisive, else None."""
    if db_score > kn_score and db_score >= MIN_CONFIDENT_SCORE:
        return Intent.DATABASE
    if kn_score > db_score and kn_score >= MIN_CONFIDENT_SCORE:
        return Intent.KNOWLEDGE
    return None


def fallback_intent(db_score: int, kn_score: int) -> Intent:
    return Intent.DATABASE if db_score >= kn_score else Intent.GENERAL


def parse_reply(reply: str) -> Intent | None:
    """Map a free-text LLM reply to an intent, or None if unrecognized."""
    lower = reply.strip().lower()
    for token, intent in _REPLY_LABELS:
        if token in lower:
            return intent
    return None


class IntentClassifier:
    def __init__(
        self,
        gateway: LLMGateway,
        cache: IntentCache | None = None,
    ) -> None:
        self._gateway = gateway
        self._cache = cache if cache is not None else IntentCache()

    async def classify(self, message: str) -> Intent:
        decision = await self.decide(message)
        return decision.intent

    async def decide(self, message: str) -> IntentDecision:
        cached = self._cache.get(message)
        if cached is not None:
            return IntentDecision(intent=cached, cached=True)

        db_score, kn_score = score_message(message)
        local = decide_locally(db_score, kn_score)
        if local is not None:
            decision = IntentDecision(local, db_score, kn_score)
        else:
            decision = IntentDecision(
                await self._ask_llm(message, db_score, kn_score),
                db_score,
                kn_score,
                used_llm=True,
            )

        self._cache.put(message, decision.intent)
        logger.debug(
            "event=intent_classified intent=%s db=%d knowledge=%d llm=%s",
            decision.intent,
            db_score,
            kn_score,
            decision.used_llm,
        )
        return decision

    async def _ask_llm(
        self, message: str, db_score: int, kn_score: int
    ) -> Intent:
        prompt = CLASSIFY_PROMPT.format(message=message.strip())
        try:
            reply = await self._gateway.classify(prompt)
        except Exception as exc:
            logger.warning(
                "event=intent_llm_failed action=local_fallback error=%s",
                str(exc)[:ERROR_TRUNCATION_CHARS],
            )
            return fallback_intent(db_score, kn_score)

        parsed = parse_reply(reply)
        if parsed is None:
            logger.warning(
                "event=intent_reply_unparseable action=local_fallback"
                " reply=%r key=%s",
                reply[:ERROR_TRUNCATION_CHARS],
                normalize_message(message)[:ERROR_TRUNCATION_CHARS],
            )
            return fallback_intent(db_score, kn_score)
        return parsed
