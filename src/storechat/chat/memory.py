"""Session memory: per-session turn history, window trimming, summaries.

Sessions live only in process memory. Expiry is lazy: every write runs
a sweep that drops sessions idle for longer than the timeout. A session
that never sees another write in the process stays until some other
session writes.
"""

from __future__ import annotations

import logging
import time
from collections.abc import Callable, Sequence
from dataclasses import dataclass, field
from datetime import UTC, datetime
from typing import Any, Generic, TypeVar

from storechat.constants import (
    ERROR_TRUNCATION_CHARS,
    HISTORY_WINDOW_TURNS,
    SESSION_IDLE_TIMEOUT_SECONDS,
    Role,
)
from storechat.llm.gateway import LLMGateway

logger = logging.getLogger(__name__)

SUMMARY_PROMPT = """Resume brevemente esta conversación anterior manteniendo solo la información relevante para el contexto futuro. Máximo 100 palabras. Usa formato Markdown si es necesario.

Conversación:
{transcript}

Resumen:"""


@dataclass(frozen=True)
class ChatTurn:
    role: Role
    content: str

    def to_message(self) -> dict[str, str]:
        return {"role": str(self.role), "content": self.content}

    @classmethod
    def from_message(cls, message: dict[str, Any]) -> ChatTurn:
        """Build from a ``{"role", "content"}`` mapping.

        Raises ValueError for roles other than user/assistant.
        """
        role = str(message.get("role", ""))
        if role not in (Role.USER, Role.ASSISTANT):
            raise ValueError(f"Unsupported history role: {role!r}")
        return cls(role=Role(role), content=str(message.get("content", "")))


@dataclass
class SessionRecord:
    session_id: str
    created_at: float
    last_activity: float
    turns: list[ChatTurn] = field(
        default_factory=lambda: list[ChatTurn]()
    )
    total_messages: int = 0

    def to_dict(self) -> dict[str, Any]:
        return {
            "session_id": self.session_id,
            "history": [t.to_message() for t in self.turns],
            "created_at": _iso(self.created_at),
            "last_activity": _iso(self.last_activity),
            "total_messages": self.total_messages,
            "duration_minutes": int(
                (self.last_activity - self.created_at) // 60
            ),
        }


def _iso(ts: float) -> str:
    return datetime.fromtimestamp(ts, UTC).isoformat()


class SessionStore:
    """In-memory session map owned by one service instance.

    Concurrent writers to the same session are not serialized; the
    last append wins.
    """

    def __init__(
        self,
        idle_timeout_seconds: float = SESSION_IDLE_TIMEOUT_SECONDS,
        clock: Callable[[], float] = time.time,
    ) -> None:
        self._idle_timeout = idle_timeout_seconds
        self._clock = clock
        self._sessions: dict[str, SessionRecord] = {}

    def get(self, session_id: str) -> SessionRecord | None:
        return self._sessions.get(session_id)

    def put(self, record: SessionRecord) -> None:
        self._sessions[record.session_id] = record

    def delete(self, session_id: str) -> bool:
        """Remove a session immediately; False if it did not exist."""
        return self._sessions.pop(session_id, None) is not None

    def sweep_expired(self) -> list[str]:
        """Drop sessions idle longer than the timeout; return their ids."""
        now = self._clock()
        expired = [
            sid
            for sid, rec in self._sessions.items()
            if now - rec.last_activity > self._idle_timeout
        ]
        for sid in expired:
            del self._sessions[sid]
            logger.info("event=session_expired session_id=%s", sid)
        return expired

    def history(self, session_id: str) -> list[ChatTurn]:
        """Stored turns, oldest first. Unknown sessions read as empty."""
        record = self._sessions.get(session_id)
        return list(record.turns) if record else []

    def append_exchange(
        self, session_id: str, user_message: str, reply: str
    ) -> SessionRecord:
        """Record one user/assistant pair, creating the session if new."""
        now = self._clock()
        record = self._sessions.get(session_id)
        if record is None:
            record = SessionRecord(
                session_id=session_id,
                created_at=now,
                last_activity=now,
            )
            self._sessions[session_id] = record
            logger.debug("event=session_created session_id=%s", session_id)

        record.turns.extend([
            ChatTurn(Role.USER, user_message),
            ChatTurn(Role.ASSISTANT, reply),
        ])
        record.last_activity = now
        record.total_messages += 2

        self.sweep_expired()
        return record

    def info(self, session_id: str) -> dict[str, Any] | None:
        record = self._sessions.get(session_id)
        return record.to_dict() if record else None

    def active_ids(self) -> list[str]:
        return list(self._sessions)

    def __contains__(self, session_id: object) -> bool:
        return session_id in self._sessions

    def __len__(self) -> int:
        return len(self._sessions)


T = TypeVar("T")


@dataclass(frozen=True)
class HistoryWindow(Generic[T]):
    """History split into the retained window and the older overflow."""

    recent: list[T]
    overflow: list[T]


def optimize_history(
    history: Sequence[T], max_turns: int = HISTORY_WINDOW_TURNS
) -> HistoryWindow[T]:
    """Keep the last ``max_turns`` entries; everything older overflows."""
    if len(history) <= max_turns:
        return HistoryWindow(recent=list(history), overflow=[])
    cut = len(history) - max_turns
    return HistoryWindow(
        recent=list(history[cut:]),
        overflow=list(history[:cut]),
    )


def build_transcript(turns: Sequence[ChatTurn]) -> str:
    return "\n".join(
        f"{'Usuario' if t.role == Role.USER else 'Asistente'}: {t.content}"
        for t in turns
    )


async def summarize_overflow(
    overflow: Sequence[ChatTurn], gateway: LLMGateway
) -> str:
    """Condense older turns; any failure yields an empty summary."""
    if not overflow:
        return ""
    prompt = SUMMARY_PROMPT.format(transcript=build_transcript(overflow))
    try:
        summary = await gateway.summarize(prompt)
    except Exception as exc:
        logger.warning(
            "event=summary_failed action=drop_overflow turns=%d error=%s",
            len(overflow),
            str(exc)[:ERROR_TRUNCATION_CHARS],
        )
        return ""
    return summary.strip()
