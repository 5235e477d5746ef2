"""Shared constants, the single source of truth for cross-module values.

Scoring weights and thresholds are tuned values; keep them exact so
routing decisions stay stable across releases.
"""

from __future__ import annotations

from enum import StrEnum

# ── String Enums ─────────────────────────────────────────


class Intent(StrEnum):
    """Resolved routing category for a chat message."""

    DATABASE = "database"
    KNOWLEDGE = "knowledge"
    GENERAL = "general"


class Role(StrEnum):
    """Chat turn roles stored in session history."""

    USER = "user"
    ASSISTANT = "assistant"
    SYSTEM = "system"


# ── Intent Scoring ───────────────────────────────────────

PATTERN_MATCH_BONUS = 5
MIN_CONFIDENT_SCORE = 3

# ── Caching & Session Lifetime ───────────────────────────

INTENT_CACHE_TTL_SECONDS = 5 * 60
SESSION_IDLE_TIMEOUT_SECONDS = 24 * 60 * 60
HISTORY_WINDOW_TURNS = 12

# ── LLM Sampling ─────────────────────────────────────────

CLASSIFY_TEMPERATURE = 0.1
CLASSIFY_MAX_TOKENS = 10
SUMMARY_TEMPERATURE = 0.3
SUMMARY_MAX_TOKENS = 150
CHAT_TEMPERATURE = 0.7
CHAT_MAX_TOKENS = 1000

# ── Fact Resolution ──────────────────────────────────────

# Tokens of this length or shorter never hit the product search.
MAX_IGNORED_TERM_LENGTH = 3
LAPTOP_CATEGORY = "Laptops"
SMARTPHONE_CATEGORY = "Smartphones"
FEATURED_BRANDS = ("Apple", "Samsung")

# ── Misc ─────────────────────────────────────────────────

ERROR_TRUNCATION_CHARS = 200
ID_HEX_LENGTH = 12
