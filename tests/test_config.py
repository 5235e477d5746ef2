"""Tests for Settings validators and the engine factory."""

from __future__ import annotations

from pathlib import Path

import pytest
from pydantic import ValidationError

from storechat.config import Settings, create_app_engine


class TestSettings:
    def test_defaults(self) -> None:
        s = Settings()
        assert s.default_model == "llama-3.3-70b-versatile"
        assert s.classifier_model == "llama-3.1-8b-instant"
        assert s.history_window == 12
        assert s.intent_cache_ttl_seconds == 300
        assert s.session_idle_timeout_seconds == 24 * 60 * 60

    def test_api_key_read_from_environment(self) -> None:
        assert Settings().groq_api_key == "for-demo-purposes-only"
        assert Settings().llm_configured is True

    def test_missing_key_not_configured(self) -> None:
        assert Settings(groq_api_key="").llm_configured is False

    def test_unknown_default_model_rejected(self) -> None:
        with pytest.raises(ValidationError, match="Unknown model"):
            Settings(default_model="gpt-nope")

    def test_unknown_classifier_model_rejected(self) -> None:
        with pytest.raises(ValidationError, match="valid models"):
            Settings(classifier_model="gpt-nope")

    def test_history_window_must_be_positive(self) -> None:
        with pytest.raises(ValidationError, match="at least 1"):
            Settings(history_window=0)

    def test_env_override(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("DEFAULT_MODEL", "gemma2-9b-it")
        monkeypatch.setenv("HISTORY_WINDOW", "6")
        s = Settings()
        assert s.default_model == "gemma2-9b-it"
        assert s.history_window == 6

    def test_litellm_model(self) -> None:
        s = Settings(llm_provider="groq")
        assert s.litellm_model("gemma2-9b-it") == "groq/gemma2-9b-it"


class TestCreateAppEngine:
    @pytest.mark.asyncio
    async def test_wal_mode_set_on_connect(
        self, tmp_path: Path,
    ) -> None:
        """WAL journal mode is set automatically on connection."""
        from sqlalchemy import text

        db_file = tmp_path / "test.db"
        engine = create_app_engine(f"sqlite:///{db_file}")

        async with engine.connect() as conn:
            row = await conn.execute(text("PRAGMA journal_mode"))
            mode = row.scalar()

        await engine.dispose()
        assert mode == "wal"

    @pytest.mark.asyncio
    async def test_url_conversion(self) -> None:
        """sqlite:/// is converted to sqlite+aiosqlite:///."""
        engine = create_app_engine("sqlite:///data/test.db")
        assert "aiosqlite" in str(engine.url)
        await engine.dispose()

    @pytest.mark.asyncio
    async def test_already_converted_url_passthrough(self) -> None:
        engine = create_app_engine(
            "sqlite+aiosqlite:///:memory:"
        )
        assert str(engine.url) == "sqlite+aiosqlite:///:memory:"
        await engine.dispose()
