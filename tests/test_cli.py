"""Tests for CLI argument parsing and commands."""

from __future__ import annotations

import json
from pathlib import Path
from unittest.mock import AsyncMock, patch

import pytest

from storechat.chat.errors import InvalidModelError
from storechat.cli import _build_parser, main


class TestArgParser:
    def test_version_flag(self) -> None:
        args = _build_parser().parse_args(["--version"])
        assert args.version is True

    def test_init_db_defaults(self) -> None:
        args = _build_parser().parse_args(["init-db"])
        assert args.command == "init-db"
        assert args.db is None

    def test_ask_with_options(self) -> None:
        args = _build_parser().parse_args(
            [
                "ask",
                "¿Qué es un SSD?",
                "--model",
                "gemma2-9b-it",
                "--session",
                "s1",
            ]
        )
        assert args.command == "ask"
        assert args.message == "¿Qué es un SSD?"
        assert args.model == "gemma2-9b-it"
        assert args.session == "s1"

    def test_no_command(self) -> None:
        assert _build_parser().parse_args([]).command is None


def test_version_output(capsys: pytest.CaptureFixture[str]) -> None:
    main(["--version"])
    assert capsys.readouterr().out.startswith("storechat ")


def test_init_db_creates_file(
    tmp_path: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    db_file = tmp_path / "store.db"
    main(["init-db", "--db", str(db_file)])
    assert db_file.exists()
    assert "Tables ready" in capsys.readouterr().out


def test_ask_prints_json(
    tmp_path: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    result = {"response": "hola", "intent": "general"}
    with patch("storechat.cli._ask", AsyncMock(return_value=result)):
        main(["ask", "hola", "--db", str(tmp_path / "x.db")])
    assert json.loads(capsys.readouterr().out) == result


def test_ask_chat_error_exits_nonzero(
    tmp_path: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    error = InvalidModelError("bogus", ["llama-3.3-70b-versatile"])
    with (
        patch("storechat.cli._ask", AsyncMock(side_effect=error)),
        pytest.raises(SystemExit) as excinfo,
    ):
        main(["ask", "hola", "--model", "bogus"])
    assert excinfo.value.code == 1
    assert "bogus" in capsys.readouterr().err
