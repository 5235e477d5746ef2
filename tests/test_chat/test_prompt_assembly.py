"""Tests for system prompt and message list assembly."""

from __future__ import annotations

from storechat.chat.memory import ChatTurn
from storechat.chat.prompts import (
    KNOWLEDGE_BLOCK,
    SYSTEM_ROLE,
    build_messages,
    build_system_prompt,
)
from storechat.constants import Role


def test_base_prompt_only() -> None:
    assert build_system_prompt() == SYSTEM_ROLE


def test_fact_block_appended() -> None:
    prompt = build_system_prompt(fact="Hay 2 laptops.")
    assert prompt.startswith(SYSTEM_ROLE)
    assert "INFORMACIÓN DE LA BASE DE DATOS:\nHay 2 laptops." in prompt


def test_knowledge_block_appended() -> None:
    prompt = build_system_prompt(knowledge_mode=True)
    assert prompt == SYSTEM_ROLE + KNOWLEDGE_BLOCK


def test_block_order() -> None:
    prompt = build_system_prompt(
        fact="dato", knowledge_mode=True, summary="resumen"
    )
    db = prompt.index("INFORMACIÓN DE LA BASE DE DATOS")
    kn = prompt.index("requiere información general")
    summary = prompt.index("CONTEXTO DE CONVERSACIÓN ANTERIOR:\nresumen")
    assert db < kn < summary


def test_empty_fact_and_summary_skipped() -> None:
    assert build_system_prompt(fact="", summary="") == SYSTEM_ROLE


def test_build_messages_order() -> None:
    recent = [
        ChatTurn(Role.USER, "hola"),
        ChatTurn(Role.ASSISTANT, "buenas"),
    ]
    messages = build_messages("¿precio?", recent, fact="dato")

    assert [m["role"] for m in messages] == [
        "system",
        "user",
        "assistant",
        "user",
    ]
    assert "dato" in messages[0]["content"]
    assert messages[1]["content"] == "hola"
    assert messages[-1] == {"role": "user", "content": "¿precio?"}


def test_build_messages_without_history() -> None:
    messages = build_messages("hola")
    assert len(messages) == 2
    assert messages[0]["content"] == SYSTEM_ROLE
