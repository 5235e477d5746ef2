"""Tests for the static model registry."""

from __future__ import annotations

import pytest

from storechat.chat.errors import InvalidModelError
from storechat.llm.registry import (
    MODEL_REGISTRY,
    get_model,
    is_valid_model,
    list_models,
    valid_model_ids,
    validate_model,
)


def test_ids_are_unique() -> None:
    ids = valid_model_ids()
    assert len(ids) == len(set(ids))


def test_list_models_preserves_order() -> None:
    assert list_models() == list(MODEL_REGISTRY)
    assert list_models()[0].id == "llama-3.3-70b-versatile"


def test_is_valid_model() -> None:
    assert is_valid_model("gemma2-9b-it") is True
    assert is_valid_model("gpt-4") is False
    assert is_valid_model(None) is False


def test_get_model() -> None:
    info = get_model("mixtral-8x7b-32768")
    assert info is not None
    assert info.to_dict()["id"] == "mixtral-8x7b-32768"
    assert get_model("missing") is None


def test_validate_model_error_lists_all_ids() -> None:
    with pytest.raises(InvalidModelError) as excinfo:
        validate_model("bogus-model")
    err = excinfo.value
    assert err.model == "bogus-model"
    assert err.valid_ids == valid_model_ids()
    message = str(err)
    assert message.startswith('Model "bogus-model" is not valid.')
    for model_id in valid_model_ids():
        assert model_id in message
