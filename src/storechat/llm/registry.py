"""Static registry of chat models the service may dispatch to."""

from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Any

from storechat.chat.errors import InvalidModelError


@dataclass(frozen=True)
class ModelInfo:
    """Display metadata for one selectable model."""

    id: str
    name: str
    description: str
    provider: str

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


MODEL_REGISTRY: tuple[ModelInfo, ...] = (
    ModelInfo(
        id="llama-3.3-70b-versatile",
        name="Llama 3.3 70B Versatile",
        description="Modelo versátil y potente para tareas generales",
        provider="meta-llama",
    ),
    ModelInfo(
        id="llama-3.1-70b-versatile",
        name="Llama 3.1 70B Versatile",
        description="Versión anterior del modelo versátil",
        provider="meta-llama",
    ),
    ModelInfo(
        id="llama-3.1-8b-instant",
        name="Llama 3.1 8B Instant",
        description="Modelo rápido y ligero para respuestas instantáneas",
        provider="meta-llama",
    ),
    ModelInfo(
        id="llama-3.1-405b-reasoning",
        name="Llama 3.1 405B Reasoning",
        description="Modelo avanzado para razonamiento complejo",
        provider="meta-llama",
    ),
    ModelInfo(
        id="mixtral-8x7b-32768",
        name="Mixtral 8x7B",
        description="Modelo Mixtral de alta calidad",
        provider="mixtral",
    ),
    ModelInfo(
        id="gemma2-9b-it",
        name="Gemma2 9B",
        description="Modelo Gemma2 optimizado para instrucciones",
        provider="google",
    ),
    ModelInfo(
        id="meta-llama/llama-4-scout-17b-16e-instruct",
        name="Llama 4 Scout 17B",
        description="Modelo especializado en instrucciones",
        provider="meta-llama",
    ),
)

_BY_ID: dict[str, ModelInfo] = {m.id: m for m in MODEL_REGISTRY}


def list_models() -> list[ModelInfo]:
    return list(MODEL_REGISTRY)


def valid_model_ids() -> list[str]:
    return [m.id for m in MODEL_REGISTRY]


def is_valid_model(model_id: str | None) -> bool:
    return model_id is not None and model_id in _BY_ID


def get_model(model_id: str) -> ModelInfo | None:
    return _BY_ID.get(model_id)


def validate_model(model_id: str) -> ModelInfo:
    """Return the registry entry or raise naming every valid id."""
    info = _BY_ID.get(model_id)
    if info is None:
        raise InvalidModelError(model_id, valid_model_ids())
    return info
