"""Model registry and LLM completion gateways."""

from storechat.llm.gateway import LLMGateway, LiteLLMGateway
from storechat.llm.registry import (
    MODEL_REGISTRY,
    ModelInfo,
    is_valid_model,
    list_models,
    validate_model,
)

__all__ = [
    "LLMGateway",
    "LiteLLMGateway",
    "MODEL_REGISTRY",
    "ModelInfo",
    "is_valid_model",
    "list_models",
    "validate_model",
]
