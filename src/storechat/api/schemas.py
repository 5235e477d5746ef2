"""Request/response schemas for the HTTP API."""

from typing import Any, Literal

from pydantic import BaseModel, Field


class APIResponse(BaseModel):
    """Standard response envelope for all API endpoints."""

    success: bool
    data: Any | None = None
    error: str | None = None
    metadata: dict[str, Any] = Field(default_factory=dict)


class HistoryTurn(BaseModel):
    role: Literal["user", "assistant"]
    content: str


class ChatRequest(BaseModel):
    """Request body for POST /api/chat."""

    message: str = Field(min_length=1, max_length=10_000)
    model: str | None = None
    session_id: str | None = Field(default=None, max_length=200)
    history: list[HistoryTurn] = Field(default_factory=list)


class CatalogModelCreate(BaseModel):
    """Request body for POST /api/catalog-models."""

    name: str = Field(min_length=1, max_length=200)
    kind: str = Field(min_length=1, max_length=100)
    brand: str | None = None
    specs: str | None = None
    description: str | None = None
    extra: Any | None = None


class CatalogModelUpdate(BaseModel):
    """Request body for PUT /api/catalog-models/{id}.

    Omitted fields keep their stored value.
    """

    name: str | None = Field(default=None, min_length=1, max_length=200)
    kind: str | None = Field(default=None, min_length=1, max_length=100)
    brand: str | None = None
    specs: str | None = None
    description: str | None = None
    extra: Any | None = None
