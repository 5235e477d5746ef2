"""FastAPI dependency injection for repository and service access."""

from __future__ import annotations

import logging
from collections.abc import AsyncIterator
from dataclasses import dataclass
from typing import TYPE_CHECKING

from fastapi import Request

from storechat.repositories.protocols import (
    CatalogModelRepository,
    CatalogRepository,
)

if TYPE_CHECKING:
    from storechat.chat.service import ChatService
    from storechat.logger import ChatLogger
    from storechat.services.data_service import DataService

logger = logging.getLogger(__name__)


@dataclass
class Repos:
    """Repository container resolved per-request via Depends."""

    catalog: CatalogRepository
    models: CatalogModelRepository


async def get_repos(
    request: Request,
) -> AsyncIterator[Repos]:
    """Generator dep — session lives for the entire request.

    Commits after the handler returns so catalog-model writes persist.
    """
    from storechat.repositories.catalog_repo import SqlCatalogRepository
    from storechat.repositories.model_repo import (
        SqlCatalogModelRepository,
    )

    session_factory = request.app.state.session_factory
    async with session_factory() as session:
        yield Repos(
            catalog=SqlCatalogRepository(session),
            models=SqlCatalogModelRepository(session),
        )
        try:
            await session.commit()
        except Exception:
            logger.warning("event=session_commit_failed", exc_info=True)
            raise


def get_chat_service(request: Request) -> ChatService:
    """Get the process-wide ChatService from app.state."""
    return request.app.state.chat_service  # type: ignore[no-any-return]


def get_chat_logger(request: Request) -> ChatLogger:
    return request.app.state.chat_logger  # type: ignore[no-any-return]


def get_data_service(request: Request) -> DataService:
    """Get DataService from app.state."""
    return request.app.state.data_service  # type: ignore[no-any-return]
