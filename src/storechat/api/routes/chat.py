"""Chat exchange, model listing and session routes."""

from __future__ import annotations

import logging
import time
import uuid

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from storechat.api.dependencies import (
    Repos,
    get_chat_logger,
    get_chat_service,
    get_repos,
)
from storechat.api.schemas import APIResponse, ChatRequest
from storechat.chat.errors import (
    InvalidMessageError,
    InvalidModelError,
    UpstreamError,
)
from storechat.chat.service import ChatService
from storechat.constants import ID_HEX_LENGTH
from storechat.llm.registry import list_models
from storechat.logger import ChatLogger
from storechat.resilience.errors import http_status_for

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/chat", tags=["chat"])


def _error_response(status_code: int, error: str) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content=APIResponse(success=False, error=error).model_dump(),
    )


@router.post("", response_model=None)
async def chat(
    body: ChatRequest,
    repos: Repos = Depends(get_repos),
    service: ChatService = Depends(get_chat_service),
    chat_logger: ChatLogger = Depends(get_chat_logger),
) -> APIResponse | JSONResponse:
    """Answer one message; a missing session_id starts a new session."""
    request_id = uuid.uuid4().hex[:ID_HEX_LENGTH]
    session_id = body.session_id or uuid.uuid4().hex
    start = time.perf_counter()

    try:
        result = await service.chat(
            body.message,
            repos.catalog,
            model=body.model,
            session_id=session_id,
            history=[t.model_dump() for t in body.history],
        )
    except InvalidModelError as exc:
        return _error_response(400, str(exc))
    except InvalidMessageError as exc:
        return _error_response(400, str(exc))
    except UpstreamError as exc:
        chat_logger.log_error(
            request_id,
            "completion",
            str(exc),
            error_class=exc.error_class.value,
        )
        return _error_response(http_status_for(exc.error_class), str(exc))

    duration_ms = (time.perf_counter() - start) * 1000
    chat_logger.log_exchange(
        request_id=request_id,
        session_id=result.session_id,
        message=body.message,
        intent=str(result.intent),
        model=result.model,
        used_database=result.used_database,
        has_context=result.has_context,
        duration_ms=round(duration_ms, 1),
    )
    return APIResponse(
        success=True,
        data=result.to_dict(),
        metadata={"request_id": request_id},
    )


@router.get("/models")
async def models() -> APIResponse:
    """List selectable chat models."""
    return APIResponse(
        success=True, data=[m.to_dict() for m in list_models()]
    )


@router.get("/sessions")
async def list_sessions(
    service: ChatService = Depends(get_chat_service),
) -> APIResponse:
    """Ids of sessions currently held in memory."""
    ids = service.sessions.active_ids()
    return APIResponse(
        success=True, data=ids, metadata={"total": len(ids)}
    )


@router.get("/sessions/{session_id}")
async def get_session(
    session_id: str,
    service: ChatService = Depends(get_chat_service),
) -> APIResponse:
    """Session metadata and full history."""
    info = service.sessions.info(session_id)
    if info is None:
        return APIResponse(success=False, error="Session not found")
    return APIResponse(success=True, data=info)


@router.delete("/sessions/{session_id}")
async def clear_session(
    session_id: str,
    service: ChatService = Depends(get_chat_service),
) -> APIResponse:
    """Forget a session immediately."""
    removed = service.sessions.delete(session_id)
    logger.info(
        "event=session_cleared session_id=%s existed=%s",
        session_id,
        removed,
    )
    return APIResponse(success=True, data={"removed": removed})
