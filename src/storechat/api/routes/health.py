"""Health check endpoints."""

from datetime import UTC, datetime

from fastapi import APIRouter, Depends

from storechat import __version__
from storechat.api.dependencies import get_data_service
from storechat.services.data_service import DataService

router = APIRouter(prefix="/api", tags=["health"])


@router.get("/health")
async def health() -> dict[str, str]:
    """Basic health check for load balancers."""
    return {
        "status": "healthy",
        "version": __version__,
        "timestamp": datetime.now(UTC).isoformat(),
    }


@router.get("/health/detailed")
async def health_detailed(
    data_service: DataService = Depends(get_data_service),
) -> dict[str, object]:
    """Detailed health check with component-level status."""
    db_healthy = await data_service.check_connection()
    llm_configured = data_service.check_llm_configured()

    components = {
        "database": {
            "status": "connected" if db_healthy else "disconnected"
        },
        "llm": {
            "status": "configured" if llm_configured else "missing_api_key"
        },
    }

    all_healthy = db_healthy and llm_configured

    return {
        "status": "healthy" if all_healthy else "degraded",
        "version": __version__,
        "components": components,
        "timestamp": datetime.now(UTC).isoformat(),
    }
