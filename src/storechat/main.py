"""FastAPI application with lifespan startup."""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

# Phase 1: singleton logging, MUST run before any storechat imports
# (they transitively import litellm which reads LITELLM_LOG at import time)
from storechat.logging_config import setup_logging

setup_logging()

from fastapi import FastAPI  # noqa: E402
from fastapi.middleware.cors import CORSMiddleware  # noqa: E402
from sqlalchemy.ext.asyncio import async_sessionmaker  # noqa: E402

from storechat import __version__  # noqa: E402
from storechat.api.routes import (  # noqa: E402
    catalog,
    catalog_models,
    chat,
    health,
)
from storechat.config import Settings, create_app_engine  # noqa: E402
from storechat.logger import ChatLogger  # noqa: E402
from storechat.logging_config import (  # noqa: E402
    cleanup_third_party_handlers,
)
from storechat.services.chat_factory import (  # noqa: E402
    build_chat_service,
)
from storechat.services.data_service import (  # noqa: E402
    DataService,
    create_tables,
)

# Phase 2: Now that all imports (including litellm) are done,
# clear litellm's duplicate handlers.
cleanup_third_party_handlers()

_logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    # 1. Use module-level settings (single source of truth)
    settings = _settings

    # 2. Create async engine (WAL set via pool-connect listener)
    engine = create_app_engine(
        settings.database_url, echo=settings.debug_mode
    )

    # 3. Create tables
    await create_tables(engine)

    # 4. Create session factory
    session_factory = async_sessionmaker(engine, expire_on_commit=False)

    # 5. Store in app.state
    app.state.settings = settings
    app.state.engine = engine
    app.state.session_factory = session_factory
    app.state.chat_logger = ChatLogger(
        log_dir=settings.log_dir, level=settings.log_level
    )
    app.state.data_service = DataService(session_factory, settings)
    app.state.chat_service = build_chat_service(settings)

    if not settings.llm_configured:
        _logger.warning(
            "event=no_llm_key action=chat_requests_will_fail"
        )

    yield

    # Cleanup
    await engine.dispose()


app = FastAPI(
    title="Storechat",
    description=(
        "Support chat backend for an online technology store"
    ),
    version=__version__,
    openapi_url="/api/openapi.json",
    docs_url="/api/docs",
    redoc_url="/api/redoc",
    lifespan=lifespan,
)

_settings = Settings()
_cors_origins = [
    o.strip()
    for o in _settings.cors_origins.split(",")
    if o.strip()
]

app.add_middleware(
    CORSMiddleware,
    allow_origins=_cors_origins,
    allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
    allow_headers=["Content-Type"],
    allow_credentials=False,
)

# Routes
app.include_router(health.router)
app.include_router(chat.router)
app.include_router(catalog.router)
app.include_router(catalog_models.router)
