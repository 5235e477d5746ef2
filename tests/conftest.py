"""Shared test fixtures: in-memory SQLite, sample catalog, fake app."""

import os

# Force a demo API key for all tests. No real LLM calls are made.
# Set unconditionally at import time, so even if you have a real key
# in your shell environment, pytest overwrites it before any
# Settings() is created.
os.environ["GROQ_API_KEY"] = "for-demo-purposes-only"

from collections.abc import Callable, Iterator
from dataclasses import dataclass
from pathlib import Path

import pytest
import pytest_asyncio
from sqlalchemy.ext.asyncio import (
    AsyncSession,
    create_async_engine,
)

from storechat.api.dependencies import (
    Repos,
    get_data_service,
    get_repos,
)
from storechat.chat.memory import SessionStore
from storechat.chat.service import ChatService
from storechat.config import Settings
from storechat.llm.fakes import FakeLLMGateway
from storechat.logger import ChatLogger
from storechat.main import app
from storechat.models import Base
from storechat.models.customer import Customer
from storechat.models.product import Product
from storechat.repositories.fakes import (
    FakeCatalogModelRepository,
    FakeCatalogRepository,
    FakeDataService,
)
from storechat.routing.classifier import IntentClassifier

DEFAULT_MODEL = "llama-3.3-70b-versatile"


def make_products() -> list[Product]:
    """Five products across three categories."""
    return [
        Product(
            name="MacBook Pro 14",
            category="Laptops",
            price=1999.99,
            stock=10,
            brand="Apple",
            description="Laptop con chip M3 Pro",
        ),
        Product(
            name="Dell XPS 13",
            category="Laptops",
            price=1299.0,
            stock=5,
            brand="Dell",
            description="Ultrabook de 13 pulgadas",
        ),
        Product(
            name="iPhone 15 Pro",
            category="Smartphones",
            price=999.99,
            stock=50,
            brand="Apple",
            description="Smartphone con chip A17 Pro",
        ),
        Product(
            name="Galaxy S24",
            category="Smartphones",
            price=899.0,
            stock=30,
            brand="Samsung",
            description="Smartphone Android de gama alta",
        ),
        Product(
            name="PlayStation 5",
            category="Consolas",
            price=499.0,
            stock=0,
            brand="Sony",
            description="Consola de videojuegos",
        ),
    ]


def make_customers() -> list[Customer]:
    return [
        Customer(name="Ana", email="ana@example.com", active=True),
        Customer(name="Luis", email="luis@example.com", active=True),
        Customer(name="Marta", email="marta@example.com", active=False),
    ]


def make_catalog() -> FakeCatalogRepository:
    return FakeCatalogRepository(
        products=make_products(), users=make_customers(), sales=7
    )


def make_service(
    gateway: FakeLLMGateway,
    sessions: SessionStore | None = None,
    history_window: int = 12,
) -> ChatService:
    return ChatService(
        gateway,
        IntentClassifier(gateway),
        sessions if sessions is not None else SessionStore(),
        default_model=DEFAULT_MODEL,
        history_window=history_window,
    )


@pytest.fixture
def products() -> list[Product]:
    return make_products()


@pytest.fixture
def catalog() -> FakeCatalogRepository:
    """Five products, three customers (two active), seven sales."""
    return make_catalog()


@pytest.fixture
def chat_service_factory() -> Callable[..., ChatService]:
    return make_service


@dataclass
class AppFakes:
    """Fakes wired into the app for one API test."""

    gateway: FakeLLMGateway
    repos: Repos
    service: ChatService


@pytest.fixture
def setup_test_app(
    tmp_path: Path,
) -> Iterator[Callable[..., AppFakes]]:
    """Common app-state setup for API test fixtures.

    Sets fake repos, settings, logger, chat service and dependency
    overrides. Overrides are cleared at teardown.
    """

    def _setup(
        gateway: FakeLLMGateway | None = None,
        catalog: FakeCatalogRepository | None = None,
        data_service: FakeDataService | None = None,
    ) -> AppFakes:
        gw = gateway if gateway is not None else FakeLLMGateway()
        repos = Repos(
            catalog=catalog if catalog is not None else make_catalog(),
            models=FakeCatalogModelRepository(),
        )
        service = make_service(gw)
        health = (
            data_service if data_service is not None
            else FakeDataService()
        )

        app.state.settings = Settings(
            database_url="sqlite:///:memory:"
        )
        app.state.chat_logger = ChatLogger(
            log_dir=Path(tmp_path / "logs"), level="WARNING"
        )
        app.state.chat_service = service

        app.dependency_overrides[get_repos] = lambda: repos
        app.dependency_overrides[get_data_service] = lambda: health
        return AppFakes(gateway=gw, repos=repos, service=service)

    yield _setup
    app.dependency_overrides.clear()


@pytest_asyncio.fixture
async def engine():
    """Fresh in-memory engine with all tables."""
    engine = create_async_engine("sqlite+aiosqlite:///:memory:")
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest.fixture
async def session(engine):
    """Function-scoped session with connection-level rollback.

    Wraps each test in a connection-level transaction so that
    even ``session.commit()`` calls inside tests are rolled
    back at teardown.
    """
    async with engine.connect() as connection:
        transaction = await connection.begin()
        session = AsyncSession(
            bind=connection, expire_on_commit=False
        )
        yield session
        await session.close()
        await transaction.rollback()
