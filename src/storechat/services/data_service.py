"""DB initialization and component health checks."""

from sqlalchemy import text
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
)

from storechat.config import Settings
from storechat.models import Base


class DataService:
    def __init__(
        self,
        session_factory: async_sessionmaker[AsyncSession],
        settings: Settings,
    ) -> None:
        self._session_factory = session_factory
        self._settings = settings

    async def check_connection(self) -> bool:
        try:
            async with self._session_factory() as session:
                await session.execute(text("SELECT 1"))
            return True
        except Exception:
            return False

    def check_llm_configured(self) -> bool:
        return self._settings.llm_configured


async def create_tables(engine: AsyncEngine) -> None:
    """Create any missing catalog tables."""
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
