"""SQL implementation of CatalogModelRepository."""

from typing import Any

from sqlalchemy import func, or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from storechat.models.catalog_model import CatalogModel

_UPDATABLE = frozenset({
    "name",
    "kind",
    "brand",
    "specs",
    "description",
    "extra_json",
})

_NEWEST_FIRST = (CatalogModel.created_at.desc(), CatalogModel.id.desc())


class SqlCatalogModelRepository:
    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def list_all(self) -> list[CatalogModel]:
        result = await self._session.execute(
            select(CatalogModel).order_by(*_NEWEST_FIRST)
        )
        return list(result.scalars().all())

    async def list_by_kind(self, kind: str) -> list[CatalogModel]:
        result = await self._session.execute(
            select(CatalogModel)
            .where(CatalogModel.kind == kind)
            .order_by(*_NEWEST_FIRST)
        )
        return list(result.scalars().all())

    async def list_by_brand(self, brand: str) -> list[CatalogModel]:
        result = await self._session.execute(
            select(CatalogModel)
            .where(CatalogModel.brand == brand)
            .order_by(*_NEWEST_FIRST)
        )
        return list(result.scalars().all())

    async def search(self, term: str) -> list[CatalogModel]:
        pattern = f"%{term}%"
        result = await self._session.execute(
            select(CatalogModel)
            .where(
                or_(
                    CatalogModel.name.ilike(pattern),
                    CatalogModel.description.ilike(pattern),
                    CatalogModel.brand.ilike(pattern),
                    CatalogModel.kind.ilike(pattern),
                )
            )
            .order_by(*_NEWEST_FIRST)
        )
        return list(result.scalars().all())

    async def get(self, model_id: int) -> CatalogModel | None:
        return await self._session.get(CatalogModel, model_id)

    async def create(self, record: CatalogModel) -> CatalogModel:
        self._session.add(record)
        await self._session.flush()
        await self._session.refresh(record)
        return record

    async def update(
        self, model_id: int, changes: dict[str, Any]
    ) -> CatalogModel | None:
        record = await self.get(model_id)
        if record is None:
            return None
        for key, value in changes.items():
            if key in _UPDATABLE:
                setattr(record, key, value)
        await self._session.flush()
        await self._session.refresh(record)
        return record

    async def delete(self, model_id: int) -> bool:
        record = await self.get(model_id)
        if record is None:
            return False
        await self._session.delete(record)
        await self._session.flush()
        return True

    async def count(self) -> int:
        result = await self._session.execute(
            select(func.count(CatalogModel.id))
        )
        return int(result.scalar_one())
