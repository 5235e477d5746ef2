"""SQL implementation of CatalogRepository."""

from typing import Any

from sqlalchemy import Select, func, or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from storechat.models.customer import Customer, Sale
from storechat.models.product import Product
from storechat.repositories.protocols import CatalogStats, CategoryCount


class SqlCatalogRepository:
    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def list_products(self) -> list[Product]:
        result = await self._session.execute(
            select(Product).order_by(Product.id)
        )
        return list(result.scalars().all())

    async def products_by_category(
        self, category: str
    ) -> list[Product]:
        result = await self._session.execute(
            select(Product)
            .where(Product.category == category)
            .order_by(Product.id)
        )
        return list(result.scalars().all())

    async def search_products(self, term: str) -> list[Product]:
        pattern = f"%{term}%"
        result = await self._session.execute(
            select(Product)
            .where(
                or_(
                    Product.name.ilike(pattern),
                    Product.description.ilike(pattern),
                    Product.brand.ilike(pattern),
                )
            )
            .order_by(Product.id)
        )
        return list(result.scalars().all())

    async def get_product(self, product_id: int) -> Product | None:
        return await self._session.get(Product, product_id)

    async def count_products(self) -> int:
        return await self._count(select(func.count(Product.id)))

    async def count_users(self) -> int:
        return await self._count(select(func.count(Customer.id)))

    async def count_active_users(self) -> int:
        return await self._count(
            select(func.count(Customer.id)).where(
                Customer.active.is_(True)
            )
        )

    async def count_sales(self) -> int:
        return await self._count(select(func.count(Sale.id)))

    async def category_counts(self) -> list[CategoryCount]:
        result = await self._session.execute(
            select(Product.category, func.count(Product.id))
            .group_by(Product.category)
            .order_by(Product.category)
        )
        return [
            CategoryCount(category=row[0], count=int(row[1]))
            for row in result.all()
        ]

    async def get_stats(self) -> CatalogStats:
        return CatalogStats(
            total_products=await self.count_products(),
            total_users=await self.count_users(),
            active_users=await self.count_active_users(),
            total_sales=await self.count_sales(),
            by_category=await self.category_counts(),
        )

    async def list_users(self) -> list[Customer]:
        result = await self._session.execute(
            select(Customer).order_by(Customer.id)
        )
        return list(result.scalars().all())

    async def _count(self, stmt: Select[Any]) -> int:
        result = await self._session.execute(stmt)
        return int(result.scalar_one())
