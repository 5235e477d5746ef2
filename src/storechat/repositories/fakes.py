"""In-memory fake repositories for testing.

List-backed implementations of both repository protocols.
No SQLAlchemy session, no I/O — instant operations for unit tests.
"""

# pyright: reportUnusedFunction=false

from __future__ import annotations

from collections import Counter
from datetime import UTC, datetime
from typing import Any

from storechat.models.catalog_model import CatalogModel
from storechat.models.customer import Customer
from storechat.models.product import Product
from storechat.repositories.protocols import CatalogStats, CategoryCount


def _matches(term: str, *fields: str | None) -> bool:
    t = term.lower()
    return any(f is not None and t in f.lower() for f in fields)


class FakeCatalogRepository:
    """List-backed CatalogRepository; ``calls`` records each read."""

    def __init__(
        self,
        products: list[Product] | None = None,
        users: list[Customer] | None = None,
        sales: int = 0,
    ) -> None:
        self.products: list[Product] = list(products or [])
        self.users: list[Customer] = list(users or [])
        self.sales = sales
        self.calls: list[str] = []
        for i, p in enumerate(self.products, start=1):
            if p.id is None:
                p.id = i

    async def list_products(self) -> list[Product]:
        self.calls.append("list_products")
        return list(self.products)

    async def products_by_category(
        self, category: str
    ) -> list[Product]:
        self.calls.append("products_by_category")
        return [p for p in self.products if p.category == category]

    async def search_products(self, term: str) -> list[Product]:
        self.calls.append("search_products")
        return [
            p
            for p in self.products
            if _matches(term, p.name, p.description, p.brand)
        ]

    async def get_product(self, product_id: int) -> Product | None:
        self.calls.append("get_product")
        for p in self.products:
            if p.id == product_id:
                return p
        return None

    async def count_products(self) -> int:
        self.calls.append("count_products")
        return len(self.products)

    async def count_users(self) -> int:
        self.calls.append("count_users")
        return len(self.users)

    async def count_active_users(self) -> int:
        self.calls.append("count_active_users")
        return sum(1 for u in self.users if u.active)

    async def count_sales(self) -> int:
        self.calls.append("count_sales")
        return self.sales

    async def category_counts(self) -> list[CategoryCount]:
        self.calls.append("category_counts")
        counts = Counter(p.category for p in self.products)
        return [
            CategoryCount(category=c, count=n)
            for c, n in sorted(counts.items())
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
        self.calls.append("list_users")
        return list(self.users)


class FakeCatalogModelRepository:
    """Dict-backed CatalogModelRepository for testing."""

    def __init__(self) -> None:
        self._store: dict[int, CatalogModel] = {}
        self._next_id = 1

    def _newest_first(
        self, records: list[CatalogModel]
    ) -> list[CatalogModel]:
        return sorted(records, key=lambda r: r.id, reverse=True)

    async def list_all(self) -> list[CatalogModel]:
        return self._newest_first(list(self._store.values()))

    async def list_by_kind(self, kind: str) -> list[CatalogModel]:
        return self._newest_first(
            [r for r in self._store.values() if r.kind == kind]
        )

    async def list_by_brand(self, brand: str) -> list[CatalogModel]:
        return self._newest_first(
            [r for r in self._store.values() if r.brand == brand]
        )

    async def search(self, term: str) -> list[CatalogModel]:
        return self._newest_first([
            r
            for r in self._store.values()
            if _matches(term, r.name, r.description, r.brand, r.kind)
        ])

    async def get(self, model_id: int) -> CatalogModel | None:
        return self._store.get(model_id)

    async def create(self, record: CatalogModel) -> CatalogModel:
        record.id = self._next_id
        self._next_id += 1
        now = datetime.now(UTC)
        record.created_at = now
        record.updated_at = now
        self._store[record.id] = record
        return record

    async def update(
        self, model_id: int, changes: dict[str, Any]
    ) -> CatalogModel | None:
        record = self._store.get(model_id)
        if record is None:
            return None
        for key, value in changes.items():
            setattr(record, key, value)
        record.updated_at = datetime.now(UTC)
        return record

    async def delete(self, model_id: int) -> bool:
        return self._store.pop(model_id, None) is not None

    async def count(self) -> int:
        return len(self._store)


class FakeDataService:
    """DataService stand-in with fixed health answers."""

    def __init__(
        self, connected: bool = True, llm_configured: bool = True
    ) -> None:
        self._connected = connected
        self._llm_configured = llm_configured

    async def check_connection(self) -> bool:
        return self._connected

    def check_llm_configured(self) -> bool:
        return self._llm_configured
