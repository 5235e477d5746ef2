"""Protocol-based repository interfaces.

SQL implementations satisfy these protocols structurally (no inheritance).
Test doubles can be plain classes or mocks matching the same signature.
"""

from dataclasses import dataclass, field
from typing import Any, Protocol

from storechat.models.catalog_model import CatalogModel
from storechat.models.customer import Customer
from storechat.models.product import Product


@dataclass(frozen=True)
class CategoryCount:
    category: str
    count: int


@dataclass(frozen=True)
class CatalogStats:
    """Aggregate store figures."""

    total_products: int
    total_users: int
    active_users: int
    total_sales: int
    by_category: list[CategoryCount] = field(
        default_factory=lambda: list[CategoryCount]()
    )

    def to_dict(self) -> dict[str, Any]:
        return {
            "total_products": self.total_products,
            "total_users": self.total_users,
            "active_users": self.active_users,
            "total_sales": self.total_sales,
            "by_category": [
                {"category": c.category, "count": c.count}
                for c in self.by_category
            ],
        }


class CatalogRepository(Protocol):
    """Read-only view of products, customers and sales."""

    async def list_products(self) -> list[Product]: ...
    async def products_by_category(
        self, category: str
    ) -> list[Product]: ...
    async def search_products(self, term: str) -> list[Product]: ...
    async def get_product(self, product_id: int) -> Product | None: ...
    async def count_products(self) -> int: ...
    async def count_users(self) -> int: ...
    async def count_active_users(self) -> int: ...
    async def count_sales(self) -> int: ...
    async def category_counts(self) -> list[CategoryCount]: ...
    async def get_stats(self) -> CatalogStats: ...
    async def list_users(self) -> list[Customer]: ...


class CatalogModelRepository(Protocol):
    async def list_all(self) -> list[CatalogModel]: ...
    async def list_by_kind(self, kind: str) -> list[CatalogModel]: ...
    async def list_by_brand(self, brand: str) -> list[CatalogModel]: ...
    async def search(self, term: str) -> list[CatalogModel]: ...
    async def get(self, model_id: int) -> CatalogModel | None: ...
    async def create(self, record: CatalogModel) -> CatalogModel: ...
    async def update(
        self, model_id: int, changes: dict[str, Any]
    ) -> CatalogModel | None: ...
    async def delete(self, model_id: int) -> bool: ...
    async def count(self) -> int: ...
