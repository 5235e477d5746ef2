"""Database fact resolver — turns a store question into a fact snippet.

The first matching branch wins; there is no fallthrough once a branch
matched, even when its lookup comes back empty:

1. counts        "cuántos" / "cuántas"
2. price         "precio" / "cuesta" / "vale"
3. listings      "qué productos" / "qué modelos"
4. availability  "stock" / "disponible"
5. categories    "categoría" / "categoria"

Only read operations are issued against the catalog.
"""

from __future__ import annotations

import logging

from storechat.constants import (
    FEATURED_BRANDS,
    LAPTOP_CATEGORY,
    MAX_IGNORED_TERM_LENGTH,
    SMARTPHONE_CATEGORY,
)
from storechat.models.product import Product
from storechat.repositories.protocols import CatalogRepository

logger = logging.getLogger(__name__)


def _has_any(text: str, *needles: str) -> bool:
    return any(n in text for n in needles)


def format_number(value: float | int) -> str:
    """Render 1000.0 as "1000" and 999.99 as "999.99"."""
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def search_terms(lower: str) -> list[str]:
    """Space-separated words longer than MAX_IGNORED_TERM_LENGTH.

    Punctuation is kept, so "pro?" is searched as-is.
    """
    return [
        t
        for t in lower.split(" ")
        if len(t) > MAX_IGNORED_TERM_LENGTH
    ]


class DatabaseFactResolver:
    def __init__(self, catalog: CatalogRepository) -> None:
        self._catalog = catalog

    async def resolve(self, message: str) -> str | None:
        """Return a fact snippet for ``message`` or None when nothing fits."""
        lower = message.lower()

        if _has_any(lower, "cuántos", "cuántas"):
            return await self._count_fact(lower)
        if _has_any(lower, "precio", "cuesta", "vale"):
            product = await self._first_match(lower)
            if product is None:
                return None
            return (
                f"El {product.name} tiene un precio de "
                f"${format_number(product.price)} y hay "
                f"{product.stock} unidades en stock."
            )
        if _has_any(lower, "qué productos", "qué modelos"):
            return await self._listing_fact(lower)
        if _has_any(lower, "stock", "disponible"):
            product = await self._first_match(lower)
            if product is None:
                return None
            return (
                f"El {product.name} tiene {product.stock} "
                "unidades disponibles en stock."
            )
        if _has_any(lower, "categoría", "categoria"):
            counts = await self._catalog.category_counts()
            if not counts:
                return None
            lines = "\n".join(
                f"- {c.category}: {c.count} productos" for c in counts
            )
            return f"Productos por categoría:\n{lines}"
        return None

    async def _count_fact(self, lower: str) -> str:
        if _has_any(lower, "laptop", "portátil"):
            laptops = await self._catalog.products_by_category(
                LAPTOP_CATEGORY
            )
            return (
                f"Hay {len(laptops)} laptops disponibles "
                "en nuestra tienda."
            )
        if _has_any(lower, "smartphone", "teléfono", "telefono"):
            phones = await self._catalog.products_by_category(
                SMARTPHONE_CATEGORY
            )
            return (
                f"Hay {len(phones)} smartphones disponibles "
                "en nuestra tienda."
            )
        if _has_any(lower, "usuario", "cliente"):
            total = await self._catalog.count_users()
            active = await self._catalog.count_active_users()
            return (
                f"Tenemos {total} usuarios registrados, de los "
                f"cuales {active} están activos."
            )
        if "producto" in lower:
            total = await self._catalog.count_products()
            return (
                f"Tenemos {total} productos tecnológicos "
                "en nuestro catálogo."
            )
        if "venta" in lower:
            total = await self._catalog.count_sales()
            return f"Se han realizado {total} ventas en total."

        stats = await self._catalog.get_stats()
        return (
            "Estadísticas de la tienda:\n"
            f"- Total de productos: {stats.total_products}\n"
            f"- Total de usuarios: {stats.total_users}\n"
            f"- Usuarios activos: {stats.active_users}\n"
            f"- Total de ventas: {stats.total_sales}"
        )

    async def _listing_fact(self, lower: str) -> str | None:
        for brand in FEATURED_BRANDS:
            if brand.lower() in lower:
                products = await self._catalog.search_products(brand)
                if not products:
                    return None
                lines = "\n".join(
                    f"- {p.name} (${format_number(p.price)}, "
                    f"Stock: {p.stock})"
                    for p in products
                )
                return f"Productos de {brand} disponibles:\n{lines}"

        products = await self._catalog.list_products()
        categories = list(dict.fromkeys(p.category for p in products))
        if not categories:
            return None
        lines = "\n".join(f"- {c}" for c in categories)
        return (
            "Tenemos productos en las siguientes categorías:\n"
            f"{lines}"
        )

    async def _first_match(self, lower: str) -> Product | None:
        """First product hit for the message's search terms, in order."""
        for term in search_terms(lower):
            products = await self._catalog.search_products(term)
            if products:
                return products[0]
        logger.debug("event=fact_lookup_miss")
        return None
