"""Tests for the database fact resolver."""

from __future__ import annotations

import pytest

from storechat.chat.facts import (
    DatabaseFactResolver,
    format_number,
    search_terms,
)
from storechat.repositories.fakes import FakeCatalogRepository


class _BrokenCatalog(FakeCatalogRepository):
    async def search_products(self, term: str):  # type: ignore[override]
        raise RuntimeError("db down")


def test_format_number() -> None:
    assert format_number(1000.0) == "1000"
    assert format_number(999.99) == "999.99"
    assert format_number(5) == "5"


def test_search_terms_drop_short_words() -> None:
    assert search_terms("el precio del iphone 15 pro?") == [
        "precio",
        "iphone",
        "pro?",
    ]


class TestCounts:
    @pytest.mark.asyncio
    async def test_laptops(self, catalog: FakeCatalogRepository) -> None:
        fact = await DatabaseFactResolver(catalog).resolve(
            "¿Cuántos laptops hay en stock?"
        )
        assert fact == "Hay 2 laptops disponibles en nuestra tienda."

    @pytest.mark.asyncio
    async def test_smartphones(
        self, catalog: FakeCatalogRepository
    ) -> None:
        fact = await DatabaseFactResolver(catalog).resolve(
            "¿Cuántos teléfonos tienen?"
        )
        assert fact == "Hay 2 smartphones disponibles en nuestra tienda."

    @pytest.mark.asyncio
    async def test_users(self, catalog: FakeCatalogRepository) -> None:
        fact = await DatabaseFactResolver(catalog).resolve(
            "¿Cuántos usuarios hay?"
        )
        assert fact == (
            "Tenemos 3 usuarios registrados, de los cuales 2 están activos."
        )

    @pytest.mark.asyncio
    async def test_products(
        self, catalog: FakeCatalogRepository
    ) -> None:
        fact = await DatabaseFactResolver(catalog).resolve(
            "¿Cuántos productos tienen?"
        )
        assert fact == (
            "Tenemos 5 productos tecnológicos en nuestro catálogo."
        )

    @pytest.mark.asyncio
    async def test_sales(self, catalog: FakeCatalogRepository) -> None:
        fact = await DatabaseFactResolver(catalog).resolve(
            "¿Cuántas ventas se hicieron?"
        )
        assert fact == "Se han realizado 7 ventas en total."

    @pytest.mark.asyncio
    async def test_falls_back_to_stats(
        self, catalog: FakeCatalogRepository
    ) -> None:
        fact = await DatabaseFactResolver(catalog).resolve(
            "¿Cuántas cosas hay?"
        )
        assert fact is not None
        assert fact.startswith("Estadísticas de la tienda:")
        assert "- Total de productos: 5" in fact
        assert "- Usuarios activos: 2" in fact
        assert "- Total de ventas: 7" in fact


class TestPrice:
    @pytest.mark.asyncio
    async def test_first_matching_product(
        self, catalog: FakeCatalogRepository
    ) -> None:
        fact = await DatabaseFactResolver(catalog).resolve(
            "¿Cuál es el precio del iPhone 15 Pro?"
        )
        assert fact == (
            "El iPhone 15 Pro tiene un precio de $999.99 y hay "
            "50 unidades en stock."
        )

    @pytest.mark.asyncio
    async def test_integral_price_printed_without_decimals(
        self, catalog: FakeCatalogRepository
    ) -> None:
        fact = await DatabaseFactResolver(catalog).resolve(
            "¿Cuánto cuesta el galaxy s24?"
        )
        assert fact is not None
        assert "$899 " in fact

    @pytest.mark.asyncio
    async def test_no_match_returns_none(
        self, catalog: FakeCatalogRepository
    ) -> None:
        fact = await DatabaseFactResolver(catalog).resolve(
            "precio del zumbador"
        )
        assert fact is None


class TestListings:
    @pytest.mark.asyncio
    async def test_brand_listing(
        self, catalog: FakeCatalogRepository
    ) -> None:
        fact = await DatabaseFactResolver(catalog).resolve(
            "¿Qué productos de Apple tienen?"
        )
        assert fact == (
            "Productos de Apple disponibles:\n"
            "- MacBook Pro 14 ($1999.99, Stock: 10)\n"
            "- iPhone 15 Pro ($999.99, Stock: 50)"
        )

    @pytest.mark.asyncio
    async def test_category_listing_without_brand(
        self, catalog: FakeCatalogRepository
    ) -> None:
        fact = await DatabaseFactResolver(catalog).resolve(
            "¿Qué productos tienen?"
        )
        assert fact == (
            "Tenemos productos en las siguientes categorías:\n"
            "- Laptops\n- Smartphones\n- Consolas"
        )

    @pytest.mark.asyncio
    async def test_empty_catalog_returns_none(self) -> None:
        fact = await DatabaseFactResolver(
            FakeCatalogRepository()
        ).resolve("¿Qué modelos de Samsung hay?")
        assert fact is None


class TestAvailability:
    @pytest.mark.asyncio
    async def test_stock(self, catalog: FakeCatalogRepository) -> None:
        fact = await DatabaseFactResolver(catalog).resolve(
            "¿Hay stock del PlayStation 5?"
        )
        assert fact == (
            "El PlayStation 5 tiene 0 unidades disponibles en stock."
        )


class TestCategories:
    @pytest.mark.asyncio
    async def test_category_counts(
        self, catalog: FakeCatalogRepository
    ) -> None:
        fact = await DatabaseFactResolver(catalog).resolve(
            "Muéstrame cada categoría"
        )
        assert fact == (
            "Productos por categoría:\n"
            "- Consolas: 1 productos\n"
            "- Laptops: 2 productos\n"
            "- Smartphones: 2 productos"
        )


@pytest.mark.asyncio
async def test_first_branch_wins_without_fallthrough(
    catalog: FakeCatalogRepository,
) -> None:
    """A price question with no hit does not try the stock branch."""
    fact = await DatabaseFactResolver(catalog).resolve(
        "precio y stock del zumbador"
    )
    assert fact is None


@pytest.mark.asyncio
async def test_unrelated_message_returns_none(
    catalog: FakeCatalogRepository,
) -> None:
    assert await DatabaseFactResolver(catalog).resolve("hola") is None
    assert catalog.calls == []


@pytest.mark.asyncio
async def test_only_reads_are_issued(
    catalog: FakeCatalogRepository,
) -> None:
    await DatabaseFactResolver(catalog).resolve("¿Cuántos usuarios hay?")
    assert catalog.calls == ["count_users", "count_active_users"]


@pytest.mark.asyncio
async def test_store_errors_propagate() -> None:
    with pytest.raises(RuntimeError, match="db down"):
        await DatabaseFactResolver(_BrokenCatalog()).resolve(
            "precio del iphone"
        )
