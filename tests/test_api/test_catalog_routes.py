"""Tests for read-only catalog routes."""

from __future__ import annotations

from collections.abc import Callable

import pytest
from httpx import ASGITransport, AsyncClient

from storechat.main import app


@pytest.fixture
async def client(setup_test_app: Callable):
    setup_test_app()
    transport = ASGITransport(app=app)
    async with AsyncClient(
        transport=transport, base_url="http://test"
    ) as c:
        yield c


@pytest.mark.asyncio
async def test_list_products(client: AsyncClient) -> None:
    body = (await client.get("/api/products")).json()
    assert body["success"] is True
    assert body["metadata"]["total"] == 5
    assert body["data"][0]["name"] == "MacBook Pro 14"


@pytest.mark.asyncio
async def test_products_by_category(client: AsyncClient) -> None:
    body = (await client.get("/api/products/category/Smartphones")).json()
    assert [p["name"] for p in body["data"]] == [
        "iPhone 15 Pro",
        "Galaxy S24",
    ]


@pytest.mark.asyncio
async def test_search_products(client: AsyncClient) -> None:
    body = (await client.get("/api/products/search?q=samsung")).json()
    assert [p["name"] for p in body["data"]] == ["Galaxy S24"]


@pytest.mark.asyncio
async def test_search_requires_query(client: AsyncClient) -> None:
    resp = await client.get("/api/products/search")
    assert resp.status_code == 422


@pytest.mark.asyncio
async def test_stats(client: AsyncClient) -> None:
    data = (await client.get("/api/stats")).json()["data"]
    assert data["total_products"] == 5
    assert data["total_users"] == 3
    assert data["active_users"] == 2
    assert data["total_sales"] == 7
    assert {"category": "Laptops", "count": 2} in data["by_category"]


@pytest.mark.asyncio
async def test_users(client: AsyncClient) -> None:
    body = (await client.get("/api/users")).json()
    assert body["metadata"]["total"] == 3
    assert body["data"][0]["email"] == "ana@example.com"


@pytest.mark.asyncio
async def test_get_product(client: AsyncClient) -> None:
    body = (await client.get("/api/products/3")).json()
    assert body["success"] is True
    assert body["data"]["name"] == "iPhone 15 Pro"

    missing = (await client.get("/api/products/99")).json()
    assert missing["success"] is False
    assert missing["error"] == "Product not found"
