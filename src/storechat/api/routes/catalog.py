"""Read-only catalog routes."""

from __future__ import annotations

from fastapi import APIRouter, Depends, Query

from storechat.api.dependencies import Repos, get_repos
from storechat.api.schemas import APIResponse

router = APIRouter(prefix="/api", tags=["catalog"])


@router.get("/products")
async def list_products(
    repos: Repos = Depends(get_repos),
) -> APIResponse:
    products = await repos.catalog.list_products()
    return APIResponse(
        success=True,
        data=[p.to_dict() for p in products],
        metadata={"total": len(products)},
    )


@router.get("/products/search")
async def search_products(
    q: str = Query(min_length=1),
    repos: Repos = Depends(get_repos),
) -> APIResponse:
    """Match ``q`` against name, description and brand."""
    products = await repos.catalog.search_products(q)
    return APIResponse(
        success=True,
        data=[p.to_dict() for p in products],
        metadata={"total": len(products)},
    )


@router.get("/products/category/{category}")
async def products_by_category(
    category: str,
    repos: Repos = Depends(get_repos),
) -> APIResponse:
    products = await repos.catalog.products_by_category(category)
    return APIResponse(
        success=True,
        data=[p.to_dict() for p in products],
        metadata={"total": len(products)},
    )


@router.get("/products/{product_id}")
async def get_product(
    product_id: int,
    repos: Repos = Depends(get_repos),
) -> APIResponse:
    product = await repos.catalog.get_product(product_id)
    if product is None:
        return APIResponse(success=False, error="Product not found")
    return APIResponse(success=True, data=product.to_dict())


@router.get("/stats")
async def stats(
    repos: Repos = Depends(get_repos),
) -> APIResponse:
    result = await repos.catalog.get_stats()
    return APIResponse(success=True, data=result.to_dict())


@router.get("/users")
async def list_users(
    repos: Repos = Depends(get_repos),
) -> APIResponse:
    users = await repos.catalog.list_users()
    return APIResponse(
        success=True,
        data=[u.to_dict() for u in users],
        metadata={"total": len(users)},
    )
