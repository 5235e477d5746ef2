"""CRUD routes for free-form catalog model entries."""

from __future__ import annotations

import json
import logging
from collections import Counter
from typing import Any

from fastapi import APIRouter, Depends, Query

from storechat.api.dependencies import Repos, get_repos
from storechat.api.schemas import (
    APIResponse,
    CatalogModelCreate,
    CatalogModelUpdate,
)
from storechat.models.catalog_model import CatalogModel

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/catalog-models", tags=["catalog-models"])

_REQUIRED_FIELDS = ("name", "kind")
_NOT_FOUND = "Model not found"


def _encode_extra(extra: Any) -> str | None:
    return None if extra is None else json.dumps(extra)


@router.get("")
async def list_catalog_models(
    kind: str | None = Query(default=None),
    brand: str | None = Query(default=None),
    search: str | None = Query(default=None),
    repos: Repos = Depends(get_repos),
) -> APIResponse:
    """List entries; ``search`` beats ``kind`` beats ``brand``."""
    if search:
        records = await repos.models.search(search)
    elif kind:
        records = await repos.models.list_by_kind(kind)
    elif brand:
        records = await repos.models.list_by_brand(brand)
    else:
        records = await repos.models.list_all()
    return APIResponse(
        success=True,
        data=[r.to_dict() for r in records],
        metadata={"total": len(records)},
    )


@router.get("/stats")
async def catalog_model_stats(
    repos: Repos = Depends(get_repos),
) -> APIResponse:
    total = await repos.models.count()
    records = await repos.models.list_all()
    by_kind = Counter(r.kind for r in records)
    by_brand = Counter(r.brand for r in records if r.brand)
    return APIResponse(
        success=True,
        data={
            "total": total,
            "by_kind": dict(sorted(by_kind.items())),
            "by_brand": dict(sorted(by_brand.items())),
        },
    )


@router.post("")
async def create_catalog_model(
    body: CatalogModelCreate,
    repos: Repos = Depends(get_repos),
) -> APIResponse:
    record = await repos.models.create(
        CatalogModel(
            name=body.name,
            kind=body.kind,
            brand=body.brand,
            specs=body.specs,
            description=body.description,
            extra_json=_encode_extra(body.extra),
        )
    )
    logger.info(
        "event=catalog_model_created id=%d kind=%s", record.id, record.kind
    )
    return APIResponse(success=True, data=record.to_dict())


@router.get("/{model_id}")
async def get_catalog_model(
    model_id: int,
    repos: Repos = Depends(get_repos),
) -> APIResponse:
    record = await repos.models.get(model_id)
    if record is None:
        return APIResponse(success=False, error=_NOT_FOUND)
    return APIResponse(success=True, data=record.to_dict())


@router.put("/{model_id}")
async def update_catalog_model(
    model_id: int,
    body: CatalogModelUpdate,
    repos: Repos = Depends(get_repos),
) -> APIResponse:
    """Apply only the fields present in the body.

    A null name or kind keeps the stored value; both columns are NOT NULL.
    """
    changes = body.model_dump(exclude_unset=True)
    for key in _REQUIRED_FIELDS:
        if changes.get(key, "") is None:
            del changes[key]
    if "extra" in changes:
        changes["extra_json"] = _encode_extra(changes.pop("extra"))
    record = await repos.models.update(model_id, changes)
    if record is None:
        return APIResponse(success=False, error=_NOT_FOUND)
    return APIResponse(success=True, data=record.to_dict())


@router.delete("/{model_id}")
async def delete_catalog_model(
    model_id: int,
    repos: Repos = Depends(get_repos),
) -> APIResponse:
    removed = await repos.models.delete(model_id)
    if not removed:
        return APIResponse(success=False, error=_NOT_FOUND)
    logger.info("event=catalog_model_deleted id=%d", model_id)
    return APIResponse(success=True, data={"id": model_id})
