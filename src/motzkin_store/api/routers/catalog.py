"""
motzkin_store.api.routers.catalog

School-equipment catalog endpoints.

Responsibilities:
- Serve the four lookups of the selection chain under `/api`.
- Require every ancestor id on scoped lookups (school, then grade, then class).
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, Query
from pydantic import BaseModel
from starlette.status import HTTP_404_NOT_FOUND

from motzkin_store.api.deps import catalog_from_app
from motzkin_store.api.mock_db import Catalog, NotFound
from motzkin_store.observability.logging import get_logger

router = APIRouter(prefix="/api", tags=["catalog"])

log = get_logger(__name__)


class CatalogItem(BaseModel):
    id: int | str
    label: str


class EquipmentItem(BaseModel):
    name: str
    quantity: int


@router.get("/schools", response_model=list[CatalogItem])
async def list_schools(catalog: Catalog = Depends(catalog_from_app)) -> list[CatalogItem]:
    return [CatalogItem(**s) for s in catalog.list_schools()]


@router.get("/grades", response_model=list[CatalogItem])
async def list_grades(
    school_id: int = Query(...),
    catalog: Catalog = Depends(catalog_from_app),
) -> list[CatalogItem]:
    try:
        rows = catalog.list_grades(school_id=school_id)
    except NotFound as e:
        raise _not_found(e) from e
    return [CatalogItem(**g) for g in rows]


@router.get("/classes", response_model=list[CatalogItem])
async def list_classes(
    school_id: int = Query(...),
    grade_id: int = Query(...),
    catalog: Catalog = Depends(catalog_from_app),
) -> list[CatalogItem]:
    try:
        rows = catalog.list_classes(school_id=school_id, grade_id=grade_id)
    except NotFound as e:
        raise _not_found(e) from e
    return [CatalogItem(**c) for c in rows]


@router.get("/equipment", response_model=list[EquipmentItem])
async def list_equipment(
    school_id: int = Query(...),
    grade_id: int = Query(...),
    class_id: str = Query(...),
    catalog: Catalog = Depends(catalog_from_app),
) -> list[EquipmentItem]:
    try:
        rows = catalog.list_equipment(school_id=school_id, grade_id=grade_id, class_id=class_id)
    except NotFound as e:
        raise _not_found(e) from e
    return [EquipmentItem(**row) for row in rows]


def _not_found(e: NotFound) -> HTTPException:
    log.info("catalog_lookup_miss", kind=e.kind)
    return HTTPException(status_code=HTTP_404_NOT_FOUND, detail=str(e))


# --- Module Notes -----------------------------------------------------------
# Missing query parameters are rejected by FastAPI with 422, so a client that
# drops an ancestor id fails loudly here instead of getting a broader list.
