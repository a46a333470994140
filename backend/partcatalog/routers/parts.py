# backend/partcatalog/routers/parts.py
"""
Kullanıcının kendi organizasyonu için katalog görünümü.

Sadece organizasyonun override satırı olan parçalar listelenir; her parça
çözülmüş ticari koşullarla (Terms) döner. CanViewPricing kapalıysa
fiyat alanları cevaptan çıkarılır.
"""
from typing import List, Optional

from fastapi import APIRouter, Depends, Path, Query
from sqlalchemy.orm import Session

from partcatalog.core.api import ok, page_meta
from partcatalog.core.db import get_db
from partcatalog.core.security import require_organization
from partcatalog.domain.constants import MAX_PAGE_SIZE
from partcatalog.models import AppUser, Part
from partcatalog.schemas.part import ApplicationRef, CatalogPart, EffectiveTerms, PartRead
from partcatalog.services import part_service, resolution_service, scope_service

router = APIRouter(prefix="/parts", tags=["parts"])

PRICE_FIELDS = ("UnitPrice", "RepairPrice")


def _catalog_item(part: Part, terms: EffectiveTerms, can_view_pricing: bool) -> dict:
    item = CatalogPart(**dict(PartRead.model_validate(part)), Terms=terms).model_dump(mode="json")
    if not can_view_pricing:
        for key in PRICE_FIELDS:
            item.pop(key, None)
            item["Terms"].pop(key, None)
    return item


@router.get("")
def list_catalog(
    search: Optional[str] = Query(None),
    application: Optional[str] = Query(None, description="Uygulama id; '__none__' = filtre yok"),
    price_type: Optional[str] = Query(None, pattern="^(fixed|non_fixed)$"),
    page: int = Query(1, ge=1),
    limit: int = Query(50, ge=1, le=MAX_PAGE_SIZE),
    sort: str = Query("-UpdatedAt"),
    current: AppUser = Depends(require_organization),
    db: Session = Depends(get_db),
):
    org_id = current.OrganizationID
    app_ids = scope_service.clean_application_ids([application])
    rows, total = part_service.list_catalog_parts(
        db,
        org_id,
        search=search,
        application_id=app_ids[0] if app_ids else None,
        price_type=price_type,
        page=page,
        limit=limit,
        sort=sort,
    )
    terms = resolution_service.resolve_many(db, rows, org_id)
    can_view = bool(current.CanViewPricing)
    items: List[dict] = [_catalog_item(p, terms[p.PartID], can_view) for p in rows]
    apps = [
        ApplicationRef(ApplicationID=a.ApplicationID, Name=a.Name).model_dump()
        for a in scope_service.list_organization_applications(db, org_id)
    ]
    return ok(
        {"Parts": items, "Applications": apps, "CanViewPricing": can_view},
        meta=page_meta(items, page=page, limit=limit, total=total),
    )


@router.get("/{part_id}")
def get_catalog_part(
    part_id: int = Path(..., ge=1),
    current: AppUser = Depends(require_organization),
    db: Session = Depends(get_db),
):
    part = part_service.get_catalog_part(db, current.OrganizationID, part_id)
    terms = resolution_service.resolve(db, part, current.OrganizationID)
    return ok(_catalog_item(part, terms, bool(current.CanViewPricing)))
