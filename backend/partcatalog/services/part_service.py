# backend/partcatalog/services/part_service.py
from __future__ import annotations
import logging
from typing import Dict, List, Optional, Sequence, Tuple

from fastapi import HTTPException
from sqlalchemy import desc, func, or_
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Query, Session

from partcatalog.core.errors import NotFoundError, ReferentialError, StoreError, ValidationError
from partcatalog.domain.constants import LOW_STOCK_MAX, MAX_PAGE_SIZE, STOCK_IN, STOCK_LOW, STOCK_OUT
from partcatalog.models import CartItem, OrderItem, Part, PartApplication, PartOrganizationDetail
from partcatalog.models.part import utcnow
from partcatalog.schemas.part import PartCreate, PartUpdate
from partcatalog.services import override_service

logger = logging.getLogger(__name__)

REQUIRED_ON_CREATE = ("ManufacturerPartNumber", "Name", "Manufacturer", "PriceType")
REQUIRED_ON_UPDATE = ("ManufacturerPartNumber", "Name", "PriceType")

# Düzenlemede yazılabilen alanlar (Manufacturer ve PartType oluşturulduktan sonra kilitli)
EDITABLE_FIELDS = (
    "ManufacturerPartNumber", "ClientPartNumber", "Name", "Description", "Machine", "Assembly",
    "Voltage", "ShaftSize", "GearboxRatio", "PowerRatingHP", "PowerRatingKW", "Specifications",
    "PriceType", "UnitPrice", "LeadTimeDays", "IsRepairable", "RepairPrice",
)
CREATE_FIELDS = EDITABLE_FIELDS + ("Manufacturer", "PartType")


def _require(payload, fields: Sequence[str]) -> None:
    missing = [f for f in fields if not getattr(payload, f, None)]
    if missing:
        raise ValidationError(f"Missing required fields: {', '.join(missing)}")


def get_part(db: Session, part_id: int) -> Part:
    part = db.get(Part, part_id)
    if not part:
        raise NotFoundError("Part not found")
    return part


def create_part(db: Session, payload: PartCreate) -> Part:
    _require(payload, REQUIRED_ON_CREATE)
    try:
        part = Part(**{f: getattr(payload, f) for f in CREATE_FIELDS})
        part.StockQuantity = payload.StockQuantity or 0
        db.add(part)
        db.flush()

        pending = []
        if payload.OrganizationAccess:
            pending = override_service.stage_replace(db, part, payload.OrganizationAccess)
        db.commit()
        db.refresh(part)
    except HTTPException:
        db.rollback()
        raise
    except SQLAlchemyError as e:
        db.rollback()
        logger.exception("create_part error (MPN=%s)", payload.ManufacturerPartNumber)
        raise StoreError("Failed to create part", e)

    override_service.link_pending(db, part.PartID, pending)
    return part


def update_part(db: Session, part_id: int, payload: PartUpdate) -> Part:
    """
    OrganizationAccess None ise override seti olduğu gibi kalır;
    liste (boş dahil) gelirse set tamamen yenilenir.
    """
    part = get_part(db, part_id)
    _require(payload, REQUIRED_ON_UPDATE)
    try:
        for f in EDITABLE_FIELDS:
            setattr(part, f, getattr(payload, f))
        if payload.StockQuantity is not None:
            part.StockQuantity = payload.StockQuantity
        part.UpdatedAt = utcnow()
        db.flush()

        pending = []
        if payload.OrganizationAccess is not None:
            pending = override_service.stage_replace(db, part, payload.OrganizationAccess)
        db.commit()
        db.refresh(part)
    except HTTPException:
        db.rollback()
        raise
    except SQLAlchemyError as e:
        db.rollback()
        logger.exception("update_part error (PartID=%s)", part_id)
        raise StoreError("Failed to update part", e)

    override_service.link_pending(db, part.PartID, pending)
    return part


def delete_part(db: Session, part_id: int) -> None:
    """Sipariş ya da sepet satırında geçen parça silinmez; silinirse override+scope'larıyla gider."""
    part = get_part(db, part_id)
    try:
        if db.query(OrderItem.OrderItemID).filter(OrderItem.PartID == part_id).first():
            raise ReferentialError("Cannot delete part that has been used in orders")
        if db.query(CartItem.CartItemID).filter(CartItem.PartID == part_id).first():
            raise ReferentialError("Cannot delete part that is currently in user carts")

        override_service.delete_for_part(db, part_id)
        db.delete(part)
        db.commit()
    except HTTPException:
        db.rollback()
        raise
    except SQLAlchemyError as e:
        db.rollback()
        logger.exception("delete_part error (PartID=%s)", part_id)
        raise StoreError("Failed to delete part", e)


# ---- Listeleme ----
SORT_FIELDS = {
    "UpdatedAt": Part.UpdatedAt,
    "Name": Part.Name,
    "ManufacturerPartNumber": Part.ManufacturerPartNumber,
    "Manufacturer": Part.Manufacturer,
    "PartID": Part.PartID,
}


def _apply_sort(q: Query, sort: str) -> Query:
    is_desc = sort.startswith("-")
    key = sort[1:] if is_desc else sort
    col = SORT_FIELDS.get(key, Part.UpdatedAt)
    if key not in SORT_FIELDS:
        is_desc = True
    # Eşit değerlerde sıra sabit kalsın
    tie = Part.PartID.desc() if is_desc else Part.PartID.asc()
    return q.order_by(desc(col) if is_desc else col.asc(), tie)


def _search_filter(q: Query, search: Optional[str], columns) -> Query:
    term = (search or "").strip().lower()
    if not term:
        return q
    return q.filter(or_(*[func.lower(c).contains(term, autoescape=True) for c in columns]))


def _stock_filter(q: Query, stock_status: Optional[str]) -> Query:
    if stock_status == STOCK_OUT:
        return q.filter(Part.StockQuantity == 0)
    if stock_status == STOCK_LOW:
        return q.filter(Part.StockQuantity >= 1, Part.StockQuantity <= LOW_STOCK_MAX)
    if stock_status == STOCK_IN:
        return q.filter(Part.StockQuantity > LOW_STOCK_MAX)
    return q


def _paginate(q: Query, page: int, limit: int) -> Tuple[List[Part], int]:
    page = max(1, page)
    limit = min(max(1, limit), MAX_PAGE_SIZE)
    total = q.order_by(None).count()
    rows = q.offset((page - 1) * limit).limit(limit).all()
    return rows, total


def list_parts(
    db: Session,
    *,
    search: Optional[str] = None,
    organization_id: Optional[int] = None,
    price_type: Optional[str] = None,
    manufacturer: Optional[str] = None,
    part_type: Optional[str] = None,
    stock_status: Optional[str] = None,
    page: int = 1,
    limit: int = 50,
    sort: str = "-UpdatedAt",
) -> Tuple[List[Part], int]:
    q = db.query(Part)
    q = _search_filter(
        q, search, [Part.Name, Part.ManufacturerPartNumber, Part.ClientPartNumber, Part.Description]
    )
    if organization_id:
        has_override = (
            db.query(PartOrganizationDetail.PartID)
            .filter(PartOrganizationDetail.OrganizationID == organization_id)
        )
        q = q.filter(Part.PartID.in_(has_override))
    if price_type:
        q = q.filter(Part.PriceType == price_type)
    if manufacturer:
        q = q.filter(Part.Manufacturer == manufacturer)
    if part_type:
        q = q.filter(Part.PartType == part_type)
    q = _stock_filter(q, stock_status)
    q = _apply_sort(q, sort)
    return _paginate(q, page, limit)


def list_manufacturers(db: Session) -> List[str]:
    rows = db.query(Part.Manufacturer).distinct().order_by(Part.Manufacturer).all()
    return [m for (m,) in rows if m]


def list_part_types(db: Session) -> List[str]:
    rows = (
        db.query(Part.PartType)
        .filter(Part.PartType.isnot(None))
        .distinct()
        .order_by(Part.PartType)
        .all()
    )
    return [t for (t,) in rows if t]


def list_filter_options(db: Session) -> Dict[str, List[str]]:
    return {"Manufacturers": list_manufacturers(db), "PartTypes": list_part_types(db)}


# ---- Katalog (kullanıcının organizasyonu) ----
def _catalog_query(db: Session, organization_id: int, application_id: Optional[int] = None) -> Query:
    visible = (
        db.query(PartOrganizationDetail.PartID)
        .filter(PartOrganizationDetail.OrganizationID == organization_id)
    )
    q = db.query(Part).filter(Part.PartID.in_(visible))
    if application_id:
        scoped = (
            db.query(PartApplication.PartID)
            .filter(PartApplication.OrganizationID == organization_id)
            .filter(PartApplication.ApplicationID == application_id)
        )
        q = q.filter(Part.PartID.in_(scoped))
    return q


def list_catalog_parts(
    db: Session,
    organization_id: int,
    *,
    search: Optional[str] = None,
    application_id: Optional[int] = None,
    price_type: Optional[str] = None,
    page: int = 1,
    limit: int = 50,
    sort: str = "-UpdatedAt",
) -> Tuple[List[Part], int]:
    q = _catalog_query(db, organization_id, application_id)
    q = _search_filter(q, search, [Part.Name, Part.ManufacturerPartNumber, Part.ClientPartNumber])
    if price_type:
        q = q.filter(Part.PriceType == price_type)
    q = _apply_sort(q, sort)
    return _paginate(q, page, limit)


def get_catalog_part(db: Session, organization_id: int, part_id: int) -> Part:
    part = _catalog_query(db, organization_id).filter(Part.PartID == part_id).first()
    if not part:
        raise NotFoundError("Part not found or access denied")
    return part
