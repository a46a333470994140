# backend/partcatalog/routers/admin_parts.py
from typing import List, Optional

from fastapi import APIRouter, Depends, File, Form, Path, Query, UploadFile, status
from sqlalchemy.orm import Session

from partcatalog.core.api import csv_download, ok, page_meta
from partcatalog.core.db import get_db
from partcatalog.core.errors import ValidationError
from partcatalog.core.security import require_roles
from partcatalog.domain.constants import (
    CATALOG_ADMIN_ROLES,
    CSV_TEMPLATE_FILENAME,
    MAX_PAGE_SIZE,
    PRICE_TYPES,
    STOCK_STATUSES,
)
from partcatalog.models import Part
from partcatalog.schemas.part import (
    OrganizationAccessIn,
    OrganizationOverrideIn,
    PartCreate,
    PartDetail,
    PartRead,
    PartUpdate,
)
from partcatalog.services import bulk_import_service, override_service, part_service, resolution_service

router = APIRouter(prefix="/admin/parts", tags=["admin-parts"])

# Katalog yönetimi sadece platform adminlerinde
Guard = require_roles(*CATALOG_ADMIN_ROLES)

PRICE_TYPE_PATTERN = f"^({'|'.join(PRICE_TYPES)})$"
STOCK_STATUS_PATTERN = f"^({'|'.join(STOCK_STATUSES)})$"


def _serialize(db: Session, part: Part) -> dict:
    orgs = resolution_service.group_organizations(db, part)
    return PartDetail(**dict(PartRead.model_validate(part)), Organizations=orgs).model_dump(mode="json")


def _serialize_many(db: Session, parts: List[Part]) -> List[dict]:
    grouped = resolution_service.group_organizations_many(db, parts)
    return [
        PartDetail(**dict(PartRead.model_validate(p)), Organizations=grouped[p.PartID]).model_dump(mode="json")
        for p in parts
    ]


@router.get("", dependencies=[Depends(Guard)])
def list_parts(
    search: Optional[str] = Query(None, description="Ad / üretici no / müşteri no / açıklama içinde arar"),
    organization: Optional[int] = Query(None, ge=1, description="Bu organizasyon için override'ı olan parçalar"),
    price_type: Optional[str] = Query(None, pattern=PRICE_TYPE_PATTERN),
    manufacturer: Optional[str] = Query(None),
    part_type: Optional[str] = Query(None),
    stock_status: Optional[str] = Query(None, pattern=STOCK_STATUS_PATTERN),
    page: int = Query(1, ge=1),
    limit: int = Query(50, ge=1, le=MAX_PAGE_SIZE),
    sort: str = Query("Name", description="İzinli: Name, -Name, UpdatedAt, -UpdatedAt, ManufacturerPartNumber, Manufacturer, PartID"),
    db: Session = Depends(get_db),
):
    rows, total = part_service.list_parts(
        db,
        search=search,
        organization_id=organization,
        price_type=price_type,
        manufacturer=manufacturer,
        part_type=part_type,
        stock_status=stock_status,
        page=page,
        limit=limit,
        sort=sort,
    )
    items = _serialize_many(db, rows)
    return ok(items, meta=page_meta(items, page=page, limit=limit, total=total))


@router.get("/filters", dependencies=[Depends(Guard)])
def filter_options(db: Session = Depends(get_db)):
    return ok(part_service.list_filter_options(db))


@router.get("/template", dependencies=[Depends(Guard)])
def download_template():
    return csv_download(bulk_import_service.template_csv(), CSV_TEMPLATE_FILENAME)


@router.post("/bulk-upload", dependencies=[Depends(Guard)])
def bulk_upload(
    file: UploadFile = File(...),
    organization_id: int = Form(...),
    application_id: Optional[str] = Form(None),
    db: Session = Depends(get_db),
):
    try:
        content = file.file.read().decode("utf-8-sig")
    except UnicodeDecodeError:
        raise ValidationError("CSV must be UTF-8 encoded", status_code=400)
    finally:
        file.file.close()

    result = bulk_import_service.import_parts(
        db, content, organization_id=organization_id, application_id=application_id
    )
    return ok(result.model_dump())


@router.get("/{part_id}", dependencies=[Depends(Guard)])
def get_part(part_id: int = Path(..., ge=1), db: Session = Depends(get_db)):
    return ok(_serialize(db, part_service.get_part(db, part_id)))


@router.post("", dependencies=[Depends(Guard)])
def create_part(payload: PartCreate, db: Session = Depends(get_db)):
    part = part_service.create_part(db, payload)
    return ok(_serialize(db, part), status_code=status.HTTP_201_CREATED)


@router.put("/{part_id}", dependencies=[Depends(Guard)])
def update_part(payload: PartUpdate, part_id: int = Path(..., ge=1), db: Session = Depends(get_db)):
    part = part_service.update_part(db, part_id, payload)
    return ok(_serialize(db, part))


@router.put("/{part_id}/organizations", dependencies=[Depends(Guard)])
def replace_organizations(
    payload: List[OrganizationAccessIn],
    part_id: int = Path(..., ge=1),
    db: Session = Depends(get_db),
):
    part = part_service.get_part(db, part_id)
    override_service.replace_all(db, part, payload)
    return ok(_serialize(db, part))


@router.put("/{part_id}/organizations/{organization_id}", dependencies=[Depends(Guard)])
def upsert_organization(
    payload: OrganizationOverrideIn,
    part_id: int = Path(..., ge=1),
    organization_id: int = Path(..., ge=1),
    db: Session = Depends(get_db),
):
    if payload.OrganizationID is not None and payload.OrganizationID != organization_id:
        raise ValidationError("OrganizationID in body does not match path")
    part = part_service.get_part(db, part_id)
    entry = OrganizationAccessIn(
        **payload.model_dump(exclude={"OrganizationID"}), OrganizationID=organization_id
    )
    override_service.upsert_override(db, part, entry)
    return ok(_serialize(db, part))


@router.delete("/{part_id}", dependencies=[Depends(Guard)])
def delete_part(part_id: int = Path(..., ge=1), db: Session = Depends(get_db)):
    part_service.delete_part(db, part_id)
    return ok({"PartID": part_id, "deleted": True})
