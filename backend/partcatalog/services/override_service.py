# backend/partcatalog/services/override_service.py
from __future__ import annotations
import logging
from typing import Dict, List, Optional, Sequence, Tuple, Union

from fastapi import HTTPException
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from partcatalog.core.errors import StoreError, ValidationError
from partcatalog.domain.constants import PRICE_NON_FIXED
from partcatalog.models import Organization, Part, PartOrganizationDetail
from partcatalog.schemas.part import OrganizationAccessIn
from partcatalog.services import scope_service

logger = logging.getLogger(__name__)

# (OrganizationID, uygulama id listesi) -> commit sonrası scope_service'e gider
PendingLinks = List[Tuple[int, List[Union[int, str]]]]


def _dialect(db: Session) -> str:
    try:
        return db.bind.dialect.name
    except AttributeError:
        return "unknown"


def _lock_part(db: Session, part_id: int) -> None:
    """
    Override setini yeniden yazmadan önce Part satırını kilitle.
    MSSQL'de UPDLOCK+ROWLOCK; diğerlerinde SELECT ... FOR UPDATE (SQLite'ta etkisiz).
    """
    if _dialect(db) == "mssql":
        db.execute(
            text("SELECT PartID FROM Part WITH (UPDLOCK, ROWLOCK) WHERE PartID=:pid"),
            {"pid": part_id},
        )
    else:
        db.query(Part.PartID).filter(Part.PartID == part_id).with_for_update().first()


def override_values(part: Part, entry: OrganizationAccessIn) -> dict:
    """
    UseDefaultPricing=True: Part'ın o anki varsayılanlarının kopyası (snapshot).
    Sonradan Part değişirse bu satır güncellenmez; ancak yeni bir replace/upsert alır.
    """
    if entry.UseDefaultPricing:
        return {
            "LeadTimeDays": part.LeadTimeDays,
            "PriceType": part.PriceType,
            "UnitPrice": part.UnitPrice,
            "IsRepairable": bool(part.IsRepairable),
            "RepairPrice": part.RepairPrice,
        }
    return {
        "LeadTimeDays": entry.LeadTimeDays,
        "PriceType": entry.PriceType or PRICE_NON_FIXED,
        "UnitPrice": entry.UnitPrice,
        "IsRepairable": bool(entry.IsRepairable),
        "RepairPrice": entry.RepairPrice,
    }


def merge_entries(entries: Sequence[OrganizationAccessIn]) -> List[Tuple[OrganizationAccessIn, List[Union[int, str]]]]:
    """Aynı organizasyon iki kez gelirse: son kaydın değerleri, uygulamaların birleşimi."""
    merged: Dict[int, OrganizationAccessIn] = {}
    apps: Dict[int, List[Union[int, str]]] = {}
    for entry in entries:
        merged[entry.OrganizationID] = entry
        apps.setdefault(entry.OrganizationID, []).extend(entry.application_ids())
    return [(merged[org_id], apps[org_id]) for org_id in merged]


def ensure_organizations(db: Session, organization_ids: Sequence[int]) -> None:
    wanted = set(organization_ids)
    if not wanted:
        return
    found = {
        oid for (oid,) in db.query(Organization.OrganizationID)
        .filter(Organization.OrganizationID.in_(wanted))
        .all()
    }
    missing = sorted(wanted - found)
    if missing:
        raise ValidationError(f"Unknown organization(s): {', '.join(str(m) for m in missing)}")


def delete_for_part(db: Session, part_id: int) -> None:
    # Önce override, sonra scope satırları; commit çağıranda
    db.query(PartOrganizationDetail).filter(PartOrganizationDetail.PartID == part_id).delete(
        synchronize_session="fetch"
    )
    scope_service.delete_for_part(db, part_id)


def stage_override(db: Session, part: Part, entry: OrganizationAccessIn) -> PartOrganizationDetail:
    row = PartOrganizationDetail(
        PartID=part.PartID,
        OrganizationID=entry.OrganizationID,
        OrganizationItemNumber=entry.OrganizationItemNumber,
        **override_values(part, entry),
    )
    db.add(row)
    db.flush()
    return row


def stage_replace(db: Session, part: Part, entries: Sequence[OrganizationAccessIn]) -> PendingLinks:
    """
    Part'ın tüm override+scope satırlarını siler, yeni seti ekler. Commit etmez:
    Part güncellemesiyle aynı transaction'da kalsın diye commit çağıranda.
    """
    merged = merge_entries(entries)
    ensure_organizations(db, [e.OrganizationID for e, _ in merged])
    _lock_part(db, part.PartID)
    delete_for_part(db, part.PartID)
    pending: PendingLinks = []
    for entry, app_ids in merged:
        stage_override(db, part, entry)
        pending.append((entry.OrganizationID, app_ids))
    return pending


def link_pending(db: Session, part_id: int, pending: PendingLinks) -> int:
    return sum(
        scope_service.link_applications(db, part_id, org_id, app_ids)
        for org_id, app_ids in pending
    )


def replace_all(db: Session, part: Part, entries: Sequence[OrganizationAccessIn]) -> List[PartOrganizationDetail]:
    """
    Override setini tek başına değiştiren giriş noktası (PUT /admin/parts/{id}/organizations).
    Part güncellemesiyle birlikte yazılacaksa update_part stage_replace + link_pending kullanır.
    """
    try:
        pending = stage_replace(db, part, entries)
        db.commit()
    except HTTPException:
        db.rollback()
        raise
    except SQLAlchemyError as e:
        db.rollback()
        logger.exception("replace_all error (PartID=%s)", part.PartID)
        raise StoreError("Organization details update failed", e)

    link_pending(db, part.PartID, pending)
    return list_for_part(db, part.PartID)


def upsert_override(db: Session, part: Part, entry: OrganizationAccessIn) -> PartOrganizationDetail:
    """(PartID, OrganizationID) anahtarıyla tek satırı ekle/güncelle; o organizasyonun scope'larını yenile."""
    try:
        ensure_organizations(db, [entry.OrganizationID])
        _lock_part(db, part.PartID)
        row = get_for_organization(db, part.PartID, entry.OrganizationID)
        if row is None:
            row = PartOrganizationDetail(PartID=part.PartID, OrganizationID=entry.OrganizationID)
            db.add(row)
        row.OrganizationItemNumber = entry.OrganizationItemNumber
        for k, v in override_values(part, entry).items():
            setattr(row, k, v)
        scope_service.delete_for_part(db, part.PartID, organization_id=entry.OrganizationID)
        db.commit()
        db.refresh(row)
    except HTTPException:
        db.rollback()
        raise
    except SQLAlchemyError as e:
        db.rollback()
        logger.exception("upsert_override error (PartID=%s, OrganizationID=%s)", part.PartID, entry.OrganizationID)
        raise StoreError("Organization details update failed", e)

    scope_service.link_applications(db, part.PartID, entry.OrganizationID, entry.application_ids())
    return row


def list_for_part(db: Session, part_id: int) -> List[PartOrganizationDetail]:
    return (
        db.query(PartOrganizationDetail)
        .filter(PartOrganizationDetail.PartID == part_id)
        .order_by(PartOrganizationDetail.DetailID.asc())
        .all()
    )


def get_for_organization(db: Session, part_id: int, organization_id: int) -> Optional[PartOrganizationDetail]:
    return (
        db.query(PartOrganizationDetail)
        .filter(PartOrganizationDetail.PartID == part_id)
        .filter(PartOrganizationDetail.OrganizationID == organization_id)
        .first()
    )
