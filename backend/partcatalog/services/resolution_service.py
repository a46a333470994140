# backend/partcatalog/services/resolution_service.py
"""
Override çözümleme: (parça, organizasyon) için geçerli ticari koşullar.

Kural basit: organizasyonun override satırı varsa satırdaki değerler aynen
döner (yazım anında zaten çözülmüş snapshot), yoksa Part varsayılanları.
Okuma anında alan bazlı bir birleştirme yapılmaz.
"""
from __future__ import annotations
from collections import defaultdict
from typing import Dict, List, Optional, Sequence

from sqlalchemy.orm import Session

from partcatalog.models import Application, Organization, Part, PartApplication, PartOrganizationDetail
from partcatalog.schemas.part import ApplicationRef, EffectiveTerms, OrganizationAccessView
from partcatalog.services import override_service


def effective_terms(part: Part, override: Optional[PartOrganizationDetail] = None) -> EffectiveTerms:
    if override is None:
        return EffectiveTerms(
            OrganizationID=None,
            OrganizationItemNumber=None,
            PriceType=part.PriceType,
            UnitPrice=part.UnitPrice,
            LeadTimeDays=part.LeadTimeDays,
            IsRepairable=bool(part.IsRepairable),
            RepairPrice=part.RepairPrice,
            Source="default",
        )
    return EffectiveTerms(
        OrganizationID=override.OrganizationID,
        OrganizationItemNumber=override.OrganizationItemNumber,
        PriceType=override.PriceType,
        UnitPrice=override.UnitPrice,
        LeadTimeDays=override.LeadTimeDays,
        IsRepairable=bool(override.IsRepairable),
        RepairPrice=override.RepairPrice,
        Source="override",
    )


def resolve(db: Session, part: Part, organization_id: int) -> EffectiveTerms:
    row = override_service.get_for_organization(db, part.PartID, organization_id)
    return effective_terms(part, row)


def resolve_many(db: Session, parts: Sequence[Part], organization_id: int) -> Dict[int, EffectiveTerms]:
    part_ids = [p.PartID for p in parts]
    rows = {}
    if part_ids:
        rows = {
            r.PartID: r
            for r in db.query(PartOrganizationDetail)
            .filter(PartOrganizationDetail.OrganizationID == organization_id)
            .filter(PartOrganizationDetail.PartID.in_(part_ids))
            .all()
        }
    return {p.PartID: effective_terms(p, rows.get(p.PartID)) for p in parts}


def group_organizations_many(db: Session, parts: Sequence[Part]) -> Dict[int, List[OrganizationAccessView]]:
    """
    Admin görünümü: her parça için organizasyon başına tek kayıt
    (override değerleri + o organizasyona bağlı uygulamalar).
    Override satırı olmayan organizasyonların scope'ları gösterilmez.
    """
    part_ids = [p.PartID for p in parts]
    out: Dict[int, List[OrganizationAccessView]] = {pid: [] for pid in part_ids}
    if not part_ids:
        return out

    details = (
        db.query(PartOrganizationDetail, Organization.Name)
        .outerjoin(Organization, Organization.OrganizationID == PartOrganizationDetail.OrganizationID)
        .filter(PartOrganizationDetail.PartID.in_(part_ids))
        .order_by(PartOrganizationDetail.PartID, PartOrganizationDetail.DetailID)
        .all()
    )
    links = (
        db.query(PartApplication.PartID, PartApplication.OrganizationID, Application.ApplicationID, Application.Name)
        .join(Application, Application.ApplicationID == PartApplication.ApplicationID)
        .filter(PartApplication.PartID.in_(part_ids))
        .order_by(PartApplication.PartApplicationID)
        .all()
    )
    apps_by_key = defaultdict(list)
    for part_id, org_id, app_id, app_name in links:
        apps_by_key[(part_id, org_id)].append(ApplicationRef(ApplicationID=app_id, Name=app_name))

    for d, org_name in details:
        out[d.PartID].append(OrganizationAccessView(
            OrganizationID=d.OrganizationID,
            Name=org_name,
            OrganizationItemNumber=d.OrganizationItemNumber,
            LeadTimeDays=d.LeadTimeDays,
            PriceType=d.PriceType,
            UnitPrice=d.UnitPrice,
            IsRepairable=bool(d.IsRepairable),
            RepairPrice=d.RepairPrice,
            Applications=apps_by_key.get((d.PartID, d.OrganizationID), []),
        ))
    return out


def group_organizations(db: Session, part: Part) -> List[OrganizationAccessView]:
    return group_organizations_many(db, [part])[part.PartID]
