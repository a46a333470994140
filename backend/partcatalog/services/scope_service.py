# backend/partcatalog/services/scope_service.py
from __future__ import annotations
import logging
from typing import Iterable, List, Optional, Union

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from partcatalog.core.errors import NonCriticalWriteError
from partcatalog.domain.constants import NO_APPLICATION
from partcatalog.models import Application, PartApplication

logger = logging.getLogger(__name__)


def clean_application_ids(raw: Optional[Iterable[Union[int, str, None]]]) -> List[int]:
    """"__none__" ve boşları at, int'e çevir, sırayı koruyarak tekilleştir."""
    out: List[int] = []
    for v in raw or []:
        if v is None:
            continue
        if isinstance(v, str):
            v = v.strip()
            if not v or v == NO_APPLICATION:
                continue
        try:
            app_id = int(v)
        except (TypeError, ValueError):
            logger.warning("ignoring non-numeric application id %r", v)
            continue
        if app_id not in out:
            out.append(app_id)
    return out


def _insert_link(db: Session, *, part_id: int, organization_id: int, application_id: int) -> None:
    app = db.get(Application, application_id)
    if app is None or app.OrganizationID != organization_id:
        raise NonCriticalWriteError(
            f"application {application_id} does not belong to organization {organization_id}"
        )
    try:
        db.add(PartApplication(PartID=part_id, OrganizationID=organization_id, ApplicationID=application_id))
        db.commit()
    except SQLAlchemyError as e:
        db.rollback()
        raise NonCriticalWriteError(
            f"application {application_id} link failed: {getattr(e, 'orig', e)}"
        ) from e


def link_applications(
    db: Session,
    part_id: int,
    organization_id: int,
    application_ids: Optional[Iterable[Union[int, str, None]]],
) -> int:
    """
    Her uygulama için bir PartApplication satırı yazar; her satır kendi commit'i.
    Hata kritik değildir: loglanır, override yazımı geri alınmaz.
    Yazılan bağlantı sayısını döner.
    """
    linked = 0
    for app_id in clean_application_ids(application_ids):
        try:
            _insert_link(db, part_id=part_id, organization_id=organization_id, application_id=app_id)
            linked += 1
        except NonCriticalWriteError as e:
            logger.warning("scope link skipped (PartID=%s, OrganizationID=%s): %s", part_id, organization_id, e)
    return linked


def list_for_part(db: Session, part_id: int) -> List[PartApplication]:
    return (
        db.query(PartApplication)
        .filter(PartApplication.PartID == part_id)
        .order_by(PartApplication.PartApplicationID.asc())
        .all()
    )


def delete_for_part(db: Session, part_id: int, organization_id: Optional[int] = None) -> int:
    # commit yok; çağıran transaction'ın parçası
    q = db.query(PartApplication).filter(PartApplication.PartID == part_id)
    if organization_id is not None:
        q = q.filter(PartApplication.OrganizationID == organization_id)
    return q.delete(synchronize_session="fetch")


def list_organization_applications(db: Session, organization_id: int) -> List[Application]:
    return (
        db.query(Application)
        .filter(Application.OrganizationID == organization_id)
        .order_by(Application.Name.asc())
        .all()
    )


def get_organization_application(db: Session, organization_id: int, application_id: int) -> Optional[Application]:
    return (
        db.query(Application)
        .filter(Application.ApplicationID == application_id)
        .filter(Application.OrganizationID == organization_id)
        .first()
    )
