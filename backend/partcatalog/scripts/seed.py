# backend/partcatalog/scripts/seed.py
import logging
import os
from contextlib import contextmanager

from sqlalchemy import select

from partcatalog.core.db import SessionLocal
from partcatalog.core.security import hash_password
from partcatalog.models import Application, AppUser, Organization, Part
from partcatalog.services import bulk_import_service

logger = logging.getLogger(__name__)

# ---------- küçük yardımcılar ----------

@contextmanager
def session_scope():
    """Tek seferlik session aç/kapat (hata olursa rollback)."""
    db = SessionLocal()
    try:
        yield db
        db.commit()
    except Exception:
        db.rollback()
        raise
    finally:
        db.close()

def get_one(db, model, **by):
    """Tekil alanlara göre satır getir (yoksa None)."""
    return db.execute(select(model).filter_by(**by)).scalars().first()

def get_or_create(db, model, unique_by: dict, defaults: dict | None = None):
    """unique_by ile ara, yoksa oluştur (idempotent)."""
    inst = get_one(db, model, **unique_by)
    if inst:
        return inst, False
    inst = model(**{**unique_by, **(defaults or {})})
    db.add(inst)
    db.flush()
    return inst, True

# ---------- tohum veriler (idempotent) ----------

ORGANIZATIONS = [
    {"Name": "Demo Manufacturing", "Applications": ["Packaging Line", "Conveyor"]},
    {"Name": "Demo Logistics", "Applications": ["Sorting Hub"]},
]

ADMIN_USERNAME = os.getenv("SEED_ADMIN_USERNAME", "admin")
ADMIN_PASSWORD = os.getenv("SEED_ADMIN_PASSWORD", "admin123")


def run():
    with session_scope() as db:
        logger.info("seeding: Organization / Application / AppUser")

        for o in ORGANIZATIONS:
            org, _ = get_or_create(db, Organization, {"Name": o["Name"]})
            for app_name in o["Applications"]:
                get_or_create(db, Application, {"OrganizationID": org.OrganizationID, "Name": app_name})

        get_or_create(
            db, AppUser, {"Username": ADMIN_USERNAME},
            defaults={
                "FullName": "Catalog Admin",
                "HashedPassword": hash_password(ADMIN_PASSWORD),
                "Role": "admin",
                "CanViewPricing": True,
                "IsActive": True,
            },
        )

    # Örnek parçalar: şablondaki iki satır ilk organizasyona yüklenir
    with session_scope() as db:
        if db.execute(select(Part.PartID)).first():
            logger.info("seeding: parts already present, skipped")
            return
        org = get_one(db, Organization, Name=ORGANIZATIONS[0]["Name"])
        result = bulk_import_service.import_parts(
            db, bulk_import_service.template_csv(), organization_id=org.OrganizationID
        )
        logger.info("seeding: sample parts success=%s failed=%s", result.success, result.failed)


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO)
    run()
