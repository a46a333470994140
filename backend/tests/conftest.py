import os
import tempfile

# partcatalog import edilmeden önce: geçici SQLite dosyası
_TMP_DIR = tempfile.mkdtemp(prefix="partcatalog-tests-")
os.environ["DATABASE_URL"] = "sqlite:///" + os.path.join(_TMP_DIR, "catalog.db").replace("\\", "/")
os.environ.setdefault("JWT_SECRET", "test-secret")

import pytest
from fastapi.testclient import TestClient

from partcatalog.core.db import Base, SessionLocal, engine
from partcatalog.core.security import create_access_token
from partcatalog.models import Application, AppUser, Organization
from partcatalog.schemas.part import PartCreate
from partcatalog.services import part_service


@pytest.fixture()
def db():
    Base.metadata.drop_all(bind=engine)
    Base.metadata.create_all(bind=engine)
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture()
def client(db):
    from partcatalog.main import app
    with TestClient(app) as c:
        yield c


@pytest.fixture()
def org(db):
    o = Organization(Name="Acme Plant")
    db.add(o)
    db.commit()
    return o


@pytest.fixture()
def other_org(db):
    o = Organization(Name="Beta Works")
    db.add(o)
    db.commit()
    return o


@pytest.fixture()
def app_line(db, org):
    a = Application(OrganizationID=org.OrganizationID, Name="Packaging Line")
    db.add(a)
    db.commit()
    return a


@pytest.fixture()
def other_app(db, other_org):
    a = Application(OrganizationID=other_org.OrganizationID, Name="Sorting Hub")
    db.add(a)
    db.commit()
    return a


def _user(db, username, role, organization_id=None, can_view_pricing=False, is_active=True):
    u = AppUser(
        Username=username,
        HashedPassword="not-a-real-hash",
        Role=role,
        OrganizationID=organization_id,
        CanViewPricing=can_view_pricing,
        IsActive=is_active,
    )
    db.add(u)
    db.commit()
    return u


def _headers(user):
    token = create_access_token(sub=user.Username, role=user.Role, org_id=user.OrganizationID)
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture()
def admin_headers(db):
    return _headers(_user(db, "catalog-admin", "admin"))


@pytest.fixture()
def org_user(db, org):
    return _user(db, "buyer", "user", organization_id=org.OrganizationID, can_view_pricing=True)


@pytest.fixture()
def user_headers(org_user):
    return _headers(org_user)


@pytest.fixture()
def make_headers(db):
    def _make(username, role, organization_id=None, can_view_pricing=False, is_active=True):
        return _headers(_user(db, username, role, organization_id, can_view_pricing, is_active))
    return _make


@pytest.fixture()
def make_part(db):
    def _make(**overrides):
        fields = {
            "ManufacturerPartNumber": "MPN-1",
            "Manufacturer": "Acme Corp",
            "Name": "Gearbox",
            "PriceType": "fixed",
            "UnitPrice": "99.99",
            "LeadTimeDays": 30,
        }
        fields.update(overrides)
        return part_service.create_part(db, PartCreate(**fields))
    return _make
