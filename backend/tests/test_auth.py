import pytest
from sqlalchemy.exc import IntegrityError

from partcatalog.core.security import hash_password
from partcatalog.domain.constants import ALLOWED_ROLES
from partcatalog.models import AppUser


def _add_user(db, org=None, is_active=True):
    db.add(AppUser(
        Username="jane",
        HashedPassword=hash_password("s3cret!"),
        Role="org_admin",
        OrganizationID=org.OrganizationID if org else None,
        IsActive=is_active,
    ))
    db.commit()


def test_login_and_me(client, db, org):
    _add_user(db, org)

    r = client.post("/auth/login", data={"username": "jane", "password": "s3cret!"})
    assert r.status_code == 200
    token = r.json()["access_token"]
    assert r.json()["token_type"] == "bearer"

    r = client.get("/auth/me", headers={"Authorization": f"Bearer {token}"})
    assert r.status_code == 200
    me = r.json()
    assert me["Username"] == "jane"
    assert me["Role"] == "org_admin"
    assert me["OrganizationID"] == org.OrganizationID


def test_login_wrong_password(client, db):
    _add_user(db)

    r = client.post("/auth/login", data={"username": "jane", "password": "nope"})

    assert r.status_code == 401
    assert r.json() == {"ok": False, "error": "Incorrect username or password"}


def test_inactive_user_token_is_rejected(client, make_headers):
    headers = make_headers("gone", "admin", is_active=False)

    assert client.get("/auth/me", headers=headers).status_code == 401


def test_tolerant_bearer_header(client, make_headers):
    headers = make_headers("spacey", "user")
    token = headers["Authorization"].split()[1]

    r = client.get("/auth/me", headers={"Authorization": f'"Bearer   Bearer {token}"'})

    assert r.status_code == 200


def test_garbage_token(client):
    r = client.get("/auth/me", headers={"Authorization": "Bearer not.a.jwt"})

    assert r.status_code == 401


def test_role_column_accepts_only_known_roles(db):
    for i, role in enumerate(ALLOWED_ROLES):
        db.add(AppUser(Username=f"u{i}", HashedPassword="x", Role=role))
    db.commit()

    db.add(AppUser(Username="intruder", HashedPassword="x", Role="superuser"))
    with pytest.raises(IntegrityError):
        db.commit()
    db.rollback()
