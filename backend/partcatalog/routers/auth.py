# backend/partcatalog/routers/auth.py
from fastapi import APIRouter, Depends
from fastapi.security import OAuth2PasswordRequestForm
from sqlalchemy.orm import Session

from partcatalog.core.db import get_db
from partcatalog.core.errors import AuthorizationError
from partcatalog.core.security import create_access_token, get_current_user, verify_password
from partcatalog.models import AppUser
from partcatalog.schemas.user import Token, UserRead

router = APIRouter(prefix="/auth", tags=["auth"])

# Kullanıcı/organizasyon kayıtları kimlik servisinde yönetilir; burada sadece giriş ve kimlik sorgusu var.


@router.post("/login", response_model=Token)
def login(form: OAuth2PasswordRequestForm = Depends(), db: Session = Depends(get_db)):
    username = form.username.strip()
    user = db.query(AppUser).filter(AppUser.Username == username).first()

    if not user or not user.HashedPassword or not verify_password(form.password, user.HashedPassword):
        raise AuthorizationError("Incorrect username or password")
    if not user.IsActive:
        raise AuthorizationError("User is inactive")

    token = create_access_token(sub=user.Username, role=user.Role, org_id=user.OrganizationID)
    return {"access_token": token, "token_type": "bearer"}


@router.get("/me", response_model=UserRead)
def me(current: AppUser = Depends(get_current_user)):
    return current
