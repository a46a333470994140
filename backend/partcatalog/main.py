# backend/partcatalog/main.py
import json
import logging
import os

from dotenv import find_dotenv, load_dotenv
from fastapi import Depends, FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session
from starlette.exceptions import HTTPException as StarletteHTTPException

# .env yükle
load_dotenv(find_dotenv())

from partcatalog.core.api import UTF8JSONResponse, fail, ok
from partcatalog.core.db import Base, engine, get_db
from partcatalog import models  # noqa: F401  (tabloları Base.metadata'ya kaydeder)
from partcatalog.routers.admin_parts import router as admin_parts_router
from partcatalog.routers.auth import router as auth_router
from partcatalog.routers.parts import router as parts_router

logging.basicConfig(
    level=os.getenv("LOG_LEVEL", "INFO").upper(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger("partcatalog")

SERVICE_NAME = "PARTS CATALOG"

app = FastAPI(title=SERVICE_NAME, default_response_class=UTF8JSONResponse)


# -----------------------------
# Global hata zarfı
# -----------------------------
@app.exception_handler(StarletteHTTPException)
async def http_exception_to_envelope(request: Request, exc: StarletteHTTPException):
    resp = fail(str(exc.detail) if exc.detail else exc.__class__.__name__, status_code=exc.status_code)
    # WWW-Authenticate gibi başlıklar korunur
    for k, v in (getattr(exc, "headers", None) or {}).items():
        resp.headers[k] = v
    return resp


@app.exception_handler(RequestValidationError)
async def validation_exception_to_envelope(request: Request, exc: RequestValidationError):
    errors = json.loads(json.dumps(exc.errors(), default=str))
    return fail("Validation error", status_code=422, meta={"errors": errors})


# -----------------------------
# CORS yapılandırması (.env)
# -----------------------------
def _parse_origins(env_val):
    if not env_val or env_val.strip() == "*":
        return ["*"]
    try:
        parsed = json.loads(env_val)
        if isinstance(parsed, list):
            return [str(x) for x in parsed]
    except ValueError:
        pass
    return [s.strip() for s in env_val.split(",") if s.strip()]


ALLOWED_ORIGINS = _parse_origins(os.getenv("CORS_ALLOW_ORIGINS", "*"))
logger.info("CORS allow_origins = %s", ALLOWED_ORIGINS)

app.add_middleware(
    CORSMiddleware,
    allow_origins=ALLOWED_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# ---- startup: katalog tabloları yoksa oluştur ----
@app.on_event("startup")
def _ensure_tables():
    try:
        Base.metadata.create_all(bind=engine, checkfirst=True)
    except SQLAlchemyError as e:
        logger.warning("table create failed: %s", e)


# ---- Sağlık uçları ----
@app.get("/health")
def health():
    return ok({"service": SERVICE_NAME})


@app.get("/db-ping")
def db_ping(db: Session = Depends(get_db)):
    val = db.execute(text("SELECT 1")).scalar()
    return ok({"db": "ok", "select1": val})


app.include_router(auth_router)
app.include_router(admin_parts_router)
app.include_router(parts_router)
