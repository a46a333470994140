# backend/partcatalog/core/errors.py
"""
Katalog servislerinin hata sınıfları.

HTTP'ye taşınan hatalar HTTPException alt sınıfıdır; servisler bunları
raise eder, main.py'deki zarf handler'ları {ok: false, error} döndürür.
RowError ve NonCriticalWriteError HTTP'ye çıkmaz: biri toplu yüklemede
satır bazında biriktirilir, diğeri sadece loglanır.
"""
from typing import Optional

from fastapi import HTTPException, status


class ValidationError(HTTPException):
    def __init__(self, detail: str, status_code: int = status.HTTP_422_UNPROCESSABLE_ENTITY):
        super().__init__(status_code=status_code, detail=detail)


class AuthorizationError(HTTPException):
    def __init__(self, detail: str = "Authentication required", status_code: int = status.HTTP_401_UNAUTHORIZED):
        headers = {"WWW-Authenticate": "Bearer"} if status_code == status.HTTP_401_UNAUTHORIZED else None
        super().__init__(status_code=status_code, detail=detail, headers=headers)


class ReferentialError(HTTPException):
    def __init__(self, detail: str):
        super().__init__(status_code=status.HTTP_409_CONFLICT, detail=detail)


class NotFoundError(HTTPException):
    def __init__(self, detail: str = "Not found"):
        super().__init__(status_code=status.HTTP_404_NOT_FOUND, detail=detail)


class StoreError(HTTPException):
    def __init__(self, detail: str, cause: Optional[BaseException] = None):
        if cause is not None:
            detail = f"{detail}: {type(cause).__name__}"
        super().__init__(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=detail)


class RowError(Exception):
    """Toplu yüklemede tek satırın hatası; batch'i durdurmaz."""


class NonCriticalWriteError(Exception):
    """Uygulama (scope) bağlantısı yazılamadı; ana işlem başarılı sayılır."""
