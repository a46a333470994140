# backend/partcatalog/schemas/part.py
from datetime import datetime
from decimal import Decimal, ROUND_HALF_UP, InvalidOperation
from typing import Any, Dict, List, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_serializer, field_validator

MONEY_PLACES = Decimal("0.01")  # 2 hane

PriceTypeLiteral = Literal["fixed", "non_fixed"]


def blank_to_none(v: Any) -> Any:
    # Formlardan gelen "" / "   " değerleri null sayılır
    if isinstance(v, str) and not v.strip():
        return None
    return v


def to_money(v: Any) -> Optional[Decimal]:
    v = blank_to_none(v)
    if v is None:
        return None
    try:
        d = v if isinstance(v, Decimal) else Decimal(str(v).strip())
        return d.quantize(MONEY_PLACES, rounding=ROUND_HALF_UP)
    except (InvalidOperation, TypeError, ValueError):
        raise ValueError("must be a valid decimal")


class OrganizationAccessIn(BaseModel):
    OrganizationID: int = Field(..., ge=1)
    OrganizationItemNumber: Optional[str] = None
    UseDefaultPricing: bool = True
    # UseDefaultPricing=False iken kullanılan değerler
    PriceType: Optional[PriceTypeLiteral] = None
    UnitPrice: Optional[Decimal] = None
    LeadTimeDays: Optional[int] = Field(default=None, ge=0)
    IsRepairable: Optional[bool] = None
    RepairPrice: Optional[Decimal] = None
    # Tek seçim (form) ya da liste; "__none__" = uygulama yok
    ApplicationID: Optional[Union[int, str]] = None
    ApplicationIDs: List[Union[int, str]] = Field(default_factory=list)

    @field_validator("OrganizationItemNumber", "PriceType", "LeadTimeDays", "IsRepairable", mode="before")
    @classmethod
    def _blank(cls, v):
        v = blank_to_none(v)
        return v.strip() if isinstance(v, str) else v

    @field_validator("UnitPrice", "RepairPrice", mode="before")
    @classmethod
    def _money(cls, v):
        return to_money(v)

    def application_ids(self) -> List[Union[int, str]]:
        ids: List[Union[int, str]] = []
        if self.ApplicationID is not None:
            ids.append(self.ApplicationID)
        ids.extend(self.ApplicationIDs)
        return ids


class OrganizationOverrideIn(OrganizationAccessIn):
    """Tek organizasyon upsert gövdesi; OrganizationID path'ten gelir."""
    OrganizationID: Optional[int] = None


class _PartFields(BaseModel):
    """Create/Update ortak alanları. Zorunluluk kontrolü serviste yapılır."""
    ManufacturerPartNumber: Optional[str] = None
    ClientPartNumber: Optional[str] = None
    Name: Optional[str] = None
    Description: Optional[str] = None
    Machine: Optional[str] = None
    Assembly: Optional[str] = None
    Voltage: Optional[str] = None
    ShaftSize: Optional[str] = None
    GearboxRatio: Optional[str] = None
    PowerRatingHP: Optional[float] = None
    PowerRatingKW: Optional[float] = None
    Specifications: Optional[Union[Dict[str, Any], List[Any], str]] = None
    StockQuantity: Optional[int] = Field(default=None, ge=0)
    PriceType: Optional[PriceTypeLiteral] = None
    UnitPrice: Optional[Decimal] = None
    LeadTimeDays: Optional[int] = Field(default=None, ge=0)
    IsRepairable: bool = False
    RepairPrice: Optional[Decimal] = None
    OrganizationAccess: Optional[List[OrganizationAccessIn]] = None

    @field_validator(
        "ManufacturerPartNumber", "ClientPartNumber", "Name", "Description", "Machine", "Assembly",
        "Voltage", "ShaftSize", "GearboxRatio", "PowerRatingHP", "PowerRatingKW", "StockQuantity",
        "PriceType", "LeadTimeDays",
        mode="before",
    )
    @classmethod
    def _blank(cls, v):
        v = blank_to_none(v)
        return v.strip() if isinstance(v, str) else v

    @field_validator("UnitPrice", "RepairPrice", mode="before")
    @classmethod
    def _money(cls, v):
        return to_money(v)


class PartCreate(_PartFields):
    Manufacturer: Optional[str] = None
    PartType: Optional[str] = None

    @field_validator("Manufacturer", "PartType", mode="before")
    @classmethod
    def _blank_locked(cls, v):
        v = blank_to_none(v)
        return v.strip() if isinstance(v, str) else v


class PartUpdate(_PartFields):
    """Manufacturer ve PartType oluşturulduktan sonra değişmez; gelirse yok sayılır."""


# ---- Çıktılar ----
class _MoneyOut(BaseModel):
    # İstemci basit görsün diye JSON'da float döndürüyoruz
    @field_serializer("UnitPrice", "RepairPrice", check_fields=False)
    def _ser_money(self, v: Optional[Decimal]):
        return float(v) if v is not None else None


class ApplicationRef(BaseModel):
    ApplicationID: int
    Name: str


class OrganizationAccessView(_MoneyOut):
    OrganizationID: int
    Name: Optional[str] = None
    OrganizationItemNumber: Optional[str] = None
    LeadTimeDays: Optional[int] = None
    PriceType: PriceTypeLiteral
    UnitPrice: Optional[Decimal] = None
    IsRepairable: bool = False
    RepairPrice: Optional[Decimal] = None
    Applications: List[ApplicationRef] = Field(default_factory=list)


class EffectiveTerms(_MoneyOut):
    OrganizationID: Optional[int] = None
    OrganizationItemNumber: Optional[str] = None
    PriceType: PriceTypeLiteral
    UnitPrice: Optional[Decimal] = None
    LeadTimeDays: Optional[int] = None
    IsRepairable: bool = False
    RepairPrice: Optional[Decimal] = None
    Source: Literal["default", "override"]


class PartRead(_MoneyOut):
    model_config = ConfigDict(from_attributes=True)

    PartID: int
    ManufacturerPartNumber: str
    ClientPartNumber: Optional[str] = None
    Name: str
    Description: Optional[str] = None
    Manufacturer: str
    PartType: Optional[str] = None
    Machine: Optional[str] = None
    Assembly: Optional[str] = None
    Voltage: Optional[str] = None
    ShaftSize: Optional[str] = None
    GearboxRatio: Optional[str] = None
    PowerRatingHP: Optional[float] = None
    PowerRatingKW: Optional[float] = None
    Specifications: Optional[Union[Dict[str, Any], List[Any], str]] = None
    StockQuantity: int = 0
    PriceType: PriceTypeLiteral
    UnitPrice: Optional[Decimal] = None
    LeadTimeDays: Optional[int] = None
    IsRepairable: bool = False
    RepairPrice: Optional[Decimal] = None
    CreatedAt: datetime
    UpdatedAt: datetime


class PartDetail(PartRead):
    Organizations: List[OrganizationAccessView] = Field(default_factory=list)


class CatalogPart(PartRead):
    Terms: EffectiveTerms


class BulkUploadResult(BaseModel):
    success: int = 0
    failed: int = 0
    errors: List[str] = Field(default_factory=list)
