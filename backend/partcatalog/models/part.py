from datetime import datetime, timezone

from sqlalchemy import (
    Column, Integer, String, Text, Boolean, DateTime, Float, Numeric, JSON, CheckConstraint, Index, text
)
from ..core.db import Base


def utcnow() -> datetime:
    # DB'de naive UTC tutuyoruz
    return datetime.now(timezone.utc).replace(tzinfo=None)


class Part(Base):
    __tablename__ = "Part"

    PartID                 = Column(Integer, primary_key=True, autoincrement=True)
    ManufacturerPartNumber = Column(String(100), nullable=False)   # üretici bazında tekil değil
    ClientPartNumber       = Column(String(100))
    Name                   = Column(String(200), nullable=False)
    Description            = Column(Text)
    Manufacturer           = Column(String(200), nullable=False)
    PartType               = Column(String(100))
    Machine                = Column(String(200))
    Assembly               = Column(String(200))
    Voltage                = Column(String(50))
    ShaftSize              = Column(String(50))
    GearboxRatio           = Column(String(50))
    PowerRatingHP          = Column(Float)
    PowerRatingKW          = Column(Float)
    Specifications         = Column(JSON)                            # dict ya da düz metin
    StockQuantity          = Column(Integer, nullable=False, default=0, server_default=text("0"))

    # Varsayılan ticari koşullar
    PriceType              = Column(String(20), nullable=False)
    UnitPrice              = Column(Numeric(12, 2))
    LeadTimeDays           = Column(Integer)
    IsRepairable           = Column(Boolean, nullable=False, default=False, server_default=text("0"))
    RepairPrice            = Column(Numeric(12, 2))

    CreatedAt              = Column(DateTime, nullable=False, default=utcnow)
    UpdatedAt              = Column(DateTime, nullable=False, default=utcnow, onupdate=utcnow)

    __table_args__ = (
        CheckConstraint("PriceType IN ('fixed','non_fixed')", name="CK_Part_PriceType"),
        CheckConstraint("StockQuantity >= 0", name="CK_Part_StockQuantity_0"),
        Index("IX_Part_Manufacturer", "Manufacturer"),
        Index("IX_Part_UpdatedAt", "UpdatedAt"),
    )
