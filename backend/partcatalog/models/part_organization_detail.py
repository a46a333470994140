from sqlalchemy import (
    Column, Integer, String, Boolean, Numeric, ForeignKey, CheckConstraint, UniqueConstraint
)
from sqlalchemy.orm import relationship
from ..core.db import Base

class PartOrganizationDetail(Base):
    """Bir parçanın tek bir organizasyon için ticari koşulları (override)."""
    __tablename__ = "PartOrganizationDetail"

    DetailID               = Column(Integer, primary_key=True, autoincrement=True)
    PartID                 = Column(Integer, ForeignKey("Part.PartID"), nullable=False)
    OrganizationID         = Column(Integer, ForeignKey("Organization.OrganizationID"), nullable=False)
    OrganizationItemNumber = Column(String(100))
    LeadTimeDays           = Column(Integer)
    PriceType              = Column(String(20), nullable=False)
    UnitPrice              = Column(Numeric(12, 2))
    IsRepairable           = Column(Boolean, nullable=False, default=False)
    RepairPrice            = Column(Numeric(12, 2))

    __table_args__ = (
        UniqueConstraint("PartID", "OrganizationID", name="UQ_PartOrgDetail_Part_Org"),
        CheckConstraint("PriceType IN ('fixed','non_fixed')", name="CK_PartOrgDetail_PriceType"),
    )

    organization = relationship("Organization")
