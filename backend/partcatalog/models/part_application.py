from sqlalchemy import Column, Integer, ForeignKey, UniqueConstraint, Index
from sqlalchemy.orm import relationship
from ..core.db import Base

class PartApplication(Base):
    """(parça, organizasyon, uygulama) görünürlük bağlantısı."""
    __tablename__ = "PartApplication"

    PartApplicationID = Column(Integer, primary_key=True, autoincrement=True)
    PartID            = Column(Integer, ForeignKey("Part.PartID"), nullable=False)
    OrganizationID    = Column(Integer, ForeignKey("Organization.OrganizationID"), nullable=False)
    ApplicationID     = Column(Integer, ForeignKey("Application.ApplicationID"), nullable=False)

    __table_args__ = (
        UniqueConstraint("PartID", "OrganizationID", "ApplicationID", name="UQ_PartApplication"),
        Index("IX_PartApplication_Org_App", "OrganizationID", "ApplicationID"),
    )

    application = relationship("Application")
