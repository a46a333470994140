from sqlalchemy import (
    Column, Integer, String, Boolean, DateTime, ForeignKey, CheckConstraint, text
)
from sqlalchemy.orm import relationship
from ..core.db import Base
from ..domain.constants import ALLOWED_ROLES
from .part import utcnow

class AppUser(Base):
    __tablename__ = "AppUser"

    UserID         = Column(Integer, primary_key=True, autoincrement=True)
    Username       = Column(String(50),  nullable=False, unique=True)
    FullName       = Column(String(100))
    Email          = Column(String(200))
    HashedPassword = Column(String(255), nullable=False)
    Role           = Column(String(20),  nullable=False, server_default=text("'user'"))
    OrganizationID = Column(Integer, ForeignKey("Organization.OrganizationID"))
    # Katalogda fiyat alanlarını görebilir mi
    CanViewPricing = Column(Boolean,     nullable=False, default=False, server_default=text("0"))
    IsActive       = Column(Boolean,     nullable=False, default=True, server_default=text("1"))
    CreatedAt      = Column(DateTime,    nullable=False, default=utcnow)

    __table_args__ = (
        CheckConstraint(
            "Role in (" + ",".join(f"'{r}'" for r in ALLOWED_ROLES) + ")",
            name="CK_AppUser_Role"
        ),
    )

    organization = relationship("Organization")
