from sqlalchemy import Column, Integer, String, ForeignKey
from sqlalchemy.orm import relationship
from ..core.db import Base

# Organizasyon/uygulama kayıtlarının sahibi kimlik servisi; burada sadece okunur.

class Organization(Base):
    __tablename__ = "Organization"

    OrganizationID = Column(Integer, primary_key=True, autoincrement=True)
    Name           = Column(String(200), nullable=False)

    applications = relationship("Application", back_populates="organization")


class Application(Base):
    __tablename__ = "Application"

    ApplicationID  = Column(Integer, primary_key=True, autoincrement=True)
    OrganizationID = Column(Integer, ForeignKey("Organization.OrganizationID"), nullable=False)
    Name           = Column(String(200), nullable=False)
    Description    = Column(String(1000))

    organization = relationship("Organization", back_populates="applications")
