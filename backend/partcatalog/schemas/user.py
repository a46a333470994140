from typing import Optional, Literal
from pydantic import BaseModel, ConfigDict

RoleLiteral = Literal["admin", "cyntek_admin", "org_admin", "user"]

class UserRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)
    UserID: int
    Username: str
    FullName: Optional[str] = None
    Email: Optional[str] = None
    Role: RoleLiteral
    OrganizationID: Optional[int] = None
    CanViewPricing: bool = False
    IsActive: bool

class Token(BaseModel):
    access_token: str
    token_type: str = "bearer"
