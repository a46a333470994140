from sqlalchemy import Column, Integer, ForeignKey, CheckConstraint
from ..core.db import Base

# Sipariş ve sepet satırları başka modülün; katalog sadece PartID referansına bakar.

class OrderItem(Base):
    __tablename__ = "OrderItem"

    OrderItemID = Column(Integer, primary_key=True, autoincrement=True)
    OrderID     = Column(Integer, nullable=False)
    PartID      = Column(Integer, ForeignKey("Part.PartID"), nullable=False, index=True)
    Quantity    = Column(Integer, nullable=False)

    __table_args__ = (
        CheckConstraint("Quantity > 0", name="CK_OrderItem_Quantity_Positive"),
    )


class CartItem(Base):
    __tablename__ = "CartItem"

    CartItemID = Column(Integer, primary_key=True, autoincrement=True)
    UserID     = Column(Integer, ForeignKey("AppUser.UserID"), nullable=False)
    PartID     = Column(Integer, ForeignKey("Part.PartID"), nullable=False, index=True)
    Quantity   = Column(Integer, nullable=False)

    __table_args__ = (
        CheckConstraint("Quantity > 0", name="CK_CartItem_Quantity_Positive"),
    )
