# backend/models/purchase_order.py
import enum
import uuid

from sqlalchemy import (
    CheckConstraint, Column, DateTime, Enum, ForeignKey, Integer, Numeric, String, Text,
    UniqueConstraint,
)
from sqlalchemy.orm import relationship

from database import Base
from utils.dates import utcnow


# Purchase order lifecycle; any value may follow any other
class PurchaseOrderStatus(str, enum.Enum):
    PENDING = "PENDING"
    APPROVED = "APPROVED"
    RECEIVED = "RECEIVED"
    CANCELLED = "CANCELLED"


class PurchaseOrder(Base):
    __tablename__ = "purchase_orders"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    user_id = Column(String(36), ForeignKey("users.id"), nullable=False, index=True)
    po_number = Column(String, nullable=False)

    # Supplier snapshot plus the optional directory link
    supplier_id = Column(String(36), ForeignKey("suppliers.id"), nullable=True, index=True)
    supplier_name = Column(String, nullable=False)
    supplier_email = Column(String, nullable=True)

    total_amount = Column(Numeric(12, 2), CheckConstraint("total_amount >= 0"), nullable=False)
    status = Column(Enum(PurchaseOrderStatus), nullable=False, default=PurchaseOrderStatus.PENDING, index=True)

    order_date = Column(DateTime, nullable=False, default=utcnow, index=True)
    expected_delivery = Column(DateTime, nullable=False, index=True)
    notes = Column(Text, nullable=True)

    created_at = Column(DateTime, default=utcnow, nullable=False, index=True)
    updated_at = Column(DateTime, default=utcnow, onupdate=utcnow, nullable=False)

    items = relationship(
        "PurchaseOrderItem", back_populates="order", cascade="all, delete-orphan",
        order_by="PurchaseOrderItem.position",
    )
    supplier = relationship("Supplier", back_populates="purchase_orders")

    __table_args__ = (
        UniqueConstraint("user_id", "po_number", name="uq_purchase_order_user_number"),
    )


# Ordered product with the cost per unit agreed with the supplier
class PurchaseOrderItem(Base):
    __tablename__ = "purchase_order_items"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    purchase_order_id = Column(
        String(36), ForeignKey("purchase_orders.id", ondelete="CASCADE"), nullable=False, index=True
    )
    inventory_id = Column(String(36), ForeignKey("inventory.id"), nullable=False, index=True)
    position = Column(Integer, nullable=False, default=0)
    quantity = Column(Integer, CheckConstraint("quantity > 0"), nullable=False)
    cost_per_unit = Column(Numeric(12, 2), nullable=False)
    total_cost = Column(Numeric(12, 2), nullable=False)

    order = relationship("PurchaseOrder", back_populates="items")
    inventory = relationship("InventoryItem")
