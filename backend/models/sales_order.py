# backend/models/sales_order.py
import enum
import uuid

from sqlalchemy import (
    CheckConstraint, Column, DateTime, Enum, ForeignKey, Integer, Numeric, String, Text,
    UniqueConstraint,
)
from sqlalchemy.orm import relationship

from database import Base
from utils.dates import utcnow


# Sales order lifecycle; any value may follow any other
class SalesOrderStatus(str, enum.Enum):
    PENDING = "PENDING"
    PROCESSING = "PROCESSING"
    SHIPPED = "SHIPPED"
    DELIVERED = "DELIVERED"
    CANCELLED = "CANCELLED"


class SalesOrder(Base):
    __tablename__ = "sales_orders"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    user_id = Column(String(36), ForeignKey("users.id"), nullable=False, index=True)
    order_number = Column(String, nullable=False)

    # Customer snapshot taken at creation time plus the optional directory link
    customer_id = Column(String(36), ForeignKey("customers.id"), nullable=True, index=True)
    customer_name = Column(String, nullable=False)
    customer_email = Column(String, nullable=True)

    # Amounts: total = subtotal + tax_amount + shipping_cost
    subtotal = Column(Numeric(12, 2), nullable=False, default=0)
    tax_rate = Column(Numeric(5, 2), CheckConstraint("tax_rate >= 0"), nullable=False, default=0)
    tax_amount = Column(Numeric(12, 2), nullable=False, default=0)
    shipping_cost = Column(Numeric(12, 2), CheckConstraint("shipping_cost >= 0"), nullable=False, default=0)
    total_amount = Column(Numeric(12, 2), CheckConstraint("total_amount >= 0"), nullable=False)

    status = Column(Enum(SalesOrderStatus), nullable=False, default=SalesOrderStatus.PENDING, index=True)
    order_date = Column(DateTime, nullable=False, default=utcnow, index=True)
    notes = Column(Text, nullable=True)

    created_at = Column(DateTime, default=utcnow, nullable=False, index=True)
    updated_at = Column(DateTime, default=utcnow, onupdate=utcnow, nullable=False)

    items = relationship(
        "SalesOrderItem", back_populates="order", cascade="all, delete-orphan",
        order_by="SalesOrderItem.position",
    )
    customer = relationship("Customer", back_populates="sales_orders")

    __table_args__ = (
        UniqueConstraint("user_id", "order_number", name="uq_sales_order_user_number"),
    )


# A single line: product, quantity and the unit price snapshotted at order time
class SalesOrderItem(Base):
    __tablename__ = "sales_order_items"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    sales_order_id = Column(
        String(36), ForeignKey("sales_orders.id", ondelete="CASCADE"), nullable=False, index=True
    )
    inventory_id = Column(String(36), ForeignKey("inventory.id"), nullable=False, index=True)
    position = Column(Integer, nullable=False, default=0)
    quantity = Column(Integer, CheckConstraint("quantity > 0"), nullable=False)
    unit_price = Column(Numeric(12, 2), nullable=False)
    total_price = Column(Numeric(12, 2), nullable=False)

    order = relationship("SalesOrder", back_populates="items")
    inventory = relationship("InventoryItem")
