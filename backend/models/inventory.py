# backend/models/inventory.py
import uuid

from sqlalchemy import (
    CheckConstraint, Column, DateTime, ForeignKey, Integer, Numeric, String, UniqueConstraint,
)
from sqlalchemy.orm import relationship

from database import Base
from utils.dates import utcnow


# Model InventoryItem
# A stock-keeping unit owned by one user: catalog data, current quantity
# and the threshold below which it is reported as low stock.
class InventoryItem(Base):
    __tablename__ = "inventory"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    user_id = Column(String(36), ForeignKey("users.id"), nullable=False, index=True)

    product_name = Column(String, nullable=False, index=True)
    sku = Column(String, nullable=False, index=True)
    category = Column(String, nullable=False, default="Other", index=True)

    # Stock levels and price, guarded at the database level as well
    quantity = Column(Integer, CheckConstraint("quantity >= 0"), nullable=False, default=0)
    unit_price = Column(Numeric(12, 2), CheckConstraint("unit_price >= 0"), nullable=False)
    reorder_level = Column(Integer, CheckConstraint("reorder_level >= 0"), nullable=False, default=0)

    # Free-text supplier label plus an optional link to the supplier directory
    supplier = Column(String, nullable=True)
    supplier_id = Column(String(36), ForeignKey("suppliers.id"), nullable=True, index=True)

    created_at = Column(DateTime, default=utcnow, nullable=False)
    updated_at = Column(DateTime, default=utcnow, onupdate=utcnow, nullable=False)

    supplier_ref = relationship("Supplier", back_populates="inventory")

    __table_args__ = (
        # SKUs are unique per tenant
        UniqueConstraint("user_id", "sku", name="uq_inventory_user_sku"),
    )

    @property
    def is_low_stock(self) -> bool:
        return self.quantity <= self.reorder_level
