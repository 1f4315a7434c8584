# backend/schemas/inventory.py
from datetime import datetime
from typing import Optional

from pydantic import Field, model_validator

from schemas.common import InputBase, Money, ORMBase


# Shared base attributes for inventory entities
class InventoryBase(InputBase):
    product_name: str = Field(min_length=1)
    sku: str = Field(min_length=1)
    category: Optional[str] = "Other"
    quantity: int = Field(ge=0)
    unit_price: Money = Field(ge=0, decimal_places=2)
    reorder_level: int = Field(ge=0)
    supplier: Optional[str] = None
    supplier_id: Optional[str] = None


class InventoryCreate(InventoryBase):
    pass


# Schema for partial updates - all fields optional
class InventoryUpdate(InputBase):
    product_name: Optional[str] = Field(default=None, min_length=1)
    sku: Optional[str] = Field(default=None, min_length=1)
    category: Optional[str] = None
    quantity: Optional[int] = Field(default=None, ge=0)
    unit_price: Optional[Money] = Field(default=None, ge=0, decimal_places=2)
    reorder_level: Optional[int] = Field(default=None, ge=0)
    supplier: Optional[str] = None
    supplier_id: Optional[str] = None

    @model_validator(mode="after")
    def _required_columns_not_null(self):
        return self.reject_nulls("product_name", "sku", "quantity", "unit_price", "reorder_level")


# Signed stock correction
class StockAdjust(InputBase):
    delta: int
    reason: Optional[str] = None


class InventoryOut(ORMBase):
    id: str
    product_name: str
    sku: str
    category: str
    quantity: int
    unit_price: Money
    reorder_level: int
    is_low_stock: bool
    supplier: Optional[str] = None
    supplier_id: Optional[str] = None
    user_id: str
    created_at: datetime
    updated_at: datetime


# Compact product view embedded in order lines and supplier details
class InventoryBrief(ORMBase):
    id: str
    product_name: str
    sku: str
    quantity: int
    unit_price: Money
