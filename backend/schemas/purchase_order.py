# backend/schemas/purchase_order.py
from datetime import datetime
from typing import List, Optional

from pydantic import EmailStr, Field, model_validator

from models.purchase_order import PurchaseOrderStatus
from schemas.common import InputBase, Money, ORMBase
from schemas.inventory import InventoryBrief


class PurchaseOrderItemIn(InputBase):
    inventory_id: str = Field(min_length=1)
    quantity: int = Field(gt=0)
    cost_per_unit: Money = Field(ge=0, decimal_places=2)


class PurchaseOrderCreate(InputBase):
    po_number: str = Field(min_length=1)
    supplier_id: Optional[str] = None
    supplier_name: Optional[str] = None
    supplier_email: Optional[EmailStr] = None
    total_amount: Optional[Money] = Field(default=None, ge=0, decimal_places=2)
    status: Optional[str] = None
    order_date: Optional[datetime] = None
    expected_delivery: datetime
    notes: Optional[str] = None
    items: List[PurchaseOrderItemIn] = []

    @model_validator(mode="after")
    def _supplier_or_snapshot(self):
        if not self.supplier_id and not self.supplier_name:
            raise ValueError("supplierName or supplierId is required")
        return self


class PurchaseOrderUpdate(InputBase):
    po_number: Optional[str] = Field(default=None, min_length=1)
    supplier_id: Optional[str] = None
    supplier_name: Optional[str] = None
    supplier_email: Optional[EmailStr] = None
    total_amount: Optional[Money] = Field(default=None, ge=0, decimal_places=2)
    status: Optional[str] = None
    order_date: Optional[datetime] = None
    expected_delivery: Optional[datetime] = None
    notes: Optional[str] = None
    items: Optional[List[PurchaseOrderItemIn]] = None

    @model_validator(mode="after")
    def _required_columns_not_null(self):
        return self.reject_nulls(
            "po_number", "supplier_name", "status", "order_date", "expected_delivery"
        )


class PurchaseOrderItemOut(ORMBase):
    id: str
    inventory_id: str
    quantity: int
    cost_per_unit: Money
    total_cost: Money
    inventory: Optional[InventoryBrief] = None


class SupplierBrief(ORMBase):
    id: str
    name: str
    email: Optional[str] = None
    phone: Optional[str] = None
    contact_person: Optional[str] = None
    is_active: bool


class PurchaseOrderOut(ORMBase):
    id: str
    po_number: str
    supplier_id: Optional[str] = None
    supplier_name: str
    supplier_email: Optional[str] = None
    total_amount: Money
    status: PurchaseOrderStatus
    order_date: datetime
    expected_delivery: datetime
    notes: Optional[str] = None
    user_id: str
    created_at: datetime
    updated_at: datetime
    items: List[PurchaseOrderItemOut] = []
    supplier: Optional[SupplierBrief] = None
