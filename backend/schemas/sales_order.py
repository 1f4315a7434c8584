# backend/schemas/sales_order.py
from datetime import datetime
from decimal import Decimal
from typing import List, Optional

from pydantic import EmailStr, Field, model_validator

from models.sales_order import SalesOrderStatus
from schemas.common import InputBase, Money, ORMBase
from schemas.inventory import InventoryBrief


# One cart line; unitPrice defaults to the catalog price when omitted
class SalesOrderItemIn(InputBase):
    inventory_id: str = Field(min_length=1)
    quantity: int = Field(gt=0)
    unit_price: Optional[Money] = Field(default=None, ge=0, decimal_places=2)


class SalesOrderCreate(InputBase):
    order_number: str = Field(min_length=1)
    customer_id: Optional[str] = None
    customer_name: Optional[str] = None
    customer_email: Optional[EmailStr] = None
    # Only used when no items are supplied
    total_amount: Optional[Money] = Field(default=None, ge=0, decimal_places=2)
    tax_rate: Money = Field(default=Decimal("0"), ge=0, le=100, decimal_places=2)
    shipping_cost: Money = Field(default=Decimal("0"), ge=0, decimal_places=2)
    status: Optional[str] = None
    order_date: Optional[datetime] = None
    notes: Optional[str] = None
    items: List[SalesOrderItemIn] = []

    @model_validator(mode="after")
    def _customer_or_snapshot(self):
        if not self.customer_id and not self.customer_name:
            raise ValueError("customerName or customerId is required")
        return self


class SalesOrderUpdate(InputBase):
    order_number: Optional[str] = Field(default=None, min_length=1)
    customer_id: Optional[str] = None
    customer_name: Optional[str] = None
    customer_email: Optional[EmailStr] = None
    total_amount: Optional[Money] = Field(default=None, ge=0, decimal_places=2)
    tax_rate: Optional[Money] = Field(default=None, ge=0, le=100, decimal_places=2)
    shipping_cost: Optional[Money] = Field(default=None, ge=0, decimal_places=2)
    status: Optional[str] = None
    order_date: Optional[datetime] = None
    notes: Optional[str] = None
    # When present the whole item set is replaced
    items: Optional[List[SalesOrderItemIn]] = None

    @model_validator(mode="after")
    def _required_columns_not_null(self):
        return self.reject_nulls(
            "order_number", "customer_name", "tax_rate", "shipping_cost", "status", "order_date"
        )


class SalesOrderItemOut(ORMBase):
    id: str
    inventory_id: str
    quantity: int
    unit_price: Money
    total_price: Money
    inventory: Optional[InventoryBrief] = None


class CustomerBrief(ORMBase):
    id: str
    name: str
    email: Optional[str] = None
    is_active: bool


class SalesOrderOut(ORMBase):
    id: str
    order_number: str
    customer_id: Optional[str] = None
    customer_name: str
    customer_email: Optional[str] = None
    subtotal: Money
    tax_rate: Money
    tax_amount: Money
    shipping_cost: Money
    total_amount: Money
    status: SalesOrderStatus
    order_date: datetime
    notes: Optional[str] = None
    user_id: str
    created_at: datetime
    updated_at: datetime
    items: List[SalesOrderItemOut] = []
    customer: Optional[CustomerBrief] = None
