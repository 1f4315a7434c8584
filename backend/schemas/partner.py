# backend/schemas/partner.py
from datetime import datetime
from typing import List, Optional

from pydantic import EmailStr, Field, StrictBool, model_validator

from models.purchase_order import PurchaseOrderStatus
from schemas.common import InputBase, Money, ORMBase
from schemas.inventory import InventoryBrief


# Contact fields shared by suppliers and customers
class PartnerBase(InputBase):
    name: str = Field(min_length=1)
    email: Optional[EmailStr] = None
    phone: Optional[str] = None
    address: Optional[str] = None
    city: Optional[str] = None
    state: Optional[str] = None
    zip_code: Optional[str] = None
    contact_person: Optional[str] = None
    notes: Optional[str] = None
    is_active: bool = True


class PartnerUpdateBase(InputBase):
    name: Optional[str] = Field(default=None, min_length=1)
    email: Optional[EmailStr] = None
    phone: Optional[str] = None
    address: Optional[str] = None
    city: Optional[str] = None
    state: Optional[str] = None
    zip_code: Optional[str] = None
    contact_person: Optional[str] = None
    notes: Optional[str] = None
    is_active: Optional[bool] = None

    @model_validator(mode="after")
    def _name_not_null(self):
        return self.reject_nulls("name", "is_active")


class SupplierCreate(PartnerBase):
    website: Optional[str] = None


class SupplierUpdate(PartnerUpdateBase):
    website: Optional[str] = None


class CustomerCreate(PartnerBase):
    company_type: Optional[str] = None


class CustomerUpdate(PartnerUpdateBase):
    company_type: Optional[str] = None


# Body of PATCH /{id}/status
class StatusPatch(InputBase):
    is_active: StrictBool


class PartnerOut(ORMBase):
    id: str
    name: str
    email: Optional[str] = None
    phone: Optional[str] = None
    address: Optional[str] = None
    city: Optional[str] = None
    state: Optional[str] = None
    zip_code: Optional[str] = None
    contact_person: Optional[str] = None
    notes: Optional[str] = None
    is_active: bool
    user_id: str
    created_at: datetime
    updated_at: datetime


class SupplierOut(PartnerOut):
    website: Optional[str] = None


class CustomerOut(PartnerOut):
    company_type: Optional[str] = None


# Minimal purchase-order row shown on the supplier detail page
class PurchaseOrderBrief(ORMBase):
    id: str
    po_number: str
    total_amount: Money
    status: PurchaseOrderStatus
    order_date: datetime


class SupplierDetail(SupplierOut):
    inventory: List[InventoryBrief] = []
    recent_purchase_orders: List[PurchaseOrderBrief] = []


# Outcome of DELETE: either removed or deactivated because something still references it
class DeleteOutcome(ORMBase):
    id: str
    deleted: bool
    deactivated: bool
