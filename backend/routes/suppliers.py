# backend/routes/suppliers.py
from typing import List

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from crud.partners import recent_purchase_orders, suppliers
from database import get_db
from models.users import User
from schemas.common import ApiResponse, ok, ok_list
from schemas.partner import (
    DeleteOutcome, PurchaseOrderBrief, StatusPatch, SupplierCreate, SupplierDetail, SupplierOut,
    SupplierUpdate,
)
from utils.tokenJWT import get_current_user

router = APIRouter(prefix="/api/suppliers", tags=["Suppliers"])


@router.get("", response_model=ApiResponse[List[SupplierOut]])
def list_suppliers(db: Session = Depends(get_db), current_user: User = Depends(get_current_user)):
    return ok_list(suppliers.list(db, current_user.id))


@router.get("/active", response_model=ApiResponse[List[SupplierOut]])
def list_active_suppliers(db: Session = Depends(get_db), current_user: User = Depends(get_current_user)):
    return ok_list(suppliers.list(db, current_user.id, active_only=True))


@router.get("/search/{term}", response_model=ApiResponse[List[SupplierOut]])
def search_suppliers(term: str, db: Session = Depends(get_db), current_user: User = Depends(get_current_user)):
    return ok_list(suppliers.search(db, term, current_user.id))


# Supplier card: stocked items plus the latest purchase orders
@router.get("/{supplier_id}", response_model=ApiResponse[SupplierDetail])
def get_supplier(supplier_id: str, db: Session = Depends(get_db), current_user: User = Depends(get_current_user)):
    supplier = suppliers.get(db, supplier_id, current_user.id)
    detail = SupplierDetail.model_validate(supplier)
    detail.recent_purchase_orders = [
        PurchaseOrderBrief.model_validate(po) for po in recent_purchase_orders(db, supplier)
    ]
    return ok(detail)


@router.post("", response_model=ApiResponse[SupplierOut], status_code=status.HTTP_201_CREATED)
def create_supplier(
    payload: SupplierCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    return ok(suppliers.create(db, payload, current_user.id), message="Supplier created successfully")


@router.put("/{supplier_id}", response_model=ApiResponse[SupplierOut])
def update_supplier(
    supplier_id: str,
    payload: SupplierUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    supplier = suppliers.update(db, supplier_id, current_user.id, payload)
    return ok(supplier, message="Supplier updated successfully")


@router.patch("/{supplier_id}/toggle-status", response_model=ApiResponse[SupplierOut])
def toggle_supplier_status(supplier_id: str, db: Session = Depends(get_db), current_user: User = Depends(get_current_user)):
    supplier = suppliers.toggle_status(db, supplier_id, current_user.id)
    state = "activated" if supplier.is_active else "deactivated"
    return ok(supplier, message=f"Supplier {state} successfully")


@router.patch("/{supplier_id}/status", response_model=ApiResponse[SupplierOut])
def set_supplier_status(
    supplier_id: str,
    payload: StatusPatch,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    supplier = suppliers.set_status(db, supplier_id, current_user.id, payload.is_active)
    state = "activated" if supplier.is_active else "deactivated"
    return ok(supplier, message=f"Supplier {state} successfully")


# Suppliers still linked to inventory or purchase orders are deactivated, not removed
@router.delete("/{supplier_id}", response_model=ApiResponse[DeleteOutcome])
def delete_supplier(supplier_id: str, db: Session = Depends(get_db), current_user: User = Depends(get_current_user)):
    deleted, deactivated = suppliers.delete(db, supplier_id, current_user.id)
    message = (
        "Supplier deleted successfully" if deleted
        else "Supplier is referenced by inventory or purchase orders and was deactivated instead"
    )
    return ok(DeleteOutcome(id=supplier_id, deleted=deleted, deactivated=deactivated), message=message)
