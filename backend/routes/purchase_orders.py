# backend/routes/purchase_orders.py
from typing import List, Optional

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from crud.orders import purchase_orders
from database import get_db
from models.users import User
from schemas.common import ApiResponse, ok, ok_list
from schemas.purchase_order import PurchaseOrderCreate, PurchaseOrderOut, PurchaseOrderUpdate
from utils.dates import parse_iso
from utils.tokenJWT import get_current_user

router = APIRouter(prefix="/api/purchase-orders", tags=["Purchase Orders"])


@router.get("", response_model=ApiResponse[List[PurchaseOrderOut]])
def list_purchase_orders(
    start_date: Optional[str] = Query(None, alias="startDate"),
    end_date: Optional[str] = Query(None, alias="endDate"),
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    start = parse_iso(start_date, "startDate")
    end = parse_iso(end_date, "endDate", end_of_day=True)
    return ok_list(purchase_orders.list(db, current_user.id, start, end))


@router.get("/date-range", response_model=ApiResponse[List[PurchaseOrderOut]])
def purchase_orders_in_range(
    start_date: str = Query(..., alias="startDate"),
    end_date: str = Query(..., alias="endDate"),
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    start = parse_iso(start_date, "startDate")
    end = parse_iso(end_date, "endDate", end_of_day=True)
    return ok_list(purchase_orders.list(db, current_user.id, start, end))


# Past their expected delivery and still not received
@router.get("/alerts/overdue", response_model=ApiResponse[List[PurchaseOrderOut]])
def overdue_purchase_orders(db: Session = Depends(get_db), current_user: User = Depends(get_current_user)):
    return ok_list(purchase_orders.list_overdue(db, current_user.id))


@router.get("/status/{order_status}", response_model=ApiResponse[List[PurchaseOrderOut]])
def purchase_orders_by_status(
    order_status: str,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    return ok_list(purchase_orders.list_by_status(db, current_user.id, order_status))


@router.get("/{order_id}", response_model=ApiResponse[PurchaseOrderOut])
def get_purchase_order(order_id: str, db: Session = Depends(get_db), current_user: User = Depends(get_current_user)):
    return ok(purchase_orders.get(db, order_id, current_user.id))


@router.post("", response_model=ApiResponse[PurchaseOrderOut], status_code=status.HTTP_201_CREATED)
def create_purchase_order(
    payload: PurchaseOrderCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    order = purchase_orders.create(db, payload, current_user.id)
    return ok(order, message="Purchase order created successfully")


@router.put("/{order_id}", response_model=ApiResponse[PurchaseOrderOut])
def update_purchase_order(
    order_id: str,
    payload: PurchaseOrderUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    order = purchase_orders.update(db, order_id, current_user.id, payload)
    return ok(order, message="Purchase order updated successfully")


@router.delete("/{order_id}", response_model=ApiResponse[None])
def delete_purchase_order(order_id: str, db: Session = Depends(get_db), current_user: User = Depends(get_current_user)):
    purchase_orders.delete(db, order_id, current_user.id)
    return ok(message="Purchase order deleted successfully")
