# backend/routes/sales_orders.py
from typing import List, Optional

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from crud.orders import sales_orders
from database import get_db
from models.users import User
from schemas.common import ApiResponse, ok, ok_list
from schemas.sales_order import SalesOrderCreate, SalesOrderOut, SalesOrderUpdate
from utils.dates import parse_iso
from utils.tokenJWT import get_current_user

router = APIRouter(prefix="/api/sales-orders", tags=["Sales Orders"])


# Optional startDate/endDate narrow the list to an inclusive order-date window
@router.get("", response_model=ApiResponse[List[SalesOrderOut]])
def list_sales_orders(
    start_date: Optional[str] = Query(None, alias="startDate"),
    end_date: Optional[str] = Query(None, alias="endDate"),
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    start = parse_iso(start_date, "startDate")
    end = parse_iso(end_date, "endDate", end_of_day=True)
    return ok_list(sales_orders.list(db, current_user.id, start, end))


@router.get("/date-range", response_model=ApiResponse[List[SalesOrderOut]])
def sales_orders_in_range(
    start_date: str = Query(..., alias="startDate"),
    end_date: str = Query(..., alias="endDate"),
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    start = parse_iso(start_date, "startDate")
    end = parse_iso(end_date, "endDate", end_of_day=True)
    return ok_list(sales_orders.list(db, current_user.id, start, end))


@router.get("/status/{order_status}", response_model=ApiResponse[List[SalesOrderOut]])
def sales_orders_by_status(
    order_status: str,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    return ok_list(sales_orders.list_by_status(db, current_user.id, order_status))


@router.get("/{order_id}", response_model=ApiResponse[SalesOrderOut])
def get_sales_order(order_id: str, db: Session = Depends(get_db), current_user: User = Depends(get_current_user)):
    return ok(sales_orders.get(db, order_id, current_user.id))


# Creating an order takes its quantities out of stock in the same transaction
@router.post("", response_model=ApiResponse[SalesOrderOut], status_code=status.HTTP_201_CREATED)
def create_sales_order(
    payload: SalesOrderCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    order = sales_orders.create(db, payload, current_user.id)
    return ok(order, message="Sales order created successfully")


@router.put("/{order_id}", response_model=ApiResponse[SalesOrderOut])
def update_sales_order(
    order_id: str,
    payload: SalesOrderUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    order = sales_orders.update(db, order_id, current_user.id, payload)
    return ok(order, message="Sales order updated successfully")


@router.delete("/{order_id}", response_model=ApiResponse[None])
def delete_sales_order(order_id: str, db: Session = Depends(get_db), current_user: User = Depends(get_current_user)):
    sales_orders.delete(db, order_id, current_user.id)
    return ok(message="Sales order deleted successfully")
