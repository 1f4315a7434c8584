# backend/routes/customers.py
from typing import List

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from crud.partners import customers
from database import get_db
from models.users import User
from schemas.common import ApiResponse, ok, ok_list
from schemas.partner import CustomerCreate, CustomerOut, CustomerUpdate, DeleteOutcome, StatusPatch
from utils.tokenJWT import get_current_user

router = APIRouter(prefix="/api/customers", tags=["Customers"])


@router.get("", response_model=ApiResponse[List[CustomerOut]])
def list_customers(db: Session = Depends(get_db), current_user: User = Depends(get_current_user)):
    return ok_list(customers.list(db, current_user.id))


@router.get("/active", response_model=ApiResponse[List[CustomerOut]])
def list_active_customers(db: Session = Depends(get_db), current_user: User = Depends(get_current_user)):
    return ok_list(customers.list(db, current_user.id, active_only=True))


@router.get("/search/{term}", response_model=ApiResponse[List[CustomerOut]])
def search_customers(term: str, db: Session = Depends(get_db), current_user: User = Depends(get_current_user)):
    return ok_list(customers.search(db, term, current_user.id))


@router.get("/{customer_id}", response_model=ApiResponse[CustomerOut])
def get_customer(customer_id: str, db: Session = Depends(get_db), current_user: User = Depends(get_current_user)):
    return ok(customers.get(db, customer_id, current_user.id))


@router.post("", response_model=ApiResponse[CustomerOut], status_code=status.HTTP_201_CREATED)
def create_customer(
    payload: CustomerCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    return ok(customers.create(db, payload, current_user.id), message="Customer created successfully")


@router.put("/{customer_id}", response_model=ApiResponse[CustomerOut])
def update_customer(
    customer_id: str,
    payload: CustomerUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    customer = customers.update(db, customer_id, current_user.id, payload)
    return ok(customer, message="Customer updated successfully")


@router.patch("/{customer_id}/toggle-status", response_model=ApiResponse[CustomerOut])
def toggle_customer_status(customer_id: str, db: Session = Depends(get_db), current_user: User = Depends(get_current_user)):
    customer = customers.toggle_status(db, customer_id, current_user.id)
    state = "activated" if customer.is_active else "deactivated"
    return ok(customer, message=f"Customer {state} successfully")


@router.patch("/{customer_id}/status", response_model=ApiResponse[CustomerOut])
def set_customer_status(
    customer_id: str,
    payload: StatusPatch,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    customer = customers.set_status(db, customer_id, current_user.id, payload.is_active)
    state = "activated" if customer.is_active else "deactivated"
    return ok(customer, message=f"Customer {state} successfully")


# Customers with sales orders on file are deactivated, not removed
@router.delete("/{customer_id}", response_model=ApiResponse[DeleteOutcome])
def delete_customer(customer_id: str, db: Session = Depends(get_db), current_user: User = Depends(get_current_user)):
    deleted, deactivated = customers.delete(db, customer_id, current_user.id)
    message = (
        "Customer deleted successfully" if deleted
        else "Customer has sales orders and was deactivated instead"
    )
    return ok(DeleteOutcome(id=customer_id, deleted=deleted, deactivated=deactivated), message=message)
