# backend/routes/inventory.py
from typing import List

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from crud import inventory as crud
from database import get_db
from models.users import User
from schemas.common import ApiResponse, ok, ok_list
from schemas.inventory import InventoryCreate, InventoryOut, InventoryUpdate, StockAdjust
from utils.tokenJWT import get_current_user

router = APIRouter(prefix="/api/inventory", tags=["Inventory"])


@router.get("", response_model=ApiResponse[List[InventoryOut]])
def list_inventory(db: Session = Depends(get_db), current_user: User = Depends(get_current_user)):
    return ok_list(crud.list_items(db, current_user.id))


# Items at or below their reorder level, most urgent first
@router.get("/alerts/low-stock", response_model=ApiResponse[List[InventoryOut]])
def low_stock(db: Session = Depends(get_db), current_user: User = Depends(get_current_user)):
    return ok_list(crud.list_low_stock(db, current_user.id))


@router.get("/category/{category}", response_model=ApiResponse[List[InventoryOut]])
def by_category(category: str, db: Session = Depends(get_db), current_user: User = Depends(get_current_user)):
    return ok_list(crud.list_by_category(db, current_user.id, category))


@router.get("/{item_id}", response_model=ApiResponse[InventoryOut])
def get_inventory_item(item_id: str, db: Session = Depends(get_db), current_user: User = Depends(get_current_user)):
    return ok(crud.get_item(db, item_id, current_user.id))


@router.post("", response_model=ApiResponse[InventoryOut], status_code=status.HTTP_201_CREATED)
def create_inventory_item(
    payload: InventoryCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    item = crud.create_item(db, payload, current_user.id)
    return ok(item, message="Inventory item created successfully")


@router.put("/{item_id}", response_model=ApiResponse[InventoryOut])
def update_inventory_item(
    item_id: str,
    payload: InventoryUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    item = crud.update_item(db, item_id, current_user.id, payload)
    return ok(item, message="Inventory item updated successfully")


# Manual stock correction (delivery received, breakage, stocktake)
@router.post("/{item_id}/adjust", response_model=ApiResponse[InventoryOut])
def adjust_inventory_stock(
    item_id: str,
    payload: StockAdjust,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    item = crud.adjust_stock(db, item_id, current_user.id, payload.delta)
    return ok(item, message="Stock adjusted")


@router.delete("/{item_id}", response_model=ApiResponse[None])
def delete_inventory_item(item_id: str, db: Session = Depends(get_db), current_user: User = Depends(get_current_user)):
    crud.delete_item(db, item_id, current_user.id)
    return ok(message="Inventory item deleted successfully")
