# backend/crud/inventory.py
import logging
from typing import List, Optional

from sqlalchemy.orm import Session

from crud.common import commit_or_raise, get_owned
from models.inventory import InventoryItem
from models.purchase_order import PurchaseOrderItem
from models.sales_order import SalesOrderItem
from models.supplier import Supplier
from schemas.inventory import InventoryCreate, InventoryUpdate
from utils.errors import DuplicateSku, InsufficientStock, InventoryInUse
from utils.money import to_money

logger = logging.getLogger(__name__)


def _sku_taken(db: Session, owner_id: str, sku: str, exclude_id: Optional[str] = None) -> bool:
    q = db.query(InventoryItem.id).filter(InventoryItem.user_id == owner_id, InventoryItem.sku == sku)
    if exclude_id:
        q = q.filter(InventoryItem.id != exclude_id)
    return q.first() is not None


def _check_supplier(db: Session, owner_id: str, supplier_id: Optional[str]):
    if supplier_id:
        get_owned(db, Supplier, supplier_id, owner_id, "Supplier")


def list_items(db: Session, owner_id: str) -> List[InventoryItem]:
    return (db.query(InventoryItem)
            .filter(InventoryItem.user_id == owner_id)
            .order_by(InventoryItem.created_at.desc())
            .all())


def get_item(db: Session, item_id: str, owner_id: str) -> InventoryItem:
    return get_owned(db, InventoryItem, item_id, owner_id, "Inventory item")


def create_item(db: Session, payload: InventoryCreate, owner_id: str) -> InventoryItem:
    if _sku_taken(db, owner_id, payload.sku):
        logger.info("Rejected duplicate SKU %s for user %s", payload.sku, owner_id)
        raise DuplicateSku()
    _check_supplier(db, owner_id, payload.supplier_id)

    data = payload.model_dump()
    data["unit_price"] = to_money(data["unit_price"])
    data["category"] = data.get("category") or "Other"
    item = InventoryItem(user_id=owner_id, **data)
    db.add(item)
    commit_or_raise(db, DuplicateSku())
    db.refresh(item)
    return item


def update_item(db: Session, item_id: str, owner_id: str, payload: InventoryUpdate) -> InventoryItem:
    item = get_item(db, item_id, owner_id)
    changes = payload.model_dump(exclude_unset=True)

    new_sku = changes.get("sku")
    if new_sku and new_sku != item.sku and _sku_taken(db, owner_id, new_sku, exclude_id=item.id):
        raise DuplicateSku()
    if "supplier_id" in changes:
        _check_supplier(db, owner_id, changes["supplier_id"])
    if "unit_price" in changes:
        changes["unit_price"] = to_money(changes["unit_price"])
    if "category" in changes and not changes["category"]:
        changes["category"] = "Other"

    for key, value in changes.items():
        setattr(item, key, value)

    commit_or_raise(db, DuplicateSku())
    db.refresh(item)
    return item


def delete_item(db: Session, item_id: str, owner_id: str):
    item = get_item(db, item_id, owner_id)

    # Historical order lines keep pointing at the product they were priced from
    referenced = (
        db.query(SalesOrderItem.id).filter(SalesOrderItem.inventory_id == item.id).first()
        or db.query(PurchaseOrderItem.id).filter(PurchaseOrderItem.inventory_id == item.id).first()
    )
    if referenced:
        raise InventoryInUse(
            "Inventory item is referenced by existing orders and cannot be deleted"
        )

    db.delete(item)
    db.commit()


def adjust_stock(db: Session, item_id: str, owner_id: str, delta: int) -> InventoryItem:
    query = db.query(InventoryItem).with_for_update()
    item = get_owned(db, InventoryItem, item_id, owner_id, "Inventory item", query=query)
    new_quantity = item.quantity + delta
    if new_quantity < 0:
        db.rollback()
        raise InsufficientStock(
            f"Insufficient stock for {item.sku}: {item.quantity} available, adjustment {delta}"
        )
    item.quantity = new_quantity
    db.commit()
    db.refresh(item)
    return item


def list_low_stock(db: Session, owner_id: str) -> List[InventoryItem]:
    return (db.query(InventoryItem)
            .filter(InventoryItem.user_id == owner_id,
                    InventoryItem.quantity <= InventoryItem.reorder_level)
            .order_by(InventoryItem.quantity.asc(), InventoryItem.product_name.asc())
            .all())


def list_by_category(db: Session, owner_id: str, category: str) -> List[InventoryItem]:
    return (db.query(InventoryItem)
            .filter(InventoryItem.user_id == owner_id, InventoryItem.category == category)
            .order_by(InventoryItem.created_at.desc())
            .all())
