# backend/crud/dashboard.py
from decimal import Decimal

from sqlalchemy import func
from sqlalchemy.orm import Session

from models.inventory import InventoryItem
from models.purchase_order import PurchaseOrder, PurchaseOrderStatus
from models.sales_order import SalesOrder, SalesOrderStatus
from utils.dates import utcnow
from utils.money import to_money


def _count_by_status(db: Session, model, status_enum, owner_id: str) -> dict:
    rows = (db.query(model.status, func.count(model.id))
            .filter(model.user_id == owner_id)
            .group_by(model.status)
            .all())
    counts = {s.value: 0 for s in status_enum}
    for status, count in rows:
        counts[status.value] = count
    return counts


def summary(db: Session, owner_id: str) -> dict:
    items = db.query(InventoryItem).filter(InventoryItem.user_id == owner_id)
    inventory_items = items.count()
    low_stock = items.filter(InventoryItem.quantity <= InventoryItem.reorder_level).count()

    value = (db.query(func.coalesce(func.sum(InventoryItem.quantity * InventoryItem.unit_price), 0))
             .filter(InventoryItem.user_id == owner_id)
             .scalar())

    revenue = (db.query(func.coalesce(func.sum(SalesOrder.total_amount), 0))
               .filter(SalesOrder.user_id == owner_id,
                       SalesOrder.status != SalesOrderStatus.CANCELLED)
               .scalar())

    overdue = (db.query(PurchaseOrder)
               .filter(PurchaseOrder.user_id == owner_id,
                       PurchaseOrder.expected_delivery < utcnow(),
                       PurchaseOrder.status != PurchaseOrderStatus.RECEIVED)
               .count())

    return {
        "inventory_items": inventory_items,
        "low_stock_items": low_stock,
        "inventory_value": to_money(Decimal(str(value))),
        "sales_orders_by_status": _count_by_status(db, SalesOrder, SalesOrderStatus, owner_id),
        "purchase_orders_by_status": _count_by_status(db, PurchaseOrder, PurchaseOrderStatus, owner_id),
        "overdue_purchase_orders": overdue,
        "sales_revenue": to_money(Decimal(str(revenue))),
    }
