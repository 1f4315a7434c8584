# backend/crud/orders.py
"""Sales and purchase orders.

Both kinds share the same header/line shape and the same rules: order
numbers are unique per owner, totals are computed from the lines whenever
lines are supplied, lines are replaced wholesale on update, and the header
and its lines are always written in one transaction. Sales orders also
take the ordered quantities out of stock inside that same transaction.
"""
import logging
from collections import defaultdict
from datetime import datetime
from decimal import Decimal
from typing import Dict, List, Optional

from sqlalchemy.orm import Session, joinedload, selectinload

from crud.common import commit_or_raise, get_owned
from models.customer import Customer
from models.inventory import InventoryItem
from models.purchase_order import PurchaseOrder, PurchaseOrderItem, PurchaseOrderStatus
from models.sales_order import SalesOrder, SalesOrderItem, SalesOrderStatus
from models.supplier import Supplier
from utils.dates import to_naive_utc, utcnow
from utils.errors import (
    DuplicateOrderNumber, DuplicatePoNumber, InsufficientStock, InvalidStatus, ValidationFailed,
)
from utils.money import line_total, percent_of, sum_money, to_money

logger = logging.getLogger(__name__)

ZERO = Decimal("0.00")


class OrderBook:
    model = None
    item_model = None
    status_enum = None
    label = "Order"
    number_field = "order_number"
    duplicate_error = None
    partner_model = None
    partner_label = "Partner"
    partner_field = None
    partner_relation = None
    snapshot_name = None
    snapshot_email = None

    # ---- helpers ----
    def _query(self, db: Session):
        return db.query(self.model).options(
            selectinload(self.model.items).joinedload(self.item_model.inventory),
            joinedload(getattr(self.model, self.partner_relation)),
        )

    def parse_status(self, value: str):
        raw = (value or "").strip().upper()
        try:
            return self.status_enum(raw)
        except ValueError:
            allowed = ", ".join(s.value for s in self.status_enum)
            raise InvalidStatus(f"Invalid status '{value}'. Must be one of: {allowed}")

    def _number_taken(self, db: Session, owner_id: str, number: str, exclude_id: Optional[str] = None) -> bool:
        column = getattr(self.model, self.number_field)
        q = db.query(self.model.id).filter(self.model.user_id == owner_id, column == number)
        if exclude_id:
            q = q.filter(self.model.id != exclude_id)
        return q.first() is not None

    def _load_inventory(self, db: Session, owner_id: str, inventory_id: str) -> InventoryItem:
        query = db.query(InventoryItem).with_for_update()
        return get_owned(db, InventoryItem, inventory_id, owner_id, f"Inventory item {inventory_id}", query=query)

    def _attach_partner(self, db: Session, order, owner_id: str, partner_id: Optional[str], changes: dict):
        """Link the partner record and fill snapshot fields the caller left out."""
        setattr(order, self.partner_field, partner_id)
        if not partner_id:
            return
        partner = get_owned(db, self.partner_model, partner_id, owner_id, self.partner_label)
        if not changes.get(self.snapshot_name):
            setattr(order, self.snapshot_name, partner.name)
        if not changes.get(self.snapshot_email) and partner.email:
            setattr(order, self.snapshot_email, partner.email)

    # Hooks implemented per kind
    def _build_items(self, db: Session, owner_id: str, items_in) -> List:
        raise NotImplementedError

    def _release_items(self, db: Session, order):
        pass

    def _apply_totals(self, order, subtotal: Optional[Decimal], caller_total: Optional[Decimal]):
        raise NotImplementedError

    # ---- reads ----
    def list(self, db: Session, owner_id: str,
             start: Optional[datetime] = None, end: Optional[datetime] = None) -> List:
        q = self._query(db).filter(self.model.user_id == owner_id)
        if start is None and end is None:
            return q.order_by(self.model.created_at.desc()).all()
        if start is not None:
            q = q.filter(self.model.order_date >= start)
        if end is not None:
            q = q.filter(self.model.order_date <= end)
        return q.order_by(self.model.order_date.desc()).all()

    def list_by_status(self, db: Session, owner_id: str, status: str) -> List:
        parsed = self.parse_status(status)
        return (self._query(db)
                .filter(self.model.user_id == owner_id, self.model.status == parsed)
                .order_by(self.model.created_at.desc())
                .all())

    def get(self, db: Session, order_id: str, owner_id: str):
        return get_owned(db, self.model, order_id, owner_id, self.label, query=self._query(db))

    # ---- writes ----
    def create(self, db: Session, payload, owner_id: str):
        data = payload.model_dump()
        number = data[self.number_field]
        if self._number_taken(db, owner_id, number):
            logger.info("Rejected duplicate %s %s for user %s", self.number_field, number, owner_id)
            raise self.duplicate_error()

        items_in = data.pop("items") or []
        caller_total = data.pop("total_amount", None)
        status = data.pop("status", None)
        partner_id = data.pop(self.partner_field, None)
        for key in ("order_date", "expected_delivery"):
            if key in data:
                data[key] = to_naive_utc(data[key])
        if data.get("order_date") is None:
            data["order_date"] = utcnow()
        if not items_in and caller_total is None:
            raise ValidationFailed(
                "totalAmount is required when no items are supplied",
                details=[{"field": "totalAmount", "message": "required when items is empty"}],
            )

        order = self.model(
            user_id=owner_id,
            status=self.parse_status(status) if status else self.status_enum.PENDING,
            **{k: v for k, v in data.items() if k not in ("tax_rate", "shipping_cost")},
        )
        self._set_extra_fields(order, data)
        try:
            self._attach_partner(db, order, owner_id, partner_id, data)
            if not getattr(order, self.snapshot_name):
                raise ValidationFailed(
                    f"{self.partner_label} name is required",
                    details=[{"field": f"{self.partner_label.lower()}Name", "message": "required"}],
                )
            rows = self._build_items(db, owner_id, items_in)
        except Exception:
            db.rollback()
            raise
        order.items = rows
        self._apply_totals(order, sum_money(self._line_amount(r) for r in rows) if rows else None, caller_total)

        db.add(order)
        commit_or_raise(db, self.duplicate_error())
        logger.info("Created %s %s (%s) with %d item(s)", self.label.lower(), order.id, number, len(rows))
        return self.get(db, order.id, owner_id)

    def update(self, db: Session, order_id: str, owner_id: str, payload):
        order = self.get(db, order_id, owner_id)
        changes = payload.model_dump(exclude_unset=True)

        new_number = changes.pop(self.number_field, None)
        if new_number and new_number != getattr(order, self.number_field):
            if self._number_taken(db, owner_id, new_number, exclude_id=order.id):
                raise self.duplicate_error()
            setattr(order, self.number_field, new_number)

        if "status" in changes:
            order.status = self.parse_status(changes.pop("status"))

        items_in = changes.pop("items", None)
        caller_total = changes.pop("total_amount", None)
        if items_in == [] and caller_total is None:
            raise ValidationFailed(
                "totalAmount is required when all items are removed",
                details=[{"field": "totalAmount", "message": "required when items is empty"}],
            )
        try:
            if self.partner_field in changes:
                self._attach_partner(db, order, owner_id, changes.pop(self.partner_field), changes)
            for key in ("order_date", "expected_delivery"):
                if key in changes:
                    changes[key] = to_naive_utc(changes[key])
            self._set_extra_fields(order, changes)
            for key, value in changes.items():
                if key not in ("tax_rate", "shipping_cost"):
                    setattr(order, key, value)

            if items_in is not None:
                # Full replacement, never a merge
                self._release_items(db, order)
                order.items.clear()
                db.flush()
                order.items = self._build_items(db, owner_id, items_in)
        except Exception:
            db.rollback()
            raise

        if order.items:
            self._apply_totals(order, sum_money(self._line_amount(r) for r in order.items), None)
        else:
            self._apply_totals(order, None, caller_total)

        commit_or_raise(db, self.duplicate_error())
        db.expire_all()
        return self.get(db, order.id, owner_id)

    def delete(self, db: Session, order_id: str, owner_id: str):
        order = get_owned(db, self.model, order_id, owner_id, self.label)
        db.delete(order)
        db.commit()

    def _set_extra_fields(self, order, data: dict):
        pass

    def _line_amount(self, row) -> Decimal:
        raise NotImplementedError


class SalesOrderBook(OrderBook):
    model = SalesOrder
    item_model = SalesOrderItem
    status_enum = SalesOrderStatus
    label = "Sales order"
    number_field = "order_number"
    duplicate_error = DuplicateOrderNumber
    partner_model = Customer
    partner_label = "Customer"
    partner_field = "customer_id"
    partner_relation = "customer"
    snapshot_name = "customer_name"
    snapshot_email = "customer_email"

    def _set_extra_fields(self, order, data: dict):
        if data.get("tax_rate") is not None:
            order.tax_rate = to_money(data["tax_rate"])
        if data.get("shipping_cost") is not None:
            order.shipping_cost = to_money(data["shipping_cost"])

    def _line_amount(self, row) -> Decimal:
        return row.total_price

    def _build_items(self, db: Session, owner_id: str, items_in) -> List[SalesOrderItem]:
        rows: List[SalesOrderItem] = []
        requested: Dict[str, int] = defaultdict(int)
        stock: Dict[str, InventoryItem] = {}

        for position, line in enumerate(items_in):
            product = self._load_inventory(db, owner_id, line["inventory_id"])
            stock[product.id] = product
            requested[product.id] += line["quantity"]

            # Price is snapshotted so later catalog changes leave this order alone
            unit_price = line.get("unit_price")
            unit_price = to_money(unit_price if unit_price is not None else product.unit_price)
            rows.append(SalesOrderItem(
                inventory_id=product.id,
                position=position,
                quantity=line["quantity"],
                unit_price=unit_price,
                total_price=line_total(line["quantity"], unit_price),
            ))

        for inventory_id, qty in requested.items():
            product = stock[inventory_id]
            if product.quantity < qty:
                raise InsufficientStock(
                    f"Insufficient stock for {product.sku}: {product.quantity} available, {qty} requested"
                )
        for inventory_id, qty in requested.items():
            stock[inventory_id].quantity -= qty
        return rows

    def _release_items(self, db: Session, order):
        # Put the replaced lines back on the shelf before the new ones are taken out
        for row in order.items:
            product = self._load_inventory(db, order.user_id, row.inventory_id)
            product.quantity += row.quantity

    def _apply_totals(self, order, subtotal, caller_total):
        if subtotal is None:
            # No lines: the caller's amount is the goods value, else the stored one stays
            if caller_total is not None:
                subtotal = caller_total
            elif order.subtotal is not None:
                subtotal = order.subtotal
            else:
                subtotal = order.total_amount if order.total_amount is not None else ZERO
        tax_rate = to_money(order.tax_rate if order.tax_rate is not None else ZERO)
        shipping = to_money(order.shipping_cost if order.shipping_cost is not None else ZERO)
        tax_amount = percent_of(subtotal, tax_rate)
        order.subtotal = to_money(subtotal)
        order.tax_rate = tax_rate
        order.tax_amount = tax_amount
        order.shipping_cost = shipping
        order.total_amount = sum_money([subtotal, tax_amount, shipping])


class PurchaseOrderBook(OrderBook):
    model = PurchaseOrder
    item_model = PurchaseOrderItem
    status_enum = PurchaseOrderStatus
    label = "Purchase order"
    number_field = "po_number"
    duplicate_error = DuplicatePoNumber
    partner_model = Supplier
    partner_label = "Supplier"
    partner_field = "supplier_id"
    partner_relation = "supplier"
    snapshot_name = "supplier_name"
    snapshot_email = "supplier_email"

    def _line_amount(self, row) -> Decimal:
        return row.total_cost

    def _build_items(self, db: Session, owner_id: str, items_in) -> List[PurchaseOrderItem]:
        rows: List[PurchaseOrderItem] = []
        for position, line in enumerate(items_in):
            product = get_owned(db, InventoryItem, line["inventory_id"], owner_id,
                                f"Inventory item {line['inventory_id']}")
            cost = to_money(line["cost_per_unit"])
            rows.append(PurchaseOrderItem(
                inventory_id=product.id,
                position=position,
                quantity=line["quantity"],
                cost_per_unit=cost,
                total_cost=line_total(line["quantity"], cost),
            ))
        return rows

    def _apply_totals(self, order, subtotal, caller_total):
        if subtotal is None and caller_total is None:
            return
        order.total_amount = to_money(subtotal if subtotal is not None else caller_total)

    def list_overdue(self, db: Session, owner_id: str) -> List[PurchaseOrder]:
        return (self._query(db)
                .filter(PurchaseOrder.user_id == owner_id,
                        PurchaseOrder.expected_delivery < utcnow(),
                        PurchaseOrder.status != PurchaseOrderStatus.RECEIVED)
                .order_by(PurchaseOrder.expected_delivery.asc())
                .all())


sales_orders = SalesOrderBook()
purchase_orders = PurchaseOrderBook()
