# backend/crud/partners.py
"""Supplier and customer directories.

Both directories behave the same way: names are unique per owner, records
can be switched on and off, and deleting a record that other rows still
point at deactivates it instead of removing it.
"""
import logging
from typing import List, Optional, Sequence, Tuple

from sqlalchemy import or_
from sqlalchemy.orm import Session

from crud.common import commit_or_raise, get_owned
from models.customer import Customer
from models.inventory import InventoryItem
from models.purchase_order import PurchaseOrder
from models.sales_order import SalesOrder
from models.supplier import Supplier
from utils.errors import DuplicateName

logger = logging.getLogger(__name__)

SEARCH_LIMIT = 10

# (model, foreign-key column name) pairs that keep a partner alive
ReferenceList = Sequence[Tuple[type, str]]


def _like_pattern(term: str) -> str:
    escaped = term.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")
    return f"%{escaped}%"


class PartnerDirectory:
    def __init__(self, model, label: str, references: ReferenceList):
        self.model = model
        self.label = label
        self.references = references

    def _name_taken(self, db: Session, owner_id: str, name: str, exclude_id: Optional[str] = None) -> bool:
        q = db.query(self.model.id).filter(self.model.user_id == owner_id, self.model.name == name)
        if exclude_id:
            q = q.filter(self.model.id != exclude_id)
        return q.first() is not None

    def _duplicate(self) -> DuplicateName:
        return DuplicateName(f"{self.label} with this name already exists")

    def list(self, db: Session, owner_id: str, active_only: bool = False) -> List:
        q = db.query(self.model).filter(self.model.user_id == owner_id)
        if active_only:
            q = q.filter(self.model.is_active.is_(True))
        return q.order_by(self.model.name.asc()).all()

    def get(self, db: Session, obj_id: str, owner_id: str):
        return get_owned(db, self.model, obj_id, owner_id, self.label)

    def create(self, db: Session, payload, owner_id: str):
        if self._name_taken(db, owner_id, payload.name):
            raise self._duplicate()
        obj = self.model(user_id=owner_id, **payload.model_dump())
        db.add(obj)
        commit_or_raise(db, self._duplicate())
        db.refresh(obj)
        logger.info("Created %s %s for user %s", self.label.lower(), obj.id, owner_id)
        return obj

    def update(self, db: Session, obj_id: str, owner_id: str, payload):
        obj = self.get(db, obj_id, owner_id)
        changes = payload.model_dump(exclude_unset=True)
        new_name = changes.get("name")
        if new_name and new_name != obj.name and self._name_taken(db, owner_id, new_name, exclude_id=obj.id):
            raise self._duplicate()
        for key, value in changes.items():
            setattr(obj, key, value)
        commit_or_raise(db, self._duplicate())
        db.refresh(obj)
        return obj

    def is_referenced(self, db: Session, obj_id: str) -> bool:
        for model, column in self.references:
            if db.query(model.id).filter(getattr(model, column) == obj_id).first() is not None:
                return True
        return False

    def delete(self, db: Session, obj_id: str, owner_id: str) -> Tuple[bool, bool]:
        """Remove the record, or deactivate it when still referenced. Returns (deleted, deactivated)."""
        obj = self.get(db, obj_id, owner_id)
        if self.is_referenced(db, obj.id):
            obj.is_active = False
            db.commit()
            logger.info("%s %s is referenced, deactivated instead of deleting", self.label, obj.id)
            return False, True
        db.delete(obj)
        db.commit()
        return True, False

    def toggle_status(self, db: Session, obj_id: str, owner_id: str):
        obj = self.get(db, obj_id, owner_id)
        obj.is_active = not obj.is_active
        db.commit()
        db.refresh(obj)
        return obj

    def set_status(self, db: Session, obj_id: str, owner_id: str, is_active: bool):
        obj = self.get(db, obj_id, owner_id)
        obj.is_active = is_active
        db.commit()
        db.refresh(obj)
        return obj

    def search(self, db: Session, term: str, owner_id: str) -> List:
        like = _like_pattern(term.strip())
        m = self.model
        return (db.query(m)
                .filter(m.user_id == owner_id,
                        or_(m.name.ilike(like, escape="\\"),
                            m.email.ilike(like, escape="\\"),
                            m.contact_person.ilike(like, escape="\\"),
                            m.phone.ilike(like, escape="\\")))
                .order_by(m.name.asc())
                .limit(SEARCH_LIMIT)
                .all())


suppliers = PartnerDirectory(
    Supplier, "Supplier",
    references=[(InventoryItem, "supplier_id"), (PurchaseOrder, "supplier_id")],
)

customers = PartnerDirectory(
    Customer, "Customer",
    references=[(SalesOrder, "customer_id")],
)


def recent_purchase_orders(db: Session, supplier: Supplier, limit: int = 5) -> List[PurchaseOrder]:
    return (db.query(PurchaseOrder)
            .filter(PurchaseOrder.supplier_id == supplier.id, PurchaseOrder.user_id == supplier.user_id)
            .order_by(PurchaseOrder.order_date.desc())
            .limit(limit)
            .all())
