# backend/crud/common.py
import logging
from typing import Optional, Type, TypeVar

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from utils.errors import AppError, NotFound, is_unique_violation

logger = logging.getLogger(__name__)

M = TypeVar("M")


def get_owned(db: Session, model: Type[M], obj_id: str, owner_id: str, label: str, query=None) -> M:
    """Fetch a row by id that belongs to owner_id; anything else is reported as not found."""
    q = query if query is not None else db.query(model)
    obj = q.filter(model.id == obj_id, model.user_id == owner_id).first()
    if obj is None:
        raise NotFound(f"{label} not found")
    return obj


def commit_or_raise(db: Session, on_duplicate: Optional[AppError] = None):
    """Commit the unit of work; a unique-constraint race surfaces as the domain duplicate error."""
    try:
        db.commit()
    except IntegrityError as exc:
        db.rollback()
        if on_duplicate is not None and is_unique_violation(exc):
            logger.info("Unique constraint rejected write: %s", on_duplicate.message)
            raise on_duplicate
        raise
