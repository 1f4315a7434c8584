# backend/crud/users.py
import logging

from sqlalchemy import func
from sqlalchemy.orm import Session

from crud.common import commit_or_raise
from models.users import User
from schemas.user import UserCreate, UserLogin
from utils.errors import DuplicateEmail, InvalidCredentials
from utils.hashing import get_password_hash, verify_password
from utils.tokenJWT import create_access_token

logger = logging.getLogger(__name__)

# Verified against when the email is unknown
_DUMMY_HASH = get_password_hash("not-a-real-password")


def _normalize(email: str) -> str:
    return email.strip().lower()


def get_by_email(db: Session, email: str):
    return db.query(User).filter(func.lower(User.email) == _normalize(email)).first()


def register(db: Session, payload: UserCreate):
    """Create the account and return (user, token)."""
    email = _normalize(payload.email)
    if get_by_email(db, email):
        logger.info("Registration refused, email already in use")
        raise DuplicateEmail()

    user = User(email=email, password_hash=get_password_hash(payload.password), name=payload.name)
    db.add(user)
    commit_or_raise(db, DuplicateEmail())
    db.refresh(user)
    logger.info("Registered user %s", user.id)
    return user, create_access_token(user.id)


def login(db: Session, payload: UserLogin):
    user = get_by_email(db, payload.email)
    # Same answer and same bcrypt cost for unknown email and wrong password
    password_hash = user.password_hash if user is not None else _DUMMY_HASH
    if not verify_password(payload.password, password_hash) or user is None:
        logger.info("Failed login attempt")
        raise InvalidCredentials()
    return user, create_access_token(user.id)
