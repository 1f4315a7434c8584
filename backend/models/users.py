# backend/models/users.py
import uuid

from sqlalchemy import Column, DateTime, String

from database import Base
from utils.dates import utcnow


# Represents a registered account; every other record is owned by one of these
class User(Base):
    __tablename__ = "users"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    # Stored lower-cased, see crud/users.py
    email = Column(String, unique=True, nullable=False, index=True)
    password_hash = Column(String, nullable=False)
    name = Column(String, nullable=True)

    created_at = Column(DateTime, default=utcnow, nullable=False)
    updated_at = Column(DateTime, default=utcnow, onupdate=utcnow, nullable=False)
