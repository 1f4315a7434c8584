from datetime import datetime
from typing import Optional

from pydantic import EmailStr, Field

from schemas.common import InputBase, ORMBase


# Schema for user registration requests
class UserCreate(InputBase):
    email: EmailStr
    password: str = Field(min_length=6)
    name: Optional[str] = Field(default=None, min_length=1)


# Schema for user authentication credentials
class UserLogin(InputBase):
    email: EmailStr
    password: str = Field(min_length=1)


# Output schema for user profile details; never carries the password hash
class UserResponse(ORMBase):
    id: str
    email: str
    name: Optional[str] = None
    created_at: datetime


# Payload returned by both register and login
class AuthResult(ORMBase):
    user: UserResponse
    token: str
