# backend/schemas/common.py
from decimal import Decimal
from typing import Any, Generic, Optional, TypeVar

from pydantic import BaseModel, ConfigDict, PlainSerializer, model_serializer, model_validator
from pydantic.alias_generators import to_camel
from typing_extensions import Annotated

T = TypeVar("T")

# Money travels as a JSON number but is a Decimal everywhere inside the app
Money = Annotated[Decimal, PlainSerializer(float, return_type=float, when_used="json")]


# Base configuration for ORM compatibility; the wire format is camelCase
class ORMBase(BaseModel):
    model_config = ConfigDict(
        from_attributes=True,
        alias_generator=to_camel,
        populate_by_name=True,
    )


# Request bodies: trim strings and treat "" in optional fields as missing
class InputBase(ORMBase):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        str_strip_whitespace=True,
    )

    @model_validator(mode="before")
    @classmethod
    def _blank_to_none(cls, values: Any):
        if not isinstance(values, dict):
            return values
        cleaned = {}
        for key, value in values.items():
            if isinstance(value, str) and value.strip() == "":
                value = None
            cleaned[key] = value
        return cleaned

    def reject_nulls(self, *fields: str):
        """Fields that were explicitly sent must not be null on a partial update."""
        for name in fields:
            if name in self.model_fields_set and getattr(self, name) is None:
                raise ValueError(f"{to_camel(name)} cannot be empty")
        return self


# Uniform response envelope: {success, data?, message?, error?, total?}
class ApiResponse(BaseModel, Generic[T]):
    success: bool = True
    data: Optional[T] = None
    message: Optional[str] = None
    error: Optional[str] = None
    total: Optional[int] = None

    @model_serializer(mode="wrap")
    def _drop_unset_keys(self, handler):
        out = handler(self)
        return {k: v for k, v in out.items() if v is not None}


def ok(data: Any = None, message: Optional[str] = None, total: Optional[int] = None) -> dict:
    return {"success": True, "data": data, "message": message, "total": total}


def ok_list(items: list, message: Optional[str] = None) -> dict:
    return ok(items, message=message, total=len(items))
