"""Finance category records."""

from __future__ import annotations

from enum import Enum
from typing import Optional

from pydantic import field_validator
from sqlmodel import Field, SQLModel

from .common import check_record_id


class CategoryKind(str, Enum):
    IN = "IN"
    OUT = "OUT"
    BOTH = "BOTH"


class CategoryBase(SQLModel):
    name: str = Field(min_length=1)
    kind: CategoryKind


class Category(CategoryBase):
    """Bucket used to classify transactions as income, expense or both."""

    id: str = Field(min_length=1)

    @field_validator("id")
    @classmethod
    def validate_id(cls, value):
        return check_record_id(value)


class CategoryCreate(CategoryBase):
    pass


class CategoryUpdate(SQLModel):
    name: Optional[str] = Field(default=None, min_length=1)
    kind: Optional[CategoryKind] = None
