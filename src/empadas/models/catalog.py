"""Storefront products and admin overrides."""

from __future__ import annotations

from enum import Enum
from typing import Optional

from pydantic import field_validator
from sqlmodel import Field, SQLModel

from .common import check_record_id


class ProductAvailability(str, Enum):
    AVAILABLE = "available"
    ON_DEMAND = "on_demand"
    UNAVAILABLE = "unavailable"


class Product(SQLModel):
    """A catalog entry as shown on the storefront."""

    id: str
    name: str
    description: str
    price: float = Field(ge=0)
    image: str
    category: str
    availability: ProductAvailability = ProductAvailability.AVAILABLE


class CatalogProductOverride(SQLModel):
    """Sparse admin override keyed by product id; absent fields fall back to defaults."""

    id: str = Field(min_length=1)
    price: Optional[float] = Field(default=None, ge=0)
    availability: Optional[ProductAvailability] = None

    @field_validator("id")
    @classmethod
    def validate_id(cls, value):
        return check_record_id(value)


class ProductOverrideUpdate(SQLModel):
    price: Optional[float] = Field(default=None, ge=0)
    availability: Optional[ProductAvailability] = None
