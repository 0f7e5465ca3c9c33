"""Input models for RPC procedures."""

from __future__ import annotations

from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from ...constants.products import DEFAULT_ORDER_QUANTITY, MAX_ORDER_QUANTITY, MIN_ORDER_QUANTITY
from ...models import (
    AccountItemUpdate,
    CategoryUpdate,
    PaymentMethod,
    ProductAvailability,
    TransactionStatus,
    TransactionType,
    TransactionUpdate,
)
from ...models.common import RECORD_ID_PATTERN, check_iso_date
from ...services.checkout import CheckoutPayment, DeliveryMethod
from ...services.reports import DateRange


class LoginInput(BaseModel):
    username: str = Field(min_length=1)
    password: str = Field(min_length=1)


class IdInput(BaseModel):
    id: str = Field(min_length=1, pattern=RECORD_ID_PATTERN)


class DateRangeInput(BaseModel):
    """``{"from": "YYYY-MM-DD", "to": "YYYY-MM-DD"}``; blanks mean unbounded."""

    model_config = ConfigDict(populate_by_name=True)

    date_from: Optional[str] = Field(default=None, alias="from")
    date_to: Optional[str] = Field(default=None, alias="to")

    @field_validator("date_from", "date_to", mode="before")
    @classmethod
    def validate_bound(cls, value):
        if not isinstance(value, str):
            return value
        if not value.strip():
            return None
        return check_iso_date(value)

    def to_range(self) -> DateRange:
        return DateRange(date_from=self.date_from, date_to=self.date_to)


class TransactionListInput(DateRangeInput):
    status: Optional[TransactionStatus] = None
    type: Optional[TransactionType] = None
    category_id: Optional[str] = None


class CategoryUpdateInput(IdInput):
    data: CategoryUpdate


class TransactionUpdateInput(IdInput):
    data: TransactionUpdate


class TransactionConfirmInput(IdInput):
    payment_method: Optional[PaymentMethod] = None


class AccountUpdateInput(IdInput):
    data: AccountItemUpdate


class ProductUpdateInput(IdInput):
    price: Optional[float] = Field(default=None, ge=0)
    availability: Optional[ProductAvailability] = None


class CheckoutInput(BaseModel):
    items: list[dict[str, Any]] = Field(default_factory=list)
    customer_name: str = ""
    customer_phone: str = ""
    delivery_method: DeliveryMethod = DeliveryMethod.DELIVERY
    payment_method: CheckoutPayment = CheckoutPayment.PIX
    customer_address: str = ""
    delivery_date: Optional[str] = None
    notes: Optional[str] = None


class OnDemandInput(BaseModel):
    product_id: str = Field(min_length=1)
    quantity: int = Field(default=DEFAULT_ORDER_QUANTITY, ge=MIN_ORDER_QUANTITY, le=MAX_ORDER_QUANTITY)
