"""Finance transaction records."""

from __future__ import annotations

from enum import Enum
from typing import Optional

from pydantic import field_validator
from sqlmodel import Field, SQLModel

from .common import check_iso_date, check_record_id


class TransactionType(str, Enum):
    IN = "IN"
    OUT = "OUT"
    ADJUST = "ADJUST"


class TransactionStatus(str, Enum):
    PENDING = "PENDING"
    CONFIRMED = "CONFIRMED"
    CANCELED = "CANCELED"


class PaymentMethod(str, Enum):
    PIX = "PIX"
    DINHEIRO = "DINHEIRO"
    CARTAO = "CARTAO"


class TransactionSource(str, Enum):
    MANUAL = "manual"
    CHECKOUT = "checkout"


class TransactionBase(SQLModel):
    type: TransactionType
    date_iso: str = Field(description="Zero-padded YYYY-MM-DD")
    amount: float = Field(ge=0, description="Always non-negative; direction comes from `type`")
    category_id: str = Field(min_length=1)
    payment_method: PaymentMethod
    description: str = Field(min_length=1)
    source: TransactionSource = TransactionSource.MANUAL
    reference: Optional[str] = None

    @field_validator("date_iso")
    @classmethod
    def validate_date_iso(cls, value):
        return check_iso_date(value)


class Transaction(TransactionBase):
    """A dated financial movement with a lifecycle status."""

    id: str = Field(min_length=1)
    status: TransactionStatus

    @field_validator("id")
    @classmethod
    def validate_id(cls, value):
        return check_record_id(value)


class TransactionCreate(TransactionBase):
    status: Optional[TransactionStatus] = None


class TransactionUpdate(SQLModel):
    type: Optional[TransactionType] = None
    status: Optional[TransactionStatus] = None
    date_iso: Optional[str] = None
    amount: Optional[float] = Field(default=None, ge=0)
    category_id: Optional[str] = Field(default=None, min_length=1)
    payment_method: Optional[PaymentMethod] = None
    description: Optional[str] = Field(default=None, min_length=1)
    source: Optional[TransactionSource] = None
    reference: Optional[str] = None

    @field_validator("date_iso")
    @classmethod
    def validate_date_iso(cls, value):
        return check_iso_date(value)
