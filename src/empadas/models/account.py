"""Payable / receivable account items."""

from __future__ import annotations

from enum import Enum
from typing import Optional

from pydantic import field_validator
from sqlmodel import Field, SQLModel

from .common import check_iso_date, check_record_id


class AccountKind(str, Enum):
    PAYABLE = "PAYABLE"
    RECEIVABLE = "RECEIVABLE"


class AccountStatus(str, Enum):
    OPEN = "OPEN"
    PAID = "PAID"
    CANCELED = "CANCELED"


class AccountItemBase(SQLModel):
    kind: AccountKind
    due_date_iso: str
    amount: float = Field(ge=0)
    notes: Optional[str] = None

    @field_validator("due_date_iso")
    @classmethod
    def validate_due_date_iso(cls, value):
        return check_iso_date(value)


class AccountItem(AccountItemBase):
    """A scheduled obligation, independent of ledger transactions."""

    id: str = Field(min_length=1)
    status: AccountStatus

    @field_validator("id")
    @classmethod
    def validate_id(cls, value):
        return check_record_id(value)


class AccountItemCreate(AccountItemBase):
    status: Optional[AccountStatus] = None


class AccountItemUpdate(SQLModel):
    kind: Optional[AccountKind] = None
    due_date_iso: Optional[str] = None
    amount: Optional[float] = Field(default=None, ge=0)
    status: Optional[AccountStatus] = None
    notes: Optional[str] = None

    @field_validator("due_date_iso")
    @classmethod
    def validate_due_date_iso(cls, value):
        return check_iso_date(value)
