"""Record model exports."""

from .account import (
    AccountItem,
    AccountItemCreate,
    AccountItemUpdate,
    AccountKind,
    AccountStatus,
)
from .catalog import CatalogProductOverride, Product, ProductAvailability, ProductOverrideUpdate
from .category import Category, CategoryCreate, CategoryKind, CategoryUpdate
from .common import new_record_id
from .transaction import (
    PaymentMethod,
    Transaction,
    TransactionCreate,
    TransactionSource,
    TransactionStatus,
    TransactionType,
    TransactionUpdate,
)

__all__ = [
    "AccountItem",
    "AccountItemCreate",
    "AccountItemUpdate",
    "AccountKind",
    "AccountStatus",
    "CatalogProductOverride",
    "Category",
    "CategoryCreate",
    "CategoryKind",
    "CategoryUpdate",
    "PaymentMethod",
    "Product",
    "ProductAvailability",
    "ProductOverrideUpdate",
    "Transaction",
    "TransactionCreate",
    "TransactionSource",
    "TransactionStatus",
    "TransactionType",
    "TransactionUpdate",
    "new_record_id",
]
