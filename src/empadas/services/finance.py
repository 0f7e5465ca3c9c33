"""Category, transaction and account-item services over record stores."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from ..domain.repositories import RecordStore
from ..errors import BadRequestError, NotFoundError
from ..logging_config import get_logger
from ..models import (
    AccountItem,
    AccountItemCreate,
    AccountItemUpdate,
    AccountStatus,
    Category,
    CategoryCreate,
    CategoryUpdate,
    PaymentMethod,
    Transaction,
    TransactionCreate,
    TransactionStatus,
    TransactionType,
    TransactionUpdate,
    new_record_id,
)
from ..validation import parse_model
from .reports import DateRange

logger = get_logger(__name__)

CATEGORY_IN_USE_MESSAGE = (
    "Não é possível excluir: existem lançamentos usando esta categoria. "
    "Reclassifique os lançamentos e tente novamente."
)


@dataclass(frozen=True)
class TransactionFilters:
    """Filters applied to transaction listings; unset fields match everything."""

    date_range: DateRange = DateRange()
    status: Optional[TransactionStatus] = None
    type: Optional[TransactionType] = None
    category_id: Optional[str] = None

    def matches(self, tx: Transaction) -> bool:
        if self.status is not None and tx.status != self.status:
            return False
        if self.type is not None and tx.type != self.type:
            return False
        if self.category_id and tx.category_id != self.category_id:
            return False
        return self.date_range.contains(tx.date_iso)


class CategoryService:
    """CRUD for categories; deletion is refused while transactions reference one."""

    def __init__(self, categories: RecordStore[Category], transactions: RecordStore[Transaction]):
        self.categories = categories
        self.transactions = transactions

    def list(self) -> list[Category]:
        return sorted(self.categories.list(), key=lambda c: c.name.casefold())

    def create(self, data: CategoryCreate) -> Category:
        category = parse_model(Category, {**data.model_dump(), "id": new_record_id()})
        stored = self.categories.put(category.id, category)
        logger.info("Category created", extra={"category_id": stored.id})
        return stored

    def update(self, category_id: str, changes: CategoryUpdate) -> Category:
        existing = self.categories.get(category_id)
        if existing is None:
            raise NotFoundError("Categoria não encontrada.")
        merged = {**existing.model_dump(), **changes.model_dump(exclude_unset=True), "id": category_id}
        updated = parse_model(Category, merged)
        return self.categories.put(category_id, updated)

    def delete(self, category_id: str) -> None:
        if any(tx.category_id == category_id for tx in self.transactions.list()):
            raise BadRequestError(CATEGORY_IN_USE_MESSAGE)
        self.categories.delete(category_id)
        logger.info("Category deleted", extra={"category_id": category_id})


class TransactionService:
    """Transactions with the PENDING -> CONFIRMED / CANCELED lifecycle."""

    def __init__(self, transactions: RecordStore[Transaction]):
        self.transactions = transactions

    def list(self, filters: TransactionFilters | None = None) -> list[Transaction]:
        filters = filters or TransactionFilters()
        items = [tx for tx in self.transactions.list() if filters.matches(tx)]
        return sorted(items, key=lambda tx: tx.date_iso, reverse=True)

    def _require(self, transaction_id: str) -> Transaction:
        existing = self.transactions.get(transaction_id)
        if existing is None:
            raise NotFoundError("Lançamento não encontrado.")
        return existing

    def create(self, data: TransactionCreate) -> Transaction:
        payload = data.model_dump()
        payload["id"] = new_record_id()
        payload["status"] = data.status or TransactionStatus.PENDING
        tx = parse_model(Transaction, payload)
        stored = self.transactions.put(tx.id, tx)
        logger.info(
            "Transaction created",
            extra={"transaction_id": stored.id, "type": stored.type.value, "status": stored.status.value},
        )
        return stored

    def update(self, transaction_id: str, changes: TransactionUpdate) -> Transaction:
        existing = self._require(transaction_id)
        merged = {**existing.model_dump(), **changes.model_dump(exclude_unset=True), "id": transaction_id}
        return self.transactions.put(transaction_id, parse_model(Transaction, merged))

    def _set_status(self, transaction_id: str, status: TransactionStatus, **fields) -> Transaction:
        existing = self._require(transaction_id)
        updated = existing.model_copy(update={"status": status, **fields})
        stored = self.transactions.put(transaction_id, updated)
        logger.info("Transaction status changed", extra={"transaction_id": transaction_id, "status": status.value})
        return stored

    def confirm(self, transaction_id: str, payment_method: Optional[PaymentMethod] = None) -> Transaction:
        fields = {"payment_method": payment_method} if payment_method is not None else {}
        return self._set_status(transaction_id, TransactionStatus.CONFIRMED, **fields)

    def cancel(self, transaction_id: str) -> Transaction:
        return self._set_status(transaction_id, TransactionStatus.CANCELED)

    def delete(self, transaction_id: str) -> None:
        self.transactions.delete(transaction_id)
        logger.info("Transaction deleted", extra={"transaction_id": transaction_id})


class AccountService:
    """Payable / receivable items; `pay` marks PAID regardless of the current status."""

    def __init__(self, accounts: RecordStore[AccountItem]):
        self.accounts = accounts

    def list(self) -> list[AccountItem]:
        return sorted(self.accounts.list(), key=lambda item: item.due_date_iso)

    def _require(self, account_id: str) -> AccountItem:
        existing = self.accounts.get(account_id)
        if existing is None:
            raise NotFoundError("Conta não encontrada.")
        return existing

    def create(self, data: AccountItemCreate) -> AccountItem:
        payload = data.model_dump()
        payload["id"] = new_record_id()
        payload["status"] = data.status or AccountStatus.OPEN
        item = parse_model(AccountItem, payload)
        stored = self.accounts.put(item.id, item)
        logger.info("Account item created", extra={"account_id": stored.id, "kind": stored.kind.value})
        return stored

    def update(self, account_id: str, changes: AccountItemUpdate) -> AccountItem:
        existing = self._require(account_id)
        merged = {**existing.model_dump(), **changes.model_dump(exclude_unset=True), "id": account_id}
        return self.accounts.put(account_id, parse_model(AccountItem, merged))

    def pay(self, account_id: str) -> AccountItem:
        existing = self._require(account_id)
        stored = self.accounts.put(account_id, existing.model_copy(update={"status": AccountStatus.PAID}))
        logger.info("Account item paid", extra={"account_id": account_id})
        return stored

    def delete(self, account_id: str) -> None:
        self.accounts.delete(account_id)
        logger.info("Account item deleted", extra={"account_id": account_id})
