"""Tests for category, transaction and account-item services."""

from __future__ import annotations

import pytest

from empadas.errors import BadRequestError, NotFoundError
from empadas.infra.stores import LocalRecordStore
from empadas.models import (
    AccountItem,
    AccountItemCreate,
    AccountItemUpdate,
    AccountStatus,
    Category,
    CategoryCreate,
    CategoryKind,
    CategoryUpdate,
    PaymentMethod,
    Transaction,
    TransactionCreate,
    TransactionSource,
    TransactionStatus,
    TransactionType,
    TransactionUpdate,
)
from empadas.services import AccountService, CategoryService, DateRange, TransactionFilters, TransactionService


@pytest.fixture()
def tx_store(tmp_path):
    return LocalRecordStore(tmp_path / "finance_transactions", Transaction)


@pytest.fixture()
def categories(tmp_path, tx_store) -> CategoryService:
    return CategoryService(LocalRecordStore(tmp_path / "finance_categories", Category), tx_store)


@pytest.fixture()
def transactions(tx_store) -> TransactionService:
    return TransactionService(tx_store)


@pytest.fixture()
def accounts(tmp_path) -> AccountService:
    return AccountService(LocalRecordStore(tmp_path / "finance_accounts", AccountItem))


def _tx(**overrides) -> TransactionCreate:
    data = {
        "type": "IN",
        "date_iso": "2024-03-10",
        "amount": 100,
        "category_id": "cat-vendas",
        "payment_method": "PIX",
        "description": "Venda balcão",
    }
    data.update(overrides)
    return TransactionCreate.model_validate(data)


# Categories


def test_category_crud(categories):
    created = categories.create(CategoryCreate(name="Vendas", kind=CategoryKind.IN))
    categories.create(CategoryCreate(name="aluguel", kind=CategoryKind.OUT))

    assert created.id
    assert [c.name for c in categories.list()] == ["aluguel", "Vendas"]

    renamed = categories.update(created.id, CategoryUpdate(name="Vendas loja"))
    assert renamed.name == "Vendas loja"
    assert renamed.kind == CategoryKind.IN

    categories.delete(created.id)
    assert [c.name for c in categories.list()] == ["aluguel"]


def test_category_update_missing_raises_not_found(categories):
    with pytest.raises(NotFoundError):
        categories.update("missing", CategoryUpdate(name="X"))


def test_category_in_use_cannot_be_deleted(categories, transactions):
    category = categories.create(CategoryCreate(name="Vendas", kind=CategoryKind.IN))
    transactions.create(_tx(category_id=category.id))

    with pytest.raises(BadRequestError) as excinfo:
        categories.delete(category.id)

    assert "lançamentos" in excinfo.value.message
    assert categories.list()[0].id == category.id


# Transactions


def test_create_defaults_to_pending_manual(transactions):
    tx = transactions.create(_tx())

    assert tx.status == TransactionStatus.PENDING
    assert tx.source == TransactionSource.MANUAL
    assert len(tx.id) >= 16


def test_create_keeps_explicit_status(transactions):
    tx = transactions.create(_tx(status="CONFIRMED"))

    assert tx.status == TransactionStatus.CONFIRMED


def test_create_rejects_negative_amount_and_bad_date():
    with pytest.raises(ValueError):
        _tx(amount=-1)
    with pytest.raises(ValueError):
        _tx(date_iso="2024-3-1")


def test_list_sorted_by_date_desc_and_filtered(transactions):
    transactions.create(_tx(date_iso="2024-01-05", description="jan"))
    transactions.create(_tx(date_iso="2024-03-01", description="mar", type="OUT"))
    transactions.create(_tx(date_iso="2024-02-10", description="fev", status="CONFIRMED"))

    assert [t.description for t in transactions.list()] == ["mar", "fev", "jan"]

    ranged = transactions.list(TransactionFilters(date_range=DateRange("2024-01-06", "2024-03-01")))
    assert [t.description for t in ranged] == ["mar", "fev"]

    outs = transactions.list(TransactionFilters(type=TransactionType.OUT))
    assert [t.description for t in outs] == ["mar"]

    confirmed = transactions.list(TransactionFilters(status=TransactionStatus.CONFIRMED))
    assert [t.description for t in confirmed] == ["fev"]


def test_update_merges_and_revalidates(transactions):
    tx = transactions.create(_tx())

    updated = transactions.update(tx.id, TransactionUpdate(amount=42.5))

    assert updated.amount == 42.5
    assert updated.description == "Venda balcão"
    assert updated.status == TransactionStatus.PENDING


def test_update_missing_raises_not_found(transactions):
    with pytest.raises(NotFoundError):
        transactions.update("missing", TransactionUpdate(amount=1))


def test_confirm_and_cancel(transactions):
    tx = transactions.create(_tx(payment_method="DINHEIRO"))

    confirmed = transactions.confirm(tx.id, PaymentMethod.CARTAO)
    assert confirmed.status == TransactionStatus.CONFIRMED
    assert confirmed.payment_method == PaymentMethod.CARTAO

    kept = transactions.confirm(tx.id)
    assert kept.payment_method == PaymentMethod.CARTAO

    canceled = transactions.cancel(tx.id)
    assert canceled.status == TransactionStatus.CANCELED

    with pytest.raises(NotFoundError):
        transactions.confirm("missing")
    with pytest.raises(NotFoundError):
        transactions.cancel("missing")


def test_delete_transaction(transactions):
    tx = transactions.create(_tx())

    transactions.delete(tx.id)
    transactions.delete(tx.id)

    assert transactions.list() == []


# Accounts


def test_accounts_sorted_by_due_date_and_default_open(accounts):
    later = accounts.create(AccountItemCreate(kind="PAYABLE", due_date_iso="2024-05-10", amount=300))
    sooner = accounts.create(AccountItemCreate(kind="RECEIVABLE", due_date_iso="2024-04-01", amount=80, notes="Encomenda"))

    assert later.status == AccountStatus.OPEN
    assert [a.id for a in accounts.list()] == [sooner.id, later.id]


def test_pay_is_unconditional(accounts):
    item = accounts.create(AccountItemCreate(kind="PAYABLE", due_date_iso="2024-05-10", amount=300, status="CANCELED"))

    paid = accounts.pay(item.id)
    again = accounts.pay(item.id)

    assert paid.status == AccountStatus.PAID
    assert again.status == AccountStatus.PAID


def test_account_update_and_delete(accounts):
    item = accounts.create(AccountItemCreate(kind="PAYABLE", due_date_iso="2024-05-10", amount=300))

    updated = accounts.update(item.id, AccountItemUpdate(amount=250, notes="Fornecedor"))
    assert updated.amount == 250
    assert updated.notes == "Fornecedor"

    accounts.delete(item.id)
    assert accounts.list() == []
    with pytest.raises(NotFoundError):
        accounts.pay(item.id)
