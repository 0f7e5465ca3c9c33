"""Finance dashboard aggregation and CSV export."""

from __future__ import annotations

from collections import defaultdict
from dataclasses import dataclass, field
from typing import Iterable, Mapping, Optional

from ..constants.products import UNCATEGORIZED_LABEL
from ..domain.repositories import RecordStore
from ..models import Category, Transaction, TransactionStatus, TransactionType
from .export_csv import render_transactions_csv

TOP_CATEGORIES = 5


@dataclass(frozen=True)
class DateRange:
    """Inclusive ``[date_from, date_to]`` over zero-padded ``YYYY-MM-DD`` strings.

    Plain string comparison is enough because the format sorts lexicographically.
    """

    date_from: Optional[str] = None
    date_to: Optional[str] = None

    def contains(self, date_iso: str) -> bool:
        if self.date_from and date_iso < self.date_from:
            return False
        if self.date_to and date_iso > self.date_to:
            return False
        return True

    def to_dict(self) -> dict[str, str]:
        return {"from": self.date_from or "", "to": self.date_to or ""}


@dataclass(frozen=True)
class DashboardTotals:
    in_confirmed: float
    out_confirmed: float
    adjust_confirmed: float
    balance: float
    pending_count: int
    pending_amount: float


@dataclass(frozen=True)
class CategoryTotal:
    category_id: str
    category_name: str
    total: float


@dataclass(frozen=True)
class PaymentTotal:
    method: str
    total: float


@dataclass(frozen=True)
class DashboardSummary:
    range: DateRange
    totals: DashboardTotals
    by_category: list[CategoryTotal] = field(default_factory=list)
    by_payment: list[PaymentTotal] = field(default_factory=list)

    def to_dict(self) -> dict[str, object]:
        return {
            "range": self.range.to_dict(),
            "totals": {
                "in_confirmed": self.totals.in_confirmed,
                "out_confirmed": self.totals.out_confirmed,
                "adjust_confirmed": self.totals.adjust_confirmed,
                "balance": self.totals.balance,
                "pending_count": self.totals.pending_count,
                "pending_amount": self.totals.pending_amount,
            },
            "by_category": [
                {"category_id": c.category_id, "category_name": c.category_name, "total": c.total}
                for c in self.by_category
            ],
            "by_payment": [{"method": p.method, "total": p.total} for p in self.by_payment],
        }


def signed_amount(tx: Transaction) -> float:
    """OUT subtracts; IN and ADJUST add."""

    return -tx.amount if tx.type == TransactionType.OUT else tx.amount


def filter_by_range(transactions: Iterable[Transaction], date_range: DateRange) -> list[Transaction]:
    return [tx for tx in transactions if date_range.contains(tx.date_iso)]


def _sum_type(transactions: Iterable[Transaction], tx_type: TransactionType) -> float:
    return sum((tx.amount for tx in transactions if tx.type == tx_type), 0.0)


def summarize(
    transactions: Iterable[Transaction],
    category_names: Mapping[str, str],
    date_range: DateRange = DateRange(),
    *,
    top_categories: int = TOP_CATEGORIES,
) -> DashboardSummary:
    """Aggregate confirmed totals, pending figures and signed group-by sums.

    `pending_amount` adds every pending amount regardless of type (IN and OUT
    are not netted against each other).
    """

    in_range = filter_by_range(transactions, date_range)
    confirmed = [tx for tx in in_range if tx.status == TransactionStatus.CONFIRMED]
    pending = [tx for tx in in_range if tx.status == TransactionStatus.PENDING]

    in_confirmed = _sum_type(confirmed, TransactionType.IN)
    out_confirmed = _sum_type(confirmed, TransactionType.OUT)
    adjust_confirmed = _sum_type(confirmed, TransactionType.ADJUST)

    by_category_totals: dict[str, float] = defaultdict(float)
    # dicts keep insertion order, so payment methods come out in first-seen order
    by_payment_totals: dict[str, float] = defaultdict(float)
    for tx in confirmed:
        by_category_totals[tx.category_id] += signed_amount(tx)
        by_payment_totals[tx.payment_method.value] += signed_amount(tx)

    by_category = sorted(
        (
            CategoryTotal(
                category_id=category_id,
                category_name=category_names.get(category_id, UNCATEGORIZED_LABEL),
                total=total,
            )
            for category_id, total in by_category_totals.items()
        ),
        key=lambda item: abs(item.total),
        reverse=True,
    )[:top_categories]

    return DashboardSummary(
        range=date_range,
        totals=DashboardTotals(
            in_confirmed=in_confirmed,
            out_confirmed=out_confirmed,
            adjust_confirmed=adjust_confirmed,
            balance=in_confirmed - out_confirmed + adjust_confirmed,
            pending_count=len(pending),
            pending_amount=sum((tx.amount for tx in pending), 0.0),
        ),
        by_category=by_category,
        by_payment=[PaymentTotal(method=m, total=t) for m, t in by_payment_totals.items()],
    )


class ReportService:
    """Dashboard summary and CSV export over the transaction and category stores."""

    def __init__(self, transactions: RecordStore[Transaction], categories: RecordStore[Category]):
        self.transactions = transactions
        self.categories = categories

    def _category_names(self) -> dict[str, str]:
        return {c.id: c.name for c in self.categories.list()}

    def summary(self, date_range: DateRange = DateRange()) -> DashboardSummary:
        return summarize(self.transactions.list(), self._category_names(), date_range)

    def transactions_in_range(self, date_range: DateRange = DateRange()) -> list[Transaction]:
        return filter_by_range(self.transactions.list(), date_range)

    def export_csv(self, date_range: DateRange = DateRange()) -> str:
        rows = self.transactions_in_range(date_range)
        return render_transactions_csv(transactions=rows, category_names=self._category_names())
