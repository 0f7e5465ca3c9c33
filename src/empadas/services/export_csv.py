"""CSV export helpers for finance transactions."""

from __future__ import annotations

import csv
import io
from pathlib import Path
from typing import Iterable, Mapping

from ..models import Transaction

HEADERS = [
    "id",
    "type",
    "status",
    "date_iso",
    "amount",
    "category_id",
    "category_name",
    "payment_method",
    "description",
    "source",
    "reference",
]


def format_amount(value: float) -> str:
    """Render integral amounts without a trailing ``.0``."""

    if float(value).is_integer():
        return str(int(value))
    return repr(float(value))


def _row(tx: Transaction, category_names: Mapping[str, str]) -> list[str]:
    return [
        tx.id,
        tx.type.value,
        tx.status.value,
        tx.date_iso,
        format_amount(tx.amount),
        tx.category_id,
        category_names.get(tx.category_id, ""),
        tx.payment_method.value,
        tx.description,
        tx.source.value,
        tx.reference or "",
    ]


def render_transactions_csv(
    *, transactions: Iterable[Transaction], category_names: Mapping[str, str]
) -> str:
    """Return a bare comma header followed by fully quoted rows joined by ``\\n``.

    Embedded double quotes are doubled by the csv writer.
    """

    buffer = io.StringIO()
    writer = csv.writer(buffer, quoting=csv.QUOTE_ALL, lineterminator="\n")
    for tx in transactions:
        writer.writerow(_row(tx, category_names))
    body = buffer.getvalue()
    if body.endswith("\n"):
        body = body[:-1]
    return ",".join(HEADERS) + "\n" + body


def export_transactions_csv(
    *,
    transactions: Iterable[Transaction],
    category_names: Mapping[str, str],
    output_path: Path,
) -> Path:
    """Write the transaction CSV to `output_path` and return the path written."""

    output_path.parent.mkdir(parents=True, exist_ok=True)
    # Use newline='' so the embedded "\n" separators are written unchanged on Windows
    with output_path.open("w", newline="", encoding="utf-8") as fh:
        fh.write(render_transactions_csv(transactions=transactions, category_names=category_names))
    return output_path
