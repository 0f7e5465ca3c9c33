"""Routes for the finance CSV export."""

from __future__ import annotations

from datetime import date

from flask import Response, g, request

from ...extensions import get_services
from ...services.auth import ADMIN_ROLE
from ...services.reports import DateRange
from ...validation import parse_model
from ..rpc.inputs import DateRangeInput
from . import bp

CSV_MIMETYPE = "text/csv; charset=utf-8"


@bp.get("/api/finance/transactions/export.csv")
@bp.get("/finance/transactions/export.csv")
def export_transactions_csv():
    """Download transactions in ``[from, to]`` as CSV; admin cookie required."""

    if g.role != ADMIN_ROLE:
        return Response("Unauthorized", status=401, mimetype="text/plain")

    bounds = parse_model(
        DateRangeInput,
        {"from": request.args.get("from"), "to": request.args.get("to")},
    )
    date_range: DateRange = bounds.to_range()
    csv_text = get_services().reports.export_csv(date_range)
    filename = f"lancamentos-{date.today().isoformat()}.csv"
    response = Response(csv_text, status=200, content_type=CSV_MIMETYPE)
    response.headers["Content-Disposition"] = f'attachment; filename="{filename}"'
    return response
