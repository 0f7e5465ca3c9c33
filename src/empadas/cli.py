"""Flask CLI commands for Empadas."""

from __future__ import annotations

from pathlib import Path

import click


def init_app(app) -> None:
    """Register CLI commands on the Flask app."""

    @app.cli.command("empadas-drive-verify")
    def empadas_drive_verify() -> None:
        """Check that every Drive collection can be read and written."""

        from .extensions import get_services
        from .services.health import verify_drive

        services = get_services()
        try:
            verify_drive(services.config, storage=services.storage, echo=click.echo)
        except Exception as exc:
            raise click.ClickException(str(exc)) from exc

    @app.cli.command("empadas-export-csv")
    @click.option("--from", "date_from", default=None, help="First day (YYYY-MM-DD), inclusive")
    @click.option("--to", "date_to", default=None, help="Last day (YYYY-MM-DD), inclusive")
    @click.option(
        "--output",
        type=click.Path(dir_okay=False, path_type=Path),
        default=Path("transactions.csv"),
        show_default=True,
    )
    def empadas_export_csv(date_from: str | None, date_to: str | None, output: Path) -> None:
        """Write the finance transactions CSV to a file."""

        from .errors import AppError
        from .extensions import get_services
        from .services.export_csv import export_transactions_csv
        from .services.reports import DateRange

        services = get_services()
        date_range = DateRange(date_from=date_from, date_to=date_to)
        try:
            reports = services.reports
            rows = reports.transactions_in_range(date_range)
            names = {c.id: c.name for c in services.finance_stores.categories.list()}
        except AppError as exc:
            raise click.ClickException(exc.message) from exc
        path = export_transactions_csv(transactions=rows, category_names=names, output_path=output)
        click.echo(f"Export written: {path} ({len(rows)} row(s))")
