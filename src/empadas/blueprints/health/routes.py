"""Liveness and storage diagnostics."""

from __future__ import annotations

from flask import jsonify, request

from ...extensions import get_services
from ...services.health import health_report
from . import bp


@bp.get("/health")
@bp.get("/api/health")
def health():
    services = get_services()
    report = health_report(
        services.config,
        storage=services.storage,
        probe_drive=request.args.get("check") == "drive",
    )
    return jsonify(report)
