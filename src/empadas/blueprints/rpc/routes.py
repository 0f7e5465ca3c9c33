"""HTTP routes for the RPC endpoint."""

from __future__ import annotations

import json
from typing import Any

from flask import Response, g, jsonify, request

from ...config import BaseConfig
from ...errors import BadRequestError, MethodNotSupportedError, NotFoundError
from ...extensions import get_services
from ...logging_config import get_logger
from . import bp
from .registry import CallContext, registry

logger = get_logger(__name__)


def _read_input() -> Any:
    """Queries carry ``?input=<json>``; mutations carry a JSON body."""

    if request.method == "GET":
        raw = request.args.get("input")
        if not raw:
            return None
        try:
            return json.loads(raw)
        except json.JSONDecodeError as exc:
            raise BadRequestError("Parâmetro `input` não é um JSON válido.") from exc
    if not request.get_data():
        return None
    payload = request.get_json(silent=True)
    if payload is None:
        raise BadRequestError("Corpo da requisição não é um JSON válido.")
    return payload


def _apply_session_cookie(response: Response, ctx: CallContext, config: BaseConfig) -> None:
    options = {
        "path": "/",
        "httponly": True,
        "samesite": "Lax",
        "secure": not config.DEV_MODE,
    }
    if ctx.new_session_token:
        response.set_cookie(
            config.ADMIN_COOKIE_NAME,
            ctx.new_session_token,
            max_age=config.ADMIN_TOKEN_TTL_SECONDS,
            **options,
        )
    elif ctx.clear_session:
        response.delete_cookie(config.ADMIN_COOKIE_NAME, **options)


@bp.route("/api/trpc/<path:procedure>", methods=["GET", "POST"])
@bp.route("/trpc/<path:procedure>", methods=["GET", "POST"])
def call_procedure(procedure: str):
    entry = registry.get(procedure)
    if entry is None:
        raise NotFoundError(f"Procedimento não encontrado: {procedure}")
    if request.method != entry.http_method:
        raise MethodNotSupportedError(f"{procedure} exige {entry.http_method}.")

    services = get_services()
    ctx = CallContext(services=services, role=g.role)
    data = entry.invoke(ctx, _read_input())
    logger.debug("Procedure called", extra={"procedure": procedure, "role": ctx.role})

    response = jsonify({"result": {"data": data}})
    _apply_session_cookie(response, ctx, services.config)
    return response
