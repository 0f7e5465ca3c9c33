"""RPC blueprint package: typed procedures under ``/api/trpc``."""

from __future__ import annotations

from flask import Blueprint

bp = Blueprint("rpc", __name__)

from . import procedures, routes  # noqa: E402,F401 - register procedures and routes

__all__ = ["bp"]
