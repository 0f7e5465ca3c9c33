"""Finance blueprint package: plain CSV download for browsers and automation."""

from __future__ import annotations

from flask import Blueprint

bp = Blueprint("finance", __name__)

from . import routes  # noqa: E402,F401 - register routes

__all__ = ["bp"]
