"""Shared field helpers for record models."""

from __future__ import annotations

import re
import secrets
from datetime import date
from typing import Optional

ID_BYTES = 16
RECORD_ID_PATTERN = r"^[A-Za-z0-9_-]+$"


def new_record_id() -> str:
    """Return a fresh URL-safe record id."""

    return secrets.token_urlsafe(ID_BYTES)


def check_record_id(value: str) -> str:
    """Record ids double as file names, so only URL-safe characters are allowed."""

    if not re.fullmatch(RECORD_ID_PATTERN, value):
        raise ValueError(f"invalid record id: {value!r}")
    return value


def check_iso_date(value: Optional[str]) -> Optional[str]:
    """Accept only zero-padded ``YYYY-MM-DD`` strings so range filters can compare text."""

    if value is None:
        return value
    value = value.strip()
    try:
        parsed = date.fromisoformat(value)
    except ValueError as exc:
        raise ValueError(f"invalid ISO date: {value!r}") from exc
    if parsed.isoformat() != value:
        raise ValueError(f"date must be YYYY-MM-DD: {value!r}")
    return value
