"""Helpers shared by the record store implementations."""

from __future__ import annotations

import json
from typing import Any, Mapping

from sqlmodel import SQLModel

from ...domain.repositories import RecordT

JSON_SUFFIX = ".json"
NO_QUOTA_MARKER = "Service Accounts do not have storage quota"


def build_record(model: type[RecordT], record_id: str, data: Mapping[str, Any] | SQLModel) -> RecordT:
    """Validate `data` as a complete `model` record whose id is `record_id`."""

    if isinstance(data, SQLModel):
        payload = data.model_dump(mode="json")
    else:
        payload = dict(data)
    payload["id"] = record_id
    return model.model_validate(payload)


def dump_record(record: SQLModel, *, indent: int | None = None) -> str:
    """Serialize a record to JSON text, omitting unset optional fields."""

    return json.dumps(record.model_dump(mode="json", exclude_none=True), ensure_ascii=False, indent=indent)


def file_name_for(record_id: str, prefix: str = "") -> str:
    return f"{prefix}{record_id}{JSON_SUFFIX}"


def is_record_file(name: str | None, prefix: str = "") -> bool:
    if not name or not name.endswith(JSON_SUFFIX):
        return False
    return name.startswith(prefix) if prefix else True


def error_message(exc: BaseException) -> str:
    """Best-effort human message from a storage exception (Drive HttpError or other)."""

    reason = getattr(exc, "reason", None)
    if isinstance(reason, str) and reason:
        return reason
    return str(exc)


def is_storage_quota_error(exc: BaseException) -> bool:
    """True when Drive rejected a write because the service account has no quota."""

    return NO_QUOTA_MARKER in error_message(exc) or NO_QUOTA_MARKER in str(exc)
