"""Local-directory record store used for development and as a Drive fallback."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Generic, Mapping, Optional

from pydantic import ValidationError
from sqlmodel import SQLModel

from ...domain.repositories import RecordT
from ...logging_config import get_logger
from .base import build_record, dump_record, file_name_for, is_record_file

logger = get_logger(__name__)


class LocalRecordStore(Generic[RecordT]):
    """One pretty-printed JSON file per record inside `directory`.

    `file_prefix` lets several collections share one directory
    (``finance_categories__<id>.json``).
    """

    def __init__(self, directory: Path | str, model: type[RecordT], *, file_prefix: str = "") -> None:
        self.directory = Path(directory)
        self.model = model
        self.file_prefix = file_prefix
        self._paths: dict[str, Path] = {}

    def _ensure_dir(self) -> None:
        self.directory.mkdir(parents=True, exist_ok=True)

    def _file_path(self, record_id: str) -> Path:
        path = (self.directory / file_name_for(record_id, self.file_prefix)).resolve()
        if path.parent != self.directory.resolve():
            raise ValueError(f"record id escapes the store directory: {record_id!r}")
        return path

    def _path_for(self, record_id: str) -> Path:
        return self._paths.get(record_id) or self._file_path(record_id)

    def list(self) -> list[RecordT]:
        self._ensure_dir()
        items: list[RecordT] = []
        for path in sorted(self.directory.iterdir()):
            if not path.is_file() or not is_record_file(path.name, self.file_prefix):
                continue
            raw = path.read_text(encoding="utf-8")
            if not raw.strip():
                continue
            try:
                record = self.model.model_validate(json.loads(raw))
            except (ValueError, ValidationError):
                logger.debug("Skipping malformed record file", extra={"path": str(path)})
                continue
            self._paths[record.id] = path
            items.append(record)
        return items

    def get(self, record_id: str) -> Optional[RecordT]:
        self._ensure_dir()
        path = self._path_for(record_id)
        try:
            raw = path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return None
        if not raw.strip():
            return None
        record = self.model.model_validate(json.loads(raw))
        self._paths[record_id] = path
        return record

    def put(self, record_id: str, data: Mapping[str, Any] | SQLModel) -> RecordT:
        self._ensure_dir()
        path = self._file_path(record_id)
        record = build_record(self.model, record_id, data)
        path.write_text(dump_record(record, indent=2), encoding="utf-8")
        self._paths[record_id] = path
        logger.debug("Wrote local record", extra={"path": str(path)})
        return record

    def delete(self, record_id: str) -> None:
        self._ensure_dir()
        path = self._path_for(record_id)
        path.unlink(missing_ok=True)
        self._paths.pop(record_id, None)
