"""Drive-first record store with an optional local fallback for development."""

from __future__ import annotations

from typing import Any, Generic, Mapping, Optional

from sqlmodel import SQLModel

from ...domain.repositories import RecordStore, RecordT
from ...logging_config import get_logger
from .base import is_storage_quota_error

logger = get_logger(__name__)


class HybridRecordStore(Generic[RecordT]):
    """Route calls to `primary` (Drive), falling back to `fallback` (local) in dev.

    With the fallback disabled every call is a pass-through to `primary`.
    With it enabled, reads merge both sides (local copies win) and writes that
    Drive refuses for lack of service-account quota land on the local side,
    after the local side has been seeded once from Drive.
    """

    def __init__(
        self,
        primary: RecordStore[RecordT],
        fallback: RecordStore[RecordT],
        *,
        dev_fallback_enabled: bool = False,
    ) -> None:
        self.primary = primary
        self.fallback = fallback
        self.dev_fallback_enabled = dev_fallback_enabled
        self._seeded_fallback = False

    def _seed_fallback(self) -> None:
        if self._seeded_fallback:
            return
        self._seeded_fallback = True
        try:
            for record in self.primary.list():
                self.fallback.put(record.id, record)
        except Exception:
            logger.warning("Could not seed local fallback from Drive", exc_info=True)

    def _can_fall_back(self, exc: BaseException) -> bool:
        return self.dev_fallback_enabled and is_storage_quota_error(exc)

    def list(self) -> list[RecordT]:
        if not self.dev_fallback_enabled:
            return self.primary.list()

        primary_items: list[RecordT] = []
        fallback_items: list[RecordT] = []
        primary_error: Exception | None = None
        try:
            primary_items = self.primary.list()
        except Exception as exc:
            primary_error = exc
            logger.warning("Drive listing failed; using local records", exc_info=True)
        try:
            fallback_items = self.fallback.list()
        except Exception:
            logger.warning("Local listing failed", exc_info=True)
            if primary_error is not None:
                raise primary_error

        by_id: dict[str, RecordT] = {record.id: record for record in primary_items}
        for record in fallback_items:
            by_id[record.id] = record
        return list(by_id.values())

    def get(self, record_id: str) -> Optional[RecordT]:
        if self.dev_fallback_enabled:
            try:
                local = self.fallback.get(record_id)
            except Exception:
                logger.warning("Local read failed", extra={"record_id": record_id}, exc_info=True)
            else:
                if local is not None:
                    return local

        try:
            return self.primary.get(record_id)
        except Exception as exc:
            if not self._can_fall_back(exc):
                raise
            return self.fallback.get(record_id)

    def put(self, record_id: str, data: Mapping[str, Any] | SQLModel) -> RecordT:
        try:
            record = self.primary.put(record_id, data)
        except Exception as exc:
            if not self._can_fall_back(exc):
                raise
            logger.warning("Drive has no quota; writing locally", extra={"record_id": record_id})
            self._seed_fallback()
            return self.fallback.put(record_id, data)

        if self.dev_fallback_enabled:
            self._drop_local_copy(record_id)
        return record

    def delete(self, record_id: str) -> None:
        try:
            self.primary.delete(record_id)
        except Exception as exc:
            if not self._can_fall_back(exc):
                raise
            self._seed_fallback()
            self.fallback.delete(record_id)
            return

        if self.dev_fallback_enabled:
            self._drop_local_copy(record_id)

    def _drop_local_copy(self, record_id: str) -> None:
        try:
            self.fallback.delete(record_id)
        except Exception:
            logger.warning("Could not remove local shadow copy", extra={"record_id": record_id}, exc_info=True)
