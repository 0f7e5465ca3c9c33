"""Record store protocol."""

from __future__ import annotations

from typing import Any, Mapping, Optional, Protocol, TypeVar

from sqlmodel import SQLModel

RecordT = TypeVar("RecordT", bound=SQLModel)


class RecordStore(Protocol[RecordT]):
    """List/get/put/delete over a collection of records keyed by `id`.

    Implementations keep no transactions and no locks: concurrent `put`
    calls on the same id race and the last write wins.
    """

    def list(self) -> list[RecordT]:
        """Return every valid stored record, skipping malformed ones."""
        ...

    def get(self, record_id: str) -> Optional[RecordT]:
        """Return the record with `record_id`, or None when absent."""
        ...

    def put(self, record_id: str, data: Mapping[str, Any] | SQLModel) -> RecordT:
        """Validate `data` with `record_id` as the full record and upsert it."""
        ...

    def delete(self, record_id: str) -> None:
        """Remove the record; absent ids are ignored."""
        ...
