"""Repository protocol definitions for domain layer."""

from .record_store import RecordStore, RecordT

__all__ = ["RecordStore", "RecordT"]
