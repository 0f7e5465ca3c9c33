"""Record store implementations: local directory, Drive folder, hybrid and guarded."""

from .base import NO_QUOTA_MARKER, is_storage_quota_error
from .drive import DriveRecordStore, ensure_folder, find_file_id, quote_query_value
from .guarded import GuardedRecordStore, storage_guard
from .hybrid import HybridRecordStore
from .local import LocalRecordStore

__all__ = [
    "DriveRecordStore",
    "GuardedRecordStore",
    "HybridRecordStore",
    "LocalRecordStore",
    "NO_QUOTA_MARKER",
    "ensure_folder",
    "find_file_id",
    "is_storage_quota_error",
    "quote_query_value",
    "storage_guard",
]
