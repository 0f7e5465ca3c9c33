"""Construct the record stores for the configured storage backend."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Generic

from ..config import BaseConfig
from ..domain.repositories import RecordStore, RecordT
from ..errors import missing_env_error
from ..logging_config import get_logger
from ..models import AccountItem, CatalogProductOverride, Category, Transaction
from .drive_client import build_drive_service
from .stores import DriveRecordStore, HybridRecordStore, LocalRecordStore, ensure_folder

logger = get_logger(__name__)

FOLDER_ENV = "GOOGLE_DRIVE_ADMIN_FOLDER_ID"


@dataclass(frozen=True)
class Collection(Generic[RecordT]):
    """A named record collection: Drive sub-folder, local sub-directory and file prefix."""

    name: str
    model: type[RecordT]

    @property
    def file_prefix(self) -> str:
        return f"{self.name}__"


CATEGORIES = Collection("finance_categories", Category)
TRANSACTIONS = Collection("finance_transactions", Transaction)
ACCOUNTS = Collection("finance_accounts", AccountItem)
CATALOG_PRODUCTS = Collection("catalog_products", CatalogProductOverride)
ALL_COLLECTIONS = (CATEGORIES, TRANSACTIONS, ACCOUNTS, CATALOG_PRODUCTS)


@dataclass(frozen=True)
class FinanceStores:
    categories: RecordStore[Category]
    transactions: RecordStore[Transaction]
    accounts: RecordStore[AccountItem]


class StorageFactory:
    """Build record stores for `config.STORAGE_BACKEND`.

    ``local`` keeps every collection under ``DATA_DIR/<collection>``.
    ``drive`` keeps each collection in a Drive sub-folder of
    ``GOOGLE_DRIVE_ADMIN_FOLDER_ID``; when sub-folders cannot be created the
    collections share the root folder using file-name prefixes. With
    ``DEV_FALLBACK`` the Drive stores are paired with local ones.
    """

    def __init__(self, config: BaseConfig, *, drive_factory: Callable[[BaseConfig], object] = build_drive_service):
        self.config = config
        self._drive_factory = drive_factory
        self._drive = None

    @property
    def uses_drive(self) -> bool:
        return self.config.STORAGE_BACKEND == "drive"

    def drive(self):
        if self._drive is None:
            self._drive = self._drive_factory(self.config)
        return self._drive

    def root_folder_id(self) -> str:
        missing = self.config.missing_env([FOLDER_ENV])
        if missing:
            raise missing_env_error(missing)
        return self.config.GOOGLE_DRIVE_ADMIN_FOLDER_ID

    def _local_store(self, collection: Collection[RecordT], *, prefixed: bool = False) -> LocalRecordStore[RecordT]:
        return LocalRecordStore(
            self.config.DATA_DIR / collection.name,
            collection.model,
            file_prefix=collection.file_prefix if prefixed else "",
        )

    def _resolve_folders(self, collections: tuple[Collection, ...]) -> tuple[dict[str, str], bool]:
        """Map collection name -> Drive folder id, and whether prefixes are needed."""

        drive = self.drive()
        root = self.root_folder_id()
        try:
            return {c.name: ensure_folder(drive, root, c.name) for c in collections}, False
        except Exception:
            logger.warning(
                "Could not create Drive sub-folders; using prefixed files in the root folder",
                exc_info=True,
            )
            return {c.name: root for c in collections}, True

    def _drive_backed(self, collection: Collection[RecordT], folder_id: str, prefixed: bool) -> RecordStore[RecordT]:
        drive_store = DriveRecordStore(
            self.drive(),
            folder_id,
            collection.model,
            file_prefix=collection.file_prefix if prefixed else "",
        )
        if not self.config.DEV_FALLBACK:
            return drive_store
        return HybridRecordStore(
            drive_store,
            self._local_store(collection, prefixed=prefixed),
            dev_fallback_enabled=True,
        )

    def stores_for(self, collections: tuple[Collection, ...]) -> dict[str, RecordStore]:
        if not self.uses_drive:
            return {c.name: self._local_store(c) for c in collections}
        folders, prefixed = self._resolve_folders(collections)
        return {c.name: self._drive_backed(c, folders[c.name], prefixed) for c in collections}

    def finance_stores(self) -> FinanceStores:
        stores = self.stores_for((CATEGORIES, TRANSACTIONS, ACCOUNTS))
        logger.info("Finance stores ready", extra={"backend": self.config.STORAGE_BACKEND})
        return FinanceStores(
            categories=stores[CATEGORIES.name],
            transactions=stores[TRANSACTIONS.name],
            accounts=stores[ACCOUNTS.name],
        )

    def catalog_store(self) -> RecordStore[CatalogProductOverride]:
        return self.stores_for((CATALOG_PRODUCTS,))[CATALOG_PRODUCTS.name]
