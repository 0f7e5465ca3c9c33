"""Service container wiring for the Flask application."""

from __future__ import annotations

from functools import cached_property
from typing import Iterable, Mapping

from flask import Flask, current_app, g, request

from .config import BaseConfig
from .constants.products import PRODUCTS
from .domain.repositories import RecordStore
from .infra.drive_client import service_account_email
from .infra.storage import FinanceStores, StorageFactory
from .infra.stores import GuardedRecordStore, storage_guard
from .models import CatalogProductOverride
from .services import (
    AccountService,
    AdminAuth,
    CatalogService,
    CategoryService,
    ReportService,
    TransactionService,
)

EXTENSION_KEY = "empadas"
FINANCE_SCOPE = "financeiro"
CATALOG_SCOPE = "catálogo"


class Services:
    """Per-application service instances.

    Stores are built on first use so a missing Drive variable fails the
    operation that needs storage instead of application start-up. A failed
    build is retried on the next access.
    """

    def __init__(
        self,
        config: BaseConfig,
        *,
        storage: StorageFactory | None = None,
        products: Iterable[Mapping[str, object]] = PRODUCTS,
    ) -> None:
        self.config = config
        self.storage = storage or StorageFactory(config)
        self.products = list(products)
        self.auth = AdminAuth(config)

    @cached_property
    def account_email(self) -> str | None:
        return service_account_email(self.config) if self.storage.uses_drive else None

    def _guard(self, store: RecordStore, scope: str) -> GuardedRecordStore:
        return GuardedRecordStore(
            store,
            scope=scope,
            account_email=self.account_email,
            include_detail=self.config.DEV_MODE,
        )

    @cached_property
    def finance_stores(self) -> FinanceStores:
        with storage_guard(FINANCE_SCOPE, include_detail=self.config.DEV_MODE):
            stores = self.storage.finance_stores()
        return FinanceStores(
            categories=self._guard(stores.categories, FINANCE_SCOPE),
            transactions=self._guard(stores.transactions, FINANCE_SCOPE),
            accounts=self._guard(stores.accounts, FINANCE_SCOPE),
        )

    @cached_property
    def catalog_store(self) -> RecordStore[CatalogProductOverride]:
        with storage_guard(CATALOG_SCOPE, include_detail=self.config.DEV_MODE):
            store = self.storage.catalog_store()
        return self._guard(store, CATALOG_SCOPE)

    @property
    def categories(self) -> CategoryService:
        stores = self.finance_stores
        return CategoryService(stores.categories, stores.transactions)

    @property
    def transactions(self) -> TransactionService:
        return TransactionService(self.finance_stores.transactions)

    @property
    def accounts(self) -> AccountService:
        return AccountService(self.finance_stores.accounts)

    @property
    def reports(self) -> ReportService:
        stores = self.finance_stores
        return ReportService(stores.transactions, stores.categories)

    @cached_property
    def catalog(self) -> CatalogService:
        return CatalogService(lambda: self.catalog_store, self.products)


def init_services(app: Flask, services: Services | None = None) -> Services:
    """Attach the service container and resolve the caller's role on every request."""

    config: BaseConfig = app.config["EMPADAS_CONFIG"]
    container = services or Services(config)
    app.extensions[EXTENSION_KEY] = container

    @app.before_request
    def _resolve_role() -> None:
        token = request.cookies.get(config.ADMIN_COOKIE_NAME)
        g.role = container.auth.role_for_token(token)

    return container


def get_services() -> Services:
    """Return the service container of the current application."""

    return current_app.extensions[EXTENSION_KEY]
