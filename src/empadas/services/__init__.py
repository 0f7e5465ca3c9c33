"""Domain services: finance bookkeeping, reporting, catalog, auth and checkout."""

from .auth import ADMIN_ROLE, ANON_ROLE, AdminAuth
from .catalog import CatalogService
from .finance import AccountService, CategoryService, TransactionFilters, TransactionService
from .reports import DateRange, ReportService, summarize

__all__ = [
    "ADMIN_ROLE",
    "ANON_ROLE",
    "AccountService",
    "AdminAuth",
    "CatalogService",
    "CategoryService",
    "DateRange",
    "ReportService",
    "TransactionFilters",
    "TransactionService",
    "summarize",
]
