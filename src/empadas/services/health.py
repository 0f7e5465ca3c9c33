"""Health diagnostics and the Drive read/write verification."""

from __future__ import annotations

from typing import Callable

from ..config import BaseConfig
from ..infra.drive_client import service_account_email
from ..infra.storage import ALL_COLLECTIONS, StorageFactory
from ..infra.stores.guarded import describe_storage_error
from ..logging_config import get_logger

logger = get_logger(__name__)

DRIVE_VERIFY_OK = "DRIVE_VERIFY_OK"


def check_drive(storage: StorageFactory) -> dict[str, object]:
    """List one entry of the root folder to prove credentials and sharing work."""

    try:
        root = storage.root_folder_id()
        response = (
            storage.drive()
            .files()
            .list(
                q=f"'{root}' in parents and trashed=false",
                fields="files(id,name)",
                pageSize=1,
                supportsAllDrives=True,
                includeItemsFromAllDrives=True,
            )
            .execute()
        )
    except Exception as exc:
        logger.warning("Drive health check failed", exc_info=True)
        return {"ok": False, "detail": getattr(exc, "message", None) or describe_storage_error(exc)}
    return {"ok": True, "detail": f"{len(response.get('files') or [])} item(s) visible"}


def health_report(config: BaseConfig, *, storage: StorageFactory | None = None, probe_drive: bool = False) -> dict[str, object]:
    """Liveness payload; env presence is only disclosed in dev mode."""

    report: dict[str, object] = {"ok": True}
    if config.DEV_MODE:
        report["env"] = config.env_presence()
        report["storage_backend"] = config.STORAGE_BACKEND
    if probe_drive:
        drive_status = check_drive(storage or StorageFactory(config))
        report["drive"] = drive_status
        report["ok"] = bool(drive_status["ok"])
    return report


def verify_drive(config: BaseConfig, *, storage: StorageFactory | None = None, echo: Callable[[str], None] = print) -> None:
    """Read every collection and write one record back, raising on the first failure."""

    storage = storage or StorageFactory(config)
    email = service_account_email(config)
    if email:
        echo(f"Service account: {email}")
    stores = storage.stores_for(ALL_COLLECTIONS)
    for collection in ALL_COLLECTIONS:
        store = stores[collection.name]
        records = store.list()
        if records:
            store.put(records[0].id, records[0])
        echo(f"{collection.name}: {len(records)} record(s) ok")
    echo(DRIVE_VERIFY_OK)
