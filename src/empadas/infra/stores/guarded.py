"""Translate storage backend failures into application errors."""

from __future__ import annotations

from contextlib import contextmanager
from typing import Any, Generic, Iterator, Mapping, Optional

from sqlmodel import SQLModel

from ...domain.repositories import RecordStore, RecordT
from ...errors import AppError, InternalError, PreconditionFailedError
from ...logging_config import get_logger
from .base import error_message, is_storage_quota_error

logger = get_logger(__name__)

DETAIL_LIMIT = 240


def describe_storage_error(exc: BaseException) -> str:
    status = getattr(getattr(exc, "resp", None), "status", None) or getattr(exc, "status_code", None)
    pieces: list[str] = []
    if status:
        pieces.append(f"status {status}")
    message = error_message(exc)
    if message:
        pieces.append(message[:DETAIL_LIMIT])
    return " - ".join(pieces) if pieces else "erro desconhecido"


def no_quota_help(scope: str, account_email: str | None = None) -> str:
    account_line = f" Service account: {account_email}." if account_email else ""
    return (
        f"Não foi possível gravar no Google Drive ({scope})."
        f"{account_line}"
        " Isso acontece quando a pasta está em um Drive pessoal (Meu Drive) e a autenticação"
        " é via Service Account (sem quota)."
        " Solução recomendada: use um Shared Drive (Google Workspace), adicione a service account"
        " como membro (Content manager/Editor), crie uma pasta lá e atualize"
        " GOOGLE_DRIVE_ADMIN_FOLDER_ID para a nova pasta."
    )


def storage_config_help(scope: str, exc: BaseException | None = None, *, include_detail: bool = True) -> str:
    detail = f" Detalhe: {describe_storage_error(exc)}." if include_detail and exc is not None else ""
    return (
        f"Falha ao acessar o Google Drive ({scope}). "
        "Verifique se as env vars GOOGLE_SERVICE_ACCOUNT_JSON_BASE64 e GOOGLE_DRIVE_ADMIN_FOLDER_ID "
        "estão configuradas e se a service account tem permissão de Editor na pasta do Drive."
        f"{detail}"
    )


@contextmanager
def storage_guard(
    scope: str,
    *,
    account_email: str | None = None,
    include_detail: bool = True,
) -> Iterator[None]:
    """Re-raise backend exceptions as `PreconditionFailedError` or `InternalError`."""

    try:
        yield
    except AppError:
        raise
    except Exception as exc:
        if is_storage_quota_error(exc):
            logger.warning("Storage quota error", extra={"scope": scope})
            raise PreconditionFailedError(no_quota_help(scope, account_email)) from exc
        logger.warning("Storage failure", extra={"scope": scope}, exc_info=True)
        raise InternalError(storage_config_help(scope, exc, include_detail=include_detail)) from exc


class GuardedRecordStore(Generic[RecordT]):
    """Wrap a record store so every call goes through `storage_guard`."""

    def __init__(
        self,
        store: RecordStore[RecordT],
        *,
        scope: str,
        account_email: str | None = None,
        include_detail: bool = True,
    ) -> None:
        self.store = store
        self.scope = scope
        self.account_email = account_email
        self.include_detail = include_detail

    def _guard(self):
        return storage_guard(self.scope, account_email=self.account_email, include_detail=self.include_detail)

    def list(self) -> list[RecordT]:
        with self._guard():
            return self.store.list()

    def get(self, record_id: str) -> Optional[RecordT]:
        with self._guard():
            return self.store.get(record_id)

    def put(self, record_id: str, data: Mapping[str, Any] | SQLModel) -> RecordT:
        with self._guard():
            return self.store.put(record_id, data)

    def delete(self, record_id: str) -> None:
        with self._guard():
            self.store.delete(record_id)
