"""Google Drive folder used as a one-file-per-record JSON store."""

from __future__ import annotations

import io
import json
from typing import Any, Generic, Mapping, Optional

from googleapiclient.http import MediaIoBaseUpload
from pydantic import ValidationError
from sqlmodel import SQLModel

from ...domain.repositories import RecordT
from ...logging_config import get_logger
from .base import build_record, dump_record, file_name_for, is_record_file

logger = get_logger(__name__)

FOLDER_MIME = "application/vnd.google-apps.folder"
JSON_MIME = "application/json"
LIST_PAGE_SIZE = 1000


def quote_query_value(value: str) -> str:
    """Escape a literal for use inside a Drive `q` expression."""

    return value.replace("\\", "\\\\").replace("'", "\\'")


def _json_media(text: str) -> MediaIoBaseUpload:
    return MediaIoBaseUpload(io.BytesIO(text.encode("utf-8")), mimetype=JSON_MIME, resumable=False)


def find_file_id(drive, folder_id: str, name: str, *, mime_type: str | None = None) -> Optional[str]:
    """Return the id of the first non-trashed child named `name`, if any."""

    clauses = [f"'{quote_query_value(folder_id)}' in parents"]
    if mime_type:
        clauses.append(f"mimeType='{mime_type}'")
    clauses.append(f"name='{quote_query_value(name)}'")
    clauses.append("trashed=false")
    response = (
        drive.files()
        .list(
            q=" and ".join(clauses),
            fields="files(id,name)",
            pageSize=1,
            supportsAllDrives=True,
            includeItemsFromAllDrives=True,
        )
        .execute()
    )
    files = response.get("files") or []
    return files[0].get("id") if files else None


def ensure_folder(drive, parent_id: str, name: str) -> str:
    """Return the id of child folder `name`, creating it when missing."""

    existing = find_file_id(drive, parent_id, name, mime_type=FOLDER_MIME)
    if existing:
        return existing
    created = (
        drive.files()
        .create(
            body={"name": name, "parents": [parent_id], "mimeType": FOLDER_MIME},
            fields="id",
            supportsAllDrives=True,
        )
        .execute()
    )
    folder_id = created.get("id")
    if not folder_id:
        raise RuntimeError(f"Failed to create Drive folder: {name}")
    logger.info("Created Drive folder", extra={"folder": name, "parent": parent_id})
    return folder_id


def download_text(drive, file_id: str) -> str:
    content = drive.files().get_media(fileId=file_id, supportsAllDrives=True).execute()
    if isinstance(content, bytes):
        return content.decode("utf-8")
    if isinstance(content, str):
        return content
    return json.dumps(content)


def list_children(drive, folder_id: str) -> list[dict[str, Any]]:
    """Exhaust every page of the folder listing."""

    files: list[dict[str, Any]] = []
    page_token: str | None = None
    while True:
        params: dict[str, Any] = {
            "q": f"'{quote_query_value(folder_id)}' in parents and trashed=false",
            "fields": "nextPageToken,files(id,name)",
            "pageSize": LIST_PAGE_SIZE,
            "supportsAllDrives": True,
            "includeItemsFromAllDrives": True,
        }
        if page_token:
            params["pageToken"] = page_token
        response = drive.files().list(**params).execute()
        files.extend(response.get("files") or [])
        page_token = response.get("nextPageToken")
        if not page_token:
            return files


class DriveRecordStore(Generic[RecordT]):
    """Records stored as ``<prefix><id>.json`` files inside one Drive folder."""

    def __init__(self, drive, folder_id: str, model: type[RecordT], *, file_prefix: str = "") -> None:
        self.drive = drive
        self.folder_id = folder_id
        self.model = model
        self.file_prefix = file_prefix
        self._file_ids: dict[str, str] = {}

    def _lookup(self, record_id: str) -> Optional[str]:
        cached = self._file_ids.get(record_id)
        if cached:
            return cached
        return find_file_id(self.drive, self.folder_id, file_name_for(record_id, self.file_prefix))

    def list(self) -> list[RecordT]:
        items: list[RecordT] = []
        for entry in list_children(self.drive, self.folder_id):
            file_id = entry.get("id")
            if not file_id or not is_record_file(entry.get("name"), self.file_prefix):
                continue
            try:
                record = self.model.model_validate(json.loads(download_text(self.drive, file_id)))
            except (ValueError, ValidationError):
                logger.debug("Skipping malformed Drive record", extra={"file_id": file_id})
                continue
            self._file_ids[record.id] = file_id
            items.append(record)
        return items

    def get(self, record_id: str) -> Optional[RecordT]:
        file_id = self._lookup(record_id)
        if not file_id:
            return None
        record = self.model.model_validate(json.loads(download_text(self.drive, file_id)))
        self._file_ids[record_id] = file_id
        return record

    def put(self, record_id: str, data: Mapping[str, Any] | SQLModel) -> RecordT:
        record = build_record(self.model, record_id, data)
        body = dump_record(record)
        file_id = self._lookup(record_id)
        if file_id:
            self.drive.files().update(
                fileId=file_id,
                media_body=_json_media(body),
                supportsAllDrives=True,
            ).execute()
            self._file_ids[record_id] = file_id
            return record

        created = (
            self.drive.files()
            .create(
                body={
                    "name": file_name_for(record_id, self.file_prefix),
                    "parents": [self.folder_id],
                    "mimeType": JSON_MIME,
                },
                media_body=_json_media(body),
                fields="id",
                supportsAllDrives=True,
            )
            .execute()
        )
        new_file_id = created.get("id")
        if new_file_id:
            self._file_ids[record_id] = new_file_id
        logger.debug("Created Drive record", extra={"record_id": record_id, "folder": self.folder_id})
        return record

    def delete(self, record_id: str) -> None:
        file_id = self._lookup(record_id)
        if not file_id:
            return
        self.drive.files().delete(fileId=file_id, supportsAllDrives=True).execute()
        self._file_ids.pop(record_id, None)
