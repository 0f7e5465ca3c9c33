"""Pytest configuration and shared fixtures for Empadas tests.

This module provides an isolated environment (temporary data directory and
admin credentials), an application/client pair on local storage, and an
in-memory stand-in for the Drive v3 ``files()`` resource so the Drive-backed
stores can be exercised without network access.
"""

from __future__ import annotations

import itertools
import json
import re
from typing import Any, Callable

import pytest

from empadas import create_app
from empadas.blueprints.rpc.registry import registry
from empadas.config import TestConfig
from empadas.infra.stores import NO_QUOTA_MARKER

ADMIN_USERNAME = "lia"
ADMIN_PASSWORD = "segredo-forte"

_ENV_TO_CLEAR = (
    "GOOGLE_SERVICE_ACCOUNT_JSON_BASE64",
    "GOOGLE_DRIVE_ADMIN_FOLDER_ID",
    "EMPADAS_STORAGE_BACKEND",
    "EMPADAS_DEV_FALLBACK",
)


# =============================================================================
# Environment & application fixtures
# =============================================================================


@pytest.fixture()
def data_dir(tmp_path, monkeypatch: pytest.MonkeyPatch):
    """Point every config at a temporary data directory with known credentials."""

    target = tmp_path / "data"
    monkeypatch.setenv("EMPADAS_DATA_DIR", str(target))
    monkeypatch.setenv("EMPADAS_DEV_MODE", "1")
    monkeypatch.setenv("EMPADAS_LOG_TO_FILE", "0")
    monkeypatch.setenv("ADMIN_USERNAME", ADMIN_USERNAME)
    monkeypatch.setenv("ADMIN_PASSWORD", ADMIN_PASSWORD)
    monkeypatch.setenv("JWT_SECRET", "test-jwt-secret")
    for name in _ENV_TO_CLEAR:
        monkeypatch.delenv(name, raising=False)
    return target


@pytest.fixture()
def config(data_dir) -> TestConfig:
    return TestConfig()


@pytest.fixture()
def app(data_dir):
    return create_app("testing")


@pytest.fixture()
def services(app):
    return app.extensions["empadas"]


@pytest.fixture()
def client(app):
    with app.test_client() as test_client:
        yield test_client


def rpc_call(client, procedure: str, payload: Any = None, *, method: str | None = None):
    """Invoke an RPC procedure the way the browser client does."""

    if method is None:
        entry = registry.get(procedure)
        method = entry.http_method if entry is not None else "GET"
    path = f"/api/trpc/{procedure}"
    if method == "GET":
        query = {"input": json.dumps(payload)} if payload is not None else {}
        return client.get(path, query_string=query)
    return client.post(path, json=payload if payload is not None else {})


@pytest.fixture()
def admin_client(client):
    """Test client carrying a valid admin session cookie."""

    response = rpc_call(
        client,
        "auth.login",
        {"username": ADMIN_USERNAME, "password": ADMIN_PASSWORD},
        method="POST",
    )
    assert response.status_code == 200, response.get_json()
    return client


# =============================================================================
# Fake Drive
# =============================================================================


class FakeDriveError(Exception):
    """Mimics the parts of googleapiclient's HttpError the stores inspect."""

    def __init__(self, reason: str, status: int = 403):
        super().__init__(reason)
        self.reason = reason
        self.resp = type("Resp", (), {"status": status})()


def quota_error() -> FakeDriveError:
    return FakeDriveError(f"{NO_QUOTA_MARKER}. Use shared drives instead.")


class _Request:
    def __init__(self, fn: Callable[[], Any]):
        self._fn = fn

    def execute(self):
        return self._fn()


_QUOTED = r"'((?:[^'\\]|\\.)*)'"


def _unquote(value: str) -> str:
    return re.sub(r"\\(.)", r"\1", value)


class FakeFiles:
    def __init__(self, drive: "FakeDrive"):
        self.drive = drive

    def list(self, q: str = "", fields: str = "", pageSize: int = 100, pageToken: str | None = None, **kwargs):
        def run():
            self.drive.calls.append(("list", {"q": q, "pageSize": pageSize, "pageToken": pageToken, **kwargs}))
            if self.drive.list_error is not None:
                raise self.drive.list_error
            matches = [f for f in self.drive.entries.values() if self.drive.matches(f, q)]
            start = int(pageToken or 0)
            page = matches[start : start + pageSize]
            response: dict[str, Any] = {"files": [{"id": f["id"], "name": f["name"]} for f in page]}
            if start + pageSize < len(matches):
                response["nextPageToken"] = str(start + pageSize)
            return response

        return _Request(run)

    def get_media(self, fileId: str, **kwargs):
        def run():
            self.drive.calls.append(("get_media", {"fileId": fileId}))
            return self.drive.entries[fileId]["content"]

        return _Request(run)

    def create(self, body: dict, media_body=None, fields: str = "", **kwargs):
        def run():
            is_folder = body.get("mimeType") == "application/vnd.google-apps.folder"
            if is_folder and self.drive.folder_error is not None:
                raise self.drive.folder_error
            if not is_folder and self.drive.write_error is not None:
                raise self.drive.write_error
            file_id = self.drive.add_file(
                body["name"],
                parent=body["parents"][0],
                content=_read_media(media_body),
                mime_type=body.get("mimeType", "application/json"),
            )
            self.drive.calls.append(("create", {"name": body["name"]}))
            return {"id": file_id}

        return _Request(run)

    def update(self, fileId: str, media_body=None, **kwargs):
        def run():
            if self.drive.write_error is not None:
                raise self.drive.write_error
            self.drive.entries[fileId]["content"] = _read_media(media_body)
            self.drive.calls.append(("update", {"fileId": fileId}))
            return {"id": fileId}

        return _Request(run)

    def delete(self, fileId: str, **kwargs):
        def run():
            if self.drive.write_error is not None:
                raise self.drive.write_error
            self.drive.entries.pop(fileId, None)
            self.drive.calls.append(("delete", {"fileId": fileId}))
            return ""

        return _Request(run)


def _read_media(media_body) -> bytes:
    if media_body is None:
        return b""
    return media_body.getbytes(0, media_body.size())


class FakeDrive:
    """In-memory Drive v3 resource supporting the calls the stores make."""

    def __init__(self):
        self.entries: dict[str, dict[str, Any]] = {}
        self.calls: list[tuple[str, dict[str, Any]]] = []
        self.write_error: Exception | None = None
        self.folder_error: Exception | None = None
        self.list_error: Exception | None = None
        self._ids = itertools.count(1)

    def files(self):
        return FakeFiles(self)

    def add_file(self, name: str, *, parent: str, content: bytes | str = b"", mime_type: str = "application/json") -> str:
        file_id = f"file-{next(self._ids)}"
        if isinstance(content, str):
            content = content.encode("utf-8")
        self.entries[file_id] = {
            "id": file_id,
            "name": name,
            "parents": [parent],
            "mimeType": mime_type,
            "content": content,
        }
        return file_id

    def add_json(self, name: str, payload: dict, *, parent: str) -> str:
        return self.add_file(name, parent=parent, content=json.dumps(payload))

    def names_in(self, parent: str) -> list[str]:
        return sorted(f["name"] for f in self.entries.values() if parent in f["parents"])

    def read_json(self, parent: str, name: str) -> dict:
        for f in self.entries.values():
            if parent in f["parents"] and f["name"] == name:
                return json.loads(f["content"])
        raise KeyError(name)

    @staticmethod
    def matches(entry: dict[str, Any], q: str) -> bool:
        parent = re.search(_QUOTED + r" in parents", q)
        if parent and _unquote(parent.group(1)) not in entry["parents"]:
            return False
        name = re.search(r"name=" + _QUOTED, q)
        if name and _unquote(name.group(1)) != entry["name"]:
            return False
        mime = re.search(r"mimeType='([^']*)'", q)
        if mime and mime.group(1) != entry["mimeType"]:
            return False
        return True


@pytest.fixture()
def fake_drive() -> FakeDrive:
    return FakeDrive()
