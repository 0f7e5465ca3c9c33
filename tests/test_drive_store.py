"""Tests for the Drive-backed record store against an in-memory Drive."""

from __future__ import annotations

import pytest

from empadas.infra.stores import DriveRecordStore, ensure_folder, find_file_id, quote_query_value
from empadas.infra.stores.drive import FOLDER_MIME, list_children
from empadas.models import Category

FOLDER = "folder-1"


@pytest.fixture()
def store(fake_drive) -> DriveRecordStore[Category]:
    return DriveRecordStore(fake_drive, FOLDER, Category)


def test_put_creates_then_updates_single_file(fake_drive, store):
    store.put("cat-1", {"name": "Vendas", "kind": "IN"})
    store.put("cat-1", {"name": "Vendas balcão", "kind": "IN"})

    assert fake_drive.names_in(FOLDER) == ["cat-1.json"]
    assert fake_drive.read_json(FOLDER, "cat-1.json") == {"id": "cat-1", "name": "Vendas balcão", "kind": "IN"}
    assert [name for name, _ in fake_drive.calls if name in {"create", "update"}] == ["create", "update"]


def test_get_reads_existing_file_by_name(fake_drive, store):
    fake_drive.add_json("cat-9.json", {"id": "cat-9", "name": "Insumos", "kind": "OUT"}, parent=FOLDER)

    record = store.get("cat-9")

    assert record is not None
    assert record.name == "Insumos"
    assert store.get("missing") is None


def test_list_pages_through_every_file(fake_drive, monkeypatch, store):
    monkeypatch.setattr("empadas.infra.stores.drive.LIST_PAGE_SIZE", 2)
    for index in range(5):
        fake_drive.add_json(f"c{index}.json", {"id": f"c{index}", "name": f"C{index}", "kind": "IN"}, parent=FOLDER)

    records = store.list()

    assert sorted(r.id for r in records) == ["c0", "c1", "c2", "c3", "c4"]
    list_calls = [params for name, params in fake_drive.calls if name == "list"]
    assert [params["pageToken"] for params in list_calls] == [None, "2", "4"]


def test_list_filters_by_prefix_and_skips_malformed(fake_drive):
    fake_drive.add_json("finance_categories__a.json", {"id": "a", "name": "A", "kind": "IN"}, parent=FOLDER)
    fake_drive.add_json("finance_accounts__b.json", {"id": "b", "kind": "PAYABLE"}, parent=FOLDER)
    fake_drive.add_file("finance_categories__bad.json", parent=FOLDER, content="{oops")
    fake_drive.add_json("a.json", {"id": "zzz", "name": "Root", "kind": "IN"}, parent="elsewhere")
    store = DriveRecordStore(fake_drive, FOLDER, Category, file_prefix="finance_categories__")

    assert [r.id for r in store.list()] == ["a"]


def test_delete_removes_file_and_ignores_missing(fake_drive, store):
    store.put("cat-1", {"name": "Vendas", "kind": "IN"})
    store.delete("cat-1")
    store.delete("cat-1")

    assert fake_drive.names_in(FOLDER) == []


def test_ensure_folder_reuses_existing(fake_drive):
    first = ensure_folder(fake_drive, "root", "finance_transactions")
    second = ensure_folder(fake_drive, "root", "finance_transactions")

    assert first == second
    assert fake_drive.entries[first]["mimeType"] == FOLDER_MIME


def test_quote_query_value_escapes_quotes_and_backslashes(fake_drive):
    assert quote_query_value("d'Ávila\\x") == "d\\'Ávila\\\\x"
    file_id = fake_drive.add_file("d'Ávila.json", parent=FOLDER)

    assert find_file_id(fake_drive, FOLDER, "d'Ávila.json") == file_id


def test_list_children_passes_shared_drive_flags(fake_drive):
    list_children(fake_drive, FOLDER)

    _, params = fake_drive.calls[-1]
    assert params["supportsAllDrives"] is True
    assert params["includeItemsFromAllDrives"] is True
