# tests/test_file_store.py
import json
from concurrent.futures import ThreadPoolExecutor

import pytest

from ticketdesk.core.errors import StoreError
from ticketdesk.store.file_store import FileStore
from ticketdesk.ticket.schemas import TicketCreate

SEED = {
    "default_groups": ["Alle", "Support", "Entwicklung", "Design"],
    "default_authors": ["Max Mustermann"],
    "admin_password": "admin123",
}


@pytest.fixture
def path(tmp_path):
    return tmp_path / "data.json"


def test_initialize_writes_defaults(path):
    FileStore(path, **SEED).initialize()

    data = json.loads(path.read_text(encoding="utf-8"))
    assert data == {
        "tickets": [],
        "groups": ["Alle", "Support", "Entwicklung", "Design"],
        "authors": ["Max Mustermann"],
        "adminPassword": "admin123",
    }


def test_missing_file_is_seeded_on_first_read(path):
    store = FileStore(path, **SEED)
    assert store.list_groups() == ["Alle", "Support", "Entwicklung", "Design"]
    assert path.exists()


def test_groups_keep_insertion_order(path):
    store = FileStore(path, **SEED)
    store.add_group("Backoffice")
    assert store.list_groups()[-1] == "Backoffice"


def test_tickets_persist_in_camel_case(path):
    store = FileStore(path, **SEED)
    ticket = store.create_ticket(TicketCreate(title="A", description="B", author="X", group="Y"))
    store.set_ticket_status(ticket.id, "geschlossen")

    doc = json.loads(path.read_text(encoding="utf-8"))["tickets"][0]
    assert doc["id"] == ticket.id
    assert doc["group"] == "Y"
    assert doc["status"] == "geschlossen"
    assert doc["createdAt"].endswith("Z")
    assert "updatedAt" in doc

    # a fresh instance sees the same data
    assert FileStore(path, **SEED).get_ticket(ticket.id).status == "geschlossen"


def test_corrupt_file_raises_and_is_left_alone(path):
    path.write_text("{not json", encoding="utf-8")
    store = FileStore(path, **SEED)

    with pytest.raises(StoreError):
        store.list_tickets()
    with pytest.raises(StoreError):
        store.add_group("QA")
    assert path.read_text(encoding="utf-8") == "{not json"


def test_unreadable_path_raises_store_error(tmp_path):
    store = FileStore(tmp_path, **SEED)
    with pytest.raises(StoreError):
        store.list_tickets()


def test_concurrent_creates_are_not_lost(path):
    store = FileStore(path, **SEED)
    store.initialize()

    def make(i):
        return store.create_ticket(TicketCreate(title=f"T{i}"))

    with ThreadPoolExecutor(max_workers=8) as pool:
        created = list(pool.map(make, range(40)))

    assert len({t.id for t in created}) == 40
    assert len(store.list_tickets()) == 40
