# tests/test_sql_store.py
import pytest
from sqlalchemy import inspect

from ticketdesk.core.database import connect_args_for
from ticketdesk.core.errors import StoreError
from ticketdesk.store.sql_store import SqlStore
from ticketdesk.ticket.schemas import TicketCreate

SEED = {
    "default_groups": ["Support", "Design", "Alle"],
    "default_authors": ["Tom Weber", "Anna Schmidt"],
    "admin_password": "admin123",
}


@pytest.fixture
def store(tmp_path):
    store = SqlStore(f"sqlite:///{tmp_path / 'tickets.db'}", **SEED)
    store.initialize()
    yield store
    store.close()


def test_initialize_creates_tables(store):
    tables = set(inspect(store.engine).get_table_names())
    assert {"tickets", "groups", "authors", "settings"} <= tables


def test_names_are_alphabetical(store):
    store.add_group("Backoffice")
    assert store.list_groups() == ["Alle", "Backoffice", "Design", "Support"]
    assert store.list_authors() == ["Anna Schmidt", "Tom Weber"]


def test_seed_only_fills_empty_tables(tmp_path):
    url = f"sqlite:///{tmp_path / 'tickets.db'}"
    first = SqlStore(url, **SEED)
    first.initialize()
    first.remove_group("Alle")
    first.close()

    second = SqlStore(url, **SEED)
    second.initialize()
    assert "Alle" not in second.list_groups()
    second.close()


def test_large_millisecond_ids_round_trip(store):
    ticket = store.create_ticket(TicketCreate(title="A"))
    assert ticket.id > 2**31
    assert store.get_ticket(ticket.id).id == ticket.id


def test_missing_tables_surface_as_store_error(tmp_path):
    store = SqlStore(f"sqlite:///{tmp_path / 'empty.db'}", **SEED)
    with pytest.raises(StoreError):
        store.list_tickets()
    store.close()


def test_connect_args():
    assert connect_args_for("sqlite:///./x.db") == {"check_same_thread": False}
    assert connect_args_for("postgresql://db/tickets") == {}
    assert connect_args_for("postgresql://db/tickets", True) == {"sslmode": "verify-full"}
    assert connect_args_for("postgresql://db/tickets", False) == {"sslmode": "require"}
