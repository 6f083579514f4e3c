# ticketdesk/store/file_store.py
import json
import logging
import os
import threading
from collections.abc import Iterator
from contextlib import contextmanager
from pathlib import Path
from typing import Any

from ticketdesk.core.errors import ConflictError, NotFoundError, StoreError, UnauthorizedError
from ticketdesk.store.base import Snapshot, Store, next_ticket_id, utcnow
from ticketdesk.ticket.schemas import (
    DEFAULT_STATUS,
    MUTABLE_FIELDS,
    Ticket,
    TicketCreate,
    TicketUpdate,
)

logger = logging.getLogger(__name__)


class FileStore(Store):

    backend = "file"

    def __init__(
        self,
        path: str | os.PathLike,
        *,
        default_groups: list[str],
        default_authors: list[str],
        admin_password: str,
    ):
        self.path = Path(path)
        self.default_groups = list(default_groups)
        self.default_authors = list(default_authors)
        self.default_admin_password = admin_password
        self._lock = threading.RLock()

    def _defaults(self) -> dict:
        return {
            "tickets": [],
            "groups": list(self.default_groups),
            "authors": list(self.default_authors),
            "adminPassword": self.default_admin_password,
        }

    def _read(self) -> dict:
        try:
            text = self.path.read_text(encoding="utf-8")
        except FileNotFoundError:
            data = self._defaults()
            self._write(data)
            logger.info("Seeded default data into %s", self.path)
            return data
        except OSError as exc:
            raise StoreError(f"cannot read {self.path}") from exc

        try:
            data = json.loads(text)
        except json.JSONDecodeError as exc:
            raise StoreError(f"{self.path} is not valid JSON") from exc
        data.setdefault("tickets", [])
        data.setdefault("groups", [])
        data.setdefault("authors", [])
        data.setdefault("adminPassword", self.default_admin_password)
        return data

    def _write(self, data: dict) -> None:
        tmp_path = self.path.with_name(self.path.name + ".tmp")
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            tmp_path.write_text(json.dumps(data, indent=2, ensure_ascii=False), encoding="utf-8")
            os.replace(tmp_path, self.path)
        except OSError as exc:
            raise StoreError(f"cannot write {self.path}") from exc

    @contextmanager
    def _transaction(self) -> Iterator[dict]:
        # an exception inside the block skips the write
        with self._lock:
            data = self._read()
            yield data
            self._write(data)

    @staticmethod
    def _find(data: dict, ticket_id: int) -> int:
        for index, doc in enumerate(data["tickets"]):
            if doc.get("id") == ticket_id:
                return index
        raise NotFoundError(f"ticket {ticket_id} not found")

    def initialize(self) -> None:
        with self._lock:
            if self.path.exists():
                logger.info("Using data file %s", self.path)
                return
            self._read()

    def load_all(self) -> Snapshot:
        with self._lock:
            data = self._read()
        return Snapshot(
            tickets=[Ticket.model_validate(doc) for doc in data["tickets"]],
            groups=data["groups"],
            authors=data["authors"],
            admin_password=data["adminPassword"],
        )

    # tickets

    def list_tickets(self) -> list[Ticket]:
        with self._lock:
            data = self._read()
        tickets = [Ticket.model_validate(doc) for doc in data["tickets"]]
        return sorted(tickets, key=lambda t: t.id, reverse=True)

    def get_ticket(self, ticket_id: int) -> Ticket:
        with self._lock:
            data = self._read()
        return Ticket.model_validate(data["tickets"][self._find(data, ticket_id)])

    def create_ticket(self, payload: TicketCreate) -> Ticket:
        with self._transaction() as data:
            last_id = max((doc["id"] for doc in data["tickets"]), default=None)
            ticket = Ticket(
                id=next_ticket_id(last_id),
                title=payload.title,
                description=payload.description,
                author=payload.author,
                group=payload.group,
                status=payload.status or DEFAULT_STATUS,
                created_at=utcnow(),
            )
            data["tickets"].append(ticket.to_document())
        return ticket

    def replace_ticket(self, ticket_id: int, payload: TicketUpdate) -> Ticket:
        changes = payload.model_dump(include=set(MUTABLE_FIELDS), exclude_unset=True)
        if changes.get("status") is None:
            changes.pop("status", None)
        return self._update(ticket_id, changes)

    def set_ticket_status(self, ticket_id: int, status: Any) -> Ticket:
        return self._update(ticket_id, {} if status is None else {"status": status})

    def _update(self, ticket_id: int, changes: dict) -> Ticket:
        with self._transaction() as data:
            index = self._find(data, ticket_id)
            current = Ticket.model_validate(data["tickets"][index])
            ticket = current.model_copy(update={**changes, "updated_at": utcnow()})
            data["tickets"][index] = ticket.to_document()
        return ticket

    def delete_ticket(self, ticket_id: int) -> Ticket:
        with self._transaction() as data:
            doc = data["tickets"].pop(self._find(data, ticket_id))
        return Ticket.model_validate(doc)

    # groups and authors

    def _list_names(self, key: str) -> list[str]:
        with self._lock:
            return list(self._read()[key])

    def _add_name(self, key: str, name: str) -> str:
        with self._transaction() as data:
            if name in data[key]:
                raise ConflictError(f"{name!r} already in {key}")
            data[key].append(name)
        return name

    def _remove_name(self, key: str, name: str) -> None:
        with self._transaction() as data:
            data[key] = [existing for existing in data[key] if existing != name]

    def list_groups(self) -> list[str]:
        return self._list_names("groups")

    def add_group(self, name: str) -> str:
        return self._add_name("groups", name)

    def remove_group(self, name: str) -> None:
        self._remove_name("groups", name)

    def list_authors(self) -> list[str]:
        return self._list_names("authors")

    def add_author(self, name: str) -> str:
        return self._add_name("authors", name)

    def remove_author(self, name: str) -> None:
        self._remove_name("authors", name)

    # admin

    def get_admin_password(self) -> str:
        with self._lock:
            return self._read()["adminPassword"]

    def change_admin_password(self, old_password: Any, new_password: str) -> None:
        with self._transaction() as data:
            if old_password is None or old_password != data["adminPassword"]:
                raise UnauthorizedError("old password does not match")
            data["adminPassword"] = new_password
