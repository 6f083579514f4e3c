# ticketdesk/store/base.py
import time
from abc import ABC, abstractmethod
from datetime import datetime, timezone
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from ticketdesk.ticket.schemas import Ticket, TicketCreate, TicketUpdate


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def next_ticket_id(last_id: int | None) -> int:
    # millisecond timestamp, bumped past the newest id already handed out
    candidate = time.time_ns() // 1_000_000
    if last_id is not None and candidate <= last_id:
        return last_id + 1
    return candidate


class Snapshot(BaseModel):
    tickets: list[Ticket]
    groups: list[str]
    authors: list[str]
    admin_password: str = Field(alias="adminPassword")

    model_config = ConfigDict(populate_by_name=True)


class Store(ABC):
    """Persistence for tickets, groups, authors and the admin password.

    Lookups of a missing ticket raise NotFoundError, duplicate names raise
    ConflictError, a wrong old password raises UnauthorizedError and any
    I/O problem surfaces as StoreError.
    """

    backend: str

    @abstractmethod
    def initialize(self) -> None: ...

    @abstractmethod
    def load_all(self) -> Snapshot: ...

    # tickets

    @abstractmethod
    def list_tickets(self) -> list[Ticket]: ...

    @abstractmethod
    def get_ticket(self, ticket_id: int) -> Ticket: ...

    @abstractmethod
    def create_ticket(self, payload: TicketCreate) -> Ticket: ...

    @abstractmethod
    def replace_ticket(self, ticket_id: int, payload: TicketUpdate) -> Ticket: ...

    @abstractmethod
    def set_ticket_status(self, ticket_id: int, status: Any) -> Ticket: ...

    @abstractmethod
    def delete_ticket(self, ticket_id: int) -> Ticket: ...

    # groups and authors

    @abstractmethod
    def list_groups(self) -> list[str]: ...

    @abstractmethod
    def add_group(self, name: str) -> str: ...

    @abstractmethod
    def remove_group(self, name: str) -> None: ...

    @abstractmethod
    def list_authors(self) -> list[str]: ...

    @abstractmethod
    def add_author(self, name: str) -> str: ...

    @abstractmethod
    def remove_author(self, name: str) -> None: ...

    # admin

    @abstractmethod
    def get_admin_password(self) -> str: ...

    def check_admin_password(self, candidate: Any) -> bool:
        return candidate is not None and candidate == self.get_admin_password()

    @abstractmethod
    def change_admin_password(self, old_password: Any, new_password: str) -> None: ...

    def close(self) -> None:
        pass
