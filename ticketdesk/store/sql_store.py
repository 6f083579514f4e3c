# ticketdesk/store/sql_store.py
import json
import logging
from collections.abc import Iterator
from contextlib import contextmanager
from datetime import datetime, timezone
from typing import Any

from sqlalchemy import func
from sqlalchemy.engine import Engine
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from ticketdesk.core.database import Base, create_db_engine, create_session_factory
from ticketdesk.core.errors import ConflictError, NotFoundError, StoreError, UnauthorizedError
from ticketdesk.store.base import Snapshot, Store, next_ticket_id, utcnow
from ticketdesk.store.models import ADMIN_PASSWORD_KEY, AuthorRow, GroupRow, SettingRow, TicketRow
from ticketdesk.ticket.schemas import (
    DEFAULT_STATUS,
    MUTABLE_FIELDS,
    Ticket,
    TicketCreate,
    TicketUpdate,
)

logger = logging.getLogger(__name__)


def _as_utc(value: datetime | None) -> datetime | None:
    # SQLite hands back naive datetimes
    if value is not None and value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


def to_column(value: Any) -> str | None:
    # text columns; other JSON values are kept in their JSON spelling
    if value is None or isinstance(value, str):
        return value
    return json.dumps(value, ensure_ascii=False)


def to_ticket(row: TicketRow) -> Ticket:
    return Ticket(
        id=row.id,
        title=row.title,
        description=row.description,
        author=row.author,
        group=row.group,
        status=row.status,
        created_at=_as_utc(row.created_at),
        updated_at=_as_utc(row.updated_at),
    )


class SqlStore(Store):

    backend = "sql"

    def __init__(
        self,
        database_url: str,
        *,
        default_groups: list[str],
        default_authors: list[str],
        admin_password: str,
        ssl_verify: bool | None = None,
        engine: Engine | None = None,
    ):
        self.engine = engine or create_db_engine(database_url, ssl_verify)
        self.SessionLocal = create_session_factory(self.engine)
        self.default_groups = list(default_groups)
        self.default_authors = list(default_authors)
        self.default_admin_password = admin_password

    @contextmanager
    def _session(self) -> Iterator[Session]:
        db = self.SessionLocal()
        try:
            yield db
        except SQLAlchemyError as exc:
            db.rollback()
            raise StoreError("database operation failed") from exc
        finally:
            db.close()

    def initialize(self) -> None:
        try:
            Base.metadata.create_all(bind=self.engine)
        except SQLAlchemyError as exc:
            raise StoreError("cannot create tables") from exc

        with self._session() as db:
            if db.query(GroupRow).count() == 0:
                db.add_all(GroupRow(name=name) for name in self.default_groups)
                logger.info("Seeded %d default groups", len(self.default_groups))
            if db.query(AuthorRow).count() == 0:
                db.add_all(AuthorRow(name=name) for name in self.default_authors)
                logger.info("Seeded %d default authors", len(self.default_authors))
            if db.get(SettingRow, ADMIN_PASSWORD_KEY) is None:
                db.add(SettingRow(key=ADMIN_PASSWORD_KEY, value=self.default_admin_password))
                logger.info("Seeded default admin password")
            db.commit()

    def load_all(self) -> Snapshot:
        with self._session() as db:
            return Snapshot(
                tickets=[to_ticket(row) for row in self._ticket_query(db).all()],
                groups=self._names(db, GroupRow),
                authors=self._names(db, AuthorRow),
                admin_password=self._password(db).value,
            )

    # tickets

    @staticmethod
    def _ticket_query(db: Session):
        return db.query(TicketRow).order_by(TicketRow.id.desc())

    @staticmethod
    def _ticket_row(db: Session, ticket_id: int) -> TicketRow:
        row = db.query(TicketRow).filter(TicketRow.id == ticket_id).first()
        if row is None:
            raise NotFoundError(f"ticket {ticket_id} not found")
        return row

    def list_tickets(self) -> list[Ticket]:
        with self._session() as db:
            return [to_ticket(row) for row in self._ticket_query(db).all()]

    def get_ticket(self, ticket_id: int) -> Ticket:
        with self._session() as db:
            return to_ticket(self._ticket_row(db, ticket_id))

    def create_ticket(self, payload: TicketCreate) -> Ticket:
        with self._session() as db:
            last_id = db.query(func.max(TicketRow.id)).scalar()
            row = TicketRow(
                id=next_ticket_id(last_id),
                title=to_column(payload.title),
                description=to_column(payload.description),
                author=to_column(payload.author),
                group=to_column(payload.group),
                status=to_column(payload.status or DEFAULT_STATUS),
                created_at=utcnow(),
            )
            db.add(row)
            db.commit()
            db.refresh(row)
            return to_ticket(row)

    def replace_ticket(self, ticket_id: int, payload: TicketUpdate) -> Ticket:
        changes = payload.model_dump(include=set(MUTABLE_FIELDS), exclude_unset=True)
        if changes.get("status") is None:
            changes.pop("status", None)
        return self._update(ticket_id, changes)

    def set_ticket_status(self, ticket_id: int, status: Any) -> Ticket:
        return self._update(ticket_id, {} if status is None else {"status": status})

    def _update(self, ticket_id: int, changes: dict) -> Ticket:
        with self._session() as db:
            row = self._ticket_row(db, ticket_id)
            for field, value in changes.items():
                setattr(row, field, to_column(value))
            row.updated_at = utcnow()
            db.commit()
            db.refresh(row)
            return to_ticket(row)

    def delete_ticket(self, ticket_id: int) -> Ticket:
        with self._session() as db:
            row = self._ticket_row(db, ticket_id)
            ticket = to_ticket(row)
            db.delete(row)
            db.commit()
            return ticket

    # groups and authors

    @staticmethod
    def _names(db: Session, model) -> list[str]:
        return [name for (name,) in db.query(model.name).order_by(model.name).all()]

    def _add_name(self, model, name: str) -> str:
        with self._session() as db:
            db.add(model(name=name))
            try:
                db.commit()
            except IntegrityError as exc:
                db.rollback()
                raise ConflictError(f"{name!r} already in {model.__tablename__}") from exc
            return name

    def _remove_name(self, model, name: str) -> None:
        with self._session() as db:
            db.query(model).filter(model.name == name).delete(synchronize_session=False)
            db.commit()

    def list_groups(self) -> list[str]:
        with self._session() as db:
            return self._names(db, GroupRow)

    def add_group(self, name: str) -> str:
        return self._add_name(GroupRow, name)

    def remove_group(self, name: str) -> None:
        self._remove_name(GroupRow, name)

    def list_authors(self) -> list[str]:
        with self._session() as db:
            return self._names(db, AuthorRow)

    def add_author(self, name: str) -> str:
        return self._add_name(AuthorRow, name)

    def remove_author(self, name: str) -> None:
        self._remove_name(AuthorRow, name)

    # admin

    @staticmethod
    def _password(db: Session) -> SettingRow:
        setting = db.get(SettingRow, ADMIN_PASSWORD_KEY)
        if setting is None:
            raise StoreError("admin password has not been initialized")
        return setting

    def get_admin_password(self) -> str:
        with self._session() as db:
            return self._password(db).value

    def change_admin_password(self, old_password: Any, new_password: str) -> None:
        with self._session() as db:
            setting = self._password(db)
            if old_password is None or old_password != setting.value:
                raise UnauthorizedError("old password does not match")
            setting.value = new_password
            db.commit()

    def close(self) -> None:
        self.engine.dispose()
