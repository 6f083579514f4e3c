# ticketdesk/store/models.py
from sqlalchemy import BigInteger, Column, DateTime, Integer, String, Text

from ticketdesk.core.database import Base
from ticketdesk.ticket.schemas import DEFAULT_STATUS

ADMIN_PASSWORD_KEY = "admin_password"


class TicketRow(Base):
    __tablename__ = "tickets"

    # millisecond timestamps do not fit a 32 bit integer
    id = Column(BigInteger, primary_key=True, autoincrement=False)
    title = Column(Text)
    description = Column(Text)
    author = Column(String(255))
    group = Column("group", String(255))
    status = Column(String(50), default=DEFAULT_STATUS, index=True)
    created_at = Column(DateTime(timezone=True), nullable=False, index=True)
    updated_at = Column(DateTime(timezone=True))


class GroupRow(Base):
    __tablename__ = "groups"

    id = Column(Integer, primary_key=True)
    name = Column(String(255), unique=True, nullable=False)


class AuthorRow(Base):
    __tablename__ = "authors"

    id = Column(Integer, primary_key=True)
    name = Column(String(255), unique=True, nullable=False)


class SettingRow(Base):
    __tablename__ = "settings"

    key = Column(String(255), primary_key=True)
    value = Column(Text, nullable=False)
