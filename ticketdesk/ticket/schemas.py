# ticketdesk/ticket/schemas.py
from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

DEFAULT_STATUS = "offen"

# Fields a client may change after creation
MUTABLE_FIELDS = ("title", "description", "author", "group", "status")


# Field values are stored as sent, whatever their JSON type
class TicketBase(BaseModel):
    title: Any = None
    description: Any = None
    author: Any = None
    group: Any = None


class TicketCreate(TicketBase):
    status: Any = None


class TicketUpdate(TicketBase):
    status: Any = None


class StatusUpdate(BaseModel):
    status: Any = None


class Ticket(TicketBase):
    id: int
    status: Any = DEFAULT_STATUS
    created_at: datetime = Field(alias="createdAt")
    updated_at: datetime | None = Field(default=None, alias="updatedAt")

    model_config = ConfigDict(populate_by_name=True)

    def to_document(self) -> dict:
        # updatedAt stays out of the document until the first change
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)


class TicketDeleted(BaseModel):
    message: str
    ticket: Ticket
