# ticketdesk/ticket/routes.py
from fastapi import APIRouter, Depends, HTTPException

from ticketdesk.core.errors import NotFoundError
from ticketdesk.store.base import Store
from ticketdesk.store.provider import get_store
from ticketdesk.ticket.schemas import (
    StatusUpdate,
    Ticket,
    TicketCreate,
    TicketDeleted,
    TicketUpdate,
)

router = APIRouter(prefix="/api/tickets", tags=["Tickets"])

TICKET_NOT_FOUND = "Ticket not found"


def parse_ticket_id(ticket_id: str) -> int:
    # an id that is not a number cannot name a ticket
    try:
        return int(ticket_id)
    except ValueError:
        raise HTTPException(status_code=404, detail=TICKET_NOT_FOUND)


@router.get("", response_model=list[Ticket], response_model_exclude_none=True)
def list_all(store: Store = Depends(get_store)):
    return store.list_tickets()


@router.get("/{ticket_id}", response_model=Ticket, response_model_exclude_none=True)
def get(ticket_id: int = Depends(parse_ticket_id), store: Store = Depends(get_store)):
    try:
        return store.get_ticket(ticket_id)
    except NotFoundError:
        raise HTTPException(status_code=404, detail=TICKET_NOT_FOUND)


@router.post("", response_model=Ticket, response_model_exclude_none=True, status_code=201)
def create(ticket: TicketCreate | None = None, store: Store = Depends(get_store)):
    return store.create_ticket(ticket or TicketCreate())


@router.put("/{ticket_id}", response_model=Ticket, response_model_exclude_none=True)
def update(
    ticket: TicketUpdate | None = None,
    ticket_id: int = Depends(parse_ticket_id),
    store: Store = Depends(get_store),
):
    try:
        return store.replace_ticket(ticket_id, ticket or TicketUpdate())
    except NotFoundError:
        raise HTTPException(status_code=404, detail=TICKET_NOT_FOUND)


@router.patch("/{ticket_id}/status", response_model=Ticket, response_model_exclude_none=True)
def update_status(
    body: StatusUpdate | None = None,
    ticket_id: int = Depends(parse_ticket_id),
    store: Store = Depends(get_store),
):
    try:
        return store.set_ticket_status(ticket_id, body.status if body else None)
    except NotFoundError:
        raise HTTPException(status_code=404, detail=TICKET_NOT_FOUND)


@router.delete("/{ticket_id}", response_model=TicketDeleted, response_model_exclude_none=True)
def delete(ticket_id: int = Depends(parse_ticket_id), store: Store = Depends(get_store)):
    try:
        deleted = store.delete_ticket(ticket_id)
    except NotFoundError:
        raise HTTPException(status_code=404, detail=TICKET_NOT_FOUND)
    return TicketDeleted(message="Ticket deleted", ticket=deleted)
