# ticketdesk/directory/routes.py
# Groups and authors: two flat lists of unique names with the same routes
from fastapi import APIRouter, Depends, HTTPException

from ticketdesk.core.errors import ConflictError
from ticketdesk.directory.schemas import Message, NameIn, NameOut
from ticketdesk.store.base import Store
from ticketdesk.store.provider import get_store

groups_router = APIRouter(prefix="/api/groups", tags=["Groups"])
authors_router = APIRouter(prefix="/api/authors", tags=["Authors"])


def required_name(body: NameIn) -> str:
    if body.name is None:
        raise HTTPException(status_code=400, detail="Name is required")
    return str(body.name)


# the path converter lets encoded slashes through as part of the name
def path_name(name: str) -> str:
    if not name:
        raise HTTPException(status_code=404, detail="Not Found")
    return name


@groups_router.get("", response_model=list[str])
def list_groups(store: Store = Depends(get_store)):
    return store.list_groups()


@groups_router.post("", response_model=NameOut, status_code=201)
def add_group(name: str = Depends(required_name), store: Store = Depends(get_store)):
    try:
        return NameOut(name=store.add_group(name))
    except ConflictError:
        raise HTTPException(status_code=400, detail="Group already exists")


@groups_router.delete("/{name:path}", response_model=Message)
def remove_group(name: str = Depends(path_name), store: Store = Depends(get_store)):
    store.remove_group(name)
    return Message(message="Group deleted")


@authors_router.get("", response_model=list[str])
def list_authors(store: Store = Depends(get_store)):
    return store.list_authors()


@authors_router.post("", response_model=NameOut, status_code=201)
def add_author(name: str = Depends(required_name), store: Store = Depends(get_store)):
    try:
        return NameOut(name=store.add_author(name))
    except ConflictError:
        raise HTTPException(status_code=400, detail="Author already exists")


@authors_router.delete("/{name:path}", response_model=Message)
def remove_author(name: str = Depends(path_name), store: Store = Depends(get_store)):
    store.remove_author(name)
    return Message(message="Author deleted")
