# ticketdesk/directory/schemas.py
from typing import Any

from pydantic import BaseModel


class NameIn(BaseModel):
    name: Any = None


class NameOut(BaseModel):
    name: str


class Message(BaseModel):
    message: str
