# ticketdesk/admin/schemas.py
from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class LoginRequest(BaseModel):
    password: Any = None


class PasswordChange(BaseModel):
    old_password: Any = Field(default=None, alias="oldPassword")
    new_password: Any = Field(default=None, alias="newPassword")

    model_config = ConfigDict(populate_by_name=True)


class AdminResult(BaseModel):
    success: bool
    message: str
