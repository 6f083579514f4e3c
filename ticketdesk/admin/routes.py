# ticketdesk/admin/routes.py
from fastapi import APIRouter, Depends, HTTPException
from fastapi.responses import JSONResponse

from ticketdesk.admin.schemas import AdminResult, LoginRequest, PasswordChange
from ticketdesk.core.errors import UnauthorizedError
from ticketdesk.store.base import Store
from ticketdesk.store.provider import get_store

router = APIRouter(prefix="/api/admin", tags=["Admin"])

REJECTED = {401: {"model": AdminResult}}


def _rejected(message: str) -> JSONResponse:
    return JSONResponse(status_code=401, content={"success": False, "message": message})


@router.post("/login", response_model=AdminResult, responses=REJECTED)
def login(body: LoginRequest, store: Store = Depends(get_store)):
    if not store.check_admin_password(body.password):
        return _rejected("Wrong password")
    return AdminResult(success=True, message="Login successful")


@router.put("/password", response_model=AdminResult, responses=REJECTED)
def change_password(body: PasswordChange, store: Store = Depends(get_store)):
    if body.new_password is None:
        raise HTTPException(status_code=400, detail="New password is required")
    try:
        store.change_admin_password(body.old_password, str(body.new_password))
    except UnauthorizedError:
        return _rejected("Wrong old password")
    return AdminResult(success=True, message="Password changed")
