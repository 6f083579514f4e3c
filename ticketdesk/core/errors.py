# ticketdesk/core/errors.py
import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

logger = logging.getLogger(__name__)

INTERNAL_ERROR_MESSAGE = "Internal server error"
BAD_REQUEST_MESSAGE = "Invalid request"


class TicketdeskError(Exception):
    pass


class NotFoundError(TicketdeskError):
    pass


class ConflictError(TicketdeskError):
    pass


class UnauthorizedError(TicketdeskError):
    pass


# the backing file or database could not be read or written
class StoreError(TicketdeskError):
    pass


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": exc.detail},
        headers=getattr(exc, "headers", None),
    )


async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    # the rejected input is not echoed back
    logger.info(
        "%s %s rejected: %d validation errors",
        request.method,
        request.url.path,
        len(exc.errors()),
    )
    return JSONResponse(status_code=400, content={"error": BAD_REQUEST_MESSAGE})


async def internal_error_handler(request: Request, exc: Exception) -> JSONResponse:
    # the cause stays in the log, the client only gets a generic message
    logger.error("%s %s failed", request.method, request.url.path, exc_info=exc)
    return JSONResponse(status_code=500, content={"error": INTERNAL_ERROR_MESSAGE})


def register_error_handlers(app: FastAPI) -> None:
    # also covers FastAPI's HTTPException, unknown routes and 405s
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_error_handler)
    app.add_exception_handler(TicketdeskError, internal_error_handler)
    app.add_exception_handler(Exception, internal_error_handler)
