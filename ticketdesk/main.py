# ticketdesk/main.py
import logging
from contextlib import asynccontextmanager

import uvicorn
from fastapi import Depends, FastAPI
from fastapi.middleware.cors import CORSMiddleware

from ticketdesk.admin.routes import router as admin_router
from ticketdesk.core.config import Settings, get_settings
from ticketdesk.core.errors import register_error_handlers
from ticketdesk.core.logging import configure_logging
from ticketdesk.directory.routes import authors_router, groups_router
from ticketdesk.store.base import Snapshot, Store
from ticketdesk.store.provider import build_store, get_store
from ticketdesk.ticket.routes import router as ticket_router

logger = logging.getLogger(__name__)


def create_app(settings: Settings | None = None, store: Store | None = None) -> FastAPI:
    settings = settings or get_settings()
    store = store or build_store(settings)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        store.initialize()
        logger.info(
            "%s ready (%s store) on port %d", settings.APP_NAME, store.backend, settings.PORT
        )
        yield
        store.close()

    app = FastAPI(
        title=settings.APP_NAME,
        description=settings.APP_DESC,
        version=settings.APP_VERSION,
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.store = store

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    register_error_handlers(app)

    @app.get("/", tags=["Health"])
    def health():
        return {"status": "Ticket system API running", "version": settings.APP_VERSION}

    @app.get(
        "/api/data",
        response_model=Snapshot,
        response_model_exclude_none=True,
        tags=["Data"],
    )
    def load_all(store: Store = Depends(get_store)):
        return store.load_all()

    # Routers
    app.include_router(ticket_router)
    app.include_router(groups_router)
    app.include_router(authors_router)
    app.include_router(admin_router)

    return app


def run() -> None:
    settings = get_settings()
    configure_logging(settings.LOG_LEVEL)
    uvicorn.run(
        create_app(settings),
        host=settings.HOST,
        port=settings.PORT,
        log_config=None,
    )


if __name__ == "__main__":
    run()
