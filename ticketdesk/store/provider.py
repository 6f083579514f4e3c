# ticketdesk/store/provider.py
from fastapi import Request

from ticketdesk.core.config import Settings
from ticketdesk.store.base import Store


def build_store(settings: Settings) -> Store:
    seed = {
        "default_groups": settings.DEFAULT_GROUPS,
        "default_authors": settings.DEFAULT_AUTHORS,
        "admin_password": settings.ADMIN_DEFAULT_PASSWORD,
    }
    if settings.STORE_BACKEND == "sql":
        from ticketdesk.store.sql_store import SqlStore

        return SqlStore(settings.DATABASE_URL, ssl_verify=settings.DATABASE_SSL_VERIFY, **seed)

    from ticketdesk.store.file_store import FileStore

    return FileStore(settings.DATA_FILE, **seed)


# Common store dependency
def get_store(request: Request) -> Store:
    return request.app.state.store
