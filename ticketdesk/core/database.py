# ticketdesk/core/database.py
from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import declarative_base, sessionmaker

Base = declarative_base()


def connect_args_for(database_url: str, ssl_verify: bool | None = None) -> dict:
    if database_url.startswith("sqlite"):
        return {"check_same_thread": False}
    if database_url.startswith("postgresql") and ssl_verify is not None:
        return {"sslmode": "verify-full" if ssl_verify else "require"}
    return {}


def create_db_engine(database_url: str, ssl_verify: bool | None = None) -> Engine:
    return create_engine(
        database_url,
        connect_args=connect_args_for(database_url, ssl_verify),
        pool_pre_ping=not database_url.startswith("sqlite"),
    )


def create_session_factory(engine: Engine) -> sessionmaker:
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)
