from threading import Lock
from weakref import WeakSet

from sqlalchemy import create_engine, inspect
from sqlalchemy.engine import Engine
from sqlalchemy.orm import declarative_base, sessionmaker

from rosterstore.core import config


Base = declarative_base()

_schema_lock = Lock()
_kv_schema_checked: WeakSet = WeakSet()


def create_store_engine(database_url: str | None = None) -> Engine:
    return create_engine(database_url or config.DATABASE_URL)


def create_session_factory(engine: Engine) -> sessionmaker:
    return sessionmaker(
        autocommit=False,
        autoflush=False,
        bind=engine,
    )


def ensure_kv_schema(engine: Engine) -> None:
    # Imported here so the table is registered on Base before create_all.
    from rosterstore.models.kv_entry import KeyValueEntry

    if engine in _kv_schema_checked:
        return

    with _schema_lock:
        if engine in _kv_schema_checked:
            return

        if KeyValueEntry.__tablename__ not in inspect(engine).get_table_names():
            Base.metadata.create_all(bind=engine, tables=[KeyValueEntry.__table__])

        _kv_schema_checked.add(engine)
