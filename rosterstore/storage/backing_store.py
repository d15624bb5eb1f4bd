import logging
from datetime import datetime

from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError

from rosterstore.core.errors import StorageUnavailable
from rosterstore.database import create_session_factory, ensure_kv_schema
from rosterstore.models.kv_entry import KeyValueEntry

logger = logging.getLogger(__name__)

STORAGE_UNAVAILABLE_DETAIL = 'Backing store unavailable. Verify DATABASE_URL and that the database is writable.'


class KeyValueStore:
    """Flat durable mapping from string keys to serialized string values.

    Every call opens and commits its own database session, so a value is
    durable as soon as ``set`` or ``remove`` returns.
    """

    def __init__(self, engine: Engine) -> None:
        self.engine = engine
        self._session_factory = create_session_factory(engine)

    def ensure_ready(self) -> None:
        try:
            ensure_kv_schema(self.engine)
        except SQLAlchemyError as exc:
            logger.exception('Backing store schema check failed.')
            raise StorageUnavailable(STORAGE_UNAVAILABLE_DETAIL) from exc

    def get(self, key: str) -> str | None:
        self.ensure_ready()

        db = self._session_factory()
        try:
            entry = db.get(KeyValueEntry, key)
            return entry.value if entry is not None else None
        except SQLAlchemyError as exc:
            logger.exception('Reading key %r from the backing store failed.', key)
            raise StorageUnavailable(STORAGE_UNAVAILABLE_DETAIL) from exc
        finally:
            db.close()

    def set(self, key: str, value: str) -> None:
        self.ensure_ready()

        db = self._session_factory()
        try:
            entry = db.get(KeyValueEntry, key)
            if entry is None:
                entry = KeyValueEntry(key=key, value=value)
                db.add(entry)
            else:
                entry.value = value
            entry.updated_at = datetime.now()
            db.commit()
        except SQLAlchemyError as exc:
            db.rollback()
            logger.exception('Writing key %r to the backing store failed.', key)
            raise StorageUnavailable(STORAGE_UNAVAILABLE_DETAIL) from exc
        finally:
            db.close()

    def remove(self, key: str) -> None:
        self.ensure_ready()

        db = self._session_factory()
        try:
            entry = db.get(KeyValueEntry, key)
            if entry is not None:
                db.delete(entry)
                db.commit()
        except SQLAlchemyError as exc:
            db.rollback()
            logger.exception('Removing key %r from the backing store failed.', key)
            raise StorageUnavailable(STORAGE_UNAVAILABLE_DETAIL) from exc
        finally:
            db.close()
