import logging
from typing import Dict, Optional, Protocol

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import sessionmaker

from spice_shop.db.models import KeyValueEntry

logger = logging.getLogger(__name__)


class StorageError(Exception):
    """Raised when the key-value store cannot be read or written."""


class KeyValueStorage(Protocol):
    def read(self, key: str) -> Optional[bytes]:
        ...

    def write(self, key: str, value: bytes) -> None:
        ...


class MemoryStorage:
    """Dict-backed storage for CART_STORAGE_BACKEND=memory. Lives as long as the process."""

    def __init__(self, initial: Optional[Dict[str, bytes]] = None):
        self.data: Dict[str, bytes] = dict(initial or {})

    def read(self, key: str) -> Optional[bytes]:
        return self.data.get(key)

    def write(self, key: str, value: bytes) -> None:
        self.data[key] = value


class SqlStorage:
    """Key-value storage on a single SQL table, one row per key."""

    def __init__(self, session_factory: sessionmaker):
        self.session_factory = session_factory

    def read(self, key: str) -> Optional[bytes]:
        try:
            with self.session_factory() as session:
                result = session.execute(
                    select(KeyValueEntry.value).where(KeyValueEntry.key == key)
                )
                return result.scalar_one_or_none()
        except SQLAlchemyError as e:
            raise StorageError(f"Failed to read {key!r}: {e}") from e

    def write(self, key: str, value: bytes) -> None:
        try:
            with self.session_factory() as session:
                entry = session.get(KeyValueEntry, key)
                if entry:
                    entry.value = value
                else:
                    session.add(KeyValueEntry(key=key, value=value))
                session.commit()
        except SQLAlchemyError as e:
            raise StorageError(f"Failed to write {key!r}: {e}") from e
        logger.debug(f"Stored {len(value)} bytes under {key!r}")
