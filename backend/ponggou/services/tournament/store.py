"""Key-value persistence for tournament state.

The session hands the store five records (players, tables, queue,
matches, settings) after every mutation and reads them back on start-up.
Missing keys are simply absent from ``load()``; the state layer supplies
defaults so a cold start works.
"""
import json
import logging
from abc import ABC, abstractmethod
from typing import Any, Dict

from sqlalchemy.exc import SQLAlchemyError

from ponggou import db
from ponggou.models import StoreEntry
from .state import STORE_KEYS

logger = logging.getLogger(__name__)

DEFAULT_PREFIX = 'pongGou_'


class Store(ABC):
    """Backend contract. ``save`` is all-or-nothing: on failure it raises
    and no key is left half-written."""

    @abstractmethod
    def load(self) -> Dict[str, Any]:
        ...

    @abstractmethod
    def save(self, records: Dict[str, Any]) -> None:
        ...

    @abstractmethod
    def clear(self) -> None:
        ...


class MemoryStore(Store):
    """Holds JSON text per key, like a browser's localStorage."""

    def __init__(self, prefix: str = DEFAULT_PREFIX):
        self.prefix = prefix
        self.data: Dict[str, str] = {}

    def load(self) -> Dict[str, Any]:
        records = {}
        for key in STORE_KEYS:
            raw = self.data.get(self.prefix + key)
            if raw is not None:
                records[key] = json.loads(raw)
        return records

    def save(self, records: Dict[str, Any]) -> None:
        for key in STORE_KEYS:
            self.data[self.prefix + key] = json.dumps(records[key])

    def clear(self) -> None:
        for key in STORE_KEYS:
            self.data.pop(self.prefix + key, None)


class SqlStore(Store):
    """One ``StoreEntry`` row per key; all five keys commit together."""

    def __init__(self, prefix: str = DEFAULT_PREFIX):
        self.prefix = prefix

    def load(self) -> Dict[str, Any]:
        keys = [self.prefix + k for k in STORE_KEYS]
        rows = StoreEntry.query.filter(StoreEntry.key.in_(keys)).all()
        by_key = {row.key: row.value for row in rows}
        records = {}
        for key in STORE_KEYS:
            raw = by_key.get(self.prefix + key)
            if raw is None:
                continue
            try:
                records[key] = json.loads(raw)
            except ValueError:
                logger.warning(f"[store] discarding unreadable record key={self.prefix + key}")
        return records

    def save(self, records: Dict[str, Any]) -> None:
        try:
            for key in STORE_KEYS:
                full_key = self.prefix + key
                entry = StoreEntry.query.filter_by(key=full_key).first()
                if entry is None:
                    entry = StoreEntry(key=full_key)
                entry.value = json.dumps(records[key])
                db.session.add(entry)
            db.session.commit()
        except SQLAlchemyError:
            db.session.rollback()
            logger.error('[store] save failed', exc_info=True)
            raise

    def clear(self) -> None:
        try:
            keys = [self.prefix + k for k in STORE_KEYS]
            StoreEntry.query.filter(StoreEntry.key.in_(keys)).delete(synchronize_session=False)
            db.session.commit()
        except SQLAlchemyError:
            db.session.rollback()
            logger.error('[store] clear failed', exc_info=True)
            raise
