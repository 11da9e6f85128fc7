"""
JSON document persistence adapter.

The whole database is a single JSON object kept in memory for the lifetime
of the app and rewritten to disk after every mutation. The store keeps a
snapshot of the last persisted state so a failed write can be undone.
"""

from __future__ import annotations

import copy
import json
import logging
from pathlib import Path
from typing import Any

logger = logging.getLogger(__name__)


class StorageError(Exception):
    """Raised when the document cannot be read, validated or written."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


def validate_document(db: Any) -> dict:
    """Check the top-level shape of a document and return it."""
    if not isinstance(db, dict):
        raise StorageError(f"Data must be an object. Found {type(db).__name__}.")
    for key, value in db.items():
        if "/" in key:
            raise StorageError(f"Found / character in database property '{key}'.")
        if not isinstance(value, (list, dict)):
            raise StorageError(f"Type of '{key}' ({type(value).__name__}) is not supported.")
    return db


class JsonDocumentStore:
    """In-memory copy of one JSON document, committed back to its file."""

    def __init__(self, path: str | Path, *, persist: bool = True) -> None:
        self.path = Path(path)
        self.persist = persist
        self._data: dict = {}
        self._snapshot: dict = {}

    @classmethod
    def from_dict(cls, data: dict, *, path: str | Path = "db.json") -> "JsonDocumentStore":
        """Build a memory-only store around an existing mapping."""
        store = cls(path, persist=False)
        store._data = validate_document(data)
        store._snapshot = copy.deepcopy(store._data)
        return store

    @property
    def data(self) -> dict:
        return self._data

    def names(self) -> list[str]:
        return list(self._data.keys())

    def has(self, name: str) -> bool:
        return name in self._data

    def resource(self, name: str) -> list | dict | None:
        return self._data.get(name)

    def load(self) -> dict:
        """Read the file into memory. A missing file gives an empty document."""
        if self.path.exists():
            try:
                with self.path.open("r", encoding="utf-8") as f:
                    raw = f.read()
            except OSError as exc:
                raise StorageError(f"Could not read {self.path}: {exc}") from exc
            try:
                db = json.loads(raw) if raw.strip() else {}
            except ValueError as exc:
                raise StorageError(f"Malformed JSON in {self.path}: {exc}") from exc
        else:
            logger.info("Database %s not found, starting empty", self.path)
            db = {}
        self._data = validate_document(db)
        self._snapshot = copy.deepcopy(self._data)
        return self._data

    def save(self) -> None:
        self.path.write_text(json.dumps(self._data, ensure_ascii=False, indent=2), encoding="utf-8")

    def commit(self) -> None:
        """Persist the current document, or restore the last snapshot on failure."""
        if not self.persist:
            self._snapshot = copy.deepcopy(self._data)
            return
        try:
            self.save()
        except OSError as exc:
            logger.error("Failed to write %s: %s", self.path, exc)
            self.rollback()
            raise StorageError(f"Could not write {self.path}: {exc}") from exc
        self._snapshot = copy.deepcopy(self._data)

    def rollback(self) -> None:
        self._data = copy.deepcopy(self._snapshot)
