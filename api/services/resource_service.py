"""CRUD use cases over the resources of the JSON document."""
from __future__ import annotations

import logging
from typing import Any

from api.domain.records import find_index, next_id
from api.repositories.json_storage import JsonDocumentStore

logger = logging.getLogger(__name__)


class ResourceError(Exception):
    def __init__(self, message: str, code: str = "invalid", status_code: int = 400):
        super().__init__(message)
        self.message = message
        self.code = code
        self.status_code = status_code


class ResourceNotFoundError(ResourceError):
    """Raised for unknown resource names, ids, or routes that do not apply."""

    def __init__(self, message: str = "Not found"):
        super().__init__(message, "not_found", 404)


class DuplicateIdError(ResourceError):
    def __init__(self, message: str):
        super().__init__(message, "duplicate_id", 409)


class ResourceService:
    """List/get/create/replace/patch/delete against a JsonDocumentStore."""

    def __init__(self, store: JsonDocumentStore, id_field: str = "id") -> None:
        self.store = store
        self.id_field = id_field

    # ------------------------- lookups -------------------------
    def _collection(self, name: str) -> list:
        value = self.store.resource(name)
        if not isinstance(value, list):
            raise ResourceNotFoundError(f"Collection '{name}' not found")
        return value

    def _singular(self, name: str) -> dict:
        value = self.store.resource(name)
        if not isinstance(value, dict):
            raise ResourceNotFoundError(f"Resource '{name}' not found")
        return value

    def _index(self, name: str, record_id: str) -> tuple[list, int]:
        records = self._collection(name)
        idx = find_index(records, self.id_field, record_id)
        if idx is None:
            raise ResourceNotFoundError(f"'{name}' has no record with {self.id_field} {record_id}")
        return records, idx

    def is_collection(self, name: str) -> bool:
        return isinstance(self.store.resource(name), list)

    def is_singular(self, name: str) -> bool:
        return isinstance(self.store.resource(name), dict)

    def summary(self) -> list[dict]:
        """Resource names with their kind and size, for the homepage."""
        out = []
        for name in self.store.names():
            value = self.store.resource(name)
            kind = "collection" if isinstance(value, list) else "object"
            out.append({"name": name, "kind": kind, "count": len(value) if isinstance(value, list) else None})
        return out

    def dump(self) -> dict:
        return self.store.data

    # ------------------------- collections -------------------------
    def list_records(self, name: str) -> list:
        return self._collection(name)

    def get(self, name: str, record_id: str) -> dict:
        records, idx = self._index(name, record_id)
        return records[idx]

    def create(self, name: str, body: dict) -> dict:
        records = self._collection(name)
        record = dict(body)
        if record.get(self.id_field) is None:
            record[self.id_field] = next_id(records, self.id_field)
        elif find_index(records, self.id_field, record[self.id_field]) is not None:
            raise DuplicateIdError(f"'{name}' already has a record with {self.id_field} {record[self.id_field]}")
        records.append(record)
        self.store.commit()
        logger.debug("Created %s/%s", name, record[self.id_field])
        return record

    def replace(self, name: str, record_id: str, body: dict) -> dict:
        return self._update(name, record_id, body, merge=False)

    def patch(self, name: str, record_id: str, body: dict) -> dict:
        return self._update(name, record_id, body, merge=True)

    def _update(self, name: str, record_id: str, body: dict, *, merge: bool) -> dict:
        records, idx = self._index(name, record_id)
        current = records[idx]
        record = dict(current) if merge else {}
        record.update(body)
        record[self.id_field] = current.get(self.id_field)
        records[idx] = record
        self.store.commit()
        return record

    def delete(self, name: str, record_id: str) -> dict:
        records, idx = self._index(name, record_id)
        removed = records.pop(idx)
        self.store.commit()
        logger.debug("Deleted %s/%s", name, record_id)
        return removed

    # ------------------------- singular resources -------------------------
    def read_singular(self, name: str) -> dict:
        return self._singular(name)

    def write_singular(self, name: str, body: dict, *, merge: bool = False) -> dict:
        current = self._singular(name)
        if merge:
            current.update(body)
            value = current
        else:
            value = dict(body)
            self.store.data[name] = value
        self.store.commit()
        return value

    def read(self, name: str) -> Any:
        """GET /:name, whichever kind of resource it is."""
        if self.is_singular(name):
            return self.read_singular(name)
        return self.list_records(name)
