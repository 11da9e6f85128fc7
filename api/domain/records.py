"""Domain helpers for record identifiers and lookups."""
from __future__ import annotations

import secrets
import string
from typing import Any, Mapping, Sequence

ID_ALPHABET = string.ascii_letters + string.digits + "_-"
GENERATED_ID_LENGTH = 7


def _is_int_id(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def random_id(length: int = GENERATED_ID_LENGTH) -> str:
    return "".join(secrets.choice(ID_ALPHABET) for _ in range(length))


def same_id(left: Any, right: Any) -> bool:
    """Ids from the URL are strings, so compare textual forms."""
    if left is None or right is None:
        return False
    return str(left) == str(right)


def find_index(records: Sequence[Any], id_field: str, record_id: Any) -> int | None:
    """Return the position of the record with the given id, if any."""
    for idx, record in enumerate(records):
        if isinstance(record, Mapping) and same_id(record.get(id_field), record_id):
            return idx
    return None


def next_id(records: Sequence[Any], id_field: str) -> int | str:
    """
    Pick an id for a new record.

    Empty collection -> 1; every existing id is an integer -> max + 1;
    otherwise (any non-integer id) -> a short random string.
    """
    ids = [r.get(id_field) for r in records if isinstance(r, Mapping) and id_field in r]
    if not ids:
        return 1
    int_ids = [i for i in ids if _is_int_id(i)]
    if len(int_ids) == len(ids):
        return max(int_ids) + 1
    candidate = random_id()
    while find_index(records, id_field, candidate) is not None:
        candidate = random_id()
    return candidate
