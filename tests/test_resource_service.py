from __future__ import annotations

import copy
import sys
from pathlib import Path

import pytest

# Garante que o pacote api seja importável durante os testes locais
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from api.repositories.json_storage import JsonDocumentStore  # noqa: E402
from api.services.resource_service import (  # noqa: E402
    DuplicateIdError,
    ResourceNotFoundError,
    ResourceService,
)


@pytest.fixture()
def svc():
    store = JsonDocumentStore.from_dict(
        {
            "tasks": [{"id": 1, "title": "A", "done": False}],
            "profile": {"name": "mock", "tz": "UTC"},
        }
    )
    return ResourceService(store)


def test_create_assigns_id_and_lists_in_order(svc):
    created = [svc.create("tasks", {"title": t}) for t in ("B", "C", "D")]
    assert [c["id"] for c in created] == [2, 3, 4]
    assert [r["title"] for r in svc.list_records("tasks")] == ["A", "B", "C", "D"]
    assert svc.get("tasks", "3") == {"id": 3, "title": "C"}


def test_create_keeps_client_id_and_rejects_duplicates(svc):
    assert svc.create("tasks", {"id": "custom", "title": "X"})["id"] == "custom"
    with pytest.raises(DuplicateIdError) as exc:
        svc.create("tasks", {"id": 1, "title": "again"})
    assert exc.value.status_code == 409
    assert len(svc.list_records("tasks")) == 2


def test_replace_drops_missing_fields_and_keeps_id(svc):
    updated = svc.replace("tasks", "1", {"id": 99, "title": "Z"})
    assert updated == {"id": 1, "title": "Z"}
    assert svc.get("tasks", "1") == {"id": 1, "title": "Z"}


def test_patch_merges_fields(svc):
    updated = svc.patch("tasks", "1", {"done": True})
    assert updated == {"id": 1, "title": "A", "done": True}


def test_delete_then_get_is_not_found(svc):
    removed = svc.delete("tasks", "1")
    assert removed["title"] == "A"
    with pytest.raises(ResourceNotFoundError):
        svc.get("tasks", "1")


def test_not_found_operations_do_not_mutate(svc):
    before = copy.deepcopy(svc.dump())
    for call in (
        lambda: svc.replace("tasks", "42", {"title": "nope"}),
        lambda: svc.patch("tasks", "42", {"title": "nope"}),
        lambda: svc.delete("tasks", "42"),
        lambda: svc.create("unknown", {"title": "nope"}),
        lambda: svc.get("profile", "1"),
    ):
        with pytest.raises(ResourceNotFoundError):
            call()
    assert svc.dump() == before


def test_singular_resources(svc):
    assert svc.read("profile") == {"name": "mock", "tz": "UTC"}
    assert svc.write_singular("profile", {"tz": "BRT"}, merge=True) == {"name": "mock", "tz": "BRT"}
    assert svc.write_singular("profile", {"name": "other"}) == {"name": "other"}
    assert svc.dump()["profile"] == {"name": "other"}
    with pytest.raises(ResourceNotFoundError):
        svc.write_singular("tasks", {})


def test_summary_describes_resources(svc):
    assert svc.summary() == [
        {"name": "tasks", "kind": "collection", "count": 1},
        {"name": "profile", "kind": "object", "count": None},
    ]
