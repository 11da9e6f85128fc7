from __future__ import annotations

import json
import sys
from pathlib import Path

import pytest

# Garante que o pacote api seja importável durante os testes locais
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from api.domain.records import GENERATED_ID_LENGTH, find_index, next_id, same_id  # noqa: E402
from api.domain.rewrite import (  # noqa: E402
    DEFAULT_RULES,
    RewriteRuleError,
    compile_rule,
    compile_rules,
    load_rules_file,
    rewrite_path,
)


def test_next_id_starts_at_one():
    assert next_id([], "id") == 1


def test_next_id_increments_integer_ids():
    assert next_id([{"id": 3}, {"id": 7}, {"id": 5}], "id") == 8


def test_next_id_falls_back_to_random_string():
    value = next_id([{"id": "abc"}], "id")
    assert isinstance(value, str)
    assert len(value) == GENERATED_ID_LENGTH
    assert value != "abc"


def test_next_id_honours_custom_field():
    assert next_id([{"_id": 2}], "_id") == 3


def test_find_index_matches_textual_ids():
    records = [{"id": 1}, {"id": "x"}, "not-a-record"]
    assert find_index(records, "id", "1") == 0
    assert find_index(records, "id", "x") == 1
    assert find_index(records, "id", "2") is None
    assert not same_id(None, "None")


def test_default_rule_strips_api_prefix():
    rules = compile_rules(DEFAULT_RULES)
    assert rewrite_path(rules, "/api/tasks") == "/tasks"
    assert rewrite_path(rules, "/api/tasks/abc") == "/tasks/abc"
    assert rewrite_path(rules, "/API/tasks") == "/tasks"
    assert rewrite_path(rules, "/tasks") == "/tasks"
    assert rewrite_path(rules, "/apiary") == "/apiary"


def test_named_segments_are_substituted():
    rule = compile_rule("/blog/:resource/:id/show", "/:resource/:id")
    assert rule.apply("/blog/posts/3/show") == "/posts/3"
    assert rule.apply("/blog/posts/3/show/") == "/posts/3"
    assert rule.apply("/blog/posts/show") is None


def test_repeated_named_segment_is_a_rule_error():
    with pytest.raises(RewriteRuleError):
        compile_rule("/:id/x/:id", "/:id")
    with pytest.raises(RewriteRuleError):
        compile_rules({"/api/*": "/$1", "/:name/:name": "/:name"})


def test_next_id_mixed_ids_use_random_string():
    value = next_id([{"id": 5}, {"id": "x"}], "id")
    assert isinstance(value, str)
    assert len(value) == GENERATED_ID_LENGTH


def test_rules_are_chained_in_order():
    rules = compile_rules({"/api/*": "/$1", "/todos/*": "/tasks/$1"})
    assert rewrite_path(rules, "/api/todos/9") == "/tasks/9"


def test_load_rules_file(tmp_path):
    good = tmp_path / "routes.json"
    good.write_text(json.dumps({"/v1/*": "/$1"}), encoding="utf-8")
    assert load_rules_file(good) == {"/v1/*": "/$1"}

    bad = tmp_path / "bad.json"
    bad.write_text(json.dumps(["/v1/*"]), encoding="utf-8")
    with pytest.raises(RewriteRuleError):
        load_rules_file(bad)
    with pytest.raises(RewriteRuleError):
        load_rules_file(tmp_path / "absent.json")
