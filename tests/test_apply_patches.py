"""Tests for tools/apply_patches.py — RFC 6902 semantics over plain JSON trees."""

from __future__ import annotations

import copy

import pytest

from resume_patch.tools.apply_patches import JsonPatchApplicator, apply_json_patch
from resume_patch.tools.errors import AssertionFailedError, PathResolutionError


@pytest.fixture
def doc():
    return {
        "basics": {"name": "Ada", "tags": ["a", "b", "c"]},
        "items": [{"id": "x1"}, {"id": "x2"}],
        "": "empty-key",
        "a/b": 1,
        "m~n": 2,
    }


def _fails(doc, ops, error=PathResolutionError):
    with pytest.raises(error) as exc_info:
        apply_json_patch(doc, ops)
    return exc_info.value


# ======================================================================
# add
# ======================================================================
class TestAdd:

    def test_add_object_member(self, doc):
        out = apply_json_patch(doc, [{"op": "add", "path": "/basics/email", "value": "a@b.co"}])
        assert out["basics"]["email"] == "a@b.co"

    def test_add_replaces_existing_member(self, doc):
        out = apply_json_patch(doc, [{"op": "add", "path": "/basics/name", "value": "Grace"}])
        assert out["basics"]["name"] == "Grace"

    def test_append_with_dash(self, doc):
        out = apply_json_patch(doc, [{"op": "add", "path": "/items/-", "value": {"id": "x3"}}])
        assert [i["id"] for i in out["items"]] == ["x1", "x2", "x3"]

    def test_insert_shifts_right(self, doc):
        out = apply_json_patch(doc, [{"op": "add", "path": "/basics/tags/1", "value": "z"}])
        assert out["basics"]["tags"] == ["a", "z", "b", "c"]

    def test_insert_at_length_appends(self, doc):
        out = apply_json_patch(doc, [{"op": "add", "path": "/basics/tags/3", "value": "d"}])
        assert out["basics"]["tags"] == ["a", "b", "c", "d"]

    def test_index_past_length(self, doc):
        err = _fails(doc, [{"op": "add", "path": "/basics/tags/4", "value": "d"}])
        assert err.code == "OPERATION_VALUE_OUT_OF_BOUNDS"

    def test_leading_zero_index(self, doc):
        err = _fails(doc, [{"op": "add", "path": "/basics/tags/01", "value": "d"}])
        assert err.code == "OPERATION_PATH_ILLEGAL_ARRAY_INDEX"

    def test_missing_parent(self, doc):
        err = _fails(doc, [{"op": "add", "path": "/nope/child", "value": 1}])
        assert err.code == "OPERATION_PATH_UNRESOLVABLE"
        assert err.path == "/nope"

    def test_scalar_parent(self, doc):
        err = _fails(doc, [{"op": "add", "path": "/basics/name/first", "value": "A"}])
        assert err.code == "OPERATION_PATH_CANNOT_ADD"

    def test_dash_not_final(self, doc):
        err = _fails(doc, [{"op": "add", "path": "/items/-/id", "value": "x"}])
        assert err.code == "OPERATION_PATH_UNRESOLVABLE"

    def test_add_root_replaces_document(self, doc):
        assert apply_json_patch(doc, [{"op": "add", "path": "", "value": {"k": 1}}]) == {"k": 1}

    def test_escaped_keys(self, doc):
        out = apply_json_patch(doc, [
            {"op": "replace", "path": "/a~1b", "value": 10},
            {"op": "replace", "path": "/m~0n", "value": 20},
            {"op": "replace", "path": "/", "value": "still-empty-key"},
        ])
        assert out["a/b"] == 10
        assert out["m~n"] == 20
        assert out[""] == "still-empty-key"


# ======================================================================
# remove / replace
# ======================================================================
class TestRemoveReplace:

    def test_remove_member(self, doc):
        out = apply_json_patch(doc, [{"op": "remove", "path": "/basics/tags"}])
        assert "tags" not in out["basics"]

    def test_remove_element_shifts_left(self, doc):
        out = apply_json_patch(doc, [{"op": "remove", "path": "/basics/tags/0"}])
        assert out["basics"]["tags"] == ["b", "c"]

    def test_remove_missing(self, doc):
        err = _fails(doc, [{"op": "remove", "path": "/basics/email"}])
        assert err.code == "OPERATION_PATH_UNRESOLVABLE"
        assert err.index == 0

    def test_remove_out_of_range(self, doc):
        assert _fails(doc, [{"op": "remove", "path": "/items/2"}]).code == "OPERATION_PATH_UNRESOLVABLE"

    def test_remove_dash(self, doc):
        assert _fails(doc, [{"op": "remove", "path": "/items/-"}]).code == "OPERATION_PATH_UNRESOLVABLE"

    def test_remove_root(self, doc):
        assert _fails(doc, [{"op": "remove", "path": ""}]).code == "OPERATION_PATH_CANNOT_REMOVE_ROOT"

    def test_replace_member(self, doc):
        out = apply_json_patch(doc, [{"op": "replace", "path": "/basics/name", "value": "Grace"}])
        assert out["basics"]["name"] == "Grace"

    def test_replace_element(self, doc):
        out = apply_json_patch(doc, [{"op": "replace", "path": "/items/1", "value": {"id": "y"}}])
        assert out["items"] == [{"id": "x1"}, {"id": "y"}]

    def test_replace_missing(self, doc):
        assert _fails(doc, [{"op": "replace", "path": "/basics/email", "value": "x"}]).code == "OPERATION_PATH_UNRESOLVABLE"

    def test_replace_root(self, doc):
        assert apply_json_patch(doc, [{"op": "replace", "path": "", "value": []}]) == []


# ======================================================================
# move / copy
# ======================================================================
class TestMoveCopy:

    def test_move_member(self, doc):
        out = apply_json_patch(doc, [{"op": "move", "from": "/basics/name", "path": "/name"}])
        assert out["name"] == "Ada"
        assert "name" not in out["basics"]

    def test_move_reorders_array(self, doc):
        out = apply_json_patch(doc, [{"op": "move", "from": "/items/0", "path": "/items/1"}])
        assert [i["id"] for i in out["items"]] == ["x2", "x1"]

    def test_move_onto_itself_is_noop(self, doc):
        out = apply_json_patch(doc, [{"op": "move", "from": "/basics", "path": "/basics"}])
        assert out == doc

    def test_move_into_descendant(self, doc):
        err = _fails(doc, [{"op": "move", "from": "/basics", "path": "/basics/tags/0"}])
        assert err.code == "OPERATION_MOVE_INTO_DESCENDANT"

    def test_move_missing_from(self, doc):
        err = _fails(doc, [{"op": "move", "from": "/basics/email", "path": "/email"}])
        assert err.code == "OPERATION_FROM_UNRESOLVABLE"
        assert err.path == "/basics/email"

    def test_copy_is_deep(self, doc):
        out = apply_json_patch(doc, [
            {"op": "copy", "from": "/items/0", "path": "/items/-"},
            {"op": "replace", "path": "/items/2/id", "value": "x3"},
        ])
        assert [i["id"] for i in out["items"]] == ["x1", "x2", "x3"]

    def test_copy_missing_from(self, doc):
        assert _fails(doc, [{"op": "copy", "from": "/zzz", "path": "/a"}]).code == "OPERATION_FROM_UNRESOLVABLE"


# ======================================================================
# test
# ======================================================================
class TestTestOperation:

    def test_equal(self, doc):
        assert apply_json_patch(doc, [{"op": "test", "path": "/basics/tags", "value": ["a", "b", "c"]}]) == doc

    def test_mismatch(self, doc):
        err = _fails(doc, [{"op": "test", "path": "/basics/name", "value": "Grace"}], AssertionFailedError)
        assert err.code == "TEST_OPERATION_FAILED"
        assert err.path == "/basics/name"

    def test_missing_path_is_resolution_error(self, doc):
        assert _fails(doc, [{"op": "test", "path": "/zzz", "value": 1}]).code == "OPERATION_PATH_UNRESOLVABLE"

    def test_int_float_equal(self):
        assert apply_json_patch({"n": 1}, [{"op": "test", "path": "/n", "value": 1.0}]) == {"n": 1}

    def test_bool_not_number(self):
        _fails({"n": 1}, [{"op": "test", "path": "/n", "value": True}], AssertionFailedError)

    def test_object_key_order_irrelevant(self):
        tree = {"o": {"a": 1, "b": 2}}
        assert apply_json_patch(tree, [{"op": "test", "path": "/o", "value": {"b": 2, "a": 1}}]) == tree


# ======================================================================
# Batch semantics
# ======================================================================
class TestBatch:

    def test_input_never_mutated(self, doc):
        before = copy.deepcopy(doc)
        apply_json_patch(doc, [{"op": "remove", "path": "/items/0"}])
        assert doc == before

    def test_input_untouched_on_failure(self, doc):
        before = copy.deepcopy(doc)
        _fails(doc, [
            {"op": "remove", "path": "/items/0"},
            {"op": "remove", "path": "/items/5"},
        ])
        assert doc == before

    def test_failure_reports_index(self, doc):
        err = _fails(doc, [
            {"op": "replace", "path": "/basics/name", "value": "B"},
            {"op": "replace", "path": "/basics/name", "value": "C"},
            {"op": "remove", "path": "/missing"},
        ])
        assert err.index == 2
        assert err.operation == {"op": "remove", "path": "/missing"}

    def test_each_operation_sees_previous(self, doc):
        out = apply_json_patch(doc, [
            {"op": "add", "path": "/basics/email", "value": "a@b.co"},
            {"op": "test", "path": "/basics/email", "value": "a@b.co"},
            {"op": "move", "from": "/basics/email", "path": "/email"},
        ])
        assert out["email"] == "a@b.co"

    def test_order_matters(self):
        tree = {"list": ["a"]}
        first = apply_json_patch(tree, [
            {"op": "add", "path": "/list/0", "value": "b"},
            {"op": "remove", "path": "/list/1"},
        ])
        second = apply_json_patch(tree, [
            {"op": "remove", "path": "/list/0"},
            {"op": "add", "path": "/list/0", "value": "b"},
        ])
        assert first == second == {"list": ["b"]}
        third = apply_json_patch(tree, [
            {"op": "add", "path": "/list/-", "value": "b"},
            {"op": "remove", "path": "/list/0"},
        ])
        fourth_tree = {"list": ["a", "c"]}
        a = apply_json_patch(fourth_tree, [
            {"op": "remove", "path": "/list/0"},
            {"op": "replace", "path": "/list/0", "value": "x"},
        ])
        b = apply_json_patch(fourth_tree, [
            {"op": "replace", "path": "/list/0", "value": "x"},
            {"op": "remove", "path": "/list/0"},
        ])
        assert third == {"list": ["b"]}
        assert a == {"list": ["x"]}
        assert b == {"list": ["c"]}

    def test_values_are_not_aliased(self):
        value = {"id": "x"}
        out = JsonPatchApplicator.apply({"items": []}, [])
        assert out == {"items": []}
        out = apply_json_patch({"items": []}, [{"op": "add", "path": "/items/-", "value": value}])
        value["id"] = "changed"
        assert out["items"][0]["id"] == "x"
