"""Tests for known-field checks and the node existence check."""

import pytest

from field_header_filter.errors import FieldListSyntaxError, UnknownFieldError
from field_header_filter.field_filter import OMITTED, FieldFilter
from field_header_filter.field_tree import build_field_tree, collect_known_paths
from field_header_filter.validation import ensure_known_fields, find_unknown_fields, node_exists


def test_collect_known_paths_walks_objects_and_arrays():
    data = {"routes": [{"legs": [{"points": [1, 2]}]}, {"distance": 3}], "id": 1}
    assert collect_known_paths(data) == {
        "routes",
        "routes.legs",
        "routes.legs.points",
        "routes.distance",
        "id",
    }


def test_collect_known_paths_of_scalar_is_empty():
    assert collect_known_paths(42) == set()


def test_build_field_tree_shares_prefixes():
    tree = build_field_tree([("a", "b"), ("a", "c"), ("d",)])
    assert {k: set(v) for k, v in tree.items()} == {"a": {"b", "c"}, "d": set()}


def test_find_unknown_fields_per_input(full_object):
    unknown = find_unknown_fields(
        full_object,
        include="A(B, nope), A.B.X(*), ghost(*)",
        exclude="A.C.W",
        explicit_fields=["A.B.X", "A.Missing", "A.Missing"],
    )
    assert unknown == {
        "include": ["A.nope", "ghost.*"],
        "exclude": ["A.C.W"],
        "explicit": ["A.Missing"],
    }


def test_find_unknown_fields_all_known(full_object):
    assert find_unknown_fields(full_object, "A", "A.C", ["A.B.X"]) == {
        "include": [],
        "exclude": [],
        "explicit": [],
    }


def test_find_unknown_fields_rejects_bad_grammar(full_object):
    with pytest.raises(FieldListSyntaxError):
        find_unknown_fields(full_object, include="A(")


def test_ensure_known_fields_raises_with_details(full_object):
    with pytest.raises(UnknownFieldError) as excinfo:
        ensure_known_fields(full_object, include="A, Nope")
    assert excinfo.value.unknown["include"] == ["Nope"]
    assert "Nope" in str(excinfo.value)


def test_ensure_known_fields_passes(full_object):
    ensure_known_fields(full_object, include="A.B", exclude="A.C.Z")


def test_node_exists_in_filtered_response(full_object, explicit_fields):
    filtered = FieldFilter(include="A", explicit_fields=explicit_fields).apply(full_object)
    assert node_exists(filtered, "A.B.Y")
    assert node_exists(filtered, " A.C ")
    assert not node_exists(filtered, "A.B.X")
    assert not node_exists(filtered, "")


def test_node_exists_on_omitted_result():
    assert not node_exists(OMITTED, "A")
