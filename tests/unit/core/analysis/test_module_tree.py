from __future__ import annotations

"""
Unit tests for the Module Tree Builder.

Verifies unit planning from flat file names, the two-level placement of
private units and exports, collision detection and directory listing through
the injected filesystem.
"""

import os

import pytest

from protocrate.core.analysis.module_tree import (
    build_module_tree,
    insert_unit,
    plan_unit,
    plan_units,
)
from protocrate.domain.errors import FileSystemError, NameCollisionError, ParseError
from protocrate.domain.module_models import ModuleNode

SRC = os.path.join(os.sep, "gen", "src")


def _src(name: str) -> str:
    return os.path.join(SRC, name)


def _tree(*file_names: str) -> ModuleNode:
    return build_module_tree(plan_unit(_src(n)) for n in file_names)


# -----------------------------------------------------------------------------
# PLANNING
# -----------------------------------------------------------------------------

def test_plan_unit_fields():
    unit = plan_unit(_src("foo.bar.v2.rs"))

    assert unit.source_path == _src("foo.bar.v2.rs")
    assert unit.segments == ("foo", "bar", "v2")
    assert unit.unit_name == "foo_bar_v2_internal"
    assert unit.extension == ".rs"
    assert unit.file_name == "foo_bar_v2_internal.rs"
    assert unit.directory_segments == ("foo", "bar")


def test_plan_units_sorted_and_ignores_files(make_memory_fs):
    fs = make_memory_fs([_src("b.rs"), _src("a.v1.rs"), _src("lib.rs")])

    units = plan_units(SRC, ignore_files=[_src("lib.rs")], fs=fs)

    assert [u.unit_name for u in units] == ["a_v1_internal", "b_internal"]


def test_plan_units_propagates_parse_errors(make_memory_fs):
    fs = make_memory_fs([_src("good.rs"), _src("bad..name.rs")])
    with pytest.raises(ParseError):
        plan_units(SRC, fs=fs)


def test_plan_unit_rejects_line_break_inside_segment():
    with pytest.raises(ParseError):
        plan_unit(_src("a.b\n.c.rs"))


def test_plan_units_unreadable_directory(memory_fs):
    with pytest.raises(FileSystemError):
        plan_units(SRC, fs=memory_fs)


# -----------------------------------------------------------------------------
# INSERTION
# -----------------------------------------------------------------------------

def test_single_file_without_children():
    tree = _tree("foo.rs")

    assert tree.internal_units == {"foo_internal"}
    assert set(tree.children) == {"foo"}
    assert tree.children["foo"].exported_units == {"foo_internal"}
    assert tree.children["foo"].internal_units == set()


def test_unit_declared_one_level_above_its_namespace():
    tree = _tree("foo.v1.rs")

    foo = tree.children["foo"]
    assert tree.internal_units == set()
    assert foo.internal_units == {"foo_v1_internal"}
    assert foo.children["v1"].exported_units == {"foo_v1_internal"}


def test_sibling_leaves_do_not_leak():
    tree = _tree("foo.v1.one.rs", "foo.v1.two.rs")

    v1 = tree.children["foo"].children["v1"]
    assert v1.internal_units == {"foo_v1_one_internal", "foo_v1_two_internal"}
    assert v1.children["one"].exported_units == {"foo_v1_one_internal"}
    assert v1.children["two"].exported_units == {"foo_v1_two_internal"}


def test_depth_matches_segment_count():
    tree = _tree("a.rs", "a.b.c.d.rs")
    assert tree.depth() == 4


def test_package_and_leaf_share_a_node():
    """'foo' and 'foo.v1' both live under namespace foo."""
    tree = _tree("foo.rs", "foo.v1.rs")

    foo = tree.children["foo"]
    assert tree.internal_units == {"foo_internal"}
    assert foo.exported_units == {"foo_internal"}
    assert foo.internal_units == {"foo_v1_internal"}


def test_reserved_segments_are_escaped_in_keys():
    tree = _tree("type.rs", "crate.v1.rs")

    assert set(tree.children) == {"r#type", "crate_"}
    assert tree.children["r#type"].name == "type"
    assert tree.children["crate_"].name == "crate"


def test_insert_unit_accepts_raw_path():
    root = ModuleNode()
    insert_unit(root, "x_y_internal", ["x", "y"])

    assert root.children["x"].internal_units == {"x_y_internal"}
    assert root.children["x"].children["y"].exported_units == {"x_y_internal"}


# -----------------------------------------------------------------------------
# COLLISIONS
# -----------------------------------------------------------------------------

def test_duplicate_unit_name_in_same_scope_raises():
    """'r#type.rs' and 'type.rs' yield the same unit; this is an error, not last-write-wins."""
    with pytest.raises(NameCollisionError) as exc:
        _tree("r#type.rs", "type.rs")
    assert exc.value.identifier == "type_internal"


def test_distinct_segments_escaping_to_same_identifier_raise():
    with pytest.raises(NameCollisionError) as exc:
        _tree("self.rs", "self_.rs")

    assert exc.value.identifier == "self_"
    assert {exc.value.existing, exc.value.incoming} == {"self", "self_"}


def test_namespace_clashing_with_private_unit_raises():
    with pytest.raises(NameCollisionError):
        _tree("foo.rs", "foo_internal.rs")


def test_same_unit_name_in_different_scopes_is_allowed():
    tree = _tree("foo.bar.rs", "foo_bar.rs")

    assert "foo_bar_internal" in tree.internal_units
    assert "foo_bar_internal" in tree.children["foo"].internal_units
