from __future__ import annotations

"""
Unit tests for Package Name Parsing.

Verifies segment splitting, raw marker stripping, rejection of malformed
stems and the synthesized private unit names.
"""

import pytest

from protocrate.core.naming.package_names import (
    internal_unit_name,
    parse_package_name,
    strip_raw_markers,
)
from protocrate.domain.errors import ParseError


def test_parse_single_segment():
    assert parse_package_name("foo") == ["foo"]


def test_parse_dotted_stem():
    assert parse_package_name("foo.bar.v2") == ["foo", "bar", "v2"]


def test_raw_markers_are_stripped_before_splitting():
    assert strip_raw_markers("google.r#type") == "google.type"
    assert parse_package_name("google.r#type.v1") == ["google", "type", "v1"]


@pytest.mark.parametrize("stem", ["", "   ", "r#"])
def test_empty_stem_is_rejected(stem):
    with pytest.raises(ParseError):
        parse_package_name(stem)


@pytest.mark.parametrize(
    "stem", ["foo..bar", ".foo", "foo.", "foo.1abc", "foo-bar", "_", "a._", "a.b\n.c", "a.b c"]
)
def test_invalid_segments_are_rejected(stem):
    with pytest.raises(ParseError) as exc:
        parse_package_name(stem)
    assert exc.value.stem == stem


def test_internal_unit_name():
    assert internal_unit_name("foo") == "foo_internal"
    assert internal_unit_name("foo.v1") == "foo_v1_internal"
    assert internal_unit_name("google.r#type") == "google_type_internal"
