from __future__ import annotations

"""
Package Name Parsing.

Turns the stem of a generated file (e.g. 'foo.bar.v2') into its ordered
package segments and derives the private unit name the file is renamed to.
"""

import re
from typing import List

from protocrate.core.naming.escaper import RAW_IDENTIFIER_MARKER
from protocrate.domain.constants import INTERNAL_UNIT_SUFFIX, UNIT_NAME_JOINER
from protocrate.domain.errors import ParseError

SEGMENT_DELIMITER = "."

_SEGMENT_RX = re.compile(r"[A-Za-z_][A-Za-z0-9_]*")

# -----------------------------------------------------------------------------
# PUBLIC API
# -----------------------------------------------------------------------------

def strip_raw_markers(stem: str) -> str:
    """Remove raw identifier markers left by the code generator in file names."""
    return stem.replace(RAW_IDENTIFIER_MARKER, "")


def parse_package_name(stem: str) -> List[str]:
    """
    Split a file stem into its package segments.

    Args:
        stem: File name without extension, e.g. 'google.r#type.v1'.

    Returns:
        List[str]: Raw segments in path order, e.g. ['google', 'type', 'v1'].

    Raises:
        ParseError: If the stem is empty or any segment is not an identifier.
    """
    cleaned = strip_raw_markers(stem).strip()
    if not cleaned:
        raise ParseError(f"Empty package name in file stem '{stem}'.", stem=stem)

    segments = cleaned.split(SEGMENT_DELIMITER)
    for segment in segments:
        if not _is_valid_segment(segment):
            raise ParseError(
                f"Invalid package segment '{segment}' in file stem '{stem}'.", stem=stem
            )

    return segments


def internal_unit_name(stem: str) -> str:
    """
    Build the private module name for a generated file.

    The suffix keeps unit names apart from namespace names even when a
    package and one of its leaves share a spelling.

    Args:
        stem: File name without extension.

    Returns:
        str: e.g. 'foo.v1' -> 'foo_v1_internal'.
    """
    cleaned = strip_raw_markers(stem).strip()
    return cleaned.replace(SEGMENT_DELIMITER, UNIT_NAME_JOINER) + INTERNAL_UNIT_SUFFIX

# -----------------------------------------------------------------------------
# PRIVATE HELPERS
# -----------------------------------------------------------------------------

def _is_valid_segment(segment: str) -> bool:
    # A lone underscore is the wildcard pattern, never a module name
    return segment != "_" and bool(_SEGMENT_RX.fullmatch(segment))
