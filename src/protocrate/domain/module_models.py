from __future__ import annotations

"""
Module Tree Data Models.

Provides the recursive namespace node built from dotted package names and
the placement record describing where a generated unit file ends up.
"""

from dataclasses import dataclass, field
from typing import Dict, Set, Tuple

# -----------------------------------------------------------------------------
# STRUCTURAL COMPONENTS
# -----------------------------------------------------------------------------

@dataclass
class ModuleNode:
    """
    One namespace level of the generated crate.

    Attributes:
        name: Raw package segment this node was created from ("" for the root).
        children: Nested namespaces keyed by their escaped identifier.
        internal_units: Escaped names of private unit modules declared here.
        exported_units: Escaped names of sibling units re-exported wholesale here.
        raw_names: Escaped unit identifier -> raw unit name, used for ordering.
    """
    name: str = ""
    children: Dict[str, "ModuleNode"] = field(default_factory=dict)
    internal_units: Set[str] = field(default_factory=set)
    exported_units: Set[str] = field(default_factory=set)
    raw_names: Dict[str, str] = field(default_factory=dict)

    def depth(self) -> int:
        """Number of namespace levels below this node."""
        if not self.children:
            return 0
        return 1 + max(child.depth() for child in self.children.values())


@dataclass(frozen=True)
class UnitPlacement:
    """
    A flat generated file and its position in the namespace tree.

    Attributes:
        source_path: Current absolute path of the flat file.
        segments: Raw package segments parsed from the file stem.
        unit_name: Synthesized private module name (pre-escape).
        extension: Original file extension, including the dot.
    """
    source_path: str
    segments: Tuple[str, ...]
    unit_name: str
    extension: str

    @property
    def file_name(self) -> str:
        return f"{self.unit_name}{self.extension}"

    @property
    def directory_segments(self) -> Tuple[str, ...]:
        return self.segments[:-1]
