from __future__ import annotations

"""
Module Tree Builder.

Parses the flat files produced by the code generator into placements and
folds them into a ModuleNode hierarchy. Building the tree is pure: files are
only listed here, never moved, so the whole set is validated before the
relocation step touches the disk.

A file 'foo.bar.v2.rs' yields the private unit 'foo_bar_v2_internal'
declared inside 'foo::bar' and re-exported by the public module
'foo::bar::v2'.
"""

import logging
import os
from typing import Iterable, List, Optional, Sequence

from protocrate.core.naming.escaper import escape_identifier
from protocrate.core.naming.package_names import internal_unit_name, parse_package_name
from protocrate.domain.errors import NameCollisionError
from protocrate.domain.module_models import ModuleNode, UnitPlacement
from protocrate.infra.fs import FileSystem, LocalFileSystem

logger = logging.getLogger(__name__)

# -----------------------------------------------------------------------------
# PUBLIC API
# -----------------------------------------------------------------------------

def plan_units(
        src_dir: str,
        ignore_files: Optional[Iterable[str]] = None,
        fs: Optional[FileSystem] = None,
) -> List[UnitPlacement]:
    """
    Turn every flat file of `src_dir` into a UnitPlacement.

    Args:
        src_dir: Directory holding the freshly generated files.
        ignore_files: Paths to leave out (e.g. a previous aggregation file).
        fs: Filesystem capability, defaults to the local disk.

    Returns:
        List[UnitPlacement]: Placements in sorted path order.

    Raises:
        FileSystemError: If the directory cannot be listed.
        ParseError: If a file stem is not a valid package name.
    """
    fs = fs or LocalFileSystem()
    ignored = {os.path.abspath(p) for p in (ignore_files or [])}

    units: List[UnitPlacement] = []
    for path in sorted(fs.list_files(src_dir)):
        if os.path.abspath(path) in ignored:
            logger.debug(f"Skipping ignored file: {path}")
            continue
        units.append(plan_unit(path))

    logger.info(f"Planned {len(units)} generated unit(s) in {src_dir}")
    return units


def plan_unit(path: str) -> UnitPlacement:
    """Parse a single flat file path into its placement."""
    stem, extension = os.path.splitext(os.path.basename(path))
    segments = parse_package_name(stem)
    return UnitPlacement(
        source_path=path,
        segments=tuple(segments),
        unit_name=internal_unit_name(stem),
        extension=extension,
    )


def build_module_tree(units: Iterable[UnitPlacement]) -> ModuleNode:
    """
    Insert every placement into a fresh root node.

    Raises:
        NameCollisionError: If two names resolve to one identifier in a scope.
    """
    root = ModuleNode()
    for unit in units:
        insert_unit(root, unit.unit_name, unit.segments)
    return root


def insert_unit(node: ModuleNode, unit_name: str, path: Sequence[str]) -> None:
    """
    Place `unit_name` along `path` below `node`.

    The unit is declared privately one level above its namespace and
    re-exported from the namespace matching its full path.

    Args:
        node: Current tree level.
        unit_name: Raw private unit name.
        path: Remaining raw segments.
    """
    if not path:
        _add_exported_unit(node, unit_name)
        return

    child = _get_or_create_child(node, path[0])
    insert_unit(child, unit_name, path[1:])

    if len(path) == 1:
        _add_internal_unit(node, unit_name)

# -----------------------------------------------------------------------------
# PRIVATE HELPERS
# -----------------------------------------------------------------------------

def _get_or_create_child(node: ModuleNode, raw_segment: str) -> ModuleNode:
    key = escape_identifier(raw_segment)
    raw = raw_segment.strip()

    child = node.children.get(key)
    if child is not None:
        if child.name != raw:
            raise NameCollisionError(key, child.name, raw)
        return child

    if key in node.internal_units:
        raise NameCollisionError(key, node.raw_names[key], raw)

    child = ModuleNode(name=raw)
    node.children[key] = child
    return child


def _add_internal_unit(node: ModuleNode, unit_name: str) -> None:
    ident = escape_identifier(unit_name)
    raw = unit_name.strip()

    if ident in node.internal_units:
        raise NameCollisionError(ident, node.raw_names[ident], raw)
    if ident in node.children:
        raise NameCollisionError(ident, node.children[ident].name, raw)

    node.internal_units.add(ident)
    node.raw_names[ident] = raw


def _add_exported_unit(node: ModuleNode, unit_name: str) -> None:
    ident = escape_identifier(unit_name)
    raw = unit_name.strip()

    if ident in node.exported_units:
        raise NameCollisionError(ident, node.raw_names.get(ident, raw), raw)

    node.exported_units.add(ident)
    node.raw_names[ident] = raw
