from __future__ import annotations

"""
Tree Relocation Service.

Moves the flat generated files into a directory hierarchy mirroring their
package segments and renames them after their private unit. Directory
names use the raw segments: identifier escaping only applies to code.

Targets are checked before the first move so that an occupied destination
aborts the run with the source directory untouched. Failures past that
point are fatal and are not rolled back.
"""

import logging
import os
from typing import List, Optional, Sequence

from protocrate.domain.errors import DestinationExistsError
from protocrate.domain.module_models import UnitPlacement
from protocrate.infra.fs import FileSystem, LocalFileSystem

logger = logging.getLogger(__name__)

# -----------------------------------------------------------------------------
# PUBLIC API
# -----------------------------------------------------------------------------

def relocation_target(src_dir: str, unit: UnitPlacement) -> str:
    """
    Compute where a unit file is moved to.

    Example:
        'src/foo.bar.v2.rs' -> 'src/foo/bar/foo_bar_v2_internal.rs'
    """
    return os.path.join(src_dir, *unit.directory_segments, unit.file_name)


def relocate_units(
        src_dir: str,
        units: Sequence[UnitPlacement],
        fs: Optional[FileSystem] = None,
        overwrite: bool = False,
) -> List[str]:
    """
    Move every unit file to its place in the namespace hierarchy.

    Args:
        src_dir: Root of the generated sources.
        units: Placements produced by the tree builder.
        fs: Filesystem capability, defaults to the local disk.
        overwrite: Replace files already present at a target instead of failing.

    Returns:
        List[str]: Target paths relative to src_dir, in input order.

    Raises:
        DestinationExistsError: If a target exists and overwrite is False.
        FileSystemError: If a directory cannot be created or a move fails.
    """
    fs = fs or LocalFileSystem()
    targets = [relocation_target(src_dir, unit) for unit in units]

    # 1. Pre-flight collision check
    if not overwrite:
        _check_free_targets(targets, fs)

    # 2. Physical relocation
    relocated: List[str] = []
    for unit, target in zip(units, targets):
        fs.makedirs(os.path.dirname(target))
        fs.move(unit.source_path, target, overwrite=overwrite)
        rel_target = os.path.relpath(target, src_dir)
        logger.debug(f"Relocated {os.path.basename(unit.source_path)} -> {rel_target}")
        relocated.append(rel_target)

    logger.info(f"Relocated {len(relocated)} unit file(s) under {src_dir}")
    return relocated

# -----------------------------------------------------------------------------
# PRIVATE HELPERS
# -----------------------------------------------------------------------------

def _check_free_targets(targets: Sequence[str], fs: FileSystem) -> None:
    seen = set()
    for target in targets:
        if target in seen or fs.exists(target):
            raise DestinationExistsError(
                f"Relocation target already exists: {target}", path=target
            )
        seen.add(target)
