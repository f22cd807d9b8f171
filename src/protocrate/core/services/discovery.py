from __future__ import annotations

"""
Protocol Definition Discovery.

Collects the .proto files below one or more root directories in a stable
order, ready to be handed to the code generator.
"""

import logging
import os
from typing import Iterable, List

from protocrate.domain.constants import PROTO_EXTENSION
from protocrate.domain.errors import FileSystemError

logger = logging.getLogger(__name__)


def find_proto_files(roots: Iterable[str]) -> List[str]:
    """
    Walk every root recursively and return the sorted .proto paths.

    Entries that cannot be read during the walk are skipped.

    Args:
        roots: Root directories of the protobuf trees.

    Returns:
        List[str]: Sorted file paths (as joined from each root).

    Raises:
        FileSystemError: If a root is not an existing directory.
    """
    proto_paths: List[str] = []

    for root in roots:
        if not os.path.isdir(root):
            raise FileSystemError(f"Protobuf root is not a directory: {root}", path=root)

        for dirpath, dirs, files in os.walk(root, onerror=_log_walk_error):
            dirs.sort()
            for file_name in files:
                if os.path.splitext(file_name)[1] == PROTO_EXTENSION:
                    proto_paths.append(os.path.join(dirpath, file_name))

    proto_paths.sort()
    logger.info(f"Discovered {len(proto_paths)} protobuf file(s)")
    return proto_paths


def _log_walk_error(error: OSError) -> None:
    logger.debug(f"Skipping unreadable entry: {error}")
