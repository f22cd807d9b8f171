from __future__ import annotations

"""
FileSystem Infrastructure Layer.

Provides path normalization, directory reset and text persistence helpers,
plus the injectable FileSystem capability used by the tree relocator so the
move logic can be exercised against an in-memory double.
"""

import logging
import os
import shutil
from typing import List, Optional, Protocol, Tuple

from protocrate.domain.errors import FileSystemError

logger = logging.getLogger(__name__)

# -----------------------------------------------------------------------------
# FILESYSTEM CAPABILITY
# -----------------------------------------------------------------------------

class FileSystem(Protocol):
    """Minimal set of operations the relocation step needs."""

    def list_files(self, path: str) -> List[str]:
        ...

    def exists(self, path: str) -> bool:
        ...

    def makedirs(self, path: str) -> None:
        ...

    def move(self, src: str, dst: str, overwrite: bool = False) -> None:
        ...


class LocalFileSystem:
    """FileSystem implementation backed by the host operating system."""

    def list_files(self, path: str) -> List[str]:
        """Return absolute paths of the regular files directly inside `path`, sorted."""
        try:
            with os.scandir(path) as entries:
                files = [e.path for e in entries if e.is_file()]
        except OSError as e:
            raise FileSystemError(f"Cannot read directory '{path}': {e}", path=path) from e
        return sorted(files)

    def exists(self, path: str) -> bool:
        return os.path.lexists(path)

    def makedirs(self, path: str) -> None:
        try:
            os.makedirs(path, exist_ok=True)
        except OSError as e:
            raise FileSystemError(f"Cannot create directory '{path}': {e}", path=path) from e

    def move(self, src: str, dst: str, overwrite: bool = False) -> None:
        try:
            if overwrite:
                os.replace(src, dst)
            else:
                os.rename(src, dst)
        except OSError as e:
            raise FileSystemError(f"Cannot move '{src}' to '{dst}': {e}", path=src) from e

# -----------------------------------------------------------------------------
# PATH RESOLUTION API
# -----------------------------------------------------------------------------

def normalize_path(path: Optional[str], fallback: str) -> str:
    """
    Normalize a directory path string into an absolute filesystem path.

    Handles environment variable expansion ($VAR/%VAR%) and user home
    shortcuts (~/). Reverts to fallback if the input is empty.

    Args:
        path: Raw input path string.
        fallback: Default path to use if the input is empty.

    Returns:
        str: Normalized absolute path.
    """
    p = (path or "").strip()
    if not p:
        p = fallback
    p = os.path.expandvars(os.path.expanduser(p))
    return os.path.abspath(p)

# -----------------------------------------------------------------------------
# DIRECTORY AND FILE OPERATIONS
# -----------------------------------------------------------------------------

def reset_directory(path: str) -> None:
    """
    Delete `path` recursively and recreate it empty.

    Removal errors are ignored (the directory may not exist yet); failing
    to recreate it is fatal.

    Raises:
        FileSystemError: If the directory cannot be created.
    """
    shutil.rmtree(path, ignore_errors=True)
    ok, err = safe_mkdir(path)
    if not ok:
        raise FileSystemError(f"Cannot create directory '{path}': {err}", path=path)
    logger.debug(f"Directory reset: {path}")


def safe_mkdir(path: str) -> Tuple[bool, Optional[str]]:
    """
    Attempt to recursively create a directory structure safely.

    Args:
        path: Target directory path.

    Returns:
        Tuple[bool, Optional[str]]: (Success flag, Error message if applicable).
    """
    try:
        os.makedirs(path, exist_ok=True)
        return True, None
    except OSError as e:
        return False, str(e)


def read_text_file(path: str) -> str:
    """Read a UTF-8 text file, raising FileSystemError on failure."""
    try:
        with open(path, "r", encoding="utf-8") as f:
            return f.read()
    except OSError as e:
        raise FileSystemError(f"Cannot read '{path}': {e}", path=path) from e


def write_text_file(path: str, content: str) -> None:
    """Write `content` to `path` as UTF-8, raising FileSystemError on failure."""
    try:
        with open(path, "w", encoding="utf-8") as f:
            f.write(content)
    except OSError as e:
        raise FileSystemError(f"Cannot write '{path}': {e}", path=path) from e
    logger.debug(f"File written: {path}")
