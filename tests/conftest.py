from __future__ import annotations

"""
Global Pytest Configuration and Fixtures.

This module sets up the testing environment, including:
1. Path manipulation to ensure the 'src' directory is importable.
2. An in-memory FileSystem double for the relocation logic.
3. A fake protoc executable that writes one flat file per package.
"""

import logging
import os
import stat
import sys
import textwrap
from pathlib import Path
from typing import Any, Dict, Iterable, List, Optional, Set

import pytest

# -----------------------------------------------------------------------------
# Path Configuration
# -----------------------------------------------------------------------------
_SRC_PATH = os.path.abspath(os.path.join(os.path.dirname(__file__), "..", "src"))
if _SRC_PATH not in sys.path:
    sys.path.insert(0, _SRC_PATH)

from protocrate.domain.errors import DestinationExistsError, FileSystemError  # noqa: E402
from protocrate.infra.logging import shutdown_logging  # noqa: E402


# -----------------------------------------------------------------------------
# Shared Fixtures
# -----------------------------------------------------------------------------
@pytest.fixture
def mock_generation_config() -> Dict[str, Any]:
    """
    Return a valid, complete generation configuration dictionary.

    Mirrors the keys of 'protocrate.domain.config.get_default_config'.
    """
    return {
        # Inputs
        "roots": ["/tmp/protos"],
        "protoc": "protoc",
        "plugins": ["prost"],

        # Output crate
        "output_dir": "/tmp/generated",
        "cargo_toml_template": "",
        "pkg_name": "demo",
        "pkg_version": "0.1.0",
        "pkg_authors": ["Ann <ann@example.com>"],

        # Post-processing and safety
        "disable_rustfmt": True,
        "overwrite": False,
    }


# -----------------------------------------------------------------------------
# In-memory filesystem
# -----------------------------------------------------------------------------
class InMemoryFileSystem:
    """FileSystem double recording every directory creation and move."""

    def __init__(self, files: Optional[Iterable[str]] = None) -> None:
        self.files: Set[str] = set(files or [])
        self.dirs: Set[str] = {os.path.dirname(f) for f in self.files}
        self.moves: List[tuple] = []

    def list_files(self, path: str) -> List[str]:
        if path not in self.dirs:
            raise FileSystemError(f"Cannot read directory '{path}'", path=path)
        return sorted(f for f in self.files if os.path.dirname(f) == path)

    def exists(self, path: str) -> bool:
        return path in self.files or path in self.dirs

    def makedirs(self, path: str) -> None:
        while path and path not in self.dirs:
            self.dirs.add(path)
            path = os.path.dirname(path)

    def move(self, src: str, dst: str, overwrite: bool = False) -> None:
        if src not in self.files:
            raise FileSystemError(f"No such file: {src}", path=src)
        if os.path.dirname(dst) not in self.dirs:
            raise FileSystemError(f"No such directory: {os.path.dirname(dst)}", path=dst)
        if dst in self.files and not overwrite:
            raise DestinationExistsError(f"Exists: {dst}", path=dst)
        self.files.remove(src)
        self.files.add(dst)
        self.moves.append((src, dst))


@pytest.fixture
def memory_fs() -> InMemoryFileSystem:
    return InMemoryFileSystem()


@pytest.fixture
def make_memory_fs():
    """Factory building an InMemoryFileSystem pre-populated with files."""
    return InMemoryFileSystem


# -----------------------------------------------------------------------------
# Logging isolation
# -----------------------------------------------------------------------------
@pytest.fixture
def reset_logging():
    """Detach handlers installed by configure_logging before and after a test."""
    shutdown_logging()
    yield
    shutdown_logging()
    logging.getLogger().setLevel(logging.WARNING)


# -----------------------------------------------------------------------------
# Fake code generator
# -----------------------------------------------------------------------------
_FAKE_PROTOC = textwrap.dedent(
    """\
    #!{python}
    import os
    import re
    import sys

    KEYWORDS = {{"type", "match", "mod"}}

    out_dir = None
    protos = []
    for arg in sys.argv[1:]:
        if arg.startswith("--") and "_out=" in arg:
            out_dir = arg.split("=", 1)[1]
        elif arg.endswith(".proto"):
            protos.append(arg)

    if "FAKE_PROTOC_FAIL" in os.environ:
        sys.stderr.write("fake protoc: forced failure\\n")
        sys.exit(1)

    for proto in protos:
        with open(proto, encoding="utf-8") as f:
            match = re.search(r"^package\\s+([\\w.]+);", f.read(), re.M)
        package = match.group(1) if match else "_"
        segments = ["r#" + s if s in KEYWORDS else s for s in package.split(".")]
        target = os.path.join(out_dir, ".".join(segments) + ".rs")
        with open(target, "a", encoding="utf-8") as f:
            f.write("// generated from " + os.path.basename(proto) + "\\n")
    """
)


@pytest.fixture
def fake_protoc(tmp_path: Path) -> str:
    """
    Write an executable standing in for protoc plus its generator plugin.

    Each input .proto contributes to '<package>.rs' in the --*_out directory;
    keyword segments are written with a raw identifier marker. Setting
    FAKE_PROTOC_FAIL in the environment makes it exit with status 1.
    """
    if sys.platform == "win32":
        pytest.skip("fake protoc relies on a shebang script")

    script = tmp_path / "bin" / "fake-protoc"
    script.parent.mkdir()
    script.write_text(_FAKE_PROTOC.format(python=sys.executable), encoding="utf-8")
    script.chmod(script.stat().st_mode | stat.S_IXUSR | stat.S_IXGRP | stat.S_IXOTH)
    return str(script)


@pytest.fixture
def proto_tree(tmp_path: Path) -> Path:
    """
    Create a protobuf root:

    /protos
      /foo/service.proto   package foo.v1;
      /bar.proto           package bar;
      /google/type.proto   package google.type;
      README.md
    """
    root = tmp_path / "protos"
    (root / "foo").mkdir(parents=True)
    (root / "google").mkdir()
    (root / "foo" / "service.proto").write_text('syntax = "proto3";\npackage foo.v1;\n', encoding="utf-8")
    (root / "bar.proto").write_text('syntax = "proto3";\npackage bar;\n', encoding="utf-8")
    (root / "google" / "type.proto").write_text('syntax = "proto3";\npackage google.type;\n', encoding="utf-8")
    (root / "README.md").write_text("# protos", encoding="utf-8")
    return root
