from __future__ import annotations

"""
Generation Domain Data Models.

Defines the result object and factory functions used to communicate the
outcome of a crate generation run between the engine and the CLI.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

# -----------------------------------------------------------------------------
# CORE DATA MODELS
# -----------------------------------------------------------------------------

@dataclass(frozen=True)
class GenerationResult:
    """
    Unified result object of a complete generation run.

    Attributes:
        ok: Flag indicating success or failure.
        error: Descriptive message in case of failure.
        pkg_name: Crate name written to the manifest.
        output_dir: Absolute crate root directory.
        src_dir: Absolute directory holding the generated sources.
        lib_path: Path of the aggregation file (empty on failure).
        manifest_path: Path of the written Cargo.toml (empty on failure).
        proto_files: Protocol definition files handed to the generator.
        units: Relocated unit files, relative to src_dir.
        formatted: Whether the external formatter succeeded.
        summary: Technical execution summary and statistics.
    """
    ok: bool
    error: str

    pkg_name: str
    output_dir: str
    src_dir: str

    lib_path: str = ""
    manifest_path: str = ""

    proto_files: List[str] = field(default_factory=list)
    units: List[str] = field(default_factory=list)
    formatted: bool = False

    summary: Dict[str, Any] = field(default_factory=dict)

# -----------------------------------------------------------------------------
# FACTORY FUNCTIONS
# -----------------------------------------------------------------------------

def create_error_result(
        error: str,
        cfg: Dict[str, Any],
        output_dir: str = "",
        src_dir: str = "",
        proto_files: Optional[List[str]] = None,
        summary_extra: Optional[Dict[str, Any]] = None
) -> GenerationResult:
    """
    Create a failed generation result instance.

    Args:
        error: Detailed error description.
        cfg: The configuration used during the failed run.
        output_dir: Resolved crate directory, if known.
        src_dir: Resolved source directory, if known.
        proto_files: Discovered protocol files, if discovery ran.
        summary_extra: Additional metadata for the summary payload.

    Returns:
        GenerationResult: An immutable error result object.
    """
    return GenerationResult(
        ok=False,
        error=error,
        pkg_name=cfg.get("pkg_name", ""),
        output_dir=output_dir,
        src_dir=src_dir,
        proto_files=proto_files or [],
        summary=summary_extra or {},
    )


def create_success_result(
        cfg: Dict[str, Any],
        output_dir: str,
        src_dir: str,
        lib_path: str,
        manifest_path: str,
        proto_files: List[str],
        units: List[str],
        formatted: bool = False,
        summary_extra: Optional[Dict[str, Any]] = None
) -> GenerationResult:
    """
    Create a successful generation result instance.

    Args:
        cfg: Final configuration used during execution.
        output_dir: Absolute crate directory.
        src_dir: Absolute source directory.
        lib_path: Written aggregation file.
        manifest_path: Written manifest file.
        proto_files: Protocol definition files compiled.
        units: Relocated unit files relative to src_dir.
        formatted: Formatter outcome.
        summary_extra: Final execution metrics.

    Returns:
        GenerationResult: An immutable success result object.
    """
    return GenerationResult(
        ok=True,
        error="",
        pkg_name=cfg.get("pkg_name", ""),
        output_dir=output_dir,
        src_dir=src_dir,
        lib_path=lib_path,
        manifest_path=manifest_path,
        proto_files=proto_files,
        units=units,
        formatted=formatted,
        summary=summary_extra or {},
    )
