from __future__ import annotations

"""
Core generation pipeline.

This module coordinates the entire crate generation workflow:
1. Validates configuration and resolves the output layout.
2. Resets the source directory.
3. Discovers protocol definitions and runs the code generator.
4. Builds the module tree from the flat generated files.
5. Relocates the files into the namespace hierarchy.
6. Writes the aggregation file and formats the sources.
7. Writes the crate manifest.
"""

import logging
import os
from typing import Any, Dict, List, Optional

from protocrate.core.analysis.module_renderer import render_aggregation_file
from protocrate.core.analysis.module_tree import build_module_tree, plan_units
from protocrate.core.pipeline.validator import require_fields, validate_config
from protocrate.core.services.discovery import find_proto_files
from protocrate.core.services.manifest import write_cargo_toml
from protocrate.core.services.relocator import relocate_units
from protocrate.domain.constants import AGGREGATION_FILE_NAME, MANIFEST_FILE_NAME, SRC_SUBDIR
from protocrate.domain.errors import ProtocrateError
from protocrate.domain.generation_models import (
    GenerationResult,
    create_error_result,
    create_success_result,
)
from protocrate.infra.fs import (
    FileSystem,
    LocalFileSystem,
    normalize_path,
    reset_directory,
    write_text_file,
)
from protocrate.infra.toolchain import run_code_generator, run_formatter

logger = logging.getLogger(__name__)


def run_generation(
        config: Optional[Dict[str, Any]],
        *,
        fs: Optional[FileSystem] = None,
) -> GenerationResult:
    """
    Execute the full crate generation pipeline.

    Any expected failure stops the run at the stage where it happens; the
    output directory is left as it was at that point.

    Args:
        config: The configuration dictionary (raw or partial).
        fs: Filesystem capability used for listing and relocation.

    Returns:
        GenerationResult: Object containing status, artifacts and summary.
    """
    logger.info("Generation started.")

    # -------------------------------------------------------------------------
    # 1) Config & Path Normalization
    # -------------------------------------------------------------------------
    cfg, warnings = validate_config(config, strict=False)
    for warning in warnings:
        logger.warning(f"Configuration Warning: {warning}")

    try:
        require_fields(cfg)
    except ProtocrateError as e:
        logger.error(str(e))
        return create_error_result(
            str(e), cfg, summary_extra={"error_type": type(e).__name__}
        )

    output_dir = normalize_path(cfg["output_dir"], os.getcwd())
    src_dir = os.path.join(output_dir, SRC_SUBDIR)
    lib_path = os.path.join(src_dir, AGGREGATION_FILE_NAME)
    manifest_path = os.path.join(output_dir, MANIFEST_FILE_NAME)
    fs = fs or LocalFileSystem()

    proto_files: List[str] = []
    try:
        # ---------------------------------------------------------------------
        # 2) Source Directory & Code Generation
        # ---------------------------------------------------------------------
        reset_directory(src_dir)

        proto_files = find_proto_files(cfg["roots"])
        if proto_files:
            run_code_generator(
                cfg["protoc"], cfg["plugins"], src_dir, proto_files, cfg["roots"]
            )
        else:
            logger.warning("No protobuf files found; generating an empty crate.")

        # ---------------------------------------------------------------------
        # 3) Module Tree & Relocation
        # ---------------------------------------------------------------------
        units = plan_units(src_dir, ignore_files=[lib_path], fs=fs)
        tree = build_module_tree(units)
        relocated = relocate_units(src_dir, units, fs=fs, overwrite=cfg["overwrite"])

        # ---------------------------------------------------------------------
        # 4) Aggregation File & Formatting
        # ---------------------------------------------------------------------
        write_text_file(lib_path, render_aggregation_file(tree))
        logger.info(f"Aggregation file written: {lib_path}")

        formatted = False
        if not cfg["disable_rustfmt"]:
            formatted = run_formatter(
                [lib_path] + [os.path.join(src_dir, rel) for rel in relocated]
            )

        # ---------------------------------------------------------------------
        # 5) Manifest
        # ---------------------------------------------------------------------
        write_cargo_toml(
            cfg["cargo_toml_template"] or None,
            manifest_path,
            cfg["pkg_name"],
            cfg["pkg_authors"],
            cfg["pkg_version"],
        )

    except ProtocrateError as e:
        logger.error(f"Generation failed: {e}")
        return create_error_result(
            str(e), cfg, output_dir, src_dir, proto_files,
            summary_extra={"error_type": type(e).__name__}
        )

    summary = {
        "proto_files": len(proto_files),
        "units": len(relocated),
        "depth": tree.depth(),
        "formatted": formatted,
        "rustfmt_enabled": not cfg["disable_rustfmt"],
    }

    logger.info("Generation completed successfully.")
    return create_success_result(
        cfg, output_dir, src_dir, lib_path, manifest_path,
        proto_files, relocated, formatted, summary
    )
