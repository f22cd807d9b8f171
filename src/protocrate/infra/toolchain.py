from __future__ import annotations

"""
External Toolchain Adapters.

Wraps the two external programs the generator relies on: protoc with its
code generation plugins (mandatory) and rustfmt (best effort).
"""

import logging
import subprocess
from typing import List, Sequence

from protocrate.domain.constants import RUSTFMT_BINARY, RUSTFMT_EDITION
from protocrate.domain.errors import ToolchainError

logger = logging.getLogger(__name__)

# -----------------------------------------------------------------------------
# CODE GENERATION
# -----------------------------------------------------------------------------

def build_generator_command(
        protoc: str,
        plugins: Sequence[str],
        out_dir: str,
        proto_files: Sequence[str],
        include_dirs: Sequence[str],
) -> List[str]:
    """Assemble the protoc argument vector."""
    cmd = [protoc]
    cmd.extend(f"--{plugin}_out={out_dir}" for plugin in plugins)
    cmd.extend(f"-I{include}" for include in include_dirs)
    cmd.extend(proto_files)
    return cmd


def run_code_generator(
        protoc: str,
        plugins: Sequence[str],
        out_dir: str,
        proto_files: Sequence[str],
        include_dirs: Sequence[str],
) -> None:
    """
    Compile protocol definitions into one flat source file per package.

    Args:
        protoc: Compiler executable.
        plugins: Generator plugins, each enabled as --<plugin>_out.
        out_dir: Directory receiving the flat files.
        proto_files: Definition files to compile.
        include_dirs: Import search paths.

    Raises:
        ToolchainError: If the compiler is missing or reports a failure.
    """
    cmd = build_generator_command(protoc, plugins, out_dir, proto_files, include_dirs)
    logger.debug(f"Running code generator: {' '.join(cmd)}")

    try:
        subprocess.run(cmd, capture_output=True, text=True, check=True)
    except FileNotFoundError as e:
        raise ToolchainError(f"Code generator not found: {protoc}", command=cmd) from e
    except subprocess.CalledProcessError as e:
        stderr = (e.stderr or "").strip()
        raise ToolchainError(
            f"Code generation failed with exit code {e.returncode}: {stderr}",
            command=cmd,
            stderr=stderr,
        ) from e

    logger.info(f"Generated sources for {len(proto_files)} protobuf file(s) into {out_dir}")

# -----------------------------------------------------------------------------
# FORMATTING
# -----------------------------------------------------------------------------

def run_formatter(paths: Sequence[str], edition: str = RUSTFMT_EDITION) -> bool:
    """
    Format the given sources with rustfmt if it is available.

    Returns:
        bool: True when rustfmt ran successfully, False when it was skipped
        or failed.
    """
    if not paths:
        return False

    cmd = [RUSTFMT_BINARY, "--edition", edition, *paths]
    try:
        subprocess.run(cmd, capture_output=True, text=True, check=True)
    except FileNotFoundError:
        logger.warning("rustfmt not found; generated code left unformatted.")
        return False
    except subprocess.CalledProcessError as e:
        logger.warning(f"Failed to format generated code: {(e.stderr or '').strip()}")
        return False

    logger.debug(f"Formatted {len(paths)} file(s) with rustfmt")
    return True
