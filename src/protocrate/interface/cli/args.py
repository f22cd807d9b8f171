from __future__ import annotations

"""
CLI Argument Definition and Mapping.

Defines the command-line interface schema and translates the parsed
argparse namespace into configuration overrides.
"""

import argparse
from typing import Any, Dict

from protocrate.domain.constants import APP_NAME, APP_VERSION

# -----------------------------------------------------------------------------
# ARGUMENT DEFINITION
# -----------------------------------------------------------------------------

def build_parser() -> argparse.ArgumentParser:
    """
    Construct the argument parser for the protocrate CLI.

    Returns:
        argparse.ArgumentParser: Configured parser instance.
    """
    p = argparse.ArgumentParser(
        prog=APP_NAME,
        description="Generate a Rust crate with a nested module tree from protobuf definitions.",
    )

    # --- Inputs ---
    p.add_argument(
        "roots",
        metavar="DIR",
        nargs="*",
        help="Root directory of a protobuf tree (can be repeated).",
    )
    p.add_argument(
        "--protoc",
        default=None,
        help="Protobuf compiler executable (default: $PROTOC or 'protoc').",
    )
    p.add_argument(
        "--plugin",
        dest="plugins",
        action="append",
        default=None,
        help="Code generator plugin, passed as --<plugin>_out (repeatable, default: prost).",
    )

    # --- Output Crate ---
    p.add_argument(
        "-o", "--output-dir",
        dest="output_dir",
        default=None,
        help="Where the crate should be generated.",
    )
    p.add_argument(
        "-c", "--cargo-toml-template",
        dest="cargo_toml_template",
        default=None,
        help="Cargo.toml template file to use.",
    )
    p.add_argument(
        "-p", "--pkg-name",
        dest="pkg_name",
        default=None,
        help="Crate name.",
    )
    p.add_argument(
        "--pkg-version",
        dest="pkg_version",
        default=None,
        help="Crate version (default: 0.1.0).",
    )
    p.add_argument(
        "--pkg-author",
        dest="pkg_authors",
        action="append",
        default=None,
        help="Crate author (repeatable).",
    )

    # --- Post-processing and Safety ---
    p.add_argument(
        "--disable-rustfmt",
        action="store_true",
        help="Do not run rustfmt on the generated code (run when present otherwise).",
    )
    p.add_argument(
        "--overwrite",
        action="store_true",
        help="Replace files already present at a relocation target instead of failing.",
    )

    # --- Configuration and Diagnostics ---
    p.add_argument(
        "--config",
        dest="config_file",
        default=None,
        help="JSON configuration file merged under the command-line options.",
    )
    p.add_argument(
        "--dump-config",
        action="store_true",
        help="Print the resolved configuration as JSON and exit.",
    )
    p.add_argument(
        "--log-file",
        dest="log_file",
        default=None,
        help="Also write logs to this rotating file.",
    )
    p.add_argument(
        "--debug",
        action="store_true",
        help="Elevate logging verbosity to DEBUG.",
    )
    p.add_argument(
        "--json",
        dest="json_output",
        action="store_true",
        help="Print the generation result as JSON.",
    )
    p.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {APP_VERSION}",
    )

    return p

# -----------------------------------------------------------------------------
# ARGUMENT MAPPING
# -----------------------------------------------------------------------------

def args_to_overrides(args: argparse.Namespace) -> Dict[str, Any]:
    """
    Translate the argparse Namespace into a configuration dictionary.

    Options left unset map to None (or are omitted) so that the merge keeps
    the values coming from the defaults or the configuration file.

    Args:
        args: Parsed command-line arguments.

    Returns:
        Dict[str, Any]: Configuration overrides subset.
    """
    overrides: Dict[str, Any] = {}

    overrides["roots"] = list(args.roots) if args.roots else None
    overrides["protoc"] = args.protoc
    overrides["plugins"] = args.plugins
    overrides["output_dir"] = args.output_dir
    overrides["cargo_toml_template"] = args.cargo_toml_template
    overrides["pkg_name"] = args.pkg_name
    overrides["pkg_version"] = args.pkg_version
    overrides["pkg_authors"] = args.pkg_authors

    # Flags only ever switch behavior on
    if args.disable_rustfmt:
        overrides["disable_rustfmt"] = True
    if args.overwrite:
        overrides["overwrite"] = True

    return overrides
