from __future__ import annotations

"""
Command Line Interface (CLI) Application Controller.

Orchestrates the CLI lifecycle: logging bootstrap, configuration layering
(defaults, optional JSON file, command-line overrides), generation and
result rendering.
"""

import json
import sys
from dataclasses import asdict
from typing import Any, Dict, List, Optional

from protocrate.core.pipeline.engine import run_generation
from protocrate.core.pipeline.validator import validate_config
from protocrate.domain.config import get_default_config, load_config
from protocrate.domain.errors import ConfigError
from protocrate.domain.generation_models import GenerationResult
from protocrate.infra.logging import LoggingConfig, configure_logging, get_logger
from protocrate.interface.cli import args as cli_args

logger = get_logger(__name__)

EXIT_OK = 0
EXIT_FAILURE = 1
EXIT_USAGE = 2
EXIT_INTERRUPTED = 130

# -----------------------------------------------------------------------------
# ENTRYPOINT ORCHESTRATOR
# -----------------------------------------------------------------------------

def main(argv: Optional[List[str]] = None) -> int:
    """
    Execute the main CLI application workflow.

    Args:
        argv: Optional list of command line arguments. Defaults to sys.argv.

    Returns:
        int: Process exit code.
    """
    # 1. Argument parsing phase
    parser = cli_args.build_parser()
    args = parser.parse_args(argv)

    # 2. Logging bootstrap
    log_level = "DEBUG" if args.debug else "INFO"
    configure_logging(LoggingConfig(level=log_level, console=True, log_file=args.log_file))

    logger.debug("CLI execution initiated. Resolving configuration hierarchy...")

    # 3. Resolve base configuration (defaults or JSON file)
    try:
        base_conf = load_config(args.config_file) if args.config_file else get_default_config()
    except ConfigError as e:
        logger.error(str(e))
        print(f"ERROR: {e}", file=sys.stderr)
        return EXIT_USAGE

    # 4. Merge command-line overrides and normalize
    raw_conf = _merge_config(base_conf, cli_args.args_to_overrides(args))
    clean_conf, warnings = validate_config(raw_conf, strict=False)
    for w in warnings:
        logger.warning(f"Configuration Constraint: {w}")

    if args.dump_config:
        print(json.dumps(clean_conf, ensure_ascii=False, indent=2))
        return EXIT_OK

    # 5. Generation phase
    try:
        result = run_generation(clean_conf)
    except KeyboardInterrupt:
        logger.warning("Generation interrupted by user.")
        return EXIT_INTERRUPTED

    # 6. Output rendering phase
    if args.json_output:
        print(json.dumps(asdict(result), ensure_ascii=False, indent=2))
    else:
        _print_human_summary(result)

    if result.ok:
        return EXIT_OK
    if result.summary.get("error_type") == ConfigError.__name__:
        return EXIT_USAGE
    return EXIT_FAILURE

# -----------------------------------------------------------------------------
# CONFIGURATION MERGING
# -----------------------------------------------------------------------------

def _merge_config(base: Dict[str, Any], overrides: Dict[str, Any]) -> Dict[str, Any]:
    """Shallow-merge non-None overrides over known keys of the base configuration."""
    out = dict(base)
    for k, v in overrides.items():
        if k in base and v is not None:
            out[k] = v
    return out

# -----------------------------------------------------------------------------
# VIEW RENDERING (HUMAN READABLE)
# -----------------------------------------------------------------------------

def _print_human_summary(result: GenerationResult) -> None:
    """Print the generation result to the terminal."""
    if not result.ok:
        print(f"ERROR: {result.error}", file=sys.stderr)
        return

    print(f"Crate '{result.pkg_name}' generated in {result.output_dir}")
    print(f"Protobuf files compiled: {len(result.proto_files)}")
    print(f"Modules relocated: {len(result.units)}")
    print(f"  - lib: {result.lib_path}")
    print(f"  - manifest: {result.manifest_path}")
    if not result.formatted:
        print("  (sources not formatted)")
