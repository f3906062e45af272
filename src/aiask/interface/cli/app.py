from __future__ import annotations

"""
Command Line Interface (CLI) Application Controller.

Orchestrates the CLI lifecycle: logging bootstrap, configuration loading
and merging, aggregation, and result rendering. The CLI is the host that
surfaces success and failure notifications to the user.
"""

import json
import os
import sys
from dataclasses import asdict
from typing import Any, Dict, List, Optional

from aiask.core.pipeline.engine import run_aggregation
from aiask.core.pipeline.validator import validate_config
from aiask.domain.config import get_default_config, load_config
from aiask.domain.models import AggregationResult
from aiask.infra.fs import is_directory, normalize_path
from aiask.infra.logging import LoggingConfig, configure_logging, get_logger
from aiask.interface.cli import args as cli_args

logger = get_logger(__name__)

EXIT_OK = 0
EXIT_FAILURE = 1
EXIT_INVALID_TARGET = 2
EXIT_INTERRUPTED = 130

# -----------------------------------------------------------------------------
# ENTRYPOINT ORCHESTRATOR
# -----------------------------------------------------------------------------

def main(argv: Optional[List[str]] = None) -> int:
    """
    Execute the CLI workflow.

    Args:
        argv: Optional list of command line arguments. Defaults to sys.argv.

    Returns:
        int: Process exit code.
    """
    if sys.platform == "win32":
        if hasattr(sys.stdout, "reconfigure"):
            sys.stdout.reconfigure(encoding="utf-8")
        if hasattr(sys.stderr, "reconfigure"):
            sys.stderr.reconfigure(encoding="utf-8")

    parser = cli_args.build_parser()
    args = parser.parse_args(argv)

    log_level = "DEBUG" if args.debug else "INFO"
    configure_logging(LoggingConfig(level=log_level, console=True, log_file=args.log_file))

    logger.debug("CLI execution initiated. Resolving configuration...")

    base_conf = get_default_config() if args.use_defaults else load_config(args.config_file or "")
    raw_conf = _merge_config(base_conf, cli_args.args_to_overrides(args))
    conf, warnings = validate_config(raw_conf, strict=False)

    for w in warnings:
        logger.warning(f"Configuration Constraint: {w}")

    if args.dump_config:
        print(json.dumps(conf, ensure_ascii=False, indent=2))
        return EXIT_OK

    folder = normalize_path(args.folder, os.getcwd()) if args.folder else ""
    if not folder or not is_directory(folder):
        if not folder:
            msg = "No folder given."
        elif not os.path.exists(folder):
            msg = f"Folder does not exist: {folder}"
        else:
            msg = "Please run the command on a folder, not a file."
        logger.error(msg)
        print(f"ERROR: {msg}", file=sys.stderr)
        return EXIT_INVALID_TARGET

    try:
        result = run_aggregation(
            folder,
            conf["include_file_extensions"],
            detect_cycles=conf["detect_cycles"],
            dry_run=bool(args.dry_run),
            target_model=conf["target_model"],
            count_tokens=conf["count_tokens"],
        )
    except KeyboardInterrupt:
        logger.warning("Interrupted by user.")
        print("Interrupted.", file=sys.stderr)
        return EXIT_INTERRUPTED

    if args.json_output:
        print(json.dumps(asdict(result), ensure_ascii=False, indent=2))
    else:
        _print_human_summary(result)

    return EXIT_OK if result.ok else EXIT_FAILURE

# -----------------------------------------------------------------------------
# CONFIGURATION MERGING
# -----------------------------------------------------------------------------

def _merge_config(base: Dict[str, Any], overrides: Dict[str, Any]) -> Dict[str, Any]:
    """Shallow merge of non-empty overrides into the base configuration."""
    out = dict(base)
    for k, v in overrides.items():
        if v is not None:
            out[k] = v
    return out

# -----------------------------------------------------------------------------
# VIEW RENDERING (HUMAN READABLE)
# -----------------------------------------------------------------------------

def _print_human_summary(result: AggregationResult) -> None:
    """Print the aggregation outcome to the terminal."""
    if not result.ok:
        print(f"ERROR: {result.error}", file=sys.stderr)
        return

    if result.dry_run:
        sys.stdout.write(result.document)
        return

    print(f"Directory listing and file contents saved to: {result.output_path}")
    print(f"Files collected: {result.files_collected}")
    print(f"Files included: {result.files_included}")
    if result.files_unreadable:
        print(f"Unreadable files: {len(result.files_unreadable)}")
        for rel_path in result.files_unreadable:
            print(f"  - {rel_path}")
    if result.token_count > 0:
        print(f"Estimated tokens: {result.token_count:,}")
