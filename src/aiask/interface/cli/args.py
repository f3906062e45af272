from __future__ import annotations

"""
CLI Argument Definition and Mapping.

Defines the command-line schema and translates the parsed namespace into
configuration overrides understood by the validator.
"""

import argparse
from typing import Any, Dict, List, Optional

# -----------------------------------------------------------------------------
# ARGUMENT DEFINITION
# -----------------------------------------------------------------------------

def build_parser() -> argparse.ArgumentParser:
    """
    Construct the argument parser for the aiask CLI.

    Returns:
        argparse.ArgumentParser: Configured parser instance.
    """
    p = argparse.ArgumentParser(
        prog="aiask",
        description=(
            "Render a folder's directory tree and the contents of its source files "
            "into a single ai.md review document."
        ),
    )

    p.add_argument(
        "folder",
        nargs="?",
        default=None,
        help="Folder to aggregate. The document is written to <folder>/ai.md.",
    )

    # --- Content Selection ---
    p.add_argument(
        "--ext",
        dest="extensions",
        default=None,
        help="Comma-separated extensions to include, without dots (default: ts,html,json).",
    )
    p.add_argument(
        "--detect-cycles",
        action="store_true",
        help="Abort when a symbolic link leads back into an already visited directory.",
    )

    # --- Runtime ---
    p.add_argument(
        "--dry-run",
        action="store_true",
        help="Print the document to stdout instead of writing ai.md.",
    )
    p.add_argument(
        "--model",
        dest="target_model",
        default=None,
        help="Model used for the token estimate (default: gpt-4o).",
    )
    p.add_argument(
        "--no-tokens",
        action="store_true",
        help="Skip the token estimate.",
    )

    # --- Configuration and Diagnostics ---
    p.add_argument(
        "--config",
        dest="config_file",
        default=None,
        help="Settings file to load instead of the one in the user data directory.",
    )
    p.add_argument(
        "--use-defaults",
        action="store_true",
        help="Ignore the settings file.",
    )
    p.add_argument(
        "--dump-config",
        action="store_true",
        help="Print the effective configuration as JSON and exit.",
    )
    p.add_argument(
        "--log-file",
        dest="log_file",
        default=None,
        help="Also write diagnostics to this rotating log file.",
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
        help="Print the result as JSON.",
    )

    return p

# -----------------------------------------------------------------------------
# ARGUMENT MAPPING
# -----------------------------------------------------------------------------

def args_to_overrides(args: argparse.Namespace) -> Dict[str, Any]:
    """
    Translate the argparse Namespace into configuration overrides.

    Only options the user actually gave are present in the result.
    """
    overrides: Dict[str, Any] = {}

    if args.extensions:
        overrides["include_file_extensions"] = _split_csv(args.extensions)
    if args.detect_cycles:
        overrides["detect_cycles"] = True
    if args.target_model:
        overrides["target_model"] = args.target_model
    if args.no_tokens:
        overrides["count_tokens"] = False

    return overrides

# -----------------------------------------------------------------------------
# HELPERS
# -----------------------------------------------------------------------------

def _split_csv(value: Optional[str]) -> Optional[List[str]]:
    if value is None:
        return None
    parts = [x.strip() for x in value.split(",")]
    return [x for x in parts if x]
