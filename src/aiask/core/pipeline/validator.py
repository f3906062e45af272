from __future__ import annotations

"""
Configuration Validation Service.

Normalizes untrusted configuration (settings file, CLI overrides) into
strictly typed values, filling gaps with domain defaults and reporting
every correction as a warning.
"""

import logging
from typing import Any, Dict, List, Tuple

from aiask.domain.config import DEFAULT_INCLUDE_EXTENSIONS, get_default_config

logger = logging.getLogger(__name__)

_TRUE_WORDS = ("true", "1", "yes", "y", "on")
_FALSE_WORDS = ("false", "0", "no", "n", "off")


class _Report:
    """Collects coercion warnings, or raises them in strict mode."""

    def __init__(self, strict: bool) -> None:
        self.strict = strict
        self.warnings: List[str] = []

    def reject(self, msg: str, exc_type: type = TypeError) -> None:
        if self.strict:
            raise exc_type(msg)
        self.warnings.append(msg)


# -----------------------------------------------------------------------------
# PUBLIC API
# -----------------------------------------------------------------------------

def validate_config(
        config: Any,
        *,
        strict: bool = False,
) -> Tuple[Dict[str, Any], List[str]]:
    """
    Validate and normalize the provided configuration dictionary.

    An explicitly empty extension list is kept as-is: it selects no file
    contents. Only a missing value falls back to the defaults.

    Args:
        config: Raw configuration data.
        strict: If True, raise on type mismatch instead of coercing.

    Returns:
        Tuple[Dict[str, Any], List[str]]: Normalized configuration and warnings.
    """
    report = _Report(strict)
    defaults = get_default_config()

    if not isinstance(config, dict):
        report.reject(f"Invalid config type: expected dict, received {type(config).__name__}. Using defaults.")
        logger.warning(report.warnings[-1])
        return defaults, report.warnings

    merged: Dict[str, Any] = dict(defaults)
    merged.update({k: v for k, v in config.items() if k in defaults and v is not None})

    model = merged["target_model"]
    if not isinstance(model, str) or not model.strip():
        report.reject(f"Invalid field 'target_model': expected non-empty str. Using '{defaults['target_model']}'.")
        model = defaults["target_model"]
    merged["target_model"] = model.strip()

    for field in ("detect_cycles", "count_tokens"):
        merged[field] = _coerce_bool(merged[field], defaults[field], field, report)

    merged["include_file_extensions"] = _coerce_extensions(merged["include_file_extensions"], report)

    return merged, report.warnings


# -----------------------------------------------------------------------------
# PRIVATE HELPERS
# -----------------------------------------------------------------------------

def _coerce_bool(value: Any, fallback: bool, field: str, report: _Report) -> bool:
    if isinstance(value, bool):
        return value
    if not report.strict:
        word = str(value).strip().lower()
        if word in _TRUE_WORDS or word in _FALSE_WORDS:
            report.warnings.append(f"Field '{field}' converted from {value!r} to bool.")
            return word in _TRUE_WORDS
    report.reject(f"Invalid field '{field}': expected bool, received {type(value).__name__}. Using fallback.")
    return fallback


def _coerce_extensions(value: Any, report: _Report) -> List[str]:
    """
    Turn a list or CSV string into bare extensions ('.ts' -> 'ts').

    Case is preserved: the allow-list is matched case-sensitively against
    lowercased file extensions.
    """
    if isinstance(value, str) and not report.strict:
        report.warnings.append("Field 'include_file_extensions' converted from CSV string to list.")
        value = value.split(",")
    if not isinstance(value, (list, tuple)):
        report.reject(
            f"Invalid field 'include_file_extensions': expected list[str], "
            f"received {type(value).__name__}. Using defaults."
        )
        return list(DEFAULT_INCLUDE_EXTENSIONS)

    out: List[str] = []
    for item in value:
        if not isinstance(item, str):
            report.reject(f"Invalid extension {item!r}: expected str. Item discarded.")
            continue
        ext = item.strip()
        if ext.startswith("."):
            report.reject(f"Extension '{item}' corrected to '{ext.lstrip('.')}'.", ValueError)
            ext = ext.lstrip(".")
        if ext and ext not in out:
            out.append(ext)
    return out
