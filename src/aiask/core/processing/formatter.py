from __future__ import annotations

"""
File Block Formatter.

Turns a single collected file into a Markdown section: a level-3 heading
naming the file followed by a fenced code block tagged for syntax
highlighting. Read failures are absorbed into a placeholder section.
"""

import logging
from typing import Dict, Tuple

from aiask.infra.fs import read_text_file

logger = logging.getLogger(__name__)

# Extension (lowercase, no dot) -> fenced block language tag
LANGUAGE_TAGS: Dict[str, str] = {
    "ts": "typescript",
    "js": "javascript",
    "html": "html",
    "json": "json",
    "css": "css",
    "py": "python",
}
DEFAULT_LANGUAGE_TAG = "text"

UNREADABLE_PLACEHOLDER = "(Unable to read file content)"

# -----------------------------------------------------------------------------
# PUBLIC API
# -----------------------------------------------------------------------------

def language_tag(extension: str) -> str:
    return LANGUAGE_TAGS.get(extension, DEFAULT_LANGUAGE_TAG)


def format_file_block(absolute_path: str, relative_path: str, extension: str) -> str:
    """
    Render one file as a Markdown block.

    The file content is embedded verbatim. If the file cannot be read or
    is not valid UTF-8, the cause is logged and a placeholder block is
    returned instead; this function never raises for read failures.

    Args:
        absolute_path: Host path used to read the file.
        relative_path: Forward-slash path shown in the heading.
        extension: Lowercase extension used to pick the language tag.

    Returns:
        str: The formatted block, starting and ending with a newline.
    """
    block, _ = format_file_block_with_status(absolute_path, relative_path, extension)
    return block


def format_file_block_with_status(absolute_path: str, relative_path: str, extension: str) -> Tuple[str, bool]:
    """Same as format_file_block, also reporting whether the read succeeded."""
    try:
        content = read_text_file(absolute_path)
    except (OSError, UnicodeDecodeError) as e:
        logger.error(f"Failed to read file {absolute_path}: {e}")
        return format_unreadable_block(relative_path), False

    return f"\n### 📄 File: {relative_path}\n\n```{language_tag(extension)}\n{content}\n```\n", True


def format_unreadable_block(relative_path: str) -> str:
    return f"\n### 📄 File: {relative_path} (read failed)\n\n{UNREADABLE_PLACEHOLDER}\n\n"
