from __future__ import annotations

"""
Tree Renderer.

Renders a directory listing as an indented Markdown tree using box-drawing
connectors. Directories are shown with a folder icon and a link to their
path from the scan root; files are shown with a file icon and their name.
"""

import os
from typing import List, Optional, Set, Tuple

from pyuca import Collator

from aiask.domain.errors import DirectoryCycleError
from aiask.domain.models import DirectoryEntry
from aiask.infra.fs import list_directory, real_path

BRANCH = "├── "
LAST_BRANCH = "└── "
PIPE_INDENT = "│   "
SPACE_INDENT = "    "

FOLDER_ICON = "📁"
FILE_ICON = "📄"

# Loading the collation table is slow; build it on first use
_COLLATOR: Optional[Collator] = None

# -----------------------------------------------------------------------------
# PUBLIC API
# -----------------------------------------------------------------------------

def sort_entries(entries: List[DirectoryEntry]) -> List[DirectoryEntry]:
    """
    Order one directory level for display.

    Directories come first, then files. Within each group names follow
    the Unicode Collation Algorithm root order: accents and case are
    secondary to the base letters, and names differing only by case put
    the lowercase form first.

    Args:
        entries: Children of a single directory.

    Returns:
        List[DirectoryEntry]: A new, sorted list.
    """
    return sorted(entries, key=_entry_sort_key)


def render_directory_tree(
        root: str,
        entries: List[DirectoryEntry],
        prefix: str = "",
        rel_path: str = "",
        visited: Optional[Set[str]] = None,
) -> str:
    """
    Recursively render directory entries as Markdown tree lines.

    Args:
        root: Absolute path of the directory the entries belong to.
        entries: Listing of `root`.
        prefix: Indentation accumulated from ancestor levels.
        rel_path: Forward-slash path of `root` from the scan root.
        visited: Canonical paths already rendered. When given, a directory
                 reached twice raises DirectoryCycleError.

    Returns:
        str: The tree fragment, one newline-terminated line per entry.
    """
    lines: List[str] = []
    ordered = sort_entries(entries)
    total = len(ordered)

    for i, entry in enumerate(ordered):
        is_last = (i == total - 1)
        connector = LAST_BRANCH if is_last else BRANCH

        if not entry.is_dir:
            lines.append(f"{prefix}{connector}{FILE_ICON} {entry.name}\n")
            continue

        child_path = os.path.join(root, entry.name)
        child_rel = f"{rel_path}/{entry.name}" if rel_path else entry.name
        lines.append(f"{prefix}{connector}{FOLDER_ICON} [{entry.name}](./{child_rel}/)\n")

        if visited is not None:
            _mark_visited(child_path, visited)

        child_prefix = prefix + (SPACE_INDENT if is_last else PIPE_INDENT)
        lines.append(
            render_directory_tree(
                child_path,
                list_directory(child_path),
                prefix=child_prefix,
                rel_path=child_rel,
                visited=visited,
            )
        )

    return "".join(lines)

# -----------------------------------------------------------------------------
# INTERNAL HELPERS
# -----------------------------------------------------------------------------

def _get_collator() -> Collator:
    global _COLLATOR
    if _COLLATOR is None:
        _COLLATOR = Collator()
    return _COLLATOR


def _entry_sort_key(entry: DirectoryEntry) -> Tuple[bool, Tuple[int, ...], str]:
    return (not entry.is_dir, tuple(_get_collator().sort_key(entry.name)), entry.name.swapcase())


def _mark_visited(path: str, visited: Set[str]) -> None:
    canonical = real_path(path)
    if canonical in visited:
        raise DirectoryCycleError(path)
    visited.add(canonical)
