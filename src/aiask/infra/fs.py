from __future__ import annotations

"""
FileSystem Infrastructure Layer.

Provides directory listing, path normalization and text persistence
utilities. Acts as the single abstraction over 'os' so the traversal
services never touch the host filesystem API directly.
"""

import os
from typing import List, Optional

from aiask.domain.models import DirectoryEntry, EntryKind

# -----------------------------------------------------------------------------
# GLOBAL CONSTANTS
# -----------------------------------------------------------------------------

OUTPUT_FILE_NAME = "ai.md"
APP_DIR_NAME = "AiAsk"
UNIX_APP_DIR_NAME = ".aiask"

# -----------------------------------------------------------------------------
# PATH RESOLUTION API
# -----------------------------------------------------------------------------

def get_user_data_dir() -> str:
    """
    Resolve the standard OS-specific directory for persistent application data.

    Standards:
    - Windows: %LOCALAPPDATA%/AiAsk
    - Linux/Mac: ~/.aiask

    Returns:
        str: Absolute path to the application data directory.
    """
    path: str = ""

    if os.name == "nt":
        base = os.environ.get("LOCALAPPDATA") or os.environ.get("APPDATA")
        if base:
            path = os.path.join(base, APP_DIR_NAME)

    if not path:
        path = os.path.join(os.path.expanduser("~"), UNIX_APP_DIR_NAME)

    return os.path.abspath(path)


def normalize_path(path: Optional[str], fallback: str) -> str:
    """
    Normalize a directory path string into an absolute filesystem path.

    Handles environment variable expansion and user home shortcuts.
    Reverts to fallback if the input is empty.

    Args:
        path: Raw input path string.
        fallback: Default path to use if the input is blank.

    Returns:
        str: Normalized absolute path.
    """
    p = (path or "").strip()
    if not p:
        p = fallback
    return os.path.abspath(os.path.expandvars(os.path.expanduser(p)))


def get_output_path(target_folder: str) -> str:
    """Location of the aggregated document inside the scanned folder."""
    return os.path.join(target_folder, OUTPUT_FILE_NAME)

# -----------------------------------------------------------------------------
# DIRECTORY AND FILE I/O
# -----------------------------------------------------------------------------

def is_directory(path: str) -> bool:
    return os.path.isdir(path)


def list_directory(path: str) -> List[DirectoryEntry]:
    """
    List the immediate children of a directory in host listing order.

    Symbolic links are classified by their target, so a link to a
    directory is listed as a directory.

    Args:
        path: Directory to list.

    Returns:
        List[DirectoryEntry]: One entry per child.

    Raises:
        OSError: If the directory cannot be listed.
    """
    entries: List[DirectoryEntry] = []
    with os.scandir(path) as it:
        for item in it:
            kind = EntryKind.DIRECTORY if item.is_dir() else EntryKind.FILE
            entries.append(DirectoryEntry(name=item.name, kind=kind))
    return entries


def real_path(path: str) -> str:
    """Canonical path with every symbolic link resolved."""
    return os.path.realpath(path)


def read_text_file(path: str) -> str:
    """
    Read a whole file as strict UTF-8 text.

    Raises:
        OSError: If the file cannot be opened or read.
        UnicodeDecodeError: If the bytes are not valid UTF-8.
    """
    with open(path, "r", encoding="utf-8", newline="") as f:
        return f.read()


def write_text_file(path: str, content: str) -> None:
    """
    Create or overwrite a UTF-8 text file.

    Raises:
        OSError: If filesystem write permissions are denied.
    """
    with open(path, "w", encoding="utf-8", newline="") as f:
        f.write(content)
