from __future__ import annotations

"""
File Discovery Service.

Enumerates every file beneath a scan root as a flat list of FileRecords.
Records keep the host listing order (pre-order); display sorting is the
tree renderer's concern only.
"""

import logging
import os
from typing import List, Optional, Set

from aiask.domain.errors import DirectoryCycleError
from aiask.domain.models import FileRecord
from aiask.infra.fs import list_directory, real_path

logger = logging.getLogger(__name__)


# ==============================================================================
# PUBLIC API
# ==============================================================================

def collect_files(
        root: str,
        current_dir: str,
        current_rel_path: str = "",
        visited: Optional[Set[str]] = None,
) -> List[FileRecord]:
    """
    Recursively collect every file under `current_dir`.

    Listing failures are not caught here: an unreadable directory aborts
    the whole collection.

    Args:
        root: Absolute path of the scan root.
        current_dir: Directory being listed.
        current_rel_path: Forward-slash path of `current_dir` from `root`.
        visited: Canonical directory paths already walked. When given, a
                 directory reached twice raises DirectoryCycleError.

    Returns:
        List[FileRecord]: Files in pre-order listing order.

    Raises:
        OSError: If any directory cannot be listed.
        DirectoryCycleError: On a revisit while cycle detection is enabled.
    """
    records: List[FileRecord] = []

    for entry in list_directory(current_dir):
        absolute_path = os.path.join(current_dir, entry.name)
        relative_path = f"{current_rel_path}/{entry.name}" if current_rel_path else entry.name

        if entry.is_dir:
            if visited is not None:
                canonical = real_path(absolute_path)
                if canonical in visited:
                    raise DirectoryCycleError(absolute_path)
                visited.add(canonical)
            records.extend(collect_files(root, absolute_path, relative_path, visited))
            continue

        records.append(
            FileRecord(
                absolute_path=absolute_path,
                relative_path=relative_path,
                extension=file_extension(entry.name),
            )
        )

    if not current_rel_path:
        logger.debug(f"Collected {len(records)} files under {root}")
    return records


def file_extension(name: str) -> str:
    """
    Lowercase suffix after the last dot of a file name, without the dot.

    Returns an empty string when the name has no dot. Leading-dot names
    such as '.gitignore' have no extension.
    """
    _, ext = os.path.splitext(name)
    return ext[1:].lower()
