from __future__ import annotations

"""
Aggregation Domain Data Models.

Defines the immutable structures exchanged between the traversal services,
the block formatter and the orchestration engine, plus the result object
returned to the interface layer.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Tuple

# -----------------------------------------------------------------------------
# TRAVERSAL MODELS
# -----------------------------------------------------------------------------

class EntryKind(Enum):
    """Classification of a single directory listing entry."""
    DIRECTORY = "directory"
    FILE = "file"


@dataclass(frozen=True)
class DirectoryEntry:
    """
    One child of a listed directory.

    Attributes:
        name: Base name of the entry.
        kind: Whether the entry is a directory or a file.
    """
    name: str
    kind: EntryKind

    @property
    def is_dir(self) -> bool:
        return self.kind is EntryKind.DIRECTORY


@dataclass(frozen=True)
class FileRecord:
    """
    A file discovered beneath the scan root.

    Attributes:
        absolute_path: Host-native absolute path of the file.
        relative_path: Forward-slash path from the scan root.
        extension: Lowercase suffix without the dot, empty if none.
    """
    absolute_path: str
    relative_path: str
    extension: str

# -----------------------------------------------------------------------------
# RESULT MODELS
# -----------------------------------------------------------------------------

@dataclass(frozen=True)
class AggregationResult:
    """
    Outcome of a complete aggregation run.

    Attributes:
        ok: Flag indicating success or failure.
        error: User-facing message in case of failure.
        target_folder: Normalized folder that was scanned.
        output_path: Destination of the aggregated document.
        tree: Rendered directory tree.
        document: Full aggregated document (populated on dry runs).
        files_collected: Number of files found by the collector.
        files_included: Number of files that passed the allow-list.
        files_unreadable: Relative paths replaced by a placeholder block.
        token_count: Estimated token density of the document.
        dry_run: Whether the write step was skipped.
    """
    ok: bool
    error: str
    target_folder: str
    output_path: str = ""
    tree: str = ""
    document: str = ""
    files_collected: int = 0
    files_included: int = 0
    files_unreadable: Tuple[str, ...] = ()
    token_count: int = 0
    dry_run: bool = False

# -----------------------------------------------------------------------------
# FACTORY FUNCTIONS
# -----------------------------------------------------------------------------

def create_error_result(error: str, target_folder: str, output_path: str = "") -> AggregationResult:
    """
    Create a failed aggregation result.

    Args:
        error: Descriptive failure message.
        target_folder: The folder the run was aimed at.
        output_path: Intended destination, if already resolved.

    Returns:
        AggregationResult: Immutable error result.
    """
    return AggregationResult(
        ok=False,
        error=error,
        target_folder=target_folder,
        output_path=output_path,
    )


def create_success_result(
        target_folder: str,
        output_path: str,
        tree: str,
        files_collected: int,
        files_included: int,
        files_unreadable: Tuple[str, ...] = (),
        token_count: int = 0,
        document: str = "",
        dry_run: bool = False,
) -> AggregationResult:
    """Create a successful aggregation result."""
    return AggregationResult(
        ok=True,
        error="",
        target_folder=target_folder,
        output_path=output_path,
        tree=tree,
        document=document,
        files_collected=files_collected,
        files_included=files_included,
        files_unreadable=tuple(files_unreadable),
        token_count=token_count,
        dry_run=dry_run,
    )
