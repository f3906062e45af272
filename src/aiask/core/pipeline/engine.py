from __future__ import annotations

"""
Core orchestration pipeline.

Coordinates one aggregation run:
1. Validates the target folder.
2. Renders the directory tree.
3. Collects and filters the flat file list.
4. Formats each surviving file.
5. Composes the document and writes it to <folder>/ai.md.

All I/O happens sequentially on the calling thread; the output order
follows the order of the recursive calls.
"""

import logging
import os
from typing import Iterable, List, Optional, Sequence, Set

from aiask.core.analysis.tree_renderer import render_directory_tree
from aiask.core.processing.formatter import format_file_block_with_status
from aiask.core.processing.tokenizer import count_tokens as estimate_tokens
from aiask.core.services.collector import collect_files
from aiask.domain.config import DEFAULT_INCLUDE_EXTENSIONS, DEFAULT_MODEL
from aiask.domain.models import (
    AggregationResult,
    DirectoryEntry,
    FileRecord,
    create_error_result,
    create_success_result,
)
from aiask.infra.fs import (
    OUTPUT_FILE_NAME,
    get_output_path,
    is_directory,
    list_directory,
    real_path,
    write_text_file,
)

logger = logging.getLogger(__name__)

PREAMBLE = (
    "Below are all the code files in a folder. Please review the code and point out "
    "mistakes, including but not limited to syntax, comments and variable naming."
)


def run_aggregation(
        target_folder: Optional[str],
        include_extensions: Optional[Sequence[str]] = None,
        *,
        detect_cycles: bool = False,
        dry_run: bool = False,
        target_model: str = DEFAULT_MODEL,
        count_tokens: bool = True,
) -> AggregationResult:
    """
    Aggregate a folder into a single Markdown review document.

    Per-file read failures are absorbed into placeholder blocks. Any other
    failure (invalid target, unreadable directory, cycle, failed write)
    aborts the run and is reported as a failed result.

    Args:
        target_folder: Folder to scan; the document is written inside it.
        include_extensions: Allow-list of bare extensions. None means ts/html/json;
                            an empty list embeds no file contents.
        detect_cycles: Fail fast when a directory is reached twice via links.
        dry_run: Build the document without writing it.
        target_model: Model used for token estimation.
        count_tokens: Whether to estimate the document's token count.

    Returns:
        AggregationResult: Status, destination and statistics.
    """
    if not target_folder:
        msg = "No folder selected. Run the command on a folder."
        logger.error(msg)
        return create_error_result(msg, "")

    folder = os.path.abspath(target_folder)
    if not is_directory(folder):
        msg = f"Target is not a folder: {folder}"
        logger.error(msg)
        return create_error_result(msg, folder)

    allowed = list(DEFAULT_INCLUDE_EXTENSIONS) if include_extensions is None else list(include_extensions)
    output_path = get_output_path(folder)
    logger.info(f"Aggregating folder: {folder}")
    logger.debug(f"Included file extensions: {allowed}")

    try:
        tree = render_directory_tree(
            folder,
            visible_root_entries(list_directory(folder)),
            visited=_new_visited(folder, detect_cycles),
        )

        records = collect_files(folder, folder, "", visited=_new_visited(folder, detect_cycles))
        selected = filter_records(records, allowed)

        blocks: List[str] = []
        unreadable: List[str] = []
        for record in selected:
            block, readable = format_file_block_with_status(
                record.absolute_path, record.relative_path, record.extension
            )
            if not readable:
                unreadable.append(record.relative_path)
            blocks.append(block)

        document = compose_document(os.path.basename(folder), tree, blocks)

        if not dry_run:
            write_text_file(output_path, document)
            logger.info(f"Aggregated document written to: {output_path}")

        token_count = estimate_tokens(document, target_model) if count_tokens else 0

    except Exception as e:
        logger.error(f"Aggregation failed for {folder}: {e}", exc_info=True)
        return create_error_result(f"Operation failed: {e}", folder, output_path)

    return create_success_result(
        target_folder=folder,
        output_path=output_path,
        tree=tree,
        files_collected=len(records),
        files_included=len(selected),
        files_unreadable=tuple(unreadable),
        token_count=token_count,
        document=document if dry_run else "",
        dry_run=dry_run,
    )


# -----------------------------------------------------------------------------
# FILTERING AND COMPOSITION
# -----------------------------------------------------------------------------

def is_own_output(record: FileRecord) -> bool:
    """True for the document this tool writes at the scan root."""
    return record.extension == "md" and record.relative_path == OUTPUT_FILE_NAME


def filter_records(records: Iterable[FileRecord], include_extensions: Sequence[str]) -> List[FileRecord]:
    """
    Keep records whose extension is in the allow-list, preserving order.

    The root-level ai.md is always dropped.
    """
    allowed = set(include_extensions)
    return [r for r in records if not is_own_output(r) and r.extension in allowed]


def visible_root_entries(entries: List[DirectoryEntry]) -> List[DirectoryEntry]:
    """Hide the previous output file from the root level of the tree."""
    return [e for e in entries if e.is_dir or e.name != OUTPUT_FILE_NAME]


def compose_document(folder_name: str, tree: str, blocks: Iterable[str]) -> str:
    """Assemble preamble, heading, tree and file blocks in their fixed order."""
    return f"{PREAMBLE}\n\n# 📁 Directory structure: {folder_name}\n\n{tree}\n\n{''.join(blocks)}"


def _new_visited(folder: str, enabled: bool) -> Optional[Set[str]]:
    return {real_path(folder)} if enabled else None
