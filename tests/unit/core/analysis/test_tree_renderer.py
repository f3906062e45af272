from __future__ import annotations

"""
Unit tests for the Tree Renderer.

Verifies:
1. Per-level ordering (directories first, case-aware name order).
2. Connector glyphs and box-drawing indentation.
3. Directory link formatting and the optional cycle guard.
"""

import os
from pathlib import Path

import pytest

from aiask.core.analysis.tree_renderer import render_directory_tree, sort_entries
from aiask.domain.errors import DirectoryCycleError
from aiask.domain.models import DirectoryEntry, EntryKind
from aiask.infra.fs import list_directory


def _render(root: Path) -> str:
    return render_directory_tree(str(root), list_directory(str(root)))


def test_sort_entries_directories_before_files():
    entries = [
        DirectoryEntry("zeta.ts", EntryKind.FILE),
        DirectoryEntry("src", EntryKind.DIRECTORY),
        DirectoryEntry("alpha.ts", EntryKind.FILE),
        DirectoryEntry("assets", EntryKind.DIRECTORY),
    ]

    names = [e.name for e in sort_entries(entries)]

    assert names == ["assets", "src", "alpha.ts", "zeta.ts"]


def test_sort_entries_is_case_insensitive_with_lowercase_first():
    entries = [
        DirectoryEntry("b.ts", EntryKind.FILE),
        DirectoryEntry("B.ts", EntryKind.FILE),
        DirectoryEntry("a.ts", EntryKind.FILE),
        DirectoryEntry("C.ts", EntryKind.FILE),
    ]

    names = [e.name for e in sort_entries(entries)]

    assert names == ["a.ts", "b.ts", "B.ts", "C.ts"]


def test_files_only_directory(tmp_path: Path):
    """Files are listed in name order; only the last one gets the corner glyph."""
    for name in ("c.html", "b.ts", "A.json"):
        (tmp_path / name).write_text("x", encoding="utf-8")

    assert _render(tmp_path) == (
        "├── 📄 A.json\n"
        "├── 📄 b.ts\n"
        "└── 📄 c.html\n"
    )


def test_mixed_directory_lists_directories_first(tmp_path: Path):
    (tmp_path / "a.ts").write_text("x", encoding="utf-8")
    (tmp_path / "zeta").mkdir()
    (tmp_path / "Alpha").mkdir()

    assert _render(tmp_path) == (
        "├── 📁 [Alpha](./Alpha/)\n"
        "├── 📁 [zeta](./zeta/)\n"
        "└── 📄 a.ts\n"
    )


def test_nested_indentation_uses_pipe_under_non_final_ancestors(tmp_path: Path):
    (tmp_path / "lib").mkdir()
    (tmp_path / "lib" / "x.ts").write_text("x", encoding="utf-8")
    (tmp_path / "src").mkdir()
    (tmp_path / "src" / "y.ts").write_text("y", encoding="utf-8")
    (tmp_path / "z.json").write_text("{}", encoding="utf-8")

    assert _render(tmp_path) == (
        "├── 📁 [lib](./lib/)\n"
        "│   └── 📄 x.ts\n"
        "├── 📁 [src](./src/)\n"
        "│   └── 📄 y.ts\n"
        "└── 📄 z.json\n"
    )


def test_nested_indentation_uses_spaces_under_final_ancestor(tmp_path: Path):
    pkg = tmp_path / "pkg"
    (pkg / "sub").mkdir(parents=True)
    (pkg / "sub" / "m.ts").write_text("m", encoding="utf-8")
    (pkg / "n.ts").write_text("n", encoding="utf-8")

    assert _render(tmp_path) == (
        "└── 📁 [pkg](./pkg/)\n"
        "    ├── 📁 [sub](./pkg/sub/)\n"
        "    │   └── 📄 m.ts\n"
        "    └── 📄 n.ts\n"
    )


def test_sorting_applies_independently_at_each_level(tmp_path: Path):
    sub = tmp_path / "sub"
    sub.mkdir()
    (sub / "b.ts").write_text("b", encoding="utf-8")
    (sub / "inner").mkdir()
    (sub / "a.ts").write_text("a", encoding="utf-8")

    lines = _render(tmp_path).splitlines()

    assert lines == [
        "└── 📁 [sub](./sub/)",
        "    ├── 📁 [inner](./sub/inner/)",
        "    ├── 📄 a.ts",
        "    └── 📄 b.ts",
    ]


def test_empty_directory_renders_nothing(tmp_path: Path):
    assert _render(tmp_path) == ""


def test_prefix_is_prepended_to_every_line(tmp_path: Path):
    (tmp_path / "one.ts").write_text("1", encoding="utf-8")
    (tmp_path / "two.ts").write_text("2", encoding="utf-8")

    out = render_directory_tree(str(tmp_path), list_directory(str(tmp_path)), prefix="│   ")

    assert out == "│   ├── 📄 one.ts\n│   └── 📄 two.ts\n"


def test_cycle_guard_raises_on_symlink_loop(tmp_path: Path):
    loop_dir = tmp_path / "a"
    loop_dir.mkdir()
    try:
        os.symlink(str(tmp_path), str(loop_dir / "back"), target_is_directory=True)
    except (OSError, NotImplementedError):
        pytest.skip("Symbolic links are not supported on this host.")

    with pytest.raises(DirectoryCycleError):
        render_directory_tree(
            str(tmp_path),
            list_directory(str(tmp_path)),
            visited={os.path.realpath(str(tmp_path))},
        )


def test_sort_entries_places_accented_names_with_their_base_letter():
    entries = [
        DirectoryEntry("zeta.ts", EntryKind.FILE),
        DirectoryEntry("Émile.ts", EntryKind.FILE),
        DirectoryEntry("apple.ts", EntryKind.FILE),
        DirectoryEntry("Ångström.ts", EntryKind.FILE),
    ]

    names = [e.name for e in sort_entries(entries)]

    assert names == ["Ångström.ts", "apple.ts", "Émile.ts", "zeta.ts"]


def test_accented_directory_still_sorts_before_files(tmp_path: Path):
    (tmp_path / "a.ts").write_text("x", encoding="utf-8")
    (tmp_path / "Über").mkdir()
    (tmp_path / "docs").mkdir()

    assert _render(tmp_path) == (
        "├── 📁 [docs](./docs/)\n"
        "├── 📁 [Über](./Über/)\n"
        "└── 📄 a.ts\n"
    )
