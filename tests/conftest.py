from __future__ import annotations

"""
Global Pytest Configuration and Fixtures.

This module sets up the testing environment, including:
1. Path manipulation to ensure the 'src' directory is importable.
2. Shared folder fixtures used by the traversal and pipeline tests.
"""

import logging
import os
import sys
from logging.handlers import QueueListener
from pathlib import Path

import pytest

# -----------------------------------------------------------------------------
# Path Configuration
# -----------------------------------------------------------------------------
_SRC_PATH = os.path.abspath(os.path.join(os.path.dirname(__file__), "..", "src"))
if _SRC_PATH not in sys.path:
    sys.path.insert(0, _SRC_PATH)

from aiask.infra.logging.core import _CONFIGURED_FLAG_ATTR, _QUEUE_LISTENER_ATTR  # noqa: E402
from aiask.infra.logging.handlers import _HANDLER_TAG_ATTR  # noqa: E402


# -----------------------------------------------------------------------------
# Shared Fixtures
# -----------------------------------------------------------------------------
@pytest.fixture
def reset_logging():
    """Detach application handlers from the root logger before and after a test."""

    def _reset() -> None:
        root = logging.getLogger()
        listener = getattr(root, _QUEUE_LISTENER_ATTR, None)
        if listener and isinstance(listener, QueueListener):
            if getattr(listener, "_thread", None) is not None:
                listener.stop()
            setattr(root, _QUEUE_LISTENER_ATTR, None)
        for h in list(root.handlers):
            if getattr(h, _HANDLER_TAG_ATTR, False):
                root.removeHandler(h)
                h.close()
        if hasattr(root, _CONFIGURED_FLAG_ATTR):
            delattr(root, _CONFIGURED_FLAG_ATTR)

    _reset()
    yield
    _reset()


@pytest.fixture
def web_project(tmp_path: Path) -> Path:
    """
    Create a small web project.

    Structure:
    /web
      /src
        app.ts
        /components
          button.ts
      /static
        index.html
        style.css
      package.json
      README.md
    """
    root = tmp_path / "web"
    root.mkdir()

    src = root / "src"
    src.mkdir()
    (src / "app.ts").write_text("export const app = 1;", encoding="utf-8")
    components = src / "components"
    components.mkdir()
    (components / "button.ts").write_text("export class Button {}", encoding="utf-8")

    static = root / "static"
    static.mkdir()
    (static / "index.html").write_text("<html></html>", encoding="utf-8")
    (static / "style.css").write_text("body { margin: 0; }", encoding="utf-8")

    (root / "package.json").write_text('{"name": "web"}', encoding="utf-8")
    (root / "README.md").write_text("# Web", encoding="utf-8")

    return root
