from __future__ import annotations

"""
Domain Exceptions.

Failures raised by the traversal services and surfaced by the orchestration
engine as failed results.
"""


class AiAskError(Exception):
    """Base class for all application-level failures."""


class DirectoryCycleError(AiAskError):
    """
    A directory was reached twice through symbolic links.

    Only raised when cycle detection is enabled.
    """

    def __init__(self, path: str):
        super().__init__(f"Directory cycle detected at: {path}")
        self.path = path
