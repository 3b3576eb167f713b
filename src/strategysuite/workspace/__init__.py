"""Per-user editing session."""

from strategysuite.workspace._workspace import Workspace

__all__ = ["Workspace"]
