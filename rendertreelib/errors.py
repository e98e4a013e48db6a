"""Exceptions raised by RenderTreeLib.

A search itself never fails on malformed trees; these are raised only for
invalid configuration or when a caller opts into strict cycle handling.
"""

from typing import Any, Sequence


class RenderTreeError(Exception):
    """Base class for all RenderTreeLib errors."""
    pass


class ConfigurationError(RenderTreeError):
    """Raised when a SearchConfig is invalid or can't be met by the adapter."""

    def __init__(self, problems: Sequence[str]):
        self.problems = list(problems)
        super().__init__(f"Invalid search configuration: {'; '.join(self.problems)}")


class CycleDetectedError(RenderTreeError):
    """Raised under CyclePolicy.RAISE when a node is reached from itself."""

    def __init__(self, node: Any, depth: int):
        self.node = node
        self.depth = depth
        super().__init__(f"Render tree cycle detected at {node!r} (depth {depth})")
