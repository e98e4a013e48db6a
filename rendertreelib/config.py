"""Configuration system for RenderTreeLib.

This module defines how callers describe a search: what to do with
references that have not been mounted yet, whether to deduplicate, when to
stop, and how defensive to be about malformed trees.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, List, Optional


class UninstantiatedPolicy(Enum):
    """How to treat a matching component reference with no live instance."""
    PLACEHOLDER = "placeholder"   # Match with a call-scoped placeholder identity
    SKIP = "skip"                 # Never match until mounted


class CyclePolicy(Enum):
    """What to do when a node is reached again from within its own branch."""
    SKIP = "skip"       # Warn and prune the branch
    RAISE = "raise"     # Raise CycleDetectedError


@dataclass
class SearchConfig:
    """Complete configuration for a component search.

    The SearchPlan validates this against its adapter before any tree is
    read.
    """

    # Matching
    uninstantiated: UninstantiatedPolicy = UninstantiatedPolicy.PLACEHOLDER

    # Result shape
    dedupe: bool = True            # Collapse matches by instance identity
    stop_on_first: bool = False    # Stop at the first match in traversal order
    custom_collector: Optional[Any] = None

    # Hardening
    max_depth: Optional[int] = None
    on_cycle: CyclePolicy = CyclePolicy.SKIP

    # Error handling (slot producers are the only thing that can fail)
    on_error: Optional[Callable[[Any, Exception], None]] = None
    skip_errors: bool = True

    @classmethod
    def counting(cls, **overrides) -> 'SearchConfig':
        """Config for counting distinct instances (the default behavior)."""
        return cls(dedupe=True, stop_on_first=False, **overrides)

    @classmethod
    def first_match(cls, **overrides) -> 'SearchConfig':
        """Config for finding the first structural match, no dedupe."""
        return cls(dedupe=False, stop_on_first=True, **overrides)

    @classmethod
    def strict(cls, max_depth: int = 500, **overrides) -> 'SearchConfig':
        """Config for untrusted trees.

        Only mounted instances match, cycles raise, and producer errors
        propagate.
        """
        return cls(
            uninstantiated=UninstantiatedPolicy.SKIP,
            max_depth=max_depth,
            on_cycle=CyclePolicy.RAISE,
            skip_errors=False,
            **overrides
        )

    def validate(self) -> List[str]:
        """Validate configuration for consistency.

        Returns:
            List of validation errors (empty if valid)
        """
        errors = []

        if not isinstance(self.uninstantiated, UninstantiatedPolicy):
            errors.append(f"uninstantiated must be an UninstantiatedPolicy, got {self.uninstantiated!r}")

        if not isinstance(self.on_cycle, CyclePolicy):
            errors.append(f"on_cycle must be a CyclePolicy, got {self.on_cycle!r}")

        if self.max_depth is not None:
            if isinstance(self.max_depth, bool) or not isinstance(self.max_depth, int):
                errors.append("max_depth must be an integer")
            elif self.max_depth < 0:
                errors.append("max_depth cannot be negative")

        if self.on_error is not None and not callable(self.on_error):
            errors.append("on_error must be callable")

        if self.custom_collector is not None and not hasattr(self.custom_collector, 'add'):
            errors.append("custom_collector must provide add()")

        return errors
