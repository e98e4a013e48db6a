"""Search planning for RenderTreeLib.

The SearchPlan validates that a SearchConfig is consistent and usable with
a RenderTreeAdapter, then assembles the searcher and collector for a run.
"""

from typing import Any, Dict, List, Optional

from .core.adapter import RenderTreeAdapter
from .core.collector import (
    MatchCollector,
    IdentitySetCollector,
    MatchListCollector,
    FirstMatchCollector,
)
from .core.matcher import Query
from .core.searcher import ComponentSearcher
from .config import SearchConfig
from .errors import ConfigurationError


class SearchPlan:
    """Validated plan for searching render trees.

    A plan can be executed any number of times; each execution gets a fresh
    collector and fresh per-call state (placeholders, visited set).
    """

    def __init__(self, config: Optional[SearchConfig] = None,
                 adapter: Optional[RenderTreeAdapter] = None):
        """Create and validate a search plan.

        Args:
            config: Search configuration (defaults to SearchConfig())
            adapter: Adapter for the tree shape (native nodes by default)

        Raises:
            ConfigurationError: If the config is invalid or the adapter
                can't be used
        """
        if adapter is None:
            from .adapters.native import NativeRenderAdapter
            adapter = NativeRenderAdapter()

        self.config = config or SearchConfig()
        self.adapter = adapter

        problems = self.config.validate()
        problems.extend(self._validate_adapter())
        if problems:
            raise ConfigurationError(problems)

        self.searcher = ComponentSearcher(self.adapter, self.config)

    def _validate_adapter(self) -> List[str]:
        if not isinstance(self.adapter, RenderTreeAdapter):
            return [f"adapter must be a RenderTreeAdapter, got {type(self.adapter).__name__}"]
        return []

    def _select_collector(self) -> MatchCollector:
        """Select the collector matching the configured policies."""
        if self.config.custom_collector is not None:
            return self.config.custom_collector
        if self.config.stop_on_first:
            return FirstMatchCollector()
        if self.config.dedupe:
            return IdentitySetCollector()
        return MatchListCollector()

    def execute(self, roots: Any, query: Any) -> MatchCollector:
        """Run the search.

        Args:
            roots: Root render node, or a sequence of them
            query: Query, or anything ``Query.of`` accepts

        Returns:
            The collector holding the results
        """
        if not isinstance(query, Query):
            query = Query.of(query)
        return self.searcher.search(roots, query, self._select_collector())

    @property
    def stats(self):
        """Statistics from the most recent execution."""
        return self.searcher.stats

    def get_summary(self) -> Dict[str, Any]:
        """Get summary of the plan.

        Useful for debugging and logging.

        Returns:
            Dictionary with plan details
        """
        return {
            'uninstantiated': self.config.uninstantiated.value,
            'dedupe': self.config.dedupe,
            'stop_on_first': self.config.stop_on_first,
            'max_depth': self.config.max_depth,
            'on_cycle': self.config.on_cycle.value,
            'skip_errors': self.config.skip_errors,
            'adapter': self.adapter.describe(),
            'collector': self._select_collector().__class__.__name__,
        }
