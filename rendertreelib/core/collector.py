"""Match collection strategies for RenderTreeLib.

The searcher reports every match it sees to a MatchCollector. Collectors
decide what to keep (identities, nodes, just the first hit) and whether the
search may stop early, so the traversal itself is written only once.
"""

from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional, Set

from .matcher import MatchResult


class MatchCollector(ABC):
    """Abstract base class for match accumulation strategies."""

    @abstractmethod
    def add(self, match: MatchResult) -> None:
        """Record a match.

        Args:
            match: A truthy MatchResult produced during the search
        """
        pass

    @abstractmethod
    def result(self) -> Any:
        """Return the accumulated result."""
        pass

    @property
    def done(self) -> bool:
        """True once the collector needs no further matches."""
        return False


class IdentitySetCollector(MatchCollector):
    """Collects the set of distinct matched identities.

    This is the counting collector: the same instance seen through its own
    reference node and through a parent's rendered subtree is recorded once.
    Nodes are remembered per identity, in first-seen order.
    """

    def __init__(self):
        self._nodes: Dict[Any, MatchResult] = {}

    def add(self, match: MatchResult) -> None:
        self._nodes.setdefault(match.identity, match)

    def result(self) -> Set[Any]:
        return set(self._nodes)

    def matches(self) -> List[MatchResult]:
        """First match recorded for each identity, in traversal order."""
        return list(self._nodes.values())

    def __len__(self) -> int:
        return len(self._nodes)


class MatchListCollector(MatchCollector):
    """Collects every match occurrence, in traversal order, without dedupe."""

    def __init__(self):
        self._matches: List[MatchResult] = []

    def add(self, match: MatchResult) -> None:
        self._matches.append(match)

    def result(self) -> List[MatchResult]:
        return list(self._matches)

    def __len__(self) -> int:
        return len(self._matches)


class FirstMatchCollector(MatchCollector):
    """Keeps only the first match and asks the search to stop."""

    def __init__(self):
        self._first: Optional[MatchResult] = None

    def add(self, match: MatchResult) -> None:
        if self._first is None:
            self._first = match

    def result(self) -> Optional[MatchResult]:
        return self._first

    @property
    def done(self) -> bool:
        return self._first is not None

    def __len__(self) -> int:
        return 0 if self._first is None else 1


class CustomCollector(MatchCollector):
    """Collector that uses a user-provided function.

    Allows custom accumulation without subclassing. ``result()`` returns
    whatever the optional result function produces.
    """

    def __init__(self, add_func, result_func=None):
        self.add_func = add_func
        self.result_func = result_func or (lambda: None)

    def add(self, match: MatchResult) -> None:
        self.add_func(match)

    def result(self) -> Any:
        return self.result_func()
