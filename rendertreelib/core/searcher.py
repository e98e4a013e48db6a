"""Component search over render trees.

The ComponentSearcher walks a forest of render nodes through a
RenderTreeAdapter, tests every component it meets against a Query, and
reports matches to a MatchCollector. One algorithm serves both counting
(deduplicate by identity, explore everything) and find-first (stop at the
first hit); the collector decides which.
"""

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Sequence, Tuple

from .adapter import RenderTreeAdapter
from .classifier import Classification, NodeKind, ResolvedChildren, NO_CHILDREN, is_sequence
from .collector import MatchCollector, IdentitySetCollector
from .matcher import Query, PlaceholderRegistry, matches
from ..config import SearchConfig, CyclePolicy, UninstantiatedPolicy
from ..errors import CycleDetectedError

logger = logging.getLogger(__name__)

# Work items on the search stack
VISIT = 'visit'
LEAVE = 'leave'


@dataclass
class SearchStats:
    """Counters describing the last search a ComponentSearcher ran."""

    nodes_visited: int = 0
    components_seen: int = 0
    matches_recorded: int = 0
    producers_invoked: int = 0
    cycles_skipped: int = 0
    depth_pruned: int = 0
    errors: List[Tuple[Any, str]] = field(default_factory=list)

    def as_dict(self) -> Dict[str, Any]:
        return {
            'nodes_visited': self.nodes_visited,
            'components_seen': self.components_seen,
            'matches_recorded': self.matches_recorded,
            'producers_invoked': self.producers_invoked,
            'cycles_skipped': self.cycles_skipped,
            'depth_pruned': self.depth_pruned,
            'errors': len(self.errors),
        }


class ComponentSearcher:
    """Exhaustive, shape-agnostic search for component instances.

    For each node, in order:

    1. the node itself is tested;
    2. an instantiated component also has its owning vnode and its rendered
       subtree root tested. A subtree root that is a mounted component is
       then searched as a node of its own, so slot content is only reached
       through what that component actually rendered. Any other subtree
       root has its children searched;
    3. fragments are searched transparently;
    4. elements with resolvable children are searched; empty nodes and
       terminal elements end the branch.

    The walk uses an explicit stack, so tree depth is bounded by
    ``max_depth`` and memory, not by the interpreter's recursion limit.
    State lives on the searcher only for the duration of one ``search``
    call; nothing about the tree is retained between calls except ``stats``.
    """

    def __init__(self, adapter: RenderTreeAdapter, config: Optional[SearchConfig] = None):
        """Initialize searcher.

        Args:
            adapter: RenderTreeAdapter for reading the tree
            config: Search configuration (defaults to SearchConfig())
        """
        self.adapter = adapter
        self.config = config or SearchConfig()
        self.stats = SearchStats()
        self._reset(Query(), IdentitySetCollector())

    def _reset(self, query: Query, collector: MatchCollector) -> None:
        self._query = query
        self._collector = collector
        self._placeholders = PlaceholderRegistry()
        # id(node) -> node; holding the node keeps its id from being reused
        self._visited: Dict[int, Any] = {}
        self._active = set()

    def search(self,
               nodes: Any,
               query: Any,
               collector: Optional[MatchCollector] = None) -> MatchCollector:
        """Search a forest of render nodes.

        Args:
            nodes: A sequence of root nodes (a single node is accepted too)
            query: Query, or anything ``Query.of`` accepts
            collector: Where matches go (IdentitySetCollector by default)

        Returns:
            The collector, after the search completes or stops early

        Raises:
            CycleDetectedError: Only under CyclePolicy.RAISE
        """
        if collector is None:
            collector = IdentitySetCollector()

        self.stats = SearchStats()
        self._reset(Query.of(query), collector)
        try:
            self._walk(self._as_forest(nodes))
        finally:
            # Drop references to the tree once the call is over
            self._reset(self._query, collector)

        logger.debug("Search for %r finished: %s", self._query, self.stats.as_dict())
        return collector

    @staticmethod
    def _as_forest(nodes: Any) -> Sequence[Any]:
        if nodes is None:
            return ()
        if is_sequence(nodes):
            return nodes
        return (nodes,)

    def _walk(self, roots: Sequence[Any]) -> None:
        # Stack stores (action, node, depth) tuples, popped in pre-order
        stack: List[Tuple[str, Any, int]] = [(VISIT, node, 0) for node in reversed(roots)]

        while stack and not self._collector.done:
            action, node, depth = stack.pop()
            if action == LEAVE:
                self._active.discard(id(node))
                continue

            pending = self._visit(node, depth)
            if pending is None:
                continue

            # Node stays on the active path until all of its pending work is done
            self._active.add(id(node))
            stack.append((LEAVE, node, depth))
            stack.extend((VISIT, child, depth + 1) for child in reversed(pending))

    def _visit(self, node: Any, depth: int) -> Optional[Sequence[Any]]:
        """Test one node and return the nodes to search below it.

        Returns None when the branch ends here.
        """
        config = self.config
        if config.max_depth is not None and depth > config.max_depth:
            self.stats.depth_pruned += 1
            logger.warning("Pruning render tree branch at depth %d (max_depth=%d)",
                           depth, config.max_depth)
            return None

        key = id(node)
        if key in self._active:
            self.stats.cycles_skipped += 1
            if config.on_cycle is CyclePolicy.RAISE:
                raise CycleDetectedError(node, depth)
            logger.warning("Skipping render tree cycle at %r (depth %d)", node, depth)
            return None

        if key in self._visited:
            return None

        classification = self.adapter.classify(node)
        if classification.kind is NodeKind.EMPTY:
            return None

        self._visited[key] = node
        self.stats.nodes_visited += 1
        self._record(node, classification)
        if self._collector.done:
            return None

        if classification.kind is NodeKind.COMPONENT:
            self.stats.components_seen += 1
            logger.debug("Traversed: %s", classification.name)
            if classification.instance is None:
                return None
            return self._explore_instance(node, classification.instance)

        if classification.kind is NodeKind.FRAGMENT:
            return self._resolve(node, classification).nodes

        if classification.children is not None:
            return self._resolve(node, classification).nodes
        return None

    def _explore_instance(self, node: Any, instance: Any) -> Sequence[Any]:
        vnode = self.adapter.instance_vnode(instance)
        # Usually the node itself, which was already tested
        if vnode is not None and vnode is not node:
            self._record(vnode)

        subtree = self.adapter.instance_subtree(instance)
        sub_classification = self.adapter.classify(subtree)
        if sub_classification.kind is NodeKind.EMPTY:
            return ()

        self._record(subtree, sub_classification)
        if self._collector.done:
            return ()

        # Its slot content is reached through its own instance, if rendered
        if sub_classification.is_instantiated:
            return (subtree,)

        return self._resolve(subtree, sub_classification).nodes

    def _resolve(self, node: Any, classification: Classification) -> ResolvedChildren:
        try:
            children = self.adapter.resolve_children(node, classification)
        except Exception as e:
            self._handle_error(node, e)
            return NO_CHILDREN

        if children.produced:
            self.stats.producers_invoked += 1
        return children

    def _record(self, node: Any, classification: Optional[Classification] = None) -> None:
        result = matches(
            node,
            self._query,
            adapter=self.adapter,
            skip_uninstantiated=self.config.uninstantiated is UninstantiatedPolicy.SKIP,
            placeholders=self._placeholders,
            classification=classification,
        )
        if result:
            self.stats.matches_recorded += 1
            self._collector.add(result)

    def _handle_error(self, node: Any, error: Exception) -> None:
        """Handle an error raised while resolving children.

        Args:
            node: Node whose children could not be resolved
            error: The exception that was raised
        """
        self.stats.errors.append((node, str(error)))

        if self.config.on_error:
            self.config.on_error(node, error)

        if not self.config.skip_errors:
            raise error

        logger.warning("Skipping children of %r after error: %s", node, error)
