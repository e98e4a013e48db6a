"""Component matching for RenderTreeLib.

A render node matches a query when it is a component reference whose kind
the query accepts. The match reports an identity: the live instance's own
identity when mounted, otherwise a placeholder that is only meaningful within
a single search call.
"""

import itertools
import logging
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any, Dict, Optional, Tuple

from .classifier import Classification, NodeKind

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Query:
    """Describes the component kind being searched for.

    Name queries compare declared names; both sides must have a non-empty
    name. Kind queries compare the component descriptor by identity. Two
    different kinds sharing a declared name are indistinguishable to a name
    query.
    """

    name: Optional[str] = None
    kind: Any = None

    @classmethod
    def of(cls, target: Any) -> 'Query':
        """Coerce a string, mapping, named object or Query into a name query."""
        if isinstance(target, Query):
            return target
        if target is None:
            return cls()
        if isinstance(target, str):
            return cls(name=target)
        if isinstance(target, Mapping):
            return cls(name=_as_name(target.get('name')))
        return cls(name=_as_name(getattr(target, 'name', None)))

    @classmethod
    def for_kind(cls, kind: Any) -> 'Query':
        """Query matching exactly one component descriptor."""
        if isinstance(kind, Mapping):
            name = kind.get('name')
        else:
            name = getattr(kind, 'name', None)
        return cls(name=_as_name(name), kind=kind)

    @classmethod
    def for_target(cls, target: Any) -> 'Query':
        """Coerce a find-first target.

        Strings, mappings and Query objects become name queries; any other
        object is taken to be a component descriptor and matched by identity.
        """
        if target is None or isinstance(target, (str, Mapping, Query)):
            return cls.of(target)
        return cls.for_kind(target)

    def accepts(self, classification: Classification) -> bool:
        """Check whether a classified node is of the queried kind."""
        if classification.kind is not NodeKind.COMPONENT:
            return False
        if self.kind is not None:
            return classification.descriptor is self.kind
        if not self.name or not classification.name:
            return False
        return classification.name == self.name

    def __repr__(self) -> str:
        if self.kind is not None:
            return f"Query(kind={self.name or self.kind!r})"
        return f"Query(name={self.name!r})"


def _as_name(value: Any) -> Optional[str]:
    return value if isinstance(value, str) and value else None


@dataclass(frozen=True)
class Placeholder:
    """Identity standing in for an unmounted component reference.

    Sequence numbers are only unique within the search call that issued
    them; the same node gets a new placeholder on the next call.
    """

    seq: int

    def __repr__(self) -> str:
        return f"Placeholder({self.seq})"


class PlaceholderRegistry:
    """Issues placeholders for one search call, one per node object."""

    def __init__(self):
        self._counter = itertools.count()
        # id(node) -> (node, placeholder); the node is held so its id can't be reused
        self._issued: Dict[int, Tuple[Any, Placeholder]] = {}

    def identity_for(self, node: Any) -> Placeholder:
        entry = self._issued.get(id(node))
        if entry is not None:
            return entry[1]
        placeholder = Placeholder(next(self._counter))
        self._issued[id(node)] = (node, placeholder)
        return placeholder

    def __len__(self) -> int:
        return len(self._issued)


@dataclass(frozen=True)
class MatchResult:
    """Outcome of testing one node. ``identity`` is None for no match."""

    identity: Any = None
    node: Any = None
    instance: Any = None

    @property
    def matched(self) -> bool:
        return self.identity is not None

    @property
    def is_placeholder(self) -> bool:
        return isinstance(self.identity, Placeholder)

    def __bool__(self) -> bool:
        return self.matched


NO_MATCH = MatchResult()


def matches(node: Any,
            query: Any,
            adapter=None,
            skip_uninstantiated: bool = False,
            placeholders: Optional[PlaceholderRegistry] = None,
            classification: Optional[Classification] = None) -> MatchResult:
    """Test a single render node against a query.

    Never raises, whatever the shape of ``node``.

    Args:
        node: The render node to test
        query: Query, or anything ``Query.of`` accepts
        adapter: RenderTreeAdapter reading the node (native by default)
        skip_uninstantiated: Don't match references without a live instance
        placeholders: Registry scoping placeholder identities to one call
        classification: Pre-computed classification of ``node``

    Returns:
        MatchResult; falsy when the node does not match
    """
    if adapter is None:
        from ..adapters.native import NativeRenderAdapter
        adapter = NativeRenderAdapter()

    query = Query.of(query)
    if classification is None:
        classification = adapter.classify(node)

    if not query.accepts(classification):
        return NO_MATCH

    logger.debug("Matched component %r", classification.name)

    identity = None
    if classification.instance is not None:
        identity = instance_identity(adapter, classification.instance)

    if identity is None:
        if skip_uninstantiated:
            return NO_MATCH
        if placeholders is None:
            placeholders = PlaceholderRegistry()
        identity = placeholders.identity_for(node)

    return MatchResult(identity, node, classification.instance)


def instance_identity(adapter, instance: Any) -> Any:
    """Read an instance identity, returning None if it is missing or unusable."""
    try:
        identity = adapter.instance_identity(instance)
        if identity is not None:
            hash(identity)
        return identity
    except Exception as e:
        logger.debug("Ignoring unusable identity on %r: %s", instance, e)
        return None
