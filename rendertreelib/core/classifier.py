"""Node classification for RenderTreeLib.

Every render node, whatever its concrete shape, is reduced to one of four
kinds before the searcher looks at it. Adapters produce ``Classification``
records; this module defines those records and the shared logic that turns a
children reference into a ``ResolvedChildren`` value.
"""

import logging
from collections.abc import Mapping
from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, Optional, Tuple

logger = logging.getLogger(__name__)


class NodeKind(Enum):
    """What a render node is, as far as the search is concerned."""
    ELEMENT = "element"        # Opaque host node, never matchable
    COMPONENT = "component"    # Component reference, possibly instantiated
    FRAGMENT = "fragment"      # Transparent group of siblings
    EMPTY = "empty"            # Nothing rendered


class ChildrenShape(Enum):
    """Normalized shape of a children reference."""
    NONE = "none"
    LIST = "list"
    SINGLE = "single"


@dataclass(frozen=True)
class Classification:
    """Result of classifying one render node.

    Only the fields relevant to ``kind`` are populated:

    - COMPONENT: ``descriptor``, ``name`` and ``instance`` (None until mounted)
    - FRAGMENT: ``children`` as a tuple of nodes
    - ELEMENT: ``children`` as the raw children reference
    """

    kind: NodeKind
    node: Any = None
    descriptor: Any = None
    name: Optional[str] = None
    instance: Any = None
    children: Any = None

    @property
    def is_instantiated(self) -> bool:
        return self.kind is NodeKind.COMPONENT and self.instance is not None

    @classmethod
    def empty(cls, node: Any = None) -> 'Classification':
        return cls(NodeKind.EMPTY, node)

    @classmethod
    def opaque(cls, node: Any, children: Any = None) -> 'Classification':
        """Classification used for elements and unrecognized shapes."""
        return cls(NodeKind.ELEMENT, node, children=children)


@dataclass(frozen=True)
class ResolvedChildren:
    """A children reference normalized to NONE, LIST or SINGLE."""

    shape: ChildrenShape
    nodes: Tuple[Any, ...] = ()
    produced: bool = False  # True when a slot producer was invoked

    def __bool__(self) -> bool:
        return self.shape is not ChildrenShape.NONE

    def __iter__(self):
        return iter(self.nodes)


NO_CHILDREN = ResolvedChildren(ChildrenShape.NONE)


def is_sequence(value: Any) -> bool:
    """Check for an ordered node sequence (list or tuple, not str/bytes)."""
    return isinstance(value, (list, tuple))


def is_producer(value: Any) -> bool:
    """Check for a deferred slot content producer."""
    return callable(value) and not isinstance(value, (type, Mapping))


def normalize_children(ref: Any,
                       is_node: Callable[[Any], bool],
                       slot_name: Optional[str] = 'default') -> ResolvedChildren:
    """Normalize a children reference.

    Args:
        ref: The raw children reference
        is_node: Predicate recognizing a render node of the tree's shape
        slot_name: Slot to read when ``ref`` is a mapping of named slots

    Returns:
        ResolvedChildren. Producers are invoked exactly once and their result
        is classified the same way as a direct reference. Exceptions raised by
        a producer propagate to the caller.
    """
    if ref is None:
        return NO_CHILDREN

    produced = False
    if isinstance(ref, Mapping) and not is_node(ref):
        if slot_name is None:
            return NO_CHILDREN
        ref = ref.get(slot_name)
        if ref is None:
            return NO_CHILDREN

    if is_producer(ref) and not is_node(ref):
        logger.debug("Invoking slot producer %r", ref)
        ref = ref()
        produced = True

    if is_sequence(ref):
        nodes = tuple(item for item in ref if is_node(item))
        return ResolvedChildren(ChildrenShape.LIST, nodes, produced)

    if is_node(ref):
        return ResolvedChildren(ChildrenShape.SINGLE, (ref,), produced)

    return ResolvedChildren(ChildrenShape.NONE, (), produced)


def classify(node: Any, adapter=None) -> Classification:
    """Classify a node using ``adapter`` (native render nodes by default)."""
    return _adapter_or_default(adapter).classify(node)


def resolve_children(node: Any, adapter=None) -> ResolvedChildren:
    """Resolve the children owned by ``node``."""
    return _adapter_or_default(adapter).resolve_children(node)


def _adapter_or_default(adapter):
    if adapter is not None:
        return adapter
    # Imported lazily: adapters depend on this module
    from ..adapters.native import NativeRenderAdapter
    return NativeRenderAdapter()
