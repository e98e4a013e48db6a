"""RenderTreeAdapter abstraction for RenderTreeLib.

The adapter is what lets one search algorithm run over differently shaped
render trees. It knows HOW to read a particular node representation; the
searcher only ever sees the ``Classification`` records it produces.
"""

from abc import ABC, abstractmethod
from typing import Any, Optional

from .classifier import (
    Classification,
    NodeKind,
    ResolvedChildren,
    NO_CHILDREN,
    ChildrenShape,
    normalize_children,
)


class RenderTreeAdapter(ABC):
    """Abstract adapter for reading a specific render-tree representation.

    Implementations must keep ``classify`` total: any value, however
    malformed, yields a Classification (an opaque ELEMENT when nothing else
    fits) instead of raising.
    """

    @abstractmethod
    def is_node(self, value: Any) -> bool:
        """Check whether ``value`` is a render node of this tree's shape."""
        pass

    @abstractmethod
    def classify(self, node: Any) -> Classification:
        """Classify a render node.

        Args:
            node: Any value found where a render node was expected

        Returns:
            Classification describing the node
        """
        pass

    @abstractmethod
    def children_of(self, node: Any) -> Any:
        """Return the raw children reference carried by ``node``.

        Returns:
            None, a node, a sequence, a producer, or a slot mapping
        """
        pass

    @abstractmethod
    def instance_identity(self, instance: Any) -> Any:
        """Return the hashable identity of a live component instance.

        Returns:
            Identity value, or None if the instance exposes none
        """
        pass

    @abstractmethod
    def instance_vnode(self, instance: Any) -> Any:
        """Return the component reference node that owns ``instance``."""
        pass

    @abstractmethod
    def instance_subtree(self, instance: Any) -> Any:
        """Return the root of the subtree ``instance`` rendered last."""
        pass

    def resolve_children(self, node: Any,
                         classification: Optional[Classification] = None) -> ResolvedChildren:
        """Resolve the children owned by ``node``.

        Fragments resolve to their own node list. Empty nodes never have
        children. Everything else goes through ``normalize_children``, which
        invokes a deferred producer exactly once.

        Args:
            node: The node whose children are wanted
            classification: Pre-computed classification of ``node``, if any

        Returns:
            ResolvedChildren for the node
        """
        if classification is None:
            classification = self.classify(node)

        if classification.kind is NodeKind.EMPTY:
            return NO_CHILDREN

        if classification.kind is NodeKind.FRAGMENT:
            nodes = tuple(n for n in classification.children or () if self.is_node(n))
            return ResolvedChildren(ChildrenShape.LIST, nodes)

        return normalize_children(self.children_of(node), self.is_node)

    def describe(self) -> str:
        """Short human-readable adapter name for summaries."""
        return self.__class__.__name__
