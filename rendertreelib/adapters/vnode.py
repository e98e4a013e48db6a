"""Adapter for framework-style vnode trees.

UI frameworks in the virtual-DOM family describe rendered output with
"vnodes" shaped roughly like::

    vnode.type        # tag string, component definition, or fragment marker
    vnode.children    # None, vnode, list, producer, or {"default": producer}
    vnode.component   # live instance once mounted
        .uid          # instance identity
        .vnode        # the vnode that created it
        .subTree      # root vnode of its last render

This adapter reads that shape from either objects (attribute access) or
mappings (key access), so trees exported as plain dicts work too.
"""

import logging
from collections.abc import Mapping
from typing import Any, Iterable, Optional

from ..core.adapter import RenderTreeAdapter
from ..core.classifier import (
    Classification,
    NodeKind,
    ResolvedChildren,
    is_sequence,
    normalize_children,
)

logger = logging.getLogger(__name__)

_MISSING = object()


def read_field(obj: Any, name: str, default: Any = None) -> Any:
    """Read ``name`` from a mapping key or an object attribute."""
    if obj is None:
        return default
    if isinstance(obj, Mapping):
        return obj.get(name, default)
    return getattr(obj, name, default)


class VNodeAdapter(RenderTreeAdapter):
    """Reads duck-typed vnode trees (objects or mappings)."""

    def __init__(self,
                 fragment_types: Iterable[Any] = (),
                 empty_types: Iterable[Any] = (),
                 instance_field: str = 'component',
                 subtree_field: str = 'subTree',
                 identity_field: str = 'uid',
                 slot_name: Optional[str] = 'default'):
        """Initialize the adapter.

        Args:
            fragment_types: ``type`` values marking a fragment vnode
            empty_types: ``type`` values marking "nothing rendered"
                (comment placeholders and the like)
            instance_field: Field on a vnode holding its mounted instance
            subtree_field: Field on an instance holding its rendered root
            identity_field: Field on an instance holding its identity
            slot_name: Slot read when children is a mapping of named slots
        """
        self.fragment_types = list(fragment_types)
        self.empty_types = list(empty_types)
        self.instance_field = instance_field
        self.subtree_field = subtree_field
        self.identity_field = identity_field
        self.slot_name = slot_name

    def is_node(self, value: Any) -> bool:
        if value is None or isinstance(value, (str, bytes, type)):
            return False
        try:
            return read_field(value, 'type', _MISSING) is not _MISSING
        except Exception:
            return False

    def classify(self, node: Any) -> Classification:
        try:
            return self._classify(node)
        except Exception as e:
            logger.debug("Treating %r as opaque after classification error: %s", node, e)
            return Classification.opaque(node)

    def _classify(self, node: Any) -> Classification:
        if node is None:
            return Classification.empty(node)

        # A bare array of vnodes behaves like a fragment
        if is_sequence(node):
            return Classification(NodeKind.FRAGMENT, node, children=tuple(node))

        if not self.is_node(node):
            return Classification.opaque(node)

        node_type = read_field(node, 'type')
        children = read_field(node, 'children')

        if node_type is None or self._is_marker(node_type, self.empty_types):
            return Classification.empty(node)

        if self._is_marker(node_type, self.fragment_types):
            nodes = tuple(children) if is_sequence(children) else ()
            return Classification(NodeKind.FRAGMENT, node, children=nodes)

        if isinstance(node_type, str):
            return Classification.opaque(node, children)

        name = read_field(node_type, 'name')
        instance = read_field(node, self.instance_field)
        return Classification(
            NodeKind.COMPONENT,
            node,
            descriptor=node_type,
            name=name if isinstance(name, str) else None,
            instance=instance,
            children=children,
        )

    def resolve_children(self, node: Any,
                         classification: Optional[Classification] = None) -> ResolvedChildren:
        """Resolve children, reading named slot mappings through ``slot_name``."""
        if classification is None:
            classification = self.classify(node)
        if classification.kind in (NodeKind.ELEMENT, NodeKind.COMPONENT):
            return normalize_children(self.children_of(node), self.is_node,
                                      slot_name=self.slot_name)
        return super().resolve_children(node, classification)

    def children_of(self, node: Any) -> Any:
        if not self.is_node(node):
            return None
        return read_field(node, 'children')

    def instance_identity(self, instance: Any) -> Any:
        return read_field(instance, self.identity_field)

    def instance_vnode(self, instance: Any) -> Any:
        return read_field(instance, 'vnode')

    def instance_subtree(self, instance: Any) -> Any:
        return read_field(instance, self.subtree_field)

    @staticmethod
    def _is_marker(value: Any, markers) -> bool:
        return any(value is marker or (isinstance(marker, str) and value == marker)
                   for marker in markers)
