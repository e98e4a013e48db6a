"""Adapter for RenderTreeLib's own render node types."""

from typing import Any

from ..core.adapter import RenderTreeAdapter
from ..core.classifier import Classification, NodeKind
from ..core.node import (
    RenderNode,
    Element,
    ComponentRef,
    Fragment,
    Empty,
    ComponentInstance,
    EMPTY,
)


class NativeRenderAdapter(RenderTreeAdapter):
    """Reads trees built from ``rendertreelib.core.node`` classes.

    This is the default adapter. Since the node types are an explicit
    tagged family, classification is a straight isinstance dispatch.
    """

    def is_node(self, value: Any) -> bool:
        return isinstance(value, RenderNode)

    def classify(self, node: Any) -> Classification:
        if node is None or isinstance(node, Empty):
            return Classification.empty(node)

        if isinstance(node, ComponentRef):
            descriptor = node.descriptor
            name = getattr(descriptor, 'name', None) if descriptor is not None else None
            instance = node.instance if isinstance(node.instance, ComponentInstance) else None
            return Classification(
                NodeKind.COMPONENT,
                node,
                descriptor=descriptor,
                name=name if isinstance(name, str) else None,
                instance=instance,
                children=node.children,
            )

        if isinstance(node, Fragment):
            children = node.children if isinstance(node.children, (list, tuple)) else ()
            return Classification(NodeKind.FRAGMENT, node, children=tuple(children))

        if isinstance(node, Element):
            return Classification.opaque(node, node.children)

        # Not a native node at all
        return Classification.opaque(node)

    def children_of(self, node: Any) -> Any:
        if isinstance(node, (Element, ComponentRef, Fragment)):
            return node.children
        return None

    def instance_identity(self, instance: Any) -> Any:
        if isinstance(instance, ComponentInstance):
            return instance.identity()
        return None

    def instance_vnode(self, instance: Any) -> Any:
        if isinstance(instance, ComponentInstance):
            return instance.vnode
        return None

    def instance_subtree(self, instance: Any) -> Any:
        if isinstance(instance, ComponentInstance):
            return instance.subtree if instance.subtree is not None else EMPTY
        return EMPTY
