"""Test fixtures for RenderTreeLib.

Builders for native render trees plus a tiny renderer that mounts them, so
tests can exercise the locator against realistic component trees without a
real UI framework.

Example:
    >>> Child = component('Child', lambda self: h('div'))
    >>> Parent = component('Parent', lambda self: h(Child))
    >>> wrapper = simple_mount(Parent)
    >>> count_matches([wrapper.subtree], 'Child')
    1
"""

import itertools
from typing import Any, Callable, List, Optional

from ..core.classifier import normalize_children, is_sequence
from ..core.node import (
    RenderNode,
    ComponentDescriptor,
    ComponentInstance,
    ComponentRef,
    Element,
    Fragment,
    EMPTY,
)


def component(name: Optional[str] = None,
              render: Optional[Callable[[ComponentInstance], Any]] = None) -> ComponentDescriptor:
    """Define a component kind.

    ``render`` receives the mounted instance (with ``props`` and ``slots``)
    and returns a node, a list of nodes (rendered as a fragment), or None.
    """
    return ComponentDescriptor(name=name, render=render)


def h(type_: Any, children: Any = None, props: Optional[dict] = None) -> RenderNode:
    """Create a render node, in the style of a hyperscript helper.

    Args:
        type_: Tag string for an element, or a ComponentDescriptor
        children: Children reference (node, list, or producer). For
            components this is the slot content.
        props: Node properties

    Raises:
        TypeError: If ``type_`` is neither a tag nor a descriptor
    """
    props = dict(props or {})
    if isinstance(type_, str):
        return Element(type_, children, props)
    if isinstance(type_, ComponentDescriptor):
        return ComponentRef(type_, children, props)
    raise TypeError(f"Cannot create a render node from {type_!r}")


def fragment(*nodes: RenderNode) -> Fragment:
    """Group sibling nodes without a wrapper element."""
    return Fragment(list(nodes))


def slot(*nodes: RenderNode) -> Callable[[], Any]:
    """Wrap nodes in a deferred slot producer.

    The producer hands back the same node objects on every call (a single
    node when given one, otherwise a list), so content mounted through it is
    what a later search sees. ``produce.calls`` counts invocations.
    """
    content = list(nodes)

    def produce():
        produce.calls += 1
        if len(content) == 1:
            return content[0]
        return list(content)

    produce.calls = 0
    return produce


class Renderer:
    """Instantiates component references and renders their subtrees.

    Each renderer hands out increasing uids starting at ``uid_start``.
    Slot producers are invoked once at mount time; producers that build new
    nodes on every call leave those later nodes unmounted.
    """

    def __init__(self, uid_start: int = 0):
        self._uids = itertools.count(uid_start)
        self.instances: List[ComponentInstance] = []

    def mount(self, node: RenderNode) -> RenderNode:
        """Mount every component reference reachable from ``node``."""
        pending = [node]
        while pending:
            current = pending.pop()
            if isinstance(current, ComponentRef):
                if current.instance is None:
                    pending.append(self._instantiate(current).subtree)
            elif isinstance(current, (Element, Fragment)):
                children = normalize_children(current.children, lambda n: isinstance(n, RenderNode))
                pending.extend(reversed(children.nodes))
        return node

    def _instantiate(self, node: ComponentRef) -> ComponentInstance:
        instance = ComponentInstance(uid=next(self._uids), vnode=node, props=dict(node.props))
        node.instance = instance
        self.instances.append(instance)

        render = node.descriptor.render if node.descriptor is not None else None
        instance.subtree = self._as_node(render(instance) if render else None)
        return instance

    @staticmethod
    def _as_node(rendered: Any) -> RenderNode:
        if rendered is None:
            return EMPTY
        if isinstance(rendered, RenderNode):
            return rendered
        if is_sequence(rendered):
            return Fragment(list(rendered))
        return Element('#text', props={'text': str(rendered)})


default_renderer = Renderer()


def simple_mount(descriptor: ComponentDescriptor,
                 props: Optional[dict] = None,
                 renderer: Optional[Renderer] = None) -> ComponentInstance:
    """Mount a component inside an anonymous wrapper and return the wrapper.

    The wrapper's ``subtree`` is the reference to ``descriptor``, so
    ``[wrapper.subtree]`` is the root list to search when the mounted
    component itself should be found.
    """
    wrapped = ComponentDescriptor(render=lambda self: h(descriptor, props=props))
    root = ComponentRef(wrapped)
    (renderer or default_renderer).mount(root)
    return root.instance
