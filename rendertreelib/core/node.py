"""Render node types for RenderTreeLib.

These are plain data containers describing what a component renders. The
locator never creates or mutates them; they are produced by whatever renders
the tree (a UI framework, or the helpers in ``rendertreelib.testing``).

Children references attached to an ``Element``, ``Fragment`` or
``ComponentRef`` may be:

- ``None`` (no children)
- a list or tuple of render nodes
- a single render node
- a zero-argument callable returning a node or a sequence of nodes
  (deferred slot content, invoked lazily)
"""

from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Optional, Sequence, Union


class RenderNode:
    """Base class for every native render node variant.

    Nodes compare by object identity. Two structurally identical nodes are
    still two distinct pieces of rendered output.
    """

    __slots__ = ()


ChildrenRef = Union[None, RenderNode, Sequence[RenderNode], Callable[[], Any]]


@dataclass(eq=False)
class ComponentDescriptor:
    """Definition of a component kind.

    ``name`` is the declared name used for matching. ``render`` is only
    consulted by the testing helpers, which call it with the mounted
    ``ComponentInstance`` and expect a render node (or ``None``) back.
    """

    name: Optional[str] = None
    render: Optional[Callable[['ComponentInstance'], Any]] = None

    def __repr__(self) -> str:
        return f"ComponentDescriptor(name={self.name!r})"


@dataclass(eq=False)
class Element(RenderNode):
    """A host element such as ``div``. Never matchable itself."""

    tag: str
    children: ChildrenRef = None
    props: Dict[str, Any] = field(default_factory=dict)


@dataclass(eq=False)
class ComponentRef(RenderNode):
    """A reference to a component kind, instantiated once mounted.

    ``children`` holds the slot content handed to the component; it only
    becomes part of the rendered tree if the component renders it.
    """

    descriptor: Optional[ComponentDescriptor]
    children: ChildrenRef = None
    props: Dict[str, Any] = field(default_factory=dict)
    instance: Optional['ComponentInstance'] = None

    @property
    def name(self) -> Optional[str]:
        return self.descriptor.name if self.descriptor is not None else None

    def __repr__(self) -> str:
        uid = self.instance.uid if self.instance is not None else None
        return f"ComponentRef(name={self.name!r}, uid={uid!r})"


@dataclass(eq=False)
class Fragment(RenderNode):
    """Transparent grouping of sibling nodes."""

    children: Sequence[RenderNode] = ()


class Empty(RenderNode):
    """Nothing rendered. Use the shared ``EMPTY`` instance."""

    __slots__ = ()

    def __repr__(self) -> str:
        return "EMPTY"


EMPTY = Empty()


@dataclass(eq=False)
class ComponentInstance:
    """A live, mounted occurrence of a component kind.

    ``uid`` must be unique for as long as the tree is alive; it is the key
    used to deduplicate matches.
    """

    uid: int
    vnode: ComponentRef
    subtree: RenderNode = EMPTY
    props: Dict[str, Any] = field(default_factory=dict)

    def identity(self) -> int:
        return self.uid

    @property
    def descriptor(self) -> Optional[ComponentDescriptor]:
        return self.vnode.descriptor

    @property
    def slots(self) -> ChildrenRef:
        """Slot content passed to this instance by its owning reference."""
        return self.vnode.children

    def __repr__(self) -> str:
        return f"ComponentInstance(uid={self.uid!r}, name={self.vnode.name!r})"
