"""Core abstractions for RenderTreeLib.

This module contains the node model, the classifier, matching, collection
and the searcher that ties them together.
"""

from .node import (
    RenderNode,
    ComponentDescriptor,
    ComponentInstance,
    ComponentRef,
    Element,
    Fragment,
    Empty,
    EMPTY,
)
from .classifier import (
    NodeKind,
    ChildrenShape,
    Classification,
    ResolvedChildren,
    classify,
    resolve_children,
)
from .adapter import RenderTreeAdapter
from .matcher import Query, MatchResult, Placeholder, matches
from .collector import (
    MatchCollector,
    IdentitySetCollector,
    MatchListCollector,
    FirstMatchCollector,
    CustomCollector,
)
from .searcher import ComponentSearcher, SearchStats

__all__ = [
    "RenderNode",
    "ComponentDescriptor",
    "ComponentInstance",
    "ComponentRef",
    "Element",
    "Fragment",
    "Empty",
    "EMPTY",
    "NodeKind",
    "ChildrenShape",
    "Classification",
    "ResolvedChildren",
    "classify",
    "resolve_children",
    "RenderTreeAdapter",
    "Query",
    "MatchResult",
    "Placeholder",
    "matches",
    "MatchCollector",
    "IdentitySetCollector",
    "MatchListCollector",
    "FirstMatchCollector",
    "CustomCollector",
    "ComponentSearcher",
    "SearchStats",
]
