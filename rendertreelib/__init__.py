"""RenderTreeLib - Component locator for rendered UI trees.

RenderTreeLib finds every live instance of a component kind in a rendered
tree (render nodes plus mounted component instances) and counts distinct
matches by instance identity.

Quick use:
━━━━━━━━━━━━━━━━━━━━━━━━━━
    from rendertreelib import count_matches, find_first

    count_matches([app.subtree], {'name': 'Child'})
    find_first([app.subtree], Child)
━━━━━━━━━━━━━━━━━━━━━━━━━━

Trees built from other frameworks' vnode objects or exported as dicts can be
searched with ``adapter=VNodeAdapter(...)``.
"""

__version__ = "0.1.0"

from .errors import RenderTreeError, ConfigurationError, CycleDetectedError
from .config import SearchConfig, UninstantiatedPolicy, CyclePolicy
from .core import (
    RenderNode,
    ComponentDescriptor,
    ComponentInstance,
    ComponentRef,
    Element,
    Fragment,
    Empty,
    EMPTY,
    NodeKind,
    Classification,
    ResolvedChildren,
    classify,
    resolve_children,
    RenderTreeAdapter,
    Query,
    MatchResult,
    Placeholder,
    matches,
    ComponentSearcher,
    SearchStats,
)
from .adapters import NativeRenderAdapter, VNodeAdapter
from .planning import SearchPlan
from .api import (
    count_matches,
    find_matches,
    find_all,
    find_first,
    find_component,
)

__all__ = [
    "__version__",
    # Errors
    "RenderTreeError",
    "ConfigurationError",
    "CycleDetectedError",
    # Config
    "SearchConfig",
    "UninstantiatedPolicy",
    "CyclePolicy",
    # Core
    "RenderNode",
    "ComponentDescriptor",
    "ComponentInstance",
    "ComponentRef",
    "Element",
    "Fragment",
    "Empty",
    "EMPTY",
    "NodeKind",
    "Classification",
    "ResolvedChildren",
    "classify",
    "resolve_children",
    "RenderTreeAdapter",
    "Query",
    "MatchResult",
    "Placeholder",
    "matches",
    "ComponentSearcher",
    "SearchStats",
    # Adapters
    "NativeRenderAdapter",
    "VNodeAdapter",
    # Planning and API
    "SearchPlan",
    "count_matches",
    "find_matches",
    "find_all",
    "find_first",
    "find_component",
]
