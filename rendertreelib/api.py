"""High-level API for RenderTreeLib.

This module provides simple, functional interfaces for locating components
in a rendered tree. These functions wrap SearchConfig/SearchPlan for the
common cases.
"""

from typing import Any, List, Optional, Set, Union

from .config import SearchConfig, UninstantiatedPolicy, CyclePolicy
from .core.matcher import Query
from .planning import SearchPlan


def count_matches(roots: Any, query: Any, **options) -> int:
    """Count distinct component instances matching a query.

    Args:
        roots: Root render node, or a sequence of them
        query: Query, component name, or ``{"name": ...}`` mapping
        **options: SearchConfig fields (uninstantiated, max_depth, on_cycle,
            on_error, skip_errors) plus ``adapter``

    Returns:
        Number of distinct matched identities

    Example:
        >>> app = simple_mount(Parent)
        >>> count_matches([app.subtree], {'name': 'Child'})
        1
    """
    return len(find_matches(roots, query, **options))


def find_matches(roots: Any, query: Any, **options) -> Set[Any]:
    """Find the identities of every component instance matching a query.

    Identities are instance uids, or Placeholder values for component
    references that were never mounted. Placeholders are only meaningful
    within one call.

    Args:
        roots: Root render node, or a sequence of them
        query: Query, component name, or ``{"name": ...}`` mapping
        **options: See count_matches

    Returns:
        Set of matched identities
    """
    plan = _build_plan(SearchConfig.counting(), options)
    return plan.execute(roots, Query.of(query)).result()


def find_all(roots: Any, query: Any, **options) -> List[Any]:
    """Find matching component reference nodes, one per distinct identity.

    Args:
        roots: Root render node, or a sequence of them
        query: Query, component name, or ``{"name": ...}`` mapping
        **options: See count_matches

    Returns:
        Matched nodes in traversal order
    """
    plan = _build_plan(SearchConfig.counting(), options)
    collector = plan.execute(roots, Query.of(query))
    return [match.node for match in collector.matches()]


def find_first(roots: Any, target: Any, **options) -> Optional[Any]:
    """Find the first matching component reference in traversal order.

    Unlike the counting functions there is no deduplication: the search stops
    at the first structural match.

    Args:
        roots: Root render node, or a sequence of them
        target: Component descriptor (matched by identity), or a name, mapping
            or Query (matched by name)
        **options: See count_matches

    Returns:
        The matching node, or None
    """
    plan = _build_plan(SearchConfig.first_match(), options)
    match = plan.execute(roots, Query.for_target(target)).result()
    return match.node if match is not None else None


def find_component(target: Any, within: Any, **options) -> Optional[Any]:
    """Find the first mounted instance of ``target`` inside ``within``.

    Args:
        target: Component descriptor, name, mapping or Query
        within: A mounted component instance to search inside
        **options: See count_matches (``adapter`` is also used to read
            ``within``)

    Returns:
        The matching live instance, or None (also None when the first match
        is an unmounted reference)

    Example:
        >>> wrapper = simple_mount(C)
        >>> find_component(A, within=wrapper).vnode.name
        'A'
    """
    plan = _build_plan(SearchConfig.first_match(), options)
    roots = [plan.adapter.instance_subtree(within)]
    match = plan.execute(roots, Query.for_target(target)).result()
    if match is None:
        return None
    return match.instance


def _build_plan(config: SearchConfig, options: dict) -> SearchPlan:
    """Apply keyword options to a base config and build a plan.

    Args:
        config: Base configuration
        options: Keyword options from the public functions

    Returns:
        SearchPlan instance

    Raises:
        TypeError: For an unknown option name
        ConfigurationError: For an invalid option value
    """
    options = dict(options)
    adapter = options.pop('adapter', None)

    if 'uninstantiated' in options:
        config.uninstantiated = _parse_enum(UninstantiatedPolicy, options.pop('uninstantiated'))

    if 'on_cycle' in options:
        config.on_cycle = _parse_enum(CyclePolicy, options.pop('on_cycle'))

    for key, value in options.items():
        if key in ('dedupe', 'stop_on_first', 'custom_collector') or not hasattr(config, key):
            raise TypeError(f"Unexpected search option: {key}")
        setattr(config, key, value)

    return SearchPlan(config, adapter)


def _parse_enum(enum_cls, value: Union[str, Any]) -> Any:
    """Accept an enum member or its string value; leave bad values for validate()."""
    if isinstance(value, enum_cls):
        return value
    if isinstance(value, str):
        for member in enum_cls:
            if member.value == value.lower():
                return member
    return value
