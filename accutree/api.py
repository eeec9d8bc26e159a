"""High-level API for AccuTree.

This module provides simple, functional interfaces for common walks. These
functions wrap the object-oriented API (WalkConfig, WalkPlan, PathWalker)
for ease of use in simple cases.

Every function accepts the same optional keyword arguments:

- ``get_children`` / ``accumulate``: callables replacing the root's own
  ``children()`` / ``accumulate()`` methods (for ad-hoc trees)
- ``accumulator_type`` / ``neutral``: how to seed the root
- any WalkConfig field (``depth_hint``, ``max_nodes``, ``skip_errors``, ...)
"""

from typing import Any, Callable, Dict, Iterable, Iterator, List, Optional, Tuple

from .config import WalkConfig
from .core.path import FrozenPath
from .planning import WalkPlan

_PLAN_OPTIONS = ('get_children', 'accumulate', 'accumulator_type', 'neutral')


def visit(root: Any,
          parameters: Optional[Iterable[Any]] = None,
          payload: Any = None,
          on_visit: Optional[Callable[[Any, Any], None]] = None,
          **kwargs) -> int:
    """Walk a tree and call a visit callback on every node.

    This is the primary high-level function. It handles the common case of
    folding accumulators down a tree and reacting to each node without
    dealing with configs and plans.

    Args:
        root: Root node of the tree
        parameters: Per-step accumulation parameters (one per visited node,
            in visiting order; missing ones are None)
        payload: Caller-owned state handed to every visit
        on_visit: ``on_visit(path, payload)``; defaults to the visited node's
            own ``on_visit`` method
        **kwargs: Plan options and WalkConfig fields

    Returns:
        Number of nodes visited

    Example:
        >>> totals = []
        >>> visit(tree, [2, 3, 4], totals,
        ...       on_visit=lambda path, out: out.append(path.accumulator))
        3
        >>> totals
        [2, 8, 14]
    """
    plan = _build_plan(root, kwargs)
    return plan.execute(parameters, payload, on_visit=on_visit)


def walk_paths(root: Any,
               parameters: Optional[Iterable[Any]] = None,
               **kwargs) -> Iterator[FrozenPath]:
    """Lazily yield every root-to-node path in depth-first pre-order.

    Each path is an immutable snapshot, safe to keep.

    Args:
        root: Root node of the tree
        parameters: Per-step accumulation parameters
        **kwargs: Plan options and WalkConfig fields

    Yields:
        FrozenPath of PathEntry(node, accumulator) items

    Example:
        >>> for path in walk_paths(tree):
        ...     print(" -> ".join(str(n) for n in path.nodes()), path.accumulator)
    """
    plan = _build_plan(root, kwargs)
    yield from plan.iter_paths(parameters)


def collect_accumulators(root: Any,
                         parameters: Optional[Iterable[Any]] = None,
                         **kwargs) -> List[Tuple[Any, Any]]:
    """Return ``(node, accumulator)`` for every node in visiting order.

    Args:
        root: Root node of the tree
        parameters: Per-step accumulation parameters
        **kwargs: Plan options and WalkConfig fields

    Returns:
        List of (node, accumulator) pairs
    """
    return [(path.node, path.accumulator) for path in walk_paths(root, parameters, **kwargs)]


def count_nodes(root: Any, **kwargs) -> int:
    """Count the nodes of a tree.

    Args:
        root: Root node of the tree
        **kwargs: Plan options and WalkConfig fields

    Returns:
        Number of nodes visited
    """
    return visit(root, on_visit=_ignore, **kwargs)


def find_paths(root: Any,
               predicate: Callable[[FrozenPath], bool],
               parameters: Optional[Iterable[Any]] = None,
               **kwargs) -> Iterator[FrozenPath]:
    """Find paths that match a predicate.

    The predicate sees the whole path, so it can test ancestors and
    accumulators as well as the node itself.

    Args:
        root: Root node of the tree
        predicate: Function returning True for matching paths
        parameters: Per-step accumulation parameters
        **kwargs: Plan options and WalkConfig fields

    Yields:
        Matching paths

    Example:
        >>> # Every node whose path cost exceeds 10
        >>> expensive = list(find_paths(tree, lambda p: p.accumulator > 10))
    """
    for path in walk_paths(root, parameters, **kwargs):
        if predicate(path):
            yield path


def get_leaf_paths(root: Any,
                   parameters: Optional[Iterable[Any]] = None,
                   **kwargs) -> Iterator[FrozenPath]:
    """Yield the paths that end in a leaf.

    A visited node is a leaf exactly when the next step does not go deeper,
    so leaves are detected from the walk itself without asking any node for
    its children a second time. The one exception is the last node of a walk
    cut short by ``max_nodes``: its children are checked directly.

    Args:
        root: Root node of the tree
        parameters: Per-step accumulation parameters
        **kwargs: Plan options and WalkConfig fields

    Yields:
        Root-to-leaf paths in visiting order
    """
    plan = _build_plan(root, kwargs)
    previous = None
    for path in plan.iter_paths(parameters):
        if previous is not None and len(path) <= len(previous):
            yield previous
        previous = path
    if previous is not None and _is_last_leaf(plan, previous):
        yield previous


def get_tree_stats(root: Any, **kwargs) -> Dict[str, Any]:
    """Get statistics about a tree.

    Args:
        root: Root node of the tree
        **kwargs: Plan options and WalkConfig fields

    Returns:
        Dictionary with ``total_nodes``, ``leaf_nodes``, ``internal_nodes``,
        ``max_depth`` (root = 1), ``depths`` (nodes per depth) and
        ``average_branching`` (children per internal node)

    Example:
        >>> stats = get_tree_stats(tree)
        >>> print(f"Total nodes: {stats['total_nodes']}")
    """
    stats = {
        'total_nodes': 0,
        'leaf_nodes': 0,
        'max_depth': 0,
        'depths': {}
    }

    plan = _build_plan(root, kwargs)
    previous = None
    previous_depth = 0
    for path in plan.iter_paths():
        depth = len(path)
        stats['total_nodes'] += 1

        # The previous node had no children if we didn't go deeper
        if previous_depth and depth <= previous_depth:
            stats['leaf_nodes'] += 1

        stats['max_depth'] = max(stats['max_depth'], depth)
        stats['depths'][depth] = stats['depths'].get(depth, 0) + 1
        previous = path
        previous_depth = depth

    if previous is not None and _is_last_leaf(plan, previous):
        stats['leaf_nodes'] += 1

    stats['internal_nodes'] = stats['total_nodes'] - stats['leaf_nodes']
    # Every node but the root is somebody's child
    stats['average_branching'] = (
        (stats['total_nodes'] - 1) / stats['internal_nodes']
        if stats['internal_nodes'] > 0 else 0
    )

    return stats


# Helper functions

def _ignore(path: Any, payload: Any) -> None:
    pass


def _is_last_leaf(plan: WalkPlan, path: FrozenPath) -> bool:
    """Whether the final path of a finished walk ends in a leaf."""
    if plan.limit_reached:
        return not plan.has_children(path.node)
    return True


def _build_plan(root: Any, kwargs: Dict[str, Any]) -> WalkPlan:
    """Split keyword arguments into plan options and config fields."""
    plan_options = {key: kwargs.pop(key) for key in _PLAN_OPTIONS if key in kwargs}
    config = WalkConfig(**kwargs)
    return WalkPlan(config, root, **plan_options)


__all__ = [
    'visit',
    'walk_paths',
    'collect_accumulators',
    'count_nodes',
    'find_paths',
    'get_leaf_paths',
    'get_tree_stats',
]
