"""Visitable abstraction for AccuTree.

A Visitable is any node that knows three things: its children, how it folds
its own contribution into the accumulator inherited from its parent, and what
to do when it is visited. The engine never owns or mutates nodes; it only
holds references to them for the duration of a walk.
"""

from abc import ABC, abstractmethod
from typing import Any, Iterable, Optional, TYPE_CHECKING

from .driver import drive
from .walker import DEFAULT_DEPTH_HINT, PathWalker

if TYPE_CHECKING:
    from .path import PathView


class Visitable(ABC):
    """Abstract base class for nodes of a tree walked depth-first.

    Subclasses set ``accumulator_type`` to an Accumulable subclass or a
    registered plain type (see :mod:`accutree.core.accumulable`); its neutral
    element seeds the root's ``accumulate`` call.

    Example:
        >>> class Bone(Visitable):
        ...     accumulator_type = Affine2D
        ...     def __init__(self, offset, children=()):
        ...         self.offset, self._children = offset, list(children)
        ...     def children(self):
        ...         return self._children
        ...     def accumulate(self, acc, angle=None):
        ...         local = Affine2D.rotation(angle or 0.0)
        ...         return acc.accumulate(local).accumulate(self.offset)
        ...     def on_visit(self, path, payload):
        ...         payload.append(path.accumulator.apply(0, 0))
    """

    accumulator_type: Any = int

    @abstractmethod
    def children(self) -> Iterable['Visitable']:
        """Return this node's direct children in visiting order.

        May be lazy (a generator is fine). Must be deterministic and free of
        side effects: two calls yield equivalent sequences. An empty sequence
        marks a leaf.

        Returns:
            Iterable of child nodes
        """
        pass

    @abstractmethod
    def accumulate(self, acc: Any, parameter: Optional[Any] = None) -> Any:
        """Compute this node's accumulator from its parent's.

        Must be pure: neither ``self`` nor ``acc`` may be mutated.

        Args:
            acc: Accumulator inherited from the parent (the neutral element
                for the root)
            parameter: Per-step parameter, or None when absent. Decide on a
                fallback here (typically an identity modifier).

        Returns:
            The accumulator for this node
        """
        pass

    @abstractmethod
    def on_visit(self, path: 'PathView', payload: Any) -> None:
        """React to being visited.

        Called exactly once per node, after its accumulator has been
        computed. ``path[-1]`` is this node; ``len(path)`` is its depth.

        The path aliases the walker's internal stack and is only valid during
        this call. Use ``path.snapshot()`` to keep it.

        Args:
            path: Root-to-current path of (node, accumulator) entries
            payload: Caller-owned mutable state
        """
        pass

    def walker(self, depth_hint: int = DEFAULT_DEPTH_HINT, **options) -> PathWalker:
        """Create a PathWalker with this node as root.

        Args:
            depth_hint: Expected maximum depth (pre-sizing only)
            **options: Extra PathWalker options (neutral, check_stale, ...)
        """
        return PathWalker.for_visitable(self, depth_hint, **options)

    def visit(self,
              depth_hint: int = DEFAULT_DEPTH_HINT,
              parameters: Optional[Iterable[Any]] = None,
              payload: Any = None) -> int:
        """Walk the subtree rooted here, calling ``on_visit`` on every node.

        Args:
            depth_hint: Expected maximum depth (pre-sizing only)
            parameters: Per-step accumulation parameters
            payload: Mutable state handed to every ``on_visit``

        Returns:
            Number of nodes visited
        """
        return drive(self.walker(depth_hint), parameters, payload)


def supports_walking(node: Any) -> bool:
    """Check whether an object provides the traversal capability.

    Duck typing is enough: ``children`` and ``accumulate`` methods make a node
    walkable even if it doesn't subclass Visitable.
    """
    return callable(getattr(node, 'children', None)) and callable(getattr(node, 'accumulate', None))


__all__ = ['Visitable', 'supports_walking']
