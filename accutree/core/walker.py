"""Iterative depth-first path walker - the engine at the heart of AccuTree.

The walker keeps two parallel stacks instead of recursing:

- the *path stack*: ``PathEntry(node, accumulator)`` for every level from the
  root down to the node being visited
- the *cursor stack*: for every level, an iterator over the children of that
  level's node that have not been entered yet

Each ``advance()`` either enters the next unvisited child of the deepest level
that still has one (after popping every exhausted level on the way up), or
reports that the tree is exhausted. Traversal depth is limited by memory only,
never by the interpreter's recursion limit.

The walker does not detect cycles. Feeding it a graph in which a node is its
own descendant will not terminate.
"""

import itertools
import logging
from enum import Enum
from typing import Any, Callable, Iterable, Iterator, List, Optional

from .accumulable import is_accumulable, neutral_element
from .path import PathEntry, PathView

logger = logging.getLogger(__name__)

DEFAULT_DEPTH_HINT = 32

_EXHAUSTED = object()
_MISSING = object()

GetChildren = Callable[[Any], Iterable[Any]]
Accumulate = Callable[[Any, Any, Optional[Any]], Any]


class WalkState(Enum):
    """Where a PathWalker is in its lifecycle."""
    EMPTY = "empty"                  # Nothing visited yet
    DESCENDING = "descending"        # A node was just pushed and returned
    BACKTRACKING = "backtracking"    # Popping exhausted levels (inside advance)
    EXHAUSTED = "exhausted"          # Terminal: every node has been visited


def iter_parameters(parameters: Optional[Iterable[Any]]) -> Iterator[Any]:
    """Yield the given parameters, then ``None`` forever.

    Running out of parameters is not an error: every step after the last
    supplied value simply gets no parameter.
    """
    if parameters is None:
        return itertools.repeat(None)
    return itertools.chain(parameters, itertools.repeat(None))


def visitable_children(node):
    return node.children()


def visitable_accumulate(node, acc, parameter):
    return node.accumulate(acc, parameter)


class PathWalker:
    """Stateful, non-recursive depth-first walker over a tree.

    Example:
        >>> walker = PathWalker(
        ...     root, 2,
        ...     get_children=lambda n: n.children,
        ...     accumulate=lambda n, acc, p: acc + n.value * (1 if p is None else p),
        ... )
        >>> path = walker.advance(2)
        >>> path.accumulator
        2
    """

    def __init__(self,
                 root: Any,
                 depth_hint: int,
                 get_children: GetChildren,
                 accumulate: Accumulate,
                 accumulator_type: Any = int,
                 neutral: Any = _MISSING,
                 check_stale: bool = True):
        """Create a walker rooted at ``root``.

        Args:
            root: The root of the tree
            depth_hint: Expected maximum depth, used to pre-size the stacks.
                Deeper trees are fine: storage grows as needed.
            get_children: ``get_children(node)`` returns the node's children
                in visiting order. Called once per node, lazily consumed.
            accumulate: ``accumulate(node, inherited, parameter)`` returns the
                node's accumulator. ``parameter`` is None when absent.
            accumulator_type: Accumulable subclass or registered type whose
                neutral element seeds the root
            neutral: Explicit neutral element (None included); overrides
                ``accumulator_type``
            check_stale: Make outdated PathViews raise StalePathError

        Raises:
            ValueError: If depth_hint is negative
            TypeError: If no neutral element can be derived
        """
        if depth_hint < 0:
            raise ValueError(f"depth_hint cannot be negative, got {depth_hint}")
        if neutral is _MISSING and not is_accumulable(accumulator_type):
            raise TypeError(
                f"{accumulator_type!r} is not accumulable; pass neutral= or "
                f"register the type with register_accumulable()"
            )

        self._root = root
        self._get_children = get_children
        self._accumulate = accumulate
        self._accumulator_type = accumulator_type
        self._neutral = neutral
        self._check_stale = check_stale

        capacity = max(depth_hint, 1)
        self._entries: List[Optional[PathEntry]] = [None] * capacity
        self._cursors: List[Optional[Iterator[Any]]] = [None] * capacity
        self._depth = 0
        self._generation = 0
        self._steps = 0
        self._grown = False
        self._pending: Any = _MISSING
        self._state = WalkState.EMPTY

    @classmethod
    def for_visitable(cls, root: Any, depth_hint: int = DEFAULT_DEPTH_HINT, **options) -> 'PathWalker':
        """Create a walker for a node implementing the Visitable capability.

        The accumulator type is taken from the root's ``accumulator_type``
        attribute unless given explicitly.
        """
        options.setdefault('accumulator_type', getattr(root, 'accumulator_type', int))
        return cls(root, depth_hint, visitable_children, visitable_accumulate, **options)

    # Read-only state

    @property
    def root(self) -> Any:
        return self._root

    @property
    def depth(self) -> int:
        """Length of the current path (0 before the first and after the last step)."""
        return self._depth

    @property
    def state(self) -> WalkState:
        return self._state

    @property
    def capacity(self) -> int:
        """Number of pre-allocated stack slots; grows past the depth hint."""
        return len(self._entries)

    @property
    def steps(self) -> int:
        """Number of paths returned so far."""
        return self._steps

    @property
    def is_exhausted(self) -> bool:
        return self._state is WalkState.EXHAUSTED

    # Walking

    def advance(self, parameter: Any = None) -> Optional[PathView]:
        """Visit the next node in depth-first pre-order.

        Args:
            parameter: Optional value handed to ``accumulate`` for the node
                entered by this step

        Returns:
            A view of the full path from the root to the newly visited node,
            valid until the next call; None once the tree is exhausted (and
            on every call after that).

        If ``accumulate`` or ``get_children`` raises, nothing is pushed and
        the next call retries the same node.
        """
        if self._state is WalkState.EXHAUSTED:
            return None

        self._generation += 1

        if self._state is WalkState.EMPTY:
            root = self._root
            seed = self._neutral if self._neutral is not _MISSING else neutral_element(self._accumulator_type)
            acc = self._accumulate(root, seed, parameter)
            self._push(root, acc, iter(self._get_children(root)))
            logger.debug("Walk started at %r", root)
            return self._emit()

        while self._depth:
            top = self._depth - 1
            child = self._pending
            if child is _MISSING:
                child = next(self._cursors[top], _EXHAUSTED)
                if child is _EXHAUSTED:
                    self._state = WalkState.BACKTRACKING
                    self._pop()
                    continue
                # Held until entered, so a failing callback retries this child
                self._pending = child

            acc = self._accumulate(child, self._entries[top].accumulator, parameter)
            cursor = iter(self._get_children(child))
            self._pending = _MISSING
            self._push(child, acc, cursor)
            return self._emit()

        self._state = WalkState.EXHAUSTED
        logger.debug("Walk from %r exhausted after %d paths", self._root, self._steps)
        return None

    def paths(self, parameters: Optional[Iterable[Any]] = None) -> Iterator[PathView]:
        """Advance until exhaustion, pulling one parameter per step.

        Args:
            parameters: Per-step parameters; once they run out, steps get None

        Yields:
            PathView for every visited node (each valid until the next yield)
        """
        stream = iter_parameters(parameters)
        while True:
            path = self.advance(next(stream))
            if path is None:
                return
            yield path

    def reset(self) -> None:
        """Forget all progress and start over from the same root."""
        for level in range(self._depth):
            self._entries[level] = None
            self._cursors[level] = None
        self._depth = 0
        self._steps = 0
        self._pending = _MISSING
        self._generation += 1
        self._state = WalkState.EMPTY

    # Stack maintenance; both stacks always move together

    def _push(self, node: Any, acc: Any, cursor: Iterator[Any]) -> None:
        depth = self._depth
        entry = PathEntry(node, acc)
        if depth == len(self._entries):
            if not self._grown:
                logger.debug("Path deeper than depth hint (%d), growing stacks", depth)
                self._grown = True
            self._entries.append(entry)
            self._cursors.append(cursor)
        else:
            self._entries[depth] = entry
            self._cursors[depth] = cursor
        self._depth = depth + 1

    def _pop(self) -> None:
        top = self._depth - 1
        self._entries[top] = None
        self._cursors[top] = None
        self._depth = top

    def _emit(self) -> PathView:
        self._state = WalkState.DESCENDING
        self._steps += 1
        return PathView(self, self._generation, self._depth)

    def __repr__(self) -> str:
        return (f"{self.__class__.__name__}(root={self._root!r}, "
                f"state={self._state.value}, depth={self._depth})")


__all__ = ['PathWalker', 'WalkState', 'DEFAULT_DEPTH_HINT', 'iter_parameters']
