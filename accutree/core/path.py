"""Path views handed out by the PathWalker.

A path is the ordered sequence of (node, accumulator) pairs from the root to
the node currently being visited. The walker owns the underlying stack;
``advance()`` returns a read-only :class:`PathView` over it instead of a copy,
so each step costs O(1) regardless of depth.

Invalidation contract: a view is only valid until the walker's next
``advance()`` or ``reset()``. With stale checking on (the default) any use of
an outdated view raises :class:`~accutree.errors.StalePathError`. With it off,
an outdated view silently reads the walker's *current* stack. Call
:meth:`PathView.snapshot` to keep a path beyond the current step.
"""

from collections.abc import Sequence
from typing import Any, Iterator, List, NamedTuple, TYPE_CHECKING

from ..errors import StalePathError

if TYPE_CHECKING:
    from .walker import PathWalker


class PathEntry(NamedTuple):
    """One level of a path: a node and the accumulator folded up to it."""
    node: Any
    accumulator: Any


class FrozenPath(tuple):
    """Immutable copy of a path, safe to keep after the walker moves on.

    A plain tuple of PathEntry items with the same helpers as PathView.
    """

    __slots__ = ()

    @property
    def depth(self) -> int:
        return len(self)

    @property
    def node(self) -> Any:
        return self[-1].node

    @property
    def accumulator(self) -> Any:
        return self[-1].accumulator

    @property
    def parent(self) -> Any:
        return self[-2].node if len(self) > 1 else None

    def nodes(self) -> List[Any]:
        return [entry.node for entry in self]

    def accumulators(self) -> List[Any]:
        return [entry.accumulator for entry in self]

    def snapshot(self) -> 'FrozenPath':
        return self


class PathView(Sequence):
    """Read-only window onto a walker's path stack.

    Supports ``len()``, indexing (negative indices included), slicing and
    iteration. Index 0 is the root, index -1 the node just visited.
    """

    __slots__ = ('_walker', '_generation', '_depth')

    def __init__(self, walker: 'PathWalker', generation: int, depth: int):
        self._walker = walker
        self._generation = generation
        self._depth = depth

    def _live_depth(self) -> int:
        """Depth this view may read; raises if the view is stale."""
        walker = self._walker
        if walker._generation != self._generation:
            if walker._check_stale:
                raise StalePathError(
                    "PathView used after the walker advanced; "
                    "call snapshot() to keep a path"
                )
            return walker._depth
        return self._depth

    def _entries(self) -> List[PathEntry]:
        return self._walker._entries[:self._live_depth()]

    def __len__(self) -> int:
        return self._live_depth()

    def __getitem__(self, index):
        if isinstance(index, slice):
            return tuple(self._entries()[index])
        depth = self._live_depth()
        if index < 0:
            index += depth
        if not 0 <= index < depth:
            raise IndexError("path index out of range")
        return self._walker._entries[index]

    def __iter__(self) -> Iterator[PathEntry]:
        return iter(self._entries())

    @property
    def is_valid(self) -> bool:
        """True until the walker moves on."""
        return self._walker._generation == self._generation

    @property
    def depth(self) -> int:
        """Depth of the visited node (root = 1)."""
        return self._live_depth()

    @property
    def node(self) -> Any:
        """The node just visited (last element of the path)."""
        return self[-1].node

    @property
    def accumulator(self) -> Any:
        """Accumulator of the node just visited."""
        return self[-1].accumulator

    @property
    def parent(self) -> Any:
        """Parent of the visited node, or None at the root."""
        return self[-2].node if len(self) > 1 else None

    def nodes(self) -> List[Any]:
        """Nodes from root to current."""
        return [entry.node for entry in self._entries()]

    def accumulators(self) -> List[Any]:
        """Accumulators from root to current."""
        return [entry.accumulator for entry in self._entries()]

    def snapshot(self) -> FrozenPath:
        """Return an immutable copy that outlives the current step."""
        return FrozenPath(self._entries())

    def __eq__(self, other: object) -> bool:
        if isinstance(other, PathView):
            return self.snapshot() == other.snapshot()
        if isinstance(other, (tuple, list)):
            return list(self._entries()) == list(other)
        return NotImplemented

    __hash__ = None

    def __repr__(self) -> str:
        if not self.is_valid:
            return f"<PathView stale (depth={self._depth})>"
        return f"PathView(depth={self._depth}, node={self.node!r}, accumulator={self.accumulator!r})"


__all__ = ['PathEntry', 'FrozenPath', 'PathView']
