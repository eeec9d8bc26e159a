"""Test fixtures for AccuTree consumers.

These helpers build trees of any shape without recursion and provide an
independent reference implementation of the accumulator fold, so test suites
(ours and those of projects built on AccuTree) can check walks against it.
"""

import random
from typing import Any, Callable, Iterable, List, NamedTuple, Optional, Sequence, Tuple

from ..adapters.memory import ValueNode
from ..core.accumulable import neutral_element
from ..core.walker import iter_parameters


class VisitRecord(NamedTuple):
    """What a RecordingNode saw when it was visited."""
    node: Any
    accumulator: Any
    depth: int
    ancestors: Tuple[Any, ...]


class VisitLog:
    """Payload that records every visit it is handed.

    Example:
        log = VisitLog()
        tree.visit(parameters=[2, 3, 4], payload=log)
        assert log.accumulators == [2, 8, 14]
    """

    def __init__(self):
        self.records: List[VisitRecord] = []

    def record(self, path) -> None:
        nodes = tuple(entry.node for entry in path)
        self.records.append(VisitRecord(
            node=nodes[-1],
            accumulator=path[-1].accumulator,
            depth=len(nodes),
            ancestors=nodes[:-1],
        ))

    def __call__(self, path, payload: Any = None) -> None:
        """Allow the log itself to be passed as an ``on_visit`` callback."""
        self.record(path)

    @property
    def nodes(self) -> List[Any]:
        return [record.node for record in self.records]

    @property
    def accumulators(self) -> List[Any]:
        return [record.accumulator for record in self.records]

    @property
    def depths(self) -> List[int]:
        return [record.depth for record in self.records]

    def __len__(self) -> int:
        return len(self.records)


class ExpectationPayload(VisitLog):
    """VisitLog that checks each accumulator against an expected sequence.

    Mismatches are collected instead of raised, so a single walk reports
    every discrepancy.
    """

    def __init__(self, expected: Iterable[Any]):
        super().__init__()
        self._expected = list(expected)
        self.mismatches: List[Tuple[int, Any, Any]] = []

    def record(self, path) -> None:
        index = len(self.records)
        super().record(path)
        actual = self.records[-1].accumulator
        if index >= len(self._expected):
            # More visits than expectations
            self.mismatches.append((index, None, actual))
        elif self._expected[index] != actual:
            self.mismatches.append((index, self._expected[index], actual))

    @property
    def unmet(self) -> List[Any]:
        """Expected accumulators that were never reached."""
        return self._expected[len(self.records):]

    @property
    def is_satisfied(self) -> bool:
        return not self.mismatches and not self.unmet


class RecordingNode(ValueNode):
    """ValueNode that logs its visits into a VisitLog payload."""

    def on_visit(self, path, payload: Any) -> None:
        payload.record(path)


TreeShape = Any  # value | (value, [TreeShape, ...])


def build_tree(shape: TreeShape, node_factory: Callable[..., Any] = RecordingNode) -> Any:
    """Build a tree from nested ``(value, [children])`` tuples.

    A bare value is a leaf. Built with an explicit stack, so arbitrarily deep
    shapes are fine.

    Example:
        >>> root = build_tree((1, [2, 3]))   # root 1 with leaves 2 and 3
    """
    value, child_shapes = _split_shape(shape)
    root = node_factory(value)
    pending = [(root, child_shapes)]

    while pending:
        parent, child_shapes = pending.pop()
        for child_shape in child_shapes:
            value, grandchildren = _split_shape(child_shape)
            child = parent.add_child(node_factory(value))
            if grandchildren:
                pending.append((child, grandchildren))

    return root


def _split_shape(shape: TreeShape) -> Tuple[Any, Sequence[TreeShape]]:
    if isinstance(shape, tuple) and len(shape) == 2 and isinstance(shape[1], (list, tuple)):
        return shape[0], shape[1]
    return shape, ()


def build_chain(depth: int, value: Any = 1, node_factory: Callable[..., Any] = RecordingNode) -> Any:
    """Build a single path of ``depth`` nodes (a degenerate, maximally deep tree)."""
    root = node_factory(value, name="0")
    tail = root
    for level in range(1, depth):
        tail = tail.add_child(node_factory(value, name=str(level)))
    return root


def build_balanced(branching: int,
                   depth: int,
                   value: Any = 1,
                   node_factory: Callable[..., Any] = RecordingNode) -> Any:
    """Build a complete tree with ``branching`` children per internal node.

    Nodes are named by their position, e.g. ``"0.1.0"``.
    """
    root = node_factory(value, name="0")
    level = [root]
    for _ in range(1, depth):
        next_level = []
        for parent in level:
            for index in range(branching):
                next_level.append(parent.add_child(
                    node_factory(value, name=f"{parent.name}.{index}")
                ))
        level = next_level
    return root


def build_random_tree(size: int,
                      seed: int = 0,
                      max_value: int = 9,
                      node_factory: Callable[..., Any] = RecordingNode) -> Any:
    """Build a tree of ``size`` nodes with a random shape and values.

    Each new node is attached to a randomly chosen existing node, which
    yields a mix of deep chains and wide fans.
    """
    rng = random.Random(seed)
    nodes = [node_factory(rng.randint(1, max_value), name="n0")]
    for index in range(1, size):
        parent = rng.choice(nodes)
        nodes.append(parent.add_child(node_factory(rng.randint(1, max_value), name=f"n{index}")))
    return nodes[0]


def reference_fold(root: Any,
                   parameters: Optional[Iterable[Any]] = None,
                   accumulator_type: Any = None) -> List[Tuple[Any, Any]]:
    """Expected ``(node, accumulator)`` pairs in depth-first pre-order.

    Independent of the PathWalker: it assigns parameters to nodes in
    pre-order and recomputes every accumulator from scratch as a left fold
    over the node's ancestor chain.

    Args:
        root: Root of a tree of Visitable nodes
        parameters: Per-step parameters, as they would be fed to a walk
        accumulator_type: Defaults to the root's ``accumulator_type``

    Returns:
        List of (node, accumulator) pairs
    """
    if accumulator_type is None:
        accumulator_type = getattr(root, 'accumulator_type', int)
    stream = iter_parameters(parameters)

    results = []
    pending = [(root, ())]
    while pending:
        node, chain = pending.pop()
        chain = chain + ((node, next(stream)),)

        acc = neutral_element(accumulator_type)
        for ancestor, parameter in chain:
            acc = ancestor.accumulate(acc, parameter)
        results.append((node, acc))

        for child in reversed(list(node.children())):
            pending.append((child, chain))

    return results


__all__ = [
    'VisitRecord',
    'VisitLog',
    'ExpectationPayload',
    'RecordingNode',
    'build_tree',
    'build_chain',
    'build_balanced',
    'build_random_tree',
    'reference_fold',
]
