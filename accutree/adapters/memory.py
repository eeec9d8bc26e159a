"""In-memory tree nodes for AccuTree.

ValueNode is the simplest useful Visitable: a value plus an ordered list of
children. It covers running totals and path costs out of the box and is a
convenient base class when only ``on_visit`` needs customizing.
"""

from typing import Any, Iterable, Iterator, List, Optional

from ..core.accumulable import accumulate_values
from ..core.node import Visitable


class ValueNode(Visitable):
    """A node holding a value and a list of children.

    The node's contribution is its value scaled by the step parameter::

        accumulate(acc, parameter) = acc (+) value * parameter

    where ``(+)`` is :func:`~accutree.core.accumulable.accumulate_values`.
    Without a parameter the value is used unscaled, i.e. the multiplicative
    identity is the fallback.

    The accumulator type follows the value: an ``int`` value accumulates
    into ints, a ``float`` into floats, and so on. Parameters require the
    value to support ``*``.
    """

    def __init__(self,
                 value: Any,
                 children: Iterable['ValueNode'] = (),
                 name: Optional[str] = None):
        """Initialize a node.

        Args:
            value: This node's contribution
            children: Child nodes, in visiting order
            name: Optional label used in repr (defaults to the value)
        """
        self.value = value
        self._children: List[ValueNode] = list(children)
        self.name = name

    @property
    def accumulator_type(self) -> type:
        return type(self.value)

    def add_child(self, child: 'ValueNode') -> 'ValueNode':
        """Append a child and return it, for chained tree building."""
        self._children.append(child)
        return child

    def children(self) -> Iterator['ValueNode']:
        return iter(self._children)

    def is_leaf(self) -> bool:
        return not self._children

    def contribution(self, parameter: Optional[Any] = None) -> Any:
        """This node's own contribution for a given parameter."""
        if parameter is None:
            return self.value
        return self.value * parameter

    def accumulate(self, acc: Any, parameter: Optional[Any] = None) -> Any:
        return accumulate_values(acc, self.contribution(parameter))

    def on_visit(self, path, payload: Any) -> None:
        """No-op; override to react to visits."""
        pass

    def __repr__(self) -> str:
        label = self.name if self.name is not None else self.value
        return f"{self.__class__.__name__}({label!r})"


__all__ = ['ValueNode']
