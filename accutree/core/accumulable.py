"""Accumulable values for AccuTree.

An accumulator is the value folded along a root-to-node path: a running
total, a path cost, a composed transformation. The engine only needs two
things from it - a neutral element to seed the root with and a way to combine
two values. The actual fold is decided by each node's ``accumulate`` method;
this module provides the type-level guarantee that both operations exist.

Two ways to make a type accumulable:

- Subclass :class:`Accumulable` (for your own value types)
- Register a plain type with :func:`register_accumulable` (for built-ins and
  third-party types you can't subclass)
"""

import math
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Callable, Dict, Optional, Tuple


class Accumulable(ABC):
    """Abstract base class for values accumulated along a path.

    Implementations must be associative in the way the engine applies them
    (a root-to-leaf left fold). Commutativity is not required: the walker
    always combines ``parent`` with ``child`` in that order.

    ``accumulate`` must return a new value and leave both operands untouched,
    so sibling branches never observe each other's contributions.
    """

    @classmethod
    @abstractmethod
    def neutral(cls) -> 'Accumulable':
        """Return the identity element used to seed the root."""
        pass

    @abstractmethod
    def accumulate(self, other: 'Accumulable') -> 'Accumulable':
        """Combine this running value with a new contribution.

        Args:
            other: Contribution to fold into this value

        Returns:
            A new accumulated value
        """
        pass


# Registry for types that can't subclass Accumulable: type -> (neutral, combine)
_REGISTRY: Dict[type, Tuple[Callable[[], Any], Callable[[Any, Any], Any]]] = {}


def register_accumulable(value_type: type,
                         neutral: Callable[[], Any],
                         combine: Callable[[Any, Any], Any]) -> None:
    """Make a plain type usable as an accumulator.

    Args:
        value_type: The type to register
        neutral: Zero-argument factory returning the identity element
        combine: Function ``(current, other) -> new`` combining two values

    Example:
        >>> from fractions import Fraction
        >>> register_accumulable(Fraction, lambda: Fraction(0), lambda a, b: a + b)
    """
    _REGISTRY[value_type] = (neutral, combine)


def is_accumulable(value_type: Any) -> bool:
    """Check whether a type can be used as an accumulator."""
    if isinstance(value_type, type) and issubclass(value_type, Accumulable):
        return True
    return _lookup(value_type) is not None


def neutral_element(value_type: Any) -> Any:
    """Create a fresh neutral element for an accumulator type.

    Args:
        value_type: An Accumulable subclass or a registered plain type

    Returns:
        The identity value for that type

    Raises:
        TypeError: If the type is neither Accumulable nor registered
    """
    if isinstance(value_type, type) and issubclass(value_type, Accumulable):
        return value_type.neutral()

    entry = _lookup(value_type)
    if entry is None:
        raise TypeError(
            f"{value_type!r} is not accumulable. Subclass Accumulable "
            f"or call register_accumulable() first."
        )
    return entry[0]()


def accumulate_values(current: Any, other: Any) -> Any:
    """Combine two accumulator values.

    Dispatches to ``Accumulable.accumulate`` or to the registered combine
    function for ``type(current)``.

    Raises:
        TypeError: If ``current`` is not of an accumulable type
    """
    if isinstance(current, Accumulable):
        return current.accumulate(other)

    entry = _lookup(type(current))
    if entry is None:
        raise TypeError(f"Cannot accumulate values of type {type(current).__name__}")
    return entry[1](current, other)


def _lookup(value_type: Any):
    # bool is an int subclass, but a bool accumulator is almost always a bug
    if not isinstance(value_type, type) or value_type is bool:
        return None
    for klass in value_type.__mro__:
        if klass in _REGISTRY:
            return _REGISTRY[klass]
    return None


def _concat(a, b):
    return a + b


register_accumulable(int, lambda: 0, _concat)
register_accumulable(float, lambda: 0.0, _concat)
register_accumulable(complex, lambda: 0j, _concat)
register_accumulable(str, lambda: "", _concat)
register_accumulable(tuple, tuple, _concat)


@dataclass(frozen=True)
class Sum(Accumulable):
    """Additive running total, e.g. a path cost."""

    value: float = 0

    @classmethod
    def neutral(cls) -> 'Sum':
        return cls(0)

    def accumulate(self, other: 'Sum') -> 'Sum':
        return Sum(self.value + other.value)


@dataclass(frozen=True)
class Product(Accumulable):
    """Multiplicative running value, e.g. a cumulative scale factor."""

    value: float = 1

    @classmethod
    def neutral(cls) -> 'Product':
        return cls(1)

    def accumulate(self, other: 'Product') -> 'Product':
        return Product(self.value * other.value)


@dataclass(frozen=True)
class Affine2D(Accumulable):
    """A 2-D affine transformation.

    Stored as the top two rows of a 3x3 homogeneous matrix::

        | a  b  tx |
        | c  d  ty |
        | 0  0  1  |

    ``parent.accumulate(local)`` composes the two (``parent @ local``), which
    is how the world transform of a bone in a skeleton is built from its
    ancestors. Composition is not commutative: rotating then translating
    differs from translating then rotating.
    """

    a: float = 1.0
    b: float = 0.0
    c: float = 0.0
    d: float = 1.0
    tx: float = 0.0
    ty: float = 0.0

    @classmethod
    def neutral(cls) -> 'Affine2D':
        return cls()

    @classmethod
    def translation(cls, x: float, y: float) -> 'Affine2D':
        return cls(tx=x, ty=y)

    @classmethod
    def rotation(cls, angle: float) -> 'Affine2D':
        """Counter-clockwise rotation by ``angle`` radians."""
        cos, sin = math.cos(angle), math.sin(angle)
        return cls(a=cos, b=-sin, c=sin, d=cos)

    @classmethod
    def scaling(cls, sx: float, sy: Optional[float] = None) -> 'Affine2D':
        return cls(a=sx, d=sx if sy is None else sy)

    def accumulate(self, other: 'Affine2D') -> 'Affine2D':
        return Affine2D(
            a=self.a * other.a + self.b * other.c,
            b=self.a * other.b + self.b * other.d,
            c=self.c * other.a + self.d * other.c,
            d=self.c * other.b + self.d * other.d,
            tx=self.a * other.tx + self.b * other.ty + self.tx,
            ty=self.c * other.tx + self.d * other.ty + self.ty,
        )

    def apply(self, x: float, y: float) -> Tuple[float, float]:
        """Transform a point."""
        return (self.a * x + self.b * y + self.tx,
                self.c * x + self.d * y + self.ty)

    def isclose(self, other: 'Affine2D', abs_tol: float = 1e-9) -> bool:
        """Compare two transforms with a floating point tolerance."""
        return all(
            math.isclose(mine, theirs, abs_tol=abs_tol)
            for mine, theirs in zip(self._coefficients(), other._coefficients())
        )

    def _coefficients(self) -> Tuple[float, ...]:
        return (self.a, self.b, self.c, self.d, self.tx, self.ty)


__all__ = [
    'Accumulable',
    'register_accumulable',
    'is_accumulable',
    'neutral_element',
    'accumulate_values',
    'Sum',
    'Product',
    'Affine2D',
]
