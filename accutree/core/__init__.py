"""Core components of AccuTree: accumulators, nodes, paths and the walker."""

from .accumulable import (
    Accumulable,
    Affine2D,
    Product,
    Sum,
    accumulate_values,
    is_accumulable,
    neutral_element,
    register_accumulable,
)
from .driver import drive, notify_node
from .node import Visitable, supports_walking
from .path import FrozenPath, PathEntry, PathView
from .walker import DEFAULT_DEPTH_HINT, PathWalker, WalkState, iter_parameters

__all__ = [
    'Accumulable',
    'Affine2D',
    'Product',
    'Sum',
    'accumulate_values',
    'is_accumulable',
    'neutral_element',
    'register_accumulable',
    'drive',
    'notify_node',
    'Visitable',
    'supports_walking',
    'FrozenPath',
    'PathEntry',
    'PathView',
    'DEFAULT_DEPTH_HINT',
    'PathWalker',
    'WalkState',
    'iter_parameters',
]
