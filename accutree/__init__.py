"""AccuTree - depth-first tree walking with path accumulators.

AccuTree walks any tree depth-first without recursion and folds a value along
every root-to-node path: running totals, path costs, composed transforms.

Quick start:
━━━━━━━━━━━━━━━━━━━━━━━━━━
Object-oriented:
    class Joint(Visitable): ...
    root.visit(parameters=angles, payload=pose)

Step by step:
    walker = PathWalker(root, depth_hint, get_children, accumulate)
    while (path := walker.advance(parameter)) is not None: ...

Functional:
    from accutree import walk_paths, collect_accumulators, get_tree_stats
━━━━━━━━━━━━━━━━━━━━━━━━━━
"""

__version__ = "0.1.0"

# Core components
from .core.accumulable import (
    Accumulable,
    Affine2D,
    Product,
    Sum,
    accumulate_values,
    is_accumulable,
    neutral_element,
    register_accumulable,
)
from .core.driver import drive
from .core.node import Visitable, supports_walking
from .core.path import FrozenPath, PathEntry, PathView
from .core.walker import DEFAULT_DEPTH_HINT, PathWalker, WalkState

# Adapters
from .adapters import FileSystemNode, ValueNode

# Configuration, planning and errors
from .config import WalkConfig
from .planning import WalkPlan
from .errors import AccuTreeError, CapabilityMismatchError, StalePathError

# High-level API
from .api import (
    collect_accumulators,
    count_nodes,
    find_paths,
    get_leaf_paths,
    get_tree_stats,
    visit,
    walk_paths,
)

__all__ = [
    '__version__',
    # Core
    'Accumulable',
    'Affine2D',
    'Product',
    'Sum',
    'accumulate_values',
    'is_accumulable',
    'neutral_element',
    'register_accumulable',
    'drive',
    'Visitable',
    'supports_walking',
    'FrozenPath',
    'PathEntry',
    'PathView',
    'DEFAULT_DEPTH_HINT',
    'PathWalker',
    'WalkState',
    # Adapters
    'FileSystemNode',
    'ValueNode',
    # Config, planning, errors
    'WalkConfig',
    'WalkPlan',
    'AccuTreeError',
    'CapabilityMismatchError',
    'StalePathError',
    # API
    'collect_accumulators',
    'count_nodes',
    'find_paths',
    'get_leaf_paths',
    'get_tree_stats',
    'visit',
    'walk_paths',
]
