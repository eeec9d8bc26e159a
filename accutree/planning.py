"""Execution planning for AccuTree.

The WalkPlan validates that a WalkConfig is consistent and that the root can
actually be walked, then coordinates the walker, the visitor and the
configured error handling and reporting.
"""

import logging
from typing import Any, Dict, Iterable, Iterator, List, Optional, Tuple

from .config import WalkConfig
from .core.accumulable import is_accumulable
from .core.driver import OnVisit, drive, notify_node
from .core.path import FrozenPath, PathView
from .core.walker import (
    Accumulate,
    GetChildren,
    _EXHAUSTED,
    _MISSING,
    PathWalker,
    iter_parameters,
    visitable_accumulate,
    visitable_children,
)
from .errors import CapabilityMismatchError

logger = logging.getLogger(__name__)


class WalkPlan:
    """Validated execution plan for a depth-first accumulating walk.

    The WalkPlan is the bridge between user intent (WalkConfig) and
    execution. It checks compatibility before the first node is touched and
    assembles a fresh PathWalker for every execution.

    Child enumeration and accumulation default to the root's own
    ``children()`` and ``accumulate()`` methods; either can be replaced by a
    plain callable for ad-hoc trees.
    """

    def __init__(self,
                 config: WalkConfig,
                 root: Any,
                 get_children: Optional[GetChildren] = None,
                 accumulate: Optional[Accumulate] = None,
                 accumulator_type: Any = None,
                 neutral: Any = _MISSING):
        """Create and validate an execution plan.

        Args:
            config: Walk configuration
            root: Root node of the tree
            get_children: ``get_children(node)``; defaults to ``node.children()``
            accumulate: ``accumulate(node, acc, parameter)``; defaults to
                ``node.accumulate(acc, parameter)``
            accumulator_type: Accumulator type; defaults to the root's
                ``accumulator_type`` attribute, then ``int``
            neutral: Explicit neutral element (None included); overrides
                accumulator_type

        Raises:
            CapabilityMismatchError: If config or root can't support the walk
        """
        self.config = config
        self.root = root
        self.get_children = get_children
        self.accumulate = accumulate
        self.accumulator_type = (
            accumulator_type if accumulator_type is not None
            else getattr(root, 'accumulator_type', int)
        )
        self.neutral = neutral

        # Validate configuration
        config_errors = config.validate()
        if config_errors:
            raise CapabilityMismatchError(
                f"Invalid configuration: {'; '.join(config_errors)}"
            )

        # Validate root capabilities
        capability_issues = self._validate_capabilities()
        if capability_issues:
            raise CapabilityMismatchError(
                f"Root limitations: {'; '.join(capability_issues)}"
            )

        # Track execution state
        self.nodes_processed = 0
        self.limit_reached = False
        self.errors_encountered: List[Tuple[Any, Exception]] = []

    def _validate_capabilities(self) -> List[str]:
        """Validate the root can be walked with the supplied functions.

        Returns:
            List of capability issues (empty if all satisfied)
        """
        issues = []

        if self.get_children is None and not callable(getattr(self.root, 'children', None)):
            issues.append("root has no children() method and no get_children was supplied")

        if self.accumulate is None and not callable(getattr(self.root, 'accumulate', None)):
            issues.append("root has no accumulate() method and no accumulate was supplied")

        if self.neutral is _MISSING and not is_accumulable(self.accumulator_type):
            issues.append(
                f"accumulator type {self.accumulator_type!r} has no neutral element"
            )

        return issues

    def create_walker(self) -> PathWalker:
        """Build a fresh walker according to this plan."""
        get_children = self.get_children or visitable_children
        accumulate = self.accumulate or visitable_accumulate
        return PathWalker(
            self.root,
            self.config.depth_hint,
            get_children,
            accumulate,
            accumulator_type=self.accumulator_type,
            neutral=self.neutral,
            check_stale=self.config.check_stale_paths,
        )

    def has_children(self, node: Any) -> bool:
        """Check whether a node has at least one child, without walking it."""
        get_children = self.get_children or visitable_children
        return next(iter(get_children(node)), _EXHAUSTED) is not _EXHAUSTED

    def _handle_error(self, node: Any, error: Exception) -> None:
        """Record a skipped visit error.

        Args:
            node: Node whose visit failed
            error: The exception that was raised
        """
        self.errors_encountered.append((node, error))
        logger.warning("Skipping failed visit of %r: %s", node, error)

        # Call user's error handler if provided
        if self.config.on_error:
            self.config.on_error(node, error)

    def _report_progress(self) -> None:
        """Report progress if callback configured."""
        if self.config.should_report(self.nodes_processed):
            self.config.progress_callback(self.nodes_processed)

    def execute(self,
                parameters: Optional[Iterable[Any]] = None,
                payload: Any = None,
                on_visit: Optional[OnVisit] = None) -> int:
        """Execute the plan, visiting every node.

        Args:
            parameters: Per-step accumulation parameters
            payload: Caller-owned state handed to every visit
            on_visit: ``on_visit(path, payload)``; defaults to the visited
                node's own ``on_visit`` method

        Returns:
            Number of nodes visited
        """
        # Reset execution state
        self.nodes_processed = 0
        self.limit_reached = False
        self.errors_encountered = []

        callback = on_visit or notify_node
        snapshot = self.config.snapshot_paths
        skip_errors = self.config.skip_errors

        def visit(path: PathView, state: Any) -> None:
            view = path.snapshot() if snapshot else path
            try:
                callback(view, state)
            except Exception as error:
                if not skip_errors:
                    raise
                self._handle_error(path.node, error)
            self.nodes_processed += 1
            self._report_progress()

        walker = self.create_walker()
        visited = drive(walker, parameters, payload,
                        on_visit=visit, limit=self.config.max_nodes)
        self.limit_reached = visited == self.config.max_nodes and not walker.is_exhausted

        logger.debug("Walk plan executed: %d nodes, %d errors",
                     self.nodes_processed, len(self.errors_encountered))
        return self.nodes_processed

    def iter_paths(self, parameters: Optional[Iterable[Any]] = None) -> Iterator[FrozenPath]:
        """Walk lazily, yielding an immutable snapshot of every path.

        Honors ``max_nodes``: the limit is checked before each step, so no
        node beyond it is entered. Afterwards ``limit_reached`` tells whether
        the walk was cut short. Stopping iteration early is safe.

        Args:
            parameters: Per-step accumulation parameters

        Yields:
            FrozenPath from the root to each visited node, in pre-order
        """
        self.nodes_processed = 0
        self.limit_reached = False
        self.errors_encountered = []

        walker = self.create_walker()
        stream = iter_parameters(parameters)
        while True:
            if not self.config.check_node_limit(self.nodes_processed):
                self.limit_reached = True
                break
            path = walker.advance(next(stream))
            if path is None:
                break
            self.nodes_processed += 1
            self._report_progress()
            yield path.snapshot()

    def get_summary(self) -> Dict[str, Any]:
        """Get summary of execution plan.

        Useful for debugging and logging.

        Returns:
            Dictionary with plan details
        """
        return {
            'root': type(self.root).__name__,
            'depth_hint': self.config.depth_hint,
            'max_nodes': self.config.max_nodes,
            'accumulator_type': getattr(self.accumulator_type, '__name__', repr(self.accumulator_type)),
            'custom_children': self.get_children is not None,
            'custom_accumulate': self.accumulate is not None,
            'check_stale_paths': self.config.check_stale_paths,
            'snapshot_paths': self.config.snapshot_paths,
            'skip_errors': self.config.skip_errors,
        }


__all__ = ['WalkPlan', 'CapabilityMismatchError']
