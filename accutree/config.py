"""Configuration system for AccuTree.

This module defines how users tune a walk: storage pre-sizing, early
stopping, path aliasing safety, error handling and progress reporting.
The WalkPlan validates a WalkConfig before any node is touched.
"""

from dataclasses import dataclass
from typing import Any, Callable, List, Optional

from .core.walker import DEFAULT_DEPTH_HINT


@dataclass
class WalkConfig:
    """Complete configuration for a walk.

    This is the primary way users specify how a traversal should run.
    None of the options changes *which* nodes are visited or in what order;
    they only control resources, safety and reporting.
    """

    # Storage
    depth_hint: int = DEFAULT_DEPTH_HINT      # Pre-size stacks for this depth
    max_nodes: Optional[int] = None           # Stop after N visits (None = all)

    # Path aliasing
    check_stale_paths: bool = True            # Outdated PathViews raise
    snapshot_paths: bool = False              # Visitors get immutable copies

    # Error handling (visit callbacks only; walker errors always propagate)
    skip_errors: bool = False                 # Continue after on_visit errors
    on_error: Optional[Callable[[Any, Exception], None]] = None

    # Progress reporting
    progress_callback: Optional[Callable[[int], None]] = None
    progress_interval: int = 100              # Report every N nodes

    # Convenience constructors for common configurations

    @classmethod
    def for_depth(cls, depth_hint: int) -> 'WalkConfig':
        """Create config pre-sized for trees of the given depth.

        Args:
            depth_hint: Expected maximum depth

        Returns:
            WalkConfig with the given hint and defaults otherwise
        """
        return cls(depth_hint=depth_hint)

    @classmethod
    def safe(cls, depth_hint: int = DEFAULT_DEPTH_HINT) -> 'WalkConfig':
        """Create config where visitors can keep the paths they receive.

        Every visitor gets an immutable snapshot, stale views raise, and any
        error stops the walk.
        """
        return cls(
            depth_hint=depth_hint,
            check_stale_paths=True,
            snapshot_paths=True,
            skip_errors=False,
        )

    @classmethod
    def fast(cls, depth_hint: int = DEFAULT_DEPTH_HINT) -> 'WalkConfig':
        """Create config with the lowest per-step overhead.

        Visitors receive live views without staleness checks; they must not
        hold on to a path after returning.
        """
        return cls(
            depth_hint=depth_hint,
            check_stale_paths=False,
            snapshot_paths=False,
        )

    def should_report(self, nodes_processed: int) -> bool:
        """Check if progress should be reported after this many visits."""
        return (self.progress_callback is not None
                and nodes_processed % self.progress_interval == 0)

    def check_node_limit(self, node_count: int) -> bool:
        """Check whether another node may be visited.

        Args:
            node_count: Number of nodes visited so far

        Returns:
            True if within limits or no limit set
        """
        if self.max_nodes is None:
            return True
        return node_count < self.max_nodes

    def validate(self) -> List[str]:
        """Validate configuration for consistency.

        Returns:
            List of validation errors (empty if valid)
        """
        errors = []

        if self.depth_hint <= 0:
            errors.append("depth_hint must be positive")

        if self.max_nodes is not None and self.max_nodes <= 0:
            errors.append("max_nodes must be positive")

        if self.progress_interval <= 0:
            errors.append("progress_interval must be positive")

        if self.on_error is not None and not self.skip_errors:
            errors.append("on_error requires skip_errors=True")

        return errors


__all__ = ['WalkConfig', 'DEFAULT_DEPTH_HINT']
