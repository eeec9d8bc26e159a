"""Default traversal driver.

Composes the two halves of a walk: the PathWalker computes accumulators, the
visit callback consumes them. The driver computes nothing of its own.
"""

import logging
from typing import Any, Callable, Iterable, Optional

from .path import PathView
from .walker import PathWalker, iter_parameters

logger = logging.getLogger(__name__)

OnVisit = Callable[[PathView, Any], None]


def notify_node(path: PathView, payload: Any) -> None:
    """Call ``on_visit`` on the node that was just visited."""
    path.node.on_visit(path, payload)


def drive(walker: PathWalker,
          parameters: Optional[Iterable[Any]] = None,
          payload: Any = None,
          on_visit: Optional[OnVisit] = None,
          limit: Optional[int] = None) -> int:
    """Advance a walker to exhaustion, notifying a visitor at every step.

    Exactly one parameter is pulled per ``advance()`` call, the final call
    that discovers exhaustion included. Once the parameters run out, the
    remaining steps get ``None``.

    Stopping early via ``limit`` leaves the walker consistent: calling
    ``drive`` again on the same walker continues where it stopped. The
    parameters are not remembered between calls: pass the same iterator
    again, or only the parameters that remain, to keep them in step.

    Args:
        walker: The walker to drive
        parameters: Per-step accumulation parameters
        payload: Caller-owned state handed to every visit callback
        on_visit: ``on_visit(path, payload)``; defaults to calling the visited
            node's own ``on_visit`` method
        limit: Stop after this many visits (None = run to exhaustion)

    Returns:
        Number of nodes visited by this call
    """
    callback = on_visit or notify_node
    stream = iter_parameters(parameters)
    visited = 0

    while limit is None or visited < limit:
        path = walker.advance(next(stream))
        if path is None:
            break
        callback(path, payload)
        visited += 1

    logger.debug("Drove %d visits (exhausted=%s)", visited, walker.is_exhausted)
    return visited


__all__ = ['drive', 'notify_node']
