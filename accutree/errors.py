"""Exception hierarchy for AccuTree.

The walker itself has no recoverable failures: exceptions raised by user
callbacks (``children``, ``accumulate``, ``on_visit``) propagate unchanged.
The classes here cover misuse of the library's own objects.
"""


class AccuTreeError(Exception):
    """Base class for all AccuTree errors."""
    pass


class StalePathError(AccuTreeError):
    """Raised when a PathView is read after its walker has moved on.

    A view aliases the walker's internal stack and is only valid until the
    next ``advance()`` or ``reset()``. Use ``PathView.snapshot()`` to keep a
    path around.
    """
    pass


class CapabilityMismatchError(AccuTreeError):
    """Raised when a configuration or root node can't support a walk."""
    pass
