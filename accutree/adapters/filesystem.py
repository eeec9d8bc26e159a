"""Filesystem adapter for AccuTree.

Lets a directory tree be walked like any other Visitable. The accumulator is
the tuple of path segments from the traversal root down to each entry, so
every visited path carries its own relative location.
"""

import logging
from pathlib import Path
from typing import Any, Iterator, Optional, Tuple, Union

from ..core.node import Visitable

logger = logging.getLogger(__name__)


class FileSystemNode(Visitable):
    """A file or directory as a node of a walkable tree.

    Children are the directory's entries sorted by name, so the visiting
    order is stable across runs and platforms. Files, empty directories and
    directories that can't be listed are leaves.
    """

    accumulator_type = tuple

    def __init__(self,
                 path: Union[str, Path],
                 include_hidden: bool = True,
                 follow_symlinks: bool = False):
        """Initialize a filesystem node.

        Args:
            path: Path to the file or directory
            include_hidden: Whether to include entries starting with '.'
            follow_symlinks: Whether to descend into symlinked directories
        """
        self.path = Path(path) if isinstance(path, str) else path
        self.include_hidden = include_hidden
        self.follow_symlinks = follow_symlinks

    @property
    def name(self) -> str:
        return self.path.name or str(self.path)

    def identifier(self) -> str:
        """Return absolute path as unique identifier."""
        return str(self.path.absolute())

    def is_dir(self) -> bool:
        if self.path.is_symlink() and not self.follow_symlinks:
            return False
        return self.path.is_dir()

    def children(self) -> Iterator['FileSystemNode']:
        """Yield child entries sorted by name."""
        if not self.is_dir():
            return

        try:
            entries = sorted(self.path.iterdir())
        except OSError as error:
            # Unreadable directory, no children to yield
            logger.debug("Cannot list %s: %s", self.path, error)
            return

        for child_path in entries:
            # Skip hidden files if configured
            if not self.include_hidden and child_path.name.startswith('.'):
                continue
            yield FileSystemNode(child_path, self.include_hidden, self.follow_symlinks)

    def accumulate(self, acc: Tuple[str, ...], parameter: Optional[Any] = None) -> Tuple[str, ...]:
        """Append this entry's name to the inherited segments.

        Parameters are ignored: the location of an entry doesn't depend on
        anything but its ancestors.
        """
        return acc + (self.name,)

    def on_visit(self, path, payload: Any) -> None:
        """No-op; override or pass an on_visit callback to react to visits."""
        pass

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, FileSystemNode):
            return NotImplemented
        return self.identifier() == other.identifier()

    def __hash__(self) -> int:
        return hash(self.identifier())

    def __repr__(self) -> str:
        return f"FileSystemNode(path={self.path!r})"


__all__ = ['FileSystemNode']
