"""Ready-made Visitable node types."""

from .filesystem import FileSystemNode
from .memory import ValueNode

__all__ = ['FileSystemNode', 'ValueNode']
