#!/usr/bin/env python3
"""Print a directory tree with AccuTree.

The filesystem adapter accumulates path segments, so every visited path
already knows its location relative to the starting directory. Leaf
detection comes from the walk itself.

Usage:
    python examples/directory_tree.py [directory] [max_entries]
"""

import sys
from pathlib import Path

# Add parent directory to path for development
sys.path.insert(0, str(Path(__file__).parent.parent))

from accutree import FileSystemNode, get_leaf_paths, get_tree_stats, walk_paths


def print_tree(root: Path, max_entries: int = 200) -> None:
    """Show an indented listing of at most ``max_entries`` entries."""
    print("\n=== Tree ===")
    node = FileSystemNode(root, include_hidden=False)
    for path in walk_paths(node, max_nodes=max_entries):
        indent = "  " * (path.depth - 1)
        marker = "[D]" if path.node.is_dir() else "[F]"
        print(f"{indent}{marker} {path.node.name}")


def print_deepest(root: Path, max_entries: int = 200) -> None:
    """Show the leaf that is furthest from the starting directory."""
    print("\n=== Deepest entry ===")
    node = FileSystemNode(root, include_hidden=False)
    deepest = max(get_leaf_paths(node, max_nodes=max_entries), key=len, default=None)
    if deepest is not None:
        print("/".join(deepest.accumulator))


def print_stats(root: Path, max_entries: int = 200) -> None:
    print("\n=== Statistics ===")
    stats = get_tree_stats(FileSystemNode(root, include_hidden=False), max_nodes=max_entries)
    for key in ('total_nodes', 'leaf_nodes', 'internal_nodes', 'max_depth'):
        print(f"  {key}: {stats[key]}")
    print(f"  average_branching: {stats['average_branching']:.2f}")


def main():
    """Run all demonstrations."""
    root = Path(sys.argv[1]) if len(sys.argv) > 1 else Path.cwd()
    max_entries = int(sys.argv[2]) if len(sys.argv) > 2 else 200

    if not root.exists():
        print(f"Error: {root} does not exist")
        sys.exit(1)

    print("AccuTree Directory Tree Demo")
    print(f"{'=' * 50}")

    print_tree(root, max_entries)
    print_deepest(root, max_entries)
    print_stats(root, max_entries)


if __name__ == "__main__":
    main()
