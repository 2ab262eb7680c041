"""Tree traversal helpers shared by the layout and mutation layers.

All walks use an explicit work stack, so arbitrarily deep trees do not
run into the interpreter recursion limit.
"""

from collections.abc import Iterator
from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from pytreeviz.model.node import TreeNode


@dataclass(frozen=True)
class SubtreeStats:
    """Counts describing a subtree.

    Attributes:
        files: Number of file nodes
        folders: Number of folder nodes (including the subtree root)
        depth: Deepest level below the subtree root (root = 0)
    """

    files: int = 0
    folders: int = 0
    depth: int = 0


def iter_with_depth(root: "TreeNode") -> Iterator[tuple["TreeNode", int]]:
    """Iterate over a tree in pre-order, yielding (node, depth) pairs."""
    stack = [(root, 0)]
    while stack:
        node, depth = stack.pop()
        yield node, depth
        if node.children:
            # Reversed so the leftmost child is visited first
            stack.extend((child, depth + 1) for child in reversed(node.children))


def iter_nodes(root: "TreeNode") -> Iterator["TreeNode"]:
    """Iterate over every node of a tree in pre-order."""
    for node, _ in iter_with_depth(root):
        yield node


def find_node(root: "TreeNode", node_id: str) -> "TreeNode | None":
    """Find a node by id.

    Args:
        root: Root of the tree to search
        node_id: Identifier to look for

    Returns:
        The matching node, or None if the id is not in the tree
    """
    for node in iter_nodes(root):
        if node.id == node_id:
            return node
    return None


def find_parent(root: "TreeNode", node_id: str) -> "TreeNode | None":
    """Find the folder that directly owns the node with the given id.

    Returns None for the root itself and for unknown ids.
    """
    for node in iter_nodes(root):
        if node.children and any(child.id == node_id for child in node.children):
            return node
    return None


def contains_id(root: "TreeNode", node_id: str) -> bool:
    """Check whether node_id appears anywhere in the subtree (root included)."""
    return find_node(root, node_id) is not None


def collect_ids(root: "TreeNode") -> list[str]:
    """Collect the ids of a tree in pre-order, duplicates included."""
    return [node.id for node in iter_nodes(root)]


def subtree_stats(root: "TreeNode") -> SubtreeStats:
    """Count files and folders in a subtree and measure its depth."""
    files = folders = max_depth = 0
    for node, depth in iter_with_depth(root):
        if node.is_file:
            files += 1
        else:
            folders += 1
        max_depth = max(max_depth, depth)
    return SubtreeStats(files=files, folders=folders, depth=max_depth)


def seed_expansion(root: "TreeNode") -> set[str]:
    """Build the initial expansion set from the tree's expanded hints.

    Every node whose hint is not explicitly False is considered open.
    """
    return {node.id for node in iter_nodes(root) if node.expanded_hint is not False}
