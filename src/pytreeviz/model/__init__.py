"""Model layer for pytreeviz.

This module contains the immutable tree data model and the traversal
helpers shared by the layout and mutation layers.
"""

from pytreeviz.model.node import NodeKind, TreeNode
from pytreeviz.model.traversal import (
    SubtreeStats,
    collect_ids,
    contains_id,
    find_node,
    find_parent,
    iter_nodes,
    iter_with_depth,
    seed_expansion,
    subtree_stats,
)

__all__ = [
    "NodeKind",
    "TreeNode",
    "SubtreeStats",
    "collect_ids",
    "contains_id",
    "find_node",
    "find_parent",
    "iter_nodes",
    "iter_with_depth",
    "seed_expansion",
    "subtree_stats",
]
