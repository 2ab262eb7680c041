"""Structural edits on immutable trees.

Every operation takes a tree snapshot and returns a new snapshot. When an
edit does not apply (unknown id, trivial rename, refused delete, invalid
move) the input snapshot is returned unchanged, so callers can detect a
no-op with an identity check.
"""

import logging
from collections.abc import Iterable

from pytreeviz.model.node import TreeNode
from pytreeviz.model.traversal import contains_id, find_node
from pytreeviz.mutation.rewrite import rewrite

logger = logging.getLogger(__name__)


def rename(tree: TreeNode, node_id: str, new_name: str) -> TreeNode:
    """Rename a node.

    Args:
        tree: Current tree snapshot
        node_id: Id of the node to rename
        new_name: New display name (surrounding whitespace is stripped)

    Returns:
        New snapshot, or the input tree when the name is blank, unchanged
        or the id is unknown
    """
    name = new_name.strip()
    target = find_node(tree, node_id)
    if not name or target is None or target.name == name:
        return tree

    return rewrite(tree, lambda node: node.with_name(name) if node.id == node_id else node)


def validate_move(tree: TreeNode, dragged_id: str, target_id: str) -> bool:
    """Check whether a node may be reparented onto a target folder.

    The move is rejected when the ids are equal, either node is missing,
    the target is not a folder, the dragged node is the root, or the
    target lies inside the dragged node's subtree.

    Args:
        tree: Current tree snapshot
        dragged_id: Id of the node being moved
        target_id: Id of the prospective new parent

    Returns:
        True if reparent(tree, dragged_id, target_id) would be accepted
    """
    if dragged_id == target_id or dragged_id == tree.id:
        return False

    dragged = find_node(tree, dragged_id)
    target = find_node(tree, target_id)
    if dragged is None or target is None:
        return False
    if not target.is_folder:
        return False

    return not contains_id(dragged, target_id)


def reparent(tree: TreeNode, dragged_id: str, new_parent_id: str) -> TreeNode:
    """Move a node, with its subtree, to the end of another folder.

    The move is applied as a detach pass followed by an attach pass. The
    remaining siblings keep their order and the moved subtree is reused
    as-is.

    Args:
        tree: Current tree snapshot
        dragged_id: Id of the node to move
        new_parent_id: Id of the folder receiving the node

    Returns:
        New snapshot, or the input tree when the move is invalid
    """
    if not validate_move(tree, dragged_id, new_parent_id):
        logger.debug(f"Rejected move of {dragged_id!r} onto {new_parent_id!r}")
        return tree

    dragged = find_node(tree, dragged_id)
    detached = rewrite(tree, prune=lambda node: node.id == dragged_id)
    if detached is tree:
        return tree

    def attach(node: TreeNode) -> TreeNode:
        if node.id == new_parent_id:
            return node.with_children(node.children + (dragged,))
        return node

    attached = rewrite(detached, attach)
    if attached is detached:
        return tree
    return attached


def batch_delete(tree: TreeNode, ids: Iterable[str]) -> TreeNode:
    """Remove every listed node together with its subtree.

    Args:
        tree: Current tree snapshot
        ids: Ids of the nodes to delete; unknown ids are ignored

    Returns:
        New snapshot, or the input tree when the root is listed or no
        listed id is present
    """
    doomed = set(ids)
    if tree.id in doomed:
        logger.debug(f"Refused to delete root {tree.id!r}")
        return tree

    return rewrite(tree, prune=lambda node: node.id in doomed)


def expand_collapse_selected(tree: TreeNode, ids: Iterable[str], expanded: bool) -> TreeNode:
    """Set the persisted expanded hint on the selected folders.

    Files and unselected nodes keep their hint. The transient expansion
    set used for layout is not touched here.

    Args:
        tree: Current tree snapshot
        ids: Ids of the selected nodes
        expanded: Target state

    Returns:
        New snapshot, or the input tree when no hint changed
    """
    selected = set(ids)

    def apply(node: TreeNode) -> TreeNode:
        if node.is_folder and node.id in selected and node.expanded_hint is not expanded:
            return node.with_expanded_hint(expanded)
        return node

    return rewrite(tree, apply)


class TreeMutator:
    """Applies edits to tree snapshots and logs their outcome.

    Thin object form of the module functions, convenient for injecting
    into a session.
    """

    def rename(self, tree: TreeNode, node_id: str, new_name: str) -> TreeNode:
        result = rename(tree, node_id, new_name)
        self._log("rename", node_id, tree, result)
        return result

    def validate_move(self, tree: TreeNode, dragged_id: str, target_id: str) -> bool:
        return validate_move(tree, dragged_id, target_id)

    def reparent(self, tree: TreeNode, dragged_id: str, new_parent_id: str) -> TreeNode:
        result = reparent(tree, dragged_id, new_parent_id)
        self._log("reparent", f"{dragged_id} -> {new_parent_id}", tree, result)
        return result

    def batch_delete(self, tree: TreeNode, ids: Iterable[str]) -> TreeNode:
        ids = list(ids)
        result = batch_delete(tree, ids)
        self._log("delete", ids, tree, result)
        return result

    def expand_collapse_selected(self, tree: TreeNode, ids: Iterable[str], expanded: bool) -> TreeNode:
        ids = list(ids)
        result = expand_collapse_selected(tree, ids, expanded)
        self._log("expand" if expanded else "collapse", ids, tree, result)
        return result

    @staticmethod
    def _log(operation: str, subject: object, before: TreeNode, after: TreeNode) -> None:
        if after is before:
            logger.debug(f"{operation} {subject}: no change")
        else:
            logger.debug(f"{operation} {subject}: applied")
