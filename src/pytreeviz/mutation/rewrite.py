"""Copy-on-write tree rewriting.

A rewrite walks the tree bottom-up with an explicit stack and rebuilds
only the nodes whose subtree changed. Unchanged subtrees are returned by
reference, so a rewrite that touches nothing returns the input root
itself.
"""

from collections.abc import Callable

from pytreeviz.model.node import TreeNode

NodeTransform = Callable[[TreeNode], TreeNode | None]
NodePredicate = Callable[[TreeNode], bool]


def _keep(node: TreeNode) -> TreeNode:
    return node


def _never(node: TreeNode) -> bool:
    return False


def rewrite(
    root: TreeNode,
    transform: NodeTransform = _keep,
    prune: NodePredicate = _never,
) -> TreeNode | None:
    """Rebuild a tree bottom-up.

    Args:
        root: Root of the tree to rewrite
        transform: Called on every surviving node once its children have
            been rewritten; returns the replacement node, or None to drop it
        prune: Nodes for which this returns True are dropped together with
            their subtree, without being visited further

    Returns:
        The rewritten root (the input root when nothing changed), or None
        if the root itself was dropped
    """
    stack: list[tuple[TreeNode, bool]] = [(root, False)]
    # Rewritten nodes, in the order their originals were finished
    done: list[TreeNode | None] = []

    while stack:
        node, children_done = stack.pop()

        if not children_done:
            if prune(node):
                done.append(None)
            elif node.children:
                stack.append((node, True))
                stack.extend((child, False) for child in reversed(node.children))
            else:
                done.append(transform(node))
            continue

        count = len(node.children)
        rewritten = done[-count:]
        del done[-count:]

        unchanged = all(new is old for new, old in zip(rewritten, node.children))
        if not unchanged:
            node = node.with_children(child for child in rewritten if child is not None)
        done.append(transform(node))

    return done[0]
