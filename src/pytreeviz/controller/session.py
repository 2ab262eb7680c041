"""Interactive editing session.

Owns the current tree snapshot, the expansion set and the interaction
state, applies user gestures through the mutator and republishes the
layout after every accepted change.
"""

import logging
from collections.abc import Iterable

from PyQt6.QtCore import QObject, pyqtSignal

from pytreeviz.controller.state import IDLE, Dragging, Editing, InteractionState
from pytreeviz.layout.engine import LayoutConfig, LayoutEngine, LayoutResult
from pytreeviz.model.node import TreeNode
from pytreeviz.model.traversal import find_node, seed_expansion
from pytreeviz.mutation.mutator import TreeMutator

logger = logging.getLogger(__name__)


class TreeSession(QObject):
    """Coordinates the tree snapshot, its expansion set and its layout.

    Expansion policy: expand_selected() and collapse_selected() update the
    persisted expanded hints and the transient expansion set together, so
    the layout reflects the change immediately.
    """

    # Signals for UI updates
    tree_changed = pyqtSignal(object)  # Emits the new TreeNode snapshot
    layout_changed = pyqtSignal(object)  # Emits LayoutResult
    state_changed = pyqtSignal(object)  # Emits the new InteractionState

    def __init__(
        self,
        tree: TreeNode | None = None,
        config: LayoutConfig | None = None,
        mutator: TreeMutator | None = None,
    ) -> None:
        """Initialize the session.

        Args:
            tree: Initial tree snapshot (may be loaded later)
            config: Layout configuration (uses defaults if None)
            mutator: Mutator used for edits (a new one if None)
        """
        super().__init__()

        self._layout_engine = LayoutEngine(config)
        self._mutator = mutator or TreeMutator()

        self._tree: TreeNode | None = None
        self._expanded: set[str] = set()
        self._layout: LayoutResult | None = None
        self._state: InteractionState = IDLE

        if tree is not None:
            self.load(tree)

    @property
    def tree(self) -> TreeNode | None:
        """Current tree snapshot."""
        return self._tree

    @property
    def expanded(self) -> frozenset[str]:
        """Ids currently rendered open."""
        return frozenset(self._expanded)

    @property
    def layout(self) -> LayoutResult | None:
        """Layout of the current snapshot."""
        return self._layout

    @property
    def state(self) -> InteractionState:
        """Current interaction state."""
        return self._state

    def load(self, tree: TreeNode) -> None:
        """Replace the snapshot and re-seed the expansion set from its hints.

        Args:
            tree: New tree snapshot
        """
        self._tree = tree
        self._expanded = seed_expansion(tree)
        self._set_state(IDLE)
        logger.debug(f"Loaded tree {tree.id!r} with {len(self._expanded)} open nodes")
        self._relayout()

    def is_expanded(self, node_id: str) -> bool:
        """Check whether a node is in the expansion set."""
        return node_id in self._expanded

    def toggle(self, node_id: str) -> bool:
        """Open or close a folder.

        Args:
            node_id: Id of the folder to toggle

        Returns:
            True if the expansion set changed
        """
        node = self._find(node_id)
        if node is None or not node.is_folder:
            return False

        if node_id in self._expanded:
            self._expanded.discard(node_id)
        else:
            self._expanded.add(node_id)
        self._relayout()
        return True

    # Drag lifecycle

    def start_drag(self, node_id: str) -> bool:
        """Begin dragging a node, replacing any drag or edit in progress.

        Returns:
            True if the drag started
        """
        if self._find(node_id) is None:
            return False
        self._set_state(Dragging(node_id))
        return True

    def drag_over(self, target_id: str) -> bool:
        """Offer a drop target for the current drag.

        The target becomes the candidate only if the move would be valid;
        otherwise the candidate is cleared.

        Returns:
            True if the target was accepted as candidate
        """
        if not isinstance(self._state, Dragging) or self._tree is None:
            return False

        valid = self._mutator.validate_move(self._tree, self._state.dragged_id, target_id)
        self._set_state(self._state.with_candidate(target_id if valid else None))
        return valid

    def drag_leave(self) -> None:
        """Clear the candidate target of the current drag."""
        if isinstance(self._state, Dragging):
            self._set_state(self._state.with_candidate(None))

    def drop(self, target_id: str) -> bool:
        """Drop the dragged node onto a folder.

        The drag ends whether or not the drop is accepted.

        Returns:
            True if the tree changed
        """
        if not isinstance(self._state, Dragging) or self._tree is None:
            return False

        dragged_id = self._state.dragged_id
        self._set_state(IDLE)
        if not self._mutator.validate_move(self._tree, dragged_id, target_id):
            return False
        return self._publish(self._mutator.reparent(self._tree, dragged_id, target_id))

    def end_drag(self) -> None:
        """Abandon the current drag without changing the tree."""
        if isinstance(self._state, Dragging):
            self._set_state(IDLE)

    # Rename lifecycle

    def begin_rename(self, node_id: str) -> bool:
        """Start editing a node's name, prefilled with the current name.

        Returns:
            True if editing started
        """
        node = self._find(node_id)
        if node is None:
            return False
        self._set_state(Editing(node_id, node.name))
        return True

    def update_rename(self, text: str) -> None:
        """Replace the pending text of the edit in progress."""
        if isinstance(self._state, Editing):
            self._set_state(self._state.with_text(text))

    def commit_rename(self) -> bool:
        """Apply the pending name and end editing.

        Returns:
            True if the tree changed
        """
        if not isinstance(self._state, Editing) or self._tree is None:
            return False

        editing = self._state
        self._set_state(IDLE)
        return self._publish(self._mutator.rename(self._tree, editing.node_id, editing.pending_text))

    def cancel_rename(self) -> None:
        """End editing and keep the previous name."""
        if isinstance(self._state, Editing):
            self._set_state(IDLE)

    # Batch operations

    def delete_selected(self, ids: Iterable[str]) -> bool:
        """Delete the selected nodes and their subtrees.

        Returns:
            True if the tree changed
        """
        if self._tree is None:
            return False
        return self._publish(self._mutator.batch_delete(self._tree, ids))

    def expand_selected(self, ids: Iterable[str]) -> bool:
        """Open the selected folders, persisting the hint."""
        return self._set_selected_expansion(ids, True)

    def collapse_selected(self, ids: Iterable[str]) -> bool:
        """Close the selected folders, persisting the hint."""
        return self._set_selected_expansion(ids, False)

    def _set_selected_expansion(self, ids: Iterable[str], expanded: bool) -> bool:
        if self._tree is None:
            return False

        ids = list(ids)
        folder_ids = set()
        for node_id in ids:
            node = self._find(node_id)
            if node is not None and node.is_folder:
                folder_ids.add(node_id)

        before = set(self._expanded)
        if expanded:
            self._expanded |= folder_ids
        else:
            self._expanded -= folder_ids

        new_tree = self._mutator.expand_collapse_selected(self._tree, ids, expanded)
        if self._publish(new_tree):
            return True
        if self._expanded != before:
            self._relayout()
            return True
        return False

    # Internals

    def _find(self, node_id: str) -> TreeNode | None:
        if self._tree is None:
            return None
        return find_node(self._tree, node_id)

    def _publish(self, new_tree: TreeNode) -> bool:
        """Make new_tree the current snapshot if it differs.

        Returns:
            True if a new snapshot was published
        """
        if new_tree is self._tree:
            return False

        self._tree = new_tree
        self._clear_stale_state()
        self.tree_changed.emit(new_tree)
        self._relayout()
        return True

    def _clear_stale_state(self) -> None:
        """Return to idle if the gesture refers to a node that no longer exists."""
        node_id = None
        if isinstance(self._state, Dragging):
            node_id = self._state.dragged_id
        elif isinstance(self._state, Editing):
            node_id = self._state.node_id
        if node_id is not None and self._find(node_id) is None:
            self._set_state(IDLE)

    def _relayout(self) -> None:
        if self._tree is None:
            return
        self._layout = self._layout_engine.calculate_layout(self._tree, self._expanded)
        self.layout_changed.emit(self._layout)

    def _set_state(self, state: InteractionState) -> None:
        if state == self._state:
            return
        self._state = state
        self.state_changed.emit(state)
