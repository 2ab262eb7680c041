"""Interaction state for drag and rename gestures.

Exactly one of Idle, Dragging or Editing is current at any time, so a
drag and an edit can never be in progress together.
"""

from dataclasses import dataclass, replace


@dataclass(frozen=True)
class Idle:
    """No gesture in progress."""


@dataclass(frozen=True)
class Dragging:
    """A node is being dragged.

    Attributes:
        dragged_id: Id of the node being dragged
        candidate_target_id: Folder currently accepted as drop target, if any
    """

    dragged_id: str
    candidate_target_id: str | None = None

    def with_candidate(self, target_id: str | None) -> "Dragging":
        return replace(self, candidate_target_id=target_id)


@dataclass(frozen=True)
class Editing:
    """A node's name is being edited.

    Attributes:
        node_id: Id of the node being renamed
        pending_text: Text typed so far
    """

    node_id: str
    pending_text: str = ""

    def with_text(self, text: str) -> "Editing":
        return replace(self, pending_text=text)


InteractionState = Idle | Dragging | Editing

IDLE = Idle()
