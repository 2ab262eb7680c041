"""Controller layer for pytreeviz.

This module provides the interactive editing session and the explicit
interaction state it tracks:

- TreeSession: Coordinates snapshot, expansion set and layout
- Idle / Dragging / Editing: Mutually exclusive gesture states
"""

from pytreeviz.controller.session import TreeSession
from pytreeviz.controller.state import IDLE, Dragging, Editing, Idle, InteractionState

__all__ = [
    "TreeSession",
    "IDLE",
    "Dragging",
    "Editing",
    "Idle",
    "InteractionState",
]
