"""Mutation layer for pytreeviz.

This module contains the copy-on-write edits (rename, reparent, batch
delete, batch expand/collapse) and the move validity check.
"""

from pytreeviz.mutation.mutator import (
    TreeMutator,
    batch_delete,
    expand_collapse_selected,
    rename,
    reparent,
    validate_move,
)
from pytreeviz.mutation.rewrite import rewrite

__all__ = [
    "TreeMutator",
    "batch_delete",
    "expand_collapse_selected",
    "rename",
    "reparent",
    "rewrite",
    "validate_move",
]
