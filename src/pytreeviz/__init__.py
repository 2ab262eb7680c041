"""pytreeviz - interactive folder tree diagram.

Lays out a folder/file hierarchy as a node-link diagram and applies
structural edits (rename, reparent, batch delete, expand/collapse) as
copy-on-write snapshots.
"""

__version__ = "0.1.0"
