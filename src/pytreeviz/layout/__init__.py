"""Layout engine for the tree diagram.

This module contains the layout algorithm that positions visible tree
nodes in 2D space and derives the parent-to-child connectors.
"""

from pytreeviz.layout.box import BoundingBox
from pytreeviz.layout.engine import LayoutConfig, LayoutEngine, LayoutResult
from pytreeviz.layout.position import Connector, NodePosition

__all__ = ["BoundingBox", "Connector", "LayoutConfig", "LayoutEngine", "LayoutResult", "NodePosition"]
