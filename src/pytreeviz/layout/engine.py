"""Layout engine for the node-link tree diagram."""

import logging
from collections.abc import Collection
from dataclasses import dataclass, field

from pytreeviz.errors import validate_range
from pytreeviz.layout.box import BoundingBox
from pytreeviz.layout.position import Connector, NodePosition
from pytreeviz.model.node import TreeNode

logger = logging.getLogger(__name__)


@dataclass
class LayoutConfig:
    """Configuration for the layout engine.

    Attributes:
        node_width: Width of every node box
        node_height: Height of every node box
        level_gap: Vertical gap between the bottom of a level and the next
        sibling_gap: Horizontal gap between neighbouring subtree allocations
        origin_x: X coordinate of the root box's top-left corner
        origin_y: Y coordinate of the root box's top-left corner
    """

    node_width: float = 120.0
    node_height: float = 40.0
    level_gap: float = 40.0
    sibling_gap: float = 40.0
    origin_x: float = 400.0
    origin_y: float = 0.0

    def __post_init__(self) -> None:
        validate_range(self.node_width, 1.0, 10_000.0, "node_width")
        validate_range(self.node_height, 1.0, 10_000.0, "node_height")
        validate_range(self.level_gap, 0.0, 10_000.0, "level_gap")
        validate_range(self.sibling_gap, 0.0, 10_000.0, "sibling_gap")

    @property
    def level_height(self) -> float:
        """Distance between the tops of two consecutive levels."""
        return self.node_height + self.level_gap


@dataclass
class LayoutResult:
    """Result of a layout operation.

    Attributes:
        positions: Mapping of node id to position, root first
        connections: Parent-to-child connectors between visible nodes
        bounds: Overall bounding box of the layout
    """

    positions: dict[str, NodePosition] = field(default_factory=dict)
    connections: list[Connector] = field(default_factory=list)
    bounds: BoundingBox | None = None

    def to_dict(self) -> dict:
        """Convert to a JSON-serializable dict."""
        return {
            "positions": [pos.to_dict() for pos in self.positions.values()],
            "connections": [conn.to_dict() for conn in self.connections],
            "bounds": self.bounds.to_dict() if self.bounds else None,
        }


class LayoutEngine:
    """Engine for calculating 2D positions for tree nodes.

    The engine holds no state between calls: the same tree and expansion
    set always produce the same result.
    """

    def __init__(self, config: LayoutConfig | None = None) -> None:
        """Initialize the layout engine.

        Args:
            config: Layout configuration (uses defaults if None)
        """
        self.config = config or LayoutConfig()

    @staticmethod
    def _is_open(node: TreeNode, expanded: Collection[str]) -> bool:
        """Whether a node's children take part in the layout."""
        return node.is_folder and node.has_children and node.id in expanded

    def _row_width(self, children: tuple[TreeNode, ...], widths: dict[str, float]) -> float:
        """Width of a row of child allocations, gaps included."""
        total = sum(widths[child.id] for child in children)
        return total + self.config.sibling_gap * (len(children) - 1)

    def _subtree_widths(self, root: TreeNode, expanded: Collection[str]) -> dict[str, float]:
        """Compute the subtree width of every visible node.

        Children are measured before their parent (post-order), using an
        explicit stack.

        Args:
            root: Root of the tree
            expanded: Ids of open folders

        Returns:
            Mapping of node id to subtree width
        """
        node_width = self.config.node_width
        widths: dict[str, float] = {}
        stack: list[tuple[TreeNode, bool]] = [(root, False)]

        while stack:
            node, measured_children = stack.pop()
            if not self._is_open(node, expanded):
                widths[node.id] = node_width
            elif measured_children:
                widths[node.id] = max(node_width, self._row_width(node.children, widths))
            else:
                stack.append((node, True))
                stack.extend((child, False) for child in node.children)

        return widths

    def subtree_width(self, node: TreeNode, expanded: Collection[str]) -> float:
        """Horizontal space a node's visible descendants require.

        Args:
            node: Node to measure
            expanded: Ids of open folders

        Returns:
            Subtree width, never less than the node width
        """
        return self._subtree_widths(node, expanded)[node.id]

    def calculate_layout(self, root: TreeNode, expanded: Collection[str]) -> LayoutResult:
        """Calculate the layout for a tree under an expansion set.

        Args:
            root: Root node of the tree
            expanded: Ids of folders whose children are visible

        Returns:
            LayoutResult containing positions, connectors and bounds
        """
        config = self.config
        widths = self._subtree_widths(root, expanded)
        result = LayoutResult()

        root_pos = self._make_position(root, config.origin_x, config.origin_y, 0)
        stack: list[tuple[NodePosition, str | None]] = [(root_pos, None)]

        while stack:
            pos, parent_id = stack.pop()
            result.positions[pos.id] = pos
            if parent_id is not None:
                parent_pos = result.positions[parent_id]
                result.connections.append(
                    Connector(parent_id, pos.id, parent_pos.bottom_center, pos.top_center)
                )

            if not self._is_open(pos.node, expanded):
                continue

            child_positions = self._position_children(pos, widths)
            # Reversed so the leftmost child is emitted first
            stack.extend((child_pos, pos.id) for child_pos in reversed(child_positions))

        result.bounds = BoundingBox.from_positions(result.positions.values())
        logger.debug(
            f"Layout computed: {len(result.positions)} positions, "
            f"{len(result.connections)} connectors"
        )
        return result

    def _position_children(self, parent_pos: NodePosition, widths: dict[str, float]) -> list[NodePosition]:
        """Place the children of an open folder as one centered row.

        Args:
            parent_pos: Position of the parent
            widths: Subtree widths of the visible nodes

        Returns:
            Child positions in sibling order
        """
        config = self.config
        children = parent_pos.node.children
        depth = parent_pos.depth + 1
        y = config.origin_y + depth * config.level_height

        cursor = parent_pos.center_x - self._row_width(children, widths) / 2
        positions = []
        for child in children:
            allocation = widths[child.id]
            x = cursor + allocation / 2 - config.node_width / 2
            positions.append(self._make_position(child, x, y, depth))
            cursor += allocation + config.sibling_gap
        return positions

    def _make_position(self, node: TreeNode, x: float, y: float, depth: int) -> NodePosition:
        return NodePosition(
            node=node,
            x=x,
            y=y,
            width=self.config.node_width,
            height=self.config.node_height,
            depth=depth,
        )
