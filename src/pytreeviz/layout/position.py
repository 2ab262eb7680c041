"""Position and connector classes for the 2D tree layout."""

from dataclasses import dataclass

from pytreeviz.model.node import TreeNode


@dataclass(frozen=True)
class NodePosition:
    """A tree node placed in layout space.

    Attributes:
        node: The tree node this position belongs to
        x: X coordinate of the box's top-left corner
        y: Y coordinate of the box's top-left corner
        width: Width of the node box
        height: Height of the node box
        depth: Tree depth of the node (root = 0)
    """

    node: TreeNode
    x: float
    y: float
    width: float
    height: float
    depth: int = 0

    @property
    def id(self) -> str:
        """Identifier of the positioned node."""
        return self.node.id

    @property
    def min_x(self) -> float:
        """Minimum X coordinate."""
        return self.x

    @property
    def max_x(self) -> float:
        """Maximum X coordinate."""
        return self.x + self.width

    @property
    def min_y(self) -> float:
        """Minimum Y coordinate."""
        return self.y

    @property
    def max_y(self) -> float:
        """Maximum Y coordinate."""
        return self.y + self.height

    @property
    def center_x(self) -> float:
        """Horizontal center of the box."""
        return self.x + self.width / 2

    @property
    def top_center(self) -> tuple[float, float]:
        """Midpoint of the top edge, where an incoming connector ends."""
        return (self.center_x, self.y)

    @property
    def bottom_center(self) -> tuple[float, float]:
        """Midpoint of the bottom edge, where outgoing connectors start."""
        return (self.center_x, self.max_y)

    def to_dict(self) -> dict:
        """Convert to a JSON-serializable dict."""
        return {
            "id": self.id,
            "name": self.node.name,
            "type": self.node.kind.value,
            "x": self.x,
            "y": self.y,
            "width": self.width,
            "height": self.height,
            "depth": self.depth,
        }

    def __repr__(self) -> str:
        """String representation."""
        return f"NodePosition({self.id!r}, x={self.x:.2f}, y={self.y:.2f}, " f"w={self.width:.2f}, h={self.height:.2f})"


@dataclass(frozen=True)
class Connector:
    """Logical parent-to-child edge between two positioned nodes.

    Curve shape is left to the renderer; only the endpoints are fixed.

    Attributes:
        parent_id: Id of the parent node
        child_id: Id of the child node
        start: Parent's bottom-center point
        end: Child's top-center point
    """

    parent_id: str
    child_id: str
    start: tuple[float, float]
    end: tuple[float, float]

    @property
    def key(self) -> tuple[str, str]:
        """The (parent_id, child_id) pair identifying this edge."""
        return (self.parent_id, self.child_id)

    def to_dict(self) -> dict:
        """Convert to a JSON-serializable dict."""
        return {
            "parent": self.parent_id,
            "child": self.child_id,
            "start": list(self.start),
            "end": list(self.end),
        }
