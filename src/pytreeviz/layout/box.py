"""Bounding box for layout extents and overlap checks."""

from collections.abc import Iterable
from dataclasses import dataclass

import numpy as np

from pytreeviz.errors import LayoutError
from pytreeviz.layout.position import NodePosition


@dataclass(frozen=True)
class BoundingBox:
    """Axis-aligned 2D bounding box.

    Attributes:
        min_x: Left edge
        min_y: Top edge
        max_x: Right edge
        max_y: Bottom edge
    """

    min_x: float
    min_y: float
    max_x: float
    max_y: float

    @property
    def width(self) -> float:
        """Horizontal extent."""
        return self.max_x - self.min_x

    @property
    def height(self) -> float:
        """Vertical extent."""
        return self.max_y - self.min_y

    def intersects(self, other: "BoundingBox") -> bool:
        """Check if this bounding box overlaps another.

        Boxes that only share an edge do not intersect.

        Args:
            other: Other bounding box to check intersection with

        Returns:
            True if the boxes intersect, False otherwise
        """
        return (
            self.min_x < other.max_x
            and self.max_x > other.min_x
            and self.min_y < other.max_y
            and self.max_y > other.min_y
        )

    def padded(self, padding: float) -> "BoundingBox":
        """Return a copy grown by padding on every side."""
        return BoundingBox(
            min_x=self.min_x - padding,
            min_y=self.min_y - padding,
            max_x=self.max_x + padding,
            max_y=self.max_y + padding,
        )

    def to_dict(self) -> dict:
        """Convert to a JSON-serializable dict."""
        return {
            "min_x": self.min_x,
            "min_y": self.min_y,
            "max_x": self.max_x,
            "max_y": self.max_y,
        }

    @classmethod
    def from_position(cls, position: NodePosition, padding: float = 0.0) -> "BoundingBox":
        """Create a bounding box around a single positioned node.

        Args:
            position: Position to create bounding box for
            padding: Padding to add around the position

        Returns:
            A new BoundingBox instance
        """
        return cls(position.min_x, position.min_y, position.max_x, position.max_y).padded(padding)

    @classmethod
    def from_positions(cls, positions: Iterable[NodePosition]) -> "BoundingBox":
        """Create the smallest box enclosing every given position.

        Raises:
            LayoutError: If no positions are given
        """
        extents = np.array(
            [(p.min_x, p.min_y, p.max_x, p.max_y) for p in positions],
            dtype=np.float64,
        )
        if extents.size == 0:
            raise LayoutError("no positions to calculate bounds for")

        min_x, min_y = extents[:, :2].min(axis=0)
        max_x, max_y = extents[:, 2:].max(axis=0)
        return cls(float(min_x), float(min_y), float(max_x), float(max_y))
