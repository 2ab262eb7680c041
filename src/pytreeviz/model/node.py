"""Node class representing an entry of the visualized hierarchy."""

from dataclasses import dataclass, replace
from enum import Enum
from typing import Any, Self

from pytreeviz.errors import ValidationError
from pytreeviz.model.traversal import iter_nodes


class NodeKind(Enum):
    """Kind of tree node."""

    FOLDER = "folder"
    FILE = "file"


@dataclass(frozen=True)
class TreeNode:
    """Immutable folder or file in the hierarchy.

    Instances are never edited in place. Every mutation builds new nodes
    along the edited path and shares the untouched subtrees.

    Attributes:
        id: Opaque identifier, unique across the tree
        name: Display label
        kind: NodeKind of this node
        children: Ordered children (tuple for folders, None for files)
        path: Cosmetic display path, never used for lookup
        expanded_hint: False when the subtree should start collapsed
    """

    id: str
    name: str
    kind: NodeKind
    children: tuple[Self, ...] | None = None
    path: str = ""
    expanded_hint: bool | None = None

    def __post_init__(self) -> None:
        if self.children is not None and not isinstance(self.children, tuple):
            object.__setattr__(self, "children", tuple(self.children))
        if self.kind == NodeKind.FILE and self.children:
            raise ValidationError("children", self.children, "no children on a file node")
        if self.kind == NodeKind.FOLDER and self.children is None:
            object.__setattr__(self, "children", ())
        if self.kind == NodeKind.FILE:
            object.__setattr__(self, "children", None)

    @classmethod
    def folder(cls, node_id: str, name: str, children=(), **kwargs: Any) -> Self:
        """Create a folder node."""
        return cls(id=node_id, name=name, kind=NodeKind.FOLDER, children=tuple(children), **kwargs)

    @classmethod
    def file(cls, node_id: str, name: str, **kwargs: Any) -> Self:
        """Create a file node."""
        return cls(id=node_id, name=name, kind=NodeKind.FILE, **kwargs)

    @property
    def is_folder(self) -> bool:
        """Check if this node is a folder."""
        return self.kind == NodeKind.FOLDER

    @property
    def is_file(self) -> bool:
        """Check if this node is a file."""
        return self.kind == NodeKind.FILE

    @property
    def has_children(self) -> bool:
        """Check if this node owns at least one child."""
        return bool(self.children)

    @property
    def file_count(self) -> int:
        """Get total number of files in this subtree."""
        return sum(1 for node in iter_nodes(self) if node.is_file)

    @property
    def folder_count(self) -> int:
        """Get total number of folders in this subtree (including self)."""
        return sum(1 for node in iter_nodes(self) if node.is_folder)

    def with_name(self, name: str) -> Self:
        """Return a copy carrying a new display name."""
        return replace(self, name=name)

    def with_children(self, children) -> Self:
        """Return a copy of this folder with a new children sequence."""
        if not self.is_folder:
            raise ValidationError("kind", self.kind, "folder node")
        return replace(self, children=tuple(children))

    def with_expanded_hint(self, expanded: bool | None) -> Self:
        """Return a copy with a new expanded hint."""
        return replace(self, expanded_hint=expanded)

    def to_dict(self) -> dict[str, Any]:
        """Convert to the JSON-serializable snapshot shape.

        Returns:
            Mapping with id, name, type, path and (when set) children
            and expanded keys
        """
        result: dict[str, Any] = {
            "id": self.id,
            "name": self.name,
            "type": self.kind.value,
            "path": self.path,
        }
        if self.children is not None:
            result["children"] = [child.to_dict() for child in self.children]
        if self.expanded_hint is not None:
            result["expanded"] = self.expanded_hint
        return result

    @classmethod
    def from_dict(cls, data: Any) -> Self:
        """Create a tree from its snapshot mapping.

        Args:
            data: Mapping as produced by to_dict()

        Returns:
            Root TreeNode of the converted tree

        Raises:
            ValidationError: If a mapping is missing fields or inconsistent,
                or if two nodes share an id
        """
        return cls._from_dict(data, set())

    @classmethod
    def _from_dict(cls, data: Any, seen: set[str]) -> Self:
        if not isinstance(data, dict):
            raise ValidationError("node", data, "mapping")
        for key in ("id", "name", "type"):
            if key not in data:
                raise ValidationError(key, None, f"'{key}' field in node mapping")
        try:
            kind = NodeKind(data["type"])
        except ValueError:
            raise ValidationError("type", data["type"], "'folder' or 'file'") from None

        node_id = str(data["id"])
        if node_id in seen:
            raise ValidationError("id", node_id, "id unique within the tree")
        seen.add(node_id)

        raw_children = data.get("children")
        if raw_children is not None and not isinstance(raw_children, list):
            raise ValidationError("children", raw_children, "list of node mappings")
        if kind == NodeKind.FILE and raw_children:
            raise ValidationError("children", raw_children, "no children on a file node")

        expanded = data.get("expanded")
        if expanded is not None and not isinstance(expanded, bool):
            raise ValidationError("expanded", expanded, "true, false or absent")

        children = None
        if kind == NodeKind.FOLDER:
            children = tuple(cls._from_dict(child, seen) for child in raw_children or ())

        return cls(
            id=node_id,
            name=str(data["name"]),
            kind=kind,
            children=children,
            path=str(data.get("path", "")),
            expanded_hint=expanded,
        )

    def __repr__(self) -> str:
        """String representation of the node."""
        count = len(self.children) if self.children is not None else 0
        return f"TreeNode({self.kind.value}, {self.id!r}, {self.name!r}, children={count})"
