"""Unit tests for the tree model and traversal helpers."""

import sys
from pathlib import Path

# Add src directory to path
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

import pytest

from pytreeviz.errors import ValidationError
from pytreeviz.model import (
    NodeKind,
    TreeNode,
    collect_ids,
    contains_id,
    find_node,
    find_parent,
    iter_nodes,
    iter_with_depth,
    seed_expansion,
    subtree_stats,
)


def make_tree() -> TreeNode:
    return TreeNode.folder("root", "src", [
        TreeNode.folder("a", "components", [
            TreeNode.file("b", "Header.tsx"),
            TreeNode.folder("ui", "ui", [TreeNode.file("btn", "Button.tsx")], expanded_hint=False),
        ]),
        TreeNode.folder("c", "pages"),
        TreeNode.file("main", "main.tsx"),
    ])


def test_folder_children_default_to_empty_tuple():
    folder = TreeNode(id="f", name="f", kind=NodeKind.FOLDER)

    assert folder.children == ()
    assert folder.is_folder
    assert not folder.has_children


def test_file_has_no_children():
    file_node = TreeNode.file("x", "x.txt")

    assert file_node.children is None
    assert file_node.is_file


def test_file_with_children_rejected():
    with pytest.raises(ValidationError):
        TreeNode(id="x", name="x", kind=NodeKind.FILE, children=(TreeNode.file("y", "y"),))


def test_list_children_are_frozen_to_tuple():
    folder = TreeNode(id="f", name="f", kind=NodeKind.FOLDER, children=[TreeNode.file("x", "x")])

    assert isinstance(folder.children, tuple)


def test_nodes_are_immutable():
    node = TreeNode.file("x", "x.txt")

    with pytest.raises(AttributeError):
        node.name = "y.txt"


def test_copy_helpers_leave_original_untouched():
    folder = TreeNode.folder("f", "old", [TreeNode.file("x", "x")])

    renamed = folder.with_name("new")
    emptied = folder.with_children([])
    hinted = folder.with_expanded_hint(False)

    assert folder.name == "old" and len(folder.children) == 1
    assert renamed.name == "new" and renamed.children is folder.children
    assert emptied.children == ()
    assert hinted.expanded_hint is False


def test_with_children_on_file_rejected():
    with pytest.raises(ValidationError):
        TreeNode.file("x", "x").with_children([])


def test_counts():
    tree = make_tree()

    assert tree.file_count == 3
    assert tree.folder_count == 4


def test_iter_nodes_is_preorder():
    assert collect_ids(make_tree()) == ["root", "a", "b", "ui", "btn", "c", "main"]


def test_iter_with_depth():
    depths = {node.id: depth for node, depth in iter_with_depth(make_tree())}

    assert depths == {"root": 0, "a": 1, "b": 2, "ui": 2, "btn": 3, "c": 1, "main": 1}


def test_find_node_and_parent():
    tree = make_tree()

    assert find_node(tree, "btn").name == "Button.tsx"
    assert find_node(tree, "missing") is None
    assert find_parent(tree, "btn").id == "ui"
    assert find_parent(tree, "root") is None
    assert find_parent(tree, "missing") is None


def test_contains_id_checks_subtree_only():
    tree = make_tree()
    components = find_node(tree, "a")

    assert contains_id(components, "btn")
    assert contains_id(components, "a")
    assert not contains_id(components, "c")


def test_seed_expansion_skips_explicitly_collapsed():
    expanded = seed_expansion(make_tree())

    assert "ui" not in expanded
    assert {"root", "a", "c"} <= expanded


def test_subtree_stats():
    stats = subtree_stats(make_tree())

    assert stats.files == 3
    assert stats.folders == 4
    assert stats.depth == 3
    assert subtree_stats(TreeNode.file("x", "x")).depth == 0


def test_iteration_handles_deep_trees():
    node = TreeNode.file("leaf", "leaf")
    for i in range(sys.getrecursionlimit() * 2):
        node = TreeNode.folder(f"d{i}", f"d{i}", [node])

    assert sum(1 for _ in iter_nodes(node)) == sys.getrecursionlimit() * 2 + 1
    assert find_node(node, "leaf") is not None


def test_dict_round_trip_keeps_structure():
    tree = make_tree()
    data = tree.to_dict()

    assert data["type"] == "folder"
    assert "children" not in data["children"][0]["children"][0]
    assert data["children"][0]["children"][1]["expanded"] is False
    assert TreeNode.from_dict(data) == tree


def test_from_dict_accepts_full_snapshot_shape():
    data = {
        "id": "root",
        "name": "src",
        "type": "folder",
        "path": "src",
        "expanded": True,
        "children": [
            {"id": "root_main.tsx", "name": "main.tsx", "type": "file", "path": "src/main.tsx", "expanded": True},
        ],
    }

    tree = TreeNode.from_dict(data)

    assert tree.expanded_hint is True
    assert tree.children[0].is_file
    assert tree.children[0].path == "src/main.tsx"


def test_from_dict_folder_without_children_key():
    tree = TreeNode.from_dict({"id": "r", "name": "r", "type": "folder"})

    assert tree.children == ()


@pytest.mark.parametrize(
    "data",
    [
        "not a mapping",
        {"name": "r", "type": "folder"},
        {"id": "r", "name": "r", "type": "symlink"},
        {"id": "r", "name": "r", "type": "folder", "children": "nope"},
        {"id": "r", "name": "r", "type": "file", "children": [{"id": "x", "name": "x", "type": "file"}]},
        {"id": "r", "name": "r", "type": "folder", "expanded": "false"},
        {"id": "r", "name": "r", "type": "folder", "children": [
            {"id": "x", "name": "x", "type": "file"},
            {"id": "x", "name": "y", "type": "file"},
        ]},
        {"id": "r", "name": "r", "type": "folder", "children": [
            {"id": "a", "name": "a", "type": "folder", "children": [{"id": "r", "name": "r", "type": "file"}]},
        ]},
    ],
)
def test_from_dict_rejects_malformed(data):
    with pytest.raises(ValidationError):
        TreeNode.from_dict(data)


def test_from_dict_names_duplicate_id():
    data = {
        "id": "r",
        "name": "r",
        "type": "folder",
        "children": [
            {"id": "x", "name": "one", "type": "file"},
            {"id": "x", "name": "two", "type": "file"},
        ],
    }

    with pytest.raises(ValidationError) as excinfo:
        TreeNode.from_dict(data)

    assert excinfo.value.field == "id"
    assert excinfo.value.value == "x"


def test_from_dict_rejects_non_bool_expanded():
    with pytest.raises(ValidationError) as excinfo:
        TreeNode.from_dict({"id": "r", "name": "r", "type": "folder", "expanded": "false"})

    assert excinfo.value.field == "expanded"


def test_constructor_freezes_iterable_children():
    children = (TreeNode.file(str(i), f"f{i}.txt") for i in range(3))
    node = TreeNode(id="r", name="r", kind=NodeKind.FOLDER, children=children)

    assert node.children == tuple(TreeNode.file(str(i), f"f{i}.txt") for i in range(3))
    assert isinstance(node.children, tuple)
    hash(node)


def test_file_with_empty_iterable_children():
    node = TreeNode(id="f", name="f.txt", kind=NodeKind.FILE, children=iter(()))

    assert node.children is None
