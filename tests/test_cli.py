"""Tests for the command line entry point."""

import json
import sys
from pathlib import Path

# Add src directory to path
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from pytreeviz.__main__ import main, parse_args

SNAPSHOT = {
    "id": "root",
    "name": "src",
    "type": "folder",
    "path": "src",
    "expanded": True,
    "children": [
        {
            "id": "a",
            "name": "components",
            "type": "folder",
            "path": "src/components",
            "children": [{"id": "b", "name": "Header.tsx", "type": "file", "path": "src/components/Header.tsx"}],
        },
        {"id": "c", "name": "pages", "type": "folder", "path": "src/pages", "children": []},
    ],
}


def write_snapshot(tmp_path: Path, data) -> Path:
    path = tmp_path / "tree.json"
    path.write_text(json.dumps(data), encoding="utf-8")
    return path


def test_parse_args_defaults(tmp_path):
    args = parse_args([str(tmp_path / "tree.json")])

    assert args.node_width == 120.0
    assert args.collapse == []
    assert not args.verbose


def test_prints_layout(tmp_path, capsys):
    path = write_snapshot(tmp_path, SNAPSHOT)

    assert main([str(path)]) == 0

    output = json.loads(capsys.readouterr().out)
    assert [p["id"] for p in output["positions"]][0] == "root"
    assert {p["id"] for p in output["positions"]} == {"root", "a", "b", "c"}
    assert {(c["parent"], c["child"]) for c in output["connections"]} == {("root", "a"), ("root", "c"), ("a", "b")}


def test_collapse_option(tmp_path, capsys):
    path = write_snapshot(tmp_path, SNAPSHOT)

    assert main([str(path), "--collapse", "a"]) == 0

    output = json.loads(capsys.readouterr().out)
    assert {p["id"] for p in output["positions"]} == {"root", "a", "c"}


def test_geometry_options(tmp_path, capsys):
    path = write_snapshot(tmp_path, SNAPSHOT)

    assert main([str(path), "--node-width", "100", "--sibling-gap", "20", "--collapse", "a"]) == 0

    output = json.loads(capsys.readouterr().out)
    positions = {p["id"]: p for p in output["positions"]}
    # Row of two boxes (100 + 20 + 100) centered under the root center (450)
    assert positions["a"]["x"] == 340.0
    assert positions["c"]["x"] == 460.0
    assert positions["a"]["width"] == 100.0


def test_missing_file(tmp_path, capsys):
    assert main([str(tmp_path / "missing.json")]) == 1
    assert "does not exist" in capsys.readouterr().err


def test_invalid_json(tmp_path, capsys):
    path = tmp_path / "tree.json"
    path.write_text("{not json", encoding="utf-8")

    assert main([str(path)]) == 1
    assert "Error" in capsys.readouterr().err


def test_snapshot_not_utf8(tmp_path, capsys):
    path = tmp_path / "tree.json"
    path.write_bytes(b'{"id": "root", "name": "\xff\xfe", "type": "folder"}')

    assert main([str(path)]) == 1
    assert "Error" in capsys.readouterr().err


def test_duplicate_ids_rejected(tmp_path, capsys):
    data = {
        "id": "r",
        "name": "r",
        "type": "folder",
        "children": [
            {"id": "x", "name": "one", "type": "file"},
            {"id": "x", "name": "two", "type": "file"},
        ],
    }
    path = write_snapshot(tmp_path, data)

    assert main([str(path)]) == 1
    assert capsys.readouterr().out == ""


def test_malformed_snapshot(tmp_path, capsys):
    path = write_snapshot(tmp_path, {"id": "root", "name": "src", "type": "link"})

    assert main([str(path)]) == 1
    assert "type" in capsys.readouterr().err


def test_invalid_geometry(tmp_path, capsys):
    path = write_snapshot(tmp_path, SNAPSHOT)

    assert main([str(path), "--node-width", "0"]) == 1
    assert "node_width" in capsys.readouterr().err
