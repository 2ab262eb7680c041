"""Main entry point for pytreeviz."""

import argparse
import json
import logging
import sys
from pathlib import Path

from pytreeviz.errors import TreevizError
from pytreeviz.layout.engine import LayoutConfig, LayoutEngine
from pytreeviz.model.node import TreeNode
from pytreeviz.model.traversal import seed_expansion


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse command line arguments.

    Args:
        argv: Argument list (defaults to sys.argv[1:])

    Returns:
        Parsed arguments namespace
    """
    defaults = LayoutConfig()
    parser = argparse.ArgumentParser(
        prog="pytreeviz",
        description="Lay out a tree snapshot as a node-link diagram and print it as JSON",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "snapshot",
        type=Path,
        help="JSON file holding a tree snapshot (id, name, type, children, path, expanded)",
    )
    parser.add_argument(
        "--collapse",
        action="append",
        default=[],
        metavar="ID",
        help="Collapse the node with this id (may be repeated)",
    )
    parser.add_argument(
        "--node-width",
        type=float,
        default=defaults.node_width,
        metavar="N",
        help=f"Width of a node box (default: {defaults.node_width:g})",
    )
    parser.add_argument(
        "--node-height",
        type=float,
        default=defaults.node_height,
        metavar="N",
        help=f"Height of a node box (default: {defaults.node_height:g})",
    )
    parser.add_argument(
        "--level-gap",
        type=float,
        default=defaults.level_gap,
        metavar="N",
        help=f"Vertical gap between levels (default: {defaults.level_gap:g})",
    )
    parser.add_argument(
        "--sibling-gap",
        type=float,
        default=defaults.sibling_gap,
        metavar="N",
        help=f"Horizontal gap between siblings (default: {defaults.sibling_gap:g})",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Enable debug logging",
    )
    return parser.parse_args(argv)


def load_snapshot(path: Path) -> TreeNode:
    """Read a tree snapshot from a JSON file.

    Raises:
        OSError: If the file cannot be read
        ValueError: If the file is not UTF-8 encoded JSON
        ValidationError: If the JSON does not describe a tree
    """
    with path.open(encoding="utf-8") as fh:
        return TreeNode.from_dict(json.load(fh))


def main(argv: list[str] | None = None) -> int:
    """Main entry point.

    Returns:
        Exit code
    """
    args = parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    if not args.snapshot.is_file():
        print(f"Error: Snapshot '{args.snapshot}' does not exist", file=sys.stderr)
        return 1

    try:
        tree = load_snapshot(args.snapshot)
        config = LayoutConfig(
            node_width=args.node_width,
            node_height=args.node_height,
            level_gap=args.level_gap,
            sibling_gap=args.sibling_gap,
        )
    except (OSError, ValueError, TreevizError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    expanded = seed_expansion(tree) - set(args.collapse)
    result = LayoutEngine(config).calculate_layout(tree, expanded)

    json.dump(result.to_dict(), sys.stdout, indent=2)
    sys.stdout.write("\n")
    return 0


if __name__ == "__main__":
    sys.exit(main())
