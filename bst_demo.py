"""Command line demonstration for the ``search_tree`` package.

The script builds a tree from a handful of values and walks through every
public operation: insertion, removal, lookup, the four traversals, height and
depth queries, the balance check and a full rebalance. Text output renders the
tree after each mutation; ``--output-format json`` emits a single summary
document instead.

All inputs have defaults reproducing the classic walkthrough over
``10, 5, 15, 3, 7, 12, 18``, so running the module without arguments prints a
complete session.
"""

from __future__ import annotations

import argparse
from dataclasses import dataclass
import json
import logging
import math
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional, Sequence

from search_tree import (
    DuplicateValueError,
    IncomparableValueError,
    NodeView,
    Tree,
    render_branches,
)

logger = logging.getLogger(__name__)

DEFAULT_VALUES = "10,5,15,3,7,12,18"
DEFAULT_INSERT = "8"
DEFAULT_REMOVE = "12"
DEFAULT_FIND = "7"
DEFAULT_DEPTH = "15"

Scalar = Any


class DemoInputError(ValueError):
    """Raised when the demo receives values it cannot use."""


@dataclass(frozen=True)
class DemoConfig:
    """Values and operands driving one demonstration run."""

    values: tuple[Scalar, ...]
    insert: Scalar
    remove: Scalar
    find: Scalar
    depth: Scalar


@dataclass(frozen=True)
class DemoReport:
    """Everything the demonstration observed, in the order it happened."""

    initial: str
    inserted: bool
    after_insert: str
    after_remove: str
    found: Optional[NodeView[Any]]
    level_order: List[Scalar]
    in_order: List[Scalar]
    pre_order: List[Scalar]
    post_order: List[Scalar]
    height: int
    depth: int
    balanced: bool
    rebalanced: str
    rebalanced_height: int

    def to_dict(self, config: DemoConfig) -> Dict[str, object]:
        """Expose a JSON-serialisable summary of the run."""

        return {
            "values": list(config.values),
            "inserted": {"value": config.insert, "accepted": self.inserted},
            "removed": config.remove,
            "found": {
                "value": config.find,
                "present": self.found is not None,
            },
            "traversals": {
                "level_order": self.level_order,
                "in_order": self.in_order,
                "pre_order": self.pre_order,
                "post_order": self.post_order,
            },
            "height": self.height,
            "depth": {"value": config.depth, "depth": self.depth},
            "balanced": self.balanced,
            "rebalanced_height": self.rebalanced_height,
        }


def _parse_scalar(raw: str, *, text: bool) -> Scalar:
    item = raw.strip()
    if text:
        return item
    try:
        return int(item, 10)
    except ValueError:
        pass
    try:
        number = float(item)
    except ValueError as exc:
        raise DemoInputError(
            f"{raw!r} is not a number; pass --text to use string values"
        ) from exc
    if not math.isfinite(number):
        raise DemoInputError(f"{raw!r} is not a finite number")
    return number


def parse_values(payload: str, *, text: bool = False) -> tuple[Scalar, ...]:
    """Split a comma separated *payload* into tree values."""

    return tuple(_parse_scalar(item, text=text) for item in payload.split(",") if item.strip())


def load_values(path: Path) -> tuple[Scalar, ...]:
    """Load tree values from a JSON list, optionally wrapped in ``{"values": ...}``."""

    try:
        payload = json.loads(path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as exc:
        raise DemoInputError(f"Failed to parse JSON from {path}: {exc}") from exc

    if isinstance(payload, Mapping):
        payload = payload.get("values")

    if not isinstance(payload, list):
        raise DemoInputError("Values payload must be a JSON list")

    for index, value in enumerate(payload):
        if isinstance(value, bool) or not isinstance(value, (int, float, str)):
            raise DemoInputError(
                f"Value at index {index} must be a number or a string"
            )
        if isinstance(value, float) and not math.isfinite(value):
            raise DemoInputError(f"Value at index {index} must be a finite number")
    return tuple(payload)


def run_demo(config: DemoConfig) -> DemoReport:
    """Execute the walkthrough against a fresh tree built from *config*."""

    tree: Tree[Any] = Tree(config.values)
    initial = render_branches(tree)

    try:
        tree.insert(config.insert)
        inserted = True
    except DuplicateValueError as exc:
        logger.warning("Insertion skipped: %s", exc)
        inserted = False
    after_insert = render_branches(tree)

    tree.remove(config.remove)
    after_remove = render_branches(tree)

    found = tree.find(config.find)
    level_order = tree.traverse_level_order()
    in_order = tree.traverse_in_order()
    pre_order = tree.traverse_pre_order()
    post_order = tree.traverse_post_order()
    height = tree.height()
    depth = tree.depth(config.depth)
    balanced = tree.is_balanced()

    tree.rebalance()
    logger.info("Rebalanced tree holding %d values", len(tree))

    return DemoReport(
        initial=initial,
        inserted=inserted,
        after_insert=after_insert,
        after_remove=after_remove,
        found=found,
        level_order=level_order,
        in_order=in_order,
        pre_order=pre_order,
        post_order=post_order,
        height=height,
        depth=depth,
        balanced=balanced,
        rebalanced=render_branches(tree),
        rebalanced_height=tree.height(),
    )


def format_report(config: DemoConfig, report: DemoReport) -> List[str]:
    """Return the human-readable output lines for *report*."""

    lines = ["Binary Search Tree:", report.initial, ""]

    lines.append(f"Inserting value {config.insert}...")
    if report.inserted:
        lines.append("Tree after insertion:")
    else:
        lines.append(f"Value {config.insert} already present; tree unchanged:")
    lines.extend([report.after_insert, ""])

    lines.extend(
        [
            f"Removing value {config.remove}...",
            "Tree after removal:",
            report.after_remove,
            "",
            f"Finding value {config.find}...",
            f"Node found: {report.found!r}",
            "",
            f"Level-order traversal: {report.level_order}",
            f"In-order traversal: {report.in_order}",
            f"Pre-order traversal: {report.pre_order}",
            f"Post-order traversal: {report.post_order}",
            "",
            f"Height of the tree: {report.height}",
            f"Depth of value {config.depth}: {report.depth}",
            "",
            f"Is the tree balanced? {'Yes' if report.balanced else 'No'}",
            "",
            "Rebalancing the tree...",
            "Tree after rebalancing:",
            report.rebalanced,
        ]
    )
    return lines


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Walk through every binary search tree operation on a sample tree.",
    )
    source = parser.add_mutually_exclusive_group()
    source.add_argument(
        "--values",
        default=DEFAULT_VALUES,
        help="Comma separated values used to build the initial tree.",
    )
    source.add_argument(
        "--values-file",
        type=Path,
        default=None,
        help='JSON file holding a list of values (or {"values": [...]}).',
    )
    parser.add_argument(
        "--text",
        action="store_true",
        help="Treat command line values as strings instead of numbers.",
    )
    parser.add_argument("--insert", default=DEFAULT_INSERT, help="Value to insert.")
    parser.add_argument("--remove", default=DEFAULT_REMOVE, help="Value to remove.")
    parser.add_argument("--find", default=DEFAULT_FIND, help="Value to look up.")
    parser.add_argument(
        "--depth", default=DEFAULT_DEPTH, help="Value whose depth is reported."
    )
    parser.add_argument(
        "--output-format",
        choices=["text", "json"],
        default="text",
        help="Print rendered trees as text or a JSON summary.",
    )
    parser.add_argument(
        "--log-level",
        default="WARNING",
        choices=["CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG"],
        help="Logging verbosity for diagnostic output.",
    )
    return parser


def _configure_logging(level: str) -> None:
    logging.basicConfig(level=getattr(logging, level.upper(), logging.WARNING))


def _build_config(args: argparse.Namespace) -> DemoConfig:
    if args.values_file is not None:
        values = load_values(args.values_file)
    else:
        values = parse_values(args.values, text=args.text)

    def operand(raw: str) -> Scalar:
        return _parse_scalar(raw, text=args.text)

    return DemoConfig(
        values=values,
        insert=operand(args.insert),
        remove=operand(args.remove),
        find=operand(args.find),
        depth=operand(args.depth),
    )


def main(argv: Sequence[str] | None = None) -> int:
    """CLI entry point for the tree walkthrough."""

    parser = _build_parser()
    args = parser.parse_args(argv)
    _configure_logging(args.log_level)

    try:
        config = _build_config(args)
        report = run_demo(config)
    except (DemoInputError, IncomparableValueError, FileNotFoundError) as exc:
        logger.error("Demonstration aborted: %s", exc)
        return 2

    if args.output_format == "json":
        print(json.dumps(report.to_dict(config)))
    else:
        for line in format_report(config, report):
            print(line)
    return 0


if __name__ == "__main__":  # pragma: no cover - CLI entry
    raise SystemExit(main())
