"""Tests for the ``bst_demo`` command line walkthrough."""

from __future__ import annotations

import importlib
import json
from pathlib import Path

import pytest

import bst_demo


def test_cli_outputs_default_walkthrough(capsys: pytest.CaptureFixture[str]) -> None:
    importlib.reload(bst_demo)
    assert bst_demo.main([]) == 0
    lines = capsys.readouterr().out.splitlines()

    assert lines[0] == "Binary Search Tree:"
    assert lines[1:8] == [
        "│       ┌── 18",
        "│   ┌── 15",
        "│   │   └── 12",
        "└── 10",
        "    │   ┌── 7",
        "    └── 5",
        "        └── 3",
    ]
    assert "Tree after insertion:" in lines
    assert "Node found: NodeView(value=7, left=None, right=8)" in lines
    assert "Level-order traversal: [10, 5, 15, 3, 7, 18, 8]" in lines
    assert "In-order traversal: [3, 5, 7, 8, 10, 15, 18]" in lines
    assert "Pre-order traversal: [10, 5, 3, 7, 8, 15, 18]" in lines
    assert "Post-order traversal: [3, 8, 7, 5, 18, 15, 10]" in lines
    assert "Height of the tree: 3" in lines
    assert "Depth of value 15: 1" in lines
    assert "Is the tree balanced? Yes" in lines

    rebalanced = lines[lines.index("Tree after rebalancing:") + 1 :]
    assert rebalanced == [
        "│       ┌── 18",
        "│   ┌── 15",
        "│   │   └── 10",
        "└── 8",
        "    │   ┌── 7",
        "    └── 5",
        "        └── 3",
    ]


def test_cli_json_output(capsys: pytest.CaptureFixture[str]) -> None:
    assert bst_demo.main(["--output-format", "json"]) == 0
    payload = json.loads(capsys.readouterr().out)

    assert payload["values"] == [10, 5, 15, 3, 7, 12, 18]
    assert payload["inserted"] == {"value": 8, "accepted": True}
    assert payload["found"] == {"value": 7, "present": True}
    assert payload["traversals"]["in_order"] == [3, 5, 7, 8, 10, 15, 18]
    assert payload["height"] == 3
    assert payload["depth"] == {"value": 15, "depth": 1}
    assert payload["balanced"] is True
    assert payload["rebalanced_height"] == 2


def test_cli_continues_after_duplicate_insert(
    capsys: pytest.CaptureFixture[str],
) -> None:
    assert bst_demo.main(["--insert", "7"]) == 0
    lines = capsys.readouterr().out.splitlines()
    assert "Value 7 already present; tree unchanged:" in lines
    assert "In-order traversal: [3, 5, 7, 10, 15, 18]" in lines


def test_cli_text_values(capsys: pytest.CaptureFixture[str]) -> None:
    argv = [
        "--text",
        "--values",
        "pear,apple,fig,kiwi",
        "--insert",
        "banana",
        "--remove",
        "fig",
        "--find",
        "kiwi",
        "--depth",
        "pear",
        "--output-format",
        "json",
    ]
    assert bst_demo.main(argv) == 0
    payload = json.loads(capsys.readouterr().out)
    assert payload["traversals"]["in_order"] == ["apple", "banana", "kiwi", "pear"]
    assert payload["found"]["present"] is True


def test_cli_reads_values_file(
    tmp_path: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    source = tmp_path / "values.json"
    source.write_text(json.dumps({"values": [4, 2, 6, 1, 3, 5, 7]}), encoding="utf-8")
    argv = ["--values-file", str(source), "--output-format", "json", "--find", "6"]
    assert bst_demo.main(argv) == 0
    payload = json.loads(capsys.readouterr().out)
    assert payload["values"] == [4, 2, 6, 1, 3, 5, 7]
    assert payload["traversals"]["level_order"][0] == 4


def test_cli_rejects_non_numeric_values() -> None:
    assert bst_demo.main(["--values", "1,two,3"]) == 2


def test_cli_rejects_mixed_values_file(tmp_path: Path) -> None:
    source = tmp_path / "values.json"
    source.write_text(json.dumps([1, "two", 3]), encoding="utf-8")
    assert bst_demo.main(["--values-file", str(source)]) == 2


def test_cli_missing_values_file(tmp_path: Path) -> None:
    assert bst_demo.main(["--values-file", str(tmp_path / "absent.json")]) == 2


def test_load_values_validates_payload(tmp_path: Path) -> None:
    source = tmp_path / "bad.json"
    source.write_text(json.dumps([1, None]), encoding="utf-8")
    with pytest.raises(bst_demo.DemoInputError):
        bst_demo.load_values(source)

    source.write_text("{not json", encoding="utf-8")
    with pytest.raises(bst_demo.DemoInputError):
        bst_demo.load_values(source)


def test_parse_values_handles_numbers_and_blanks() -> None:
    assert bst_demo.parse_values("3, 1,,2.5") == (3, 1, 2.5)
    assert bst_demo.parse_values("b,a", text=True) == ("b", "a")


@pytest.mark.parametrize("raw", ["nan", "inf", "-Infinity"])
def test_parse_values_rejects_non_finite_numbers(raw: str) -> None:
    with pytest.raises(bst_demo.DemoInputError):
        bst_demo.parse_values(f"1,{raw},2")


def test_cli_rejects_nan_operand() -> None:
    assert bst_demo.main(["--insert", "nan"]) == 2


def test_load_values_rejects_non_finite_numbers(tmp_path: Path) -> None:
    source = tmp_path / "values.json"
    source.write_text("[1, NaN, 2]", encoding="utf-8")
    with pytest.raises(bst_demo.DemoInputError):
        bst_demo.load_values(source)
